"""azure_providers.config.env
=========================

Centralized environment variable mapping and helpers for provider credentials
and endpoint settings.

Purpose
-------
- Provide a single source of truth for mapping provider identifiers to their
  environment variable names (canonical and aliases).
- Offer small utilities to look up provider API keys in a consistent way.

Design Notes
------------
- Canonical mapping is defined in ``ENV_MAP``. Providers that accept more than
  one env var name list those in ``ENV_ALIASES`` with the canonical name first
  to establish precedence.
- Endpoint-style settings (URL, deployment, api version) are listed in
  ``SETTINGS_ENV_MAP`` and merged by :func:`azure_providers.config.get_provider_config`.

Failure Modes
-------------
- Functions return ``None`` when a provider is unknown or no value is present.
  Callers decide how to proceed (e.g., fall back to the credential store).
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple

# Canonical provider → API key env var
ENV_MAP: Dict[str, str] = {
    "azure_openai": "AZURE_OPENAI_API_KEY",
}

# Provider → ordered tuple of acceptable env var names (canonical first)
ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "azure_openai": ("AZURE_OPENAI_API_KEY", "AZURE_API_KEY"),
}

# Provider → settings field → env var
SETTINGS_ENV_MAP: Dict[str, Dict[str, str]] = {
    "azure_openai": {
        "api_url": "AZURE_OPENAI_ENDPOINT",
        "deployment_name": "AZURE_OPENAI_DEPLOYMENT",
        "api_version": "AZURE_OPENAI_API_VERSION",
    },
}


def get_env_var_candidates(provider: str) -> Iterable[str]:
    """Yield acceptable API key environment variable names for a provider.

    The canonical name is yielded first, followed by any aliases.
    """
    p = (provider or "").lower()
    canonical = ENV_MAP.get(p)
    if canonical:
        yield canonical
    for alias in ENV_ALIASES.get(p, ()):
        if alias != canonical:
            yield alias


def resolve_provider_key(provider: str) -> Tuple[Optional[str], Optional[str]]:
    """Resolve an API key for a provider from the process environment.

    Returns
    -------
    Tuple[Optional[str], Optional[str]]
        ``(value, env_var_used)`` for the first non-empty candidate, or
        ``(None, None)`` when nothing is set.
    """
    for name in get_env_var_candidates(provider):
        if val := os.environ.get(name):
            return val, name
    return None, None


def settings_env_overrides(provider: str) -> Dict[str, str]:
    """Return endpoint settings found in the environment for ``provider``."""
    out: Dict[str, str] = {}
    for field, env_name in SETTINGS_ENV_MAP.get((provider or "").lower(), {}).items():
        val = os.getenv(env_name)
        if val:
            out[field] = val
    return out


__all__ = [
    "ENV_MAP",
    "ENV_ALIASES",
    "SETTINGS_ENV_MAP",
    "get_env_var_candidates",
    "resolve_provider_key",
    "settings_env_overrides",
]
