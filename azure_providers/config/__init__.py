"""Unified configuration layer for providers.

Goals
-----
* Centralize defaults (api version, limiter size, system message).
* Merge sources in a predictable order:
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) pointed to by PROVIDERS_CONFIG_FILE
    3. Environment variables (AZURE_OPENAI_ENDPOINT, AZURE_OPENAI_DEPLOYMENT, ...)
    4. In-code overrides passed to the helper
* Provide a single call site: ``get_provider_config(provider: str)``.

API keys are deliberately *not* merged here. Key resolution belongs to the
authentication state machine, which must know whether a key came from the
environment or from the credential store.

External Config File (Optional)
-------------------------------
If PROVIDERS_CONFIG_FILE is set to a path, JSON is attempted first, then
YAML. Structure example:

```
azure_openai:
  api_url: https://my-resource.openai.azure.com
  deployment_name: gpt-4o
  api_version: 2024-08-01-preview
  available_models:
    - name: gpt-4o
      deployment_name: gpt-4o-prod
      max_tokens: 128000
```

Public API
----------
* get_provider_config(provider: str, overrides: dict | None = None) -> dict
* reset_config_cache() -> None
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .defaults import (
    AZURE_OPENAI_DEFAULT_API_VERSION,
    AZURE_OPENAI_MAX_CONCURRENT_REQUESTS,
    AZURE_OPENAI_PROVIDER_ID,
)
from .env import settings_env_overrides


# -------------------- Defaults --------------------

DEFAULTS: Dict[str, Dict[str, Any]] = {
    AZURE_OPENAI_PROVIDER_ID: {
        "api_version": AZURE_OPENAI_DEFAULT_API_VERSION,
        "max_concurrent_requests": AZURE_OPENAI_MAX_CONCURRENT_REQUESTS,
        "available_models": [],
    },
}


_FILE_CACHE: Optional[Dict[str, Any]] = None


def _load_external_config() -> Dict[str, Any]:
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv("PROVIDERS_CONFIG_FILE")
    if not path:
        _FILE_CACHE = {}
        return _FILE_CACHE
    p = Path(path)
    if not p.exists():
        _FILE_CACHE = {}
        return _FILE_CACHE
    text = p.read_text(encoding="utf-8")
    data: Any
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError:
            data = {}
    if not isinstance(data, dict):
        data = {}
    _FILE_CACHE = data
    return data


def reset_config_cache() -> None:
    """Forget the cached external config file so the next read reloads it."""
    global _FILE_CACHE
    _FILE_CACHE = None


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged configuration for a provider.

    Merge order (later wins): defaults -> external config -> env vars -> overrides
    """
    name = (provider or "").lower().strip()
    cfg: Dict[str, Any] = {}

    # 1. Defaults
    cfg |= DEFAULTS.get(name, {})

    # 2. External config file section
    file_cfg = _load_external_config().get(name)
    if isinstance(file_cfg, dict):
        cfg |= file_cfg

    # 3. Env overrides
    cfg |= settings_env_overrides(name)

    # 4. Explicit overrides arg
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}

    return cfg


__all__ = [
    "get_provider_config",
    "reset_config_cache",
    "DEFAULTS",
]
