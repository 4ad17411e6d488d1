"""Token usage extraction helpers.

Converts the ``usage`` object Azure reports (``prompt_tokens``,
``completion_tokens``, ``total_tokens``) into the canonical mapping used by
completion events and structured logging:

    {"prompt": <int|None>, "completion": <int|None>, "total": <int|None>}

The helpers never raise. Missing or invalid values become ``None``; a missing
total is derived when both components are present.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

CanonicalUsage = Dict[str, Optional[int]]

PLACEHOLDER_USAGE: CanonicalUsage = {"prompt": None, "completion": None, "total": None}


def _coerce_int(value: Any) -> Optional[int]:
    """Coerce ``value`` to a non-negative ``int`` or ``None``."""
    if value is None or isinstance(value, bool):
        return None
    try:
        iv = int(value)
    except (TypeError, ValueError):
        return None
    return iv if iv >= 0 else None


def _finalize_usage(prompt: Optional[int], completion: Optional[int], total: Optional[int]) -> CanonicalUsage:
    if total is None and prompt is not None and completion is not None:
        total = prompt + completion
    return {"prompt": prompt, "completion": completion, "total": total}


def extract_token_usage(usage: Any) -> CanonicalUsage:
    """Map an OpenAI-style usage object or mapping onto the canonical keys.

    Accepts a pydantic ``Usage`` model, any object with ``*_tokens``
    attributes, a plain mapping, or ``None`` (returns the placeholder).
    """
    if usage is None:
        return dict(PLACEHOLDER_USAGE)
    if isinstance(usage, Mapping):
        get = usage.get
    else:
        def get(name: str, default: Any = None) -> Any:
            return getattr(usage, name, default)
    return _finalize_usage(
        _coerce_int(get("prompt_tokens")),
        _coerce_int(get("completion_tokens")),
        _coerce_int(get("total_tokens")),
    )


def has_usage(usage: CanonicalUsage) -> bool:
    """True when at least one canonical value is known."""
    return any(v is not None for v in usage.values())


__all__ = [
    "CanonicalUsage",
    "PLACEHOLDER_USAGE",
    "extract_token_usage",
    "has_usage",
]
