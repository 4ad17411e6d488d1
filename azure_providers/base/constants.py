"""Base shared constants for the Azure adapter.

Central location to avoid scattering magic strings.

Security
--------
This module contains only generic sentinel strings. There are no credentials
or tokens embedded.

# pragma: allowlist secret
"""
from __future__ import annotations

# Missing credential sentinel
MISSING_API_KEY_ERROR = "missing_api_key"  # pragma: allowlist secret - generic placeholder string, not a real secret

# Message used when a stored secret is not valid UTF-8
INVALID_API_KEY_MESSAGE = "invalid API key"  # pragma: allowlist secret - generic message

# Authentication header Azure expects instead of ``Authorization: Bearer``
API_KEY_HEADER = "api-key"

# Server-sent events framing
SSE_DATA_PREFIX = "data: "
SSE_DONE_SENTINEL = "[DONE]"

__all__ = [
    "MISSING_API_KEY_ERROR",
    "INVALID_API_KEY_MESSAGE",
    "API_KEY_HEADER",
    "SSE_DATA_PREFIX",
    "SSE_DONE_SENTINEL",
]
