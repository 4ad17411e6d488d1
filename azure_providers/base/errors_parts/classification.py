"""
Error classification helpers mapping server payloads and exceptions to
normalized :class:`ErrorCode` values.

Two entry points:

* :func:`classify_response` turns a non-2xx HTTP status plus body into a
  :class:`ProviderError`, preferring the structured ``{"error": {...}}``
  envelope Azure returns and falling back to the raw body text.
* :func:`classify_exception` maps a raised exception to an ``ErrorCode``.
  :func:`to_provider_error` wraps the same decision into a ``ProviderError``.

Both are pure; neither performs I/O or logging.
"""
from __future__ import annotations

import asyncio
import json
from typing import Any, Dict, FrozenSet, Optional, Union

import httpx
from pydantic import ValidationError

from ..dto.error_envelope import ErrorEnvelope
from .error_code import ErrorCode
from .provider_error import ProviderError

# Statuses worth retrying upstream. Informational only; nothing here retries.
_RETRYABLE_STATUSES: FrozenSet[int] = frozenset({429, 500, 502, 503, 504})

_MESSAGE_PREFIX = "Azure OpenAI API error"


def _extract_status(exc: Exception) -> Optional[int]:
    """Attempt to extract an HTTP status code from an exception.

    Supported attribute shapes (checked in order):
    - ``exc.status_code``
    - ``exc.status``
    - ``exc.response.status_code``
    Returns ``None`` if no valid status can be found.
    """
    for attr in ("status_code", "status"):
        val = getattr(exc, attr, None)
        if isinstance(val, int) and 100 <= val < 600:
            return val
    resp = getattr(exc, "response", None)
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


def is_retryable_status(status: Optional[int]) -> bool:
    """Return True when ``status`` is conventionally safe to retry."""
    return status in _RETRYABLE_STATUSES


def parse_error_envelope(payload: Union[str, bytes, Dict[str, Any]]) -> Optional[ErrorEnvelope]:
    """Parse ``{"error": {"message", "type"?, "code"?}}`` or return ``None``."""
    data: Any = payload
    if isinstance(payload, (str, bytes)):
        try:
            data = json.loads(payload)
        except (json.JSONDecodeError, UnicodeDecodeError):
            return None
    if not isinstance(data, dict) or "error" not in data:
        return None
    try:
        return ErrorEnvelope.model_validate(data)
    except ValidationError:
        return None


def format_envelope_message(envelope: ErrorEnvelope) -> str:
    """Render a server error envelope as a single human-readable line."""
    err = envelope.error
    return f"{_MESSAGE_PREFIX}: {err.message} (type: {err.type or ''}, code: {err.code or ''})"


def classify_response(
    status: int,
    body: Union[str, bytes],
    *,
    provider: str,
    model: Optional[str] = None,
) -> ProviderError:
    """Classify a non-success HTTP response into an ``HTTP`` provider error.

    The parsed server message, ``type`` and ``code`` are carried when the body is
    a well-formed error envelope; otherwise the raw body text is preserved.
    """
    text = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body
    envelope = parse_error_envelope(text)
    if envelope is not None:
        return ProviderError(
            code=ErrorCode.HTTP,
            message=format_envelope_message(envelope),
            provider=provider,
            model=model,
            status=status,
            error_type=envelope.error.type,
            server_code=envelope.error.code,
            retryable=is_retryable_status(status),
            raw=text,
        )
    return ProviderError(
        code=ErrorCode.HTTP,
        message=f"{_MESSAGE_PREFIX}: {status} {text}",
        provider=provider,
        model=model,
        status=status,
        retryable=is_retryable_status(status),
        raw=text,
    )


def classify_stream_error(
    envelope: ErrorEnvelope,
    *,
    provider: str,
    model: Optional[str] = None,
) -> ProviderError:
    """Classify an error envelope that arrived as an SSE ``data:`` payload."""
    return ProviderError(
        code=ErrorCode.HTTP,
        message=format_envelope_message(envelope),
        provider=provider,
        model=model,
        error_type=envelope.error.type,
        server_code=envelope.error.code,
        raw=envelope.model_dump(),
    )


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. ProviderError passthrough.
        2. Cancellation.
        3. Timeouts and transport failures (``NETWORK``).
        4. JSON / validation failures (``MALFORMED_RESPONSE``).
        5. ``HTTP`` when a status can be extracted.
        6. ``UNKNOWN`` fallback.
    """
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, asyncio.CancelledError):
        return ErrorCode.CANCELLED
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError, httpx.TransportError, OSError)):
        return ErrorCode.NETWORK
    if isinstance(exc, (json.JSONDecodeError, ValidationError, UnicodeDecodeError)):
        return ErrorCode.MALFORMED_RESPONSE
    if _extract_status(exc) is not None:
        return ErrorCode.HTTP
    return ErrorCode.UNKNOWN


def to_provider_error(
    exc: BaseException,
    *,
    provider: str,
    model: Optional[str] = None,
) -> ProviderError:
    """Wrap ``exc`` in a :class:`ProviderError`, returning it unchanged if it already is one."""
    if isinstance(exc, ProviderError):
        return exc
    code = classify_exception(exc)
    status = _extract_status(exc) if isinstance(exc, Exception) else None
    return ProviderError(
        code=code,
        message=str(exc) or exc.__class__.__name__,
        provider=provider,
        model=model,
        status=status,
        retryable=code is ErrorCode.NETWORK or is_retryable_status(status),
        raw=exc,
    )


__all__ = [
    "classify_exception",
    "classify_response",
    "classify_stream_error",
    "format_envelope_message",
    "is_retryable_status",
    "parse_error_envelope",
    "to_provider_error",
    "_extract_status",
]
