"""
Structured provider error exception type.

Wraps transport, server, and decoding failures with a normalized `ErrorCode`
for consistent handling and structured logging.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .error_code import ErrorCode


@dataclass
class ProviderError(Exception):
    """Represents a structured provider error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        provider: Provider key where the error originated (``"azure_openai"``).
        model: Optional model name associated with the failure.
        status: HTTP status for ``HTTP`` errors.
        error_type: ``error.type`` from a server error envelope, when present.
        server_code: ``error.code`` from a server error envelope, when present.
        retryable: Hint for upstream retry logic (not authoritative).
        raw: Optional original exception or body for diagnostics.
    """

    code: ErrorCode
    message: str
    provider: str
    model: Optional[str] = None
    status: Optional[int] = None
    error_type: Optional[str] = None
    server_code: Optional[str] = None
    retryable: bool = False
    raw: Optional[Any] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining provider, model, code, and message."""
        return f"{self.provider}:{self.model or '-'} {self.code.value}: {self.message}"


__all__ = ["ProviderError"]
