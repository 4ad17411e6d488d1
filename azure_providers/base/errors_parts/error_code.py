"""
Normalized provider error codes (taxonomy).

Defines the `ErrorCode` enumeration raised by the Azure adapter and carried by
stream error items. Values are lowercase snake_case and are considered a stable
public contract for logging and analytics.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    MISSING_CREDENTIAL = "missing_credential"
    CREDENTIALS_NOT_FOUND = "credentials_not_found"
    NETWORK = "network"
    HTTP = "http"
    MALFORMED_RESPONSE = "malformed_response"
    EMPTY_CHOICES = "empty_choices"
    CANCELLED = "cancelled"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
