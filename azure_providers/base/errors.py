"""Unified provider error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``azure_providers.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import ProviderError
from .errors_parts.classification import (
    classify_exception,
    classify_response,
    classify_stream_error,
    is_retryable_status,
    parse_error_envelope,
    to_provider_error,
)

__all__ = [
    "ErrorCode",
    "ProviderError",
    "classify_exception",
    "classify_response",
    "classify_stream_error",
    "is_retryable_status",
    "parse_error_envelope",
    "to_provider_error",
]
