"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `azure_providers.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import ProviderError
from .classification import (
    classify_exception,
    classify_response,
    classify_stream_error,
    to_provider_error,
)

__all__ = [
    "ErrorCode",
    "ProviderError",
    "classify_exception",
    "classify_response",
    "classify_stream_error",
    "to_provider_error",
]
