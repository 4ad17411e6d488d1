"""Token usage helpers."""

from .extraction import CanonicalUsage, PLACEHOLDER_USAGE, extract_token_usage, has_usage

__all__ = ["CanonicalUsage", "PLACEHOLDER_USAGE", "extract_token_usage", "has_usage"]
