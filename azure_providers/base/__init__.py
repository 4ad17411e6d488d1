"""
Providers Base Package

Exports the provider-agnostic building blocks the Azure adapter is built on:

- Models (DTOs): request, response, event and credential objects
- Errors: the normalized taxonomy and classifiers
- Interfaces: credential store and transport protocols
- Infrastructure: HTTP transport, timeouts, request limiter, streaming helpers
"""

from .errors import ErrorCode, ProviderError, classify_exception, classify_response
from .interfaces import CredentialStore, Transport, TransportResponse
from .limiter import Permit, RequestLimiter
from .memory import InMemoryCredentialStore
from .models import (
    ChatRequest,
    ChatResponse,
    CompletionEvent,
    Credentials,
    CustomModel,
    DoneEvent,
    Message,
    ModelDescriptor,
    ModelFamily,
    NamedToolChoice,
    PredefinedModel,
    Role,
    TextEvent,
    ToolCall,
    ToolCallDeltaEvent,
    ToolChoice,
    ToolDefinition,
    classify_model_family,
)
from .streaming import CompletionStream, accumulate_events
from .timeouts import TimeoutConfig, get_timeout_config

__all__ = [
    # Errors
    "ErrorCode",
    "ProviderError",
    "classify_exception",
    "classify_response",
    # Interfaces
    "CredentialStore",
    "Transport",
    "TransportResponse",
    # Infrastructure
    "Permit",
    "RequestLimiter",
    "InMemoryCredentialStore",
    "CompletionStream",
    "accumulate_events",
    "TimeoutConfig",
    "get_timeout_config",
    # Models
    "ChatRequest",
    "ChatResponse",
    "CompletionEvent",
    "Credentials",
    "CustomModel",
    "DoneEvent",
    "Message",
    "ModelDescriptor",
    "ModelFamily",
    "NamedToolChoice",
    "PredefinedModel",
    "Role",
    "TextEvent",
    "ToolCall",
    "ToolCallDeltaEvent",
    "ToolChoice",
    "ToolDefinition",
    "classify_model_family",
]
