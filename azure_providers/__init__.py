"""azure_providers package

Protocol-adaptation layer between a provider-agnostic chat-completion caller
and Azure's variant of the OpenAI HTTP API.

Public API (re-exported):
    - Version: ``__version__``
    - Exceptions: :class:`ProviderError`, :class:`ErrorCode`
    - Provider: :class:`AzureOpenAIProvider`, :class:`AzureSettings`
    - Request/response DTOs: :class:`ChatRequest`, :class:`Message`,
      :class:`ToolDefinition`, :class:`ChatResponse` and the completion events
"""

from .base.errors import ErrorCode, ProviderError
from .base.memory import InMemoryCredentialStore
from .base.models import (
    ChatRequest,
    ChatResponse,
    CustomModel,
    DoneEvent,
    Message,
    NamedToolChoice,
    PredefinedModel,
    TextEvent,
    ToolCall,
    ToolCallDeltaEvent,
    ToolDefinition,
)
from .azure_openai import AzureOpenAIProvider, AzureSettings, SettingsChannel

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ErrorCode",
    "ProviderError",
    "InMemoryCredentialStore",
    "ChatRequest",
    "ChatResponse",
    "CustomModel",
    "DoneEvent",
    "Message",
    "NamedToolChoice",
    "PredefinedModel",
    "TextEvent",
    "ToolCall",
    "ToolCallDeltaEvent",
    "ToolDefinition",
    "AzureOpenAIProvider",
    "AzureSettings",
    "SettingsChannel",
]
