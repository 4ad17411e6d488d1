"""
Provider-agnostic domain models (DTOs) public surface.

This module re-exports the one-class-per-file implementations under
``azure_providers.base.models_parts`` to keep a single stable import path.
"""

from .models_parts.message import Message, Role, ToolCall
from .models_parts.tool_definition import (
    NamedToolChoice,
    TOOL_CHOICE_MODES,
    ToolChoice,
    ToolChoiceMode,
    ToolDefinition,
    tool_choice_to_wire,
)
from .models_parts.chat_request import ChatRequest
from .models_parts.chat_response import ChatResponse
from .models_parts.completion_event import (
    CompletionEvent,
    DoneEvent,
    TextEvent,
    ToolCallDeltaEvent,
)
from .models_parts.credentials import Credentials
from .models_parts.model_family import (
    ModelFamily,
    ModelTraits,
    classify_model,
    classify_model_family,
    forbids_streaming_and_tools,
)
from .models_parts.predefined_model import PredefinedModel
from .models_parts.custom_model import CustomModel
from .models_parts.model_descriptor import ModelDescriptor, resolve_model

__all__ = [
    "Message",
    "Role",
    "ToolCall",
    "NamedToolChoice",
    "TOOL_CHOICE_MODES",
    "ToolChoice",
    "ToolChoiceMode",
    "ToolDefinition",
    "tool_choice_to_wire",
    "ChatRequest",
    "ChatResponse",
    "CompletionEvent",
    "DoneEvent",
    "TextEvent",
    "ToolCallDeltaEvent",
    "Credentials",
    "ModelFamily",
    "ModelTraits",
    "classify_model",
    "classify_model_family",
    "forbids_streaming_and_tools",
    "PredefinedModel",
    "CustomModel",
    "ModelDescriptor",
    "resolve_model",
]
