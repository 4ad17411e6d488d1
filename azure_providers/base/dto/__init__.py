"""Wire DTO package (pydantic) for Azure chat-completions payloads."""

from .error_envelope import ErrorDetail, ErrorEnvelope
from .stream_event import (
    ChoiceDelta,
    FunctionChunk,
    MessageDelta,
    StreamEvent,
    ToolCallChunk,
    Usage,
)
from .azure_response import (
    AzureResponse,
    ResponseChoice,
    ResponseFunction,
    ResponseMessage,
    ResponseToolCall,
)

__all__ = [
    "ErrorDetail",
    "ErrorEnvelope",
    "ChoiceDelta",
    "FunctionChunk",
    "MessageDelta",
    "StreamEvent",
    "ToolCallChunk",
    "Usage",
    "AzureResponse",
    "ResponseChoice",
    "ResponseFunction",
    "ResponseMessage",
    "ResponseToolCall",
]
