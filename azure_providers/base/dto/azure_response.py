"""DTOs for a complete, non-streaming chat-completions response.

Used by models that reject ``stream=true``. The decoder validates the body into
:class:`AzureResponse` and then converts it into a single
:class:`~azure_providers.base.dto.stream_event.StreamEvent`.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .stream_event import Usage


class ResponseFunction(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    arguments: str = ""


class ResponseToolCall(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    type: str = "function"
    function: ResponseFunction


class ResponseMessage(BaseModel):
    """Message of a completed choice. ``content`` is null when only tools were called."""

    model_config = ConfigDict(extra="ignore")

    role: str = "assistant"
    content: Optional[str] = None
    tool_calls: Optional[List[ResponseToolCall]] = None


class ResponseChoice(BaseModel):
    model_config = ConfigDict(extra="ignore")

    index: int = 0
    message: ResponseMessage
    finish_reason: Optional[str] = None


class AzureResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    model: Optional[str] = None
    choices: List[ResponseChoice] = Field(default_factory=list)
    usage: Optional[Usage] = None


__all__ = [
    "ResponseFunction",
    "ResponseToolCall",
    "ResponseMessage",
    "ResponseChoice",
    "AzureResponse",
]
