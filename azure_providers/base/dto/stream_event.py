"""
Pydantic DTOs for one decoded SSE chunk of a chat-completions stream.

Purpose
-------
Model the OpenAI-compatible ``chat.completion.chunk`` shape Azure emits so the
decoder can validate each ``data:`` payload and the event mapper can consume
typed fields instead of raw dictionaries.

Design
------
- Every model ignores unknown keys; Azure adds fields (content filter results,
  system fingerprints) without notice.
- Only ``choices`` drives behaviour. ``model`` and ``usage`` are carried through.
- The non-streaming fallback synthesizes instances of these same models, so
  downstream code never distinguishes the two paths.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class FunctionChunk(BaseModel):
    """Fragment of a function call: name and/or a slice of the JSON arguments."""

    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    arguments: Optional[str] = None


class ToolCallChunk(BaseModel):
    """Fragment of a tool call addressed by its position ``index``."""

    model_config = ConfigDict(extra="ignore")

    index: int
    id: Optional[str] = None
    function: Optional[FunctionChunk] = None


class MessageDelta(BaseModel):
    model_config = ConfigDict(extra="ignore")

    role: Optional[str] = None
    content: Optional[str] = None
    tool_calls: Optional[List[ToolCallChunk]] = None


class ChoiceDelta(BaseModel):
    model_config = ConfigDict(extra="ignore")

    index: int = 0
    delta: MessageDelta = Field(default_factory=MessageDelta)
    finish_reason: Optional[str] = None


class Usage(BaseModel):
    """Token accounting reported by the server."""

    model_config = ConfigDict(extra="ignore")

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class StreamEvent(BaseModel):
    """One decoded chunk. ``choices`` may be empty (usage-only trailer chunks)."""

    model_config = ConfigDict(extra="ignore")

    model: Optional[str] = None
    choices: List[ChoiceDelta] = Field(default_factory=list)
    usage: Optional[Usage] = None


__all__ = [
    "FunctionChunk",
    "ToolCallChunk",
    "MessageDelta",
    "ChoiceDelta",
    "Usage",
    "StreamEvent",
]
