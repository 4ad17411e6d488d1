"""
Caller-facing completion events.

A streaming session yields a sequence of these. Every session ends with
exactly one :class:`DoneEvent` unless it fails.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union


@dataclass(frozen=True)
class TextEvent:
    """A fragment of assistant text, emitted verbatim."""

    text: str


@dataclass(frozen=True)
class ToolCallDeltaEvent:
    """A fragment of a tool call.

    Attributes:
        index: Position of the tool call within the choice.
        id: Call id once known (first non-null id seen for ``index``).
        name_fragment: Slice of the function name carried by this chunk.
        arguments_fragment: Slice of the JSON arguments carried by this chunk.
        choice_index: Choice the call belongs to. Tool-call indexes restart at
            zero in every choice, so a call is identified by both indexes.
    """

    index: int
    id: Optional[str] = None
    name_fragment: str = ""
    arguments_fragment: str = ""
    choice_index: int = 0


@dataclass(frozen=True)
class DoneEvent:
    """End of a choice. ``finish_reason`` is ``None`` when the stream ended without one."""

    finish_reason: Optional[str] = None
    usage: Optional[Dict[str, Any]] = None


CompletionEvent = Union[TextEvent, ToolCallDeltaEvent, DoneEvent]


__all__ = ["TextEvent", "ToolCallDeltaEvent", "DoneEvent", "CompletionEvent"]
