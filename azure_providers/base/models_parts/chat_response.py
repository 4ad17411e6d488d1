"""
ChatResponse DTO assembled from a completed stream.

``text`` is the concatenation of all text fragments; ``tool_calls`` holds the
reassembled calls ordered by index. ``usage`` uses the canonical
``prompt``/``completion``/``total`` keys.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .message import ToolCall


@dataclass
class ChatResponse:
    """Provider-agnostic response of a chat completion.

    Attributes:
        text: Plain text completion (may be empty when only tools were called).
        tool_calls: Completed tool calls.
        finish_reason: Last finish reason reported by the server.
        usage: Token usage mapping, when reported.
        model: Model id echoed by the server.

    Methods:
        to_dict: Return a JSON-serializable dictionary representation.
    """

    text: str = ""
    tool_calls: List[ToolCall] = field(default_factory=list)
    finish_reason: Optional[str] = None
    usage: Optional[Dict[str, int]] = None
    model: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation."""
        return {
            "text": self.text,
            "tool_calls": [tc.to_dict() for tc in self.tool_calls],
            "finish_reason": self.finish_reason,
            "usage": self.usage,
            "model": self.model,
        }


__all__ = ["ChatResponse"]
