"""
Message DTO used by the adapter.

Defines the `Message` dataclass, the `Role` literal, and `ToolCall` (a
completed function invocation requested by the assistant). Assistant messages
may carry tool calls; tool messages reference the call they answer through
``tool_call_id``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional


# Message roles accepted by the chat-completions endpoint.
Role = Literal["system", "user", "assistant", "tool"]


@dataclass
class ToolCall:
    """A function invocation emitted by the assistant.

    Attributes:
        id: Server-assigned call identifier, echoed back by the tool message.
        name: Function name.
        arguments: JSON-encoded argument string, exactly as produced by the model.
    """

    id: str
    name: str
    arguments: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Return the wire shape ``{"id", "type": "function", "function": {...}}``."""
        return {
            "id": self.id,
            "type": "function",
            "function": {"name": self.name, "arguments": self.arguments},
        }


@dataclass
class Message:
    """A chat message.

    Attributes:
        role: Author role.
        content: Text content. ``None`` is allowed for assistant messages that
            only carry tool calls.
        tool_calls: Tool calls requested by an assistant message.
        tool_call_id: Identifier of the call a ``tool`` message answers.
    """

    role: Role
    content: Optional[str] = None
    tool_calls: List[ToolCall] = field(default_factory=list)
    tool_call_id: Optional[str] = None

    @classmethod
    def system(cls, content: str) -> "Message":
        return cls(role="system", content=content)

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(role="user", content=content)

    @classmethod
    def assistant(cls, content: Optional[str] = None, tool_calls: Optional[List[ToolCall]] = None) -> "Message":
        return cls(role="assistant", content=content, tool_calls=list(tool_calls or []))

    @classmethod
    def tool(cls, tool_call_id: str, content: str) -> "Message":
        return cls(role="tool", content=content, tool_call_id=tool_call_id)

    def to_dict(self) -> Dict[str, Any]:
        """Return the wire representation for this role.

        ``tool_calls`` appears only on assistant messages that carry some, and
        ``tool_call_id`` only on tool messages.
        """
        data: Dict[str, Any] = {"role": self.role}
        if self.role == "assistant":
            data["content"] = self.content
            if self.tool_calls:
                data["tool_calls"] = [tc.to_dict() for tc in self.tool_calls]
        elif self.role == "tool":
            data["content"] = self.content or ""
            data["tool_call_id"] = self.tool_call_id
        else:
            data["content"] = self.content or ""
        return data


__all__ = [
    "Message",
    "Role",
    "ToolCall",
]
