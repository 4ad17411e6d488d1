"""
ChatRequest DTO for provider-agnostic chat invocations.

The request translator maps this normalized shape onto the Azure wire payload.
Model selection is not part of the request: the provider pairs it with a
model descriptor at call time.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ...config.defaults import AZURE_OPENAI_DEFAULT_TEMPERATURE
from .message import Message
from .tool_definition import ToolChoice, ToolDefinition, tool_choice_to_wire


@dataclass
class ChatRequest:
    """Normalized chat request.

    Attributes:
        messages: Ordered conversation.
        tools: Functions the model may call (empty when none).
        tool_choice: Optional tool-choice policy.
        temperature: Sampling temperature (``AZURE_OPENAI_DEFAULT_TEMPERATURE`` when unset).
        stop: Stop sequences.
        max_output_tokens: Output budget; the model default applies when ``None``.
        stream: Whether the caller prefers a streamed response. Models that
            reject streaming override this.

    Methods:
        has_system_message: True when any message has the ``system`` role.
        to_dict: Return a JSON-serializable dictionary of the request.
    """

    messages: List[Message]
    tools: List[ToolDefinition] = field(default_factory=list)
    tool_choice: Optional[ToolChoice] = None
    temperature: float = AZURE_OPENAI_DEFAULT_TEMPERATURE
    stop: List[str] = field(default_factory=list)
    max_output_tokens: Optional[int] = None
    stream: bool = True

    def has_system_message(self) -> bool:
        return any(m.role == "system" for m in self.messages)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the request."""
        return {
            "messages": [m.to_dict() for m in self.messages],
            "tools": [t.to_dict() for t in self.tools],
            "tool_choice": tool_choice_to_wire(self.tool_choice) if self.tool_choice is not None else None,
            "temperature": self.temperature,
            "stop": list(self.stop),
            "max_output_tokens": self.max_output_tokens,
            "stream": self.stream,
        }


__all__ = [
    "ChatRequest",
]
