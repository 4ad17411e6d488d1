"""
Tool definition and tool-choice DTOs.

`ToolDefinition` describes a callable function by name, description and JSON
schema. `ToolChoice` is either one of the mode strings ``"auto"``,
``"required"``, ``"none"`` or a :class:`NamedToolChoice` forcing one function.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Union

ToolChoiceMode = Literal["auto", "required", "none"]

TOOL_CHOICE_MODES = ("auto", "required", "none")


@dataclass
class ToolDefinition:
    """A function the model may call.

    Attributes:
        name: Function name.
        description: Human-readable description shown to the model.
        parameters: JSON schema of the arguments object.
    """

    name: str
    description: str = ""
    parameters: Dict[str, Any] = field(default_factory=lambda: {"type": "object", "properties": {}})

    def to_dict(self) -> Dict[str, Any]:
        """Return the wire shape ``{"type": "function", "function": {...}}``."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }


@dataclass(frozen=True)
class NamedToolChoice:
    """Force the model to call the function ``name``."""

    name: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "function", "function": {"name": self.name}}


ToolChoice = Union[ToolChoiceMode, NamedToolChoice]


def tool_choice_to_wire(choice: ToolChoice) -> Union[str, Dict[str, Any]]:
    """Serialize a :data:`ToolChoice`. Raises ``ValueError`` on an unknown mode string."""
    if isinstance(choice, NamedToolChoice):
        return choice.to_dict()
    if choice not in TOOL_CHOICE_MODES:
        raise ValueError(f"unknown tool choice: {choice!r}")
    return choice


__all__ = [
    "ToolDefinition",
    "NamedToolChoice",
    "ToolChoice",
    "ToolChoiceMode",
    "TOOL_CHOICE_MODES",
    "tool_choice_to_wire",
]
