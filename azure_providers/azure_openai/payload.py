"""Wire payload for ``POST .../chat/completions``.

:class:`AzurePayload` is produced by the request translator. ``to_dict``
omits every optional field that is unset or empty, so the server never sees
``max_tokens`` and ``max_completion_tokens`` together, nor an empty ``tools``
list next to ``parallel_tool_calls``.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


@dataclass
class AzurePayload:
    """Serializable chat-completions request body."""

    model: str
    messages: List[Dict[str, Any]]
    stream: bool
    temperature: float
    max_tokens: Optional[int] = None
    max_completion_tokens: Optional[int] = None
    stop: List[str] = field(default_factory=list)
    tools: List[Dict[str, Any]] = field(default_factory=list)
    tool_choice: Optional[Union[str, Dict[str, Any]]] = None
    parallel_tool_calls: Optional[bool] = None
    reasoning_effort: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "model": self.model,
            "messages": self.messages,
            "stream": self.stream,
            "temperature": self.temperature,
        }
        optional = {
            "max_tokens": self.max_tokens,
            "max_completion_tokens": self.max_completion_tokens,
            "stop": self.stop or None,
            "tools": self.tools or None,
            "tool_choice": self.tool_choice,
            "parallel_tool_calls": self.parallel_tool_calls,
            "reasoning_effort": self.reasoning_effort,
        }
        data.update({k: v for k, v in optional.items() if v is not None})
        return data

    def to_json(self) -> bytes:
        return json.dumps(self.to_dict(), ensure_ascii=False).encode("utf-8")


__all__ = ["AzurePayload"]
