"""
User-configured model bound to an Azure deployment.

Custom models come from the ``available_models`` setting. ``name`` is the
upstream model id (used for family classification and telemetry) while
``deployment_name`` selects the Azure deployment in the request URL.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .model_family import ModelFamily, classify_model_family


@dataclass(frozen=True)
class CustomModel:
    """A deployment-bound model with caller-supplied limits.

    Attributes:
        name: Upstream model id (e.g. ``"gpt-4o"``).
        deployment_name: Azure deployment serving the model.
        display_name: Optional label; falls back to ``name``.
        max_tokens: Context window size.
        max_output_tokens: Default output budget.
        max_completion_tokens: Output budget for reasoning models; preferred over
            ``max_output_tokens`` when both are set and the model reasons.
        supports_parallel_tool_calls: Whether ``parallel_tool_calls`` may be sent.
    """

    name: str
    deployment_name: str
    display_name: Optional[str] = None
    max_tokens: int = 0
    max_output_tokens: Optional[int] = None
    max_completion_tokens: Optional[int] = None
    supports_parallel_tool_calls: bool = False

    @property
    def id(self) -> str:
        return self.name

    @property
    def label(self) -> str:
        return self.display_name or self.name

    @property
    def max_token_count(self) -> int:
        return self.max_tokens

    @property
    def output_budget(self) -> Optional[int]:
        if self.family is ModelFamily.REASONING and self.max_completion_tokens is not None:
            return self.max_completion_tokens
        return self.max_output_tokens

    @property
    def family(self) -> ModelFamily:
        return classify_model_family(self.name)


__all__ = ["CustomModel"]
