"""
Named models with known limits.

`PredefinedModel` enumerates the OpenAI model ids Azure hosts. Limits and the
parallel-tool-call capability come from a static table; the deployment name
defaults to the model id.
"""
from __future__ import annotations

from enum import Enum
from typing import Dict, NamedTuple, Optional

from .model_family import ModelFamily, classify_model_family


class _Limits(NamedTuple):
    display_name: str
    max_tokens: int
    max_output_tokens: Optional[int]
    parallel_tool_calls: bool


class PredefinedModel(str, Enum):
    """Well-known model ids."""

    GPT_3_5_TURBO = "gpt-3.5-turbo"
    GPT_4 = "gpt-4"
    GPT_4_TURBO = "gpt-4-turbo"
    GPT_4O = "gpt-4o"
    GPT_4O_MINI = "gpt-4o-mini"
    GPT_4_1 = "gpt-4.1"
    O1 = "o1"
    O1_MINI = "o1-mini"
    O3 = "o3"
    O3_MINI = "o3-mini"

    @property
    def id(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        return _LIMITS[self].display_name

    @property
    def deployment_name(self) -> str:
        return self.value

    @property
    def max_token_count(self) -> int:
        return _LIMITS[self].max_tokens

    @property
    def max_output_tokens(self) -> Optional[int]:
        return _LIMITS[self].max_output_tokens

    @property
    def label(self) -> str:
        return self.display_name

    @property
    def output_budget(self) -> Optional[int]:
        return self.max_output_tokens

    @property
    def supports_parallel_tool_calls(self) -> bool:
        return _LIMITS[self].parallel_tool_calls

    @property
    def family(self) -> ModelFamily:
        return classify_model_family(self.value)


_LIMITS: Dict[PredefinedModel, _Limits] = {
    PredefinedModel.GPT_3_5_TURBO: _Limits("gpt-3.5-turbo", 16_385, 4_096, True),
    PredefinedModel.GPT_4: _Limits("gpt-4", 8_192, 8_192, True),
    PredefinedModel.GPT_4_TURBO: _Limits("gpt-4-turbo", 128_000, 4_096, True),
    PredefinedModel.GPT_4O: _Limits("gpt-4o", 128_000, 16_384, True),
    PredefinedModel.GPT_4O_MINI: _Limits("gpt-4o-mini", 128_000, 16_384, True),
    PredefinedModel.GPT_4_1: _Limits("gpt-4.1", 1_047_576, 32_768, True),
    PredefinedModel.O1: _Limits("o1", 200_000, 100_000, False),
    PredefinedModel.O1_MINI: _Limits("o1-mini", 128_000, 65_536, False),
    PredefinedModel.O3: _Limits("o3", 200_000, 100_000, False),
    PredefinedModel.O3_MINI: _Limits("o3-mini", 200_000, 100_000, False),
}


__all__ = ["PredefinedModel"]
