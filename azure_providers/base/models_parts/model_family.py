"""
Model family classification.

Azure exposes two request dialects. Reasoning models (``o1``/``o3`` ids) take
``max_completion_tokens`` and some of them reject streaming and tools; every
other model is ``STANDARD``. The family is derived from the model id once per
request and every quirk decision keys off it.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ...config.defaults import NON_STREAMING_DEPLOYMENTS, NON_STREAMING_MODEL_PREFIXES, REASONING_MODEL_PREFIXES


class ModelFamily(str, Enum):
    """Request dialect selected by model id."""

    REASONING = "reasoning"
    STANDARD = "standard"


def classify_model_family(model_id: str) -> ModelFamily:
    """Return ``REASONING`` for ids starting with ``o1`` or ``o3``, else ``STANDARD``."""
    if (model_id or "").startswith(REASONING_MODEL_PREFIXES):
        return ModelFamily.REASONING
    return ModelFamily.STANDARD


def forbids_streaming_and_tools(model_id: str) -> bool:
    """True for model ids (``o1`` prefix) that reject ``stream=true`` and tool definitions."""
    return (model_id or "").startswith(NON_STREAMING_MODEL_PREFIXES)


@dataclass(frozen=True)
class ModelTraits:
    """Everything a request needs to know about its model, classified once."""

    family: ModelFamily
    streaming: bool
    tools: bool


def classify_model(model_id: str, deployment: Optional[str] = None) -> ModelTraits:
    """Classify ``model_id`` (and the serving ``deployment``) in a single pass.

    ``o1`` ids lose both streaming and tools. The o1 deployments lose
    streaming whatever model id they are called with.
    """
    model_id = model_id or ""
    no_stream_or_tools = model_id.startswith(NON_STREAMING_MODEL_PREFIXES)
    family = ModelFamily.REASONING if model_id.startswith(REASONING_MODEL_PREFIXES) else ModelFamily.STANDARD
    return ModelTraits(
        family=family,
        streaming=not (no_stream_or_tools or deployment in NON_STREAMING_DEPLOYMENTS),
        tools=not no_stream_or_tools,
    )


__all__ = ["ModelFamily", "ModelTraits", "classify_model", "classify_model_family", "forbids_streaming_and_tools"]
