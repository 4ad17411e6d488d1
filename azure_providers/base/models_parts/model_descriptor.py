"""
Model descriptor union and lookup helpers.

Both descriptor kinds expose the same read-only surface: ``id``, ``label``,
``deployment_name``, ``max_token_count``, ``output_budget``,
``supports_parallel_tool_calls`` and ``family``.
"""
from __future__ import annotations

from typing import Union

from .custom_model import CustomModel
from .predefined_model import PredefinedModel

ModelDescriptor = Union[PredefinedModel, CustomModel]


def resolve_model(value: Union[str, ModelDescriptor]) -> ModelDescriptor:
    """Coerce a model id string into a descriptor.

    Known ids map onto :class:`PredefinedModel`; anything else becomes a
    :class:`CustomModel` whose deployment shares the id.
    """
    if isinstance(value, (PredefinedModel, CustomModel)):
        return value
    try:
        return PredefinedModel(value)
    except ValueError:
        return CustomModel(name=value, deployment_name=value)


__all__ = ["ModelDescriptor", "resolve_model"]
