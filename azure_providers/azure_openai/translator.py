"""
Request translation for Azure OpenAI chat completions.

Purpose:
- Reshape a provider-agnostic :class:`ChatRequest` into the Azure wire payload
  for a given model descriptor and deployment.
- Keep every model-family quirk in one place, keyed off a single
  :class:`ModelFamily` classification made once per request.

Rules, applied in order:
1. Prepend the default system message when the conversation has none. An
   existing system message is left where it is.
2. Map roles verbatim; assistant tool calls travel only when present.
3. Reasoning models receive ``max_completion_tokens``; all others receive
   ``max_tokens``. Never both.
4. ``parallel_tool_calls=false`` is sent only when the model supports it and
   tools are present.
5. The ``o3-mini`` deployment receives ``reasoning_effort="high"``.
6. Models and deployments that reject streaming get ``stream=false`` and lose
   their tool definitions (with any tool choice).

External dependencies:
- None. This module performs no I/O and never raises for a well-typed request.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..base.models import (
    ChatRequest,
    Message,
    ModelDescriptor,
    ModelFamily,
    classify_model,
    tool_choice_to_wire,
)
from ..config.defaults import (
    AZURE_OPENAI_DEFAULT_SYSTEM_MESSAGE,
    REASONING_EFFORT_DEPLOYMENT,
    REASONING_EFFORT_VALUE,
)
from .payload import AzurePayload


def ensure_system_message(messages: List[Message]) -> List[Message]:
    """Return ``messages`` with the default system message prepended if none exists."""
    if any(m.role == "system" for m in messages):
        return list(messages)
    return [Message.system(AZURE_OPENAI_DEFAULT_SYSTEM_MESSAGE), *messages]


def streaming_allowed(model_id: str, deployment: str) -> bool:
    """False for ``o1``-prefixed model ids and for the o1 deployments."""
    return classify_model(model_id, deployment).streaming


def _output_budget(request: ChatRequest, model: ModelDescriptor) -> Optional[int]:
    if request.max_output_tokens is not None:
        return request.max_output_tokens
    return model.output_budget


def translate(
    request: ChatRequest,
    model: ModelDescriptor,
    *,
    deployment: Optional[str] = None,
) -> AzurePayload:
    """Build the :class:`AzurePayload` for ``request`` against ``model``.

    Parameters:
        request: Normalized chat request.
        model: Target model descriptor; its id drives family classification.
        deployment: Deployment that will serve the call. Defaults to the
            descriptor's own deployment name.

    Returns:
        The wire payload. ``payload.stream`` reflects the model's streaming
        capability, not only the caller's preference.
    """
    deployment = deployment or model.deployment_name
    traits = classify_model(model.id, deployment)

    messages = [m.to_dict() for m in ensure_system_message(request.messages)]

    budget = _output_budget(request, model)
    max_tokens = budget if traits.family is ModelFamily.STANDARD else None
    max_completion_tokens = budget if traits.family is ModelFamily.REASONING else None

    tools: List[Dict[str, Any]] = [t.to_dict() for t in request.tools] if traits.tools else []
    tool_choice = None
    if tools and request.tool_choice is not None:
        tool_choice = tool_choice_to_wire(request.tool_choice)
    parallel_tool_calls = False if (tools and model.supports_parallel_tool_calls) else None

    reasoning_effort = REASONING_EFFORT_VALUE if deployment == REASONING_EFFORT_DEPLOYMENT else None

    return AzurePayload(
        model=model.id,
        messages=messages,
        stream=request.stream and traits.streaming,
        temperature=request.temperature,
        max_tokens=max_tokens,
        max_completion_tokens=max_completion_tokens,
        stop=list(request.stop),
        tools=tools,
        tool_choice=tool_choice,
        parallel_tool_calls=parallel_tool_calls,
        reasoning_effort=reasoning_effort,
    )


def build_chat_completions_url(api_url: str, deployment: str, api_version: str) -> str:
    """Return ``{base}/openai/deployments/{deployment}/chat/completions?api-version={version}``."""
    base = api_url.rstrip("/")
    return f"{base}/openai/deployments/{deployment}/chat/completions?api-version={api_version}"


__all__ = [
    "ensure_system_message",
    "streaming_allowed",
    "translate",
    "build_chat_completions_url",
]
