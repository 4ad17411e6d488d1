"""Model descriptors, messages, tools and credentials."""
from __future__ import annotations

import pytest

from azure_providers.base.models import (
    ChatRequest,
    Credentials,
    CustomModel,
    Message,
    ModelFamily,
    ModelTraits,
    NamedToolChoice,
    PredefinedModel,
    ToolCall,
    ToolDefinition,
    classify_model,
    classify_model_family,
    forbids_streaming_and_tools,
    resolve_model,
    tool_choice_to_wire,
)


@pytest.mark.parametrize(
    "model_id, family",
    [
        ("o1", ModelFamily.REASONING),
        ("o1-mini", ModelFamily.REASONING),
        ("o3-mini", ModelFamily.REASONING),
        ("o3-pro-custom", ModelFamily.REASONING),
        ("gpt-4o", ModelFamily.STANDARD),
        ("o4-mini", ModelFamily.STANDARD),
        ("", ModelFamily.STANDARD),
    ],
)
def test_classify_model_family(model_id, family):
    assert classify_model_family(model_id) is family  # nosec B101


def test_only_o1_forbids_streaming_and_tools():
    assert forbids_streaming_and_tools("o1-preview")  # nosec B101
    assert not forbids_streaming_and_tools("o3-mini")  # nosec B101
    assert not forbids_streaming_and_tools("gpt-4o")  # nosec B101


@pytest.mark.parametrize(
    "model_id, deployment, traits",
    [
        ("o1", "o1", ModelTraits(ModelFamily.REASONING, streaming=False, tools=False)),
        ("o3-mini", "o3-mini", ModelTraits(ModelFamily.REASONING, streaming=True, tools=True)),
        ("gpt-4o", "gpt-4o-prod", ModelTraits(ModelFamily.STANDARD, streaming=True, tools=True)),
        ("gpt-4o", "o1-mini", ModelTraits(ModelFamily.STANDARD, streaming=False, tools=True)),
        ("o1-preview", None, ModelTraits(ModelFamily.REASONING, streaming=False, tools=False)),
    ],
)
def test_classify_model_traits(model_id, deployment, traits):
    assert classify_model(model_id, deployment) == traits  # nosec B101


def test_predefined_model_properties():
    model = PredefinedModel.GPT_4O
    assert model.id == "gpt-4o"  # nosec B101
    assert model.deployment_name == "gpt-4o"  # nosec B101
    assert model.max_token_count == 128_000  # nosec B101
    assert model.output_budget == 16_384  # nosec B101
    assert model.supports_parallel_tool_calls  # nosec B101
    assert PredefinedModel.O1.family is ModelFamily.REASONING  # nosec B101
    assert not PredefinedModel.O3_MINI.supports_parallel_tool_calls  # nosec B101


def test_custom_model_budget_prefers_completion_tokens_for_reasoning():
    reasoning = CustomModel(name="o3-mini", deployment_name="dep", max_output_tokens=100, max_completion_tokens=500)
    standard = CustomModel(name="gpt-4o", deployment_name="dep", max_output_tokens=100, max_completion_tokens=500)
    assert reasoning.output_budget == 500  # nosec B101
    assert standard.output_budget == 100  # nosec B101
    assert standard.label == "gpt-4o"  # nosec B101


def test_resolve_model():
    assert resolve_model("gpt-4") is PredefinedModel.GPT_4  # nosec B101
    custom = resolve_model("my-finetune")
    assert isinstance(custom, CustomModel)  # nosec B101
    assert custom.deployment_name == "my-finetune"  # nosec B101
    assert resolve_model(custom) is custom  # nosec B101


def test_message_wire_shapes():
    call = ToolCall(id="call_1", name="lookup", arguments='{"q": 1}')
    assert Message.user("hi").to_dict() == {"role": "user", "content": "hi"}  # nosec B101
    assert Message.assistant("ok").to_dict() == {"role": "assistant", "content": "ok"}  # nosec B101
    assert Message.assistant(None, [call]).to_dict() == {  # nosec B101
        "role": "assistant",
        "content": None,
        "tool_calls": [{"id": "call_1", "type": "function", "function": {"name": "lookup", "arguments": '{"q": 1}'}}],
    }
    assert Message.tool("call_1", "42").to_dict() == {  # nosec B101
        "role": "tool",
        "content": "42",
        "tool_call_id": "call_1",
    }


def test_tool_definition_and_choice():
    tool = ToolDefinition(name="lookup", description="Look up", parameters={"type": "object"})
    assert tool.to_dict() == {  # nosec B101
        "type": "function",
        "function": {"name": "lookup", "description": "Look up", "parameters": {"type": "object"}},
    }
    assert tool_choice_to_wire("auto") == "auto"  # nosec B101
    assert tool_choice_to_wire(NamedToolChoice("lookup")) == {  # nosec B101
        "type": "function",
        "function": {"name": "lookup"},
    }
    with pytest.raises(ValueError):
        tool_choice_to_wire("sometimes")  # type: ignore[arg-type]


def test_chat_request_helpers():
    request = ChatRequest(messages=[Message.user("hi")], tool_choice="none")
    assert not request.has_system_message()  # nosec B101
    assert request.to_dict()["tool_choice"] == "none"  # nosec B101


def test_credentials_mask_and_replace():
    creds = Credentials(api_key="sk-secret", api_url="https://r.openai.azure.com")
    assert "sk-secret" not in repr(creds)  # nosec B101
    assert creds.to_dict()["api_key"] == "***"  # nosec B101
    updated = creds.replace(deployment_name="gpt-4o")
    assert updated.deployment_name == "gpt-4o" and creds.deployment_name is None  # nosec B101
    assert updated.has_key()  # nosec B101
    assert not Credentials().has_key()  # nosec B101
