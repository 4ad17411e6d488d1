"""Model catalogue and capability queries."""
from __future__ import annotations

from azure_providers.base.models import CustomModel, NamedToolChoice, PredefinedModel


def test_provided_models_follow_settings_order(provider):
    models = provider.provided_models()
    assert [m.name for m in models] == ["gpt-4o", "o1", "o3-mini"]  # nosec B101
    assert all(isinstance(m, CustomModel) for m in models)  # nosec B101
    assert provider.default_model().deployment_name == "gpt-4o-prod"  # nosec B101
    assert provider.default_model().label == "GPT-4o (prod)"  # nosec B101


def test_tool_support(provider):
    assert provider.supports_tools("gpt-4o")  # nosec B101
    assert not provider.supports_tools("o1")  # nosec B101
    assert not provider.supports_tools(PredefinedModel.O1_MINI)  # nosec B101
    assert provider.supports_tool_choice("gpt-4o", "required")  # nosec B101
    assert provider.supports_tool_choice("o3-mini", NamedToolChoice("f"))  # nosec B101
    assert not provider.supports_tool_choice("o1", "auto")  # nosec B101
    assert not provider.supports_tool_choice("gpt-4o", "sometimes")  # nosec B101


def test_lookup_by_deployment_and_telemetry(provider):
    assert provider.telemetry_id("gpt-4o-prod") == "azure_openai/gpt-4o"  # nosec B101
    assert provider.telemetry_id("my-finetune") == "azure_openai/my-finetune"  # nosec B101
    assert provider.max_token_count("gpt-4o") == 128000  # nosec B101
    assert provider.max_token_count("gpt-4.1") == 1_047_576  # nosec B101


def test_provider_identity(provider):
    assert provider.provider_name == "azure_openai"  # nosec B101
    assert provider.display_name == "Azure OpenAI"  # nosec B101
    assert not provider.is_authenticated()  # nosec B101
