"""Settings validation, loading and the settings channel."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from azure_providers.azure_openai.settings import AvailableModel, AzureSettings, SettingsChannel
from azure_providers.base.models import CustomModel
from azure_providers.tests.utils import assert_true


def test_load_from_environment(monkeypatch):
    monkeypatch.setenv("AZURE_OPENAI_ENDPOINT", "https://env.openai.azure.com/")
    monkeypatch.setenv("AZURE_OPENAI_DEPLOYMENT", "gpt-4o")
    settings = AzureSettings.load()
    assert_true(settings.api_url == "https://env.openai.azure.com", "trailing slash stripped")
    assert_true(settings.deployment_name == "gpt-4o", "deployment from env")
    assert_true(settings.api_version == "2024-08-01-preview", "default api version")
    assert_true(settings.max_concurrent_requests == 4, "default limiter size")


def test_load_overrides_win(monkeypatch):
    monkeypatch.setenv("AZURE_OPENAI_API_VERSION", "2024-02-01")
    settings = AzureSettings.load({"api_version": "2025-01-01", "max_concurrent_requests": 2})
    assert_true(settings.api_version == "2025-01-01", "override beats env")
    assert_true(settings.max_concurrent_requests == 2, "limiter override")


def test_blank_url_becomes_none():
    assert_true(AzureSettings(api_url="  ").api_url is None, "blank url normalized")


def test_invalid_values_rejected():
    with pytest.raises(ValidationError):
        AzureSettings(max_concurrent_requests=0)
    with pytest.raises(ValidationError):
        AvailableModel(name="m", deployment_name="d", max_tokens=-1)


def test_available_models_become_custom_models():
    settings = AzureSettings(
        available_models=[
            {
                "name": "gpt-4o",
                "deployment_name": "prod",
                "max_tokens": 128000,
                "max_output_tokens": 4096,
                "supports_parallel_tool_calls": True,
                "unknown_key": "ignored",
            }
        ]
    )
    models = settings.custom_models()
    assert_true(
        models
        == [
            CustomModel(
                name="gpt-4o",
                deployment_name="prod",
                max_tokens=128000,
                max_output_tokens=4096,
                supports_parallel_tool_calls=True,
            )
        ],
        f"unexpected models: {models}",
    )


def test_channel_notifies_and_unsubscribes():
    channel = SettingsChannel(AzureSettings(api_url="https://a"))
    seen = []
    unsubscribe = channel.subscribe(seen.append)
    updated = AzureSettings(api_url="https://b")
    channel.publish(updated)
    channel.publish(AzureSettings(api_url="https://b"))
    assert_true(seen == [updated], "unchanged settings are not re-broadcast")
    assert_true(channel.current is updated, "current settings replaced")
    unsubscribe()
    channel.publish(AzureSettings(api_url="https://c"))
    assert_true(len(seen) == 1, "unsubscribed listener not called")
