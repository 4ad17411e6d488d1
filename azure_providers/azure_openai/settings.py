"""Azure OpenAI provider settings and the settings notification channel.

:class:`AzureSettings` validates the merged mapping returned by
``get_provider_config("azure_openai")``: endpoint URL, default deployment, API
version, limiter size and the user-declared ``available_models``.

:class:`SettingsChannel` replaces host-side observer reactivity with an
explicit publish/subscribe hook. Publishing new settings calls every
subscriber in registration order; the provider subscribes itself so the
authentication state picks up endpoint changes.
"""
from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..base.logging import get_logger
from ..base.models import CustomModel
from ..config import get_provider_config
from ..config.defaults import (
    AZURE_OPENAI_DEFAULT_API_VERSION,
    AZURE_OPENAI_MAX_CONCURRENT_REQUESTS,
    AZURE_OPENAI_PROVIDER_ID,
)

SettingsListener = Callable[["AzureSettings"], None]


class AvailableModel(BaseModel):
    """One entry of ``available_models``."""

    model_config = ConfigDict(extra="ignore")

    name: str
    deployment_name: str
    display_name: Optional[str] = None
    max_tokens: int = Field(ge=0)
    max_output_tokens: Optional[int] = Field(default=None, ge=1)
    max_completion_tokens: Optional[int] = Field(default=None, ge=1)
    supports_parallel_tool_calls: bool = False

    def to_custom_model(self) -> CustomModel:
        return CustomModel(
            name=self.name,
            deployment_name=self.deployment_name,
            display_name=self.display_name,
            max_tokens=self.max_tokens,
            max_output_tokens=self.max_output_tokens,
            max_completion_tokens=self.max_completion_tokens,
            supports_parallel_tool_calls=self.supports_parallel_tool_calls,
        )


class AzureSettings(BaseModel):
    """Validated provider settings.

    Attributes:
        api_url: Resource base URL, e.g. ``https://my-res.openai.azure.com``.
        deployment_name: Default deployment for models that do not name one.
        api_version: ``api-version`` query parameter.
        max_concurrent_requests: Limiter size per provider instance.
        available_models: Deployment-bound models offered by the provider.
    """

    model_config = ConfigDict(extra="ignore")

    api_url: Optional[str] = None
    deployment_name: Optional[str] = None
    api_version: str = AZURE_OPENAI_DEFAULT_API_VERSION
    max_concurrent_requests: int = Field(default=AZURE_OPENAI_MAX_CONCURRENT_REQUESTS, ge=1)
    available_models: List[AvailableModel] = Field(default_factory=list)

    @field_validator("api_url")
    @classmethod
    def _strip_trailing_slash(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip().rstrip("/")
        return v or None

    @classmethod
    def load(cls, overrides: Optional[Dict[str, Any]] = None) -> "AzureSettings":
        """Build settings from defaults, config file, environment and ``overrides``."""
        return cls.model_validate(get_provider_config(AZURE_OPENAI_PROVIDER_ID, overrides))

    def custom_models(self) -> List[CustomModel]:
        return [m.to_custom_model() for m in self.available_models]


class SettingsChannel:
    """Holds the current :class:`AzureSettings` and notifies subscribers on change."""

    def __init__(self, settings: Optional[AzureSettings] = None) -> None:
        self._current = settings or AzureSettings()
        self._listeners: List[SettingsListener] = []
        self._logger = get_logger("providers.azure_openai.settings")

    @property
    def current(self) -> AzureSettings:
        return self._current

    def subscribe(self, listener: SettingsListener) -> Callable[[], None]:
        """Register ``listener``; returns a function that unregisters it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def publish(self, settings: AzureSettings) -> None:
        """Replace the current settings and notify every subscriber.

        Unchanged settings are not re-broadcast.
        """
        if settings == self._current:
            return
        self._current = settings
        for listener in list(self._listeners):
            listener(settings)


__all__ = ["AvailableModel", "AzureSettings", "SettingsChannel", "SettingsListener"]
