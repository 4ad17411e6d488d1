"""
Azure OpenAI provider: orchestration and public surface.

Purpose:
- Tie together credentials, request translation, transport, decoding and
  event mapping behind :meth:`AzureOpenAIProvider.stream_completion`.
- Expose the model catalogue derived from settings.

Request flow:
1. Snapshot credentials; no key or endpoint raises ``MISSING_CREDENTIAL``
   before any network call.
2. Translate the request for the model's family and deployment.
3. Acquire a limiter permit (held until the returned stream ends or is
   dropped), then send the request.
4. Non-2xx responses are classified and raised. Streaming responses are
   decoded line by line; models that reject streaming are read whole and
   adapted into a single event.

Timeout strategy:
- Timeouts live in the transport (``get_timeout_config``). No retries happen
  here; ``ProviderError.retryable`` is a hint for callers.
"""

from __future__ import annotations

import logging
import uuid
from contextlib import aclosing
from typing import AsyncIterator, List, Optional, Union

from ..base.constants import API_KEY_HEADER
from ..base.errors import ErrorCode, ProviderError, classify_response, to_provider_error
from ..base.http import HttpxTransport
from ..base.interfaces import CredentialStore, Transport, TransportResponse
from ..base.limiter import Permit, RequestLimiter
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.memory import InMemoryCredentialStore
from ..base.models import (
    ChatRequest,
    ChatResponse,
    CompletionEvent,
    Credentials,
    ModelDescriptor,
    NamedToolChoice,
    PredefinedModel,
    TOOL_CHOICE_MODES,
    ToolChoice,
    classify_model,
    resolve_model,
)
from ..base.streaming import CompletionStream, accumulate_events
from ..config.defaults import AZURE_OPENAI_DEFAULT_API_VERSION, AZURE_OPENAI_PROVIDER_ID, AZURE_OPENAI_PROVIDER_NAME
from .auth import AuthenticationState
from .decoder import StreamItem, decode_response, decode_stream, single_event
from .event_mapper import EventMapper
from .settings import AzureSettings, SettingsChannel
from .translator import build_chat_completions_url, translate


class AzureOpenAIProvider:
    """Chat-completions provider for Azure OpenAI deployments.

    Parameters:
        settings: Provider settings. Loaded from config and environment when omitted.
        store: Credential store for API keys (in-memory by default).
        transport: HTTP transport (pooled ``httpx.AsyncClient`` by default).
        limiter: Admission limiter; sized from settings by default.
        settings_channel: Optional channel; the provider follows its updates.
    """

    provider_name = AZURE_OPENAI_PROVIDER_ID
    display_name = AZURE_OPENAI_PROVIDER_NAME

    def __init__(
        self,
        settings: Optional[AzureSettings] = None,
        *,
        store: Optional[CredentialStore] = None,
        transport: Optional[Transport] = None,
        limiter: Optional[RequestLimiter] = None,
        settings_channel: Optional[SettingsChannel] = None,
    ) -> None:
        if settings is None:
            settings = settings_channel.current if settings_channel is not None else AzureSettings.load()
        self._settings = settings
        self._store = store if store is not None else InMemoryCredentialStore()
        self._transport = transport if transport is not None else HttpxTransport()
        self._limiter = limiter if limiter is not None else RequestLimiter(settings.max_concurrent_requests)
        self._auth = AuthenticationState(self._store, settings, provider=self.provider_name)
        self._logger = get_logger("providers.azure_openai")
        self._unsubscribe = settings_channel.subscribe(self.apply_settings) if settings_channel else None

    # ------------------------------------------------------------ state
    @property
    def settings(self) -> AzureSettings:
        return self._settings

    @property
    def auth(self) -> AuthenticationState:
        return self._auth

    @property
    def limiter(self) -> RequestLimiter:
        return self._limiter

    @property
    def api_key_from_env(self) -> bool:
        return self._auth.api_key_from_env

    def is_authenticated(self) -> bool:
        return self._auth.is_authenticated()

    async def authenticate(self) -> Credentials:
        return await self._auth.authenticate()

    async def set_credentials(
        self,
        api_key: str,
        api_url: Optional[str] = None,
        deployment_name: Optional[str] = None,
        api_version: Optional[str] = None,
    ) -> Credentials:
        return await self._auth.set_credentials(api_key, api_url, deployment_name, api_version)

    async def reset_credentials(self) -> None:
        await self._auth.reset()

    def apply_settings(self, settings: AzureSettings) -> None:
        """Adopt new settings (endpoint, deployment, version, models)."""
        self._settings = settings
        self._auth.apply_settings(settings)

    async def aclose(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        aclose = getattr(self._transport, "aclose", None)
        if aclose is not None:
            await aclose()

    # ------------------------------------------------------------ models
    def provided_models(self) -> List[ModelDescriptor]:
        """Models declared in ``available_models``, in declaration order."""
        return list(self._settings.custom_models())

    def default_model(self) -> Optional[ModelDescriptor]:
        models = self.provided_models()
        return models[0] if models else None

    def supports_tools(self, model: Union[str, ModelDescriptor]) -> bool:
        return classify_model(self._lookup(model).id).tools

    def supports_tool_choice(self, model: Union[str, ModelDescriptor], choice: ToolChoice) -> bool:
        if not self.supports_tools(model):
            return False
        return isinstance(choice, NamedToolChoice) or choice in TOOL_CHOICE_MODES

    def telemetry_id(self, model: Union[str, ModelDescriptor]) -> str:
        return f"{self.provider_name}/{self._lookup(model).id}"

    def max_token_count(self, model: Union[str, ModelDescriptor]) -> int:
        return self._lookup(model).max_token_count

    def _resolve(self, model: Union[str, ModelDescriptor, None]) -> ModelDescriptor:
        if model is None:
            model = self.default_model()
            if model is None:
                raise ProviderError(
                    code=ErrorCode.UNKNOWN,
                    message="no model given and no available_models configured",
                    provider=self.provider_name,
                )
        return self._lookup(model)

    def _lookup(self, model: Union[str, ModelDescriptor]) -> ModelDescriptor:
        """Resolve an id against ``available_models`` first, then the predefined catalogue."""
        if isinstance(model, str):
            for candidate in self._settings.custom_models():
                if model in (candidate.name, candidate.deployment_name):
                    return candidate
        return resolve_model(model)

    def _deployment_for(self, model: ModelDescriptor, creds: Credentials) -> str:
        # Predefined models follow the configured default deployment when one is set.
        if isinstance(model, PredefinedModel) and creds.deployment_name:
            return creds.deployment_name
        return model.deployment_name

    # ------------------------------------------------------------ completion
    async def stream_completion(
        self,
        request: ChatRequest,
        model: Union[str, ModelDescriptor, None] = None,
    ) -> CompletionStream:
        """Start a completion and return its event stream.

        Failures before the first event (missing credentials, transport
        errors, non-2xx statuses, malformed non-streaming bodies) are raised
        here. Later failures are raised from the stream.
        """
        descriptor = self._resolve(model)
        creds = self._auth.snapshot()
        if not creds.api_key or not creds.api_url:
            raise ProviderError(
                code=ErrorCode.MISSING_CREDENTIAL,
                message="Azure OpenAI API key is not set" if not creds.api_key else "Azure OpenAI endpoint is not set",
                provider=self.provider_name,
                model=descriptor.id,
            )
        deployment = self._deployment_for(descriptor, creds)
        payload = translate(request, descriptor, deployment=deployment)
        url = build_chat_completions_url(creds.api_url, deployment, creds.api_version or AZURE_OPENAI_DEFAULT_API_VERSION)
        headers = {API_KEY_HEADER: creds.api_key, "Content-Type": "application/json"}
        ctx = LogContext(
            provider=self.provider_name,
            model=descriptor.id,
            deployment=deployment,
            request_id=uuid.uuid4().hex[:12],
        )
        normalized_log_event(self._logger, "stream.start", ctx, phase="start", streaming=payload.stream)

        permit = await self._limiter.acquire()
        response: Optional[TransportResponse] = None
        handed_off = False
        try:
            normalized_log_event(self._logger, "stream.request", ctx, phase="request", attempt=1)
            response = await self._transport.send("POST", url, headers, payload.to_json())
            if not 200 <= response.status_code < 300:
                body = await response.aread()
                err = classify_response(response.status_code, body, provider=self.provider_name, model=descriptor.id)
                normalized_log_event(
                    self._logger,
                    "http.error",
                    ctx,
                    phase="request",
                    level=logging.ERROR,
                    error_code=err.code.value,
                    status=err.status,
                    message=err.message,
                )
                raise err
            if payload.stream:
                items: AsyncIterator[StreamItem] = decode_stream(response, model=descriptor.id)
            else:
                body = await response.aread()
                await response.aclose()
                items = single_event(decode_response(response.status_code, body, model=descriptor.id))
            mapper = EventMapper(ctx=ctx, logger=self._logger)
            handed_off = True
            return CompletionStream(
                self._session(mapper, items, ctx, permit, response),
                permit=permit,
                on_close=response.aclose,
            )
        except ProviderError as err:
            if err.code is not ErrorCode.HTTP:
                self._log_error(ctx, err)
            raise
        except Exception as exc:
            err = to_provider_error(exc, provider=self.provider_name, model=descriptor.id)
            self._log_error(ctx, err)
            raise err from exc
        finally:
            if not handed_off:
                if response is not None:
                    await response.aclose()
                permit.release()

    async def _session(
        self,
        mapper: EventMapper,
        items: AsyncIterator[StreamItem],
        ctx: LogContext,
        permit: Permit,
        response: TransportResponse,
    ) -> AsyncIterator[CompletionEvent]:
        # The session owns the permit and the response, so finalizing an
        # abandoned generator releases both.
        emitted = 0
        try:
            async with aclosing(mapper.map_stream(items)) as events:
                async for event in events:
                    emitted += 1
                    yield event
        except ProviderError as err:
            self._log_error(ctx, err)
            raise
        finally:
            try:
                await response.aclose()
            finally:
                permit.release()
        normalized_log_event(
            self._logger,
            "stream.finalize",
            ctx,
            phase="finalize",
            emitted=emitted > 0,
            tokens=mapper.usage,
            events=emitted,
            skipped=mapper.skipped,
        )

    def _log_error(self, ctx: LogContext, err: ProviderError) -> None:
        normalized_log_event(
            self._logger,
            "stream.error",
            ctx,
            phase="error",
            level=logging.ERROR,
            error_code=err.code.value,
            message=err.message,
        )

    async def complete(
        self,
        request: ChatRequest,
        model: Union[str, ModelDescriptor, None] = None,
    ) -> ChatResponse:
        """Run a completion to the end and return the assembled response."""
        descriptor = self._resolve(model)
        stream = await self.stream_completion(request, descriptor)
        async with stream:
            return await accumulate_events(stream, model=descriptor.id)


__all__ = ["AzureOpenAIProvider"]
