"""
Authentication state machine for the Azure OpenAI provider.

States: ``UNAUTHENTICATED -> AUTHENTICATING -> AUTHENTICATED``; ``reset``
returns to ``UNAUTHENTICATED`` from anywhere.

Key resolution (``authenticate``):
1. ``AZURE_OPENAI_API_KEY`` (or its alias) in the environment wins and sets
   ``api_key_from_env``.
2. Otherwise the credential store entry for the endpoint URL is used. The
   secret must be valid UTF-8. With no endpoint configured the store is not
   consulted.
3. Neither present raises ``ProviderError(CREDENTIALS_NOT_FOUND)``.

At most one resolution runs at a time; concurrent callers await the same
task. Credentials are an immutable snapshot swapped under an ``asyncio.Lock``,
so readers never see a half-updated value. A ``reset`` or ``set_credentials``
that lands while a resolution is in flight wins over the late result.

Store write failures in ``set_credentials`` propagate. Store delete failures
in ``reset`` are logged and the reset still completes.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Callable, List, Optional, Tuple

from ..base.errors import ErrorCode, ProviderError
from ..base.interfaces import CredentialStore
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import Credentials
from ..base.constants import INVALID_API_KEY_MESSAGE
from ..config.defaults import AZURE_OPENAI_CREDENTIAL_LABEL, AZURE_OPENAI_PROVIDER_ID
from ..config.env import resolve_provider_key
from .settings import AzureSettings


class AuthState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"


AuthListener = Callable[[AuthState, Credentials], None]


def _settings_credentials(settings: Optional[AzureSettings]) -> Credentials:
    if settings is None:
        return Credentials()
    return Credentials(
        api_url=settings.api_url,
        deployment_name=settings.deployment_name,
        api_version=settings.api_version,
    )


class AuthenticationState:
    """Owns the provider's credentials and their lifecycle."""

    def __init__(
        self,
        store: CredentialStore,
        settings: Optional[AzureSettings] = None,
        *,
        provider: str = AZURE_OPENAI_PROVIDER_ID,
    ) -> None:
        self._store = store
        self._provider = provider
        self._base = _settings_credentials(settings)
        self._credentials = self._base
        self._state = AuthState.UNAUTHENTICATED
        self._api_key_from_env = False
        self._lock = asyncio.Lock()
        self._task: Optional[asyncio.Task] = None
        self._task_generation = -1
        # Bumped by every reset/set_credentials; stale resolutions are discarded.
        self._generation = 0
        self._listeners: List[AuthListener] = []
        self._logger = get_logger("providers.azure_openai.auth")

    # ------------------------------------------------------------------ reads
    @property
    def state(self) -> AuthState:
        return self._state

    @property
    def api_key_from_env(self) -> bool:
        return self._api_key_from_env

    def is_authenticated(self) -> bool:
        return self._state is AuthState.AUTHENTICATED

    def snapshot(self) -> Credentials:
        return self._credentials

    def _ctx(self) -> LogContext:
        return LogContext(provider=self._provider, deployment=self._credentials.deployment_name)

    # ------------------------------------------------------------ observers
    def subscribe(self, listener: AuthListener) -> Callable[[], None]:
        """Call ``listener(state, credentials)`` after every state change."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _set_state(self, state: AuthState) -> None:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state, self._credentials)
            except Exception:
                self._logger.exception("auth listener failed")

    # --------------------------------------------------------- transitions
    async def authenticate(self) -> Credentials:
        """Resolve an API key. Idempotent once authenticated."""
        if self._state is AuthState.AUTHENTICATED:
            return self._credentials
        if self._task is None or self._task.done() or self._task_generation != self._generation:
            self._task_generation = self._generation
            self._set_state(AuthState.AUTHENTICATING)
            self._task = asyncio.ensure_future(self._resolve(self._generation))
        return await asyncio.shield(self._task)

    async def _read_key(self) -> Tuple[str, Optional[str]]:
        """Return ``(key, env_var)``; ``env_var`` is ``None`` when the store supplied the key."""
        env_key, env_var = resolve_provider_key(self._provider)
        if env_key:
            return env_key, env_var
        url = self._credentials.api_url
        if not url:
            raise ProviderError(
                code=ErrorCode.CREDENTIALS_NOT_FOUND,
                message="no API key found: endpoint URL is not set",
                provider=self._provider,
            )
        entry = await self._store.read(url)
        if entry is None:
            raise ProviderError(
                code=ErrorCode.CREDENTIALS_NOT_FOUND,
                message=f"no API key found for {url}",
                provider=self._provider,
            )
        _, secret = entry
        try:
            return bytes(secret).decode("utf-8"), None
        except UnicodeDecodeError as exc:
            raise ProviderError(
                code=ErrorCode.CREDENTIALS_NOT_FOUND,
                message=INVALID_API_KEY_MESSAGE,
                provider=self._provider,
                raw=exc,
            ) from exc

    async def _resolve(self, generation: int) -> Credentials:
        try:
            key, env_var = await self._read_key()
        except BaseException:
            if generation == self._generation:
                self._set_state(AuthState.UNAUTHENTICATED)
            raise
        async with self._lock:
            if generation != self._generation:
                if self._state is AuthState.AUTHENTICATED:
                    return self._credentials
                raise ProviderError(
                    code=ErrorCode.CANCELLED,
                    message="credentials were reset during authentication",
                    provider=self._provider,
                )
            self._credentials = self._credentials.replace(api_key=key)
            self._api_key_from_env = env_var is not None
        normalized_log_event(
            self._logger,
            "auth.resolved",
            self._ctx(),
            phase="auth",
            source="env" if env_var else "store",
            env_var=env_var,
        )
        self._set_state(AuthState.AUTHENTICATED)
        return self._credentials

    async def set_credentials(
        self,
        api_key: str,
        api_url: Optional[str] = None,
        deployment_name: Optional[str] = None,
        api_version: Optional[str] = None,
    ) -> Credentials:
        """Persist ``api_key`` then swap in the new credentials.

        The store write happens first; if it fails the error propagates and the
        current credentials are untouched.
        """
        current = self._credentials
        url = (api_url or current.api_url or "").rstrip("/")
        if not url:
            raise ProviderError(
                code=ErrorCode.MISSING_CREDENTIAL,
                message="an endpoint URL is required to store an API key",
                provider=self._provider,
            )
        await self._store.write(url, AZURE_OPENAI_CREDENTIAL_LABEL, api_key.encode("utf-8"))
        async with self._lock:
            self._generation += 1
            self._credentials = Credentials(
                api_key=api_key,
                api_url=url,
                deployment_name=deployment_name or current.deployment_name,
                api_version=api_version or current.api_version,
            )
            self._api_key_from_env = False
        self._set_state(AuthState.AUTHENTICATED)
        return self._credentials

    async def reset(self) -> None:
        """Forget the key. Store deletion is best-effort; the reset always completes."""
        url = self._credentials.api_url
        if url:
            try:
                await self._store.delete(url)
            except Exception as exc:
                normalized_log_event(
                    self._logger,
                    "auth.reset_store_failed",
                    self._ctx(),
                    phase="auth",
                    level=logging.ERROR,
                    error_code=ErrorCode.UNKNOWN.value,
                    message=str(exc) or exc.__class__.__name__,
                )
        async with self._lock:
            self._generation += 1
            self._credentials = self._base
            self._api_key_from_env = False
        self._set_state(AuthState.UNAUTHENTICATED)

    def apply_settings(self, settings: AzureSettings) -> None:
        """Adopt endpoint, deployment and version from ``settings``; the key is kept."""
        self._base = _settings_credentials(settings)
        self._credentials = self._credentials.replace(
            api_url=settings.api_url,
            deployment_name=settings.deployment_name,
            api_version=settings.api_version,
        )
        self._set_state(self._state)


__all__ = ["AuthState", "AuthListener", "AuthenticationState"]
