"""Authentication state machine: key sources, concurrency and reset."""
from __future__ import annotations

import asyncio

import pytest

from azure_providers.azure_openai.auth import AuthenticationState, AuthState
from azure_providers.azure_openai.settings import AzureSettings
from azure_providers.base.errors import ErrorCode, ProviderError
from azure_providers.base.memory import InMemoryCredentialStore

URL = "https://auth-test.openai.azure.com"


def _settings(**kwargs) -> AzureSettings:
    kwargs.setdefault("api_url", URL)
    kwargs.setdefault("deployment_name", "gpt-4o")
    return AzureSettings(**kwargs)


class _GatedStore(InMemoryCredentialStore):
    """Store whose reads wait until ``gate`` is set."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.gate = asyncio.Event()

    async def read(self, url):
        await self.gate.wait()
        return await super().read(url)


class _BrokenStore(InMemoryCredentialStore):
    async def write(self, url, label, secret):
        raise OSError("keychain locked")

    async def delete(self, url):
        raise OSError("keychain locked")


@pytest.mark.asyncio
async def test_environment_key_wins(monkeypatch):
    monkeypatch.setenv("AZURE_OPENAI_API_KEY", "env-key")
    store = InMemoryCredentialStore({URL: ("api-key", b"store-key")})
    auth = AuthenticationState(store, _settings())
    creds = await auth.authenticate()
    assert creds.api_key == "env-key"  # nosec B101
    assert auth.api_key_from_env  # nosec B101
    assert store.read_count == 0  # nosec B101
    assert auth.state is AuthState.AUTHENTICATED  # nosec B101


@pytest.mark.asyncio
async def test_store_key_used_when_env_unset(log_capture):
    store = InMemoryCredentialStore({URL: ("api-key", b"store-key")})
    auth = AuthenticationState(store, _settings())
    creds = await auth.authenticate()
    assert creds.api_key == "store-key"  # nosec B101
    assert creds.api_url == URL and creds.deployment_name == "gpt-4o"  # nosec B101
    assert not auth.api_key_from_env  # nosec B101
    resolved = [p for p in log_capture if p.get("event") == "auth.resolved"]
    assert resolved and resolved[-1]["source"] == "store"  # nosec B101
    assert "store-key" not in str(log_capture)  # nosec B101


@pytest.mark.asyncio
async def test_missing_key_raises_not_found():
    auth = AuthenticationState(InMemoryCredentialStore(), _settings())
    with pytest.raises(ProviderError) as info:
        await auth.authenticate()
    assert info.value.code is ErrorCode.CREDENTIALS_NOT_FOUND  # nosec B101
    assert auth.state is AuthState.UNAUTHENTICATED  # nosec B101


@pytest.mark.asyncio
async def test_missing_endpoint_skips_store_read():
    store = InMemoryCredentialStore({"": ("api-key", b"orphan")})
    auth = AuthenticationState(store, AzureSettings())
    with pytest.raises(ProviderError) as info:
        await auth.authenticate()
    assert info.value.code is ErrorCode.CREDENTIALS_NOT_FOUND  # nosec B101
    assert store.read_count == 0  # nosec B101
    assert auth.state is AuthState.UNAUTHENTICATED  # nosec B101


@pytest.mark.asyncio
async def test_non_utf8_secret_is_rejected():
    store = InMemoryCredentialStore({URL: ("api-key", b"\xff\xfe")})
    auth = AuthenticationState(store, _settings())
    with pytest.raises(ProviderError) as info:
        await auth.authenticate()
    assert info.value.code is ErrorCode.CREDENTIALS_NOT_FOUND  # nosec B101
    assert info.value.message == "invalid API key"  # nosec B101


@pytest.mark.asyncio
async def test_concurrent_authenticate_reads_store_once():
    store = _GatedStore({URL: ("api-key", b"k")})
    auth = AuthenticationState(store, _settings())
    first = asyncio.create_task(auth.authenticate())
    second = asyncio.create_task(auth.authenticate())
    await asyncio.sleep(0)
    assert auth.state is AuthState.AUTHENTICATING  # nosec B101
    store.gate.set()
    a, b = await asyncio.gather(first, second)
    assert a.api_key == b.api_key == "k"  # nosec B101
    assert store.read_count == 1  # nosec B101
    await auth.authenticate()
    assert store.read_count == 1  # nosec B101


@pytest.mark.asyncio
async def test_set_credentials_persists_and_authenticates():
    store = InMemoryCredentialStore()
    auth = AuthenticationState(store, _settings())
    states = []
    auth.subscribe(lambda state, creds: states.append((state, creds.api_key)))
    creds = await auth.set_credentials("new-key", URL + "/", "gpt-4o-mini")
    assert await store.read(URL) == ("api-key", b"new-key")  # nosec B101
    assert creds.api_url == URL  # nosec B101
    assert creds.deployment_name == "gpt-4o-mini"  # nosec B101
    assert creds.api_version == "2024-08-01-preview"  # nosec B101
    assert states == [(AuthState.AUTHENTICATED, "new-key")]  # nosec B101


@pytest.mark.asyncio
async def test_set_credentials_store_failure_propagates():
    auth = AuthenticationState(_BrokenStore(), _settings())
    with pytest.raises(OSError):
        await auth.set_credentials("new-key")
    assert auth.state is AuthState.UNAUTHENTICATED  # nosec B101
    assert auth.snapshot().api_key is None  # nosec B101


@pytest.mark.asyncio
async def test_set_credentials_requires_endpoint():
    auth = AuthenticationState(InMemoryCredentialStore(), AzureSettings())
    with pytest.raises(ProviderError) as info:
        await auth.set_credentials("k")
    assert info.value.code is ErrorCode.MISSING_CREDENTIAL  # nosec B101


@pytest.mark.asyncio
async def test_reset_completes_when_store_delete_fails(log_capture):
    auth = AuthenticationState(_BrokenStore(), _settings())
    auth._credentials = auth.snapshot().replace(api_key="k")
    auth._state = AuthState.AUTHENTICATED
    await auth.reset()
    assert auth.state is AuthState.UNAUTHENTICATED  # nosec B101
    assert auth.snapshot().api_key is None  # nosec B101
    assert auth.snapshot().api_url == URL  # nosec B101
    failures = [p for p in log_capture if p.get("event") == "auth.reset_store_failed"]
    assert failures and failures[0]["_level"] == "ERROR"  # nosec B101


@pytest.mark.asyncio
async def test_reset_removes_stored_key():
    store = InMemoryCredentialStore()
    auth = AuthenticationState(store, _settings())
    await auth.set_credentials("k")
    await auth.reset()
    assert URL not in store  # nosec B101
    with pytest.raises(ProviderError):
        await auth.authenticate()


@pytest.mark.asyncio
async def test_reset_during_authentication_wins():
    store = _GatedStore({URL: ("api-key", b"k")})
    auth = AuthenticationState(store, _settings())
    pending = asyncio.create_task(auth.authenticate())
    await asyncio.sleep(0)
    await auth.reset()
    store.gate.set()
    with pytest.raises(ProviderError) as info:
        await pending
    assert info.value.code is ErrorCode.CANCELLED  # nosec B101
    assert auth.state is AuthState.UNAUTHENTICATED  # nosec B101
    assert auth.snapshot().api_key is None  # nosec B101


@pytest.mark.asyncio
async def test_set_credentials_during_authentication_wins():
    store = _GatedStore({URL: ("api-key", b"old")})
    auth = AuthenticationState(store, _settings())
    pending = asyncio.create_task(auth.authenticate())
    await asyncio.sleep(0)
    await auth.set_credentials("fresh")
    store.gate.set()
    creds = await pending
    assert creds.api_key == "fresh"  # nosec B101
    assert auth.snapshot().api_key == "fresh"  # nosec B101


@pytest.mark.asyncio
async def test_apply_settings_keeps_key():
    auth = AuthenticationState(InMemoryCredentialStore(), _settings())
    await auth.set_credentials("k")
    auth.apply_settings(_settings(api_url="https://other.openai.azure.com", deployment_name="gpt-4.1"))
    creds = auth.snapshot()
    assert creds.api_key == "k"  # nosec B101
    assert creds.api_url == "https://other.openai.azure.com"  # nosec B101
    assert creds.deployment_name == "gpt-4.1"  # nosec B101
    assert auth.is_authenticated()  # nosec B101


@pytest.mark.asyncio
async def test_failing_listener_does_not_break_transition():
    auth = AuthenticationState(InMemoryCredentialStore(), _settings())

    def boom(state, creds):
        raise RuntimeError("listener bug")

    unsubscribe = auth.subscribe(boom)
    await auth.set_credentials("k")
    assert auth.is_authenticated()  # nosec B101
    unsubscribe()
    unsubscribe()
