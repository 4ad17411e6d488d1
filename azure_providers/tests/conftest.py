"""Pytest configuration for the azure_providers test suite.

Fixtures:
- ``_isolated_env`` (autouse): strips Azure env vars and the config-file
  cache so host settings never leak into tests.
- ``log_capture``: collects structured log payloads from the shared
  ``providers`` logger (which does not propagate to root).
- ``sse``: builds an SSE byte body from payload dicts or raw strings.
- ``azure_http``: ``httpx.MockTransport`` backed fake endpoint that records
  requests and replays queued responses.
- ``settings`` / ``provider``: a provider wired to the fake endpoint.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, List, Union

import httpx
import pytest

from azure_providers.azure_openai import AvailableModel, AzureOpenAIProvider, AzureSettings
from azure_providers.base.http import HttpxTransport
from azure_providers.base.logging import get_logger
from azure_providers.base.memory import InMemoryCredentialStore
from azure_providers.config import reset_config_cache

_ENV_VARS = (
    "AZURE_OPENAI_API_KEY",
    "AZURE_API_KEY",
    "AZURE_OPENAI_ENDPOINT",
    "AZURE_OPENAI_DEPLOYMENT",
    "AZURE_OPENAI_API_VERSION",
    "PROVIDERS_CONFIG_FILE",
    "PT_TIMEOUT_START_SECONDS",
    "PT_TIMEOUT_STREAM_SECONDS",
    "PT_TIMEOUT_HTTP_SECONDS",
)

ENDPOINT = "https://unit-test.openai.azure.com"


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_config_cache()
    yield
    reset_config_cache()


class _PayloadHandler(logging.Handler):
    """Capture JSON log payloads (with their level) for assertions."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.payloads: List[Dict[str, Any]] = []

    def emit(self, record: logging.LogRecord) -> None:
        try:
            payload = json.loads(record.getMessage())
        except ValueError:
            payload = {"msg": record.getMessage()}
        payload["_level"] = record.levelname
        self.payloads.append(payload)


@pytest.fixture()
def log_capture():
    logger = get_logger()
    previous = logger.level
    logger.setLevel(logging.DEBUG)
    handler = _PayloadHandler()
    logger.addHandler(handler)
    try:
        yield handler.payloads
    finally:
        logger.removeHandler(handler)
        logger.setLevel(previous)


def _sse_body(*items: Union[str, Dict[str, Any]], done: bool = True) -> bytes:
    lines = []
    for item in items:
        data = item if isinstance(item, str) else json.dumps(item)
        lines.append(f"data: {data}\n\n")
    if done:
        lines.append("data: [DONE]\n\n")
    return "".join(lines).encode("utf-8")


@pytest.fixture()
def sse() -> Callable[..., bytes]:
    return _sse_body


def chunk(content: str | None = None, *, finish_reason: str | None = None, tool_calls=None, usage=None) -> Dict[str, Any]:
    delta: Dict[str, Any] = {}
    if content is not None:
        delta["content"] = content
    if tool_calls is not None:
        delta["tool_calls"] = tool_calls
    data: Dict[str, Any] = {
        "model": "gpt-4o",
        "choices": [{"index": 0, "delta": delta, "finish_reason": finish_reason}],
    }
    if usage is not None:
        data["usage"] = usage
    return data


@pytest.fixture()
def make_chunk() -> Callable[..., Dict[str, Any]]:
    return chunk


class FakeAzure:
    """Records requests and answers with queued ``httpx.Response`` objects or exceptions."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.responses: List[Union[httpx.Response, Exception]] = []
        self.client = httpx.AsyncClient(transport=httpx.MockTransport(self._handle))
        self.transport = HttpxTransport(client=self.client)

    def queue(self, response: Union[httpx.Response, Exception]) -> None:
        self.responses.append(response)

    def queue_sse(self, body: bytes, status: int = 200) -> None:
        self.queue(httpx.Response(status, content=body, headers={"content-type": "text/event-stream"}))

    def queue_json(self, data: Any, status: int = 200) -> None:
        self.queue(httpx.Response(status, json=data))

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def last_body(self) -> Dict[str, Any]:
        return json.loads(self.requests[-1].content)


@pytest.fixture()
def azure_http() -> FakeAzure:
    return FakeAzure()


@pytest.fixture()
def settings() -> AzureSettings:
    return AzureSettings(
        api_url=ENDPOINT + "/",
        deployment_name="gpt-4o-default",
        api_version="2024-08-01-preview",
        available_models=[
            AvailableModel(
                name="gpt-4o",
                deployment_name="gpt-4o-prod",
                display_name="GPT-4o (prod)",
                max_tokens=128000,
                max_output_tokens=4096,
                supports_parallel_tool_calls=True,
            ),
            AvailableModel(
                name="o1",
                deployment_name="o1",
                max_tokens=200000,
                max_completion_tokens=32768,
            ),
            AvailableModel(
                name="o3-mini",
                deployment_name="o3-mini",
                max_tokens=200000,
                max_completion_tokens=65536,
            ),
        ],
    )


@pytest.fixture()
def store() -> InMemoryCredentialStore:
    return InMemoryCredentialStore()


@pytest.fixture()
def provider(settings: AzureSettings, store: InMemoryCredentialStore, azure_http: FakeAzure) -> AzureOpenAIProvider:
    return AzureOpenAIProvider(settings, store=store, transport=azure_http.transport)
