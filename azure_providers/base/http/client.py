"""Shared async HTTP client pool and the httpx-backed transport.

Purpose:
    Provide a centralized pool of reusable ``httpx.AsyncClient`` instances so
    repeated requests to the same Azure resource share connections. Timeouts
    derive exclusively from :func:`get_timeout_config`.

External dependencies:
    - ``httpx`` for the underlying async HTTP client.

Lifecycle & cleanup:
    - Clients are cached by a composite key of ``base_url`` and ``purpose``.
    - Async clients cannot be closed from an ``atexit`` hook; owners call
      :func:`aclose_all_clients` (or ``AzureOpenAIProvider.aclose``) on
      shutdown. Tests do the same in teardown.
"""

from __future__ import annotations

import threading
from typing import Dict, Mapping, Optional, Tuple

import httpx

from ..timeouts import get_timeout_config

# Internal cache keyed by (base_url, purpose)
_CLIENTS: Dict[Tuple[Optional[str], str], httpx.AsyncClient] = {}
_LOCK = threading.RLock()


def get_httpx_client(base_url: Optional[str], purpose: str) -> httpx.AsyncClient:
    """Return a pooled ``httpx.AsyncClient`` for the given base URL and purpose.

    The first request for a key creates a client configured with timeouts from
    :func:`get_timeout_config`. Subsequent requests reuse the same instance
    until it is closed.
    """
    key = (base_url, purpose)
    client = _CLIENTS.get(key)
    if client is not None and not client.is_closed:
        return client

    with _LOCK:
        client = _CLIENTS.get(key)
        if client is not None and not client.is_closed:
            return client
        timeout = get_timeout_config().to_httpx()
        client = (
            httpx.AsyncClient(base_url=base_url, timeout=timeout)
            if base_url
            else httpx.AsyncClient(timeout=timeout)
        )
        _CLIENTS[key] = client
        return client


async def aclose_all_clients() -> None:
    """Close and clear all pooled HTTP clients."""
    with _LOCK:
        clients = list(_CLIENTS.values())
        _CLIENTS.clear()
    for c in clients:
        await c.aclose()


class HttpxTransport:
    """:class:`~azure_providers.base.interfaces.Transport` backed by ``httpx``.

    Responses are opened in streaming mode; the returned ``httpx.Response``
    already satisfies ``TransportResponse`` (``status_code``, ``aiter_bytes``,
    ``aread``, ``aclose``).

    Parameters:
        client: Explicit client to use. When omitted a pooled client for
            ``purpose`` is fetched lazily on each send.
        purpose: Pool discriminator.
    """

    def __init__(self, client: Optional[httpx.AsyncClient] = None, purpose: str = "azure_openai") -> None:
        self._client = client
        self._purpose = purpose

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is not None:
            return self._client
        return get_httpx_client(None, self._purpose)

    async def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: bytes,
    ) -> httpx.Response:
        client = self._get_client()
        request = client.build_request(method, url, headers=dict(headers), content=body)
        return await client.send(request, stream=True)

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()


__all__ = ["get_httpx_client", "aclose_all_clients", "HttpxTransport"]
