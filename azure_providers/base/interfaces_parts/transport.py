"""Transport and TransportResponse Protocols.

The provider never touches an HTTP library directly; it sends requests through
a :class:`Transport`. The bundled :class:`~azure_providers.base.http.HttpxTransport`
uses ``httpx.AsyncClient``; tests substitute ``httpx.MockTransport`` or a
hand-written fake.
"""

from __future__ import annotations

from typing import AsyncIterator, Mapping, Protocol, runtime_checkable


@runtime_checkable
class TransportResponse(Protocol):
    """A response whose body has not been consumed yet."""

    @property
    def status_code(self) -> int:  # pragma: no cover - interface
        ...

    def aiter_bytes(self) -> AsyncIterator[bytes]:  # pragma: no cover - interface
        """Yield body chunks as they arrive."""
        ...

    async def aread(self) -> bytes:  # pragma: no cover - interface
        """Read and return the whole body."""
        ...

    async def aclose(self) -> None:  # pragma: no cover - interface
        """Release the connection without draining the body."""
        ...


@runtime_checkable
class Transport(Protocol):
    """Sends one HTTP request and returns a streaming response."""

    async def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: bytes,
    ) -> TransportResponse:  # pragma: no cover - interface
        """Send the request. Transport failures raise; HTTP errors do not."""
        ...


__all__ = ["Transport", "TransportResponse"]
