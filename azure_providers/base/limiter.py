"""Per-provider admission control for in-flight HTTP requests.

:class:`RequestLimiter` caps how many requests a provider instance has open at
once. Waiters are admitted in arrival order. A :class:`Permit` is held for the
whole life of a streamed response, not just the initial request, and is
released exactly once when the stream ends, fails, or is closed by the
consumer.
"""
from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator

from ..config.defaults import AZURE_OPENAI_MAX_CONCURRENT_REQUESTS


class Permit:
    """One admission slot. ``release`` is idempotent."""

    __slots__ = ("_limiter", "_released")

    def __init__(self, limiter: "RequestLimiter") -> None:
        self._limiter = limiter
        self._released = False

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> None:
        if self._released:
            return
        self._released = True
        self._limiter._release()


class RequestLimiter:
    """FIFO-fair concurrency cap backed by ``asyncio.Semaphore``."""

    def __init__(self, limit: int = AZURE_OPENAI_MAX_CONCURRENT_REQUESTS) -> None:
        if limit < 1:
            raise ValueError("limit must be >= 1")
        self._limit = limit
        self._semaphore = asyncio.Semaphore(limit)
        self._in_flight = 0

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def in_flight(self) -> int:
        return self._in_flight

    async def acquire(self) -> Permit:
        """Wait for a free slot and return its permit."""
        await self._semaphore.acquire()
        self._in_flight += 1
        return Permit(self)

    def _release(self) -> None:
        self._in_flight -= 1
        self._semaphore.release()

    @asynccontextmanager
    async def hold(self) -> AsyncIterator[Permit]:
        """Hold a permit for the duration of the ``async with`` block."""
        permit = await self.acquire()
        try:
            yield permit
        finally:
            permit.release()


__all__ = ["Permit", "RequestLimiter"]
