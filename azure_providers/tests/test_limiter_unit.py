"""Admission limiter tests: cap, FIFO admission and idempotent release."""
from __future__ import annotations

import asyncio

import pytest

from azure_providers.base.limiter import RequestLimiter


def test_limit_must_be_positive():
    with pytest.raises(ValueError):
        RequestLimiter(0)


@pytest.mark.asyncio
async def test_waiters_admitted_in_arrival_order():
    limiter = RequestLimiter(1)
    first = await limiter.acquire()
    order = []

    async def waiter(name: str) -> None:
        permit = await limiter.acquire()
        order.append(name)
        permit.release()

    tasks = [asyncio.create_task(waiter(n)) for n in ("a", "b", "c")]
    await asyncio.sleep(0)
    assert limiter.in_flight == 1  # nosec B101
    assert order == []  # nosec B101
    first.release()
    await asyncio.gather(*tasks)
    assert order == ["a", "b", "c"]  # nosec B101
    assert limiter.in_flight == 0  # nosec B101


@pytest.mark.asyncio
async def test_release_is_idempotent():
    limiter = RequestLimiter(2)
    permit = await limiter.acquire()
    permit.release()
    permit.release()
    assert permit.released  # nosec B101
    assert limiter.in_flight == 0  # nosec B101
    # Double release must not grow capacity beyond the limit.
    held = [await limiter.acquire(), await limiter.acquire()]
    blocked = asyncio.create_task(limiter.acquire())
    await asyncio.sleep(0)
    assert not blocked.done()  # nosec B101
    held[0].release()
    (await blocked).release()
    held[1].release()


@pytest.mark.asyncio
async def test_hold_releases_on_error():
    limiter = RequestLimiter(1)
    with pytest.raises(RuntimeError):
        async with limiter.hold():
            assert limiter.in_flight == 1  # nosec B101
            raise RuntimeError("boom")
    assert limiter.in_flight == 0  # nosec B101
