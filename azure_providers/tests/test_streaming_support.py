"""CompletionStream lifecycle and event accumulation."""
from __future__ import annotations

import asyncio
import gc

import pytest

from azure_providers.base.limiter import RequestLimiter
from azure_providers.base.models import DoneEvent, TextEvent, ToolCall, ToolCallDeltaEvent
from azure_providers.base.streaming import CompletionStream, accumulate_events
from azure_providers.tests.utils import assert_true


class _Closable:
    def __init__(self) -> None:
        self.calls = 0

    async def aclose(self) -> None:
        self.calls += 1


async def _events(*events):
    for event in events:
        yield event


async def _failing():
    yield TextEvent("partial")
    raise RuntimeError("stream broke")


@pytest.mark.asyncio
async def test_exhaustion_releases_permit_once():
    limiter = RequestLimiter(1)
    permit = await limiter.acquire()
    closer = _Closable()
    stream = CompletionStream(_events(TextEvent("hi"), DoneEvent("stop")), permit=permit, on_close=closer.aclose)
    seen = [event async for event in stream]
    assert_true(seen == [TextEvent("hi"), DoneEvent("stop")], f"unexpected events: {seen}")
    assert_true(stream.closed, "stream closed after exhaustion")
    assert_true(stream.done_event == DoneEvent("stop"), "done event remembered")
    await stream.aclose()
    assert_true(closer.calls == 1, "on_close runs exactly once")
    assert_true(limiter.in_flight == 0, "permit released")


@pytest.mark.asyncio
async def test_close_without_iterating_releases_permit():
    limiter = RequestLimiter(1)
    closer = _Closable()
    stream = CompletionStream(_events(TextEvent("never")), permit=await limiter.acquire(), on_close=closer.aclose)
    async with stream:
        pass
    assert_true(limiter.in_flight == 0, "permit released on close")
    assert_true(closer.calls == 1, "response closed")
    with pytest.raises(StopAsyncIteration):
        await stream.__anext__()


@pytest.mark.asyncio
async def test_dropped_stream_releases_permit_and_closes():
    limiter = RequestLimiter(1)
    closer = _Closable()
    stream = CompletionStream(_events(TextEvent("a"), TextEvent("b")), permit=await limiter.acquire(), on_close=closer.aclose)
    assert_true(await stream.__anext__() == TextEvent("a"), "first event delivered")
    del stream
    gc.collect()
    for _ in range(3):
        await asyncio.sleep(0)
    assert_true(limiter.in_flight == 0, "permit released when the stream is collected")
    assert_true(closer.calls >= 1, "response close scheduled")


@pytest.mark.asyncio
async def test_iteration_error_releases_and_propagates():
    limiter = RequestLimiter(1)
    stream = CompletionStream(_failing(), permit=await limiter.acquire())
    with pytest.raises(RuntimeError):
        async for _ in stream:
            pass
    assert_true(stream.closed and limiter.in_flight == 0, "resources released after failure")


@pytest.mark.asyncio
async def test_accumulate_reassembles_tool_calls():
    events = _events(
        TextEvent("Let me check. "),
        ToolCallDeltaEvent(index=1, id="call_b", name_fragment="get_time", arguments_fragment="{}"),
        ToolCallDeltaEvent(index=0, id="call_a", name_fragment="get_", arguments_fragment='{"city"'),
        ToolCallDeltaEvent(index=0, id="call_a", name_fragment="weather", arguments_fragment=': "Oslo"}'),
        DoneEvent("tool_calls", usage={"prompt": 5, "completion": 7, "total": 12}),
    )
    response = await accumulate_events(events, model="gpt-4o")
    assert_true(response.text == "Let me check. ", "text concatenated")
    assert_true([c.id for c in response.tool_calls] == ["call_a", "call_b"], "ordered by index")
    assert_true(response.tool_calls[0].name == "get_weather", "name fragments joined")
    assert_true(response.tool_calls[0].arguments == '{"city": "Oslo"}', "arguments joined")
    assert_true(response.finish_reason == "tool_calls", "finish reason kept")
    assert_true(response.usage["total"] == 12, "usage kept")
    assert_true(response.model == "gpt-4o", "model recorded")


@pytest.mark.asyncio
async def test_accumulate_keeps_choices_apart():
    events = _events(
        ToolCallDeltaEvent(index=0, id="call_a", name_fragment="fa", arguments_fragment="{}"),
        ToolCallDeltaEvent(index=0, id="call_b", name_fragment="fb", arguments_fragment="[]", choice_index=1),
        DoneEvent("tool_calls"),
    )
    response = await accumulate_events(events)
    assert_true(
        response.tool_calls == [
            ToolCall(id="call_a", name="fa", arguments="{}"),
            ToolCall(id="call_b", name="fb", arguments="[]"),
        ],
        f"calls from different choices must not merge: {response.tool_calls}",
    )
