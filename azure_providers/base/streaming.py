"""Streaming primitives for the provider layer.

:class:`CompletionStream` is the async iterator handed to callers of
``stream_completion``. It owns the resources behind a streaming session (the
open HTTP response and the limiter permit) and releases them exactly once, when
the events are exhausted, when iteration fails, or when the caller closes it.
Closing a stream that was never iterated still releases everything. A stream
that is dropped without being closed (for example after ``break`` out of
``async for``) gives its permit back when it is garbage collected.

:func:`accumulate_events` folds a completed event sequence into a
:class:`ChatResponse`.
"""

from __future__ import annotations

import asyncio
from typing import AsyncIterator, Awaitable, Callable, Dict, List, Optional, Tuple

from .limiter import Permit
from .models import ChatResponse, CompletionEvent, DoneEvent, TextEvent, ToolCall, ToolCallDeltaEvent


class CompletionStream:
    """Cancellable async iterator over :data:`CompletionEvent` objects.

    Usable directly (``async for``) or as an async context manager, which
    guarantees ``aclose`` on exit.
    """

    def __init__(
        self,
        events: AsyncIterator[CompletionEvent],
        *,
        permit: Optional[Permit] = None,
        on_close: Optional[Callable[[], Awaitable[None]]] = None,
    ) -> None:
        self._events = events
        self._permit = permit
        self._on_close = on_close
        self._closed = False
        self._done: Optional[DoneEvent] = None

    def __aiter__(self) -> "CompletionStream":
        return self

    async def __anext__(self) -> CompletionEvent:
        if self._closed:
            raise StopAsyncIteration
        try:
            event = await self._events.__anext__()
        except BaseException:
            await self.aclose()
            raise
        if isinstance(event, DoneEvent):
            self._done = event
        return event

    async def aclose(self) -> None:
        """Stop the session and release its resources. Safe to call repeatedly."""
        if self._closed:
            return
        self._closed = True
        try:
            aclose = getattr(self._events, "aclose", None)
            if aclose is not None:
                await aclose()
        finally:
            try:
                if self._on_close is not None:
                    await self._on_close()
            finally:
                if self._permit is not None:
                    self._permit.release()

    def __del__(self) -> None:
        # Abandoned without aclose: free the slot now, close the response on the loop.
        if self._closed:
            return
        self._closed = True
        if self._permit is not None:
            self._permit.release()
        if self._on_close is not None:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                return
            loop.create_task(self._on_close())

    async def __aenter__(self) -> "CompletionStream":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def done_event(self) -> Optional[DoneEvent]:
        """The last :class:`DoneEvent` observed, if any."""
        return self._done


async def accumulate_events(events: AsyncIterator[CompletionEvent], *, model: Optional[str] = None) -> ChatResponse:
    """Drain ``events`` into a :class:`ChatResponse`.

    Text fragments are concatenated; tool-call fragments are reassembled by
    choice and tool-call index; the last ``DoneEvent`` supplies
    ``finish_reason`` and ``usage``.
    Errors raised by the iterator propagate.
    """
    text_parts: List[str] = []
    calls: Dict[Tuple[int, int], Dict[str, str]] = {}
    finish_reason: Optional[str] = None
    usage = None
    async for event in events:
        if isinstance(event, TextEvent):
            text_parts.append(event.text)
        elif isinstance(event, ToolCallDeltaEvent):
            acc = calls.setdefault((event.choice_index, event.index), {"id": "", "name": "", "arguments": ""})
            if event.id and not acc["id"]:
                acc["id"] = event.id
            acc["name"] += event.name_fragment
            acc["arguments"] += event.arguments_fragment
        elif isinstance(event, DoneEvent):
            finish_reason = event.finish_reason
            if event.usage is not None:
                usage = event.usage
    tool_calls = [
        ToolCall(id=acc["id"], name=acc["name"], arguments=acc["arguments"])
        for _, acc in sorted(calls.items())
    ]
    return ChatResponse(
        text="".join(text_parts),
        tool_calls=tool_calls,
        finish_reason=finish_reason,
        usage=usage,
        model=model,
    )


__all__ = ["CompletionStream", "accumulate_events"]
