"""
Map decoded stream events onto caller-facing completion events.

One :class:`EventMapper` serves one streaming session. Tool-call fragments are
merged into a per-session accumulator keyed by choice and tool-call index; the
accumulator never outlives the session.

Mapping rules:
- non-empty ``delta.content`` becomes a :class:`TextEvent`, verbatim;
- every tool-call chunk becomes a :class:`ToolCallDeltaEvent` and is merged
  into the accumulator (the first non-null ``id`` wins; name and argument
  fragments are appended);
- a non-null ``finish_reason`` closes that choice's tool calls and yields a
  :class:`DoneEvent`;
- events without choices yield nothing (their usage is remembered).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import AsyncIterable, AsyncIterator, Dict, List, Optional

from ..base.dto import StreamEvent
from ..base.errors import ErrorCode
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import CompletionEvent, DoneEvent, TextEvent, ToolCall, ToolCallDeltaEvent
from ..base.tokens import CanonicalUsage, extract_token_usage
from .decoder import StreamItem


@dataclass
class _PartialToolCall:
    id: Optional[str] = None
    name: str = ""
    arguments: str = ""


class EventMapper:
    """Stateful translator from :class:`StreamEvent` to :data:`CompletionEvent`."""

    def __init__(self, *, ctx: Optional[LogContext] = None, logger: Optional[logging.Logger] = None) -> None:
        self._ctx = ctx
        self._logger = logger or get_logger("providers.azure_openai.mapper")
        # choice index -> tool-call index -> partial call
        self._pending: Dict[int, Dict[int, _PartialToolCall]] = {}
        self._completed: List[ToolCall] = []
        self._usage: Optional[CanonicalUsage] = None
        self._done_seen = False
        self.skipped = 0

    @property
    def usage(self) -> Optional[CanonicalUsage]:
        """Last usage reported by the server, in canonical form."""
        return self._usage

    def completed_tool_calls(self) -> List[ToolCall]:
        """Tool calls closed so far, in the order they were completed."""
        return list(self._completed)

    def map_event(self, event: StreamEvent) -> List[CompletionEvent]:
        if event.usage is not None:
            self._usage = extract_token_usage(event.usage)
        out: List[CompletionEvent] = []
        for choice in event.choices:
            delta = choice.delta
            if delta.content:
                out.append(TextEvent(delta.content))
            for chunk in delta.tool_calls or []:
                partial = self._pending.setdefault(choice.index, {}).setdefault(chunk.index, _PartialToolCall())
                if partial.id is None and chunk.id:
                    partial.id = chunk.id
                name = (chunk.function.name if chunk.function else None) or ""
                arguments = (chunk.function.arguments if chunk.function else None) or ""
                partial.name += name
                partial.arguments += arguments
                out.append(
                    ToolCallDeltaEvent(
                        index=chunk.index,
                        id=partial.id,
                        name_fragment=name,
                        arguments_fragment=arguments,
                        choice_index=choice.index,
                    )
                )
            if choice.finish_reason is not None:
                self._close_choice(choice.index)
                self._done_seen = True
                out.append(DoneEvent(finish_reason=choice.finish_reason, usage=self._usage))
        return out

    def _close_choice(self, choice_index: int) -> None:
        for _, partial in sorted(self._pending.pop(choice_index, {}).items()):
            self._completed.append(ToolCall(id=partial.id or "", name=partial.name, arguments=partial.arguments))

    def _close_all(self) -> None:
        for choice_index in sorted(self._pending):
            self._close_choice(choice_index)

    async def map_stream(self, items: AsyncIterable[StreamItem]) -> AsyncIterator[CompletionEvent]:
        """Map a decoder sequence.

        Malformed chunks are logged and skipped; any other error item is raised.
        A final ``DoneEvent(None)`` is emitted when the server never sent a
        ``finish_reason``.
        """
        try:
            async for item in items:
                if item.error is not None:
                    if item.error.code is ErrorCode.MALFORMED_RESPONSE:
                        self.skipped += 1
                        normalized_log_event(
                            self._logger,
                            "stream.chunk_skipped",
                            self._ctx,
                            phase="mid_stream",
                            level=logging.WARNING,
                            error_code=item.error.code.value,
                            message=item.error.message,
                        )
                        continue
                    raise item.error
                for event in self.map_event(item.event):
                    yield event
            if not self._done_seen:
                self._close_all()
                self._done_seen = True
                yield DoneEvent(finish_reason=None, usage=self._usage)
        finally:
            self._pending.clear()
            aclose = getattr(items, "aclose", None)
            if aclose is not None:
                await aclose()


__all__ = ["EventMapper"]
