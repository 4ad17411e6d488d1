"""
Stream decoding for Azure OpenAI chat completions.

Purpose:
- Turn a server-sent-events byte stream into a sequence of
  :class:`StreamItem` values, each carrying either a decoded
  :class:`StreamEvent` or a classified :class:`ProviderError`.
- Synthesize the same event shape from a complete JSON body for models that
  reject ``stream=true``.

Line handling:
- Bytes are decoded with an incremental UTF-8 decoder, so multi-byte
  characters split across network chunks survive intact.
- Each line is trimmed; blank lines and lines without the literal ``"data: "``
  prefix are dropped; ``data: [DONE]`` ends the sequence.

Failure semantics:
- Unparsable JSON yields a ``MALFORMED_RESPONSE`` item and decoding continues.
- An ``{"error": {...}}`` payload yields an ``HTTP`` item carrying the server
  message and decoding continues; the consumer decides whether it is fatal.
- A transport failure while reading yields one ``NETWORK`` item and ends the
  sequence.
- In the non-streaming path a malformed body or an empty ``choices`` list is
  raised, not yielded.
"""

from __future__ import annotations

import codecs
import json
from dataclasses import dataclass
from typing import AsyncIterable, AsyncIterator, Optional, Union

import httpx
from pydantic import ValidationError

from ..base.constants import SSE_DATA_PREFIX, SSE_DONE_SENTINEL
from ..base.dto import AzureResponse, ChoiceDelta, FunctionChunk, MessageDelta, StreamEvent, ToolCallChunk
from ..base.errors import (
    ErrorCode,
    ProviderError,
    classify_response,
    classify_stream_error,
    parse_error_envelope,
    to_provider_error,
)
from ..base.interfaces import TransportResponse
from ..config.defaults import AZURE_OPENAI_PROVIDER_ID


@dataclass(frozen=True)
class StreamItem:
    """One decoder output: exactly one of ``event`` or ``error`` is set."""

    event: Optional[StreamEvent] = None
    error: Optional[ProviderError] = None

    @property
    def is_error(self) -> bool:
        return self.error is not None


async def iter_lines(chunks: AsyncIterable[bytes]) -> AsyncIterator[str]:
    """Split a byte stream into text lines (without terminators)."""
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    buffer = ""
    async for chunk in chunks:
        buffer += decoder.decode(chunk)
        *lines, buffer = buffer.split("\n")
        for line in lines:
            yield line
    buffer += decoder.decode(b"", final=True)
    if buffer:
        yield buffer


def parse_chunk(data: str, *, model: Optional[str] = None) -> StreamItem:
    """Decode the payload of one ``data:`` line."""
    try:
        payload = json.loads(data)
    except json.JSONDecodeError as exc:
        return StreamItem(error=_malformed(f"Failed to parse Azure OpenAI stream chunk: {exc}", data, model))
    if isinstance(payload, dict) and "error" in payload:
        envelope = parse_error_envelope(payload)
        if envelope is not None:
            return StreamItem(
                error=classify_stream_error(envelope, provider=AZURE_OPENAI_PROVIDER_ID, model=model)
            )
    try:
        return StreamItem(event=StreamEvent.model_validate(payload))
    except ValidationError as exc:
        return StreamItem(error=_malformed(f"Unexpected Azure OpenAI stream chunk: {exc}", data, model))


def _malformed(message: str, raw: Union[str, bytes], model: Optional[str]) -> ProviderError:
    return ProviderError(
        code=ErrorCode.MALFORMED_RESPONSE,
        message=message,
        provider=AZURE_OPENAI_PROVIDER_ID,
        model=model,
        raw=raw,
    )


async def decode_lines(lines: AsyncIterable[str], *, model: Optional[str] = None) -> AsyncIterator[StreamItem]:
    """Decode SSE text lines into stream items."""
    try:
        async for raw_line in lines:
            line = raw_line.strip()
            if not line or not line.startswith(SSE_DATA_PREFIX):
                continue
            data = line[len(SSE_DATA_PREFIX):]
            if data == SSE_DONE_SENTINEL:
                return
            yield parse_chunk(data, model=model)
    except (httpx.TransportError, OSError) as exc:
        yield StreamItem(error=to_provider_error(exc, provider=AZURE_OPENAI_PROVIDER_ID, model=model))


async def decode_stream(response: TransportResponse, *, model: Optional[str] = None) -> AsyncIterator[StreamItem]:
    """Decode a streaming HTTP response. The response is closed when the generator ends or is closed."""
    try:
        async for item in decode_lines(iter_lines(response.aiter_bytes()), model=model):
            yield item
    finally:
        await response.aclose()


def adapt_response_to_stream(response: AzureResponse) -> StreamEvent:
    """Convert a complete response into one equivalent stream event.

    ``content=None`` (or empty) produces no text; each tool call becomes a
    :class:`ToolCallChunk` indexed by its position. ``finish_reason`` and
    ``usage`` are preserved.
    """
    choices = []
    for choice in response.choices:
        message = choice.message
        tool_chunks = [
            ToolCallChunk(
                index=position,
                id=call.id,
                function=FunctionChunk(name=call.function.name, arguments=call.function.arguments),
            )
            for position, call in enumerate(message.tool_calls or [])
        ]
        choices.append(
            ChoiceDelta(
                index=choice.index,
                delta=MessageDelta(
                    role=message.role,
                    content=message.content or None,
                    tool_calls=tool_chunks or None,
                ),
                finish_reason=choice.finish_reason,
            )
        )
    return StreamEvent(model=response.model, choices=choices, usage=response.usage)


def decode_response(status: int, body: Union[str, bytes], *, model: Optional[str] = None) -> StreamEvent:
    """Decode a non-streaming response body into a single stream event.

    Raises:
        ProviderError: ``HTTP`` for non-2xx statuses, ``MALFORMED_RESPONSE`` for
            an unparsable body, ``EMPTY_CHOICES`` when ``choices`` is empty.
    """
    if not 200 <= status < 300:
        raise classify_response(status, body, provider=AZURE_OPENAI_PROVIDER_ID, model=model)
    try:
        parsed = AzureResponse.model_validate_json(body)
    except ValidationError as exc:
        raise _malformed(f"Failed to parse Azure OpenAI response: {exc}", body, model) from exc
    if not parsed.choices:
        text = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body
        raise ProviderError(
            code=ErrorCode.EMPTY_CHOICES,
            message=f"Azure OpenAI response contained no choices. Response body: {text}",
            provider=AZURE_OPENAI_PROVIDER_ID,
            model=model,
            raw=text,
        )
    return adapt_response_to_stream(parsed)


async def single_event(event: StreamEvent) -> AsyncIterator[StreamItem]:
    """Yield ``event`` as the only item of a sequence."""
    yield StreamItem(event=event)


__all__ = [
    "StreamItem",
    "iter_lines",
    "parse_chunk",
    "decode_lines",
    "decode_stream",
    "adapt_response_to_stream",
    "decode_response",
    "single_event",
]
