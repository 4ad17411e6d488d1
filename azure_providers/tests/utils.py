"""Shared testing utilities for the provider test suite.

Exports:
    - assert_true(condition: bool, message: str) -> None
    - collect(aiterable) -> list: drain an async iterator into a list.
    - lines_from(*lines) / chunks_from(*chunks): async iterators over fixed items.
"""
from __future__ import annotations

from typing import AsyncIterable, AsyncIterator, List, TypeVar

T = TypeVar("T")


def assert_true(condition: bool, message: str) -> None:
    """Raise AssertionError with the provided message if condition is False."""
    if not condition:
        raise AssertionError(message)


async def collect(items: AsyncIterable[T]) -> List[T]:
    return [item async for item in items]


async def lines_from(*lines: str) -> AsyncIterator[str]:
    for line in lines:
        yield line


async def chunks_from(*chunks: bytes) -> AsyncIterator[bytes]:
    for chunk in chunks:
        yield chunk
