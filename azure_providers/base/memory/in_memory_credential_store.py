"""In-memory implementation of CredentialStore.

Reference implementation keyed by endpoint URL. Suitable for tests and for
embedding hosts that manage persistence themselves. Counters expose how often
each operation ran so callers can verify access patterns.
"""

from __future__ import annotations

import asyncio
from typing import Dict, Optional, Tuple


class InMemoryCredentialStore:
    """Dictionary-backed credential store.

    Thread safety: single event loop only. Operations yield to the loop once
    so concurrent callers interleave the way they would with a real backend.
    """

    def __init__(self, initial: Optional[Dict[str, Tuple[str, bytes]]] = None) -> None:
        self._entries: Dict[str, Tuple[str, bytes]] = dict(initial or {})
        self.read_count = 0
        self.write_count = 0
        self.delete_count = 0

    async def read(self, url: str) -> Optional[Tuple[str, bytes]]:
        self.read_count += 1
        await asyncio.sleep(0)
        return self._entries.get(url)

    async def write(self, url: str, label: str, secret: bytes) -> None:
        self.write_count += 1
        await asyncio.sleep(0)
        self._entries[url] = (label, bytes(secret))

    async def delete(self, url: str) -> None:
        self.delete_count += 1
        await asyncio.sleep(0)
        self._entries.pop(url, None)

    def __contains__(self, url: object) -> bool:
        return url in self._entries

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["InMemoryCredentialStore"]
