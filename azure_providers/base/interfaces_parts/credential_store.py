"""CredentialStore Protocol (single-class module).

Async secret storage keyed by endpoint URL. Persistent backends (OS keychain,
vault) live outside this package; :class:`InMemoryCredentialStore` is the
bundled implementation.
"""

from __future__ import annotations

from typing import Optional, Protocol, Tuple, runtime_checkable


@runtime_checkable
class CredentialStore(Protocol):
    """Interface for reading, writing and deleting one secret per URL."""

    async def read(self, url: str) -> Optional[Tuple[str, bytes]]:  # pragma: no cover - interface
        """Return ``(label, secret_bytes)`` stored for ``url`` or ``None``.

        Secrets are raw bytes; callers validate the encoding.
        """
        ...

    async def write(self, url: str, label: str, secret: bytes) -> None:  # pragma: no cover - interface
        """Store ``secret`` for ``url`` under ``label``, replacing any existing entry."""
        ...

    async def delete(self, url: str) -> None:  # pragma: no cover - interface
        """Remove the entry for ``url``. Deleting a missing entry is not an error."""
        ...


__all__ = ["CredentialStore"]
