"""
Collaborator interfaces (Protocols) for the adapter.

Re-exports the single-class modules under
``azure_providers.base.interfaces_parts`` to keep imports stable.
"""

from __future__ import annotations

from .interfaces_parts import CredentialStore, Transport, TransportResponse

__all__ = [
    "CredentialStore",
    "Transport",
    "TransportResponse",
]
