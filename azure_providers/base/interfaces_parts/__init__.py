"""Protocols split into single-class modules."""

from .credential_store import CredentialStore
from .transport import Transport, TransportResponse

__all__ = ["CredentialStore", "Transport", "TransportResponse"]
