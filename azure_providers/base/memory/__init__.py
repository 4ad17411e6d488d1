"""In-process reference implementations of collaborator interfaces."""

from .in_memory_credential_store import InMemoryCredentialStore

__all__ = ["InMemoryCredentialStore"]
