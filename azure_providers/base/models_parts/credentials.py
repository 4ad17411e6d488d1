"""
Credentials snapshot held by the authentication state machine.

Instances are frozen; updates go through :meth:`Credentials.replace` so readers
holding an older snapshot never observe a half-applied change.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Credentials:
    """Connection parameters for one Azure resource.

    Attributes:
        api_key: Secret sent in the ``api-key`` header.
        api_url: Resource base URL (``https://<resource>.openai.azure.com``).
        deployment_name: Default deployment for models without their own.
        api_version: ``api-version`` query parameter.
    """

    api_key: Optional[str] = None
    api_url: Optional[str] = None
    deployment_name: Optional[str] = None
    api_version: Optional[str] = None

    def replace(self, **changes: Any) -> "Credentials":
        return replace(self, **changes)

    def has_key(self) -> bool:
        return bool(self.api_key)

    def to_dict(self) -> Dict[str, Any]:
        """Return a dictionary with the key masked."""
        return {
            "api_key": "***" if self.api_key else None,
            "api_url": self.api_url,
            "deployment_name": self.deployment_name,
            "api_version": self.api_version,
        }

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return (
            f"Credentials(api_key={'***' if self.api_key else None}, api_url={self.api_url!r}, "
            f"deployment_name={self.deployment_name!r}, api_version={self.api_version!r})"
        )


__all__ = ["Credentials"]
