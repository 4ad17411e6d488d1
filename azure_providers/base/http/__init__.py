"""HTTP utilities package for providers.

Exposes pooled ``httpx.AsyncClient`` instances and the default transport.
"""

from .client import HttpxTransport, aclose_all_clients, get_httpx_client

__all__ = ["HttpxTransport", "aclose_all_clients", "get_httpx_client"]
