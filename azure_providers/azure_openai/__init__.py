"""Azure OpenAI provider package.

Public surface:
    - :class:`AzureOpenAIProvider`: orchestration and public API
    - :class:`AzureSettings`, :class:`SettingsChannel`: configuration
    - :class:`AuthenticationState`, :class:`AuthState`: credential lifecycle
    - :func:`translate`, :class:`EventMapper`, decoder helpers: protocol pieces
"""

from .auth import AuthenticationState, AuthState
from .client import AzureOpenAIProvider
from .decoder import StreamItem, adapt_response_to_stream, decode_lines, decode_response, decode_stream
from .event_mapper import EventMapper
from .payload import AzurePayload
from .settings import AvailableModel, AzureSettings, SettingsChannel
from .translator import build_chat_completions_url, translate

__all__ = [
    "AuthenticationState",
    "AuthState",
    "AzureOpenAIProvider",
    "StreamItem",
    "adapt_response_to_stream",
    "decode_lines",
    "decode_response",
    "decode_stream",
    "EventMapper",
    "AzurePayload",
    "AvailableModel",
    "AzureSettings",
    "SettingsChannel",
    "build_chat_completions_url",
    "translate",
]
