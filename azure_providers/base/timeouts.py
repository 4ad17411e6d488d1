"""Unified timeout configuration for the provider layer.

Centralizes the timeout values applied by the HTTP transport. Nothing else in
the package enforces deadlines: a caller that wants a wall-clock bound wraps
its own awaits.

Key Components
--------------
TimeoutConfig
    Dataclass capturing normalized timeout values. ``to_httpx`` renders it as
    an ``httpx.Timeout`` with the start timeout used for connecting and the
    stream timeout used as the idle read timeout between chunks.

get_timeout_config()
    Returns a process-cached configuration, parsing environment overrides on
    first use and whenever they change. Supported environment variables (all
    optional):
        PT_TIMEOUT_START_SECONDS
        PT_TIMEOUT_STREAM_SECONDS
        PT_TIMEOUT_HTTP_SECONDS

Values that are unset, unparsable, or not positive fall back to defaults.
"""
from __future__ import annotations

import os
from dataclasses import dataclass

import httpx


_ENV_VARS = ("PT_TIMEOUT_START_SECONDS", "PT_TIMEOUT_STREAM_SECONDS", "PT_TIMEOUT_HTTP_SECONDS")


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        start_timeout_seconds: Timeout for establishing the connection.
        stream_timeout_seconds: Idle timeout while waiting for the next chunk.
        http_timeout_seconds: Write and pool acquisition timeout.
    """

    start_timeout_seconds: float = 30.0
    stream_timeout_seconds: float = 60.0
    http_timeout_seconds: float = 30.0

    def to_httpx(self) -> httpx.Timeout:
        return httpx.Timeout(
            self.http_timeout_seconds,
            connect=self.start_timeout_seconds,
            read=self.stream_timeout_seconds,
        )


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float) -> float:
    """Read ``name`` as a positive float, returning ``default`` otherwise."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached :class:`TimeoutConfig`, refreshed when env overrides change."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    cur_guard = "/".join(os.getenv(name, "") for name in _ENV_VARS)
    if _CACHED is not None and _ENV_GUARD == cur_guard:
        return _CACHED
    _CACHED = TimeoutConfig(
        start_timeout_seconds=_parse_env_float("PT_TIMEOUT_START_SECONDS", 30.0),
        stream_timeout_seconds=_parse_env_float("PT_TIMEOUT_STREAM_SECONDS", 60.0),
        http_timeout_seconds=_parse_env_float("PT_TIMEOUT_HTTP_SECONDS", 30.0),
    )
    _ENV_GUARD = cur_guard
    return _CACHED


__all__ = [
    "TimeoutConfig",
    "get_timeout_config",
]
