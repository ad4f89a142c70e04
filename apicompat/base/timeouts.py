"""Unified timeout configuration for compatibility probes.

This module centralizes the timeout values used by the HTTP transport and the
SSE reader so that no call site carries its own numeric literals.

Key Components
--------------
TimeoutConfig
    Frozen dataclass capturing normalized timeout values in seconds.

get_timeout_config()
    Returns a process-cached configuration, parsing environment overrides on
    first use and again only when one of them changes. Supported environment
    variables (all optional, positive floats):
        APICOMPAT_TIMEOUT_HTTP_SECONDS
        APICOMPAT_TIMEOUT_STREAM_SECONDS
        APICOMPAT_TIMEOUT_CONNECT_SECONDS

to_httpx_timeout(cfg)
    Builds the ``httpx.Timeout`` used by pooled clients.

Failure Modes
-------------
Invalid or non-positive values fall back to the defaults silently; timeouts
are an operational knob, not user input.
"""
from __future__ import annotations

import os
from dataclasses import dataclass

import httpx

from ..config.defaults import (
    CONNECT_TIMEOUT_SECONDS,
    HTTP_TIMEOUT_SECONDS,
    STREAM_TIMEOUT_SECONDS,
)

HTTP_TIMEOUT_ENV = "APICOMPAT_TIMEOUT_HTTP_SECONDS"
STREAM_TIMEOUT_ENV = "APICOMPAT_TIMEOUT_STREAM_SECONDS"
CONNECT_TIMEOUT_ENV = "APICOMPAT_TIMEOUT_CONNECT_SECONDS"


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        http_timeout_seconds: Per-operation read/write timeout for a single
            request, and the per-chunk read timeout while streaming.
        stream_timeout_seconds: Overall wall-clock budget for consuming one
            SSE stream, checked between lines.
        connect_timeout_seconds: Timeout for establishing the TCP/TLS
            connection.
    """

    http_timeout_seconds: float = HTTP_TIMEOUT_SECONDS
    stream_timeout_seconds: float = STREAM_TIMEOUT_SECONDS
    connect_timeout_seconds: float = CONNECT_TIMEOUT_SECONDS


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
    """Return the process-cached :class:`TimeoutConfig`.

    The cache is refreshed when any of the environment overrides changes, so
    tests can adjust them with ``monkeypatch.setenv``.
    """
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    cur_guard = "/".join(
        os.getenv(name, "") for name in (HTTP_TIMEOUT_ENV, STREAM_TIMEOUT_ENV, CONNECT_TIMEOUT_ENV)
    )
    if _CACHED is not None and _ENV_GUARD == cur_guard:
        return _CACHED

    _CACHED = TimeoutConfig(
        http_timeout_seconds=_parse_env_float(HTTP_TIMEOUT_ENV, HTTP_TIMEOUT_SECONDS),
        stream_timeout_seconds=_parse_env_float(STREAM_TIMEOUT_ENV, STREAM_TIMEOUT_SECONDS),
        connect_timeout_seconds=_parse_env_float(CONNECT_TIMEOUT_ENV, CONNECT_TIMEOUT_SECONDS),
    )
    _ENV_GUARD = cur_guard
    return _CACHED


def to_httpx_timeout(cfg: TimeoutConfig) -> httpx.Timeout:
    """Translate ``cfg`` into an ``httpx.Timeout``."""
    return httpx.Timeout(cfg.http_timeout_seconds, connect=cfg.connect_timeout_seconds)


__all__ = [
    "TimeoutConfig",
    "get_timeout_config",
    "to_httpx_timeout",
    "HTTP_TIMEOUT_ENV",
    "STREAM_TIMEOUT_ENV",
    "CONNECT_TIMEOUT_ENV",
]
