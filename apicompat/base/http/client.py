"""Shared HTTP client pool for compatibility probes.

Purpose:
    Provide a thread-safe pool of reusable ``httpx.Client`` instances so that
    repeated probes (basic then streaming, or several configurations in a row)
    share connections. Timeouts derive exclusively from
    :func:`get_timeout_config`.

External dependencies:
    - ``httpx`` for the underlying synchronous HTTP client.

Lifecycle & cleanup:
    - Clients are cached by ``purpose`` (e.g. ``"probe"``). Probes always send
      absolute URLs, so no base URL is bound to a pooled client.
    - All clients are closed at interpreter exit via ``atexit``. Tests may
      call :func:`close_all_clients` explicitly.
"""

from __future__ import annotations

import atexit
import threading
from typing import Dict

import httpx

from ..logging import get_logger
from ..timeouts import get_timeout_config, to_httpx_timeout

_CLIENTS: Dict[str, httpx.Client] = {}
_LOCK = threading.RLock()
_logger = get_logger("apicompat.http")


def get_httpx_client(purpose: str = "probe") -> httpx.Client:
    """Return a pooled ``httpx.Client`` for ``purpose``.

    The first request for a purpose creates a client whose ``httpx.Timeout``
    is built from the current :class:`TimeoutConfig`; later calls reuse it.
    Redirects are not followed, so a misconfigured base URL surfaces as its
    real status code.
    """
    client = _CLIENTS.get(purpose)
    if client is not None and not client.is_closed:
        return client

    with _LOCK:
        client = _CLIENTS.get(purpose)
        if client is not None and not client.is_closed:
            return client
        cfg = get_timeout_config()
        client = httpx.Client(timeout=to_httpx_timeout(cfg), follow_redirects=False)
        _CLIENTS[purpose] = client
        return client


def close_all_clients() -> None:
    """Close and clear all pooled HTTP clients."""
    with _LOCK:
        for purpose, c in _CLIENTS.items():
            try:
                c.close()
            except (httpx.HTTPError, OSError) as exc:
                _logger.debug("failed to close pooled client %s: %s", purpose, exc)
        _CLIENTS.clear()


atexit.register(close_all_clients)

__all__ = ["get_httpx_client", "close_all_clients"]
