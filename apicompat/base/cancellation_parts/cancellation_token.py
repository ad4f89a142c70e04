"""Cooperative cancellation token.

``CancellationToken`` is polled by the SSE reader between lines and by the
tester before each network phase of a probe. The flag is a
``threading.Event`` so an orchestrating thread can also block on it.
"""

from __future__ import annotations

import threading
import time
from typing import List, Optional

from .cancel_request import CancelRequest
from .cancelled_error import CancelledError

DEFAULT_REASON = "probe cancelled"


class CancellationToken:
    """Abort handle shared between a probe and whoever may stop it.

    ``cancel`` may be called from any thread (e.g. a signal handler) while a
    probe runs elsewhere. Only the first call is recorded. Tokens created with
    ``parent=`` or via :meth:`child` are cancelled together with their parent,
    so one operator abort covers both probes of a full run; cancelling a child
    leaves the parent untouched.
    """

    def __init__(self, *, parent: Optional["CancellationToken"] = None) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._request: Optional[CancelRequest] = None
        self._children: List[CancellationToken] = []
        if parent is not None:
            parent._adopt(self)

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> Optional[str]:
        request = self._request
        return request.reason if request is not None else None

    @property
    def request(self) -> Optional[CancelRequest]:
        """The recorded cancellation, or ``None`` while still active."""
        return self._request

    def cancel(self, reason: Optional[str] = None) -> None:
        with self._lock:
            if self._request is not None:
                return
            self._request = CancelRequest(reason=reason, requested_at=time.monotonic())
            self._event.set()
            children = tuple(self._children)
        for token in children:
            token.cancel(reason)

    def _adopt(self, token: "CancellationToken") -> None:
        with self._lock:
            self._children.append(token)
            request = self._request
        if request is not None:
            token.cancel(request.reason)

    def child(self) -> "CancellationToken":
        """Return a new token cancelled whenever this one is."""
        return CancellationToken(parent=self)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until cancelled or ``timeout`` elapses; return ``cancelled``."""
        return self._event.wait(timeout)

    def raise_if_cancelled(self) -> None:
        """Raise :class:`CancelledError` carrying the reason, if cancelled."""
        request = self._request
        if request is not None:
            raise CancelledError(request.reason or DEFAULT_REASON)


__all__ = ["CancellationToken", "DEFAULT_REASON"]
