"""Cancellation error type.

Defines ``CancelledError``, raised when a probe observes a cancellation
request while connecting or reading a stream.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when a probe is cancelled cooperatively.

    Distinct from transport failures so callers can tell an operator abort
    apart from an unreachable endpoint. The tester still reports it as a
    network-category connection failure.
    """


__all__ = ["CancelledError"]
