"""Record of a cancellation request.

``CancelRequest`` captures why and when a probe was aborted so the tester can
report the reason after the fact.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CancelRequest:
    """Reason and monotonic timestamp of the first ``cancel`` call."""

    reason: Optional[str]
    requested_at: float


__all__ = ["CancelRequest"]
