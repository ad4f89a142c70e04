"""
Categorized error record.

Carries the outcome of categorizing an HTTP status or network failure: the
category, the status code that produced it, a diagnostic message, and the
fixed user-facing sentence for the category.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from .error_category import ErrorCategory


@dataclass(frozen=True)
class ErrorInfo:
    """Detailed information about a categorized error.

    Attributes:
        category: Normalized :class:`ErrorCategory`.
        status_code: HTTP status code, ``0`` for network errors without one.
        message: Diagnostic message (underlying error text when available).
        user_message: Fixed, user-facing sentence for ``category``.
    """

    category: ErrorCategory
    status_code: int
    message: str
    user_message: str

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable mapping; ``statusCode`` omitted when 0."""
        data: Dict[str, Any] = {"category": self.category.value}
        if self.status_code:
            data["statusCode"] = self.status_code
        data["message"] = self.message
        data["userMessage"] = self.user_message
        return data


__all__ = ["ErrorInfo"]
