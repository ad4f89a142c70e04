"""
Normalized error categories (taxonomy).

Defines the `ErrorCategory` enumeration used by the categorizer and the
compatibility tester. Values are lowercase snake_case and are a stable public
contract: they appear verbatim in reports and JSON output.
"""
from __future__ import annotations

from enum import Enum


class ErrorCategory(str, Enum):
    """Closed set of failure categories a probe can be classified into."""

    AUTH_FAILURE = "authentication_failure"
    MODEL_NOT_FOUND = "model_not_found"
    RATE_LIMIT = "rate_limit"
    FORMAT_INCOMPATIBLE = "format_incompatibility"
    NETWORK_ERROR = "network_error"
    SERVER_ERROR = "server_error"
    ENDPOINT_NOT_FOUND = "endpoint_not_found"
    UNKNOWN = "unknown_error"


__all__ = ["ErrorCategory"]
