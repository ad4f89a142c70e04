"""Error taxonomy and categorization public surface.

This module re-exports the one-class-per-file implementations under
``apicompat.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_category import ErrorCategory
from .errors_parts.error_info import ErrorInfo
from .errors_parts.compat_error import (
    CompatibilityError,
    InvalidProviderConfigError,
    RequestConstructionError,
    ResponseValidationError,
    SSEParseError,
    UnknownProviderError,
)
from .errors_parts.categorization import (
    USER_MESSAGES,
    categorize_error,
    categorize_error_with_info,
    categorize_network_error,
    get_user_message,
)

__all__ = [
    "ErrorCategory",
    "ErrorInfo",
    "CompatibilityError",
    "InvalidProviderConfigError",
    "RequestConstructionError",
    "ResponseValidationError",
    "SSEParseError",
    "UnknownProviderError",
    "USER_MESSAGES",
    "categorize_error",
    "categorize_error_with_info",
    "categorize_network_error",
    "get_user_message",
]
