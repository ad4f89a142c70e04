"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `apicompat.base.errors` for the stable surface.
"""

from .error_category import ErrorCategory
from .error_info import ErrorInfo
from .compat_error import (
    CompatibilityError,
    InvalidProviderConfigError,
    RequestConstructionError,
    ResponseValidationError,
    SSEParseError,
    UnknownProviderError,
)
from .categorization import (
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
