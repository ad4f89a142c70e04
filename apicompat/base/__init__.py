"""Base infrastructure shared by the provider and compatibility layers.

Holds the error taxonomy, structured logging, timeout configuration,
cooperative cancellation and the pooled HTTP transport.
"""

from .cancellation import CancellationToken, CancelledError
from .errors import (
    USER_MESSAGES,
    CompatibilityError,
    ErrorCategory,
    ErrorInfo,
    InvalidProviderConfigError,
    RequestConstructionError,
    ResponseValidationError,
    SSEParseError,
    UnknownProviderError,
    categorize_error,
    categorize_error_with_info,
    categorize_network_error,
    get_user_message,
)
from .logging import LogContext, configure_logger, get_logger, log_event
from .timeouts import TimeoutConfig, get_timeout_config

__all__ = [
    "CancellationToken",
    "CancelledError",
    "USER_MESSAGES",
    "CompatibilityError",
    "ErrorCategory",
    "ErrorInfo",
    "InvalidProviderConfigError",
    "RequestConstructionError",
    "ResponseValidationError",
    "SSEParseError",
    "UnknownProviderError",
    "categorize_error",
    "categorize_error_with_info",
    "categorize_network_error",
    "get_user_message",
    "LogContext",
    "configure_logger",
    "get_logger",
    "log_event",
    "TimeoutConfig",
    "get_timeout_config",
]
