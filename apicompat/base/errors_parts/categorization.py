"""
Error categorization helpers mapping HTTP outcomes to ErrorCategory values.

Categorization is deterministic and status-first. The body is only inspected
for a 404 to tell a missing model apart from a missing endpoint; a 200 is
classified as a format incompatibility without parsing the body, since the
categorizer is only consulted once the caller already knows the body is bad.
"""
from __future__ import annotations

from typing import Dict, Optional, Union

from .error_category import ErrorCategory
from .error_info import ErrorInfo


USER_MESSAGES: Dict[ErrorCategory, str] = {
    ErrorCategory.AUTH_FAILURE: "Authentication failed. Please check your API key or token.",
    ErrorCategory.MODEL_NOT_FOUND: "Model not found. Please verify the model name.",
    ErrorCategory.RATE_LIMIT: "Rate limit exceeded. Please try again later.",
    ErrorCategory.FORMAT_INCOMPATIBLE: "Response format is not compatible with Claude Code.",
    ErrorCategory.NETWORK_ERROR: "Network error: unable to connect to the API.",
    ErrorCategory.SERVER_ERROR: "Server error occurred. Please try again later.",
    ErrorCategory.ENDPOINT_NOT_FOUND: "API endpoint not found. Please verify the base URL.",
    ErrorCategory.UNKNOWN: "An unknown error occurred.",
}

_STATUS_MAP: Dict[int, ErrorCategory] = {
    401: ErrorCategory.AUTH_FAILURE,
    403: ErrorCategory.AUTH_FAILURE,
    429: ErrorCategory.RATE_LIMIT,
    200: ErrorCategory.FORMAT_INCOMPATIBLE,
}


def _body_text(body: Union[bytes, str, None]) -> str:
    if body is None:
        return ""
    if isinstance(body, bytes):
        return body.decode("utf-8", errors="replace")
    return body


def categorize_error(status_code: int, body: Union[bytes, str, None] = b"") -> ErrorCategory:
    """Categorize an HTTP response by status code and body.

    Mapping:
        - 401, 403 -> ``authentication_failure``
        - 404 -> ``model_not_found`` if the body mentions "model"
          (case-insensitive), else ``endpoint_not_found``
        - 429 -> ``rate_limit``
        - 200 -> ``format_incompatibility``
        - >= 500 -> ``server_error``
        - anything else -> ``unknown_error``
    """
    if status_code == 404:
        if "model" in _body_text(body).lower():
            return ErrorCategory.MODEL_NOT_FOUND
        return ErrorCategory.ENDPOINT_NOT_FOUND
    if status_code in _STATUS_MAP:
        return _STATUS_MAP[status_code]
    if status_code >= 500:
        return ErrorCategory.SERVER_ERROR
    return ErrorCategory.UNKNOWN


def get_user_message(category: Union[ErrorCategory, str]) -> str:
    """Return the fixed user-facing sentence for ``category``.

    Unrecognized categories (including unknown strings) fall back to the
    ``unknown_error`` sentence.
    """
    try:
        key = ErrorCategory(category)
    except ValueError:
        return USER_MESSAGES[ErrorCategory.UNKNOWN]
    return USER_MESSAGES.get(key, USER_MESSAGES[ErrorCategory.UNKNOWN])


def categorize_error_with_info(
    status_code: int,
    body: Union[bytes, str, None] = b"",
    message: str = "",
) -> ErrorInfo:
    """Categorize an HTTP outcome and return a detailed :class:`ErrorInfo`.

    ``message`` defaults to the user-facing sentence when empty.
    """
    category = categorize_error(status_code, body)
    user_message = get_user_message(category)
    return ErrorInfo(
        category=category,
        status_code=status_code,
        message=message or user_message,
        user_message=user_message,
    )


def categorize_network_error(exc: Optional[BaseException]) -> ErrorInfo:
    """Return error info for a failure that produced no HTTP status.

    Covers connection refusal, DNS failures, timeouts and cooperative
    cancellation alike; all surface as ``network_error`` with status 0.
    """
    message = "Network error"
    if exc is not None and str(exc):
        message = str(exc)
    return ErrorInfo(
        category=ErrorCategory.NETWORK_ERROR,
        status_code=0,
        message=message,
        user_message=USER_MESSAGES[ErrorCategory.NETWORK_ERROR],
    )


__all__ = [
    "USER_MESSAGES",
    "categorize_error",
    "categorize_error_with_info",
    "categorize_network_error",
    "get_user_message",
]
