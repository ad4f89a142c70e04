"""Unit tests for HTTP outcome categorization and user messages."""
from __future__ import annotations

import httpx
import pytest

from apicompat.base.errors import (
    USER_MESSAGES,
    ErrorCategory,
    ErrorInfo,
    categorize_error,
    categorize_error_with_info,
    categorize_network_error,
    get_user_message,
)


@pytest.mark.parametrize(
    "status, body, expected",
    [
        (401, b"", ErrorCategory.AUTH_FAILURE),
        (403, b"forbidden", ErrorCategory.AUTH_FAILURE),
        (404, b'{"error": {"message": "The Model does not exist"}}', ErrorCategory.MODEL_NOT_FOUND),
        (404, b"<html>Not Found</html>", ErrorCategory.ENDPOINT_NOT_FOUND),
        (429, b"", ErrorCategory.RATE_LIMIT),
        (200, b"{}", ErrorCategory.FORMAT_INCOMPATIBLE),
        (500, b"", ErrorCategory.SERVER_ERROR),
        (503, b"", ErrorCategory.SERVER_ERROR),
        (400, b"bad request", ErrorCategory.UNKNOWN),
        (302, b"", ErrorCategory.UNKNOWN),
    ],
)
def test_categorize_error(status, body, expected):
    assert categorize_error(status, body) is expected  # nosec B101 - pytest assert in tests


def test_categorize_accepts_text_and_none_bodies():
    assert categorize_error(404, "unknown MODEL") is ErrorCategory.MODEL_NOT_FOUND  # nosec B101 - pytest assert in tests
    assert categorize_error(404, None) is ErrorCategory.ENDPOINT_NOT_FOUND  # nosec B101 - pytest assert in tests


def test_every_category_has_a_fixed_message():
    assert set(USER_MESSAGES) == set(ErrorCategory)  # nosec B101 - pytest assert in tests
    assert get_user_message(ErrorCategory.AUTH_FAILURE) == (  # nosec B101 - pytest assert in tests
        "Authentication failed. Please check your API key or token."
    )
    assert get_user_message("endpoint_not_found") == (  # nosec B101 - pytest assert in tests
        "API endpoint not found. Please verify the base URL."
    )


def test_unknown_category_falls_back():
    assert get_user_message("bogus") == "An unknown error occurred."  # nosec B101 - pytest assert in tests


def test_categorize_with_info_defaults_message_to_user_message():
    info = categorize_error_with_info(429, b"")
    assert info == ErrorInfo(  # nosec B101 - pytest assert in tests
        category=ErrorCategory.RATE_LIMIT,
        status_code=429,
        message="Rate limit exceeded. Please try again later.",
        user_message="Rate limit exceeded. Please try again later.",
    )
    assert categorize_error_with_info(500, b"", "upstream exploded").message == "upstream exploded"  # nosec B101 - pytest assert in tests


def test_network_error_info():
    info = categorize_network_error(httpx.ConnectError("connection refused"))
    assert info.category is ErrorCategory.NETWORK_ERROR  # nosec B101 - pytest assert in tests
    assert info.status_code == 0  # nosec B101 - pytest assert in tests
    assert info.message == "connection refused"  # nosec B101 - pytest assert in tests
    assert info.user_message == "Network error: unable to connect to the API."  # nosec B101 - pytest assert in tests
    assert categorize_network_error(None).message == "Network error"  # nosec B101 - pytest assert in tests
    assert categorize_network_error(OSError()).message == "Network error"  # nosec B101 - pytest assert in tests


def test_error_info_to_dict_omits_zero_status():
    assert "statusCode" not in categorize_network_error(None).to_dict()  # nosec B101 - pytest assert in tests
    assert categorize_error_with_info(401).to_dict() == {  # nosec B101 - pytest assert in tests
        "category": "authentication_failure",
        "statusCode": 401,
        "message": "Authentication failed. Please check your API key or token.",
        "userMessage": "Authentication failed. Please check your API key or token.",
    }
