"""Unit tests for the verdict derivation and result serialization."""
from __future__ import annotations

import pytest

from apicompat.compatibility.types import (
    CheckResult,
    CompatibilityLevel,
    ExitCode,
    TestResult,
    determine_compatibility_level,
)

OK = CheckResult("Connection", True, "ok", True)
CRITICAL_FAIL = CheckResult("Response Format", False, "bad", True)
SOFT_FAIL = CheckResult("Completion Signal", False, "missing", False)


@pytest.mark.parametrize(
    "checks, expected",
    [
        ([], (CompatibilityLevel.NONE, 1)),
        ([OK], (CompatibilityLevel.FULL, 0)),
        ([OK, SOFT_FAIL], (CompatibilityLevel.PARTIAL, 2)),
        ([OK, CRITICAL_FAIL], (CompatibilityLevel.NONE, 1)),
        ([SOFT_FAIL, CRITICAL_FAIL], (CompatibilityLevel.NONE, 1)),
    ],
)
def test_determine_compatibility_level(checks, expected):
    assert determine_compatibility_level(checks) == expected  # nosec B101 - pytest assert in tests


def test_exit_codes_are_ints():
    assert ExitCode.SUCCESS == 0 and ExitCode.FAILURE == 1 and ExitCode.WARNING == 2  # nosec B101 - pytest assert in tests


def test_result_from_checks_derives_level_and_success():
    result = TestResult.from_checks([OK, SOFT_FAIL], response_time=0.2519, error="")
    assert result.compatibility_level is CompatibilityLevel.PARTIAL  # nosec B101 - pytest assert in tests
    assert result.success is False  # nosec B101 - pytest assert in tests
    assert result.exit_code == ExitCode.WARNING  # nosec B101 - pytest assert in tests
    assert result.response_time_ms == 251  # nosec B101 - pytest assert in tests
    assert result.error is None  # nosec B101 - pytest assert in tests


def test_result_to_dict_wire_form():
    result = TestResult.from_checks([OK], response_time=0.05, error="boom")
    assert result.to_dict() == {  # nosec B101 - pytest assert in tests
        "success": True,
        "compatibilityLevel": "full",
        "checks": [{"name": "Connection", "passed": True, "message": "ok", "critical": True}],
        "responseTimeMs": 50,
        "error": "boom",
    }
    assert "error" not in TestResult.from_checks([OK]).to_dict()  # nosec B101 - pytest assert in tests


def test_result_is_immutable():
    result = TestResult.from_checks([OK])
    with pytest.raises(AttributeError):
        result.success = False  # type: ignore[misc]
    assert result.find_check("Connection") is OK  # nosec B101 - pytest assert in tests
    assert result.find_check("Missing") is None  # nosec B101 - pytest assert in tests
