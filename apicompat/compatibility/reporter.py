"""Human and machine readable rendering of probe results.

Purpose
-------
Summarize a :class:`TestResult` either as indented JSON (for scripts and CI)
or as a short emoji-annotated text report (for operators).

External dependencies
---------------------
- Pydantic v2 models give the JSON output its camelCase wire names and drop
  optional keys that are unset.

Notes
-----
- Summary statuses are read back from the checks by name; the reporter does
  not re-run or re-interpret any probe.
- Output goes to the stream passed at construction; nothing is printed
  elsewhere.
"""
from __future__ import annotations

import json
from typing import List, Optional, TextIO, Union

from pydantic import BaseModel, ConfigDict, Field

from ..base.errors import ErrorCategory
from .types import CompatibilityLevel, TestResult, VerboseData

_CONNECTION_CHECKS = ("Connection", "Streaming Connection")
_AUTH_CHECKS = ("Authentication", "Streaming Authentication")

_VERDICTS = {
    CompatibilityLevel.FULL: "✅ API is compatible with Claude Code",
    CompatibilityLevel.PARTIAL: "⚠️ API may have compatibility issues",
    CompatibilityLevel.NONE: "❌ API is NOT compatible with Claude Code",
}
UNKNOWN_VERDICT = "❓ Unknown compatibility status"


class CheckOutput(BaseModel):
    name: str
    passed: bool
    message: str
    critical: bool


class DiagnosticOutput(BaseModel):
    """JSON document emitted for one result."""

    model_config = ConfigDict(populate_by_name=True)

    connection_status: str = Field(alias="connectionStatus")
    authentication_status: str = Field(alias="authenticationStatus")
    response_format_valid: bool = Field(alias="responseFormatValid")
    streaming_support: Optional[str] = Field(default=None, alias="streamingSupport")
    compatibility_level: str = Field(alias="compatibilityLevel")
    checks: List[CheckOutput] = Field(default_factory=list)
    response_time_ms: int = Field(alias="responseTimeMs")
    error: Optional[str] = None
    verbose: Optional[VerboseData] = None


def _first_check(result: TestResult, names: tuple[str, ...]):
    for check in result.checks:
        if check.name in names:
            return check
    return None


def connection_status(result: TestResult) -> str:
    """``connected``, ``failed`` or ``unknown`` from the first connection check."""
    check = _first_check(result, _CONNECTION_CHECKS)
    if check is None:
        return "unknown"
    return "connected" if check.passed else "failed"


def authentication_status(result: TestResult) -> str:
    """``authenticated``, ``failed`` or ``unknown`` from the first auth check."""
    check = _first_check(result, _AUTH_CHECKS)
    if check is None:
        return "unknown"
    return "authenticated" if check.passed else "failed"


def response_format_valid(result: TestResult) -> bool:
    check = result.find_check("Response Format")
    return check is not None and check.passed


def streaming_support(result: TestResult) -> str:
    """Describe streaming support, or ``""`` when no streaming probe ran."""
    sse = result.find_check("SSE Format")
    if sse is None:
        return ""
    completion = result.find_check("Completion Signal")
    if sse.passed and completion is not None and completion.passed:
        return "✅ Full support"
    if sse.passed:
        return "⚠️ Partial (no completion signal)"
    return "❌ Not supported"


def build_diagnostic_output(result: TestResult, verbose_data: Optional[VerboseData] = None) -> DiagnosticOutput:
    return DiagnosticOutput(
        connection_status=connection_status(result),
        authentication_status=authentication_status(result),
        response_format_valid=response_format_valid(result),
        streaming_support=streaming_support(result) or None,
        compatibility_level=result.compatibility_level.value,
        checks=[CheckOutput(**c.to_dict()) for c in result.checks],
        response_time_ms=result.response_time_ms,
        error=result.error or None,
        verbose=verbose_data,
    )


class Reporter:
    """Writes probe results to ``stream`` as text or JSON."""

    def __init__(self, stream: TextIO, *, json_output: bool = False, verbose: bool = False) -> None:
        self.stream = stream
        self.json_output = json_output
        self.verbose = verbose

    def report(self, result: TestResult) -> None:
        self.report_with_verbose(result, None)

    def report_with_verbose(self, result: TestResult, verbose_data: Optional[VerboseData]) -> None:
        """Write ``result``; ``verbose_data`` is included only in verbose mode."""
        extra = verbose_data if self.verbose else None
        if self.json_output:
            output = build_diagnostic_output(result, extra)
            self._write_json(output.model_dump(mode="json", by_alias=True, exclude_none=True))
        else:
            self.stream.write(self._render_text(result, extra))

    def report_error(self, exc: Union[BaseException, str], category: Union[ErrorCategory, str]) -> None:
        """Write a standalone error with its category."""
        category_value = category.value if isinstance(category, ErrorCategory) else category
        if self.json_output:
            self._write_json({"error": str(exc), "category": category_value})
        else:
            self.stream.write(f"❌ Error [{category_value}]: {exc}\n")

    def _write_json(self, payload: dict) -> None:
        self.stream.write(json.dumps(payload, indent=2, ensure_ascii=False) + "\n")

    def _render_text(self, result: TestResult, verbose_data: Optional[VerboseData]) -> str:
        lines = [_VERDICTS.get(result.compatibility_level, UNKNOWN_VERDICT), ""]

        conn = connection_status(result)
        auth = authentication_status(result)
        fmt = result.find_check("Response Format")
        lines.append("Summary:")
        lines.append(f"  Connection:     {_status_text(conn, 'connected', '✅ Connected')}")
        lines.append(f"  Authentication: {_status_text(auth, 'authenticated', '✅ Authenticated')}")
        if fmt is None:
            fmt_text = "❓ Not tested"
        else:
            fmt_text = "✅ Valid" if fmt.passed else "❌ Invalid"
        lines.append(f"  Response Format: {fmt_text}")
        support = streaming_support(result)
        if support:
            lines.append(f"  Streaming:      {support}")
        lines.append(f"  Response Time:  {result.response_time_ms}ms")
        lines.append("")

        lines.append("Checks:")
        for check in result.checks:
            if check.passed:
                marker = "✅"
            elif check.critical:
                marker = "❌"
            else:
                marker = "⚠️"
            lines.append(f"  {marker} {check.name}: {check.message}")

        if result.error:
            lines.append("")
            lines.append(f"Error: {result.error}")

        if verbose_data is not None:
            lines.append("")
            lines.append("--- Verbose Output ---")
            if verbose_data.request_body:
                lines.extend(["", "Request Body:", verbose_data.request_body])
            if verbose_data.response_body:
                lines.extend(["", "Response Body:", verbose_data.response_body])
        return "\n".join(lines) + "\n"


def _status_text(status: str, ok_value: str, ok_text: str) -> str:
    if status == ok_value:
        return ok_text
    if status == "failed":
        return "❌ Failed"
    return "❓ Unknown"


__all__ = [
    "Reporter",
    "DiagnosticOutput",
    "CheckOutput",
    "build_diagnostic_output",
    "connection_status",
    "authentication_status",
    "response_format_valid",
    "streaming_support",
    "UNKNOWN_VERDICT",
]
