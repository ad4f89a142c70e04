"""Data model for compatibility probes.

Purpose
-------
Define the records that flow through a probe: the configuration under test,
the outbound request, individual check outcomes and the aggregated result,
plus the pure function that turns a list of checks into a verdict.

Notes
-----
- ``APIConfiguration`` is external input and validated with pydantic.
- ``CheckResult`` and ``TestResult`` are frozen; merging basic and streaming
  runs builds a new ``TestResult``.
- The compatibility level is always derived from the checks, never stored
  independently of them by callers.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Dict, Iterable, Optional, Tuple

import httpx
from pydantic import BaseModel, ConfigDict, Field


class APIConfiguration(BaseModel):
    """One endpoint configuration to probe.

    Attributes
    ----------
    alias:
        Operator-chosen name of the configuration; used only for logging.
    provider:
        Explicit provider name. Empty means auto-detect from ``base_url``.
    api_key:
        API key (``x-api-key`` for Anthropic, bearer token for OpenAI).
    auth_token:
        Bearer token (Anthropic only).
    base_url:
        Endpoint base URL. Empty means the provider's default.
    model:
        Model to probe. Empty means the provider's default.
    """

    alias: str = ""
    provider: str = ""
    api_key: str = ""
    auth_token: str = ""
    base_url: str = ""
    model: str = ""


@dataclass
class RequestSpec:
    """Transport-neutral outbound request produced by a request builder."""

    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    def to_httpx(self, client: httpx.Client, timeout: Optional[httpx.Timeout] = None) -> httpx.Request:
        """Build an ``httpx.Request`` bound to ``client``.

        ``timeout`` overrides the client's default timeout for this request.
        """
        if timeout is None:
            return client.build_request(self.method, self.url, headers=self.headers, content=self.body)
        return client.build_request(
            self.method, self.url, headers=self.headers, content=self.body, timeout=timeout
        )


class CompatibilityLevel(str, Enum):
    """Overall verdict of a probe."""

    FULL = "full"
    PARTIAL = "partial"
    NONE = "none"


class ExitCode(IntEnum):
    """Process exit codes associated with each compatibility level."""

    SUCCESS = 0
    FAILURE = 1
    WARNING = 2


@dataclass(frozen=True)
class CheckResult:
    """Outcome of a single named check.

    A failed critical check makes the whole probe incompatible; a failed
    non-critical check only degrades it to partial.
    """

    name: str
    passed: bool
    message: str
    critical: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "passed": self.passed,
            "message": self.message,
            "critical": self.critical,
        }


def determine_compatibility_level(checks: Iterable[CheckResult]) -> Tuple[CompatibilityLevel, ExitCode]:
    """Derive the verdict and exit code from ``checks``.

    - all checks passed -> ``(full, 0)``
    - any critical check failed -> ``(none, 1)``
    - only non-critical checks failed -> ``(partial, 2)``
    - no checks at all -> ``(none, 1)``
    """
    checks = list(checks)
    if not checks:
        return CompatibilityLevel.NONE, ExitCode.FAILURE
    failed = [c for c in checks if not c.passed]
    if not failed:
        return CompatibilityLevel.FULL, ExitCode.SUCCESS
    if any(c.critical for c in failed):
        return CompatibilityLevel.NONE, ExitCode.FAILURE
    return CompatibilityLevel.PARTIAL, ExitCode.WARNING


@dataclass(frozen=True)
class TestResult:
    """Aggregated result of one probe (basic, streaming, or both merged).

    Attributes:
        success: True iff ``compatibility_level`` is ``full``.
        compatibility_level: Verdict derived from ``checks``.
        checks: Checks in the order they were performed.
        response_time: Seconds until response headers arrived (summed for a
            merged run).
        error: Infrastructure or categorized error summary, if any.
    """

    __test__ = False  # not a pytest test class

    success: bool
    compatibility_level: CompatibilityLevel
    checks: Tuple[CheckResult, ...] = ()
    response_time: float = 0.0
    error: Optional[str] = None

    @classmethod
    def from_checks(
        cls,
        checks: Iterable[CheckResult],
        *,
        response_time: float = 0.0,
        error: Optional[str] = None,
    ) -> "TestResult":
        """Build a result whose level and success flag are derived from ``checks``."""
        checks = tuple(checks)
        level, _ = determine_compatibility_level(checks)
        return cls(
            success=level is CompatibilityLevel.FULL,
            compatibility_level=level,
            checks=checks,
            response_time=response_time,
            error=error or None,
        )

    @property
    def response_time_ms(self) -> int:
        return int(self.response_time * 1000)

    @property
    def exit_code(self) -> ExitCode:
        return determine_compatibility_level(self.checks)[1]

    def find_check(self, name: str) -> Optional[CheckResult]:
        """Return the first check called ``name``, or ``None``."""
        for check in self.checks:
            if check.name == name:
                return check
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON-serializable wire form (camelCase keys)."""
        data: Dict[str, Any] = {
            "success": self.success,
            "compatibilityLevel": self.compatibility_level.value,
            "checks": [c.to_dict() for c in self.checks],
            "responseTimeMs": self.response_time_ms,
        }
        if self.error:
            data["error"] = self.error
        return data


class VerboseData(BaseModel):
    """Raw request and response bodies captured by a verbose probe."""

    model_config = ConfigDict(populate_by_name=True)

    request_body: Optional[str] = Field(default=None, alias="requestBody")
    response_body: Optional[str] = Field(default=None, alias="responseBody")


__all__ = [
    "APIConfiguration",
    "VerboseData",
    "RequestSpec",
    "CompatibilityLevel",
    "ExitCode",
    "CheckResult",
    "TestResult",
    "determine_compatibility_level",
]
