"""Compatibility probe orchestration.

Purpose
-------
Run a basic (non-streaming) and/or a streaming chat probe against one
configured endpoint and turn every observation into an ordered list of
:class:`CheckResult` entries, from which the compatibility verdict is derived.

Timeout and cancellation semantics
----------------------------------
- Each request carries an ``httpx.Timeout`` built from :class:`TimeoutConfig`.
- A streamed body is additionally bounded by ``stream_timeout_seconds`` from
  the moment the SSE reader starts.
- An optional :class:`CancellationToken` is checked before each request and
  between SSE lines. A cancelled probe is reported as a network-category
  failure; it never raises out of ``test_basic``/``test_streaming``.

Failure modes
-------------
- Unknown explicit provider name: :class:`UnknownProviderError` at
  construction.
- Everything observed on the wire (transport errors, non-200 statuses,
  malformed bodies) becomes a failed check, not an exception.
- No retries: each probe is a single best-effort attempt.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import List, Optional

import httpx

from ..base.cancellation import CancellationToken, CancelledError
from ..base.errors import (
    ErrorCategory,
    InvalidProviderConfigError,
    RequestConstructionError,
    ResponseValidationError,
    categorize_error_with_info,
    categorize_network_error,
)
from ..base.http import get_httpx_client
from ..base.logging import LogContext, get_logger, log_event
from ..base.timeouts import TimeoutConfig, get_timeout_config, to_httpx_timeout
from ..config.defaults import DEFAULT_PROVIDER
from ..providers import registry
from ..providers.detection import detect_provider_from_url
from ..providers.registry import ProviderDescriptor
from .request import RequestBuilder, new_request_builder
from .sse_validator import SSEValidator, new_sse_validator
from .types import (
    APIConfiguration,
    CheckResult,
    CompatibilityLevel,
    RequestSpec,
    TestResult,
    VerboseData,
)
from .validator import ResponseValidator, new_validator

# Categories that make a non-200 answer a hard failure for the probe.
_CRITICAL_CATEGORIES = frozenset(
    (
        ErrorCategory.AUTH_FAILURE,
        ErrorCategory.ENDPOINT_NOT_FOUND,
        ErrorCategory.MODEL_NOT_FOUND,
    )
)

NO_COMPLETION_MESSAGE = "No completion signal received (expected [DONE] or message_stop)"


@dataclass
class TesterOptions:
    """Optional knobs for a :class:`Tester`.

    Attributes:
        verbose: Capture request/response bodies (see ``Tester.verbose_data``)
            and log them at debug level.
        custom_path: Endpoint path replacing the provider's default one.
        client: HTTP client to use; defaults to the pooled ``"probe"`` client.
        timeouts: Timeout values; defaults to :func:`get_timeout_config`.
        cancel_token: Token allowing another thread to abort the probe.
    """

    verbose: bool = False
    custom_path: str = ""
    client: Optional[httpx.Client] = None
    timeouts: Optional[TimeoutConfig] = None
    cancel_token: Optional[CancellationToken] = None


def resolve_provider_name(config: APIConfiguration) -> str:
    """Return the provider to probe ``config`` with.

    The explicit ``provider`` field wins, then auto-detection from
    ``base_url``, then the default provider.
    """
    if config.provider:
        return config.provider
    detected, ok = detect_provider_from_url(config.base_url)
    if ok:
        return detected
    return DEFAULT_PROVIDER


class Tester:
    """Runs compatibility probes for one :class:`APIConfiguration`.

    A tester is cheap to create and intended for a single run. It is not
    meant to be shared between threads when ``verbose`` is enabled, because
    the captured bodies are kept on the instance.
    """

    __test__ = False  # not a pytest test class

    def __init__(self, config: APIConfiguration, options: Optional[TesterOptions] = None) -> None:
        self._config = config
        self._options = options or TesterOptions()
        self._provider: ProviderDescriptor = registry.get(resolve_provider_name(config))
        self._client = self._options.client or get_httpx_client("probe")
        self._timeouts = self._options.timeouts or get_timeout_config()
        self._logger = get_logger("apicompat.compatibility.tester")
        self._ctx = LogContext(
            alias=config.alias or None,
            provider=self._provider.name,
            model=self.model,
        )
        self._verbose_data: Optional[VerboseData] = None
        try:
            self._provider.validate_config(config.base_url, config.api_key, config.auth_token)
        except InvalidProviderConfigError as exc:
            log_event(self._logger, "probe.config_invalid", self._ctx, level=logging.WARNING, error=str(exc))

    # ------------------------------------------------------------------ accessors
    @property
    def provider(self) -> ProviderDescriptor:
        return self._provider

    @property
    def config(self) -> APIConfiguration:
        return self._config

    @property
    def model(self) -> str:
        """Model probed: the configured one, else the provider default."""
        return self._config.model or self._provider.default_model

    @property
    def provider_auto_detected(self) -> bool:
        """True when the configuration did not name a provider explicitly."""
        return not self._config.provider

    @property
    def verbose_data(self) -> Optional[VerboseData]:
        """Bodies of the last basic probe, when ``verbose`` is enabled."""
        return self._verbose_data

    # ------------------------------------------------------------------ helpers
    def _request_builder(self) -> RequestBuilder:
        return new_request_builder(self._config, self._provider, self._options.custom_path)

    def _validator(self) -> ResponseValidator:
        return new_validator(self._provider.kind)

    def _sse_validator(self) -> SSEValidator:
        return new_sse_validator(self._provider.kind)

    def _record(self, checks: List[CheckResult], ctx: LogContext, check: CheckResult) -> None:
        checks.append(check)
        log_event(
            self._logger,
            "probe.check",
            ctx,
            level=logging.DEBUG,
            check=check.name,
            passed=check.passed,
            critical=check.critical,
            message=check.message,
        )

    def _finish(
        self,
        ctx: LogContext,
        checks: List[CheckResult],
        response_time: float,
        error: Optional[str] = None,
    ) -> TestResult:
        result = TestResult.from_checks(checks, response_time=response_time, error=error)
        log_event(
            self._logger,
            "probe.finish",
            ctx,
            level=logging.INFO,
            compatibility_level=result.compatibility_level.value,
            success=result.success,
            response_time_ms=result.response_time_ms,
            error=result.error,
        )
        return result

    def _build(self, streaming: bool) -> tuple[RequestSpec, httpx.Request]:
        spec = self._request_builder().build_chat_request(self.model, streaming)
        try:
            request = spec.to_httpx(self._client, timeout=to_httpx_timeout(self._timeouts))
        except (httpx.InvalidURL, UnicodeEncodeError) as exc:
            # header values must be ASCII
            raise RequestConstructionError(f"failed to create request: {exc}") from exc
        return spec, request

    def _send(self, request: httpx.Request) -> httpx.Response:
        if self._options.cancel_token is not None:
            self._options.cancel_token.raise_if_cancelled()
        return self._client.send(request, stream=True)

    def _status_check(
        self, name: str, response: httpx.Response, body: bytes
    ) -> tuple[CheckResult, Optional[str]]:
        """Categorize a non-200 answer into the authentication check."""
        info = categorize_error_with_info(response.status_code, body)
        check = CheckResult(
            name=name,
            passed=info.category != ErrorCategory.AUTH_FAILURE,
            message=info.user_message,
            critical=info.category in _CRITICAL_CATEGORIES,
        )
        error = info.user_message if info.category != ErrorCategory.AUTH_FAILURE else None
        return check, error

    # ------------------------------------------------------------------ probes
    def test_basic(self) -> TestResult:
        """Run the non-streaming probe."""
        ctx = self._ctx.with_probe("basic")
        checks: List[CheckResult] = []
        log_event(self._logger, "probe.start", ctx, base_url=self._config.base_url or None)
        start = time.monotonic()

        try:
            spec, request = self._build(streaming=False)
        except RequestConstructionError as exc:
            error = f"failed to build request: {exc}"
            self._record(checks, ctx, CheckResult("Request Construction", False, error, True))
            return self._finish(ctx, checks, time.monotonic() - start, error)
        self._record(
            checks,
            ctx,
            CheckResult("Request Construction", True, f"Request built for {self._provider.name} API", True),
        )

        try:
            response = self._send(request)
        except (httpx.TransportError, CancelledError) as exc:
            info = categorize_network_error(exc)
            self._record(checks, ctx, CheckResult("Connection", False, info.user_message, True))
            return self._finish(ctx, checks, time.monotonic() - start, f"network error: {info.message}")
        response_time = time.monotonic() - start

        try:
            try:
                body = response.read()
            except (httpx.TransportError, httpx.StreamError) as exc:
                self._record(checks, ctx, CheckResult("Connection", False, "Failed to read response body", True))
                return self._finish(ctx, checks, response_time, f"failed to read response: {exc}")
        finally:
            response.close()

        if self._options.verbose:
            self._verbose_data = VerboseData(
                request_body=spec.body.decode("utf-8", errors="replace"),
                response_body=body.decode("utf-8", errors="replace"),
            )
            log_event(
                self._logger,
                "probe.exchange",
                ctx,
                level=logging.DEBUG,
                request_body=self._verbose_data.request_body,
                response_body=self._verbose_data.response_body,
            )

        self._record(
            checks,
            ctx,
            CheckResult("Connection", True, f"Connected successfully (HTTP {response.status_code})", True),
        )

        if response.status_code != httpx.codes.OK:
            check, error = self._status_check("Authentication", response, body)
            self._record(checks, ctx, check)
            return self._finish(ctx, checks, response_time, error)
        self._record(checks, ctx, CheckResult("Authentication", True, "Authentication successful", True))

        try:
            validation = self._validator().validate_basic_response(body)
        except ResponseValidationError as exc:
            error = f"validation error: {exc}"
            self._record(checks, ctx, CheckResult("Response Format", False, error, True))
            return self._finish(ctx, checks, response_time, error)

        if validation.valid:
            message = f"Response format is valid for {self._provider.name} API"
        else:
            message = f"Missing or malformed fields: {', '.join(validation.missing_fields)}"
        self._record(checks, ctx, CheckResult("Response Format", validation.valid, message, True))
        return self._finish(ctx, checks, response_time)

    def test_streaming(self) -> TestResult:
        """Run the streaming probe and validate the SSE stream."""
        ctx = self._ctx.with_probe("streaming")
        checks: List[CheckResult] = []
        log_event(self._logger, "probe.start", ctx, base_url=self._config.base_url or None)
        start = time.monotonic()

        try:
            _, request = self._build(streaming=True)
        except RequestConstructionError as exc:
            error = f"failed to build streaming request: {exc}"
            self._record(checks, ctx, CheckResult("Streaming Request Construction", False, error, True))
            return self._finish(ctx, checks, time.monotonic() - start, error)
        self._record(
            checks,
            ctx,
            CheckResult(
                "Streaming Request Construction",
                True,
                f"Streaming request built for {self._provider.name} API",
                True,
            ),
        )

        try:
            response = self._send(request)
        except (httpx.TransportError, CancelledError) as exc:
            info = categorize_network_error(exc)
            self._record(checks, ctx, CheckResult("Streaming Connection", False, info.user_message, True))
            return self._finish(ctx, checks, time.monotonic() - start, f"network error: {info.message}")
        response_time = time.monotonic() - start

        try:
            self._record(
                checks,
                ctx,
                CheckResult(
                    "Streaming Connection", True, f"Connected successfully (HTTP {response.status_code})", True
                ),
            )
            if response.status_code != httpx.codes.OK:
                try:
                    body = response.read()
                except (httpx.TransportError, httpx.StreamError) as exc:
                    log_event(self._logger, "probe.read_failed", ctx, level=logging.DEBUG, error=str(exc))
                    body = b""
                check, error = self._status_check("Streaming Authentication", response, body)
                self._record(checks, ctx, check)
                return self._finish(ctx, checks, response_time, error)
            self._record(
                checks, ctx, CheckResult("Streaming Authentication", True, "Authentication successful", True)
            )
            return self._validate_stream(ctx, checks, response, response_time)
        finally:
            response.close()

    def _validate_stream(
        self,
        ctx: LogContext,
        checks: List[CheckResult],
        response: httpx.Response,
        response_time: float,
    ) -> TestResult:
        deadline = time.monotonic() + self._timeouts.stream_timeout_seconds
        try:
            sse = self._sse_validator().validate_stream(
                response.iter_bytes(),
                cancel_token=self._options.cancel_token,
                deadline=deadline,
            )
        except CancelledError as exc:
            info = categorize_network_error(exc)
            self._record(checks, ctx, CheckResult("SSE Format", False, info.user_message, True))
            return self._finish(ctx, checks, response_time, f"network error: {info.message}")

        error: Optional[str] = None
        if sse.errors:
            message = "; ".join(sse.errors)
            error = f"SSE validation error: {message}"
        elif sse.malformed_events:
            message = f"Malformed SSE lines detected: [{'; '.join(sse.malformed_events)}]"
        elif sse.event_count == 0:
            message = "No SSE events received"
        else:
            message = f"SSE format is valid ({sse.event_count} events received)"
        format_ok = not sse.errors and not sse.malformed_events and sse.event_count > 0
        self._record(checks, ctx, CheckResult("SSE Format", format_ok, message, True))

        if sse.has_completion_signal:
            completion = CheckResult(
                "Completion Signal", True, f"Completion signal received ({sse.completion_type})", False
            )
        else:
            # some proxies drop the terminal event, so its absence is non-critical
            completion = CheckResult("Completion Signal", False, NO_COMPLETION_MESSAGE, False)
        self._record(checks, ctx, completion)
        return self._finish(ctx, checks, response_time, error)

    def run_full_test(self, include_streaming: bool = True) -> TestResult:
        """Run the basic probe and, when it is not fatal, the streaming probe.

        The merged result lists basic checks before streaming checks, sums the
        response times and joins the errors with ``"; "``.
        """
        basic = self.test_basic()
        if basic.compatibility_level == CompatibilityLevel.NONE or not include_streaming:
            return basic
        streaming = self.test_streaming()
        errors = [e for e in (basic.error, streaming.error) if e]
        return TestResult.from_checks(
            basic.checks + streaming.checks,
            response_time=basic.response_time + streaming.response_time,
            error="; ".join(errors) or None,
        )


__all__ = ["Tester", "TesterOptions", "resolve_provider_name", "NO_COMPLETION_MESSAGE"]
