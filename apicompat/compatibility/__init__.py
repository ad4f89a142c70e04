"""Compatibility testing engine.

Probes an endpoint with a minimal chat request (plain and streamed),
validates the answers against the provider's wire format and aggregates the
individual checks into a compatibility verdict.
"""

from .reporter import DiagnosticOutput, Reporter
from .request import (
    AnthropicRequestBuilder,
    CustomPathRequestBuilder,
    OpenAIRequestBuilder,
    RequestBuilder,
    new_request_builder,
)
from .sse import SSEEvent, SSEParser
from .sse_validator import (
    AnthropicSSEValidator,
    OpenAISSEValidator,
    SSEValidationResult,
    SSEValidator,
    new_sse_validator,
)
from .tester import Tester, TesterOptions, resolve_provider_name
from .types import (
    APIConfiguration,
    CheckResult,
    CompatibilityLevel,
    ExitCode,
    RequestSpec,
    TestResult,
    VerboseData,
    determine_compatibility_level,
)
from .validator import (
    AnthropicValidator,
    OpenAIValidator,
    ResponseValidator,
    ValidationResult,
    new_validator,
)

__all__ = [
    "DiagnosticOutput",
    "Reporter",
    "AnthropicRequestBuilder",
    "CustomPathRequestBuilder",
    "OpenAIRequestBuilder",
    "RequestBuilder",
    "new_request_builder",
    "SSEEvent",
    "SSEParser",
    "AnthropicSSEValidator",
    "OpenAISSEValidator",
    "SSEValidationResult",
    "SSEValidator",
    "new_sse_validator",
    "Tester",
    "TesterOptions",
    "resolve_provider_name",
    "APIConfiguration",
    "CheckResult",
    "CompatibilityLevel",
    "ExitCode",
    "RequestSpec",
    "TestResult",
    "VerboseData",
    "determine_compatibility_level",
    "AnthropicValidator",
    "OpenAIValidator",
    "ResponseValidator",
    "ValidationResult",
    "new_validator",
]
