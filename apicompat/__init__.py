"""apicompat: check whether an HTTP endpoint speaks a known LLM provider API.

Typical use::

    from apicompat import APIConfiguration, Tester

    cfg = APIConfiguration(alias="proxy", base_url="https://llm.example.com", api_key="sk-...")
    result = Tester(cfg).run_full_test()
    print(result.compatibility_level, result.exit_code)
"""

from .base.cancellation import CancellationToken, CancelledError
from .base.errors import ErrorCategory, categorize_error, get_user_message
from .compatibility import (
    APIConfiguration,
    CheckResult,
    CompatibilityLevel,
    Reporter,
    TestResult,
    Tester,
    TesterOptions,
    determine_compatibility_level,
)
from .providers import detect_provider_from_url, list_providers

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "CancellationToken",
    "CancelledError",
    "ErrorCategory",
    "categorize_error",
    "get_user_message",
    "APIConfiguration",
    "CheckResult",
    "CompatibilityLevel",
    "Reporter",
    "TestResult",
    "Tester",
    "TesterOptions",
    "determine_compatibility_level",
    "detect_provider_from_url",
    "list_providers",
]
