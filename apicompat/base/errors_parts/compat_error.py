"""
Exception hierarchy for infrastructure faults.

Only faults that prevent a probe from completing (cannot build the request,
cannot read the stream, validator breakage, bad configuration) are raised as
exceptions. Protocol-shape problems are never exceptions; the tester records
them as failed checks.
"""
from __future__ import annotations


class CompatibilityError(Exception):
    """Base class for all apicompat infrastructure errors."""


class RequestConstructionError(CompatibilityError):
    """Raised when a probe request cannot be serialized or assembled."""


class ResponseValidationError(CompatibilityError):
    """Raised when a response validator fails internally.

    A response that merely violates the expected schema is reported through
    :class:`~apicompat.compatibility.validator.ValidationResult` instead.
    """


class SSEParseError(CompatibilityError):
    """Raised when an SSE stream cannot be read to completion.

    A malformed event is not a parse error; it is reported by the SSE
    validator as a malformed-event descriptor.
    """


class InvalidProviderConfigError(CompatibilityError, ValueError):
    """Raised by a provider descriptor when credentials are unusable."""


class UnknownProviderError(CompatibilityError, LookupError):
    """Raised when a provider name is not present in the registry."""


__all__ = [
    "CompatibilityError",
    "RequestConstructionError",
    "ResponseValidationError",
    "SSEParseError",
    "InvalidProviderConfigError",
    "UnknownProviderError",
]
