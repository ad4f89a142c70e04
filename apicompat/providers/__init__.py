"""Provider capability descriptors, registry and URL-based auto-detection."""

from .detection import PROVIDER_URL_PATTERNS, detect_provider_from_url
from .registry import (
    ANTHROPIC,
    OPENAI,
    ProviderDescriptor,
    ProviderKind,
    get,
    list_providers,
    register,
)

__all__ = [
    "PROVIDER_URL_PATTERNS",
    "detect_provider_from_url",
    "ANTHROPIC",
    "OPENAI",
    "ProviderDescriptor",
    "ProviderKind",
    "get",
    "list_providers",
    "register",
]
