"""Provider auto-detection from a base URL.

Maps the host of a configured base URL onto a registered provider name using
a small static table. Matching is exact or by domain suffix, so
``eu.api.anthropic.com`` resolves to ``anthropic`` while
``myanthropic.com`` does not.
"""

from __future__ import annotations

from typing import Dict, Tuple
from urllib.parse import urlsplit

PROVIDER_URL_PATTERNS: Dict[str, str] = {
    "api.anthropic.com": "anthropic",
    "anthropic.com": "anthropic",
    "api.openai.com": "openai",
    "openai.com": "openai",
}


def _netloc(url: str) -> str:
    try:
        return urlsplit(url).netloc
    except ValueError:
        return ""


def _extract_host(base_url: str) -> str:
    """Return the lowercased host of ``base_url`` without port or userinfo."""
    host = _netloc(base_url)
    if not host:
        host = _netloc("https://" + base_url)
    host = host.rpartition("@")[2]
    colon = host.rfind(":")
    if colon != -1 and colon > host.rfind("]"):
        host = host[:colon]
    return host.lower()


def detect_provider_from_url(base_url: str) -> Tuple[str, bool]:
    """Detect the provider name from ``base_url``.

    Returns:
        ``(name, True)`` when the host matches a known pattern, otherwise
        ``("", False)`` (including for empty or unparsable input).
    """
    if not base_url:
        return "", False
    host = _extract_host(base_url)
    if not host:
        return "", False
    provider = PROVIDER_URL_PATTERNS.get(host)
    if provider is not None:
        return provider, True
    for pattern, name in PROVIDER_URL_PATTERNS.items():
        if host.endswith("." + pattern):
            return name, True
    return "", False


__all__ = ["PROVIDER_URL_PATTERNS", "detect_provider_from_url"]
