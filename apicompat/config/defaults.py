"""apicompat.config.defaults
=========================

Central place for small, stable default values used across the apicompat
package. These defaults can be overridden via the configuration record or
environment variables, but provide sensible fallbacks for probes and tests.

Module Purpose
--------------
- Provide a single import location for conservative default constants (no I/O).
- Keep the compatibility engine free of magic literals, improving readability
    and testability.

This module intentionally avoids importing from other apicompat packages to
prevent circular dependencies. Only plain constants should live here.
"""

from __future__ import annotations

# ---- Provider resolution ----
# Provider used when the configuration names none and the base URL is not
# recognized by auto-detection.
DEFAULT_PROVIDER = "anthropic"


# ---- Provider-specific defaults ----
ANTHROPIC_DEFAULT_BASE_URL = "https://api.anthropic.com"
ANTHROPIC_DEFAULT_MODEL = "claude-3-sonnet-20240229"
# Value sent in the ``anthropic-version`` header of every Messages API probe.
ANTHROPIC_API_VERSION = "2023-06-01"

OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1"
OPENAI_DEFAULT_MODEL = "gpt-4"


# ---- Probe request ----
# A fixed minimal chat request keeps cost and latency of each probe bounded.
PROBE_MAX_TOKENS = 100
PROBE_PROMPT = "ping"
PROBE_ROLE = "user"


# ---- Timeouts (seconds) ----
HTTP_TIMEOUT_SECONDS = 30.0
STREAM_TIMEOUT_SECONDS = 60.0
CONNECT_TIMEOUT_SECONDS = 10.0


# ---- Diagnostics ----
# Maximum characters of SSE data echoed in a malformed-event descriptor.
SSE_DESCRIPTOR_DATA_LIMIT = 50


__all__ = [
    "DEFAULT_PROVIDER",
    "ANTHROPIC_DEFAULT_BASE_URL",
    "ANTHROPIC_DEFAULT_MODEL",
    "ANTHROPIC_API_VERSION",
    "OPENAI_DEFAULT_BASE_URL",
    "OPENAI_DEFAULT_MODEL",
    "PROBE_MAX_TOKENS",
    "PROBE_PROMPT",
    "PROBE_ROLE",
    "HTTP_TIMEOUT_SECONDS",
    "STREAM_TIMEOUT_SECONDS",
    "CONNECT_TIMEOUT_SECONDS",
    "SSE_DESCRIPTOR_DATA_LIMIT",
]
