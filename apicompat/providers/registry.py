"""Provider registry.

Purpose
-------
Hold the capability descriptors of the wire protocols the compatibility engine
knows how to probe, keyed by canonical provider name (``"anthropic"``,
``"openai"``).

Design notes
------------
- Descriptors are frozen dataclasses; re-registering a name replaces the entry
  rather than mutating it.
- Lookup of an unregistered name raises :class:`UnknownProviderError` with the
  message ``"unknown provider: <name>"``.
- The two built-in descriptors are registered at import time.
- Registration is expected during start-up; the table itself is guarded by a
  lock so concurrent testers can read it safely.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List

from ..base.errors import InvalidProviderConfigError, UnknownProviderError
from ..config.defaults import (
    ANTHROPIC_DEFAULT_BASE_URL,
    ANTHROPIC_DEFAULT_MODEL,
    OPENAI_DEFAULT_BASE_URL,
    OPENAI_DEFAULT_MODEL,
)


class ProviderKind(str, Enum):
    """Wire protocol spoken by a provider."""

    ANTHROPIC = "anthropic"
    OPENAI = "openai"


@dataclass(frozen=True)
class ProviderDescriptor:
    """Capability descriptor for one provider.

    Attributes:
        name: Canonical provider name used for registry lookup.
        kind: Wire protocol; selects the request builder and validators.
        default_base_url: Base URL used when the configuration has none.
        default_model: Model probed when the configuration names none.
    """

    name: str
    kind: ProviderKind
    default_base_url: str
    default_model: str

    def validate_config(self, base_url: str, api_key: str, auth_token: str) -> None:
        """Check that the credentials are usable for this provider.

        Anthropic accepts either an API key or an auth token; OpenAI requires
        an API key. ``base_url`` is accepted for interface symmetry and is not
        inspected.

        Raises:
            InvalidProviderConfigError: when the required credential is empty.
        """
        if self.kind == ProviderKind.ANTHROPIC:
            if not api_key and not auth_token:
                raise InvalidProviderConfigError(
                    f"{self.name}: must provide either API key or auth token"
                )
            return
        if not api_key:
            raise InvalidProviderConfigError(f"{self.name}: must provide API key")

    def normalize_config(self, base_url: str) -> str:
        """Return ``base_url`` with a trailing ``/`` (empty stays empty)."""
        if base_url and not base_url.endswith("/"):
            return base_url + "/"
        return base_url


_REGISTRY: Dict[str, ProviderDescriptor] = {}
_LOCK = threading.RLock()


def register(name: str, descriptor: ProviderDescriptor) -> None:
    """Register ``descriptor`` under ``name``, replacing any existing entry."""
    with _LOCK:
        _REGISTRY[name] = descriptor


def get(name: str) -> ProviderDescriptor:
    """Return the descriptor registered under ``name``.

    Raises:
        UnknownProviderError: when ``name`` is not registered.
    """
    with _LOCK:
        descriptor = _REGISTRY.get(name)
    if descriptor is None:
        raise UnknownProviderError(f"unknown provider: {name}")
    return descriptor


def list_providers() -> List[str]:
    """Return the registered provider names, sorted."""
    with _LOCK:
        return sorted(_REGISTRY)


ANTHROPIC = ProviderDescriptor(
    name="anthropic",
    kind=ProviderKind.ANTHROPIC,
    default_base_url=ANTHROPIC_DEFAULT_BASE_URL,
    default_model=ANTHROPIC_DEFAULT_MODEL,
)

OPENAI = ProviderDescriptor(
    name="openai",
    kind=ProviderKind.OPENAI,
    default_base_url=OPENAI_DEFAULT_BASE_URL,
    default_model=OPENAI_DEFAULT_MODEL,
)

register(ANTHROPIC.name, ANTHROPIC)
register(OPENAI.name, OPENAI)


__all__ = [
    "ProviderKind",
    "ProviderDescriptor",
    "register",
    "get",
    "list_providers",
    "ANTHROPIC",
    "OPENAI",
]
