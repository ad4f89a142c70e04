"""Structured logging context object for probe events.

Defines :class:`LogContext`, a dataclass carrying the fields common to every
event of one compatibility run (configuration alias, provider, model, probe
kind). ``to_dict`` merges the ``extra`` mapping and prunes ``None`` values.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Structured context for compatibility probe log events."""

    alias: Optional[str] = None
    provider: Optional[str] = None
    model: Optional[str] = None
    probe: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def with_probe(self, probe: str) -> "LogContext":
        """Return a copy of this context tagged with ``probe``."""
        return replace(self, probe=probe, extra=dict(self.extra))

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra", {}) or {}
        data.update({k: v for k, v in extra.items() if v is not None})
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["LogContext"]
