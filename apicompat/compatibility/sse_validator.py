"""Provider-specific validation of SSE streams.

An SSE validator consumes a whole stream and reports how many events arrived,
which ones are malformed for the provider's protocol, and whether the
protocol's end-of-stream marker was seen (``message_stop`` for Anthropic,
``data: [DONE]`` for OpenAI).
"""
from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Union

from ..base.cancellation import CancellationToken
from ..base.errors import SSEParseError
from ..config.defaults import SSE_DESCRIPTOR_DATA_LIMIT
from ..providers.registry import ProviderKind
from .sse import Chunk, SSEEvent, SSEParser

COMPLETION_MESSAGE_STOP = "message_stop"
COMPLETION_DONE = "done"
DONE_SENTINEL = "[DONE]"


@dataclass
class SSEValidationResult:
    """Outcome of validating one SSE stream."""

    valid: bool = False
    event_count: int = 0
    has_completion_signal: bool = False
    completion_type: str = ""
    malformed_events: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


def truncate(text: str, limit: int = SSE_DESCRIPTOR_DATA_LIMIT) -> str:
    """Return ``text`` cut to ``limit`` characters, marking the cut with ``...``."""
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


def _json_object(data: str) -> Optional[Dict[str, Any]]:
    try:
        parsed = json.loads(data)
    except ValueError:
        return None
    return parsed if isinstance(parsed, dict) else None


class SSEValidator(ABC):
    """Validates an SSE stream against one provider's streaming protocol."""

    completion_type: str = ""

    @abstractmethod
    def is_valid_event_format(self, event: SSEEvent) -> bool:
        """Return whether ``event`` is well-formed for this protocol."""

    @abstractmethod
    def is_completion_signal(self, event: SSEEvent) -> bool:
        """Return whether ``event`` marks the end of the response."""

    @abstractmethod
    def describe_malformed(self, event: SSEEvent) -> str:
        """Return a short diagnostic descriptor for a malformed event."""

    def validate_stream(
        self,
        source: Iterable[Chunk],
        *,
        cancel_token: Optional[CancellationToken] = None,
        deadline: Optional[float] = None,
    ) -> SSEValidationResult:
        """Parse ``source`` completely and validate every event.

        A read failure discards any partial findings and yields
        ``valid=False`` with a single ``"parse error: ..."`` entry in
        ``errors``. ``CancelledError`` propagates to the caller.
        """
        result = SSEValidationResult()
        parser = SSEParser(source, cancel_token=cancel_token, deadline=deadline)
        try:
            events = parser.parse_all()
        except SSEParseError as exc:
            result.errors.append(f"parse error: {exc}")
            return result

        result.event_count = len(events)
        for event in events:
            if not self.is_valid_event_format(event):
                result.malformed_events.append(self.describe_malformed(event))
            if self.is_completion_signal(event):
                result.has_completion_signal = True
                result.completion_type = self.completion_type
        result.valid = (
            result.event_count > 0 and result.has_completion_signal and not result.malformed_events
        )
        return result


class AnthropicSSEValidator(SSEValidator):
    """Messages API streams: JSON object payloads, ends with ``message_stop``."""

    completion_type = COMPLETION_MESSAGE_STOP

    def is_valid_event_format(self, event: SSEEvent) -> bool:
        if not event.event and not event.data:
            return False
        return not event.data or _json_object(event.data) is not None

    def is_completion_signal(self, event: SSEEvent) -> bool:
        if event.event == COMPLETION_MESSAGE_STOP:
            return True
        if not event.data:
            return False
        payload = _json_object(event.data)
        return payload is not None and payload.get("type") == COMPLETION_MESSAGE_STOP

    def describe_malformed(self, event: SSEEvent) -> str:
        return f"event={event.event}, data={truncate(event.data)}"


class OpenAISSEValidator(SSEValidator):
    """Chat Completions streams: JSON chunk payloads, ends with ``[DONE]``."""

    completion_type = COMPLETION_DONE

    def is_valid_event_format(self, event: SSEEvent) -> bool:
        if not event.data:
            return False
        if event.data.strip() == DONE_SENTINEL:
            return True
        return _json_object(event.data) is not None

    def is_completion_signal(self, event: SSEEvent) -> bool:
        return event.data.strip() == DONE_SENTINEL

    def describe_malformed(self, event: SSEEvent) -> str:
        return f"data={truncate(event.data)}"


def new_sse_validator(provider: Union[str, ProviderKind]) -> SSEValidator:
    """Return the SSE validator for ``provider``; unknown names get OpenAI's."""
    if provider == ProviderKind.ANTHROPIC:
        return AnthropicSSEValidator()
    return OpenAISSEValidator()


__all__ = [
    "COMPLETION_MESSAGE_STOP",
    "COMPLETION_DONE",
    "DONE_SENTINEL",
    "SSEValidationResult",
    "SSEValidator",
    "AnthropicSSEValidator",
    "OpenAISSEValidator",
    "new_sse_validator",
    "truncate",
]
