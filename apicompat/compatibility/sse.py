"""Server-Sent Events parsing.

Purpose
-------
Turn a chunked byte stream (normally ``httpx.Response.iter_bytes()``) into
discrete :class:`SSEEvent` records, independent of any provider's payloads.

Notes
-----
- Lines end at ``\\n``; a trailing ``\\r`` is dropped. Bytes are decoded
  incrementally, so multi-byte UTF-8 sequences may straddle chunks.
- ``data:`` and ``event:`` lines make an event non-empty; ``id:`` and
  ``retry:`` lines alone do not. Comment lines (``:``) and unknown fields are
  ignored. A final unterminated line is still processed at end of stream.
- Between lines the parser polls an optional :class:`CancellationToken` and a
  monotonic deadline, so a stalled-but-trickling stream cannot run forever.
  A single blocking read is bounded by the transport's read timeout.
"""
from __future__ import annotations

import codecs
import contextlib
import time
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Union

import httpx

from ..base.cancellation import CancellationToken
from ..base.errors import SSEParseError

Chunk = Union[bytes, str]


@dataclass
class SSEEvent:
    """One dispatched SSE event."""

    event: str = ""
    data: str = ""
    id: str = ""
    retry: int = 0


def _field_value(line: str, prefix: str) -> str:
    value = line[len(prefix):]
    return value[1:] if value.startswith(" ") else value


class SSEParser:
    """Incremental SSE parser over an iterable of chunks.

    Example::

        with client.stream("POST", url, json=body) as resp:
            for event in SSEParser(resp.iter_bytes(), deadline=time.monotonic() + 60):
                ...
    """

    def __init__(
        self,
        source: Iterable[Chunk],
        *,
        cancel_token: Optional[CancellationToken] = None,
        deadline: Optional[float] = None,
    ) -> None:
        self._chunks: Iterator[Chunk] = iter(source)
        self._decoder = codecs.getincrementaldecoder("utf-8")()
        self._buffer = ""
        self._eof = False
        self._cancel_token = cancel_token
        self._deadline = deadline

    def _check_limits(self) -> None:
        if self._cancel_token is not None:
            self._cancel_token.raise_if_cancelled()
        if self._deadline is not None and time.monotonic() > self._deadline:
            raise SSEParseError("stream deadline exceeded while reading SSE events")

    def _fill(self) -> bool:
        """Read one more chunk into the buffer; False once the source is exhausted."""
        try:
            chunk = next(self._chunks)
        except StopIteration:
            try:
                self._buffer += self._decoder.decode(b"", final=True)
            except UnicodeDecodeError as exc:
                raise SSEParseError(f"error reading SSE stream: {exc}") from exc
            return False
        except (httpx.TransportError, httpx.StreamError, OSError) as exc:
            raise SSEParseError(f"error reading SSE stream: {exc}") from exc
        if isinstance(chunk, str):
            self._buffer += chunk
            return True
        try:
            self._buffer += self._decoder.decode(chunk)
        except UnicodeDecodeError as exc:
            raise SSEParseError(f"error reading SSE stream: {exc}") from exc
        return True

    def _read_line(self) -> Optional[str]:
        """Return the next line without its terminator, or ``None`` at EOF."""
        self._check_limits()
        while "\n" not in self._buffer:
            if self._eof or not self._fill():
                self._eof = True
                if not self._buffer:
                    return None
                line, self._buffer = self._buffer, ""
                return line[:-1] if line.endswith("\r") else line
            self._check_limits()
        line, _, self._buffer = self._buffer.partition("\n")
        return line[:-1] if line.endswith("\r") else line

    def parse_event(self) -> Optional[SSEEvent]:
        """Return the next event, or ``None`` at end of stream.

        Raises:
            SSEParseError: on read or decode failure, or deadline expiry.
            CancelledError: when the cancellation token fires.
        """
        event = SSEEvent()
        data_lines: List[str] = []
        has_content = False
        while True:
            line = self._read_line()
            if line is None:
                break
            if line == "":
                if has_content:
                    break
                continue
            if line.startswith("data:"):
                data_lines.append(_field_value(line, "data:"))
                has_content = True
            elif line.startswith("event:"):
                event.event = _field_value(line, "event:")
                has_content = True
            elif line.startswith("id:"):
                event.id = _field_value(line, "id:")
            elif line.startswith("retry:"):
                with contextlib.suppress(ValueError):
                    event.retry = int(_field_value(line, "retry:").strip())
            # comments (":") and unknown fields are ignored
        if not has_content:
            return None
        event.data = "\n".join(data_lines)
        return event

    def parse_all(self) -> List[SSEEvent]:
        """Consume the stream and return every event in order."""
        return list(self)

    def __iter__(self) -> Iterator[SSEEvent]:
        while True:
            event = self.parse_event()
            if event is None:
                return
            yield event


__all__ = ["SSEEvent", "SSEParser"]
