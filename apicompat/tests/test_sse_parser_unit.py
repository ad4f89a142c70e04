"""Unit tests for the SSE parser."""
from __future__ import annotations

import io
import time

import httpx
import pytest

from apicompat.base.cancellation import CancellationToken, CancelledError
from apicompat.base.errors import SSEParseError
from apicompat.compatibility.sse import SSEEvent, SSEParser
from apicompat.tests.utils import FailingStream


def test_parses_typed_events_with_ids_and_retry():
    stream = [
        b"event: ping\n",
        b"id: 7\n",
        b"retry: 3000\n",
        b"data: {\"a\": 1}\n",
        b"\n",
        b"data: second\n\n",
    ]
    events = SSEParser(stream).parse_all()
    assert events == [  # nosec B101 - pytest assert in tests
        SSEEvent(event="ping", data='{"a": 1}', id="7", retry=3000),
        SSEEvent(data="second"),
    ]


def test_multiline_data_is_newline_joined():
    events = SSEParser([b"data: first\ndata: second\ndata:third\n\n"]).parse_all()
    assert [e.data for e in events] == ["first\nsecond\nthird"]  # nosec B101 - pytest assert in tests


def test_crlf_line_endings_and_split_chunks():
    chunks = [b"da", b"ta: hel", b"lo\r", b"\n\r\n", b"data: x\r\n\r\n"]
    events = SSEParser(chunks).parse_all()
    assert [e.data for e in events] == ["hello", "x"]  # nosec B101 - pytest assert in tests


def test_multibyte_utf8_split_across_chunks():
    payload = "data: café ✓\n\n".encode("utf-8")
    chunks = [payload[i : i + 1] for i in range(len(payload))]
    events = SSEParser(chunks).parse_all()
    assert events[0].data == "café ✓"  # nosec B101 - pytest assert in tests


def test_comments_unknown_fields_and_blank_lines_are_skipped():
    stream = [b"\n\n: keep-alive\nfoo: bar\n\ndata: x\n\n\n\n"]
    events = SSEParser(stream).parse_all()
    assert events == [SSEEvent(data="x")]  # nosec B101 - pytest assert in tests


def test_id_or_retry_alone_do_not_form_an_event():
    events = SSEParser([b"id: 1\nretry: 10\n\ndata: y\n\n"]).parse_all()
    assert len(events) == 1  # nosec B101 - pytest assert in tests
    assert events[0].data == "y"  # nosec B101 - pytest assert in tests


def test_invalid_retry_is_ignored():
    events = SSEParser([b"retry: soon\ndata: z\n\n"]).parse_all()
    assert events[0].retry == 0  # nosec B101 - pytest assert in tests


def test_event_without_data_is_returned():
    events = SSEParser([b"event: message_stop\n\n"]).parse_all()
    assert events == [SSEEvent(event="message_stop")]  # nosec B101 - pytest assert in tests


def test_partial_event_at_eof_is_returned_once():
    parser = SSEParser([b"data: one\n\ndata: tail"])
    assert parser.parse_event().data == "one"  # nosec B101 - pytest assert in tests
    assert parser.parse_event().data == "tail"  # nosec B101 - pytest assert in tests
    assert parser.parse_event() is None  # nosec B101 - pytest assert in tests
    assert parser.parse_event() is None  # nosec B101 - pytest assert in tests


def test_empty_stream_yields_nothing():
    assert SSEParser([]).parse_all() == []  # nosec B101 - pytest assert in tests
    assert SSEParser([b"\n\n\n"]).parse_event() is None  # nosec B101 - pytest assert in tests


def test_accepts_text_chunks_and_file_objects():
    assert [e.data for e in SSEParser(["data: a\n\n", "data: b\n\n"])] == ["a", "b"]  # nosec B101 - pytest assert in tests
    assert SSEParser(io.BytesIO(b"data: c\n\n")).parse_all()[0].data == "c"  # nosec B101 - pytest assert in tests


def test_transport_error_becomes_parse_error():
    parser = SSEParser(FailingStream([b"data: ok\n\n", b"data: cut"]))
    assert parser.parse_event().data == "ok"  # nosec B101 - pytest assert in tests
    with pytest.raises(SSEParseError, match="connection reset"):
        parser.parse_event()


def test_invalid_utf8_becomes_parse_error():
    with pytest.raises(SSEParseError):
        SSEParser([b"data: \xff\xfe\n\n"]).parse_all()


def test_expired_deadline_raises_parse_error():
    parser = SSEParser([b"data: a\n\n"], deadline=time.monotonic() - 1)
    with pytest.raises(SSEParseError, match="deadline exceeded"):
        parser.parse_event()


def test_cancellation_between_events_propagates():
    token = CancellationToken()

    def chunks():
        yield b"data: first\n\n"
        token.cancel("operator abort")
        yield b"data: second\n\n"

    parser = SSEParser(chunks(), cancel_token=token)
    assert parser.parse_event().data == "first"  # nosec B101 - pytest assert in tests
    with pytest.raises(CancelledError, match="operator abort"):
        parser.parse_event()


def test_reads_httpx_response_stream():
    response = httpx.Response(200, content=b"data: a\n\ndata: [DONE]\n\n")
    events = SSEParser(response.iter_bytes()).parse_all()
    assert [e.data for e in events] == ["a", "[DONE]"]  # nosec B101 - pytest assert in tests
