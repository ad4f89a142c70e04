"""Shared helpers for compatibility tests.

Canned provider payloads plus small ``httpx.MockTransport`` handlers so test
modules can script an endpoint's behaviour in one line.
"""
from __future__ import annotations

import json
from typing import Callable, Iterable, Iterator, List, Optional

import httpx

Handler = Callable[[httpx.Request], httpx.Response]

ANTHROPIC_OK = {
    "id": "msg_01",
    "type": "message",
    "role": "assistant",
    "content": [{"type": "text", "text": "pong"}],
    "model": "claude-3-sonnet-20240229",
    "stop_reason": "end_turn",
    "usage": {"input_tokens": 8, "output_tokens": 2},
}

OPENAI_OK = {
    "id": "chatcmpl-1",
    "object": "chat.completion",
    "model": "gpt-4",
    "choices": [{"index": 0, "message": {"role": "assistant", "content": "pong"}, "finish_reason": "stop"}],
    "usage": {"prompt_tokens": 8, "completion_tokens": 2, "total_tokens": 10},
}

ANTHROPIC_STREAM = (
    b"event: message_start\n"
    b'data: {"type":"message_start","message":{"id":"msg_01"}}\n\n'
    b"event: content_block_delta\n"
    b'data: {"type":"content_block_delta","delta":{"type":"text_delta","text":"pong"}}\n\n'
    b"event: message_stop\n"
    b'data: {"type":"message_stop"}\n\n'
)

OPENAI_STREAM = (
    b'data: {"id":"c1","choices":[{"delta":{"content":"po"}}]}\n\n'
    b'data: {"id":"c1","choices":[{"delta":{"content":"ng"}}]}\n\n'
    b"data: [DONE]\n\n"
)


class FailingStream(httpx.SyncByteStream):
    """Body stream that yields ``chunks`` and then fails like a dropped socket."""

    def __init__(self, chunks: Iterable[bytes] = ()) -> None:
        self._chunks = list(chunks)

    def __iter__(self) -> Iterator[bytes]:
        yield from self._chunks
        raise httpx.ReadError("connection reset by peer")


class Recorder:
    """Mock transport handler that records requests and dispatches on ``stream``."""

    def __init__(self, basic: Handler, streaming: Optional[Handler] = None) -> None:
        self.basic = basic
        self.streaming = streaming or basic
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        body = json.loads(request.content or b"{}")
        if body.get("stream"):
            return self.streaming(request)
        return self.basic(request)


def json_response(payload, status: int = 200) -> Handler:
    return lambda request: httpx.Response(status, json=payload)


def sse_response(content, status: int = 200) -> Handler:
    return lambda request: httpx.Response(
        status, content=content, headers={"content-type": "text/event-stream"}
    )


def failing_response(chunks: Iterable[bytes] = ()) -> Handler:
    return lambda request: httpx.Response(200, stream=FailingStream(chunks))


def raising(exc: Exception) -> Handler:
    def _handler(request: httpx.Request) -> httpx.Response:
        raise exc

    return _handler
