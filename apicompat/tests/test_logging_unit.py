"""Unit coverage for structured logging utilities and helpers."""

from __future__ import annotations

import io
import json
import logging

from apicompat.base.log_support import JsonFormatter
from apicompat.base.logging import (
    LogContext,
    configure_logger,
    get_logger,
    log_event,
)


def _capture_base() -> io.StringIO:
    """Swap the base logger's managed handler for one writing to a buffer."""
    base_logger = logging.getLogger("apicompat")
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler.setLevel(base_logger.level)
    setattr(handler, "_apicompat_console_handler", True)
    base_logger.handlers[:] = [handler]
    return stream


def test_get_logger_env_overrides_level(monkeypatch, capsys):
    monkeypatch.setenv("APICOMPAT_LOG_LEVEL", "ERROR")
    logger = get_logger(name="apicompat.test", json_mode=True, level=logging.DEBUG)
    logger.info("hello")
    assert capsys.readouterr().err == ""  # nosec B101 - pytest assert in tests
    logger.error("fail")
    data = json.loads(capsys.readouterr().err.strip())
    assert data["level"] == "ERROR"  # nosec B101 - pytest assert in tests
    assert data["logger"] == "apicompat.test"  # nosec B101 - pytest assert in tests
    assert data["msg"] == "fail"  # nosec B101 - pytest assert in tests


def test_log_event_emits_flat_json(capsys):
    logger = get_logger(name="apicompat.test.events", json_mode=True)
    ctx = LogContext(alias="prod", provider="openai", model="gpt-4").with_probe("basic")
    log_event(logger, "probe.check", ctx, check="Connection", passed=True, error=None)

    data = json.loads(capsys.readouterr().err.strip())
    assert data["event"] == "probe.check"  # nosec B101 - pytest assert in tests
    assert data["alias"] == "prod" and data["probe"] == "basic"  # nosec B101 - pytest assert in tests
    assert data["check"] == "Connection" and data["passed"] is True  # nosec B101 - pytest assert in tests
    assert "error" not in data and "msg" not in data  # nosec B101 - pytest assert in tests


def test_log_event_skips_disabled_levels(capsys):
    logger = get_logger(name="apicompat.test.debug", json_mode=True)
    log_event(logger, "probe.exchange", level=logging.DEBUG, request_body="{}")
    assert capsys.readouterr().err == ""  # nosec B101 - pytest assert in tests


def test_log_context_prunes_none_and_merges_extra():
    ctx = LogContext(provider="anthropic", extra={"attempt": 1, "skip": None})
    assert ctx.to_dict() == {"provider": "anthropic", "attempt": 1}  # nosec B101 - pytest assert in tests
    tagged = ctx.with_probe("streaming")
    assert tagged.probe == "streaming" and ctx.probe is None  # nosec B101 - pytest assert in tests


def test_json_formatter_hoists_json_message() -> None:
    formatter = JsonFormatter()
    record = logging.LogRecord(
        name="apicompat.test.json",
        level=logging.INFO,
        pathname=__file__,
        lineno=0,
        msg=json.dumps({"provider": "openai", "event": "probe.finish"}),
        args=(),
        exc_info=None,
    )
    payload = json.loads(formatter.format(record))
    assert payload["provider"] == "openai"  # nosec B101 - pytest assert in tests
    assert "msg" not in payload  # nosec B101 - pytest assert in tests


def test_child_logger_uses_parent_handler_without_duplicates() -> None:
    logger = get_logger(name="apicompat.test.child", json_mode=False)
    stream = _capture_base()

    logger.info("alpha")
    lines = [ln for ln in stream.getvalue().splitlines() if ln]
    assert lines == ["alpha"]  # nosec B101 - pytest assert in tests


def test_configure_logger_raises_threshold() -> None:
    logger = get_logger(name="apicompat.test.levels", json_mode=False)
    try:
        configure_logger(level="WARNING", json_mode=False)
        stream = _capture_base()
        logger.info("hidden")
        logger.error("visible")
        lines = [ln for ln in stream.getvalue().splitlines() if ln]
        assert lines == ["visible"]  # nosec B101 - pytest assert in tests
    finally:
        configure_logger(level=logging.INFO)
