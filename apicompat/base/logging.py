"""Structured logging utilities for the compatibility engine.

Every logger handed out by :func:`get_logger` is a child of one shared
``apicompat`` logger. Only that base logger owns a handler: a console
``StreamHandler`` on ``sys.stderr`` formatted as JSON (or plain text when
requested). The engine never writes log files on its own.

Environment
-----------
APICOMPAT_LOG_LEVEL
    Level name (``DEBUG``, ``INFO``, ``WARNING``...) that overrides the level
    requested in code. Unknown names are ignored.

Probe code emits events with :func:`log_event`, which serializes a flat JSON
payload (``event`` plus :class:`LogContext` fields plus extra fields) that
:class:`JsonFormatter` hoists to the top level of the record.
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from typing import Any, Iterator

from .log_support import JsonFormatter, LogContext


BASE_LOGGER_NAME = "apicompat"
LOG_LEVEL_ENV = "APICOMPAT_LOG_LEVEL"
PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

# Marker attributes: one on the base logger once set up, one on handlers we own.
_BASE_LOGGER_ATTR = "_apicompat_logger_initialized"
_CONSOLE_HANDLER_ATTR = "_apicompat_console_handler"


def _make_formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(PLAIN_FORMAT)


def _new_console_handler(json_mode: bool, level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(_make_formatter(json_mode))
    setattr(handler, _CONSOLE_HANDLER_ATTR, True)
    return handler


def _managed_handlers(logger: logging.Logger) -> Iterator[logging.Handler]:
    return (h for h in list(logger.handlers) if getattr(h, _CONSOLE_HANDLER_ATTR, False))


def _parse_level(value: str | None, default: int = logging.INFO) -> int:
    """Return the numeric level for a name such as ``"debug"``, else ``default``."""
    if not value:
        return default
    resolved = logging.getLevelName(value.strip().upper())
    return resolved if isinstance(resolved, int) else default


def _refresh_console_handlers(logger: logging.Logger, json_mode: bool, level: int) -> None:
    """Re-point managed handlers at the current ``sys.stderr``.

    pytest's ``capsys`` swaps ``sys.stderr`` between tests; a handler whose
    stream has been closed is replaced outright.
    """
    for handler in _managed_handlers(logger):
        stream = getattr(handler, "stream", None)
        if stream is None or getattr(stream, "closed", False):
            logger.removeHandler(handler)
            with contextlib.suppress(Exception):
                handler.close()
            logger.addHandler(_new_console_handler(json_mode, level))
            continue
        handler.setLevel(level)
        if isinstance(handler, logging.StreamHandler):
            handler.setStream(sys.stderr)
        if json_mode != isinstance(handler.formatter, JsonFormatter):
            handler.setFormatter(_make_formatter(json_mode))


def _ensure_base_logger(json_mode: bool, level: int) -> logging.Logger:
    """Set up the shared ``apicompat`` logger on first use and return it.

    The ``APICOMPAT_LOG_LEVEL`` environment variable wins over ``level``.
    """
    logger = logging.getLogger(BASE_LOGGER_NAME)
    effective = _parse_level(os.getenv(LOG_LEVEL_ENV), default=level)
    logger.setLevel(effective)
    if getattr(logger, _BASE_LOGGER_ATTR, False):
        _refresh_console_handlers(logger, json_mode, effective)
        return logger

    logger.handlers[:] = [_new_console_handler(json_mode, effective)]
    logger.propagate = False
    setattr(logger, _BASE_LOGGER_ATTR, True)
    return logger


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True, level: int = logging.INFO) -> logging.Logger:
    """Return logger ``name``, routed through the shared base logger.

    Child loggers keep no managed handlers and inherit the base level, so each
    record is emitted exactly once.
    """
    base = _ensure_base_logger(json_mode=json_mode, level=level)
    if name == BASE_LOGGER_NAME:
        return base

    child = logging.getLogger(name)
    for handler in _managed_handlers(child):
        child.removeHandler(handler)
        with contextlib.suppress(Exception):
            handler.close()
    child.setLevel(logging.NOTSET)
    child.propagate = True
    return child


def configure_logger(
    *,
    level: int | str | None = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Change the level and output format of the shared logger at runtime.

    ``level`` may be numeric or a level name; ``None`` keeps the current one.
    Managed console handlers follow the new level and format.
    """
    logger = _ensure_base_logger(json_mode=json_mode, level=logging.INFO)
    if isinstance(level, str):
        logger.setLevel(_parse_level(level, default=logger.level))
    elif level is not None:
        logger.setLevel(level)
    for handler in _managed_handlers(logger):
        handler.setLevel(logger.level)
        handler.setFormatter(_make_formatter(json_mode))
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    """Emit ``event`` as one JSON log line.

    The payload merges ``ctx`` and ``fields``; fields set to ``None`` are
    dropped. Nothing is serialized when ``level`` is disabled.
    """
    if not logger.isEnabledFor(level):
        return
    payload: dict[str, Any] = {"event": event}
    if ctx is not None:
        payload.update(ctx.to_dict())
    payload.update((k, v) for k, v in fields.items() if v is not None)
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


__all__ = [
    "BASE_LOGGER_NAME",
    "LOG_LEVEL_ENV",
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
]
