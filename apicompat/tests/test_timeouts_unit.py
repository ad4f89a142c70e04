"""Unit tests for timeout configuration parsing and caching."""
from __future__ import annotations

import pytest

from apicompat.base.timeouts import (
    CONNECT_TIMEOUT_ENV,
    HTTP_TIMEOUT_ENV,
    STREAM_TIMEOUT_ENV,
    TimeoutConfig,
    get_timeout_config,
    to_httpx_timeout,
)


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch):
    for name in (HTTP_TIMEOUT_ENV, STREAM_TIMEOUT_ENV, CONNECT_TIMEOUT_ENV):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    cfg = get_timeout_config()
    assert cfg == TimeoutConfig(30.0, 60.0, 10.0)  # nosec B101 - pytest assert in tests


def test_env_overrides_and_cache_refresh(monkeypatch):
    first = get_timeout_config()
    assert get_timeout_config() is first  # nosec B101 - pytest assert in tests

    monkeypatch.setenv(STREAM_TIMEOUT_ENV, "5")
    monkeypatch.setenv(CONNECT_TIMEOUT_ENV, "2.5")
    cfg = get_timeout_config()
    assert cfg is not first  # nosec B101 - pytest assert in tests
    assert cfg.stream_timeout_seconds == 5.0  # nosec B101 - pytest assert in tests
    assert cfg.connect_timeout_seconds == 2.5  # nosec B101 - pytest assert in tests
    assert cfg.http_timeout_seconds == 30.0  # nosec B101 - pytest assert in tests


@pytest.mark.parametrize("raw", ["abc", "0", "-3", ""])
def test_invalid_values_fall_back(monkeypatch, raw):
    monkeypatch.setenv(HTTP_TIMEOUT_ENV, raw)
    assert get_timeout_config().http_timeout_seconds == 30.0  # nosec B101 - pytest assert in tests


def test_to_httpx_timeout():
    timeout = to_httpx_timeout(TimeoutConfig(http_timeout_seconds=12.0, connect_timeout_seconds=3.0))
    assert timeout.read == 12.0 and timeout.write == 12.0 and timeout.pool == 12.0  # nosec B101 - pytest assert in tests
    assert timeout.connect == 3.0  # nosec B101 - pytest assert in tests
