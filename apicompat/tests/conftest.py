"""Pytest configuration for the apicompat test suite.

Probes never touch the network here: every tester built through
``make_tester`` receives an ``httpx.Client`` backed by ``httpx.MockTransport``
so the wire exchange is fully scripted by the test.
"""

from __future__ import annotations

from typing import Callable, Iterator, List

import httpx
import pytest

from apicompat.base.http import close_all_clients
from apicompat.compatibility import APIConfiguration, Tester, TesterOptions


@pytest.fixture(autouse=True)
def _clean_http_pool() -> Iterator[None]:
    """Close pooled clients created by a test so none leak into the next."""
    yield
    close_all_clients()


@pytest.fixture()
def make_tester() -> Iterator[Callable[..., Tester]]:
    """Return a factory building a ``Tester`` whose client uses ``handler``."""

    clients: List[httpx.Client] = []

    def _make(config: APIConfiguration, handler, **options) -> Tester:
        client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(client)
        return Tester(config, TesterOptions(client=client, **options))

    yield _make
    for client in clients:
        client.close()
