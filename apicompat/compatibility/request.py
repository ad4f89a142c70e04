"""Provider-specific probe request construction.

Purpose
-------
Build the minimal chat request used by every probe: a single ``"ping"`` user
message with ``max_tokens`` capped, optionally asking for a streamed answer.

Notes
-----
- Anthropic probes go to ``/v1/messages`` and carry ``anthropic-version``
  plus whichever credentials are configured (``x-api-key`` and/or a bearer
  token).
- OpenAI probes go to ``/v1/chat/completions`` with a bearer API key.
- When the base URL path already ends in ``/v1`` the endpoint's own ``/v1``
  prefix is not repeated (``https://api.openai.com/v1`` plus
  ``/v1/chat/completions`` yields ``.../v1/chat/completions``).
- Descriptors of an unrecognized kind are probed with the OpenAI format, which
  most third-party gateways speak.
"""
from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Any, Dict
from urllib.parse import urlsplit

import httpx

from ..base.errors import RequestConstructionError
from ..config.defaults import (
    ANTHROPIC_API_VERSION,
    PROBE_MAX_TOKENS,
    PROBE_PROMPT,
    PROBE_ROLE,
)
from ..providers.registry import ProviderDescriptor, ProviderKind
from .types import APIConfiguration, RequestSpec

_VERSION_PREFIX = "/v1"


def _base_path(base: str) -> str:
    try:
        return urlsplit(base).path
    except ValueError:
        return base


def _join_url(base_url: str, endpoint: str) -> str:
    base = base_url.rstrip("/")
    if _base_path(base).endswith(_VERSION_PREFIX) and endpoint.startswith(_VERSION_PREFIX + "/"):
        endpoint = endpoint[len(_VERSION_PREFIX):]
    return base + endpoint


def build_probe_body(model: str, streaming: bool) -> Dict[str, Any]:
    """Return the probe payload; ``stream`` is present only when streaming."""
    body: Dict[str, Any] = {
        "model": model,
        "max_tokens": PROBE_MAX_TOKENS,
        "messages": [{"role": PROBE_ROLE, "content": PROBE_PROMPT}],
    }
    if streaming:
        body["stream"] = True
    return body


class RequestBuilder(ABC):
    """Builds the chat probe request for one provider protocol."""

    def __init__(self, base_url: str) -> None:
        self.base_url = base_url

    @abstractmethod
    def get_endpoint(self) -> str:
        """Return the API endpoint path (leading ``/``)."""

    @abstractmethod
    def get_headers(self) -> Dict[str, str]:
        """Return the headers sent with every probe."""

    def build_chat_request(self, model: str, streaming: bool) -> RequestSpec:
        """Return a ``POST`` request for ``model``.

        Raises:
            RequestConstructionError: if the body cannot be serialized.
        """
        try:
            body = json.dumps(build_probe_body(model, streaming)).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise RequestConstructionError(f"failed to marshal request body: {exc}") from exc
        return RequestSpec(
            method="POST",
            url=_join_url(self.base_url, self.get_endpoint()),
            headers=self.get_headers(),
            body=body,
        )


class AnthropicRequestBuilder(RequestBuilder):
    """Anthropic Messages API probe."""

    def __init__(self, base_url: str, api_key: str = "", auth_token: str = "") -> None:
        super().__init__(base_url)
        self.api_key = api_key
        self.auth_token = auth_token

    def get_endpoint(self) -> str:
        return "/v1/messages"

    def get_headers(self) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "anthropic-version": ANTHROPIC_API_VERSION,
        }
        if self.api_key:
            headers["x-api-key"] = self.api_key
        if self.auth_token:
            headers["Authorization"] = f"Bearer {self.auth_token}"
        return headers


class OpenAIRequestBuilder(RequestBuilder):
    """OpenAI Chat Completions API probe."""

    def __init__(self, base_url: str, api_key: str = "") -> None:
        super().__init__(base_url)
        self.api_key = api_key

    def get_endpoint(self) -> str:
        return "/v1/chat/completions"

    def get_headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }


class CustomPathRequestBuilder(RequestBuilder):
    """Wraps another builder and sends its request to a different path.

    Only the path component of the URL changes; scheme, host, query, headers
    and body are those of the wrapped builder.
    """

    def __init__(self, inner: RequestBuilder, custom_path: str) -> None:
        super().__init__(inner.base_url)
        self.inner = inner
        self.custom_path = custom_path

    def get_endpoint(self) -> str:
        return self.custom_path

    def get_headers(self) -> Dict[str, str]:
        return self.inner.get_headers()

    def build_chat_request(self, model: str, streaming: bool) -> RequestSpec:
        spec = self.inner.build_chat_request(model, streaming)
        try:
            url = httpx.URL(spec.url)
        except httpx.InvalidURL as exc:
            raise RequestConstructionError(f"failed to create request with custom path: {exc}") from exc
        path = url.path
        base = self.inner.base_url.rstrip("/")
        appended = _join_url(base, self.inner.get_endpoint())[len(base):]
        if appended and path.endswith(appended):
            path = path[: -len(appended)]
        new_path = path.rstrip("/") + self.custom_path
        spec.url = str(url.copy_with(path=new_path))
        return spec


def new_request_builder(
    config: APIConfiguration,
    descriptor: ProviderDescriptor,
    custom_path: str = "",
) -> RequestBuilder:
    """Return the builder for ``descriptor``'s protocol.

    The configured base URL wins over the descriptor default. A non-empty
    ``custom_path`` wraps the builder in :class:`CustomPathRequestBuilder`.
    """
    base_url = config.base_url or descriptor.default_base_url
    builder: RequestBuilder
    if descriptor.kind == ProviderKind.ANTHROPIC:
        builder = AnthropicRequestBuilder(base_url, config.api_key, config.auth_token)
    else:
        builder = OpenAIRequestBuilder(base_url, config.api_key)
    if custom_path:
        return CustomPathRequestBuilder(builder, custom_path)
    return builder


__all__ = [
    "RequestBuilder",
    "AnthropicRequestBuilder",
    "OpenAIRequestBuilder",
    "CustomPathRequestBuilder",
    "build_probe_body",
    "new_request_builder",
]
