"""Fetch primitives: the options handed to a fetch call and the response it returns.

Any callable ``fetch(url, FetchOptions)`` returning a response object (or an
awaitable of one, for the async client) can back a request client. The
``HttpxFetch`` and ``AsyncHttpxFetch`` classes are the default ones.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping
from urllib.parse import parse_qs

import httpx

from .encoding import MULTIPART_CONTENT_TYPE, MultipartForm


CACHE_CONTROL_MODES = {
    "no-cache": "no-cache",
    "reload": "no-cache",
    "no-store": "no-store",
}

REDIRECT_MODES = {"follow": True, "manual": False, "error": False}


@dataclass(frozen=True)
class FetchOptions:
    method: str
    headers: Mapping[str, Any]
    body: Any = None
    mode: str | None = None
    cache: str | None = None
    credentials: str | None = None
    extra: Mapping[str, Any] = field(default_factory=dict)


class FetchResponse:
    """Fetch-style view over an ``httpx.Response``."""

    def __init__(self, response: httpx.Response) -> None:
        self._response = response

    @property
    def raw(self) -> httpx.Response:
        return self._response

    @property
    def status(self) -> int:
        return self._response.status_code

    @property
    def status_text(self) -> str:
        return self._response.reason_phrase

    @property
    def ok(self) -> bool:
        return self._response.is_success

    @property
    def headers(self) -> httpx.Headers:
        return self._response.headers

    @property
    def url(self) -> str:
        return str(self._response.url)

    def json(self) -> Any:
        return self._response.json()

    def text(self) -> str:
        return self._response.text

    def blob(self) -> bytes:
        return self._response.content

    def form_data(self) -> dict[str, list[str]]:
        return parse_qs(self._response.text, keep_blank_values=True)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} [{self.status} {self.status_text}]>"


class AsyncFetchResponse(FetchResponse):
    """Same as ``FetchResponse`` with coroutine body materializers."""

    async def json(self) -> Any:  # type: ignore[override]
        await self._response.aread()
        return self._response.json()

    async def text(self) -> str:  # type: ignore[override]
        await self._response.aread()
        return self._response.text

    async def blob(self) -> bytes:  # type: ignore[override]
        return await self._response.aread()

    async def form_data(self) -> dict[str, list[str]]:  # type: ignore[override]
        await self._response.aread()
        return parse_qs(self._response.text, keep_blank_values=True)


def _is_bare_multipart(content_type: str) -> bool:
    return MULTIPART_CONTENT_TYPE in content_type and "boundary=" not in content_type


def build_request_kwargs(url: str, options: FetchOptions) -> dict[str, Any]:
    """Translate fetch options into ``httpx`` request arguments."""
    headers = {str(key): str(value) for key, value in options.headers.items() if value is not None}
    kwargs: dict[str, Any] = {"method": options.method, "url": url}

    body = options.body
    if isinstance(body, MultipartForm):
        # httpx writes its own content-type with the boundary
        for key in [k for k in headers if k.lower() == "content-type"]:
            if _is_bare_multipart(headers[key]):
                del headers[key]
        kwargs["files"] = body.to_httpx_files()
    elif isinstance(body, (str, bytes)):
        kwargs["content"] = body
    elif isinstance(body, Mapping):
        kwargs["data"] = dict(body)
    elif body is not None:
        kwargs["content"] = body

    cache_control = CACHE_CONTROL_MODES.get(options.cache or "")
    if cache_control and not any(k.lower() == "cache-control" for k in headers):
        headers["cache-control"] = cache_control

    redirect = options.extra.get("redirect")
    if redirect in REDIRECT_MODES:
        kwargs["follow_redirects"] = REDIRECT_MODES[redirect]

    kwargs["headers"] = headers
    return kwargs


class HttpxFetch:
    """Blocking fetch over an ``httpx.Client``."""

    def __init__(self, client: httpx.Client) -> None:
        self._client = client

    def __call__(self, url: str, options: FetchOptions) -> FetchResponse:
        return FetchResponse(self._client.request(**build_request_kwargs(url, options)))


class AsyncHttpxFetch:
    """Non-blocking fetch over an ``httpx.AsyncClient``."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def __call__(self, url: str, options: FetchOptions) -> AsyncFetchResponse:
        response = await self._client.request(**build_request_kwargs(url, options))
        return AsyncFetchResponse(response)
