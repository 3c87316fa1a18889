"""Synchronous and asynchronous request clients."""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Union

import httpx

from .config import ClientConfig, lower_keys
from .encoding import FORM_CONTENT_TYPE, encode_body, encode_query, resolve_content_type, serialize_body
from .exceptions import (
    HTTPStatusError,
    InvalidURLError,
    RequestCanceledError,
    RequestError,
    normalize_error,
)
from .request_options import RequestOptions, options_mapping
from .security import is_valid_url, sanitize_headers
from .transport import AsyncHttpxFetch, FetchOptions, HttpxFetch


logger = logging.getLogger(__name__)

FORM_HEADERS = {"content-type": f"{FORM_CONTENT_TYPE};charset=UTF-8"}

# fetch-style response type names that differ from the Python method names
RESPONSE_TYPE_METHODS = {"formData": "form_data"}

Options = Union[RequestOptions, Mapping[str, Any], None]


@dataclass(frozen=True)
class _PreparedSend:
    url: str
    config: ClientConfig
    headers: dict[str, Any]
    body: Any

    def fetch_options(self) -> FetchOptions:
        config = self.config
        return FetchOptions(
            method=config.method,
            headers=self.headers,
            body=self.body,
            mode=config.mode,
            cache=config.cache,
            credentials=config.credentials,
            extra=config.extra,
        )

    @property
    def full_url(self) -> str:
        return self.config.prefix + self.url


class _BaseRequest:
    def __init__(self, options: ClientConfig | Mapping[str, Any] | None = None) -> None:
        self._config = ClientConfig.from_options(options)

    @property
    def configuration(self) -> ClientConfig:
        return self._config

    def _update(self, updates: Mapping[str, Any]) -> "_BaseRequest":
        self._config = self._config.updated(updates)
        return self

    def config(self, key: str | Mapping[str, Any], value: Any = None) -> "_BaseRequest":
        """Set one option, or every option of a mapping.

        Examples:

            client.config("method", "GET")
            client.config({"headers": {"content-type": "application/json"}})
        """
        if isinstance(key, Mapping):
            return self._update(key)
        return self._update({key: value})

    def prefix(self, prefix: Any) -> "_BaseRequest":
        if prefix and isinstance(prefix, str):
            self._update({"prefix": prefix})
        return self

    def _set_hook(self, name: str, callback: Any) -> "_BaseRequest":
        if callable(callback):
            self._update({name: callback})
        return self

    def before_request(self, callback: Callable[[str, ClientConfig], Any]) -> "_BaseRequest":
        return self._set_hook("before_request", callback)

    def after_response(self, callback: Callable[[Any], Any]) -> "_BaseRequest":
        return self._set_hook("after_response", callback)

    def error_handle(self, callback: Callable[[RequestError], Any]) -> "_BaseRequest":
        return self._set_hook("error_handle", callback)

    beforeRequest = before_request
    afterResponse = after_response
    errorHandle = error_handle

    def headers(self, key: Any, value: Any = None) -> "_BaseRequest":
        """Set headers.

        Examples:

            client.headers("Accept", "application/json")
            client.headers({"Accept": "application/json"})
            client.headers(lambda: {"Authorization": f"Bearer {token()}"})

        A callable is kept as ``computed_headers`` and called on every send.
        """
        if isinstance(key, Mapping):
            return self._update({"headers": {**self._config.headers, **lower_keys(key)}})
        if callable(key):
            return self._update({"computed_headers": key})
        return self._update({"headers": {**self._config.headers, str(key).lower(): value}})

    def content_type(self, content_type: str) -> "_BaseRequest":
        headers = {**self._config.headers, "content-type": resolve_content_type(content_type)}
        return self._update({"headers": headers})

    contentType = content_type

    def create(self, options: ClientConfig | Mapping[str, Any] | None = None) -> "_BaseRequest":
        return type(self)(options)

    def _shortcut(self, method: str, url: Any, data: Any, options: Options) -> Any:
        call = options_mapping(options)
        call["data"] = data
        call["method"] = method
        return self.send(url, call)

    def get(self, url: Any, data: Any = None, options: Options = None) -> Any:
        return self._shortcut("GET", url, data, options)

    def post(self, url: Any, data: Any = None, options: Options = None) -> Any:
        return self._shortcut("POST", url, data, options)

    def head(self, url: Any, data: Any = None, options: Options = None) -> Any:
        return self._shortcut("HEAD", url, data, options)

    def delete(self, url: Any, data: Any = None, options: Options = None) -> Any:
        return self._shortcut("DELETE", url, data, options)

    def options(self, url: Any, data: Any = None, options: Options = None) -> Any:
        return self._shortcut("OPTIONS", url, data, options)

    def put(self, url: Any, data: Any = None, options: Options = None) -> Any:
        return self._shortcut("PUT", url, data, options)

    def patch(self, url: Any, data: Any = None, options: Options = None) -> Any:
        return self._shortcut("PATCH", url, data, options)

    def _form(self, method: str, url: Any, options: Options) -> Any:
        call = options_mapping(options)
        call["method"] = method
        call["headers"] = dict(FORM_HEADERS)
        return self.send(url, call)

    def getform(self, url: Any, options: Options = None) -> Any:
        return self._form("GET", url, options)

    def postform(self, url: Any, options: Options = None) -> Any:
        return self._form("POST", url, options)

    def _merge(self, options: Options) -> tuple[Any, ClientConfig]:
        call = options_mapping(options)
        data = call.pop("data", None)
        return data, self._config.merged(call)

    @staticmethod
    def _check_url(url: Any) -> None:
        if not is_valid_url(url):
            raise InvalidURLError()

    @staticmethod
    def _prepare(url: str, data: Any, config: ClientConfig) -> _PreparedSend:
        headers = config.resolve_headers()
        content_type = str(headers.get("content-type") or "")
        body = encode_body(data, content_type)
        wire_body = serialize_body(body, content_type)

        if config.method == "GET":
            if body:
                url += ("&" if "?" in url else "?") + encode_query(body)
            wire_body = None

        return _PreparedSend(url, config, headers, wire_body)

    @staticmethod
    def _log_request(prepared: _PreparedSend) -> None:
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "%s %s headers=%s",
                prepared.config.method,
                prepared.full_url,
                sanitize_headers(prepared.headers),
            )

    @staticmethod
    def _check_status(response: Any) -> Any:
        status = response.status
        logger.debug("response status %s", status)
        if 200 <= status < 300:
            if status == 204:
                return None
            return response
        raise HTTPStatusError(response.status_text, status, response)

    @staticmethod
    def _parser(response: Any, response_type: str) -> Callable[[], Any] | None:
        if response is None:
            return None
        method = getattr(response, RESPONSE_TYPE_METHODS.get(response_type, response_type), None)
        return method if callable(method) else None

    @staticmethod
    def _canceled(url: str) -> RequestCanceledError:
        logger.debug("request to %s canceled by before_request", url)
        return RequestCanceledError()

    @staticmethod
    def _suppressed(error: RequestError) -> None:
        logger.debug("error %s suppressed by error_handle", error.kind)


def _no_awaitable(value: Any, hook: str) -> Any:
    if inspect.isawaitable(value):
        if inspect.iscoroutine(value):
            value.close()
        raise TypeError(f"{hook} returned an awaitable; use AsyncRequest")
    return value


class Request(_BaseRequest):
    """Synchronous client.

    Hooks are plain callables; a hook returning an awaitable is an error
    here, use ``AsyncRequest`` for coroutine hooks.
    """

    def __init__(
        self,
        options: ClientConfig | Mapping[str, Any] | None = None,
        *,
        fetch: Callable[[str, FetchOptions], Any] | None = None,
        httpx_client: httpx.Client | None = None,
    ) -> None:
        super().__init__(options)
        self._httpx: httpx.Client | None = None
        if fetch is None:
            self._httpx = httpx_client or httpx.Client(follow_redirects=True)
            fetch = HttpxFetch(self._httpx)
        self._fetch = fetch

    def __enter__(self) -> "Request":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._httpx is not None:
            self._httpx.close()

    def create(self, options: ClientConfig | Mapping[str, Any] | None = None) -> "Request":
        return type(self)(options, fetch=None if self._httpx is not None else self._fetch)

    def send(self, url: Any, options: Options = None) -> Any:
        config = self._config
        try:
            self._check_url(url)
            data, config = self._merge(options)
            prepared = self._prepare(url, data, config)

            if config.before_request is not None:
                verdict = _no_awaitable(config.before_request(prepared.url, config), "before_request")
                if verdict is False:
                    raise self._canceled(prepared.url)

            self._log_request(prepared)
            response = self._fetch(prepared.full_url, prepared.fetch_options())
            result = self._check_status(response)

            parser = self._parser(result, config.response_type)
            if parser is not None:
                result = parser()

            if config.after_response is not None:
                result = _no_awaitable(config.after_response(result), "after_response")
            return result
        except Exception as exc:
            error = normalize_error(exc)
            if config.error_handle is not None:
                verdict = config.error_handle(error)
                if inspect.isawaitable(verdict):
                    try:
                        _no_awaitable(verdict, "error_handle")
                    except TypeError as hook_exc:
                        raise normalize_error(hook_exc) from error
                if verdict is False:
                    self._suppressed(error)
                    return None
            if error is exc:
                raise
            raise error from exc


async def _resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


class AsyncRequest(_BaseRequest):
    """Asynchronous client. Hooks and fetch may be plain or coroutine callables."""

    def __init__(
        self,
        options: ClientConfig | Mapping[str, Any] | None = None,
        *,
        fetch: Callable[[str, FetchOptions], Any] | None = None,
        httpx_client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(options)
        self._httpx: httpx.AsyncClient | None = None
        if fetch is None:
            self._httpx = httpx_client or httpx.AsyncClient(follow_redirects=True)
            fetch = AsyncHttpxFetch(self._httpx)
        self._fetch = fetch

    async def __aenter__(self) -> "AsyncRequest":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._httpx is not None:
            await self._httpx.aclose()

    def create(self, options: ClientConfig | Mapping[str, Any] | None = None) -> "AsyncRequest":
        return type(self)(options, fetch=None if self._httpx is not None else self._fetch)

    async def send(self, url: Any, options: Options = None) -> Any:
        config = self._config
        try:
            self._check_url(url)
            data, config = self._merge(options)
            prepared = self._prepare(url, data, config)

            if config.before_request is not None:
                verdict = await _resolve(config.before_request(prepared.url, config))
                if verdict is False:
                    raise self._canceled(prepared.url)

            self._log_request(prepared)
            response = await _resolve(self._fetch(prepared.full_url, prepared.fetch_options()))
            result = self._check_status(response)

            parser = self._parser(result, config.response_type)
            if parser is not None:
                result = await _resolve(parser())

            if config.after_response is not None:
                result = await _resolve(config.after_response(result))
            return result
        except Exception as exc:
            error = normalize_error(exc)
            if config.error_handle is not None:
                verdict = await _resolve(config.error_handle(error))
                if verdict is False:
                    self._suppressed(error)
                    return None
            if error is exc:
                raise
            raise error from exc


def create(
    options: ClientConfig | Mapping[str, Any] | None = None,
    *,
    fetch: Callable[[str, FetchOptions], Any] | None = None,
    httpx_client: httpx.AsyncClient | None = None,
) -> AsyncRequest:
    return AsyncRequest(options, fetch=fetch, httpx_client=httpx_client)
