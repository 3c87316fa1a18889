"""Configurable fetch-style HTTP request clients."""

from .client import AsyncRequest, Request, create
from .config import REQUEST_METHODS, ClientConfig
from .encoding import CONTENT_TYPE_ALIASES, MultipartForm
from .exceptions import HTTPStatusError, InvalidURLError, RequestCanceledError, RequestError
from .request_options import RequestOptions
from .transport import AsyncFetchResponse, FetchOptions, FetchResponse

__all__ = [
    "AsyncFetchResponse",
    "AsyncRequest",
    "CONTENT_TYPE_ALIASES",
    "ClientConfig",
    "FetchOptions",
    "FetchResponse",
    "HTTPStatusError",
    "InvalidURLError",
    "MultipartForm",
    "REQUEST_METHODS",
    "Request",
    "RequestCanceledError",
    "RequestError",
    "RequestOptions",
    "create",
]
