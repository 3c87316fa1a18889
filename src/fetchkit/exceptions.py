"""Request client exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .transport import FetchResponse


GENERIC_KIND = "RequestError"


class RequestError(Exception):
    """Base exception for every failed send.

    ``kind`` is either a semantic label (``"invalidURL"``, ``"requestCanceled"``,
    ``"RequestError"``) or the numeric HTTP status of a failed response.
    """

    def __init__(
        self,
        message: str,
        kind: str | int = GENERIC_KIND,
        *,
        code: int | None = None,
        response: FetchResponse | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind
        if code is None:
            code = kind if isinstance(kind, int) else 0
        self.code = code
        self.response = response
        self.cause = cause

    @property
    def status_code(self) -> int | None:
        return self.kind if isinstance(self.kind, int) else None

    def __str__(self) -> str:  # pragma: no cover - simple formatting
        return f"{self.kind}: {self.message}"


class InvalidURLError(RequestError):
    """Raised when ``send`` is given something other than a URL string."""

    def __init__(self, message: str = "invalid url") -> None:
        super().__init__(message, "invalidURL")


class RequestCanceledError(RequestError):
    """Raised when the before-request hook vetoes a send."""

    def __init__(self, message: str = "request canceled by beforeRequest") -> None:
        super().__init__(message, "requestCanceled")


class HTTPStatusError(RequestError):
    """Raised for responses outside the 2xx range."""

    def __init__(self, message: str, status: int, response: FetchResponse) -> None:
        super().__init__(message, status, response=response)


def normalize_error(exc: BaseException) -> RequestError:
    """Wrap anything that is not already a ``RequestError`` into a generic one."""
    if isinstance(exc, RequestError):
        return exc
    return RequestError(str(exc) or type(exc).__name__, GENERIC_KIND, code=0, cause=exc)
