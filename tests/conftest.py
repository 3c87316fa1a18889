"""
Shared fakes for request client tests.
"""
from __future__ import annotations

from typing import Any

import pytest

from fetchkit.transport import FetchOptions


class FakeResponse:
    def __init__(self, status: int = 200, payload: Any = None, status_text: str = "OK") -> None:
        self.status = status
        self.status_text = status_text
        self.payload = payload

    def json(self) -> Any:
        return self.payload

    def text(self) -> str:
        return str(self.payload)


class RecordingFetch:
    """Fetch primitive that records its calls and replays one response."""

    def __init__(self, response: Any = None) -> None:
        self.response = response if response is not None else FakeResponse(payload={"ok": True})
        self.calls: list[tuple[str, FetchOptions]] = []

    def __call__(self, url: str, options: FetchOptions) -> Any:
        self.calls.append((url, options))
        if isinstance(self.response, Exception):
            raise self.response
        return self.response

    @property
    def last(self) -> tuple[str, FetchOptions]:
        return self.calls[-1]


class AsyncRecordingFetch(RecordingFetch):
    async def __call__(self, url: str, options: FetchOptions) -> Any:  # type: ignore[override]
        return super().__call__(url, options)


@pytest.fixture
def fetch() -> RecordingFetch:
    return RecordingFetch()


@pytest.fixture
def async_fetch() -> AsyncRecordingFetch:
    return AsyncRecordingFetch()
