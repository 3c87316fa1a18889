"""Per-request overrides for the request clients."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Callable, Mapping


@dataclass(frozen=True)
class RequestOptions:
    data: Any = None
    method: str | None = None
    mode: str | None = None
    cache: str | None = None
    credentials: str | None = None
    headers: Mapping[str, Any] | None = None
    computed_headers: Callable[[], Any] | None = None
    response_type: str | None = None
    prefix: str | None = None
    before_request: Callable[..., Any] | None = None
    after_response: Callable[..., Any] | None = None
    error_handle: Callable[..., Any] | None = None
    extra: Mapping[str, Any] | None = None

    def to_mapping(self) -> dict[str, Any]:
        """Return only the values that were set, extras flattened in."""
        values: dict[str, Any] = {}
        for item in fields(self):
            value = getattr(self, item.name)
            if value is None or item.name == "extra":
                continue
            values[item.name] = value
        if self.extra:
            values.update(self.extra)
        return values


def options_mapping(options: RequestOptions | Mapping[str, Any] | None) -> dict[str, Any]:
    if options is None:
        return {}
    if isinstance(options, RequestOptions):
        return options.to_mapping()
    return dict(options)
