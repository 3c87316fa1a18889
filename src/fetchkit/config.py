"""Immutable client configuration."""

from __future__ import annotations

from typing import Any, Callable, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator


REQUEST_METHODS = ("GET", "POST", "HEAD", "DELETE", "OPTIONS", "PUT", "PATCH")

DEFAULT_HEADERS = {"content-type": "application/json"}


def lower_keys(headers: Mapping[Any, Any]) -> dict[str, Any]:
    return {str(key).lower(): value for key, value in headers.items()}


class ClientConfig(BaseModel):
    """Options shared by every send of a client.

    Instances never change; ``updated`` and ``merged`` return new ones. Option
    names are accepted in snake_case or in their camelCase alias
    (``responseType``, ``beforeRequest``...). Unknown names are kept as extras
    and forwarded to the fetch primitive.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

    method: str = "POST"
    mode: str = "cors"
    cache: str = "no-cache"
    credentials: str = "include"
    headers: dict[str, Any] = Field(default_factory=lambda: dict(DEFAULT_HEADERS))
    computed_headers: Callable[[], Any] | None = Field(default=None, alias="computedHeaders")
    response_type: str = Field(default="json", alias="responseType")
    prefix: str = ""
    before_request: Callable[..., Any] | None = Field(default=None, alias="beforeRequest")
    after_response: Callable[..., Any] | None = Field(default=None, alias="afterResponse")
    error_handle: Callable[..., Any] | None = Field(default=None, alias="errorHandle")

    @field_validator("method", mode="before")
    @classmethod
    def _upper_method(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.upper()
            if value not in REQUEST_METHODS:
                raise ValueError(f"Unsupported request method: {value}")
        return value

    @field_validator("headers", mode="before")
    @classmethod
    def _lower_header_keys(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, Mapping):
            return lower_keys(value)
        return value

    @classmethod
    def from_options(cls, options: "ClientConfig | Mapping[str, Any] | None" = None) -> "ClientConfig":
        if options is None:
            return cls()
        if isinstance(options, ClientConfig):
            return options
        return cls.model_validate(dict(options))

    @classmethod
    def field_name(cls, key: str) -> str:
        """Map a camelCase alias to its field name; other keys pass through."""
        for name, info in cls.model_fields.items():
            if key == name or key == info.alias:
                return name
        return key

    @property
    def extra(self) -> dict[str, Any]:
        return dict(self.model_extra or {})

    def to_options(self) -> dict[str, Any]:
        values = {name: getattr(self, name) for name in type(self).model_fields}
        values.update(self.extra)
        return values

    def updated(self, updates: Mapping[str, Any]) -> "ClientConfig":
        """Return a copy with ``updates`` replacing the current values."""
        values = self.to_options()
        for key, value in updates.items():
            values[self.field_name(key)] = value
        return type(self).model_validate(values)

    def merged(self, overrides: Mapping[str, Any]) -> "ClientConfig":
        """Return the config for one send: call-level values win.

        Call-level headers are merged key by key over the client headers.
        """
        updates = {self.field_name(key): value for key, value in overrides.items()}
        if updates.get("headers") is not None:
            updates["headers"] = {**self.headers, **lower_keys(updates["headers"])}
        return self.updated(updates)

    def resolve_headers(self) -> dict[str, Any]:
        headers = dict(self.headers)
        if self.computed_headers is not None:
            computed = self.computed_headers()
            if isinstance(computed, Mapping):
                headers.update(lower_keys(computed))
        return headers
