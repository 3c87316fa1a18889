"""Body and querystring encoding helpers."""

from __future__ import annotations

import json
from typing import Any, Iterator, Mapping, Sequence

import httpx


JSON_CONTENT_TYPE = "application/json"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
MULTIPART_CONTENT_TYPE = "multipart/form-data"

CONTENT_TYPE_ALIASES = {
    "json": JSON_CONTENT_TYPE,
    "form": f"{FORM_CONTENT_TYPE};charset=UTF-8",
    "urlencoded": f"{FORM_CONTENT_TYPE};charset=UTF-8",
    "multipart": MULTIPART_CONTENT_TYPE,
}


def resolve_content_type(alias: str) -> str:
    return CONTENT_TYPE_ALIASES.get(alias, alias)


def _is_file_value(value: Any) -> bool:
    return isinstance(value, (bytes, tuple)) or hasattr(value, "read")


class MultipartForm:
    """Ordered multipart form fields, repeated names allowed.

    Values may be plain scalars, ``bytes``, file objects, or httpx style
    ``(filename, content[, content_type])`` tuples.
    """

    def __init__(self, fields: Mapping[str, Any] | Sequence[tuple[str, Any]] | None = None) -> None:
        self._fields: list[tuple[str, Any]] = []
        if isinstance(fields, Mapping):
            fields = list(fields.items())
        for name, value in fields or ():
            self.append(name, value)

    def append(self, name: str, value: Any) -> "MultipartForm":
        self._fields.append((str(name), value))
        return self

    def get(self, name: str, default: Any = None) -> Any:
        for key, value in self._fields:
            if key == name:
                return value
        return default

    def items(self) -> Iterator[tuple[str, Any]]:
        return iter(list(self._fields))

    def __len__(self) -> int:
        return len(self._fields)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MultipartForm):
            return NotImplemented
        return self._fields == other._fields

    def __repr__(self) -> str:
        return f"MultipartForm({self._fields!r})"

    def to_httpx_files(self) -> list[tuple[str, Any]]:
        """Render the fields in the shape ``httpx`` expects for ``files=``."""
        files: list[tuple[str, Any]] = []
        for name, value in self._fields:
            if isinstance(value, bytes):
                files.append((name, (None, value)))
            elif _is_file_value(value):
                files.append((name, value))
            else:
                files.append((name, (None, "" if value is None else str(value))))
        return files


def encode_body(data: Any, content_type: str) -> Any:
    """Turn call data into a request body for ``content_type``.

    Only multipart content types change the data: everything else passes
    through untouched and is serialized later.
    """
    if MULTIPART_CONTENT_TYPE in content_type:
        if isinstance(data, MultipartForm):
            return data
        return MultipartForm(data if isinstance(data, Mapping) else None)
    return data


def encode_query(data: Any) -> str:
    """Serialize flat key/value data into a URL-encoded querystring."""
    if data is None:
        return ""
    if isinstance(data, str):
        return data[1:] if data.startswith("?") else data
    if isinstance(data, MultipartForm):
        data = [(key, value) for key, value in data.items() if not _is_file_value(value)]
    elif isinstance(data, Mapping):
        data = dict(data)
    elif isinstance(data, (bytes, bytearray)):
        return data.decode()
    else:
        data = list(data)
    return str(httpx.QueryParams(data))


def serialize_body(body: Any, content_type: str) -> Any:
    """Pick the wire representation of an encoded body."""
    if body is None:
        return None
    if JSON_CONTENT_TYPE in content_type:
        return json.dumps(body)
    if FORM_CONTENT_TYPE in content_type:
        return encode_query(body)
    return body
