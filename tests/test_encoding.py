from __future__ import annotations

import io
import json

import pytest

from fetchkit.encoding import (
    MultipartForm,
    encode_body,
    encode_query,
    resolve_content_type,
    serialize_body,
)


def test_resolve_content_type_falls_back_to_literal() -> None:
    assert resolve_content_type("json") == "application/json"
    assert resolve_content_type("application/xml") == "application/xml"


def test_encode_body_passes_non_multipart_data_through() -> None:
    data = {"a": 1}
    assert encode_body(data, "application/json") is data
    assert encode_body("raw", "text/plain") == "raw"
    assert encode_body(None, "") is None


def test_encode_body_builds_multipart_from_mapping() -> None:
    body = encode_body({"a": "1", "b": 2}, "multipart/form-data")

    assert isinstance(body, MultipartForm)
    assert list(body.items()) == [("a", "1"), ("b", 2)]


def test_encode_body_multipart_ignores_non_mapping_data() -> None:
    body = encode_body("not a mapping", "multipart/form-data")

    assert isinstance(body, MultipartForm)
    assert len(body) == 0


def test_encode_body_keeps_existing_multipart() -> None:
    form = MultipartForm({"a": "1"})
    assert encode_body(form, "multipart/form-data; boundary=xyz") is form


@pytest.mark.parametrize(
    ("data", "expected"),
    [
        ({"q": "x", "page": 2}, "q=x&page=2"),
        ({"tags": ["a", "b"]}, "tags=a&tags=b"),
        ({"empty": None}, "empty="),
        ({"flag": True}, "flag=true"),
        ([("k", "v"), ("k", "w")], "k=v&k=w"),
        ("?already=encoded", "already=encoded"),
        (None, ""),
    ],
)
def test_encode_query(data, expected: str) -> None:
    assert encode_query(data) == expected


def test_encode_query_skips_multipart_files() -> None:
    form = MultipartForm({"name": "x"}).append("file", ("a.txt", b"data"))
    assert encode_query(form) == "name=x"


def test_serialize_body_by_content_type() -> None:
    assert json.loads(serialize_body({"a": [1]}, "application/json;charset=UTF-8")) == {"a": [1]}
    assert serialize_body({"a": "b c"}, "application/x-www-form-urlencoded;charset=UTF-8") == "a=b+c"
    assert serialize_body(b"raw", "application/octet-stream") == b"raw"
    assert serialize_body(None, "application/json") is None


def test_multipart_form_to_httpx_files() -> None:
    handle = io.BytesIO(b"stream")
    form = MultipartForm([("a", 1), ("b", None), ("c", b"bytes"), ("d", ("d.txt", b"x")), ("e", handle)])

    assert form.to_httpx_files() == [
        ("a", (None, "1")),
        ("b", (None, "")),
        ("c", (None, b"bytes")),
        ("d", ("d.txt", b"x")),
        ("e", handle),
    ]
    assert form.get("a") == 1
    assert form.get("missing", "default") == "default"
