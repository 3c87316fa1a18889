from __future__ import annotations

import argparse
import json

import httpx
import pytest

import fetchkit.cli as cli
from fetchkit.client import Request


def _patch_transport(monkeypatch, handler) -> None:
    transport = httpx.MockTransport(handler)
    monkeypatch.setattr(
        cli,
        "Request",
        lambda options: Request(options, httpx_client=httpx.Client(transport=transport)),
    )


def test_parse_pairs_splits_on_separator() -> None:
    assert cli._parse_pairs(["a=1", "b=x=y"], "=") == {"a": "1", "b": "x=y"}
    assert cli._parse_pairs(["Accept: text/plain"], ":") == {"Accept": "text/plain"}


def test_parse_pairs_rejects_missing_separator() -> None:
    with pytest.raises(argparse.ArgumentTypeError):
        cli._parse_pairs(["novalue"], "=")


def test_cli_main_prints_json_result(monkeypatch, capsys) -> None:
    captured: dict[str, object] = {}

    def send_request(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["accept"] = request.headers.get("accept")
        return httpx.Response(200, json={"ok": True}, request=request)

    _patch_transport(monkeypatch, send_request)

    code = cli._main(["get", "https://api.example.com/items", "-d", "q=x", "-H", "Accept: application/json"])

    assert code == 0
    assert captured == {"url": "https://api.example.com/items?q=x", "accept": "application/json"}
    assert json.loads(capsys.readouterr().out) == {"ok": True}


def test_cli_main_posts_form(monkeypatch) -> None:
    captured: dict[str, object] = {}

    def send_request(request: httpx.Request) -> httpx.Response:
        captured["body"] = request.content
        captured["content-type"] = request.headers["content-type"]
        return httpx.Response(204, request=request)

    _patch_transport(monkeypatch, send_request)

    code = cli._main(
        ["POST", "/login", "--prefix", "https://api.example.com", "--content-type", "form", "-d", "user=ann"]
    )

    assert code == 0
    assert captured == {
        "body": b"user=ann",
        "content-type": "application/x-www-form-urlencoded;charset=UTF-8",
    }


def test_cli_main_fails_on_error_status(monkeypatch, capsys) -> None:
    def send_request(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, request=request)

    _patch_transport(monkeypatch, send_request)

    assert cli._main(["DELETE", "https://api.example.com/items/1"]) == 1
    assert "Request failed" in capsys.readouterr().err
