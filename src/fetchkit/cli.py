"""Command line entry point for issuing a single request."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from fetchkit.client import Request
from fetchkit.config import REQUEST_METHODS
from fetchkit.exceptions import RequestError


def _parse_pairs(pairs: list[str], separator: str) -> dict[str, str]:
    parsed: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition(separator)
        if not sep or not key:
            raise argparse.ArgumentTypeError(f"expected KEY{separator}VALUE, got {pair!r}")
        parsed[key.strip()] = value.strip() if separator == ":" else value
    return parsed


def _render(result: Any) -> str:
    if isinstance(result, bytes):
        return result.decode(errors="replace")
    if isinstance(result, str):
        return result
    try:
        return json.dumps(result, indent=2, ensure_ascii=False)
    except TypeError:
        return repr(result)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fetchkit")
    parser.add_argument("method", type=str.upper, choices=REQUEST_METHODS)
    parser.add_argument("url")
    parser.add_argument("--data", "-d", action="append", default=[], metavar="KEY=VALUE")
    parser.add_argument("--header", "-H", action="append", default=[], metavar="NAME:VALUE")
    parser.add_argument("--content-type", default=None, help="json, form, urlencoded, multipart or a MIME type")
    parser.add_argument("--prefix", default="")
    parser.add_argument("--response-type", default="json", choices=("json", "text", "blob", "formData"))
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser


def _main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        data = _parse_pairs(args.data, "=")
        headers = _parse_pairs(args.header, ":")
    except argparse.ArgumentTypeError as exc:
        parser.error(str(exc))

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    with Request({"response_type": args.response_type}) as client:
        client.prefix(args.prefix).headers(headers)
        if args.content_type:
            client.content_type(args.content_type)
        try:
            result = client.send(args.url, {"method": args.method, "data": data or None})
        except RequestError as exc:
            print(f"Request failed: {exc}", file=sys.stderr)
            return 1

    if result is not None:
        print(_render(result))
    return 0


def main() -> None:
    raise SystemExit(_main())
