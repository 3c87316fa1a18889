"""Helpers that keep secrets out of logs and reject malformed URLs."""

from __future__ import annotations

from typing import Any, Mapping


SENSITIVE_HEADERS = {
    "authorization",
    "proxy-authorization",
    "cookie",
    "set-cookie",
    "x-api-key",
}


def sanitize_headers(headers: Mapping[str, Any]) -> dict[str, Any]:
    """Return headers with sensitive values redacted for logging."""
    redacted: dict[str, Any] = {}
    for key, value in headers.items():
        if str(key).lower() in SENSITIVE_HEADERS:
            redacted[key] = "[REDACTED]"
        else:
            redacted[key] = value
    return redacted


def is_valid_url(url: object) -> bool:
    """A request URL must be a string without NUL characters."""
    return isinstance(url, str) and "\x00" not in url
