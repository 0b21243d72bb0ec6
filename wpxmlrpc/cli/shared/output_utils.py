"""Rendering and parsing helpers shared by CLI commands."""

from __future__ import annotations

import json
import xmlrpc.client
from datetime import date, datetime
from typing import Any

from rich.console import Console

from wpxmlrpc.utils.exceptions import WpXmlrpcError, classify_exception


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, xmlrpc.client.DateTime):
        return value.value
    if isinstance(value, (bytes, bytearray)):
        return f"<{len(value)} bytes>"
    return str(value)


def to_json(value: Any) -> str:
    """Serialize a decoded XML-RPC value for display."""
    return json.dumps(value, indent=2, ensure_ascii=False, default=_json_default)


def parse_params(raw: str | None) -> list[Any]:
    """Parse a JSON array of positional params; a single JSON value becomes a one-item list."""
    text = (raw or "").strip()
    if not text:
        return []
    value = json.loads(text)
    if isinstance(value, list):
        return value
    return [value]


def format_call_error(exc: Exception, last_error: str | None = None) -> tuple[str, str]:
    """Return ``(rich_style, detail)`` for a failed call."""
    code, category = classify_exception(exc)
    if isinstance(exc, WpXmlrpcError):
        detail = last_error or exc.message
        style = "yellow" if category.value in {"network", "http"} else "red"
        return style, f"{detail} [{code}]"
    return "red", str(exc)


def print_result(console: Console, value: Any) -> None:
    console.print_json(to_json(value))
