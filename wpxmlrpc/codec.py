"""XML-RPC wire codec.

Thin wrapper over ``xmlrpc.client``: the dispatcher only needs
``encode(method, params, options)`` and ``decode(data, charset)``.
"""

from __future__ import annotations

import xmlrpc.client
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any
from xml.parsers.expat import ExpatError

# Format used for dateTime.iso8601 values built from datetime objects.
XMLRPC_DATETIME_FORMAT = "%Y%m%dT%H:%M:%S%z"

DEFAULT_ENCODE_OPTIONS: dict[str, Any] = {
    "encoding": "utf-8",
    "allow_none": True,
}


@dataclass(frozen=True)
class Fault:
    """A decoded ``<fault>`` response."""
    code: int
    message: str


class XmlrpcCodec:
    """Encode method calls and decode method responses."""

    def encode(self, method: str, params: list[Any] | tuple[Any, ...], options: dict[str, Any] | None = None) -> bytes:
        opts = {**DEFAULT_ENCODE_OPTIONS, **(options or {})}
        encoding = opts["encoding"]
        body = xmlrpc.client.dumps(
            tuple(_to_wire(p) for p in params),
            methodname=method,
            encoding=encoding,
            allow_none=opts["allow_none"],
        )
        return body.encode(encoding)

    def decode(self, data: bytes, charset: str = "utf-8") -> Any | Fault | None:
        """Decode a response body.

        Returns the response value, a ``Fault`` or ``None`` when the payload
        is not a parseable XML-RPC response.
        """
        if not data:
            return None
        try:
            values, _method = xmlrpc.client.loads(data.decode(charset, errors="replace"), use_builtin_types=False)
        except xmlrpc.client.Fault as fault:
            return Fault(code=_fault_code(fault.faultCode), message=str(fault.faultString))
        except (ExpatError, xmlrpc.client.ResponseError, ValueError, TypeError):
            return None
        if not values:
            return None
        return _from_wire(values[0])


def _fault_code(raw: Any) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError):
        return 0


def _to_wire(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return xmlrpc.client.Binary(bytes(value))
    if isinstance(value, dict):
        return {k: _to_wire(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_wire(v) for v in value]
    return value


def _from_wire(value: Any) -> Any:
    if isinstance(value, xmlrpc.client.DateTime):
        return _parse_datetime(value.value) or value
    if isinstance(value, xmlrpc.client.Binary):
        return value.data
    if isinstance(value, dict):
        return {k: _from_wire(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_from_wire(v) for v in value]
    return value


def _parse_datetime(raw: str) -> datetime | None:
    for fmt in ("%Y%m%dT%H:%M:%S%z", "%Y%m%dT%H:%M:%S", "%Y-%m-%dT%H:%M:%S%z", "%Y-%m-%dT%H:%M:%S"):
        try:
            return datetime.strptime(raw, fmt)
        except ValueError:
            continue
    return None


def create_xmlrpc_datetime(value: datetime | date) -> xmlrpc.client.DateTime:
    """Tag a date/time so the codec emits ``dateTime.iso8601``.

    The timezone offset is kept (``20140320T10:30:00+0700``) when the value is aware.
    """
    if not isinstance(value, datetime):
        value = datetime.combine(value, time())
    return xmlrpc.client.DateTime(value.strftime(XMLRPC_DATETIME_FORMAT))


def coerce_datetimes(params: Any) -> Any:
    """Recursively tag every ``datetime``/``date`` found in ``params``.

    Compatibility pass for callers that pass raw date objects nested in
    structs. Returns new containers; the input is left untouched.
    """
    if isinstance(params, (datetime, date)):
        return create_xmlrpc_datetime(params)
    if isinstance(params, dict):
        return {k: coerce_datetimes(v) for k, v in params.items()}
    if isinstance(params, list):
        return [coerce_datetimes(v) for v in params]
    if isinstance(params, tuple):
        return tuple(coerce_datetimes(v) for v in params)
    return params
