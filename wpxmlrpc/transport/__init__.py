"""HTTP transport backends for the dispatcher."""

from __future__ import annotations

from wpxmlrpc.transport.base import EndpointConfig, Transport
from wpxmlrpc.transport.httpx_backend import HttpxTransport
from wpxmlrpc.transport.urllib_backend import UrllibTransport
from wpxmlrpc.utils.exceptions import ConfigError

TRANSPORTS: dict[str, type] = {
    HttpxTransport.name: HttpxTransport,
    UrllibTransport.name: UrllibTransport,
}


def make_transport(name: str = "httpx") -> Transport:
    """Instantiate a transport backend by name (``httpx`` or ``urllib``)."""
    key = (name or "").strip().lower()
    cls = TRANSPORTS.get(key)
    if cls is None:
        raise ConfigError(f"unknown transport: {name!r}", field="transport")
    return cls()


__all__ = ["EndpointConfig", "Transport", "HttpxTransport", "UrllibTransport", "TRANSPORTS", "make_transport"]
