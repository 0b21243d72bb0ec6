"""Transport interface shared by the HTTP backends."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Protocol

from wpxmlrpc.config.schema import AuthConfig, ProxyConfig
from wpxmlrpc.utils.exceptions import ConfigError

XMLRPC_CONTENT_TYPE = "text/xml"

# Longest response body kept in an "http:" error message.
MAX_ERROR_BODY_CHARS = 500


@dataclass(frozen=True)
class EndpointConfig:
    """Everything a backend needs to POST one request."""
    url: str
    user_agent: str
    proxy: ProxyConfig | Literal[False] = False
    auth: AuthConfig | Literal[False] = False
    timeout: float = 30.0

    def headers(self) -> dict[str, str]:
        return {
            "Content-Type": XMLRPC_CONTENT_TYPE,
            "User-Agent": self.user_agent,
        }


class Transport(Protocol):
    """POST an encoded request and return the raw response body.

    Implementations raise ``TransportError`` for network/HTTP/IO failures and
    ``ConfigError`` for proxy/auth settings they cannot express.
    """

    name: str

    def check(self, endpoint: EndpointConfig) -> None:
        """Raise ``ConfigError`` if the proxy/auth settings cannot be honored."""
        ...

    def send(self, payload: bytes, endpoint: EndpointConfig) -> bytes: ...


def normalize_mode(mode: str | None) -> str | None:
    if mode is None:
        return None
    text = str(mode).strip().lower()
    return text or None


def check_mode(mode: str | None, supported: set[str], *, backend: str, what: str) -> str | None:
    """Validate an auth/proxy mode against what a backend can express."""
    normalized = normalize_mode(mode)
    if normalized is not None and normalized not in supported:
        raise ConfigError(
            f"{backend} transport does not support {what} mode '{mode}' "
            f"(supported: {', '.join(sorted(supported))})",
            field=f"{what}.mode",
        )
    return normalized


def truncate_body(text: str) -> str:
    text = (text or "").strip()
    if len(text) > MAX_ERROR_BODY_CHARS:
        return text[:MAX_ERROR_BODY_CHARS] + "..."
    return text
