"""Feature-rich transport backend built on httpx."""

from __future__ import annotations

from typing import Any

import httpx
from loguru import logger

from wpxmlrpc.config.schema import AuthConfig, ProxyConfig
from wpxmlrpc.transport.base import EndpointConfig, check_mode, truncate_body
from wpxmlrpc.utils.exceptions import ConfigError, TransportError


class HttpxTransport:
    """POST requests with ``httpx.Client``.

    Supports basic and digest HTTP authentication and HTTP proxies with basic
    proxy authentication. A custom ``httpx.BaseTransport`` (for instance
    ``httpx.MockTransport``) can be injected.
    """

    name = "httpx"
    auth_modes = {"basic", "digest"}
    proxy_modes = {"basic"}

    def __init__(self, *, transport: httpx.BaseTransport | None = None, verify: bool = True):
        self._transport = transport
        self._verify = verify

    def _build_auth(self, auth: AuthConfig | bool) -> httpx.Auth | None:
        if not auth:
            return None
        mode = check_mode(auth.mode, self.auth_modes, backend=self.name, what="auth")
        if not auth.has_credentials:
            return None
        if mode == "digest":
            return httpx.DigestAuth(auth.user, auth.password)
        return httpx.BasicAuth(auth.user, auth.password)

    def _build_proxy(self, proxy: ProxyConfig | bool) -> httpx.Proxy | None:
        if not proxy:
            return None
        check_mode(proxy.mode, self.proxy_modes, backend=self.name, what="proxy")
        url = proxy.url()
        if url is None:
            return None
        auth = (proxy.user, proxy.password) if proxy.has_credentials else None
        try:
            return httpx.Proxy(url, auth=auth)
        except (httpx.InvalidURL, ValueError) as exc:
            raise ConfigError(f"invalid proxy URL: {exc}", field="proxy.host") from exc

    def _client_kwargs(self, endpoint: EndpointConfig) -> dict[str, Any]:
        kwargs: dict[str, Any] = {
            "timeout": endpoint.timeout,
            "follow_redirects": True,
            "verify": self._verify,
        }
        auth = self._build_auth(endpoint.auth)
        if auth is not None:
            kwargs["auth"] = auth
        proxy = self._build_proxy(endpoint.proxy)
        if proxy is not None:
            kwargs["proxy"] = proxy
        if self._transport is not None:
            kwargs["transport"] = self._transport
        return kwargs

    def check(self, endpoint: EndpointConfig) -> None:
        self._build_auth(endpoint.auth)
        self._build_proxy(endpoint.proxy)

    def send(self, payload: bytes, endpoint: EndpointConfig) -> bytes:
        kwargs = self._client_kwargs(endpoint)
        try:
            with httpx.Client(**kwargs) as client:
                resp = client.post(endpoint.url, content=payload, headers=endpoint.headers())
        except httpx.TimeoutException as exc:
            raise TransportError(f"timed out after {endpoint.timeout}s: {exc}", kind="network") from exc
        except httpx.RequestError as exc:
            raise TransportError(str(exc) or type(exc).__name__, kind="network") from exc
        except httpx.InvalidURL as exc:
            raise TransportError(f"invalid URL: {exc}", kind="network") from exc
        except OSError as exc:
            raise TransportError(exc.strerror or str(exc), kind="io", status_code=exc.errno) from exc

        status_code = int(getattr(resp, "status_code", 0) or 0)
        if status_code >= 400:
            message = truncate_body(resp.text) or resp.reason_phrase or "request failed"
            logger.debug("httpx transport got HTTP {} from {}", status_code, endpoint.url)
            raise TransportError(message, kind="http", status_code=status_code)
        return resp.content
