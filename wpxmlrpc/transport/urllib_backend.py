"""Minimal stream-based fallback transport built on urllib.request."""

from __future__ import annotations

import base64
from typing import Any
from urllib import error, request

from wpxmlrpc.config.schema import AuthConfig, ProxyConfig
from wpxmlrpc.transport.base import EndpointConfig, check_mode, truncate_body
from wpxmlrpc.utils.exceptions import TransportError


def _basic_credentials(user: str, password: str) -> str:
    token = base64.b64encode(f"{user}:{password}".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


class UrllibTransport:
    """POST requests with the standard library only.

    Only basic HTTP and basic proxy authentication can be expressed; any other
    mode is rejected with ``ConfigError`` before the request is built.
    """

    name = "urllib"
    auth_modes = {"basic"}
    proxy_modes = {"basic"}

    def _proxy_handler(self, proxy: ProxyConfig | bool) -> request.ProxyHandler | None:
        if not proxy:
            return None
        url = proxy.url()
        if url is None:
            return None
        return request.ProxyHandler({"http": url, "https": url})

    def _headers_and_handlers(self, endpoint: EndpointConfig) -> tuple[dict[str, str], list[Any]]:
        headers = endpoint.headers()
        handlers: list[Any] = []

        if endpoint.proxy:
            check_mode(endpoint.proxy.mode, self.proxy_modes, backend=self.name, what="proxy")
            handler = self._proxy_handler(endpoint.proxy)
            if handler is not None:
                handlers.append(handler)
            if endpoint.proxy.has_credentials:
                headers["Proxy-Authorization"] = _basic_credentials(endpoint.proxy.user, endpoint.proxy.password)

        auth: AuthConfig | bool = endpoint.auth
        if auth:
            check_mode(auth.mode, self.auth_modes, backend=self.name, what="auth")
            if auth.has_credentials:
                headers["Authorization"] = _basic_credentials(auth.user, auth.password)

        return headers, handlers

    def build_request(self, payload: bytes, endpoint: EndpointConfig) -> tuple[request.Request, list[Any]]:
        """Build the request object and opener handlers for ``endpoint``."""
        headers, handlers = self._headers_and_handlers(endpoint)
        req = request.Request(url=endpoint.url, data=payload, method="POST", headers=headers)
        return req, handlers

    def check(self, endpoint: EndpointConfig) -> None:
        self._headers_and_handlers(endpoint)

    def send(self, payload: bytes, endpoint: EndpointConfig) -> bytes:
        req, handlers = self.build_request(payload, endpoint)
        opener = request.build_opener(*handlers)
        try:
            with opener.open(req, timeout=endpoint.timeout) as response:
                return response.read()
        except error.HTTPError as exc:
            try:
                text = exc.read().decode("utf-8", errors="replace")
            except OSError:
                text = ""
            raise TransportError(truncate_body(text) or str(exc.reason), kind="http", status_code=exc.code) from exc
        except error.URLError as exc:
            reason = exc.reason
            raise TransportError(str(reason), kind="network", status_code=getattr(reason, "errno", None)) from exc
        except TimeoutError as exc:
            raise TransportError(f"timed out after {endpoint.timeout}s", kind="network") from exc
        except OSError as exc:
            raise TransportError(exc.strerror or str(exc), kind="io", status_code=exc.errno) from exc
        except ValueError as exc:
            # http.client.InvalidURL and unknown url types
            raise TransportError(f"invalid URL: {exc}", kind="network") from exc
