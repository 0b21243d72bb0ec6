"""Request dispatch and fault normalization.

The dispatcher owns connection settings (endpoint, credentials, proxy, HTTP
auth, user agent) and runs every call through the same sequence:

    encode -> notify(sending) -> transport -> decode -> fault check

Failures are classified here and nowhere else: the last-error string is
updated and ``error`` observers are notified before the exception reaches
the caller.
"""

from __future__ import annotations

import platform
import re
from collections.abc import Mapping
from typing import Any, Literal
from urllib.parse import urlsplit

import httpx
from loguru import logger
from pydantic import BaseModel, ValidationError

from wpxmlrpc.codec import Fault, XmlrpcCodec, coerce_datetimes
from wpxmlrpc.config.schema import AuthConfig, ClientConfig, ProxyConfig
from wpxmlrpc.events import ErrorEvent, ObserverLike, ObserverList, SendingEvent, freeze_params
from wpxmlrpc.transport import EndpointConfig, Transport, make_transport
from wpxmlrpc.utils.exceptions import (
    ConfigError,
    DecodeError,
    RemoteFault,
    TransportError,
    sanitize_error_message,
)

MANAGED_HOST_SUFFIX = ".wordpress.com"

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")
# Control characters that are not allowed in XML 1.0 documents (form-feed included).
_ILLEGAL_XML_BYTES = re.compile(rb"[\x00-\x08\x0b\x0c\x0e-\x1f]")


def normalize_endpoint(endpoint: str | None) -> str | None:
    """Prefix ``http://`` when no scheme is given; force https for wordpress.com blogs.

    Raises:
        ConfigError: the host is missing or the port is not a valid number.
    """
    if not endpoint or not endpoint.strip():
        return None
    endpoint = endpoint.strip()
    if not _SCHEME_RE.match(endpoint):
        endpoint = f"http://{endpoint}"
    try:
        parts = urlsplit(endpoint)
        parts.port
    except ValueError as exc:
        raise ConfigError(f"invalid endpoint: {exc}", field="endpoint") from exc
    host = parts.hostname or ""
    if not host:
        raise ConfigError("invalid endpoint: missing host", field="endpoint")
    if host.endswith(MANAGED_HOST_SUFFIX) and endpoint.lower().startswith("http://"):
        endpoint = "https://" + endpoint[len("http://"):]
    return endpoint


def strip_control_bytes(payload: bytes) -> bytes:
    return _ILLEGAL_XML_BYTES.sub(b"", payload)


def _coerce_section(value: Any, model: type[BaseModel], name: str) -> Any:
    if value is False:
        return False
    if isinstance(value, model):
        return value
    if isinstance(value, Mapping):
        try:
            return model.model_validate(dict(value))
        except ValidationError as exc:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or name}: {err['msg']}"
                for err in exc.errors(include_input=False, include_url=False)
            )
            raise ConfigError(f"invalid {name} config: {problems}", field=name) from exc
    raise ConfigError(
        f"set_{name}() only accepts False or a configuration mapping, got {type(value).__name__}",
        field=name,
    )


class Dispatcher:
    """Send XML-RPC calls to one endpoint and normalize their failures.

    Example:
        dispatcher = Dispatcher("example.com/xmlrpc.php", "bob", "pw")
        dispatcher.on_error(lambda event: print(event.message))
        post = dispatcher.call("wp.getPost", [1, "bob", "pw", 229])

    Not thread-safe: configuration and the last-error are plain instance state.
    """

    def __init__(
        self,
        endpoint: str | None = None,
        username: str | None = None,
        password: str | None = None,
        *,
        transport: Transport | str | None = None,
        codec: XmlrpcCodec | None = None,
        user_agent: str | None = None,
        timeout: float = 30.0,
        legacy_datetime: bool = False,
    ) -> None:
        self._endpoint: str | None = None
        self._username: str | None = None
        self._password: str | None = None
        self._proxy: ProxyConfig | Literal[False] = False
        self._auth: AuthConfig | Literal[False] = False
        self._error: str | None = None
        self._request: bytes | None = None
        self._sending = ObserverList()
        self._errors = ObserverList()
        self._transport: Transport = self._resolve_transport(transport)
        self.codec = codec or XmlrpcCodec()
        self.timeout = timeout
        self.legacy_datetime = legacy_datetime
        self._user_agent = user_agent or self.default_user_agent()
        self.configure(endpoint, username, password)

    @classmethod
    def from_config(cls, config: ClientConfig, **kwargs: Any):
        """Build an instance from a loaded ``ClientConfig``."""
        instance = cls(
            config.endpoint,
            config.username,
            config.password,
            transport=kwargs.pop("transport", config.transport),
            user_agent=config.user_agent,
            timeout=config.timeout,
            legacy_datetime=config.legacy_datetime,
            **kwargs,
        )
        if config.proxy is not None:
            instance.set_proxy(config.proxy)
        if config.auth is not None:
            instance.set_auth(config.auth)
        return instance

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    def configure(self, endpoint: str | None, username: str | None, password: str | None) -> None:
        """Set the endpoint and the XML-RPC credentials used by the next calls.

        A malformed endpoint raises ``ConfigError`` and leaves the settings unchanged.
        """
        try:
            normalized = normalize_endpoint(endpoint)
        except ConfigError as exc:
            self._error = exc.message
            raise
        self._endpoint = normalized
        self._username = username
        self._password = password

    set_credentials = configure

    @property
    def endpoint(self) -> str | None:
        return self._endpoint

    def get_endpoint(self) -> str | None:
        return self._endpoint

    @property
    def username(self) -> str | None:
        return self._username

    @property
    def password(self) -> str | None:
        return self._password

    @staticmethod
    def default_user_agent() -> str:
        from wpxmlrpc import __version__

        return (
            f"XML-RPC client (wpxmlrpc {__version__}) "
            f"Python {platform.python_version()} httpx {httpx.__version__}"
        )

    @property
    def user_agent(self) -> str:
        return self._user_agent

    @user_agent.setter
    def user_agent(self, value: str | None) -> None:
        # A falsy value restores the library default.
        self._user_agent = value or self.default_user_agent()

    def set_user_agent(self, value: str | None) -> None:
        self.user_agent = value

    def get_user_agent(self) -> str:
        return self._user_agent

    def set_proxy(self, config: ProxyConfig | Mapping[str, Any] | Literal[False]) -> None:
        """Use an HTTP proxy for the next calls, or disable it with ``False``."""
        proxy = _coerce_section(config, ProxyConfig, "proxy")
        self._transport.check(self._endpoint_config(proxy=proxy))
        self._proxy = proxy

    def get_proxy(self) -> ProxyConfig | Literal[False]:
        return self._proxy

    def set_auth(self, config: AuthConfig | Mapping[str, Any] | Literal[False]) -> None:
        """Use HTTP authentication for the next calls, or disable it with ``False``."""
        auth = _coerce_section(config, AuthConfig, "auth")
        self._transport.check(self._endpoint_config(auth=auth))
        self._auth = auth

    def get_auth(self) -> AuthConfig | Literal[False]:
        return self._auth

    @property
    def transport(self) -> Transport:
        return self._transport

    def set_transport(self, transport: Transport | str) -> None:
        """Switch backend; current proxy/auth settings must be expressible by it."""
        resolved = self._resolve_transport(transport)
        resolved.check(self._endpoint_config())
        self._transport = resolved

    @staticmethod
    def _resolve_transport(transport: Transport | str | None) -> Transport:
        if transport is None:
            return make_transport("httpx")
        if isinstance(transport, str):
            return make_transport(transport)
        return transport

    # -------------------------------------------------------------------------
    # Observers and errors
    # -------------------------------------------------------------------------

    def on_sending(self, callback: ObserverLike) -> None:
        """Register an observer notified with a ``SendingEvent`` before each request."""
        self._sending.add(callback)

    def on_error(self, callback: ObserverLike) -> None:
        """Register an observer notified with an ``ErrorEvent`` on each failed call."""
        self._errors.add(callback)

    @property
    def error_message(self) -> str | None:
        """Description of the most recent failure (``None`` until one happens)."""
        return self._error

    def get_error_message(self) -> str | None:
        return self._error

    @property
    def last_request(self) -> bytes | None:
        """Encoded body of the most recent request."""
        return self._request

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------

    def call(self, method: str, params: list[Any] | tuple[Any, ...] = ()) -> Any:
        """Invoke ``method`` with positional ``params`` and return the decoded result.

        Raises:
            ConfigError: no endpoint, unencodable params or unusable proxy/auth settings.
            TransportError: network, HTTP or I/O failure; ``DecodeError`` for bad payloads.
            RemoteFault: the endpoint answered with a fault.
        """
        if not self._endpoint:
            self._error = "invalid endpoint"
            logger.warning("XML-RPC call {} rejected: no endpoint configured", method)
            raise ConfigError("invalid endpoint", field="endpoint")

        endpoint = self._endpoint_config()
        try:
            self._transport.check(endpoint)
        except ConfigError as exc:
            self._error = exc.message
            raise

        values = list(params)
        if self.legacy_datetime:
            values = coerce_datetimes(values)
        try:
            body = self.codec.encode(method, values, {"encoding": "utf-8"})
        except (TypeError, OverflowError) as exc:
            self._error = f"encode: {exc}"
            logger.warning("XML-RPC call {} rejected: cannot encode params: {}", method, exc)
            raise ConfigError(f"cannot encode params for {method}: {exc}", field="params") from exc
        self._request = body

        self._sending.notify(
            SendingEvent(
                endpoint=endpoint.url,
                username=self._username,
                password=self._password,
                method=method,
                params=freeze_params(params),
                request=body,
                proxy=self._proxy,
                auth=self._auth,
            )
        )

        logger.debug(
            "Dispatching {} to {} ({} bytes) via {}",
            method,
            sanitize_error_message(endpoint.url),
            len(body),
            self._transport.name,
        )
        try:
            raw = self._transport.send(body, endpoint)
            response = self._decode(raw)
        except TransportError as exc:
            self._fail(method, exc.describe())
            raise
        except OSError as exc:
            wrapped = TransportError(exc.strerror or str(exc), kind="io", status_code=exc.errno)
            self._fail(method, wrapped.describe())
            raise wrapped from exc

        if isinstance(response, Fault):
            fault = RemoteFault(response.code, response.message)
            self._fail(method, fault.describe())
            raise fault
        return response

    def _decode(self, raw: bytes) -> Any:
        response = self.codec.decode(raw, "utf-8")
        if response is None:
            # Some servers emit control bytes (e.g. form-feed) the XML parser rejects.
            logger.debug("Retrying decode of {} byte response without control bytes", len(raw))
            response = self.codec.decode(strip_control_bytes(raw), "utf-8")
        if response is None:
            raise DecodeError(f"unable to decode response ({len(raw)} bytes)")
        return response

    def _fail(self, method: str, message: str) -> None:
        self._error = message
        logger.warning("XML-RPC call {} failed: {}", method, sanitize_error_message(message))
        self._errors.notify(
            ErrorEvent(
                endpoint=self._endpoint,
                request=self._request,
                proxy=self._proxy,
                auth=self._auth,
                message=message,
            )
        )

    def _endpoint_config(self, **overrides: Any) -> EndpointConfig:
        values: dict[str, Any] = {
            "url": self._endpoint or "",
            "user_agent": self._user_agent,
            "proxy": self._proxy,
            "auth": self._auth,
            "timeout": self.timeout,
        }
        values.update(overrides)
        return EndpointConfig(**values)
