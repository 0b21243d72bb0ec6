"""Configuration schema using Pydantic.

Single data model for client settings, persisted to ~/.wpxmlrpc/config.json
and overridable through WPXMLRPC_* environment variables.
"""

from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ProxyConfig(BaseModel):
    """HTTP proxy settings.

    The legacy ``proxy_ip``/``proxy_port``/``proxy_user``/``proxy_pass``/``proxy_mode``
    keys are accepted as aliases.
    """
    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    host: str | None = Field(default=None, validation_alias=AliasChoices("host", "proxy_ip", "proxy_host"))
    port: int | None = Field(default=None, validation_alias=AliasChoices("port", "proxy_port"))
    user: str | None = Field(default=None, validation_alias=AliasChoices("user", "proxy_user"))
    password: str | None = Field(default=None, validation_alias=AliasChoices("password", "pass", "proxy_pass"))
    mode: str | None = Field(default=None, validation_alias=AliasChoices("mode", "proxy_mode"))  # basic | ntlm | ...

    @property
    def has_credentials(self) -> bool:
        return self.user is not None and self.password is not None

    def url(self) -> str | None:
        """Proxy URL without credentials, e.g. ``http://10.0.0.1:3128``."""
        if not self.host:
            return None
        host = self.host if "://" in self.host else f"http://{self.host}"
        if self.port is not None:
            return f"{host}:{self.port}"
        return host


class AuthConfig(BaseModel):
    """HTTP authentication settings (server side, not the XML-RPC credentials).

    The legacy ``auth_user``/``auth_pass``/``auth_mode`` keys are accepted as aliases.
    """
    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    user: str | None = Field(default=None, validation_alias=AliasChoices("user", "auth_user"))
    password: str | None = Field(default=None, validation_alias=AliasChoices("password", "pass", "auth_pass"))
    mode: str | None = Field(default=None, validation_alias=AliasChoices("mode", "auth_mode"))  # basic | digest | ...

    @property
    def has_credentials(self) -> bool:
        return self.user is not None and self.password is not None


class ClientConfig(BaseSettings):
    """Root configuration for wpxmlrpc."""
    endpoint: str | None = None
    username: str | None = None
    password: str | None = None
    user_agent: str | None = None  # None means library default
    transport: Literal["httpx", "urllib"] = "httpx"
    timeout: float = 30.0
    legacy_datetime: bool = False  # recursive datetime tagging before encode
    proxy: ProxyConfig | None = None
    auth: AuthConfig | None = None
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="WPXMLRPC_",
        env_nested_delimiter="__",
    )

    def masked(self) -> dict:
        """Dump for display with every password replaced."""
        data = self.model_dump()
        if data.get("password"):
            data["password"] = "***"
        for key in ("proxy", "auth"):
            section = data.get(key)
            if isinstance(section, dict) and section.get("password"):
                section["password"] = "***"
        return data
