"""
Exception hierarchy and error handling utilities for wpxmlrpc.

Provides:
- Custom exception classes with error codes
- Error categorization (configuration, network, remote fault)
- Safe error message formatting (no credential leak)
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any


class ErrorCategory(Enum):
    """Error categories for classification."""
    CONFIG = "config"
    NETWORK = "network"
    HTTP = "http"
    IO = "io"
    DECODE = "decode"
    REMOTE = "remote"
    INTERNAL = "internal"


class WpXmlrpcError(Exception):
    """Base exception for all wpxmlrpc errors."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        category: ErrorCategory = ErrorCategory.CONFIG,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.code,
            "message": self.message,
            "category": self.category.value,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class ConfigError(WpXmlrpcError, ValueError):
    """Invalid client configuration; raised before any network I/O."""

    def __init__(self, message: str, field: str | None = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="CONFIG_ERROR", category=ErrorCategory.CONFIG, details=details)


_TRANSPORT_KINDS = {
    "network": ErrorCategory.NETWORK,
    "http": ErrorCategory.HTTP,
    "io": ErrorCategory.IO,
    "decode": ErrorCategory.DECODE,
}


class TransportError(WpXmlrpcError):
    """The request could not be carried to the endpoint and back.

    ``kind`` is one of ``network``, ``http``, ``io`` or ``decode`` and is the
    prefix used for the dispatcher's last-error string. ``status_code`` is the
    transport-level code (HTTP status, errno, ...) when one is known.
    """

    def __init__(self, message: str, *, kind: str = "network", status_code: int | None = None):
        category = _TRANSPORT_KINDS.get(kind)
        if category is None:
            raise ValueError(f"unknown transport error kind: {kind}")
        super().__init__(
            message,
            code=f"{kind.upper()}_ERROR",
            category=category,
            details={"kind": kind, "status_code": status_code},
        )
        self.kind = kind
        self.status_code = status_code

    def describe(self) -> str:
        """Render the ``"<kind>: <message> (<code>)"`` form used as last-error."""
        if self.status_code is None:
            return f"{self.kind}: {self.message}"
        return f"{self.kind}: {self.message} ({self.status_code})"


class DecodeError(TransportError):
    """Response payload could not be decoded as an XML-RPC response."""

    def __init__(self, message: str):
        super().__init__(message, kind="decode")


class RemoteFault(WpXmlrpcError):
    """The endpoint answered with an XML-RPC ``<fault>``."""

    def __init__(self, fault_code: int, fault_string: str):
        super().__init__(
            fault_string,
            code="XMLRPC_FAULT",
            category=ErrorCategory.REMOTE,
            details={"fault_code": fault_code},
        )
        self.fault_code = fault_code
        self.fault_string = fault_string

    def describe(self) -> str:
        return f"xmlrpc: {self.fault_string} ({self.fault_code})"


_SENSITIVE_PATTERNS = [
    re.compile(r"(password|passwd|pass|token|secret|auth)[=:]\s*['\"]?([^\s'\"]+)['\"]?", re.IGNORECASE),
    re.compile(r"basic\s+[a-zA-Z0-9+/]+=*", re.IGNORECASE),
    re.compile(r"(?<=://)[^/\s:@]+:[^/\s@]+(?=@)"),
]


def sanitize_error_message(message: str, replacement: str = "[REDACTED]") -> str:
    """Remove credentials from error messages before they are logged."""
    sanitized = message
    for pattern in _SENSITIVE_PATTERNS:
        sanitized = pattern.sub(replacement, sanitized)
    return sanitized


def classify_exception(exc: Exception) -> tuple[str, ErrorCategory]:
    """Return ``(error_code, category)`` for any exception raised by a call."""
    if isinstance(exc, WpXmlrpcError):
        return exc.code, exc.category
    if isinstance(exc, (ConnectionError, TimeoutError)):
        return "NETWORK_ERROR", ErrorCategory.NETWORK
    if isinstance(exc, OSError):
        return "IO_ERROR", ErrorCategory.IO
    if isinstance(exc, (TypeError, ValueError)):
        return "CONFIG_ERROR", ErrorCategory.CONFIG
    return "INTERNAL_ERROR", ErrorCategory.INTERNAL
