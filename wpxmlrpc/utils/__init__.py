"""Utility functions for wpxmlrpc."""

from wpxmlrpc.utils.exceptions import (
    WpXmlrpcError,
    ConfigError,
    TransportError,
    DecodeError,
    RemoteFault,
    ErrorCategory,
    classify_exception,
    sanitize_error_message,
)

__all__ = [
    "WpXmlrpcError",
    "ConfigError",
    "TransportError",
    "DecodeError",
    "RemoteFault",
    "ErrorCategory",
    "classify_exception",
    "sanitize_error_message",
]
