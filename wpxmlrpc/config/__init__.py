"""Configuration module for wpxmlrpc."""

from wpxmlrpc.config.loader import load_config, save_config, get_config_path
from wpxmlrpc.config.schema import AuthConfig, ClientConfig, ProxyConfig

__all__ = ["AuthConfig", "ClientConfig", "ProxyConfig", "load_config", "save_config", "get_config_path"]
