"""
Error types raised by the proxy.

Config and bind errors are fatal at startup; transport and header errors are
scoped to the request that triggered them.
"""
from __future__ import annotations


class AuthProxyError(Exception):
    """Base class for all proxy errors."""


class ConfigError(AuthProxyError, ValueError):
    """The configuration file could not be turned into a ProxyConfig."""

    action = "load config file"

    def __init__(self, path: str, cause: str):
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to {self.action} '{path}': {cause}")


class ConfigReadError(ConfigError):
    """Config file missing, unreadable or not UTF-8."""

    action = "read config file"


class ConfigParseError(ConfigError):
    """Config document malformed or containing an unknown/invalid field."""

    action = "parse file"


class SocketBindError(AuthProxyError):
    """The listening socket could not be bound."""

    def __init__(self, host: str, port: int, cause: str):
        self.host = host
        self.port = port
        self.cause = cause
        super().__init__(f"Failed to bind {host}:{port}: {cause}")


class UpstreamTransportError(AuthProxyError):
    """No response could be obtained from the upstream."""

    def __init__(self, url: str, cause: str):
        self.url = url
        self.cause = cause
        super().__init__(f"Upstream request to {url} failed: {cause}")


class HeaderConstructionError(AuthProxyError):
    """The bearer credential is not a valid HTTP header value."""
