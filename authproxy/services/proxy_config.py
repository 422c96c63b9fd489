"""
Proxy config service - loads the YAML configuration file into a ProxyConfig.
"""
from __future__ import annotations

import re
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from authproxy.errors import ConfigParseError, ConfigReadError

# A top-level `secret_token:` line, whole value (and any trailing comment) included
_SECRET_LINE = re.compile(r"^(?P<key>['\"]?secret_token['\"]?[ \t]*:)[^\n]*", re.MULTILINE)


class ProxyConfig(BaseModel):
    """Proxy configuration. Unknown keys are rejected, omitted keys take defaults."""

    model_config = ConfigDict(extra="forbid", frozen=True, strict=True)

    backend_url: str = "0.0.0.0"
    secret_token: str = "my-secret-token"
    port: int = Field(default=3000, ge=0, le=65535)
    # Reserved, not used by the proxy
    extra_values: Optional[str] = None


def read_config_file(path: str) -> str:
    """
    Read the whole config file as UTF-8 text.

    Raises:
        ConfigReadError: If the file is missing, unreadable or not UTF-8
    """
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigReadError(path, str(e)) from e


def parse_proxy_config(contents: str, path: str) -> ProxyConfig:
    """
    Parse YAML config contents into a ProxyConfig.

    Args:
        contents: Raw file contents
        path: Path the contents came from (used in error messages)

    Returns:
        ProxyConfig with defaults applied for omitted fields

    Raises:
        ConfigParseError: If the YAML is malformed, the top level is not a
            mapping, or a field is unknown or invalid
    """
    try:
        data = yaml.safe_load(contents)
    except yaml.YAMLError as e:
        raise ConfigParseError(path, str(e)) from e

    # An empty document means "all defaults"
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigParseError(path, f"expected a mapping, got {type(data).__name__}")

    try:
        return ProxyConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigParseError(path, str(e)) from e


def redact_secret(contents: str) -> str:
    """Mask the value of the secret_token key in raw config text before echoing it."""
    return _SECRET_LINE.sub(r"\g<key> ***", contents)
