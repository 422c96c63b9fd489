"""
Security service - bearer credential minting and injection.
"""
from __future__ import annotations

from typing import Iterable, List, Tuple

from authproxy.errors import HeaderConstructionError

RawHeaders = List[Tuple[bytes, bytes]]

AUTHORIZATION = b"authorization"


def _is_valid_header_value(value: str) -> bool:
    return all(ch == "\t" or " " <= ch <= "~" for ch in value)


def mint_bearer_token(secret: str) -> str:
    """
    Build the Authorization header value for the configured secret.

    Raises:
        HeaderConstructionError: If the value contains characters that are not
            allowed in an HTTP header (control characters, non-ASCII)
    """
    token = f"Bearer {secret}"
    if not _is_valid_header_value(token):
        # Never include the secret itself in the message
        raise HeaderConstructionError("Bearer token is not a valid header value")
    return token


def inject_credentials(raw_headers: Iterable[Tuple[bytes, bytes]], token: str) -> RawHeaders:
    """
    Return a copy of ASGI raw headers where every caller-supplied Authorization
    header is replaced by a single one carrying `token`.
    """
    headers = [(k, v) for k, v in raw_headers if k.lower() != AUTHORIZATION]
    headers.append((AUTHORIZATION, token.encode("latin-1")))
    return headers
