"""
Proxy service - forwards requests to the upstream backend.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple

import httpx

from authproxy.errors import UpstreamTransportError
from authproxy.logging import get_logger

logger = get_logger(__name__)

# Headers that describe the inbound connection and must not be forwarded
SKIP_HEADERS = frozenset({
    b"connection", b"keep-alive", b"proxy-connection", b"transfer-encoding",
    b"te", b"trailer", b"upgrade", b"host", b"content-length"
})


@dataclass(frozen=True)
class UpstreamResult:
    """Outcome of a completed upstream exchange."""
    status_code: int
    body: str


def build_upstream_url(backend_url: str, path: str) -> str:
    """Join the backend URL and the inbound path, dropping trailing slashes from the path."""
    return f"{backend_url}/{path.rstrip('/')}"


def build_forward_headers(original_headers: Iterable[Tuple[bytes, bytes]]) -> List[Tuple[bytes, bytes]]:
    """
    Strip connection-level headers, keep everything else (including repeats).

    Works on raw bytes so obs-text values (e.g. latin-1) are forwarded untouched.
    """
    return [(k, v) for k, v in original_headers if k.lower() not in SKIP_HEADERS]


def _describe(error: Exception) -> str:
    return str(error) or type(error).__name__


async def _read_text(response: httpx.Response) -> str:
    """Read the response body as text, or "" if it cannot be read or decoded."""
    try:
        content = await response.aread()
    except httpx.HTTPError as e:
        logger.warning(f"Failed to read upstream body from {response.request.url}: {_describe(e)}")
        return ""
    try:
        return content.decode(response.encoding or "utf-8")
    except (UnicodeDecodeError, LookupError):
        logger.warning(f"Upstream body from {response.request.url} is not valid text")
        return ""


async def fetch_upstream(
    url: str,
    original_headers: Iterable[Tuple[bytes, bytes]],
    client: httpx.AsyncClient
) -> UpstreamResult:
    """
    Issue one GET to the upstream and read its body.

    Args:
        url: The upstream URL
        original_headers: Raw inbound headers, Authorization already injected
        client: Shared HTTP client for connection pooling

    Returns:
        UpstreamResult with the upstream status and decoded body

    Raises:
        UpstreamTransportError: If no response could be obtained (connection
            refused, DNS failure, timeout, invalid URL...). No retry is made.
    """
    headers = build_forward_headers(original_headers)
    try:
        request = client.build_request("GET", url, headers=headers)
        response = await client.send(request, stream=True)
    except (httpx.RequestError, httpx.InvalidURL) as e:
        raise UpstreamTransportError(url, _describe(e)) from e

    try:
        body = await _read_text(response)
    finally:
        await response.aclose()

    return UpstreamResult(status_code=response.status_code, body=body)
