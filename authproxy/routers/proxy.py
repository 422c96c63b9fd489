"""
Proxy router - forwards every other GET to the configured backend.
"""
from __future__ import annotations

import asyncio

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.responses import PlainTextResponse

from authproxy.errors import UpstreamTransportError
from authproxy.logging import get_logger
from authproxy.services.proxy import build_upstream_url, fetch_upstream
from authproxy.state import AppState, get_app_state

logger = get_logger(__name__)

router = APIRouter(tags=["proxy"])

# Non-standard status (nginx convention) for requests abandoned by the client
CLIENT_CLOSED_REQUEST = 499


async def wait_for_disconnect(request: Request) -> None:
    """Return once the inbound client has gone away."""
    while True:
        message = await request.receive()
        if message["type"] == "http.disconnect":
            return


@router.get(
    "/{path:path}",
    response_class=PlainTextResponse,
    responses={
        200: {"description": "Body of the upstream response. Returned for any upstream status code."},
        404: {"description": "Empty path"},
        502: {"description": "Upstream unreachable: `Proxy error: <cause>`"},
    }
)
async def proxy(path: str, request: Request, state: AppState = Depends(get_app_state)) -> Response:
    """
    Forward the request to `backend_url/<path>` with the injected Authorization header.

    **Flow:**
    1. Build the upstream URL (trailing slashes removed from the path)
    2. Send a single GET through the shared client
    3. Relay the upstream body with status 200, or answer 502 on transport failure
    """
    if not path:
        raise HTTPException(status_code=404)

    url = build_upstream_url(state.config.backend_url, path)

    fetch = asyncio.create_task(fetch_upstream(url, request.headers.raw, state.http_client))
    disconnect = asyncio.create_task(wait_for_disconnect(request))
    try:
        done, _ = await asyncio.wait({fetch, disconnect}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        pending = [task for task in (fetch, disconnect) if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    if fetch not in done:
        logger.info(f"Client disconnected, cancelled upstream request to {url}")
        return Response(status_code=CLIENT_CLOSED_REQUEST)

    try:
        result = fetch.result()
    except UpstreamTransportError as e:
        logger.warning(f"Transport error forwarding to {url}: {e.cause}")
        return PlainTextResponse(f"Proxy error: {e.cause}", status_code=502)

    # The upstream status is only logged; callers always see 200
    logger.info(f"Proxied GET {url} -> upstream {result.status_code}")
    return PlainTextResponse(result.body, status_code=200)
