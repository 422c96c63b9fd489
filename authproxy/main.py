"""
AuthProxy - authenticating reverse proxy

Application factory for the FastAPI application.
"""
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from authproxy.logging import get_logger
from authproxy.middleware import CredentialInjector
from authproxy.routers import internal, proxy
from authproxy.services.proxy_config import ProxyConfig
from authproxy.state import AppState

logger = get_logger(__name__)

# Upper bound on a single upstream exchange, in seconds
UPSTREAM_TIMEOUT = 30.0


def _init_http_client() -> httpx.AsyncClient:
    """Initialize shared HTTP client for upstream requests."""
    client = httpx.AsyncClient(timeout=UPSTREAM_TIMEOUT)
    logger.info("HTTP client initialized")
    return client


async def _shutdown_http_client(client: httpx.AsyncClient) -> None:
    """Close the shared HTTP client."""
    await client.aclose()
    logger.info("HTTP client closed")


async def unmatched_route_handler(request: Request, exc: StarletteHTTPException):
    """Answer unknown routes with the API envelope, defer other errors to FastAPI."""
    if exc.status_code == 404:
        return JSONResponse(
            status_code=404,
            content=internal.ApiResponse(data="Unidentified endpoint", code=404).model_dump()
        )
    return await http_exception_handler(request, exc)


def create_app(config: ProxyConfig, http_client: Optional[httpx.AsyncClient] = None) -> FastAPI:
    """
    Build the proxy application for `config`.

    When `http_client` is given it is used as-is and left open on shutdown (the
    caller owns it); otherwise a client is created and closed by the lifespan.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager - handles startup and shutdown."""
        if http_client is not None:
            yield
            return

        client = _init_http_client()
        app.state.proxy = AppState(config=config, http_client=client)
        try:
            yield
        finally:
            await _shutdown_http_client(client)

    app = FastAPI(
        title="AuthProxy",
        description="Authenticating reverse proxy",
        lifespan=lifespan
    )
    if http_client is not None:
        app.state.proxy = AppState(config=config, http_client=http_client)

    app.add_middleware(CredentialInjector, secret_token=config.secret_token)
    app.add_exception_handler(StarletteHTTPException, unmatched_route_handler)

    app.include_router(internal.router)
    app.include_router(proxy.router)
    return app
