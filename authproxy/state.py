"""
Application state - shared state initialized at startup.
"""
from __future__ import annotations

from dataclasses import dataclass

import httpx
from fastapi import HTTPException, Request

from authproxy.logging import get_logger
from authproxy.services.proxy_config import ProxyConfig

logger = get_logger(__name__)


@dataclass(frozen=True)
class AppState:
    """
    Application state container.
    Built once at startup, attached to the app, injected into routes via FastAPI
    dependencies. Never mutated afterwards.
    """
    config: ProxyConfig
    http_client: httpx.AsyncClient


def get_app_state(request: Request) -> AppState:
    """FastAPI dependency returning the shared AppState."""
    state = getattr(request.app.state, "proxy", None)
    if state is None:
        logger.error("Application state not initialized")
        raise HTTPException(status_code=500, detail="Internal server error")
    return state
