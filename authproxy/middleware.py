"""
Credential injector - ASGI middleware that runs ahead of routing.
"""
from __future__ import annotations

from starlette.responses import PlainTextResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from authproxy.errors import HeaderConstructionError
from authproxy.logging import get_logger
from authproxy.services.security import inject_credentials, mint_bearer_token

logger = get_logger(__name__)


class CredentialInjector:
    """
    Overwrite the Authorization header of every HTTP request with the
    server's own bearer token before it reaches any route.

    Caller-supplied Authorization headers are always discarded.
    """

    def __init__(self, app: ASGIApp, secret_token: str) -> None:
        self.app = app
        self.secret_token = secret_token

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        try:
            token = mint_bearer_token(self.secret_token)
        except HeaderConstructionError as e:
            logger.error(f"Cannot build Authorization header: {e}")
            response = PlainTextResponse("Internal Server Error", status_code=500)
            await response(scope, receive, send)
            return

        scope = dict(scope)
        scope["headers"] = inject_credentials(scope.get("headers", []), token)
        await self.app(scope, receive, send)
