#!/usr/bin/env python3
"""
Mock upstream server for trying the proxy by hand.

Answers every GET with the requested path and whether the proxy attached
an Authorization header. `/missing` answers 404 and `/broken` answers 500,
to see that the proxy still reports 200 with the upstream body.

Run with: python scripts/mock_upstream.py
Listens on: http://localhost:9001 (matches config.example.yaml)
"""
from __future__ import annotations

from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import uvicorn

app = FastAPI(title="Mock Upstream Server", description="Test server for the authenticating proxy")


def log_request(path: str, headers: dict):
    """Log an incoming request without printing credentials."""
    timestamp = datetime.now().strftime("%H:%M:%S")
    auth = "bearer" if headers.get("authorization", "").startswith("Bearer ") else "none"
    print(f"[{timestamp}] GET /{path} | Authorization: {auth}")


@app.get("/missing")
async def missing():
    """Always 404."""
    return JSONResponse({"error": "not found"}, status_code=404)


@app.get("/broken")
async def broken():
    """Always 500."""
    return JSONResponse({"error": "upstream failure"}, status_code=500)


@app.get("/{path:path}")
async def echo(path: str, request: Request):
    """Catch-all endpoint."""
    log_request(path, dict(request.headers))

    return JSONResponse({
        "status": "ok",
        "path": f"/{path}",
        "authorized": "authorization" in request.headers,
    })


if __name__ == "__main__":
    print("\nMock Upstream Server")
    print("=" * 50)
    print("Listening on http://localhost:9001")
    print("Endpoints:")
    print("  GET /missing - 404")
    print("  GET /broken  - 500")
    print("  GET /<path>  - echo")
    print("=" * 50 + "\n")

    uvicorn.run(app, host="127.0.0.1", port=9001, log_level="warning")
