"""
Shared test fixtures and helpers.
"""
from __future__ import annotations

import httpx
import pytest
from fastapi.testclient import TestClient

from authproxy.main import create_app
from authproxy.services.proxy_config import ProxyConfig


TEST_BACKEND_URL = "http://upstream.test"
TEST_SECRET = "test-secret-token"


@pytest.fixture
def proxy_config() -> ProxyConfig:
    """A config pointing at the mocked upstream."""
    return ProxyConfig(backend_url=TEST_BACKEND_URL, secret_token=TEST_SECRET, port=3000)


@pytest.fixture
def http_client() -> httpx.AsyncClient:
    """Upstream HTTP client; requests are intercepted by httpx_mock when that fixture is used."""
    return httpx.AsyncClient()


@pytest.fixture
def app(proxy_config, http_client):
    """Proxy application wired to the test upstream client."""
    return create_app(proxy_config, http_client=http_client)


@pytest.fixture
def client(app) -> TestClient:
    """Create a test client."""
    return TestClient(app)


@pytest.fixture
def write_config(tmp_path):
    """Write YAML text to a temporary config file and return its path."""
    def _write(text: str, name: str = "config.yaml") -> str:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)
    return _write
