"""
Tests for the internal router - health check and config endpoints.
"""
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from authproxy.main import create_app
from authproxy.routers import internal
from authproxy.services.proxy_config import ProxyConfig
from tests.conftest import TEST_BACKEND_URL, TEST_SECRET


class TestHealthEndpoint:
    """Tests for the /health endpoint."""

    def test_health_returns_202(self, client):
        """Health endpoint should return 202."""
        response = client.get("/health")
        assert response.status_code == 202

    def test_health_body(self, client):
        """Transport status is 202 while the embedded code stays 200."""
        response = client.get("/health")
        assert response.json() == {"data": "OK", "code": 200}

    def test_health_without_upstream(self, httpx_mock):
        """Health must not touch the backend, even an unreachable one."""
        app = create_app(ProxyConfig(backend_url="http://unreachable.invalid"))

        with TestClient(app) as client:
            response = client.get("/health")

        assert response.status_code == 202
        assert httpx_mock.get_requests() == []

    def test_health_without_state(self):
        """Health does not depend on the shared state either."""
        bare_app = FastAPI()
        bare_app.include_router(internal.router)

        response = TestClient(bare_app).get("/health")

        assert response.status_code == 202


class TestConfigEndpoint:
    """Tests for the /config endpoint."""

    def test_config_returns_backend_url(self, client):
        """Config endpoint echoes the backend URL."""
        response = client.get("/config")

        assert response.status_code == 202
        assert response.json() == {"data": f"backend_url:{TEST_BACKEND_URL}", "code": 200}

    def test_config_never_leaks_secret(self, client):
        """The secret is not part of the response."""
        response = client.get("/config")

        assert TEST_SECRET not in response.text

    @pytest.mark.parametrize("secret", ["my-secret-token", "x", "backend", "http"])
    def test_secret_absent_for_any_config(self, secret):
        """Whatever the secret, /config does not show it next to the URL."""
        app = create_app(ProxyConfig(backend_url="https://api.example.com", secret_token=secret))

        with TestClient(app) as client:
            body = client.get("/config").json()

        assert body["data"] == "backend_url:https://api.example.com"
        assert set(body) == {"data", "code"}

    def test_config_without_state_returns_500(self):
        """Missing state is reported rather than crashing."""
        bare_app = FastAPI()
        bare_app.include_router(internal.router)

        response = TestClient(bare_app).get("/config")

        assert response.status_code == 500
