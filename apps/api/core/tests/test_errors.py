"""Tests for RFC 7807 error handling."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from apps.api.core.errors import (
    AuthenticationError,
    ConfigurationError,
    EmptyDatasetError,
    ForbiddenError,
    NotFoundError,
    UpstreamError,
    UpstreamQuotaExhaustedError,
    UpstreamRateLimitedError,
    ValidationError,
    register_error_handlers,
)
from apps.api.core.logging import request_context_middleware


@pytest.fixture
def error_app():
    """Create a test app with error handlers registered."""
    app = FastAPI()
    register_error_handlers(app)
    app.middleware("http")(request_context_middleware)

    @app.get("/test/not-found")
    async def raise_not_found():
        raise NotFoundError("Transaction xyz not found")

    @app.get("/test/validation")
    async def raise_validation():
        raise ValidationError("Invalid amount")

    @app.get("/test/auth")
    async def raise_auth():
        raise AuthenticationError()

    @app.get("/test/forbidden")
    async def raise_forbidden():
        raise ForbiddenError()

    @app.get("/test/empty")
    async def raise_empty():
        raise EmptyDatasetError()

    @app.get("/test/rate-limited")
    async def raise_rate_limited():
        raise UpstreamRateLimitedError()

    @app.get("/test/quota")
    async def raise_quota():
        raise UpstreamQuotaExhaustedError()

    @app.get("/test/upstream")
    async def raise_upstream():
        raise UpstreamError()

    @app.get("/test/config")
    async def raise_config():
        raise ConfigurationError("AI_API_KEY is not configured")

    @app.get("/test/unhandled")
    async def raise_unhandled():
        raise RuntimeError("Unexpected crash")

    return app


@pytest.fixture
def client(error_app):
    return TestClient(error_app, raise_server_exceptions=False)


class TestRFC7807ErrorFormat:
    """All errors should return RFC 7807 Problem Details format."""

    def test_not_found_returns_rfc7807(self, client):
        response = client.get("/test/not-found", headers={"X-Request-ID": "req-1"})
        assert response.status_code == 404
        body = response.json()
        assert body["type"] == "about:blank"
        assert body["title"] == "Not Found"
        assert body["status"] == 404
        assert body["detail"] == "Transaction xyz not found"
        assert body["instance"] == "/test/not-found"
        assert body["request_id"] == "req-1"

    def test_validation_error_returns_rfc7807(self, client):
        response = client.get("/test/validation")
        assert response.status_code == 422
        body = response.json()
        assert body["title"] == "Unprocessable Entity"
        assert body["detail"] == "Invalid amount"

    def test_auth_error_returns_rfc7807(self, client):
        response = client.get("/test/auth")
        assert response.status_code == 401
        body = response.json()
        assert body["title"] == "Unauthorized"

    def test_unhandled_error_returns_rfc7807(self, client):
        response = client.get("/test/unhandled")
        assert response.status_code == 500
        body = response.json()
        assert body["title"] == "Internal Server Error"
        assert body["detail"] == "An unexpected error occurred"


class TestErrorTaxonomy:
    @pytest.mark.parametrize(
        "path, status, title",
        [
            ("/test/forbidden", 403, "Forbidden"),
            ("/test/empty", 400, "Bad Request"),
            ("/test/rate-limited", 429, "Too Many Requests"),
            ("/test/quota", 402, "Payment Required"),
            ("/test/upstream", 502, "Bad Gateway"),
            ("/test/config", 500, "Internal Server Error"),
        ],
    )
    def test_status_and_title(self, client, path, status, title):
        response = client.get(path)
        assert response.status_code == status
        assert response.json()["title"] == title

    def test_upstream_limits_are_upstream_errors(self):
        assert isinstance(UpstreamRateLimitedError(), UpstreamError)
        assert isinstance(UpstreamQuotaExhaustedError(), UpstreamError)

    def test_configuration_detail_is_kept(self, client):
        body = client.get("/test/config").json()
        assert body["detail"] == "AI_API_KEY is not configured"
