"""Tests for structured logging setup and request context."""

import structlog
from fastapi import FastAPI
from fastapi.testclient import TestClient

from apps.api.core.logging import REQUEST_ID_HEADER, request_context_middleware, setup_logging


class TestStructuredLogging:
    """Test structlog outputs structured JSON."""

    def test_setup_logging_configures_structlog(self):
        """After setup, structlog.get_logger() should return a bound logger."""
        setup_logging(log_level="DEBUG", json_output=True)
        logger = structlog.get_logger()
        assert logger is not None

    def test_setup_logging_dev_mode(self):
        """Dev mode should configure console renderer without errors."""
        setup_logging(log_level="DEBUG", json_output=False)
        logger = structlog.get_logger()
        assert logger is not None


class TestRequestContext:
    """The middleware binds a request id visible to handlers and logs."""

    def _app(self):
        app = FastAPI()
        app.middleware("http")(request_context_middleware)

        @app.get("/context")
        async def context():
            return structlog.contextvars.get_contextvars()

        return app

    def test_request_id_is_bound_into_structlog_context(self):
        response = TestClient(self._app()).get("/context", headers={REQUEST_ID_HEADER: "abc"})
        bound = response.json()
        assert bound["request_id"] == "abc"
        assert bound["method"] == "GET"
        assert bound["path"] == "/context"

    def test_request_id_is_echoed(self):
        response = TestClient(self._app()).get("/context", headers={REQUEST_ID_HEADER: "abc"})
        assert response.headers[REQUEST_ID_HEADER] == "abc"

    def test_each_request_gets_its_own_id(self):
        client = TestClient(self._app())
        first = client.get("/context").headers[REQUEST_ID_HEADER]
        second = client.get("/context").headers[REQUEST_ID_HEADER]
        assert first != second
