"""Tests for global exception handlers.

Validates the flat ``{"error": ...}`` body, status mapping, CORS headers on
failures and that unexpected errors leak nothing.
"""

import asyncio
import json
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.core.errors import (
    AppError,
    ConfigurationAppError,
    NetworkAppError,
    RateLimitAppError,
    UpstreamAppError,
)
from app.core.exception_handlers import general_exception_handler, setup_exception_handlers


@pytest.fixture
def app_with_handlers() -> FastAPI:
    app = FastAPI()
    setup_exception_handlers(app)
    return app


@pytest.fixture
def client(app_with_handlers: FastAPI) -> TestClient:
    return TestClient(app_with_handlers, raise_server_exceptions=False)


class TestAppErrorHandler:
    def test_configuration_error_returns_500_without_details(self, client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/config")
        async def endpoint():
            raise ConfigurationAppError(code="configuration_missing", message="Server configuration error")

        response = client.get("/config")

        assert response.status_code == 500
        assert response.json() == {"error": "Server configuration error"}

    def test_rate_limit_error_returns_429_with_extra_headers(self, client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/limited")
        async def endpoint():
            raise RateLimitAppError(
                code="rate_limit_exceeded",
                message="Too many requests. Please try again later.",
                headers={"Retry-After": "12"},
            )

        response = client.get("/limited")

        assert response.status_code == 429
        assert response.json() == {"error": "Too many requests. Please try again later."}
        assert response.headers["retry-after"] == "12"

    def test_upstream_error_uses_upstream_status(self, client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/upstream")
        async def endpoint():
            raise UpstreamAppError(
                code="upstream_error",
                message="Failed to fetch data from Google Sheets",
                details="quota exceeded",
                upstream_status=429,
            )

        response = client.get("/upstream")

        assert response.status_code == 429
        assert response.json() == {
            "error": "Failed to fetch data from Google Sheets",
            "details": "quota exceeded",
        }

    def test_network_error_returns_500(self, client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/network")
        async def endpoint():
            raise NetworkAppError(code="upstream_unreachable", message="Network error: ECONNRESET")

        response = client.get("/network")

        assert response.status_code == 500
        assert response.json() == {"error": "Network error: ECONNRESET"}

    def test_error_responses_carry_cors_headers(self, client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/cors")
        async def endpoint():
            raise ConfigurationAppError(code="configuration_missing", message="Server configuration error")

        response = client.get("/cors")

        assert response.headers["access-control-allow-origin"] == "*"
        assert response.headers["access-control-allow-methods"] == "GET, OPTIONS"
        assert response.headers["content-type"] == "application/json"


class TestGeneralExceptionHandler:
    def test_unexpected_exception_returns_generic_500(self, client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/boom")
        async def endpoint():
            raise RuntimeError("database password is hunter2")

        response = client.get("/boom")

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}
        assert "hunter2" not in response.text

    def test_general_exception_handler_never_leaks_stack_trace(self):
        request = AsyncMock()
        request.url.path = "/test"
        request.method = "GET"

        response = asyncio.run(general_exception_handler(request, ValueError("Test error with details")))

        body = json.loads(bytes(response.body).decode())
        assert response.status_code == 500
        assert "Traceback" not in json.dumps(body)
        assert "ValueError" not in json.dumps(body)


def test_setup_exception_handlers_registers_handlers(app_with_handlers: FastAPI):
    assert AppError in app_with_handlers.exception_handlers
    assert Exception in app_with_handlers.exception_handlers


def test_http_exceptions_use_flat_error_body(client: TestClient, app_with_handlers: FastAPI):
    from fastapi import HTTPException

    @app_with_handlers.get("/gone")
    async def endpoint():
        raise HTTPException(status_code=410, detail="Gone for good", headers={"X-Reason": "retired"})

    response = client.get("/gone")

    assert response.status_code == 410
    assert response.json() == {"error": "Gone for good"}
    assert response.headers["x-reason"] == "retired"
    assert response.headers["access-control-allow-origin"] == "*"

    missing = client.post("/gone")
    assert missing.status_code == 405
    assert missing.json() == {"error": "Method Not Allowed"}
