"""Tests for sensitive data filtering in logs."""

from __future__ import annotations

import json
import logging
from io import StringIO

import pytest

from app.core.logging import JsonFormatter, SensitiveDataFilter, clear_request_id, hash_identifier, set_request_id


@pytest.fixture
def capture():
    """Yield (logger, stream) wired through the redaction filter and JSON formatter."""

    logger = logging.getLogger("test_redaction")
    logger.setLevel(logging.INFO)
    logger.handlers.clear()
    logger.propagate = False

    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.addFilter(SensitiveDataFilter())
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)

    yield logger, stream

    logger.handlers.clear()
    clear_request_id()


def test_sheets_api_key_is_redacted(capture):
    logger, stream = capture

    logger.info(
        "sheets.request",
        extra={
            "google_sheets_api_key": "AIza-secret",
            "upstream_url": "https://sheets.googleapis.com/v4/spreadsheets/x/values/A1?key=AIza-secret",
            "cell_range": "Lenders!A1:AE100",
        },
    )

    output = stream.getvalue()
    assert "AIza-secret" not in output
    assert "[REDACTED]" in output
    assert "Lenders!A1:AE100" in output


def test_nested_sensitive_fields_are_redacted(capture):
    logger, stream = capture

    logger.info(
        "nested_event",
        extra={"params": {"key": "AIza-secret", "range": "Lenders"}},
    )

    payload = json.loads(stream.getvalue())
    assert payload["params"] == {"key": "[REDACTED]", "range": "Lenders"}


def test_safe_fields_pass_through(capture):
    logger, stream = capture

    logger.info(
        "rate_limit.exceeded",
        extra={"client_hash": "abcd", "limit": 100, "retry_after_s": 12},
    )

    payload = json.loads(stream.getvalue())
    assert payload["message"] == "rate_limit.exceeded"
    assert payload["level"] == "info"
    assert payload["limit"] == 100
    assert "[REDACTED]" not in stream.getvalue()


def test_request_id_from_context_is_included(capture):
    logger, stream = capture
    set_request_id("req-42")

    logger.info("lenders.fetched")

    assert json.loads(stream.getvalue())["request_id"] == "req-42"


def test_hash_identifier_is_stable_and_opaque():
    digest = hash_identifier("198.51.100.1")

    assert digest == hash_identifier("198.51.100.1")
    assert len(digest) == 16
    assert digest != hash_identifier("198.51.100.2")
    int(digest, 16)


def test_key_query_values_are_masked_in_message_text(capture):
    logger, stream = capture

    logger.info(
        "HTTP Request: GET %s",
        "https://sheets.googleapis.com/v4/spreadsheets/x/values/Lenders!A1:AE100?key=AIza-secret",
    )

    payload = json.loads(stream.getvalue())
    assert "AIza-secret" not in stream.getvalue()
    assert payload["message"].endswith("?key=[REDACTED]")


def test_upstream_call_never_logs_the_sheets_key(caplog):
    import httpx
    from fastapi.testclient import TestClient

    from app.adapters.sheets.factory import create_sheets_client
    from app.api.routes.lenders import get_lenders_service
    from app.main import app
    from app.services.lenders_service import LendersService

    transport = httpx.MockTransport(lambda request: httpx.Response(200, content=b"{}"))
    service = LendersService(client_factory=lambda: create_sheets_client(transport=transport))
    app.dependency_overrides[get_lenders_service] = lambda: service
    try:
        with caplog.at_level(logging.DEBUG):
            response = TestClient(app).get("/get-lenders")
    finally:
        app.dependency_overrides.pop(get_lenders_service, None)

    assert response.status_code == 200
    leaked = [r.getMessage() for r in caplog.records if "test-sheets-key" in r.getMessage()]
    assert leaked == []
