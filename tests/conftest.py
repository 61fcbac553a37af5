"""Pytest configuration and fixtures shared across all test modules.

Environment variables are set before any app import so the module-level
``settings`` object sees them.
"""

import os

# CRITICAL: Set this before any imports that might load settings
os.environ["APP_ENV"] = "testing"

os.environ.setdefault("GOOGLE_SHEETS_API_KEY", "test-sheets-key")
os.environ.setdefault("SPREADSHEET_ID", "test-spreadsheet-id")
os.environ.setdefault("APP_RATE_LIMIT_ENABLED", "true")
os.environ.setdefault("APP_RATE_LIMIT_REQUESTS", "100")
os.environ.setdefault("APP_RATE_LIMIT_WINDOW_SECONDS", "3600")

import pytest  # noqa: E402

from app.core.rate_limit import reset_rate_limiter  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_rate_limiter():
    """Give every test an empty process-wide limiter."""
    reset_rate_limiter()
    yield
    reset_rate_limiter()
