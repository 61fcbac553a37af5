"""Application configuration using Pydantic Settings.

Configuration is environment-aware:
- APP_ENV determines which .env file to load
- Supports: development, testing, staging, production
- Each environment has its own .env.{environment} file
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Determine which environment to load (default: development)
APP_ENV = os.getenv("APP_ENV", "development")

# Project root (so .env resolution doesn't depend on current working directory)
PROJECT_ROOT = Path(__file__).resolve().parents[2]

# Map environments to their respective .env files (relative to PROJECT_ROOT)
ENV_FILE_MAP = {
    "development": ".env.development",
    "testing": ".env.testing",
    "staging": ".env.staging",
    "production": ".env.production",
}

# Select the .env file for the current environment
_env_filename = ENV_FILE_MAP.get(APP_ENV, ".env.development")
_env_path = PROJECT_ROOT / _env_filename

# Only load from file if it exists (production might inject via env vars only)
_env_file = str(_env_path) if _env_path.is_file() else None


# Load .env file early to populate os.environ before creating nested settings
# This is necessary because Pydantic nested BaseSettings don't inherit env_file
if _env_file:
    from dotenv import load_dotenv
    load_dotenv(_env_file, override=True)


def _build_sheets_settings() -> "SheetsSettings":
    """Build upstream spreadsheet settings from environment."""

    return SheetsSettings()


def _build_app_settings() -> "AppSettings":
    """Build app settings from environment."""

    return AppSettings()


def _build_log_settings() -> "LogSettings":
    return LogSettings()


class SheetsSettings(BaseSettings):
    """Google Sheets upstream configuration.

    The API key and spreadsheet id are optional at startup so the service can
    boot and answer preflight/health requests; they are checked per request.
    """

    google_sheets_api_key: str | None = Field(
        None,
        description="Google Sheets API key appended to upstream requests",
    )
    spreadsheet_id: str | None = Field(
        None,
        description="Identifier of the spreadsheet holding the Lenders sheet",
    )
    sheets_base_url: str = Field(
        "https://sheets.googleapis.com/v4/spreadsheets",
        description="Base URL of the spreadsheets values API",
    )
    sheets_range: str = Field(
        "Lenders!A1:AE100",
        description="A1-notation cell range requested from the spreadsheet",
    )
    sheets_timeout_seconds: float | None = Field(
        None,
        description="Upstream request timeout in seconds (unset disables the timeout)",
        gt=0,
    )

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


class AppSettings(BaseSettings):
    """Application-wide configuration."""

    debug: bool = Field(
        False,
        description="Enable debug mode with verbose logging",
    )

    rate_limit_enabled: bool = Field(
        True,
        description="Enable per-client rate limiting",
    )
    rate_limit_requests: int = Field(
        100,
        description="Maximum number of requests allowed per window (per client)",
        ge=1,
    )
    rate_limit_window_seconds: int = Field(
        3600,
        description="Sliding window size in seconds",
        ge=1,
    )
    rate_limit_include_headers: bool = Field(
        False,
        description="Include X-RateLimit-* and Retry-After headers when throttling",
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        case_sensitive=False,
    )


class LogSettings(BaseSettings):
    """Logging output configuration."""

    level: str = Field("INFO", description="Root log level")
    format: str = Field("json", description="Log format: json or plain")
    output: str = Field("stdout", description="Log destination: stdout or file")
    file_path: str | None = Field(None, description="Log file path when output=file")
    max_bytes: int = Field(
        10 * 1024 * 1024,
        description="Rotate the log file after this many bytes (0 disables rotation)",
        ge=0,
    )
    backup_count: int = Field(5, description="Number of rotated files to keep", ge=0)
    request_id_header: str = Field(
        "X-Request-ID",
        description="Header used to read and echo the request correlation id",
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        case_sensitive=False,
    )


class Settings(BaseSettings):
    """Main application settings container.

    Automatically loads from the appropriate .env.{APP_ENV} file.

    Environments:
    - development: Local development (DEBUG=true)
    - testing: Automated tests (uses .env.testing)
    - staging: Pre-production (uses .env.staging)
    - production: Production deployment (uses .env.production)
    """

    app_env: str = APP_ENV
    sheets: SheetsSettings = Field(default_factory=_build_sheets_settings)
    app: AppSettings = Field(default_factory=_build_app_settings)
    log: LogSettings = Field(default_factory=_build_log_settings)

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


# Global settings instance - composed from domain-specific settings
# Nested settings are created via default_factory so env loading works.
settings = Settings()
