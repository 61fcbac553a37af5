"""Factory for the spreadsheet client."""

from __future__ import annotations

import logging

import httpx

from app.adapters.sheets.base import AbstractSheetsClient
from app.adapters.sheets.google_sheets import GoogleSheetsClient
from app.core.config import SheetsSettings, settings
from app.core.errors import ConfigurationAppError

logger = logging.getLogger(__name__)

CONFIGURATION_ERROR_MESSAGE = "Server configuration error"


def create_sheets_client(
    sheets_settings: SheetsSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AbstractSheetsClient:
    """Build a Google Sheets client from configuration.

    Reads the settings at call time so a missing key is reported per request
    instead of preventing startup.

    Args:
        sheets_settings: Settings to use; defaults to ``settings.sheets``.
        transport: Optional httpx transport (tests inject a mock here).

    Raises:
        ConfigurationAppError: If the API key or spreadsheet id is missing.
    """
    cfg = sheets_settings or settings.sheets

    missing = [
        name
        for name, value in (
            ("GOOGLE_SHEETS_API_KEY", cfg.google_sheets_api_key),
            ("SPREADSHEET_ID", cfg.spreadsheet_id),
        )
        if not value
    ]
    if missing:
        logger.error("sheets.config_missing", extra={"missing": missing})
        raise ConfigurationAppError(
            code="configuration_missing",
            message=CONFIGURATION_ERROR_MESSAGE,
        )

    return GoogleSheetsClient(
        api_key=cfg.google_sheets_api_key,
        spreadsheet_id=cfg.spreadsheet_id,
        base_url=cfg.sheets_base_url,
        cell_range=cfg.sheets_range,
        timeout_seconds=cfg.sheets_timeout_seconds,
        transport=transport,
    )
