"""Spreadsheet upstream adapter layer."""

from app.adapters.sheets.base import AbstractSheetsClient, UpstreamResponse
from app.adapters.sheets.factory import create_sheets_client
from app.adapters.sheets.google_sheets import GoogleSheetsClient

__all__ = [
    "AbstractSheetsClient",
    "GoogleSheetsClient",
    "UpstreamResponse",
    "create_sheets_client",
]
