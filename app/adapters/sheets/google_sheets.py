"""Google Sheets values API client."""

from __future__ import annotations

import logging
from urllib.parse import quote

import httpx

from app.adapters.sheets.base import AbstractSheetsClient, UpstreamResponse
from app.core.errors import NetworkAppError

logger = logging.getLogger(__name__)


class GoogleSheetsClient(AbstractSheetsClient):
    """Reads one range through ``GET {base}/{id}/values/{range}?key={key}``.

    Uses ``httpx.AsyncClient``; a custom transport can be injected for tests.
    """

    def __init__(
        self,
        api_key: str,
        spreadsheet_id: str,
        *,
        base_url: str = "https://sheets.googleapis.com/v4/spreadsheets",
        cell_range: str = "Lenders!A1:AE100",
        timeout_seconds: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.spreadsheet_id = spreadsheet_id
        self.base_url = base_url.rstrip("/")
        self.cell_range = cell_range
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    @property
    def values_url(self) -> str:
        """Upstream URL without the key query parameter."""
        spreadsheet = quote(self.spreadsheet_id, safe="")
        cell_range = quote(self.cell_range, safe="!:")
        return f"{self.base_url}/{spreadsheet}/values/{cell_range}"

    async def fetch_values(self) -> UpstreamResponse:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.get(self.values_url, params={"key": self.api_key})
        except httpx.HTTPError as exc:
            logger.error(
                "sheets.request_failed",
                extra={
                    "error_type": type(exc).__name__,
                    "error_msg": str(exc),
                    "cell_range": self.cell_range,
                },
            )
            raise NetworkAppError(
                code="upstream_unreachable",
                message=f"Network error: {exc}",
            ) from exc

        return UpstreamResponse(status_code=response.status_code, body=response.content)
