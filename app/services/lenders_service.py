"""Lenders data service.

Fetches the Lenders range from the spreadsheet upstream and decides what the
client sees: the upstream body untouched on success, a typed error otherwise.
"""

from __future__ import annotations

import logging
from typing import Callable

from app.adapters.sheets.base import AbstractSheetsClient
from app.adapters.sheets.factory import create_sheets_client
from app.core.errors import UpstreamAppError

logger = logging.getLogger(__name__)

UPSTREAM_ERROR_MESSAGE = "Failed to fetch data from Google Sheets"


class LendersService:
    """Proxy the Lenders sheet from the configured upstream.

    The client factory runs per call, after rate limiting, so missing
    configuration surfaces as a per-request error and never as a startup
    failure.
    """

    def __init__(
        self,
        client_factory: Callable[[], AbstractSheetsClient] = create_sheets_client,
    ) -> None:
        self._client_factory = client_factory

    async def fetch_lenders(self) -> bytes:
        """Return the upstream JSON body for the Lenders range.

        Returns:
            Upstream response body, byte for byte.

        Raises:
            ConfigurationAppError: If the upstream is not configured.
            UpstreamAppError: If the upstream answers with a non-200 status.
            NetworkAppError: If the upstream cannot be reached.
        """
        client = self._client_factory()
        upstream = await client.fetch_values()

        if upstream.status_code == 200:
            logger.info(
                "lenders.fetched",
                extra={"upstream_status": upstream.status_code, "body_bytes": len(upstream.body)},
            )
            return upstream.body

        logger.error(
            "lenders.upstream_error",
            extra={"upstream_status": upstream.status_code, "upstream_body": upstream.text[:1000]},
        )
        raise UpstreamAppError(
            code="upstream_error",
            message=UPSTREAM_ERROR_MESSAGE,
            details=upstream.text,
            upstream_status=upstream.status_code,
        )
