"""Unit tests for LendersService."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from app.adapters.sheets.base import UpstreamResponse
from app.core.errors import ConfigurationAppError, NetworkAppError, UpstreamAppError
from app.services.lenders_service import LendersService


def _service_returning(response: UpstreamResponse) -> tuple[LendersService, MagicMock]:
    sheets_client = MagicMock()
    sheets_client.fetch_values = AsyncMock(return_value=response)
    return LendersService(client_factory=lambda: sheets_client), sheets_client


@pytest.mark.asyncio
async def test_success_returns_upstream_body() -> None:
    service, _ = _service_returning(UpstreamResponse(200, b'{"values":[["a","b"]]}'))

    assert await service.fetch_lenders() == b'{"values":[["a","b"]]}'


@pytest.mark.asyncio
async def test_non_200_raises_upstream_error_with_raw_details() -> None:
    service, _ = _service_returning(UpstreamResponse(403, b'{"error":{"message":"bad key"}}'))

    with pytest.raises(UpstreamAppError) as exc_info:
        await service.fetch_lenders()

    assert exc_info.value.upstream_status == 403
    assert exc_info.value.message == "Failed to fetch data from Google Sheets"
    assert exc_info.value.details == '{"error":{"message":"bad key"}}'


@pytest.mark.asyncio
async def test_configuration_error_skips_upstream() -> None:
    def factory():
        raise ConfigurationAppError(code="configuration_missing", message="Server configuration error")

    service = LendersService(client_factory=factory)

    with pytest.raises(ConfigurationAppError):
        await service.fetch_lenders()


@pytest.mark.asyncio
async def test_network_error_propagates() -> None:
    sheets_client = MagicMock()
    sheets_client.fetch_values = AsyncMock(
        side_effect=NetworkAppError(code="upstream_unreachable", message="Network error: ECONNRESET")
    )
    service = LendersService(client_factory=lambda: sheets_client)

    with pytest.raises(NetworkAppError, match="ECONNRESET"):
        await service.fetch_lenders()
