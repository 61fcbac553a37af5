from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from app.core.rate_limit import enforce_rate_limit
from app.services.lenders_service import LendersService

router = APIRouter(tags=["Lenders"])

# OPTIONS never reaches routing (see cors_middleware); every other method
# is throttled and proxied the same way as GET.
OTHER_METHODS = ["HEAD", "POST", "PUT", "PATCH", "DELETE"]

_lenders_service = LendersService()


def get_lenders_service() -> LendersService:
    return _lenders_service


@router.get(
    "/get-lenders",
    dependencies=[Depends(enforce_rate_limit)],
    responses={
        429: {"description": "Too many requests from this client"},
        500: {"description": "Missing configuration or upstream unreachable"},
    },
)
async def get_lenders(
    service: LendersService = Depends(get_lenders_service),
) -> Response:
    """Relay the Lenders sheet values from Google Sheets.

    The upstream JSON is returned unchanged; upstream failures keep the
    upstream status code and carry the upstream body as ``details``.
    """
    body = await service.fetch_lenders()
    return Response(content=body, status_code=200, media_type="application/json")


router.add_api_route(
    "/get-lenders",
    get_lenders,
    methods=OTHER_METHODS,
    dependencies=[Depends(enforce_rate_limit)],
    include_in_schema=False,
)
