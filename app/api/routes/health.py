from __future__ import annotations

from fastapi import APIRouter

from app.core.config import settings

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check() -> dict:
    """Liveness probe.

    Not rate limited. ``upstream_configured`` tells operators whether the
    Sheets credentials are present without revealing them.
    """

    return {
        "status": "ok",
        "upstream_configured": bool(
            settings.sheets.google_sheets_api_key and settings.sheets.spreadsheet_id
        ),
    }
