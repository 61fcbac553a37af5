from __future__ import annotations

from app.api.routes.health import router as health_router
from app.api.routes.lenders import router as lenders_router

__all__ = ["health_router", "lenders_router"]
