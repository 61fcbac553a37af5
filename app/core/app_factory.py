"""Application factory for the FastAPI app.

Centralizes app construction (metadata, middleware, handlers, routers) so
tests and the ASGI entrypoint build the same application.
"""

from __future__ import annotations

from fastapi import FastAPI

from app.api.routes import health_router, lenders_router
from app.core.config import settings
from app.core.exception_handlers import setup_exception_handlers
from app.core.logging import configure_logging
from app.core.middleware import cors_middleware, request_id_middleware
from app.core.openapi import apply_openapi_customizations


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance.

    Returns:
        Configured FastAPI app with middleware, handlers, routers and docs.
    """
    # Logging first so subsequent init logs are formatted as desired
    configure_logging(settings.log)

    app = FastAPI(
        title="Lenders Proxy",
        description=(
            "Read-only proxy for the Lenders sheet of a Google Sheets spreadsheet, "
            "with CORS support and a per-client-IP sliding-window rate limit."
        ),
        version="0.1.0",
    )

    # Middleware: the last one registered runs first, so preflight requests
    # are answered before request-id bookkeeping.
    app.middleware("http")(request_id_middleware)
    app.middleware("http")(cors_middleware)

    setup_exception_handlers(app)

    app.include_router(lenders_router)
    app.include_router(health_router)

    apply_openapi_customizations(app)

    return app
