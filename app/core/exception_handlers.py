"""Global exception handlers for consistent error responses.

Every error leaves the service as ``{"error": <message>}`` (plus ``details``
when the error carries any) with the CORS headers attached, so browsers can
read failures too.

- ConfigurationAppError -> 500 (no configuration detail leaked)
- RateLimitAppError -> 429
- UpstreamAppError -> upstream status, raw upstream body in ``details``
- NetworkAppError -> 500
- Starlette HTTPException (unknown path, unsupported method) -> its status
- Unexpected Exception -> generic 500 (safety net)
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.errors import AppError, RateLimitAppError, UpstreamAppError
from app.core.logging import get_request_id
from app.core.middleware import CORS_HEADERS

logger = logging.getLogger(__name__)


def _status_for(exc: AppError) -> int:
    if isinstance(exc, RateLimitAppError):
        return 429
    if isinstance(exc, UpstreamAppError):
        return exc.upstream_status
    return 500


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Turn a domain error into its JSON response.

    Args:
        request: FastAPI request object.
        exc: AppError instance (or subclass).

    Returns:
        JSONResponse with the status mapped from the error type.
    """
    status_code = _status_for(exc)

    logger.info(
        "app_error_handled",
        extra={
            "error_code": exc.code,
            "status_code": status_code,
            "request_path": request.url.path,
            "request_id": get_request_id(),
        },
    )

    content: dict[str, str] = {"error": exc.message}
    if exc.details is not None:
        content["details"] = exc.details

    headers = dict(CORS_HEADERS)
    if isinstance(exc, RateLimitAppError) and exc.headers:
        headers.update(exc.headers)

    return JSONResponse(status_code=status_code, content=content, headers=headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render framework HTTP errors (404, 405, ...) in the flat error shape."""
    headers = dict(exc.headers or {})
    headers.update(CORS_HEADERS)

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=headers,
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Fallback handler for unexpected errors.

    Logs the failure for debugging while returning a generic message; no
    stack traces or exception text reach the client.
    """
    logger.error(
        "unhandled_exception",
        extra={
            "error_type": type(exc).__name__,
            "error_msg": str(exc),
            "request_path": request.url.path,
            "request_method": request.method,
            "request_id": get_request_id(),
        },
    )

    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error"},
        headers=dict(CORS_HEADERS),
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with FastAPI app.

    Example:
        >>> from fastapi import FastAPI
        >>> from app.core.exception_handlers import setup_exception_handlers
        >>> app = FastAPI()
        >>> setup_exception_handlers(app)
    """
    app.exception_handler(AppError)(app_error_handler)
    app.exception_handler(StarletteHTTPException)(http_exception_handler)
    app.exception_handler(Exception)(general_exception_handler)
