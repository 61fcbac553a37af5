"""HTTP middleware for CORS and request ID propagation.

Two middlewares are provided:

``cors_middleware``
    Answers every ``OPTIONS`` preflight directly with 200 and an empty body,
    before routing, rate limiting or any upstream call. Every other response
    gets the fixed CORS header set stamped on it.

``request_id_middleware``
    - Accepts incoming X-Request-ID header or generates a UUID
    - Stores request_id in contextvars for access throughout the request lifecycle
    - Injects request_id into response headers for client-side tracking
    - Measures total request duration and includes it in response headers
    - Clears context after request completion to prevent context leaks

Usage:
    app.middleware("http")(request_id_middleware)
    app.middleware("http")(cors_middleware)
"""

from __future__ import annotations

import time
import uuid

from fastapi import Request, Response

from app.core.config import settings
from app.core.logging import clear_request_id, set_request_id

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Content-Type": "application/json",
}


async def cors_middleware(request: Request, call_next) -> Response:
    """Short-circuit preflight requests and add CORS headers to responses.

    Args:
        request: The incoming HTTP request object.
        call_next: The next middleware/route handler in the stack.

    Returns:
        Response: An empty 200 for ``OPTIONS``, otherwise the downstream
            response with the CORS headers applied.
    """

    if request.method == "OPTIONS":
        return Response(status_code=200, content=b"", headers=dict(CORS_HEADERS))

    response: Response = await call_next(request)
    for name, value in CORS_HEADERS.items():
        response.headers[name] = value
    return response


async def request_id_middleware(request: Request, call_next) -> Response:
    """HTTP middleware for request ID generation and propagation.

    If the client provides an X-Request-ID header (configurable via
    LOG_REQUEST_ID_HEADER env var), that value is used. Otherwise, a new UUID
    is generated. The ID is then propagated back in the response headers
    and stored in contextvars for log correlation.

    Args:
        request: The incoming HTTP request object.
        call_next: The next middleware/route handler in the stack.

    Returns:
        Response: The response from the next handler with request_id and
            duration headers added.

    Example:
        >>> # Request arrives with custom ID
        >>> # Headers: {"X-Request-ID": "req-abc-123"}
        >>> # Response includes:
        >>> # {"X-Request-ID": "req-abc-123", "X-Request-Duration-ms": "45.67"}
    """

    header_name = settings.log.request_id_header
    request_id = request.headers.get(header_name) or str(uuid.uuid4())
    set_request_id(request_id)
    start = time.perf_counter()
    try:
        response: Response = await call_next(request)
    finally:
        clear_request_id()

    duration_ms = (time.perf_counter() - start) * 1000
    response.headers[header_name] = request_id
    response.headers.setdefault("X-Request-Duration-ms", f"{duration_ms:.2f}")
    return response
