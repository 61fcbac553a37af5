"""Rate limiting dependency for FastAPI routes.

This module wires the rate limiting adapter into the HTTP layer.

Rate limiting strategy:
- Sliding window per client identifier (100 requests per hour by default).
- The identifier comes from ``x-forwarded-for``, then ``client-ip``;
  requests carrying neither share the ``"unknown"`` bucket.
- Only the first hop of ``x-forwarded-for`` is used, not the whole header
  value, so the same client behind a varying proxy chain keeps one bucket.
"""

from __future__ import annotations

import logging

from fastapi import Request

from app.adapters.rate_limit.base import AbstractRateLimiter
from app.adapters.rate_limit.sliding_window import SlidingWindowRateLimiter
from app.core.config import settings
from app.core.errors import RateLimitAppError
from app.core.logging import hash_identifier

logger = logging.getLogger(__name__)

UNKNOWN_CLIENT = "unknown"
RATE_LIMIT_MESSAGE = "Too many requests. Please try again later."

_limiter: AbstractRateLimiter | None = None
_limiter_config: tuple[int, int] | None = None


def get_rate_limiter() -> AbstractRateLimiter:
    """Return a process-wide rate limiter instance.

    The instance is cached in-module to preserve state across requests.
    If configuration changes (primarily in tests), the limiter is rebuilt.
    """

    global _limiter, _limiter_config

    config = (
        settings.app.rate_limit_requests,
        settings.app.rate_limit_window_seconds,
    )

    if _limiter is None or _limiter_config != config:
        _limiter = SlidingWindowRateLimiter(
            limit=settings.app.rate_limit_requests,
            window_seconds=settings.app.rate_limit_window_seconds,
        )
        _limiter_config = config

    return _limiter


def reset_rate_limiter(limiter: AbstractRateLimiter | None = None) -> None:
    """Drop (or replace) the process-wide limiter and its recorded requests."""

    global _limiter, _limiter_config

    _limiter = limiter
    _limiter_config = (
        (settings.app.rate_limit_requests, settings.app.rate_limit_window_seconds)
        if limiter is not None
        else None
    )


def resolve_client_identifier(request: Request) -> str:
    """Pick the rate limit partition key for a request.

    ``x-forwarded-for`` may hold a proxy chain (``client, proxy1, proxy2``);
    only the originating client is used.
    """

    forwarded_for = request.headers.get("x-forwarded-for", "")
    first_hop = forwarded_for.split(",")[0].strip()
    if first_hop:
        return first_hop

    client_ip = request.headers.get("client-ip", "").strip()
    if client_ip:
        return client_ip

    return UNKNOWN_CLIENT


async def enforce_rate_limit(request: Request) -> None:
    """FastAPI dependency enforcing the per-client request window.

    Raises:
        RateLimitAppError: When the client exhausted its window (HTTP 429).
    """

    if not settings.app.rate_limit_enabled:
        return

    identifier = resolve_client_identifier(request)
    result = get_rate_limiter().consume(identifier)
    client_hash = hash_identifier(identifier)

    if result.allowed:
        logger.debug(
            "rate_limit.allowed",
            extra={
                "client_hash": client_hash,
                "limit": result.limit,
                "remaining": result.remaining,
            },
        )
        return

    logger.warning(
        "rate_limit.exceeded",
        extra={
            "client_hash": client_hash,
            "limit": result.limit,
            "window_s": settings.app.rate_limit_window_seconds,
            "retry_after_s": result.retry_after_seconds,
        },
    )

    headers: dict[str, str] = {}
    if settings.app.rate_limit_include_headers:
        headers["Retry-After"] = str(result.retry_after_seconds or 0)
        headers["X-RateLimit-Limit"] = str(result.limit)
        headers["X-RateLimit-Remaining"] = str(result.remaining)
        headers["X-RateLimit-Reset"] = str(result.reset_at)

    raise RateLimitAppError(
        code="rate_limit_exceeded",
        message=RATE_LIMIT_MESSAGE,
        headers=headers or None,
    )
