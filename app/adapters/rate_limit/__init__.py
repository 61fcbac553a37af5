"""Rate limiting adapters.

The limiter only talks to a timestamp store through ``AbstractTimestampStore``
so the per-process dictionary can later be replaced by a shared store without
touching the HTTP layer.
"""

from app.adapters.rate_limit.base import AbstractRateLimiter, AbstractTimestampStore, RateLimitResult
from app.adapters.rate_limit.in_memory import InMemoryTimestampStore
from app.adapters.rate_limit.sliding_window import SlidingWindowRateLimiter

__all__ = [
    "AbstractRateLimiter",
    "AbstractTimestampStore",
    "InMemoryTimestampStore",
    "RateLimitResult",
    "SlidingWindowRateLimiter",
]
