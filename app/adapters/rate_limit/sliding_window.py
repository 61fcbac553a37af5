"""Sliding-window rate limiter over a pluggable timestamp store."""

from __future__ import annotations

import math
import threading
import time
from typing import Callable

from app.adapters.rate_limit.base import AbstractRateLimiter, AbstractTimestampStore, RateLimitResult
from app.adapters.rate_limit.in_memory import InMemoryTimestampStore


class SlidingWindowRateLimiter(AbstractRateLimiter):
    """Rate limiter counting requests inside a trailing time window per key.

    Every check prunes timestamps that fell out of the window and writes the
    pruned sequence back, whether or not the request is admitted. Only an
    admitted request appends the current timestamp.

    The read-modify-write against the store happens under a lock, so
    concurrent requests for the same key cannot overrun the limit.
    """

    def __init__(
        self,
        *,
        limit: int,
        window_seconds: int,
        store: AbstractTimestampStore | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the sliding-window rate limiter.

        Args:
            limit: Maximum number of requests per window.
            window_seconds: Length of the trailing window in seconds.
            store: Timestamp storage; defaults to a fresh in-memory store.
            clock: Time source function returning UNIX time in seconds.

        Raises:
            ValueError: If limit or window_seconds are invalid.
        """
        if limit < 1:
            raise ValueError("limit must be >= 1")
        if window_seconds < 1:
            raise ValueError("window_seconds must be >= 1")

        self._limit = limit
        self._window_seconds = window_seconds
        self._store = store if store is not None else InMemoryTimestampStore()
        self._clock = clock
        self._lock = threading.Lock()

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def window_seconds(self) -> int:
        return self._window_seconds

    @property
    def store(self) -> AbstractTimestampStore:
        return self._store

    def _prune(self, timestamps: list[float], now: float) -> list[float]:
        return [ts for ts in timestamps if now - ts < self._window_seconds]

    def consume(self, key: str) -> RateLimitResult:
        """Check the window for ``key`` and record the request when admitted.

        Args:
            key: Unique identifier for rate limiting (e.g., client IP).

        Returns:
            RateLimitResult with allowance decision and metadata.

        Raises:
            ValueError: If key is empty.
        """
        if not key:
            raise ValueError("key must be a non-empty string")

        now = self._clock()

        with self._lock:
            recent = self._prune(self._store.get(key), now)

            if len(recent) >= self._limit:
                self._store.set(key, recent)
                reset_at = recent[0] + self._window_seconds
                return RateLimitResult(
                    allowed=False,
                    limit=self._limit,
                    remaining=0,
                    reset_at=int(math.ceil(reset_at)),
                    retry_after_seconds=max(0, int(math.ceil(reset_at - now))),
                )

            recent.append(now)
            self._store.set(key, recent)

        return RateLimitResult(
            allowed=True,
            limit=self._limit,
            remaining=self._limit - len(recent),
            reset_at=int(math.ceil(recent[0] + self._window_seconds)),
            retry_after_seconds=None,
        )
