"""Rate limiter interfaces.

The API depends on these abstractions (not the concrete implementations) so
the storage backend can be swapped with minimal changes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class RateLimitResult:
    """Result of a rate limit check.

    Attributes:
        allowed: Whether the request is allowed to proceed.
        limit: Max requests per window.
        remaining: Remaining requests in the current window (0 when blocked).
        reset_at: UNIX epoch seconds when the oldest counted request leaves
            the window and budget frees up again.
        retry_after_seconds: Suggested wait time in seconds when blocked.
    """

    allowed: bool
    limit: int
    remaining: int
    reset_at: int
    retry_after_seconds: int | None


class AbstractTimestampStore(ABC):
    """Storage of request timestamps per client identifier."""

    @abstractmethod
    def get(self, key: str) -> list[float]:
        """Return the stored timestamps for ``key`` (empty when unseen)."""
        raise NotImplementedError

    @abstractmethod
    def set(self, key: str, timestamps: Sequence[float]) -> None:
        """Replace the stored timestamps for ``key``."""
        raise NotImplementedError


class AbstractRateLimiter(ABC):
    """Interface for rate limiters."""

    @abstractmethod
    def consume(self, key: str) -> RateLimitResult:
        """Record one request for ``key`` if budget allows.

        Args:
            key: Unique identifier (e.g., client IP address).

        Returns:
            RateLimitResult describing whether it was allowed.
        """
        raise NotImplementedError

    def admit(self, key: str) -> bool:
        """Return ``True`` when the request for ``key`` is admitted."""
        return self.consume(key).allowed
