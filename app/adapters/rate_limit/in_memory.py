"""Per-process timestamp store.

Notes:
- Per-process only: running multiple workers multiplies the effective limit.
- Entries are never evicted; each distinct identifier keeps a (possibly
  empty) list for the lifetime of the process.
"""

from __future__ import annotations

from typing import Sequence

from app.adapters.rate_limit.base import AbstractTimestampStore


class InMemoryTimestampStore(AbstractTimestampStore):
    """Dictionary-backed timestamp store."""

    def __init__(self) -> None:
        self._timestamps_by_key: dict[str, list[float]] = {}

    def __len__(self) -> int:
        return len(self._timestamps_by_key)

    def get(self, key: str) -> list[float]:
        # Copy so callers can't mutate stored state outside of ``set``.
        return list(self._timestamps_by_key.get(key, ()))

    def set(self, key: str, timestamps: Sequence[float]) -> None:
        self._timestamps_by_key[key] = list(timestamps)
