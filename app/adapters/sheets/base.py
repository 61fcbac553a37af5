from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class UpstreamResponse:
    """Raw upstream answer: status code and undecoded body."""

    status_code: int
    body: bytes

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


class AbstractSheetsClient(ABC):
    """Interface for clients reading a cell range from a spreadsheet."""

    @abstractmethod
    async def fetch_values(self) -> UpstreamResponse:
        """Read the configured range and return the upstream response as-is.

        Non-200 responses are returned, not raised; only transport failures
        raise.

        Raises:
            NetworkAppError: If the upstream cannot be reached.
        """
        ...
