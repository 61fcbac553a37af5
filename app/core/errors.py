"""Application-level exception types.

This module defines domain errors used across services/adapters, enabling
consistent error handling, logging, and API responses.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable error message returned to the client.
        details: Optional extra text returned alongside the message.
    """

    code: str
    message: str
    details: str | None = None

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)


class ConfigurationAppError(AppError):
    """Raised when required server configuration is missing."""


@dataclass
class RateLimitAppError(AppError):
    """Raised when a client exhausted its request window.

    Attributes:
        headers: Optional throttling headers (Retry-After, X-RateLimit-*).
    """

    headers: dict[str, str] | None = None


@dataclass
class UpstreamAppError(AppError):
    """Raised when the spreadsheet API answers with a non-200 status.

    Attributes:
        upstream_status: HTTP status returned by the upstream, relayed as-is.
    """

    upstream_status: int = 502


class NetworkAppError(AppError):
    """Raised when the spreadsheet API cannot be reached."""
