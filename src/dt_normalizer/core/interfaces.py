"""Protocol interfaces and error types shared by the normalizer."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, tzinfo
from typing import Protocol

TimezoneProvider = Callable[[], str]
"""Zero-argument callable returning the application timezone name."""


class DateTimeError(ValueError):
    """Base class for date/time normalization failures."""


class ParseError(DateTimeError):
    """Raised when a string does not match the expected format or zone."""

    def __init__(self, message: str, value: str | None = None) -> None:
        super().__init__(message)
        self.value = value


class UnknownTimezoneError(ParseError):
    """Raised when a string embeds a zone name that cannot be resolved."""

    def __init__(self, timezone: str, value: str | None = None) -> None:
        super().__init__(f"Unknown timezone '{timezone}'", value)
        self.timezone = timezone


class InvalidTimezoneError(DateTimeError):
    """Raised when a value that must be UTC embeds another timezone."""

    def __init__(self, timezone: str) -> None:
        super().__init__(
            f"The date/time provided must be in the UTC but is in '{timezone}' timezone."
        )
        self.timezone = timezone


class Clock(Protocol):
    """Source of wall-clock time."""

    def now(self, tz: tzinfo) -> datetime:
        """Return the current instant expressed in ``tz``."""
        raise NotImplementedError


__all__ = [
    "Clock",
    "DateTimeError",
    "InvalidTimezoneError",
    "ParseError",
    "TimezoneProvider",
    "UnknownTimezoneError",
]
