"""Value types used by the normalizer."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .interfaces import ParseError


@dataclass(frozen=True, slots=True)
class FormatSpec:
    """Named serialization template expressed as a strftime pattern."""

    name: str
    pattern: str

    def format(self, value: datetime) -> str:
        """Render ``value`` in its attached timezone.

        Years are always four digits, including those before 1000.
        """
        return value.strftime(self.pattern.replace("%Y", f"{value.year:04d}"))


DATE_TIME = FormatSpec("DATE_TIME", "%Y-%m-%dT%H:%M:%S.%fZ")
LEGACY_DATE_TIME = FormatSpec("LEGACY_DATE_TIME", "%Y-%m-%dT%H:%M:%SZ")
DATE = FormatSpec("DATE", "%Y-%m-%d")
TIME = FormatSpec("TIME", "%H:%M")

_FORMATS = {spec.name: spec for spec in (DATE_TIME, LEGACY_DATE_TIME, DATE, TIME)}


def get_format(name: str) -> FormatSpec:
    """Look up a format by name, ignoring case."""
    key = name.strip().upper()
    if key not in _FORMATS:
        msg = f"Unknown format '{name}'"
        raise KeyError(msg)
    return _FORMATS[key]


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Outcome of a parse attempt: either a value or an error message."""

    source: str
    value: datetime | None = None
    error: str | None = None

    @classmethod
    def success(cls, source: str, value: datetime) -> ParseResult:
        return cls(source=source, value=value)

    @classmethod
    def failure(cls, source: str, error: str) -> ParseResult:
        return cls(source=source, error=error)

    @property
    def ok(self) -> bool:
        return self.value is not None

    def unwrap(self) -> datetime:
        """Return the parsed value or raise :class:`ParseError`."""
        if self.value is None:
            raise ParseError(self.error or "Unable to parse date/time value", self.source)
        return self.value

    def __bool__(self) -> bool:
        return self.ok


__all__ = [
    "DATE",
    "DATE_TIME",
    "FormatSpec",
    "LEGACY_DATE_TIME",
    "ParseResult",
    "TIME",
    "get_format",
]
