"""Consistent timezone handling for timestamps exchanged as strings."""

from .core import (
    DATE,
    DATE_TIME,
    LEGACY_DATE_TIME,
    TIME,
    DateTimeError,
    FormatSpec,
    InvalidTimezoneError,
    ParseError,
    UnknownTimezoneError,
)
from .normalizer import LOCAL_TIME_ZONE, DateTimeNormalizer

__all__ = [
    "DATE",
    "DATE_TIME",
    "DateTimeError",
    "DateTimeNormalizer",
    "FormatSpec",
    "InvalidTimezoneError",
    "LEGACY_DATE_TIME",
    "LOCAL_TIME_ZONE",
    "ParseError",
    "TIME",
    "UnknownTimezoneError",
]

__version__ = "0.1.0"
