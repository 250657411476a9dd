"""Core utilities for configuration, logging, and datetime primitives."""

from .clock import SystemClock
from .config import AppSettings, load_app_settings, settings_timezone_provider
from .interfaces import (
    Clock,
    DateTimeError,
    InvalidTimezoneError,
    ParseError,
    UnknownTimezoneError,
)
from .logging import configure_logging
from .models import DATE, DATE_TIME, LEGACY_DATE_TIME, TIME, FormatSpec, get_format

__all__ = [
    "AppSettings",
    "Clock",
    "DATE",
    "DATE_TIME",
    "DateTimeError",
    "FormatSpec",
    "InvalidTimezoneError",
    "LEGACY_DATE_TIME",
    "ParseError",
    "SystemClock",
    "TIME",
    "UnknownTimezoneError",
    "configure_logging",
    "get_format",
    "load_app_settings",
    "settings_timezone_provider",
]
