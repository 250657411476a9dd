"""Shared fixtures for normalizer tests."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, tzinfo

import pytest

from dt_normalizer import DateTimeNormalizer
from dt_normalizer.core.config import load_app_settings


# Saturday, summer time in Amsterdam (UTC+2).
FIXED_NOW = datetime(2024, 6, 15, 10, 30, 45, 987654, tzinfo=UTC)


class FixedClock:
    """Clock pinned to a single instant."""

    def __init__(self, instant: datetime) -> None:
        self.instant = instant

    def now(self, tz: tzinfo) -> datetime:
        return self.instant.astimezone(tz)


@pytest.fixture(autouse=True)
def clear_settings_cache() -> None:
    """Ensure each test sees a fresh settings instance."""

    load_app_settings.cache_clear()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(FIXED_NOW)


@pytest.fixture
def make_normalizer(clock: FixedClock) -> Callable[..., DateTimeNormalizer]:
    """Build a normalizer for a given application timezone and instant."""

    def factory(
        app_timezone: str = "UTC", now: datetime | None = None
    ) -> DateTimeNormalizer:
        if now is not None:
            clock.instant = now
        return DateTimeNormalizer(lambda: app_timezone, clock)

    return factory


@pytest.fixture
def normalizer(make_normalizer: Callable[..., DateTimeNormalizer]) -> DateTimeNormalizer:
    return make_normalizer()
