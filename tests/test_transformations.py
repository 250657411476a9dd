"""Tests for copy-producing transformations and date predicates."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

AMSTERDAM = ZoneInfo("Europe/Amsterdam")


def test_add_days_to_copy_leaves_input_untouched(normalizer) -> None:
    original = datetime(2024, 1, 15, 10, 30, tzinfo=UTC)

    shifted = normalizer.add_days_to_copy(original, 3)

    assert shifted == datetime(2024, 1, 18, 10, 30, tzinfo=UTC)
    assert original == datetime(2024, 1, 15, 10, 30, tzinfo=UTC)


@pytest.mark.parametrize("days", [-400, -1, 0, 1, 31])
def test_add_days_to_copy_is_reversible(normalizer, days: int) -> None:
    original = datetime(2024, 1, 15, 10, 30, tzinfo=UTC)

    there = normalizer.add_days_to_copy(original, days)

    assert normalizer.add_days_to_copy(there, -days) == original


def test_add_days_to_copy_keeps_wall_clock_across_dst(normalizer) -> None:
    before = datetime(2024, 3, 30, 12, 0, tzinfo=AMSTERDAM)

    after = normalizer.add_days_to_copy(before, 1)

    assert (after.day, after.hour) == (31, 12)
    assert after.utcoffset() == timedelta(hours=2)
    assert after.astimezone(UTC) - before.astimezone(UTC) == timedelta(hours=23)


def test_create_from_datetime_copies_instant_and_zone(normalizer) -> None:
    original = datetime(2024, 1, 15, 10, 30, 5, 250, tzinfo=AMSTERDAM)

    copy = normalizer.create_from_datetime(original)

    assert copy == original
    assert copy.tzinfo is original.tzinfo
    assert copy.microsecond == 250


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (
            datetime(2024, 6, 15, 10, 30, tzinfo=UTC),
            datetime(2024, 6, 14, 22, 0, tzinfo=UTC),
        ),
        (
            datetime(2024, 1, 15, 10, 0, tzinfo=UTC),
            datetime(2024, 1, 14, 23, 0, tzinfo=UTC),
        ),
        # Already the next day in Amsterdam.
        (
            datetime(2024, 6, 15, 23, 30, tzinfo=UTC),
            datetime(2024, 6, 15, 22, 0, tzinfo=UTC),
        ),
    ],
)
def test_start_of_day_utc_anchors_to_local_midnight(
    normalizer, value: datetime, expected: datetime
) -> None:
    result = normalizer.start_of_day_utc(value)

    assert result == expected
    assert result.tzinfo == ZoneInfo("UTC")


def test_start_of_day_utc_is_idempotent(normalizer) -> None:
    once = normalizer.start_of_day_utc(datetime(2024, 10, 27, 15, 0, tzinfo=UTC))

    assert normalizer.start_of_day_utc(once) == once


def test_is_today(normalizer) -> None:
    today = normalizer.today()

    assert normalizer.is_today(today)
    assert not normalizer.is_today(normalizer.add_days_to_copy(today, -1))


def test_is_today_uses_the_value_zone(normalizer) -> None:
    # 2024-06-15 22:30 UTC, but already 2024-06-16 in Amsterdam.
    next_local_day = datetime(2024, 6, 16, 0, 30, tzinfo=AMSTERDAM)
    late_local_evening = datetime(2024, 6, 15, 23, 30, tzinfo=AMSTERDAM)

    assert not normalizer.is_today(next_local_day)
    assert normalizer.is_today(late_local_evening)


def test_is_future_false_for_past_values(normalizer) -> None:
    assert not normalizer.is_future(normalizer.now() - timedelta(hours=1), 0)


def test_is_future_counts_calendar_days(normalizer) -> None:
    # The fixed clock reads 10:30, so +25h lands on tomorrow's date.
    tomorrow = normalizer.now() + timedelta(hours=25)
    day_after = normalizer.now() + timedelta(hours=49)

    assert normalizer.is_future(tomorrow, 0)
    assert not normalizer.is_future(tomorrow, 1)
    assert normalizer.is_future(day_after, 1)
    assert not normalizer.is_future(day_after, 2)


def test_is_future_25_hours_late_in_the_day(make_normalizer) -> None:
    normalizer = make_normalizer(now=datetime(2024, 6, 15, 23, 30, tzinfo=UTC))

    assert normalizer.is_future(normalizer.now() + timedelta(hours=25), 1)


def test_is_future_uses_own_date_for_current_instant(normalizer) -> None:
    now = normalizer.now()

    assert not normalizer.is_future(now, 0)
    assert normalizer.is_future(now + timedelta(days=1), 0)
