"""Timezone-consistent parsing, conversion, and formatting of timestamps."""

from __future__ import annotations

from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from dt_normalizer.core.clock import SystemClock
from dt_normalizer.core.config import settings_timezone_provider
from dt_normalizer.core.datetime_utils import (
    UTC_DESIGNATORS,
    get_parserinfo,
    parse_free_form,
    parse_free_form_zone,
    parse_with_format,
    resolve_timezone,
    start_of_day,
    synthetic_epoch_milliseconds,
)
from dt_normalizer.core.interfaces import (
    Clock,
    InvalidTimezoneError,
    ParseError,
    TimezoneProvider,
    UnknownTimezoneError,
)
from dt_normalizer.core.models import (
    DATE,
    DATE_TIME,
    LEGACY_DATE_TIME,
    TIME,
    FormatSpec,
)

LOCAL_TIME_ZONE = "Europe/Amsterdam"


class DateTimeNormalizer:
    """Single policy for moving timestamps between strings and datetimes.

    Two zones are involved. The application zone is resolved from the
    injected provider on every call and is the zone of every value handed
    back to callers. The local zone is fixed to ``Europe/Amsterdam`` and is
    used for location-specific input and output.

    Parsers follow one of two failure contracts. ``from_iso_string``,
    ``from_legacy_iso_string`` and ``from_string`` return ``None`` on bad
    input; every other parser raises :class:`ParseError`.
    """

    def __init__(
        self,
        timezone_provider: TimezoneProvider | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._timezone_provider = timezone_provider or settings_timezone_provider()
        self._clock = clock or SystemClock()
        self._local_zone = resolve_timezone(LOCAL_TIME_ZONE)

    @property
    def app_zone(self) -> ZoneInfo:
        """Application zone as currently configured."""
        return resolve_timezone(self._timezone_provider())

    @property
    def local_zone(self) -> ZoneInfo:
        return self._local_zone

    # Current-time queries

    def now(self) -> datetime:
        """Return the current instant in the application zone."""
        return self._clock.now(self.app_zone)

    def today(self) -> datetime:
        """Return the start of the current day in the application zone."""
        return start_of_day(self.now())

    def timestamp_now_in_milliseconds(self) -> int:
        """Current application-zone time of day as ms since 1970-01-01."""
        return synthetic_epoch_milliseconds(self.now())

    def local_timestamp_now_in_milliseconds(self) -> int:
        """Current local-zone time of day as ms since 1970-01-01."""
        return synthetic_epoch_milliseconds(self._clock.now(self._local_zone))

    # Parsing

    def from_timestamp(self, timestamp: int) -> datetime:
        """Create an application-zone datetime from epoch seconds."""
        return datetime.fromtimestamp(timestamp, tz=self.app_zone)

    def from_date_string(self, value: str) -> datetime:
        """Parse a ``YYYY-MM-DD`` string as midnight in the application zone."""
        parsed = self.from_string(value, DATE)
        if parsed is None:
            raise ParseError(
                "Invalid date/time string value. Can not parse date string.", value
            )
        return start_of_day(parsed)

    def from_iso_string(self, value: str) -> datetime | None:
        """Parse a ``DATE_TIME`` string in the application zone, or ``None``."""
        return self.from_string(value, DATE_TIME)

    def from_legacy_iso_string(self, value: str) -> datetime | None:
        """Parse a ``LEGACY_DATE_TIME`` string in the application zone, or ``None``."""
        return self.from_string(value, LEGACY_DATE_TIME)

    def from_local_iso_string(self, value: str) -> datetime:
        """Parse a ``DATE_TIME`` string given in the local zone.

        The result is converted to the application zone.
        """
        parsed = parse_with_format(value, DATE_TIME, self._local_zone).unwrap()
        return parsed.astimezone(self.app_zone)

    def from_local_string(self, value: str) -> datetime:
        """Parse a free-form string, assuming the local zone when none is embedded."""
        parsed = parse_free_form(
            value, self._local_zone, self._clock.now(self._local_zone)
        )
        return parsed.astimezone(self.app_zone)

    def parse_local_string(self, value: str, locale: str = "en") -> datetime:
        """Parse a localized string such as ``Feb 02, 2022 CET 00:00``.

        Values without a zone are read in the application zone.
        """
        app_zone = self.app_zone
        parsed = parse_free_form(
            value,
            app_zone,
            self._clock.now(app_zone),
            parserinfo=get_parserinfo(locale),
        )
        return parsed.astimezone(app_zone)

    def from_utc_string(self, value: str) -> datetime:
        """Parse a free-form string that must be UTC.

        A string without zone information is read in the application zone.
        An embedded zone other than ``Z``, ``+00:00`` or ``UTC``, including
        one that cannot be resolved, raises :class:`InvalidTimezoneError`.
        """
        app_zone = self.app_zone
        try:
            parsed, designator = parse_free_form_zone(
                value, app_zone, self._clock.now(app_zone)
            )
        except UnknownTimezoneError as exc:
            raise InvalidTimezoneError(exc.timezone) from exc
        if designator is None:
            return parsed
        if designator not in UTC_DESIGNATORS:
            raise InvalidTimezoneError(designator)
        return parsed.astimezone(app_zone)

    def from_string(self, value: str, format_spec: FormatSpec | str) -> datetime | None:
        """Parse ``value`` against one format in the application zone, or ``None``."""
        return parse_with_format(value, format_spec, self.app_zone).value

    # Transformation

    def add_days_to_copy(self, value: datetime, days: int) -> datetime:
        """Return ``value`` shifted by ``days`` calendar days."""
        return value + timedelta(days=days)

    def create_from_datetime(self, value: datetime) -> datetime:
        """Return an independent copy with the same instant and zone."""
        return value.replace()

    def start_of_day_utc(self, value: datetime) -> datetime:
        """Local-zone midnight of ``value``'s local date, in the application zone."""
        local_midnight = start_of_day(value.astimezone(self._local_zone))
        return local_midnight.astimezone(self.app_zone)

    def is_today(self, value: datetime) -> bool:
        """Whether ``value`` falls on the current date of its own zone."""
        zone = value.tzinfo or self.app_zone
        return value.date() == self._clock.now(zone).date()

    def is_future(self, value: datetime, at_least_days: int) -> bool:
        """Whether ``value`` lies more than ``at_least_days`` whole days ahead.

        Days are counted between ``value``'s midnight and today's midnight in
        the application zone. Past values are never in the future.
        """
        now = self.now()
        if value < now:
            return False
        days = abs(start_of_day(value) - start_of_day(now)).days
        return days > at_least_days

    # Formatting

    def to_string(self, value: datetime) -> str:
        return DATE_TIME.format(value)

    def to_legacy_string(self, value: datetime) -> str:
        return LEGACY_DATE_TIME.format(value)

    def to_date_string(self, value: datetime) -> str:
        """Format the date part only, in ``value``'s own zone."""
        return DATE.format(value)

    def to_local_time_string(self, value: datetime) -> str:
        """Format as ``HH:MM`` in the local zone."""
        return TIME.format(value.astimezone(self._local_zone))

    def to_string_for_planon(self, value: datetime) -> str:
        """ISO 8601 with numeric offset in the local zone, for Planon."""
        return value.astimezone(self._local_zone).isoformat(timespec="seconds")


__all__ = ["DateTimeNormalizer", "LOCAL_TIME_ZONE"]
