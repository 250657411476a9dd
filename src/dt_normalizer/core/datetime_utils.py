"""Low-level datetime helpers shared by the normalizer."""

from __future__ import annotations

import re
from datetime import UTC, datetime, timedelta, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dateutil import parser as dateutil_parser
from dateutil import tz

from .interfaces import ParseError, UnknownTimezoneError
from .models import FormatSpec, ParseResult

__all__ = [
    "DutchParserInfo",
    "UTC_DESIGNATORS",
    "ZONE_ABBREVIATIONS",
    "format_offset",
    "get_parserinfo",
    "parse_free_form",
    "parse_free_form_zone",
    "parse_with_format",
    "resolve_timezone",
    "start_of_day",
    "synthetic_epoch_milliseconds",
    "zone_label",
]

UTC_DESIGNATORS = frozenset({"Z", "UTC", "+00:00"})

# Names dateutil reports with a zero offset. Each keeps its own spelling so
# that GMT stays distinguishable from UTC.
_UTC_NAMES = frozenset({"Z", "UTC", "GMT"})

# dateutil reports Z, z and every zero offset as UTC; this recovers the
# spelling actually written.
_ZERO_ZONE = re.compile(r"(?<![A-Za-z])(UTC|Z|z|[+-]00(?::?00)?)(?![A-Za-z0-9])")

ZONE_ABBREVIATIONS: dict[str, tzinfo] = {
    name: tz.tzoffset(name, hours * 3600)
    for name, hours in (
        ("WET", 0),
        ("WEST", 1),
        ("BST", 1),
        ("CET", 1),
        ("CEST", 2),
        ("EET", 2),
        ("EEST", 3),
        ("EST", -5),
        ("EDT", -4),
        ("CST", -6),
        ("CDT", -5),
        ("MST", -7),
        ("MDT", -6),
        ("PST", -8),
        ("PDT", -7),
    )
}

# dateutil only treats an abbreviation as a zone once the time is known.
_ZONE_NAMES = sorted([*ZONE_ABBREVIATIONS, "UTC", "GMT"], key=len, reverse=True)
_ZONE_TOKEN = re.compile(r"\b(" + "|".join(_ZONE_NAMES) + r")\b")

# IANA names such as Europe/Amsterdam or America/Argentina/Buenos_Aires.
_IANA_TOKEN = re.compile(r"(?<!\S)([A-Z][A-Za-z]+(?:/[A-Za-z][A-Za-z0-9_+\-]*)+)(?!\S)")

_RELATIVE_DAYS = {"today": 0, "midnight": 0, "tomorrow": 1, "yesterday": -1}

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


class DutchParserInfo(dateutil_parser.parserinfo):
    """Month and weekday vocabulary for Dutch date strings."""

    JUMP = [" ", ".", ",", ";", "-", "/", "'", "t", "om", "op", "de", "van", "en"]
    WEEKDAYS = [
        ("ma", "maandag"),
        ("di", "dinsdag"),
        ("wo", "woensdag"),
        ("do", "donderdag"),
        ("vr", "vrijdag"),
        ("za", "zaterdag"),
        ("zo", "zondag"),
    ]
    MONTHS = [
        ("jan", "januari"),
        ("feb", "februari"),
        ("mrt", "maart"),
        ("apr", "april"),
        ("mei",),
        ("jun", "juni"),
        ("jul", "juli"),
        ("aug", "augustus"),
        ("sep", "sept", "september"),
        ("okt", "oktober"),
        ("nov", "november"),
        ("dec", "december"),
    ]
    HMS = [
        ("u", "uur"),
        ("m", "min", "minuut", "minuten"),
        ("s", "sec", "seconde", "seconden"),
    ]

    def __init__(self) -> None:
        super().__init__(dayfirst=True, yearfirst=False)


_LOCALE_PARSERS: dict[str, type[dateutil_parser.parserinfo]] = {
    "en": dateutil_parser.parserinfo,
    "nl": DutchParserInfo,
}


def get_parserinfo(locale: str) -> dateutil_parser.parserinfo:
    """Return the dateutil vocabulary for ``locale`` (``en`` or ``nl``)."""
    key = locale.strip().lower().replace("-", "_").split("_")[0]
    if key not in _LOCALE_PARSERS:
        raise ParseError(f"Unsupported locale '{locale}'", locale)
    return _LOCALE_PARSERS[key]()


def resolve_timezone(name: str) -> ZoneInfo:
    """Resolve an IANA timezone name."""
    return ZoneInfo(name)


def start_of_day(value: datetime) -> datetime:
    """Truncate ``value`` to midnight in its own timezone."""
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def parse_with_format(
    text: str, spec: FormatSpec | str, zone: tzinfo
) -> ParseResult:
    """Parse ``text`` against exactly one strptime pattern.

    Values without an embedded offset are interpreted in ``zone``; values
    with one are converted to ``zone``.
    """
    pattern = spec.pattern if isinstance(spec, FormatSpec) else spec
    try:
        parsed = datetime.strptime(text, pattern)
    except ValueError as exc:
        return ParseResult.failure(
            text, f"Value '{text}' does not match format '{pattern}': {exc}"
        )
    if parsed.tzinfo is None:
        return ParseResult.success(text, parsed.replace(tzinfo=zone))
    return ParseResult.success(text, parsed.astimezone(zone))


def _zone_last(text: str) -> str:
    """Move a zone abbreviation such as ``CET`` to the end of ``text``."""
    match = _ZONE_TOKEN.search(text)
    if match is None or not text[match.end():].strip():
        return text
    remainder = f"{text[:match.start()]} {text[match.end():]}"
    return f"{' '.join(remainder.split())} {match.group(1)}"


def _split_named_zone(text: str) -> tuple[str, ZoneInfo | None]:
    """Remove an IANA zone name from ``text`` and resolve it."""
    match = _IANA_TOKEN.search(text)
    if match is None:
        return text, None
    name = match.group(1)
    try:
        named_zone = ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise UnknownTimezoneError(name, text) from exc
    remainder = f"{text[:match.start()]} {text[match.end():]}"
    return " ".join(remainder.split()), named_zone


def _resolve_zone(name: str | None, offset: int | None) -> tzinfo | None:
    """``tzinfos`` callback for dateutil; unknown abbreviations are errors."""
    if name is None:
        return None if offset is None else tz.tzoffset(None, offset)
    if name.upper() in _UTC_NAMES:
        return tz.tzoffset(name.upper(), 0)
    if name in ZONE_ABBREVIATIONS:
        return ZONE_ABBREVIATIONS[name]
    if offset is not None:
        return tz.tzoffset(name, offset)
    raise UnknownTimezoneError(name)


def _written_utc_designator(text: str) -> str:
    """Spelling of the zero-offset zone in ``text``; offsets as ``+HH:MM``."""
    match = _ZERO_ZONE.search(text)
    if match is None:
        return "UTC"
    written = match.group(1)
    if written[0] in "+-":
        return f"{written[0]}00:00"
    return written


def parse_free_form_zone(
    text: str,
    zone: tzinfo,
    now: datetime,
    *,
    parserinfo: dateutil_parser.parserinfo | None = None,
) -> tuple[datetime, str | None]:
    """Parse a free-form date/time string and report its embedded zone.

    Keywords (``now``, ``today``, ``midnight``, ``tomorrow``, ``yesterday``)
    resolve against ``now``. Missing date fields default to the date of
    ``now`` and missing time fields to midnight. A string without a zone is
    interpreted in ``zone``; an embedded zone is kept as parsed.

    The second item is the zone as written in ``text``: an IANA name, an
    abbreviation, or a ``+HH:MM`` offset. Zero offsets keep their sign, so
    ``-00:00`` is not reported as ``+00:00``. It is ``None`` when ``text``
    names no zone. Unresolvable zone names raise :class:`UnknownTimezoneError`.
    """
    stripped = text.strip()
    if not stripped:
        raise ParseError("Invalid date/time string value. Value is empty.", text)

    keyword = stripped.lower()
    if keyword == "now":
        return now, None
    midnight = start_of_day(now)
    if keyword in _RELATIVE_DAYS:
        return midnight + timedelta(days=_RELATIVE_DAYS[keyword]), None

    body, named_zone = _split_named_zone(stripped)
    try:
        parsed = dateutil_parser.parse(
            _zone_last(body),
            parserinfo,
            default=midnight.replace(tzinfo=None),
            tzinfos=_resolve_zone,
        )
    except UnknownTimezoneError as exc:
        raise UnknownTimezoneError(exc.timezone, text) from exc
    except (ValueError, OverflowError) as exc:
        raise ParseError(f"Unable to parse date/time string '{text}'", text) from exc

    if named_zone is not None:
        if parsed.tzinfo is not None:
            raise ParseError(f"Conflicting timezones in '{text}'", text)
        return parsed.replace(tzinfo=named_zone), named_zone.key
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=zone), None
    label = zone_label(parsed)
    if label == "UTC":
        label = _written_utc_designator(body)
    return parsed, label


def parse_free_form(
    text: str,
    zone: tzinfo,
    now: datetime,
    *,
    parserinfo: dateutil_parser.parserinfo | None = None,
) -> datetime:
    """Parse a free-form date/time string; see :func:`parse_free_form_zone`."""
    return parse_free_form_zone(text, zone, now, parserinfo=parserinfo)[0]


def format_offset(offset: timedelta) -> str:
    """Render a UTC offset as ``+HH:MM``."""
    total = int(offset.total_seconds())
    sign = "+" if total >= 0 else "-"
    hours, remainder = divmod(abs(total), 3600)
    return f"{sign}{hours:02d}:{remainder // 60:02d}"


def zone_label(value: datetime) -> str | None:
    """Return the name of the zone embedded in ``value``, if any.

    Named zones report their abbreviation; bare offsets report ``+HH:MM``.
    """
    offset = value.utcoffset()
    if offset is None:
        return None
    return value.tzname() or format_offset(offset)


def synthetic_epoch_milliseconds(moment: datetime) -> int:
    """Move ``moment`` onto 1970-01-01 in its own zone and return epoch ms.

    Only whole seconds are kept, so the result is always a multiple of 1000.
    """
    shifted = moment.replace(year=1970, month=1, day=1)
    seconds = (shifted - _EPOCH) // timedelta(seconds=1)
    return seconds * 1000
