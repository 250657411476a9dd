"""Command-line entry point for dt-normalizer."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable, Sequence
from datetime import datetime
from pathlib import Path

from dt_normalizer.core import (
    AppSettings,
    DateTimeError,
    configure_logging,
    load_app_settings,
    settings_timezone_provider,
)
from dt_normalizer.normalizer import LOCAL_TIME_ZONE, DateTimeNormalizer

LOGGER = logging.getLogger(__name__)

PARSERS = ("iso", "legacy", "date", "local-iso", "local", "locale", "utc")


def build_parser() -> argparse.ArgumentParser:
    """Create and configure the CLI argument parser."""
    parser = argparse.ArgumentParser(
        description="Parse, convert, and format timestamps consistently"
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Path to a .env file containing configuration overrides.",
    )
    parser.add_argument(
        "command",
        nargs="?",
        default="info",
        choices=["info", "now", "convert"],
        help="Operation to execute.",
    )
    parser.add_argument(
        "value",
        nargs="?",
        default=None,
        help="Date/time string to parse (convert command only).",
    )
    parser.add_argument(
        "--parser",
        dest="parser_name",
        choices=PARSERS,
        default="utc",
        help="Parser used by the convert command (default: utc).",
    )
    parser.add_argument(
        "--locale",
        default="en",
        help="Locale for the 'locale' parser: en or nl (default: en).",
    )
    return parser


def _parse(normalizer: DateTimeNormalizer, parser_name: str, value: str, locale: str) -> datetime:
    """Dispatch ``value`` to the requested parser, raising on failure."""
    strict: dict[str, Callable[[str], datetime]] = {
        "date": normalizer.from_date_string,
        "local-iso": normalizer.from_local_iso_string,
        "local": normalizer.from_local_string,
        "utc": normalizer.from_utc_string,
    }
    if parser_name == "locale":
        return normalizer.parse_local_string(value, locale)
    if parser_name in strict:
        return strict[parser_name](value)

    lenient = (
        normalizer.from_iso_string
        if parser_name == "iso"
        else normalizer.from_legacy_iso_string
    )
    parsed = lenient(value)
    if parsed is None:
        msg = f"Value '{value}' does not match the {parser_name} format"
        raise DateTimeError(msg)
    return parsed


def _print_formats(normalizer: DateTimeNormalizer, value: datetime) -> None:
    print(f"iso:        {normalizer.to_string(value)}")
    print(f"legacy:     {normalizer.to_legacy_string(value)}")
    print(f"date:       {normalizer.to_date_string(value)}")
    print(f"local time: {normalizer.to_local_time_string(value)}")
    print(f"planon:     {normalizer.to_string_for_planon(value)}")


def execute(args: argparse.Namespace, settings: AppSettings) -> int:
    """Execute the requested CLI command and return the exit status."""
    normalizer = DateTimeNormalizer(settings_timezone_provider(args.env_file))
    command = args.command
    if command == "info":
        print(f"Application timezone: {settings.app.timezone}")
        print(f"Local timezone: {LOCAL_TIME_ZONE}")
    elif command == "now":
        _print_formats(normalizer, normalizer.now())
    elif command == "convert":
        if args.value is None:
            print("convert requires a value", file=sys.stderr)
            return 2
        try:
            parsed = _parse(normalizer, args.parser_name, args.value, args.locale)
        except DateTimeError as exc:
            LOGGER.debug("Conversion of %r failed", args.value, exc_info=True)
            print(f"error: {exc}", file=sys.stderr)
            return 2
        _print_formats(normalizer, parsed)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = load_app_settings(args.env_file)
    configure_logging(settings.logging)
    return execute(args, settings)


if __name__ == "__main__":
    sys.exit(main())
