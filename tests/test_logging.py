"""Tests for logging utilities."""

from __future__ import annotations

import logging
import re

from dt_normalizer.core.config import LoggingSettings
from dt_normalizer.core.logging import configure_logging


def test_configure_logging_sets_root_level() -> None:
    """configure_logging should set the root logger level according to settings."""

    settings = LoggingSettings(level="DEBUG", structured=False)
    configure_logging(settings)
    assert logging.getLogger().level == logging.DEBUG


def test_configure_logging_structured_format() -> None:
    configure_logging(LoggingSettings(level="warning", structured=True))

    root = logging.getLogger()
    assert root.level == logging.WARNING
    console = next(h for h in root.handlers if type(h) is logging.StreamHandler)
    record = logging.LogRecord("dt", logging.WARNING, __file__, 1, "hello", None, None)
    assert "level=WARNING logger=dt msg=hello" in console.format(record)


def test_structured_format_is_key_value_pairs() -> None:
    configure_logging(LoggingSettings(structured=True))

    console = next(
        h for h in logging.getLogger().handlers if type(h) is logging.StreamHandler
    )
    record = logging.LogRecord("dt.cli", logging.INFO, __file__, 1, "ready", None, None)

    assert re.fullmatch(
        r"ts=\d{4}-\d{2}-\d{2} [\d:,]+ level=INFO logger=dt\.cli msg=ready",
        console.format(record),
    )
