"""Wall-clock access."""

from __future__ import annotations

from datetime import datetime, tzinfo

from .interfaces import Clock


class SystemClock(Clock):
    """Clock backed by the operating system time."""

    def now(self, tz: tzinfo) -> datetime:
        return datetime.now(tz=tz)


__all__ = ["SystemClock"]
