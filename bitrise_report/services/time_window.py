"""
Query window for "yesterday's" builds.

The window runs from the cutoff hour (06:00 by default) on the previous
calendar day to the cutoff hour today, in the report timezone. Morning
boundaries are computed by replacing the wall-clock time, so across a DST
change the window spans 23 or 25 hours rather than exactly 24.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional
from zoneinfo import ZoneInfo

DEFAULT_CUTOFF_HOUR = 6
DEFAULT_DATE_FORMAT = "%Y/%m/%d"


def _local_now(tz: str, now: Optional[datetime]) -> datetime:
    zone = ZoneInfo(tz)
    if now is None:
        return datetime.now(zone)
    if now.tzinfo is None:
        return now.replace(tzinfo=zone)
    return now.astimezone(zone)


def _morning(day: datetime, hour: int) -> int:
    return int(day.replace(hour=hour, minute=0, second=0, microsecond=0).timestamp())


def today_morning(
    tz: str, now: Optional[datetime] = None, hour: int = DEFAULT_CUTOFF_HOUR
) -> int:
    """UNIX seconds of ``hour``:00:00 local time on the current day."""
    return _morning(_local_now(tz, now), hour)


def previous_morning(
    tz: str, now: Optional[datetime] = None, hour: int = DEFAULT_CUTOFF_HOUR
) -> int:
    """UNIX seconds of ``hour``:00:00 local time on the previous day."""
    return _morning(_local_now(tz, now) - timedelta(days=1), hour)


def format_date_label(
    timestamp: float, tz: str, fmt: str = DEFAULT_DATE_FORMAT
) -> str:
    """Render a UNIX timestamp as a row label in the given timezone."""
    return datetime.fromtimestamp(timestamp, ZoneInfo(tz)).strftime(fmt)


@dataclass(frozen=True)
class TimeWindow:
    """Half-open ``[after, before)`` interval in UNIX seconds."""

    after: int
    before: int

    @classmethod
    def for_yesterday(
        cls, tz: str, now: Optional[datetime] = None, hour: int = DEFAULT_CUTOFF_HOUR
    ) -> "TimeWindow":
        local_now = _local_now(tz, now)
        return cls(
            after=previous_morning(tz, local_now, hour),
            before=today_morning(tz, local_now, hour),
        )

    def label(self, tz: str, fmt: str = DEFAULT_DATE_FORMAT) -> str:
        return format_date_label(self.after, tz, fmt)
