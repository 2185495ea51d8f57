"""
Time-window helpers shared by the dashboard calculations.

All day boundaries are local calendar days in the timezone of the
reference ``now``. Windows are half-open ``[start, end)``.
"""

import math
import os
from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo
from pathlib import Path
from typing import Callable, Iterable, List, Optional, TypeVar
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

T = TypeVar("T")

TIMEFRAMES = ("today", "week", "month")

LOCALTIME_FILE = Path("/etc/localtime")


def _zone(name: str) -> Optional[tzinfo]:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return None


def system_timezone() -> Optional[tzinfo]:
    """
    The system's IANA timezone, if it can be determined.

    Checks the TZ environment variable, then the /etc/localtime link.
    """
    name = os.environ.get("TZ", "").lstrip(":")
    if name:
        return _zone(name)
    if LOCALTIME_FILE.is_symlink():
        target = str(LOCALTIME_FILE.resolve())
        if "zoneinfo/" in target:
            return _zone(target.split("zoneinfo/", 1)[1])
    return None


def local_now() -> datetime:
    """
    Current time in the system timezone.

    A real zone keeps DST rules for past records. When the zone is unknown
    the result is naive local time, and ``to_local`` then converts each
    record with the local rules for its own date.
    """
    tz = system_timezone()
    if tz is None:
        return datetime.now()
    return datetime.now(tz)


def to_local(value: datetime, reference: datetime) -> datetime:
    """
    Express a timestamp in the same timezone convention as ``reference``.

    Aware timestamps are converted into the reference timezone; naive
    timestamps are taken to already be local. With a naive reference,
    aware timestamps are converted to naive system-local time.
    """
    if reference.tzinfo is not None:
        if value.tzinfo is None:
            return value.replace(tzinfo=reference.tzinfo)
        return value.astimezone(reference.tzinfo)
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def local_date(value: datetime, reference: datetime) -> date:
    """Calendar day of ``value`` as seen from ``reference``'s timezone"""
    return to_local(value, reference).date()


def start_of_day(now: datetime) -> datetime:
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


def round_half_up(value: float, digits: int = 0):
    """
    Round with halves going up, e.g. 2.5 -> 3 (the builtin round() would give 2).

    Returns an int when ``digits`` is 0.
    """
    factor = 10 ** digits
    rounded = math.floor(value * factor + 0.5)
    if digits == 0:
        return int(rounded)
    return rounded / factor


@dataclass(frozen=True)
class TimeWindow:
    """Half-open interval [start, end) used to scope aggregates"""
    start: datetime
    end: datetime

    def contains(self, value: Optional[datetime]) -> bool:
        """Missing timestamps are never inside a window"""
        if value is None:
            return False
        local = to_local(value, self.end)
        return self.start <= local < self.end

    def filter(
        self,
        items: Iterable[T],
        timestamp_of: Callable[[T], Optional[datetime]],
    ) -> List[T]:
        """Items whose extracted timestamp falls inside the window"""
        return [item for item in items if self.contains(timestamp_of(item))]


def today_window(now: datetime) -> TimeWindow:
    """Local midnight today up to now"""
    return TimeWindow(start_of_day(now), now)


def trailing_window(now: datetime, days: int = 0, hours: int = 0) -> TimeWindow:
    """Fixed-length window ending at now (e.g. the last 7 days)"""
    return TimeWindow(now - timedelta(days=days, hours=hours), now)


def month_window(now: datetime) -> TimeWindow:
    """First day of the current month up to now"""
    return TimeWindow(start_of_day(now).replace(day=1), now)


def timeframe_window(timeframe: str, now: datetime) -> TimeWindow:
    """
    Window for a named timeframe.

    Args:
        timeframe: 'today', 'week' or 'month' (anything else means 'today')
        now: Current datetime

    Returns:
        The matching TimeWindow
    """
    if timeframe == "week":
        return trailing_window(now, days=7)
    if timeframe == "month":
        return month_window(now)
    return today_window(now)
