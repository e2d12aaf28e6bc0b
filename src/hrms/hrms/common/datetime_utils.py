from __future__ import annotations

import re
from datetime import date, datetime, time

_HHMM = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def is_hhmm(value: str) -> bool:
    return isinstance(value, str) and _HHMM.match(value) is not None


def parse_hhmm(value: str) -> time:
    """Parse a 24-hour HH:MM string into a time."""
    if not is_hhmm(value):
        raise ValueError(f"Invalid HH:MM time: {value!r}")
    hours, minutes = value.split(":")
    return time(hour=int(hours), minute=int(minutes))


def format_hhmm(value: time) -> str:
    return value.strftime("%H:%M")


def minutes_since_midnight(value: time | datetime) -> int:
    return value.hour * 60 + value.minute


def sunday_based_weekday(value: date) -> int:
    """Day of week with 0 = Sunday ... 6 = Saturday."""
    return value.isoweekday() % 7


def day_start(value: datetime) -> datetime:
    return datetime.combine(value.date(), time.min)
