from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterator


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def format_iso_date(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def sunday_weekday(value: date) -> int:
    """Weekday numbered 0=Sunday .. 6=Saturday."""
    return value.isoweekday() % 7


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every calendar day from start to end, both inclusive.

    Yields nothing when start is after end.
    """
    current = start
    while current <= end:
        yield current
        if current == end:
            return
        current += timedelta(days=1)


def start_of_week(value: date) -> date:
    """Sunday on or before the given date."""
    return value - timedelta(days=sunday_weekday(value))


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return date.today()
