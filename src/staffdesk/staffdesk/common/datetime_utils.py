from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta
from typing import Callable, Iterator

from ..core.constants import SUNDAY

Clock = Callable[[], datetime]


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_hhmm(value: str) -> time:
    return datetime.strptime(value, "%H:%M").time()


def now_local() -> datetime:
    """Current local time.

    Note: Services receive this as their default clock so tests can inject a fixed one.
    """
    return datetime.now()


def to_day(value: date | datetime) -> date:
    """Normalize a timestamp to its calendar day (local midnight)."""
    if isinstance(value, datetime):
        return value.date()
    return value


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last calendar day of the month."""
    return date(year, month, 1), date(year, month, days_in_month(year, month))


def iter_days(start: date, end: date) -> Iterator[date]:
    """Every calendar day from start to end, both inclusive."""
    day = start
    while day <= end:
        yield day
        day += timedelta(days=1)


def is_sunday(day: date) -> bool:
    return day.weekday() == SUNDAY


def count_sundays(year: int, month: int) -> int:
    start, end = month_bounds(year, month)
    return sum(1 for d in iter_days(start, end) if is_sunday(d))


def hours_between(start: datetime, end: datetime) -> float:
    """Elapsed hours rounded to 2 decimals."""
    return round((end - start).total_seconds() / 3600, 2)
