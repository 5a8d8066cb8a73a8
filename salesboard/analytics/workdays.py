from __future__ import annotations

import calendar
from datetime import date, timedelta

# Monday..Friday; no holiday calendar.
WORKDAY_INDEXES = frozenset(range(5))


def _count_workdays(start: date, end: date) -> int:
    count = 0
    current = start
    while current <= end:
        if current.weekday() in WORKDAY_INDEXES:
            count += 1
        current += timedelta(days=1)
    return count


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def workdays_in_month(year: int, month: int) -> int:
    return _count_workdays(date(year, month, 1), date(year, month, days_in_month(year, month)))


def workdays_elapsed(year: int, month: int, day_of_month: int) -> int:
    """Workdays from the 1st up to and including ``day_of_month``."""
    return _count_workdays(date(year, month, 1), date(year, month, day_of_month))
