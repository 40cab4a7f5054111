# core/dates.py
"""
Calendar-day helpers.

Every date in the planner is a civil calendar date (`datetime.date`), never a
timestamp, so "2024-01-15" stays 2024-01-15 whatever the host timezone is.
"""

from __future__ import annotations

import datetime as dt
from typing import Optional, Union

DateLike = Union[dt.date, str, None]


def parse_local_date(value: DateLike) -> Optional[dt.date]:
    """
    'YYYY-MM-DD' → date. Empty string / None → None.
    A datetime is truncated to its calendar day.
    """
    if value is None or value == "":
        return None
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    y, m, d = (int(part) for part in str(value).strip()[:10].split("-"))
    return dt.date(y, m, d)


def format_local_date(value: Optional[dt.date]) -> str:
    """date → 'YYYY-MM-DD'; None → ''."""
    if value is None:
        return ""
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def inclusive_days(start: DateLike, end: DateLike) -> int:
    """Number of calendar days covered by [start, end], both ends included."""
    s, e = parse_local_date(start), parse_local_date(end)
    if s is None or e is None:
        raise ValueError("start and end dates are required")
    return abs((e - s).days) + 1


def nth_day(start: DateLike, day_number: int) -> Optional[dt.date]:
    """Date of the 1-based `day_number` of a trip starting on `start`."""
    s = parse_local_date(start)
    if s is None:
        return None
    return s + dt.timedelta(days=day_number - 1)


def add_months(value: dt.date, months: int) -> dt.date:
    """Shift by whole months, clamping the day to the target month's length."""
    index = value.month - 1 + months
    year, month = value.year + index // 12, index % 12 + 1
    return dt.date(year, month, min(value.day, days_in_month(year, month)))


def days_in_month(year: int, month: int) -> int:
    first_next = dt.date(year + month // 12, month % 12 + 1, 1)
    return (first_next - dt.timedelta(days=1)).day
