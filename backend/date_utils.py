"""
date_utils.py
─────────────
Wall-clock date arithmetic used by the recurrence engine.

All values are naive datetimes interpreted as local time; no timezone
conversion ever happens here.
"""

from datetime import date, datetime, timedelta
from typing import Tuple, Union

DateLike = Union[date, datetime]


def js_weekday(d: DateLike) -> int:
    """Weekday index with 0 = Sunday ... 6 = Saturday."""
    return (d.weekday() + 1) % 7


def add_days(dt: datetime, days: int) -> datetime:
    return dt + timedelta(days=days)


def add_months(dt: datetime, months: int) -> datetime:
    """
    Add calendar months, rolling day-of-month overflow into the next month.

    The day is counted from the first of the target month, so
    2024-01-31 + 1 month lands on 2024-03-02 rather than being clamped
    to 2024-02-29.
    """
    total = dt.year * 12 + (dt.month - 1) + months
    year, month0 = divmod(total, 12)
    first = dt.replace(year=year, month=month0 + 1, day=1)
    return first + timedelta(days=dt.day - 1)


def epoch_millis(dt: datetime) -> int:
    """Milliseconds since the Unix epoch for a local wall-clock value."""
    return int(round(dt.timestamp() * 1000))


def same_day(a: DateLike, b: DateLike) -> bool:
    return (a.year, a.month, a.day) == (b.year, b.month, b.day)


def month_bounds(year: int, month: int) -> Tuple[datetime, datetime]:
    """Half-open [start, end) range covering one calendar month."""
    start = datetime(year, month, 1)
    return start, add_months(start, 1)
