"""Business-day arithmetic for response time classification.

A business day is Monday through Friday on the UTC calendar. No holiday
calendar is modeled.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Union

DateLike = Union[date, datetime]


def _utc_date(value: DateLike) -> date:
    """Return the UTC calendar date for a date or datetime.

    Naive datetimes are treated as UTC.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.date()
        return value.astimezone(timezone.utc).date()
    return value


def is_business_day(value: DateLike) -> bool:
    """Return ``True`` when ``value`` falls on Monday-Friday (UTC)."""
    return _utc_date(value).weekday() < 5


def business_days_between(start: DateLike, end: DateLike) -> int:
    """Count business days touched by the inclusive range ``[start, end]``.

    Iterates one calendar day at a time from the start date to the end date.
    A start and end on the same business day count as ``1``, so a 48 business
    hour target corresponds to a result of at most ``2``. Returns ``0`` when
    ``start`` is after ``end``.
    """
    if isinstance(start, datetime) and isinstance(end, datetime):
        if start > end:
            return 0

    current = _utc_date(start)
    last = _utc_date(end)
    count = 0

    while current <= last:
        if is_business_day(current):
            count += 1
        current += timedelta(days=1)

    return count
