"""
Rental Day Counter
==================

Converts a pickup / return pair into the number of billable rental days.

Rules:
  - Pickup and return on the same calendar date always bill 1 day.
  - Otherwise the plain calendar-day difference is billed, plus one extra
    day when the return hour is more than GRACE_PERIOD_HOURS past the
    pickup hour.

Only the hour component of the "HH:MM" strings is considered; minutes are
ignored.  Callers validate that the return does not precede the pickup.
"""

from __future__ import annotations

from datetime import date, datetime, time
from typing import Union

GRACE_PERIOD_HOURS: int = 2

DateLike = Union[date, datetime]
TimeLike = Union[str, time]


def parse_hour(value: TimeLike) -> int:
    """Return the hour of an "HH:MM" string or a ``time`` instance."""
    if isinstance(value, time):
        return value.hour
    hour_part = value.strip().split(":")[0]
    hour = int(hour_part)
    if not 0 <= hour <= 23:
        raise ValueError(f"Invalid hour in time string: {value!r}")
    return hour


def _as_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def count_rental_days(
    pickup_date: DateLike,
    return_date: DateLike,
    pickup_time: TimeLike,
    return_time: TimeLike,
) -> int:
    """Return the billable number of days for a rental.

    >>> count_rental_days(date(2025, 3, 3), date(2025, 3, 5), "10:00", "10:00")
    2
    >>> count_rental_days(date(2025, 3, 3), date(2025, 3, 5), "10:00", "13:00")
    3
    """
    start = _as_date(pickup_date)
    end = _as_date(return_date)

    if start == end:
        return 1

    days = (end - start).days
    if parse_hour(return_time) > parse_hour(pickup_time) + GRACE_PERIOD_HOURS:
        return days + 1
    return days
