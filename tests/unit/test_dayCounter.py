"""
Unit tests for the rental day counter.

Covers the same-day rule, the two-hour grace period and the accepted
date / time input types.
"""

from datetime import date, datetime, time

import pytest

from carhire.algorithms.dayCounter import GRACE_PERIOD_HOURS, count_rental_days, parse_hour


PICKUP = date(2025, 3, 3)  # Monday


# ---------------------------------------------------------------------------
# Same-day rule
# ---------------------------------------------------------------------------


class TestSameDay:
    """Pickup and return on the same date always bill one day."""

    @pytest.mark.parametrize(
        "pickup_time,return_time",
        [
            ("10:00", "10:00"),
            ("00:00", "23:59"),
            ("18:00", "08:00"),
            ("08:30", "21:45"),
        ],
    )
    def test_same_date_is_one_day(self, pickup_time, return_time):
        assert count_rental_days(PICKUP, PICKUP, pickup_time, return_time) == 1


# ---------------------------------------------------------------------------
# Grace period
# ---------------------------------------------------------------------------


class TestGracePeriod:
    """An extra day is billed only when the return is more than 2h later."""

    def test_grace_period_is_two_hours(self):
        assert GRACE_PERIOD_HOURS == 2

    def test_same_hour_bills_calendar_days(self):
        assert count_rental_days(PICKUP, date(2025, 3, 5), "10:00", "10:00") == 2

    def test_three_hours_later_bills_extra_day(self):
        assert count_rental_days(PICKUP, date(2025, 3, 5), "10:00", "13:00") == 3

    def test_exactly_two_hours_later_is_within_grace(self):
        assert count_rental_days(PICKUP, date(2025, 3, 5), "10:00", "12:00") == 2

    def test_minutes_are_ignored(self):
        """12:59 is still hour 12, inside the grace window."""
        assert count_rental_days(PICKUP, date(2025, 3, 5), "10:00", "12:59") == 2

    def test_earlier_return_hour_bills_calendar_days(self):
        assert count_rental_days(PICKUP, date(2025, 3, 5), "10:00", "07:00") == 2

    def test_full_week(self):
        assert count_rental_days(PICKUP, date(2025, 3, 10), "10:00", "10:00") == 7

    def test_one_night_late_return(self):
        assert count_rental_days(PICKUP, date(2025, 3, 4), "09:00", "18:00") == 2


# ---------------------------------------------------------------------------
# Input types
# ---------------------------------------------------------------------------


class TestInputTypes:

    def test_accepts_time_objects(self):
        assert count_rental_days(PICKUP, date(2025, 3, 5), time(10, 0), time(13, 0)) == 3

    def test_accepts_datetimes(self):
        result = count_rental_days(
            datetime(2025, 3, 3, 23, 0),
            datetime(2025, 3, 5, 1, 0),
            "10:00",
            "10:00",
        )
        assert result == 2

    def test_parse_hour_from_string(self):
        assert parse_hour("07:45") == 7

    def test_parse_hour_rejects_out_of_range(self):
        with pytest.raises(ValueError):
            parse_hour("25:00")
