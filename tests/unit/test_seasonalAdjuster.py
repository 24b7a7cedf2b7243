"""
Unit tests for the seasonal adjuster.

Covers the current-season pointer, the date-range resolution used for
previews, and the whole-EUR rounding of seasonal rates.
"""

import uuid
from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from carhire.algorithms.seasonalAdjuster import (
    BASE_MULTIPLIER,
    CurrentSeason,
    Season,
    SeasonPeriod,
    apply_seasonal_rate,
    multiplier_for_date_range,
    resolve_current_multiplier,
    resolve_current_season,
    seasonal_adjustment,
)

SET_AT = datetime(2025, 5, 1, tzinfo=timezone.utc)


def _season(name, multiplier, periods, is_active=True) -> Season:
    return Season(
        season_id=uuid.uuid4(),
        name=name,
        multiplier=Decimal(multiplier),
        periods=tuple(SeasonPeriod(start, end) for start, end in periods),
        is_active=is_active,
    )


@pytest.fixture
def summer() -> Season:
    return _season("Summer", "1.5", [("2025-06-01", "2025-08-31")])


@pytest.fixture
def winter() -> Season:
    return _season("Winter holidays", "1.2", [("2025-12-15", "2026-01-05")])


@pytest.fixture
def autumn() -> Season:
    return _season("Autumn", "0.9", [("2025-09-01", "2025-09-30")])


# ---------------------------------------------------------------------------
# Current-season pointer
# ---------------------------------------------------------------------------


class TestResolveCurrentMultiplier:

    def test_no_pointer_is_base_pricing(self):
        assert resolve_current_multiplier(None) == BASE_MULTIPLIER == Decimal("1.0")

    def test_active_season_multiplier(self, summer):
        current = CurrentSeason(season_id=summer.season_id, set_at=SET_AT, season=summer)
        assert resolve_current_multiplier(current) == Decimal("1.5")

    def test_inactive_season_is_base_pricing(self):
        season = _season("Old", "1.8", [], is_active=False)
        current = CurrentSeason(season_id=season.season_id, set_at=SET_AT, season=season)
        assert resolve_current_multiplier(current) == Decimal("1.0")

    def test_dangling_pointer_is_base_pricing(self):
        current = CurrentSeason(season_id=uuid.uuid4(), set_at=SET_AT)
        assert resolve_current_multiplier(current) == Decimal("1.0")

    def test_result_names_the_season(self, summer):
        current = CurrentSeason(season_id=summer.season_id, set_at=SET_AT, season=summer)
        result = resolve_current_season(current)
        assert result.season_id == summer.season_id
        assert result.season_name == "Summer"


# ---------------------------------------------------------------------------
# Date-range resolution
# ---------------------------------------------------------------------------


class TestMultiplierForDateRange:

    def test_range_inside_season(self, summer, winter):
        result = multiplier_for_date_range(date(2025, 7, 10), date(2025, 7, 12), [summer, winter])
        assert result.multiplier == Decimal("1.5")
        assert result.season_name == "Summer"

    def test_period_wrapping_new_year(self, summer, winter):
        result = multiplier_for_date_range(date(2025, 12, 30), date(2026, 1, 2), [summer, winter])
        assert result.multiplier == Decimal("1.2")

    def test_periods_recur_every_year(self, summer):
        result = multiplier_for_date_range(date(2027, 7, 1), date(2027, 7, 3), [summer])
        assert result.multiplier == Decimal("1.5")

    def test_most_overlapping_days_wins(self, summer, autumn):
        # 2 days of summer (Aug 30-31) against 5 days of autumn (Sep 1-5)
        result = multiplier_for_date_range(date(2025, 8, 30), date(2025, 9, 5), [summer, autumn])
        assert result.season_name == "Autumn"
        assert result.multiplier == Decimal("0.9")

    def test_tie_goes_to_first_season(self, summer, autumn):
        # Aug 30-31 and Sep 1-2: two days each
        result = multiplier_for_date_range(date(2025, 8, 30), date(2025, 9, 2), [autumn, summer])
        assert result.season_name == "Autumn"

    def test_inactive_seasons_ignored(self):
        season = _season("Closed", "2.0", [("2025-07-01", "2025-07-31")], is_active=False)
        result = multiplier_for_date_range(date(2025, 7, 10), date(2025, 7, 12), [season])
        assert result.multiplier == Decimal("1.0")

    def test_no_overlap_falls_back_to_pointer(self, summer, winter):
        current = CurrentSeason(season_id=winter.season_id, set_at=SET_AT, season=winter)
        result = multiplier_for_date_range(date(2025, 3, 1), date(2025, 3, 4), [summer], current)
        assert result.multiplier == Decimal("1.2")

    def test_no_overlap_and_no_pointer_is_base(self, summer):
        result = multiplier_for_date_range(date(2025, 3, 1), date(2025, 3, 4), [summer])
        assert result.multiplier == Decimal("1.0")
        assert result.season_id is None


# ---------------------------------------------------------------------------
# Application and rounding
# ---------------------------------------------------------------------------


class TestApplySeasonalRate:

    @pytest.mark.parametrize(
        "base,multiplier,expected",
        [
            (40, "1.5", 60),
            (45, "1.1", 50),   # 49.5 rounds half up
            (33, "1.15", 38),  # 37.95
            (50, "0.9", 45),
            (41, "0.75", 31),  # 30.75
        ],
    )
    def test_rounds_to_whole_eur(self, base, multiplier, expected):
        result = apply_seasonal_rate(Decimal(base), Decimal(multiplier))
        assert result == expected
        assert isinstance(result, int)

    @pytest.mark.parametrize("base", [0, 1, 37, 50, 120])
    def test_identity_multiplier_keeps_integer_rate(self, base):
        assert apply_seasonal_rate(base, Decimal("1.0")) == base

    def test_seasonal_adjustment_over_stay(self):
        assert seasonal_adjustment(7, Decimal("40"), 60) == Decimal("140")


class TestSeasonRecords:

    def test_non_positive_multiplier_rejected(self):
        with pytest.raises(ValueError, match="multiplier"):
            _season("Broken", "0", [])

    def test_malformed_period_date_rejected(self):
        with pytest.raises(ValueError):
            SeasonPeriod("2025-13-01", "2025-12-31")
