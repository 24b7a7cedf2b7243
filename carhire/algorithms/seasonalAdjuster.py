"""
Seasonal Pricing Adjuster
=========================

Resolves the seasonal multiplier and applies it to a per-day rate.

Two resolution strategies exist:

  - **Current-season pointer** (``resolve_current_multiplier``): the admin
    explicitly marks one season as current.  This is the authoritative
    source for reservation quotes that get persisted.
  - **Date range** (``multiplier_for_date_range``): picks the active season
    whose periods overlap the most rental days.  Used for live previews
    only; it can disagree with the pointer when the admin has not synced
    the current season with the calendar.

The seasonal per-day rate is rounded half-up to whole EUR *before* it is
multiplied by the day count.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Optional, Sequence

from .money import Number, round_whole, to_decimal

BASE_MULTIPLIER = Decimal("1.0")


# ---------------------------------------------------------------------------
# Input records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SeasonPeriod:
    """A calendar window, stored as ``YYYY-MM-DD`` strings.

    Only the month and day are compared, so a period recurs every year.
    A period whose end precedes its start (``12-15`` -> ``01-05``) wraps
    over the new year.
    """

    start_date: str
    end_date: str
    description: Optional[str] = None

    def __post_init__(self) -> None:
        date.fromisoformat(self.start_date)
        date.fromisoformat(self.end_date)

    def contains(self, day: date) -> bool:
        month_day = day.isoformat()[5:]
        start = self.start_date[5:]
        end = self.end_date[5:]
        if start <= end:
            return start <= month_day <= end
        return month_day >= start or month_day <= end


@dataclass(frozen=True)
class Season:
    season_id: uuid.UUID
    name: str
    multiplier: Decimal
    periods: tuple[SeasonPeriod, ...] = field(default_factory=tuple)
    is_active: bool = True
    description: Optional[str] = None

    def __post_init__(self) -> None:
        multiplier = to_decimal(self.multiplier)
        if multiplier <= 0:
            raise ValueError(f"Season multiplier must be positive (got {multiplier})")
        object.__setattr__(self, "multiplier", multiplier)
        object.__setattr__(self, "periods", tuple(self.periods))


@dataclass(frozen=True)
class CurrentSeason:
    """The single "current season" pointer, with the season it references."""

    season_id: uuid.UUID
    set_at: datetime
    set_by: Optional[str] = None
    season: Optional[Season] = None


@dataclass
class MultiplierResult:
    multiplier: Decimal
    season_id: Optional[uuid.UUID] = None
    season_name: Optional[str] = None


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------

def resolve_current_season(current: Optional[CurrentSeason]) -> MultiplierResult:
    """Multiplier of the current-season pointer, 1.0 when unset or inactive."""
    if current is None or current.season is None or not current.season.is_active:
        return MultiplierResult(multiplier=BASE_MULTIPLIER)
    season = current.season
    return MultiplierResult(
        multiplier=season.multiplier,
        season_id=season.season_id,
        season_name=season.name,
    )


def resolve_current_multiplier(current: Optional[CurrentSeason]) -> Decimal:
    return resolve_current_season(current).multiplier


def _dates_in_range(start: date, end: date) -> list[date]:
    if start > end:
        return []
    return [start + timedelta(days=offset) for offset in range((end - start).days + 1)]


def multiplier_for_date_range(
    start: date,
    end: date,
    active_seasons: Sequence[Season],
    current: Optional[CurrentSeason] = None,
) -> MultiplierResult:
    """Multiplier of the active season overlapping the most rental days.

    Each rental day (``start`` to ``end`` inclusive) counts at most once per
    season.  Ties go to the season listed first.  Without any overlap the
    current-season pointer is used, then 1.0.
    """
    seasons = [s for s in active_seasons if s.is_active]
    rental_dates = _dates_in_range(start, end)

    best: Optional[Season] = None
    best_overlap = 0
    for season in seasons:
        overlap = sum(
            1 for day in rental_dates
            if any(period.contains(day) for period in season.periods)
        )
        if overlap > best_overlap:
            best, best_overlap = season, overlap

    if best is not None:
        return MultiplierResult(
            multiplier=best.multiplier,
            season_id=best.season_id,
            season_name=best.name,
        )
    return resolve_current_season(current)


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------

def apply_seasonal_rate(base_price_per_day: Number, multiplier: Number) -> int:
    """Seasonal per-day rate, rounded half-up to whole EUR."""
    return round_whole(to_decimal(base_price_per_day) * to_decimal(multiplier))


def seasonal_adjustment(days: int, base_price_per_day: Number, seasonal_price_per_day: int) -> Decimal:
    """Extra (or discounted) amount caused by the season over the whole stay."""
    return days * to_decimal(seasonal_price_per_day) - days * to_decimal(base_price_per_day)
