"""
Season Service
==============

Manages seasons and the single "current season" pointer, and resolves the
seasonal multiplier fed to the pricing engine.

Two resolution paths exist:

  - ``get_current_multiplier``: the admin-set pointer.  This is the one
    reservation prices are built from.
  - ``get_multiplier_for_date_range``: derived from the active seasons'
    calendar periods.  Used for live previews only; it can disagree with
    the pointer when the two are not kept in sync.
"""

from __future__ import annotations

import logging
import uuid
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Optional, Sequence

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from carhire.algorithms import seasonalAdjuster
from carhire.models import CurrentSeason, Season

logger = logging.getLogger(__name__)


class CurrentSeasonConflictError(ValueError):
    """Another request replaced the current season at the same time."""


# ---------------------------------------------------------------------------
# ORM -> pricing records
# ---------------------------------------------------------------------------

def to_season_record(season: Season) -> seasonalAdjuster.Season:
    periods = tuple(
        seasonalAdjuster.SeasonPeriod(
            start_date=p["startDate"],
            end_date=p["endDate"],
            description=p.get("description"),
        )
        for p in (season.periods or [])
    )
    return seasonalAdjuster.Season(
        season_id=season.id,
        name=season.name,
        multiplier=season.multiplier,
        periods=periods,
        is_active=season.is_active,
        description=season.description,
    )


def to_current_record(current: Optional[CurrentSeason]) -> Optional[seasonalAdjuster.CurrentSeason]:
    if current is None:
        return None
    return seasonalAdjuster.CurrentSeason(
        season_id=current.season_id,
        set_at=current.set_at,
        set_by=current.set_by,
        season=to_season_record(current.season) if current.season is not None else None,
    )


# ---------------------------------------------------------------------------
# Current season pointer
# ---------------------------------------------------------------------------

async def get_current_season(db: AsyncSession) -> Optional[CurrentSeason]:
    """Return the current-season pointer (with its season), or ``None``."""
    result = await db.execute(
        select(CurrentSeason).order_by(CurrentSeason.set_at.desc()).limit(1)
    )
    return result.scalar_one_or_none()


async def get_current_multiplier(db: AsyncSession) -> seasonalAdjuster.MultiplierResult:
    """Multiplier of the current season, 1.0 when unset or inactive."""
    current = await get_current_season(db)
    return seasonalAdjuster.resolve_current_season(to_current_record(current))


async def set_current_season(
    db: AsyncSession,
    season_id: uuid.UUID,
    set_by: Optional[str] = None,
) -> CurrentSeason:
    """Point the current season at ``season_id``, replacing any previous pointer.

    Raises:
        ValueError: If the season does not exist or is inactive.
        CurrentSeasonConflictError: If a concurrent request wrote the
                                    pointer first.
    """
    season = await db.get(Season, season_id)
    if season is None:
        raise ValueError(f"Season {season_id} not found")
    if not season.is_active:
        raise ValueError(f"Season {season_id} is inactive and cannot be made current")

    await db.execute(delete(CurrentSeason))
    current = CurrentSeason(
        season_id=season.id,
        set_at=datetime.now(timezone.utc),
        set_by=set_by,
    )
    current.season = season
    db.add(current)
    try:
        await db.flush()
    except IntegrityError:
        # The singleton key is taken by a concurrent writer
        raise CurrentSeasonConflictError(
            "The current season was changed by another request; retry"
        )

    logger.info(
        "Current season set: season=%s (%s, x%s) by=%s",
        season.id,
        season.name,
        season.multiplier,
        set_by,
    )
    return current


async def clear_current_season(db: AsyncSession) -> bool:
    """Remove the pointer so base pricing applies.  Returns whether one existed."""
    result = await db.execute(delete(CurrentSeason))
    cleared = bool(result.rowcount)
    if cleared:
        logger.info("Current season cleared; base pricing now applies")
    return cleared


# ---------------------------------------------------------------------------
# Seasons
# ---------------------------------------------------------------------------

async def list_active_seasons(db: AsyncSession) -> list[Season]:
    result = await db.execute(
        select(Season).where(Season.is_active.is_(True)).order_by(Season.created_at)
    )
    return list(result.scalars().all())


async def get_multiplier_for_date_range(
    db: AsyncSession,
    start: date,
    end: date,
) -> seasonalAdjuster.MultiplierResult:
    """Advisory multiplier derived from the seasons' calendar periods.

    Raises:
        ValueError: If ``end`` precedes ``start``.
    """
    if end < start:
        raise ValueError("End date must not precede start date")

    seasons = await list_active_seasons(db)
    current = await get_current_season(db)
    return seasonalAdjuster.multiplier_for_date_range(
        start,
        end,
        [to_season_record(s) for s in seasons],
        to_current_record(current),
    )


async def create_season(
    db: AsyncSession,
    name: str,
    multiplier: Decimal,
    periods: Sequence[dict[str, Any]] = (),
    description: Optional[str] = None,
    is_active: bool = True,
) -> Season:
    """Create a season.

    Raises:
        ValueError: If the multiplier is not positive or a period date is
                    malformed.
    """
    season = Season(
        name=name,
        description=description,
        multiplier=multiplier,
        periods=[dict(p) for p in periods],
        is_active=is_active,
    )
    # Build the pricing record to validate the multiplier and periods
    season.id = uuid.uuid4()
    to_season_record(season)

    db.add(season)
    await db.flush()

    logger.info("Season created: %s (%s, x%s)", season.id, name, multiplier)
    return season
