"""
Season API routes
=================

  GET    /api/v1/seasons/current      -- Current season pointer and multiplier
  PUT    /api/v1/seasons/current      -- Point at a season (admin)
  DELETE /api/v1/seasons/current      -- Back to base pricing (admin)
  GET    /api/v1/seasons/active       -- Active seasons
  POST   /api/v1/seasons              -- Create a season (admin)
  GET    /api/v1/seasons/multiplier   -- Date-range multiplier (preview only)
"""

from __future__ import annotations

import logging
from datetime import date

from fastapi import APIRouter, HTTPException, Query, status

from carhire.algorithms.seasonalAdjuster import resolve_current_season
from carhire.api.deps import AdminUser, DBSession
from carhire.api.schemas.season import (
    CreateSeasonRequest,
    CurrentSeasonOut,
    MultiplierOut,
    SeasonOut,
    SetCurrentSeasonRequest,
)
from carhire.services import seasonService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/seasons", tags=["Seasons"])


# ---------------------------------------------------------------------------
# Current season
# ---------------------------------------------------------------------------

@router.get(
    "/current",
    response_model=CurrentSeasonOut,
    summary="Get the current season",
    description="Multiplier applied to reservation prices; 1.0 when no active season is set.",
)
async def get_current(db: DBSession) -> CurrentSeasonOut:
    current = await seasonService.get_current_season(db)
    result = resolve_current_season(seasonService.to_current_record(current))
    if current is None:
        return CurrentSeasonOut(multiplier=result.multiplier)
    return CurrentSeasonOut(
        multiplier=result.multiplier,
        season=SeasonOut.model_validate(current.season),
        set_at=current.set_at,
        set_by=current.set_by,
    )


@router.put(
    "/current",
    response_model=CurrentSeasonOut,
    summary="Set the current season",
    description="Replaces any previous current season; 409 if a concurrent write got there first.",
)
async def set_current(
    body: SetCurrentSeasonRequest,
    db: DBSession,
    admin: AdminUser,
) -> CurrentSeasonOut:
    try:
        current = await seasonService.set_current_season(db, body.season_id, set_by=admin)
    except ValueError as exc:
        message = str(exc)
        if isinstance(exc, seasonService.CurrentSeasonConflictError):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=message)
        if "not found" in message.lower():
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=message)
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=message
        )
    return CurrentSeasonOut(
        multiplier=current.season.multiplier,
        season=SeasonOut.model_validate(current.season),
        set_at=current.set_at,
        set_by=current.set_by,
    )


@router.delete(
    "/current",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Clear the current season",
)
async def clear_current(db: DBSession, admin: AdminUser) -> None:
    await seasonService.clear_current_season(db)
    logger.info("Current season cleared by %s", admin)


# ---------------------------------------------------------------------------
# Seasons
# ---------------------------------------------------------------------------

@router.get(
    "/active",
    response_model=list[SeasonOut],
    summary="List active seasons",
)
async def list_active(db: DBSession) -> list[SeasonOut]:
    seasons = await seasonService.list_active_seasons(db)
    return [SeasonOut.model_validate(s) for s in seasons]


@router.post(
    "",
    response_model=SeasonOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create a season",
)
async def create_season(
    body: CreateSeasonRequest,
    db: DBSession,
    admin: AdminUser,
) -> SeasonOut:
    try:
        season = await seasonService.create_season(
            db,
            name=body.name,
            multiplier=body.multiplier,
            periods=[p.to_stored() for p in body.periods],
            description=body.description,
            is_active=body.is_active,
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        )
    return SeasonOut.model_validate(season)


@router.get(
    "/multiplier",
    response_model=MultiplierOut,
    summary="Multiplier for a date range",
    description=(
        "Derived from the active seasons' periods (most overlapping days wins). "
        "Intended for previews; reservations use the current season."
    ),
)
async def get_multiplier_for_dates(
    db: DBSession,
    start: date = Query(description="First rental day (YYYY-MM-DD)"),
    end: date = Query(description="Last rental day (YYYY-MM-DD)"),
) -> MultiplierOut:
    try:
        result = await seasonService.get_multiplier_for_date_range(db, start, end)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        )
    return MultiplierOut.model_validate(result)
