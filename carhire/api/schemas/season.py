"""
Pydantic v2 schemas for the Season API.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SeasonPeriodIn(BaseModel):
    """A calendar window; only month and day are compared, every year."""

    model_config = ConfigDict(populate_by_name=True)

    start_date: date = Field(alias="startDate")
    end_date: date = Field(alias="endDate")
    description: Optional[str] = Field(default=None, max_length=200)

    def to_stored(self) -> dict:
        return {
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "description": self.description,
        }


class CreateSeasonRequest(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = None
    multiplier: Decimal = Field(gt=0, le=10)
    periods: list[SeasonPeriodIn] = Field(default_factory=list)
    is_active: bool = True


class SetCurrentSeasonRequest(BaseModel):
    season_id: uuid.UUID


class SeasonOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    description: Optional[str] = None
    multiplier: Decimal
    periods: list[dict]
    is_active: bool


class CurrentSeasonOut(BaseModel):
    """The current-season pointer; ``season`` is ``None`` when unset."""

    multiplier: Decimal
    season: Optional[SeasonOut] = None
    set_at: Optional[datetime] = None
    set_by: Optional[str] = None


class MultiplierOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    multiplier: Decimal
    season_id: Optional[uuid.UUID] = None
    season_name: Optional[str] = None

