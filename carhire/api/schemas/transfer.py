"""
Pydantic v2 schemas for transfer pricing tier administration.
"""

from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CreateTierRequest(BaseModel):
    min_extra_km: Decimal = Field(description="Lower bound (inclusive) of km beyond the base distance")
    max_extra_km: Optional[Decimal] = Field(default=None, description="Upper bound (exclusive); NULL = unbounded")
    price_per_km: Decimal
    sort_index: Optional[int] = Field(default=None, ge=0)
    is_active: bool = True


class UpdateTierRequest(BaseModel):
    """Partial update; omitted fields keep their value."""

    min_extra_km: Optional[Decimal] = None
    max_extra_km: Optional[Decimal] = None
    price_per_km: Optional[Decimal] = None
    sort_index: Optional[int] = Field(default=None, ge=0)
    is_active: Optional[bool] = None


class TierOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    min_extra_km: Decimal
    max_extra_km: Optional[Decimal] = None
    price_per_km: Decimal
    sort_index: int
    is_active: bool
