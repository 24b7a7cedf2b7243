"""
Pydantic v2 schemas for the Reservation API.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from carhire.api.schemas.pricing import TripIn
from carhire.models.reservation import ReservationStatus


class CreateReservationRequest(TripIn):
    vehicle_id: uuid.UUID
    customer_name: str = Field(min_length=1, max_length=200)
    customer_email: str = Field(
        min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$"
    )
    customer_phone: Optional[str] = Field(default=None, max_length=50)


class ReservationOut(BaseModel):
    """A reservation with its price snapshot as stored at booking time."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    vehicle_id: uuid.UUID
    status: ReservationStatus
    customer_name: str
    customer_email: str
    pickup_date: date
    return_date: date
    pickup_time: str
    return_time: str
    pickup_location: Optional[str] = None
    return_location: Optional[str] = None
    days: int
    base_price: Decimal
    total_price: Decimal
    seasonal_multiplier: Decimal
    is_scdw_selected: bool
    deductible_amount: Decimal
    protection_cost: Decimal
    price_details: dict[str, Any]
    additional_features: dict[str, Any]
    created_at: datetime
