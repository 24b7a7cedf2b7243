"""
Pydantic v2 schemas for the pricing API.

Covers:
- Day-rental quotes for a stored vehicle or an inline vehicle record
- Add-on selection and breakdown
- Location fee table
- Transfer quotes
"""

from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from carhire.algorithms.additionalFeatures import (
    MAX_CHILD_SEATS_PER_BRACKET,
    MAX_EXTRA_KM_PACKAGES,
    AdditionalFeaturesSelection,
)
from carhire.algorithms.tierResolver import PricingTier, VehiclePricingInput
from carhire.algorithms.transferPricing import TransferType

HHMM_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------

class AdditionalFeaturesIn(BaseModel):
    """Add-ons chosen by the customer."""

    scdw_selected: bool = False
    snow_chains_selected: bool = False
    child_seat_1to4_count: int = Field(default=0, ge=0, le=MAX_CHILD_SEATS_PER_BRACKET)
    child_seat_5to12_count: int = Field(default=0, ge=0, le=MAX_CHILD_SEATS_PER_BRACKET)
    extra_kilometers_count: int = Field(
        default=0,
        ge=0,
        le=MAX_EXTRA_KM_PACKAGES,
        description="Extra mileage in 50 km packages",
    )

    def to_selection(self) -> AdditionalFeaturesSelection:
        return AdditionalFeaturesSelection(
            scdw_selected=self.scdw_selected,
            snow_chains_selected=self.snow_chains_selected,
            child_seat_1to4_count=self.child_seat_1to4_count,
            child_seat_5to12_count=self.child_seat_5to12_count,
            extra_kilometers_count=self.extra_kilometers_count,
        )


class TripIn(BaseModel):
    """Dates, times and locations of a rental."""

    pickup_date: date
    return_date: date
    pickup_time: str = Field(pattern=HHMM_PATTERN, description="Pickup time (HH:MM)")
    return_time: str = Field(pattern=HHMM_PATTERN, description="Return time (HH:MM)")
    pickup_location: Optional[str] = Field(default=None, max_length=100)
    return_location: Optional[str] = Field(default=None, max_length=100)
    additional_features: AdditionalFeaturesIn = Field(default_factory=AdditionalFeaturesIn)


class RentalQuoteRequest(TripIn):
    vehicle_id: uuid.UUID


class PricingTierIn(BaseModel):
    min_days: int = Field(ge=1)
    max_days: Optional[int] = Field(default=None, ge=1, description="NULL = unbounded")
    price_per_day: Decimal = Field(ge=0)

    @model_validator(mode="after")
    def _check_range(self) -> "PricingTierIn":
        if self.max_days is not None and self.max_days < self.min_days:
            raise ValueError("max_days must not be lower than min_days")
        return self


class InlineVehicleIn(BaseModel):
    """Pricing-relevant fields of a vehicle that is not stored."""

    pricing_tiers: list[PricingTierIn] = Field(default_factory=list)
    price_per_day: Optional[Decimal] = Field(default=None, ge=0)
    vehicle_type: Optional[str] = Field(default=None, max_length=50)
    warranty: Optional[Decimal] = Field(default=None, ge=0)
    additional_50km_price: Optional[Decimal] = Field(default=None, ge=0)

    def to_pricing_input(self) -> VehiclePricingInput:
        return VehiclePricingInput(
            pricing_tiers=tuple(
                PricingTier(t.min_days, t.max_days, t.price_per_day) for t in self.pricing_tiers
            ),
            price_per_day=self.price_per_day,
            vehicle_type=self.vehicle_type,
            warranty=self.warranty,
        )


class RentalCalculateRequest(TripIn):
    vehicle: InlineVehicleIn
    seasonal_multiplier: Decimal = Field(default=Decimal("1.0"), gt=0)


class TransferQuoteRequest(BaseModel):
    distance_km: Decimal = Field(ge=0, description="Route distance in kilometres")
    transfer_type: TransferType = TransferType.ONE_WAY
    class_id: Optional[uuid.UUID] = Field(
        default=None, description="Vehicle class; defaults apply when omitted"
    )
    vehicle_id: Optional[uuid.UUID] = Field(
        default=None, description="Price with this vehicle's class (takes precedence)"
    )


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------

class PriceDetailsOut(BaseModel):
    """Day-rental breakdown; prices are ``None`` until the trip is complete."""

    model_config = ConfigDict(from_attributes=True)

    base_price: Optional[int] = None
    total_price: Optional[int] = None
    days: Optional[int] = None
    delivery_fee: int = 0
    return_fee: int = 0
    total_location_fees: int = 0
    seasonal_multiplier: float
    seasonal_adjustment: float
    base_price_before_season: Optional[float] = None
    seasonal_price_per_day: Optional[int] = None


class AdditionalFeaturesOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    scdw_price: float
    protection_cost: float
    snow_chains_price: int
    child_seat_1to4_price: int
    child_seat_5to12_price: int
    extra_kilometers: int
    extra_kilometers_price: float
    total_additional_features: float
    total: float


class TierSavingsOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    savings_per_day: int
    min_days_for_best: int
    lowest_price_per_day: int


class ReservationQuoteOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    price_details: PriceDetailsOut
    additional_features: Optional[AdditionalFeaturesOut] = None
    is_scdw_selected: bool
    warranty_amount: float
    deductible_amount: float
    protection_cost: float
    total_price: Optional[float] = None
    included_kilometers: int = 0
    extra_kilometers: int = 0


class RentalQuoteOut(BaseModel):
    vehicle_id: Optional[uuid.UUID] = None
    season_id: Optional[uuid.UUID] = None
    season_name: Optional[str] = None
    quote: ReservationQuoteOut
    savings: Optional[TierSavingsOut] = None


class LocationFeeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    price: int


class TransferQuoteOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    transfer_type: TransferType
    distance_km: float
    base_fare: float
    extra_km: float
    distance_charge: float
    total_price: float
    tier_price_per_km: float
