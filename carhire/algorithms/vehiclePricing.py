"""
Vehicle Pricing Engine -- day rentals
=====================================

Combines the day counter, tier resolver, seasonal adjuster and location
fee table into the price breakdown shown while booking a rental:

    days                   = count_rental_days(...)
    base_price_per_day     = price_for_days(vehicle, days)
    seasonal_price_per_day = round(base_price_per_day * multiplier)
    base_price             = days * seasonal_price_per_day
    total_price            = base_price + delivery_fee + return_fee

Add-ons are priced separately (see ``additionalFeatures``) and composed on
top by ``quote_day_rental``.  The resulting ``ReservationQuote`` is what a
reservation stores verbatim, so a quote never changes after booking.

Incomplete input (a missing date or time, or a return before the pickup)
is not an error: the engine returns an empty breakdown with every price
set to ``None`` and the UI keeps collecting input.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional, Union

from .additionalFeatures import (
    DEFAULT_ADDITIONAL_50KM_PRICE,
    INCLUDED_KM_PER_DAY,
    AdditionalFeaturesBreakdown,
    AdditionalFeaturesSelection,
    compute_additional_features_cost,
    included_kilometers,
    resolve_deductible,
    resolve_warranty_amount,
)
from .dayCounter import TimeLike, count_rental_days
from .locationFees import get_location_fee
from .money import Number, to_decimal, to_wire_number
from .seasonalAdjuster import apply_seasonal_rate
from .tierResolver import VehiclePricingInput, base_price_per_day, price_for_days

DateLike = Union[date, datetime]


# ---------------------------------------------------------------------------
# Output records
# ---------------------------------------------------------------------------

@dataclass
class PriceDetails:
    """Price breakdown of a day rental (add-ons excluded)."""

    base_price: Optional[int]
    total_price: Optional[int]
    days: Optional[int]
    delivery_fee: int = 0
    return_fee: int = 0
    total_location_fees: int = 0
    seasonal_multiplier: Decimal = Decimal("1.0")
    seasonal_adjustment: Decimal = Decimal("0")
    base_price_before_season: Optional[Decimal] = None
    seasonal_price_per_day: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        return self.total_price is None

    def as_wire(self) -> dict[str, Any]:
        """camelCase representation stored on reservations and sent to emails."""

        def _opt(value: Optional[Number]) -> Optional[Union[int, float]]:
            return None if value is None else to_wire_number(value)

        return {
            "basePrice": _opt(self.base_price),
            "totalPrice": _opt(self.total_price),
            "days": self.days,
            "deliveryFee": self.delivery_fee,
            "returnFee": self.return_fee,
            "totalLocationFees": self.total_location_fees,
            "seasonalMultiplier": to_wire_number(self.seasonal_multiplier),
            "seasonalAdjustment": to_wire_number(self.seasonal_adjustment),
            "basePriceBeforeSeason": _opt(self.base_price_before_season),
            "seasonalPricePerDay": self.seasonal_price_per_day,
        }


@dataclass
class ReservationQuote:
    """Full quote of a rental: day price, location fees and add-ons."""

    price_details: PriceDetails
    additional_features: Optional[AdditionalFeaturesBreakdown]
    is_scdw_selected: bool
    warranty_amount: Decimal
    deductible_amount: Decimal
    protection_cost: Decimal
    total_price: Optional[Decimal]
    included_kilometers: int = 0
    extra_kilometers: int = 0

    def as_wire(self) -> dict[str, Any]:
        features = self.additional_features
        wire = self.price_details.as_wire()
        wire.update({
            "totalPrice": None if self.total_price is None else to_wire_number(self.total_price),
            "isSCDWSelected": self.is_scdw_selected,
            "deductibleAmount": to_wire_number(self.deductible_amount),
            "protectionCost": to_wire_number(self.protection_cost),
            "warrantyAmount": to_wire_number(self.warranty_amount),
            "scdwPrice": to_wire_number(features.scdw_price) if features else 0,
            "snowChainsPrice": features.snow_chains_price if features else 0,
            "childSeat1to4Price": features.child_seat_1to4_price if features else 0,
            "childSeat5to12Price": features.child_seat_5to12_price if features else 0,
            "extraKilometersPrice": (
                to_wire_number(features.extra_kilometers_price) if features else 0
            ),
            "totalAdditionalFeatures": (
                to_wire_number(features.total_additional_features) if features else 0
            ),
            "includedKilometers": self.included_kilometers,
            "extraKilometers": self.extra_kilometers,
        })
        return wire


def empty_price_details(multiplier: Number = 1) -> PriceDetails:
    return PriceDetails(
        base_price=None,
        total_price=None,
        days=None,
        seasonal_multiplier=to_decimal(multiplier),
    )


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

def _as_date(value: DateLike) -> date:
    return value.date() if isinstance(value, datetime) else value


def compute_day_rental_price(
    vehicle: VehiclePricingInput,
    multiplier: Number,
    pickup_date: Optional[DateLike],
    return_date: Optional[DateLike],
    pickup_location: Optional[str] = None,
    return_location: Optional[str] = None,
    pickup_time: Optional[TimeLike] = None,
    return_time: Optional[TimeLike] = None,
) -> PriceDetails:
    """Price breakdown of renting ``vehicle`` between the given dates."""
    if not (pickup_date and return_date and pickup_time and return_time):
        return empty_price_details(multiplier)
    if _as_date(return_date) < _as_date(pickup_date):
        return empty_price_details(multiplier)

    multiplier = to_decimal(multiplier)
    days = count_rental_days(pickup_date, return_date, pickup_time, return_time)
    base_price_per_day = price_for_days(vehicle, days)
    seasonal_price_per_day = apply_seasonal_rate(base_price_per_day, multiplier)

    base_price = days * seasonal_price_per_day
    base_price_before_season = days * base_price_per_day

    delivery_fee = get_location_fee(pickup_location)
    return_fee = get_location_fee(return_location)
    total_location_fees = delivery_fee + return_fee

    return PriceDetails(
        base_price=base_price,
        total_price=base_price + total_location_fees,
        days=days,
        delivery_fee=delivery_fee,
        return_fee=return_fee,
        total_location_fees=total_location_fees,
        seasonal_multiplier=multiplier,
        seasonal_adjustment=base_price - base_price_before_season,
        base_price_before_season=base_price_before_season,
        seasonal_price_per_day=seasonal_price_per_day,
    )


def compose_reservation_quote(
    price_details: PriceDetails,
    features: Optional[AdditionalFeaturesBreakdown],
    selection: AdditionalFeaturesSelection,
    warranty_amount: Number,
    included_km_per_day: int = INCLUDED_KM_PER_DAY,
) -> ReservationQuote:
    """Add the add-on costs on top of a day-rental breakdown."""
    warranty_amount = to_decimal(warranty_amount)
    if price_details.is_empty or features is None:
        return ReservationQuote(
            price_details=price_details,
            additional_features=None,
            is_scdw_selected=selection.scdw_selected,
            warranty_amount=Decimal("0"),
            deductible_amount=Decimal("0"),
            protection_cost=Decimal("0"),
            total_price=None,
        )

    total_price = (
        to_decimal(price_details.total_price)
        + features.protection_cost
        + features.total_additional_features
    )
    return ReservationQuote(
        price_details=price_details,
        additional_features=features,
        is_scdw_selected=selection.scdw_selected,
        warranty_amount=warranty_amount,
        deductible_amount=resolve_deductible(selection.scdw_selected, warranty_amount),
        protection_cost=features.protection_cost,
        total_price=total_price,
        included_kilometers=included_kilometers(price_details.days or 0, included_km_per_day),
        extra_kilometers=features.extra_kilometers,
    )


def quote_day_rental(
    vehicle: VehiclePricingInput,
    multiplier: Number,
    pickup_date: Optional[DateLike],
    return_date: Optional[DateLike],
    pickup_location: Optional[str] = None,
    return_location: Optional[str] = None,
    pickup_time: Optional[TimeLike] = None,
    return_time: Optional[TimeLike] = None,
    selection: Optional[AdditionalFeaturesSelection] = None,
    price_per_50km: Number = DEFAULT_ADDITIONAL_50KM_PRICE,
    included_km_per_day: int = INCLUDED_KM_PER_DAY,
) -> ReservationQuote:
    """Day-rental breakdown plus add-ons, ready to be stored on a reservation.

    SCDW is priced from the entry-level tier rate without seasonal
    adjustment, whatever the trip length.
    """
    selection = selection or AdditionalFeaturesSelection()
    price_details = compute_day_rental_price(
        vehicle,
        multiplier,
        pickup_date,
        return_date,
        pickup_location,
        return_location,
        pickup_time,
        return_time,
    )
    warranty_amount = resolve_warranty_amount(vehicle.warranty, vehicle.vehicle_type)
    features = None
    if not price_details.is_empty:
        features = compute_additional_features_cost(
            selection,
            price_details.days,
            base_price_per_day(vehicle),
            price_per_50km,
        )
    return compose_reservation_quote(
        price_details, features, selection, warranty_amount, included_km_per_day
    )
