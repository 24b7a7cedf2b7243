"""
Additional Features Calculator
==============================

Prices the optional add-ons of a day rental.  Every add-on is priced
independently and the results are summed; there are no bundle effects.

  - SCDW (damage waiver): 2x the reference daily rate for 1-3 days, then
    +6 EUR for the first started 3-day block beyond day 3 and +5 EUR for
    every further block.  The reference rate is the vehicle's entry-level
    tier rate, without seasonal adjustment.
  - Snow chains: 3 EUR per day.
  - Child seats (1-4y and 5-12y): 3 EUR per seat per day, up to 2 seats
    per age bracket.
  - Extra kilometres: sold in 50 km packages at the vehicle class price
    (5 EUR by default), at most 100 packages (5000 km).

SCDW is a non-refundable charge.  When it is not taken, the customer
leaves a refundable deductible (the vehicle's warranty amount) instead.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from .money import Number, to_decimal

SCDW_BASE_DAYS = 3
SCDW_BLOCK_DAYS = 3
SCDW_FIRST_BLOCK_PRICE = Decimal("6")
SCDW_NEXT_BLOCK_PRICE = Decimal("5")

SNOW_CHAINS_PRICE_PER_DAY = 3
CHILD_SEAT_PRICE_PER_DAY = 3
MAX_CHILD_SEATS_PER_BRACKET = 2

EXTRA_KM_PACKAGE_SIZE = 50
MAX_EXTRA_KM_PACKAGES = 100
MAX_EXTRA_KM = EXTRA_KM_PACKAGE_SIZE * MAX_EXTRA_KM_PACKAGES
DEFAULT_ADDITIONAL_50KM_PRICE = Decimal("5")

INCLUDED_KM_PER_DAY = 200

# Deductible used when a vehicle has no warranty amount of its own
WARRANTY_BY_VEHICLE_TYPE: dict[str, int] = {
    "economy": 300,
    "compact": 400,
    "midsize": 500,
    "intermediate": 500,
    "standard": 600,
    "fullsize": 600,
    "suv": 800,
    "premium": 800,
    "luxury": 1000,
}
DEFAULT_WARRANTY = 500


@dataclass(frozen=True)
class AdditionalFeaturesSelection:
    """Add-ons chosen by the customer."""

    scdw_selected: bool = False
    snow_chains_selected: bool = False
    child_seat_1to4_count: int = 0
    child_seat_5to12_count: int = 0
    extra_kilometers_count: int = 0

    def __post_init__(self) -> None:
        for name in ("child_seat_1to4_count", "child_seat_5to12_count"):
            count = getattr(self, name)
            if not 0 <= count <= MAX_CHILD_SEATS_PER_BRACKET:
                raise ValueError(
                    f"{name} must be between 0 and {MAX_CHILD_SEATS_PER_BRACKET} (got {count})"
                )
        if not 0 <= self.extra_kilometers_count <= MAX_EXTRA_KM_PACKAGES:
            raise ValueError(
                f"extra_kilometers_count must be between 0 and "
                f"{MAX_EXTRA_KM_PACKAGES} (got {self.extra_kilometers_count})"
            )

    @property
    def extra_kilometers(self) -> int:
        return self.extra_kilometers_count * EXTRA_KM_PACKAGE_SIZE


@dataclass
class AdditionalFeaturesBreakdown:
    scdw_price: Decimal
    protection_cost: Decimal
    snow_chains_price: int
    child_seat_1to4_price: int
    child_seat_5to12_price: int
    extra_kilometers: int
    extra_kilometers_price: Decimal
    total_additional_features: Decimal
    total: Decimal


# ---------------------------------------------------------------------------
# Individual add-ons
# ---------------------------------------------------------------------------

def calculate_scdw(days: int, daily_rate: Number) -> Decimal:
    """SCDW insurance cost for ``days`` days at the reference ``daily_rate``."""
    base = to_decimal(daily_rate) * 2
    if days <= SCDW_BASE_DAYS:
        return base
    blocks = math.ceil((days - SCDW_BASE_DAYS) / SCDW_BLOCK_DAYS)
    return base + SCDW_FIRST_BLOCK_PRICE + SCDW_NEXT_BLOCK_PRICE * (blocks - 1)


def calculate_extra_kilometers_price(extra_km: int, price_per_50km: Number) -> Decimal:
    """Price of ``extra_km`` extra kilometres, billed per whole 50 km package."""
    extra_km = max(0, min(extra_km, MAX_EXTRA_KM))
    packages = extra_km // EXTRA_KM_PACKAGE_SIZE
    return packages * to_decimal(price_per_50km)


def included_kilometers(days: int, per_day: int = INCLUDED_KM_PER_DAY) -> int:
    return days * per_day


def resolve_warranty_amount(warranty: Optional[Number], vehicle_type: Optional[str]) -> Decimal:
    """The vehicle's warranty, or a fallback keyed on its type."""
    if warranty:
        return to_decimal(warranty)
    key = (vehicle_type or "standard").lower()
    return Decimal(WARRANTY_BY_VEHICLE_TYPE.get(key, DEFAULT_WARRANTY))


def resolve_deductible(scdw_selected: bool, warranty_amount: Number) -> Decimal:
    """Refundable deductible left by the customer; zero with SCDW."""
    if scdw_selected:
        return Decimal("0")
    return to_decimal(warranty_amount)


# ---------------------------------------------------------------------------
# Combined
# ---------------------------------------------------------------------------

def compute_additional_features_cost(
    selection: AdditionalFeaturesSelection,
    days: int,
    reference_daily_rate: Number,
    price_per_50km: Number = DEFAULT_ADDITIONAL_50KM_PRICE,
) -> AdditionalFeaturesBreakdown:
    """Cost of every selected add-on for a ``days``-day rental.

    ``scdw_price`` is always reported so it can be offered to the
    customer; it only counts towards the totals as ``protection_cost``
    when SCDW is selected.
    """
    scdw_price = calculate_scdw(days, reference_daily_rate)
    protection_cost = scdw_price if selection.scdw_selected else Decimal("0")

    snow_chains_price = days * SNOW_CHAINS_PRICE_PER_DAY if selection.snow_chains_selected else 0
    child_seat_1to4_price = selection.child_seat_1to4_count * days * CHILD_SEAT_PRICE_PER_DAY
    child_seat_5to12_price = selection.child_seat_5to12_count * days * CHILD_SEAT_PRICE_PER_DAY
    extra_kilometers_price = calculate_extra_kilometers_price(
        selection.extra_kilometers, price_per_50km
    )

    total_additional_features = (
        snow_chains_price
        + child_seat_1to4_price
        + child_seat_5to12_price
        + extra_kilometers_price
    )

    return AdditionalFeaturesBreakdown(
        scdw_price=scdw_price,
        protection_cost=protection_cost,
        snow_chains_price=snow_chains_price,
        child_seat_1to4_price=child_seat_1to4_price,
        child_seat_5to12_price=child_seat_5to12_price,
        extra_kilometers=selection.extra_kilometers,
        extra_kilometers_price=extra_kilometers_price,
        total_additional_features=total_additional_features,
        total=total_additional_features + protection_cost,
    )
