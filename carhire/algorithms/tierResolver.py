"""
Day-Range Tier Resolver
=======================

Selects the per-day rate of a vehicle from its day-range pricing tiers.

Two selection strategies are used by different callers:

  1. ``price_for_days`` -- the rate for a trip of a given length, taken
     from the tier whose ``[min_days, max_days]`` range covers the day
     count.  When several tiers cover it, the one with the highest
     ``min_days`` wins.
  2. ``base_price_per_day`` -- the entry-level rate (tier with the
     smallest ``min_days``).  This is the advertised "from" price and the
     cost basis of the SCDW insurance.

A vehicle without tiers is priced at its flat ``price_per_day`` (or 0).
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional, Sequence

from .money import Number, to_decimal
from .seasonalAdjuster import apply_seasonal_rate

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Input records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PricingTier:
    """A day-count range with its per-day rate.  ``max_days=None`` is open-ended."""

    min_days: int
    max_days: Optional[int]
    price_per_day: Decimal

    def __post_init__(self) -> None:
        if self.min_days < 1:
            raise ValueError(f"min_days must be at least 1 (got {self.min_days})")
        if self.max_days is not None and self.max_days < self.min_days:
            raise ValueError(
                f"max_days ({self.max_days}) must not be lower than "
                f"min_days ({self.min_days})"
            )
        price = to_decimal(self.price_per_day)
        if price < 0:
            raise ValueError(f"price_per_day must be non-negative (got {price})")
        object.__setattr__(self, "price_per_day", price)

    def covers(self, days: int) -> bool:
        return self.min_days <= days and (self.max_days is None or days <= self.max_days)


@dataclass(frozen=True)
class VehiclePricingInput:
    """The pricing-relevant subset of a vehicle."""

    vehicle_id: Optional[uuid.UUID] = None
    pricing_tiers: tuple[PricingTier, ...] = field(default_factory=tuple)
    price_per_day: Optional[Decimal] = None
    class_id: Optional[uuid.UUID] = None
    vehicle_type: Optional[str] = None
    warranty: Optional[Decimal] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "pricing_tiers", tuple(self.pricing_tiers))
        if self.price_per_day is not None:
            price = to_decimal(self.price_per_day)
            if price < 0:
                raise ValueError(f"price_per_day must be non-negative (got {price})")
            object.__setattr__(self, "price_per_day", price)
        if self.warranty is not None:
            object.__setattr__(self, "warranty", to_decimal(self.warranty))

    @property
    def flat_rate(self) -> Decimal:
        return self.price_per_day if self.price_per_day is not None else Decimal("0")


@dataclass
class TierSavings:
    """A cheaper per-day rate unlocked by renting for longer."""

    savings_per_day: int
    min_days_for_best: int
    lowest_price_per_day: int


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------

def build_tiers(raw_tiers: Sequence[dict]) -> tuple[PricingTier, ...]:
    """Build tier records from stored JSON (``minDays``/``maxDays``/``pricePerDay``)."""
    tiers = []
    for raw in raw_tiers:
        tiers.append(PricingTier(
            min_days=int(raw["minDays"]),
            max_days=int(raw["maxDays"]) if raw.get("maxDays") is not None else None,
            price_per_day=to_decimal(raw["pricePerDay"]),
        ))
    return tuple(tiers)


def price_for_days(vehicle: VehiclePricingInput, days: int) -> Decimal:
    """Per-day rate for a trip of ``days`` days (selection strategy 1).

    Fallbacks when no tier covers ``days``:
      - beyond every finite ``max_days``: the highest-range tier applies;
      - a gap in the tier table: the flat ``price_per_day`` (or 0), logged
        as a data-integrity warning.
    """
    tiers = vehicle.pricing_tiers
    if not tiers:
        return vehicle.flat_rate

    covering = [t for t in tiers if t.covers(days)]
    if covering:
        return max(covering, key=lambda t: t.min_days).price_per_day

    highest = max(tiers, key=lambda t: t.min_days)
    if all(t.max_days is not None and days > t.max_days for t in tiers):
        return highest.price_per_day

    logger.warning(
        "No pricing tier covers %d day(s) for vehicle %s; falling back to flat rate %s",
        days,
        vehicle.vehicle_id,
        vehicle.flat_rate,
    )
    return vehicle.flat_rate


def base_price_per_day(vehicle: VehiclePricingInput) -> Decimal:
    """Entry-level daily rate: the tier with the smallest ``min_days`` (strategy 2)."""
    if not vehicle.pricing_tiers:
        return vehicle.flat_rate
    return min(vehicle.pricing_tiers, key=lambda t: t.min_days).price_per_day


def best_tier_savings(
    vehicle: VehiclePricingInput,
    days: Optional[int],
    multiplier: Number = 1,
) -> Optional[TierSavings]:
    """Return the cheapest seasonal tier rate if it beats the current one.

    With no day count the current rate is the seasonally adjusted
    entry-level rate.  Returns ``None`` for vehicles with fewer than two
    tiers or when no tier is cheaper.
    """
    if len(vehicle.pricing_tiers) <= 1:
        return None

    if days:
        current = apply_seasonal_rate(price_for_days(vehicle, days), multiplier)
    else:
        current = apply_seasonal_rate(base_price_per_day(vehicle), multiplier)

    # Tiers in table order; the first tier reaching the lowest rate wins.
    prices = [
        (tier.min_days, apply_seasonal_rate(price_for_days(vehicle, tier.min_days), multiplier))
        for tier in vehicle.pricing_tiers
    ]
    lowest = min(price for _, price in prices)
    savings = current - lowest
    if savings <= 0:
        return None

    min_days = next(min_days for min_days, price in prices if price == lowest)
    return TierSavings(
        savings_per_day=savings,
        min_days_for_best=min_days,
        lowest_price_per_day=lowest,
    )
