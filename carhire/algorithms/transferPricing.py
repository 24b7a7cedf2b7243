"""
Transfer Pricing Resolver
=========================

Prices point-to-point transfers (one way or round trip):

    extra_km        = max(distance_km - 15, 0)
    distance_charge = extra_km * tier_price_per_km * class_multiplier
    total_price     = (base_fare + distance_charge) * (2 if round trip else 1)

The first 15 km are included in the base fare.  The per-km rate comes from
the active, admin-managed distance tier whose ``[min_extra_km,
max_extra_km)`` range contains ``extra_km``; without a match a default of
1.0 EUR/km applies.  All monetary outputs are rounded to cents.

Tier writes are validated here so that active tiers never overlap and the
lookup stays deterministic.
"""

from __future__ import annotations

import enum
import uuid
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Sequence

from .money import Number, round_cents, to_decimal, to_wire_number

BASE_KM_INCLUDED = Decimal("15")
DEFAULT_BASE_FARE = Decimal("25")
DEFAULT_TRANSFER_MULTIPLIER = Decimal("1.0")
DEFAULT_PRICE_PER_KM = Decimal("1.0")

# (min_extra_km, max_extra_km, price_per_km)
DEFAULT_TRANSFER_TIERS: tuple[tuple[int, Optional[int], Decimal], ...] = (
    (0, 25, Decimal("1.6")),
    (25, 65, Decimal("1.2")),
    (65, 185, Decimal("1.0")),
    (185, 285, Decimal("0.97")),
    (285, 385, Decimal("0.95")),
    (385, None, Decimal("0.9")),
)


class TransferType(str, enum.Enum):
    ONE_WAY = "one_way"
    ROUND_TRIP = "round_trip"


class TierValidationError(ValueError):
    """A transfer pricing tier write was rejected."""


# ---------------------------------------------------------------------------
# Input / output records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class VehicleClassPricing:
    """Pricing fields of a vehicle class; ``None`` means "use the default"."""

    class_id: Optional[uuid.UUID] = None
    additional_50km_price: Optional[Decimal] = None
    transfer_base_fare: Optional[Decimal] = None
    transfer_multiplier: Optional[Decimal] = None

    @property
    def base_fare(self) -> Decimal:
        if self.transfer_base_fare is None:
            return DEFAULT_BASE_FARE
        return to_decimal(self.transfer_base_fare)

    @property
    def multiplier(self) -> Decimal:
        if self.transfer_multiplier is None:
            return DEFAULT_TRANSFER_MULTIPLIER
        return to_decimal(self.transfer_multiplier)


@dataclass(frozen=True)
class TransferPricingTier:
    min_extra_km: Decimal
    max_extra_km: Optional[Decimal]
    price_per_km: Decimal
    sort_index: int = 0
    is_active: bool = True
    tier_id: Optional[uuid.UUID] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "min_extra_km", to_decimal(self.min_extra_km))
        if self.max_extra_km is not None:
            object.__setattr__(self, "max_extra_km", to_decimal(self.max_extra_km))
        object.__setattr__(self, "price_per_km", to_decimal(self.price_per_km))

    def contains(self, extra_km: Decimal) -> bool:
        return extra_km >= self.min_extra_km and (
            self.max_extra_km is None or extra_km < self.max_extra_km
        )

    def overlaps(self, min_extra_km: Decimal, max_extra_km: Optional[Decimal]) -> bool:
        own_max = self.max_extra_km
        # Half-open ranges; a missing max is unbounded.
        starts_before_own_end = own_max is None or min_extra_km < own_max
        ends_after_own_start = max_extra_km is None or max_extra_km > self.min_extra_km
        return starts_before_own_end and ends_after_own_start

    @property
    def label(self) -> str:
        return _range_label(self.min_extra_km, self.max_extra_km)


@dataclass
class TransferPriceResult:
    base_fare: Decimal
    extra_km: Decimal
    distance_charge: Decimal
    total_price: Decimal
    tier_price_per_km: Decimal


def _range_label(min_km: Number, max_km: Optional[Number]) -> str:
    upper = "∞" if max_km is None else str(to_wire_number(max_km))
    return f"{to_wire_number(min_km)}-{upper}"


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------

def find_tier(extra_km: Number, tiers: Sequence[TransferPricingTier]) -> Optional[TransferPricingTier]:
    """The active tier containing ``extra_km``, scanning by ascending ``min_extra_km``."""
    extra_km = to_decimal(extra_km)
    for tier in sorted(tiers, key=lambda t: t.min_extra_km):
        if tier.is_active and tier.contains(extra_km):
            return tier
    return None


def compute_transfer_price(
    distance_km: Number,
    vehicle_class: Optional[VehicleClassPricing],
    transfer_type: TransferType,
    tiers: Sequence[TransferPricingTier],
    default_price_per_km: Number = DEFAULT_PRICE_PER_KM,
    base_km_included: Number = BASE_KM_INCLUDED,
) -> TransferPriceResult:
    """Price a transfer of ``distance_km`` kilometres for a vehicle class."""
    vehicle_class = vehicle_class or VehicleClassPricing()
    transfer_type = TransferType(transfer_type)
    trips = 2 if transfer_type == TransferType.ROUND_TRIP else 1

    base_fare = vehicle_class.base_fare
    extra_km = max(to_decimal(distance_km) - to_decimal(base_km_included), Decimal("0"))

    if extra_km == 0:
        return TransferPriceResult(
            base_fare=round_cents(base_fare),
            extra_km=Decimal("0"),
            distance_charge=round_cents(0),
            total_price=round_cents(base_fare * trips),
            tier_price_per_km=round_cents(0),
        )

    tier = find_tier(extra_km, tiers)
    tier_price_per_km = tier.price_per_km if tier else to_decimal(default_price_per_km)

    distance_charge = extra_km * tier_price_per_km * vehicle_class.multiplier
    total_price = (base_fare + distance_charge) * trips

    return TransferPriceResult(
        base_fare=round_cents(base_fare),
        extra_km=extra_km,
        distance_charge=round_cents(distance_charge),
        total_price=round_cents(total_price),
        tier_price_per_km=round_cents(tier_price_per_km),
    )


# ---------------------------------------------------------------------------
# Tier write validation
# ---------------------------------------------------------------------------

def validate_tier_write(
    min_extra_km: Number,
    max_extra_km: Optional[Number],
    price_per_km: Optional[Number],
    existing: Sequence[TransferPricingTier],
    exclude_id: Optional[uuid.UUID] = None,
) -> None:
    """Reject an invalid tier before it is created or updated.

    ``existing`` holds every stored tier, active or not; ``exclude_id``
    skips the tier being updated.  ``price_per_km`` may be ``None`` on
    updates that leave the price untouched.

    Raises:
        TierValidationError: On a bad range, a non-positive price or an
                             overlap with another tier.
    """
    min_km = to_decimal(min_extra_km)
    max_km = to_decimal(max_extra_km) if max_extra_km is not None else None

    if min_km < 0:
        raise TierValidationError("Min KM must not be negative")
    if max_km is not None and max_km <= min_km:
        raise TierValidationError("Max KM must be greater than Min KM")
    if price_per_km is not None and to_decimal(price_per_km) <= 0:
        raise TierValidationError("Price per KM must be positive")

    for tier in existing:
        if exclude_id is not None and tier.tier_id == exclude_id:
            continue
        if tier.overlaps(min_km, max_km):
            raise TierValidationError(
                f"Range {_range_label(min_km, max_km)} overlaps with "
                f"existing tier {tier.label}"
            )
