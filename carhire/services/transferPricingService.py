"""
Transfer Pricing Service
========================

Admin management of the global transfer distance tiers and transfer
quotes for a vehicle class or a specific vehicle.

Every tier write goes through ``transferPricing.validate_tier_write`` so
stored tiers never overlap and the per-km lookup stays deterministic.
"""

from __future__ import annotations

import logging
import uuid
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from carhire.algorithms import transferPricing
from carhire.algorithms.transferPricing import TransferPriceResult, TransferType
from carhire.core.config import settings
from carhire.models import TransferPricingTier, Vehicle, VehicleClass

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# ORM -> pricing records
# ---------------------------------------------------------------------------

def to_tier_record(tier: TransferPricingTier) -> transferPricing.TransferPricingTier:
    return transferPricing.TransferPricingTier(
        min_extra_km=tier.min_extra_km,
        max_extra_km=tier.max_extra_km,
        price_per_km=tier.price_per_km,
        sort_index=tier.sort_index,
        is_active=tier.is_active,
        tier_id=tier.id,
    )


def to_class_record(vehicle_class: Optional[VehicleClass]) -> transferPricing.VehicleClassPricing:
    """Pricing fields of a class, with configured defaults for missing values."""
    if vehicle_class is None:
        return transferPricing.VehicleClassPricing(
            transfer_base_fare=settings.default_transfer_base_fare,
            transfer_multiplier=settings.default_transfer_multiplier,
            additional_50km_price=settings.default_additional_50km_price,
        )

    def _or_default(value: Optional[Decimal], default: Decimal) -> Decimal:
        return default if value is None else value

    return transferPricing.VehicleClassPricing(
        class_id=vehicle_class.id,
        additional_50km_price=_or_default(
            vehicle_class.additional_50km_price, settings.default_additional_50km_price
        ),
        transfer_base_fare=_or_default(
            vehicle_class.transfer_base_fare, settings.default_transfer_base_fare
        ),
        transfer_multiplier=_or_default(
            vehicle_class.transfer_multiplier, settings.default_transfer_multiplier
        ),
    )


# ---------------------------------------------------------------------------
# Tier CRUD
# ---------------------------------------------------------------------------

async def list_tiers(db: AsyncSession, active_only: bool = False) -> list[TransferPricingTier]:
    stmt = select(TransferPricingTier)
    if active_only:
        stmt = stmt.where(TransferPricingTier.is_active.is_(True))
    stmt = stmt.order_by(TransferPricingTier.sort_index, TransferPricingTier.min_extra_km)
    result = await db.execute(stmt)
    return list(result.scalars().all())


def _next_sort_index(tiers: list[TransferPricingTier]) -> int:
    return max((t.sort_index for t in tiers), default=-1) + 1


async def create_tier(
    db: AsyncSession,
    min_extra_km: Decimal,
    max_extra_km: Optional[Decimal],
    price_per_km: Decimal,
    sort_index: Optional[int] = None,
    is_active: bool = True,
) -> TransferPricingTier:
    """Create a tier after checking it against every stored tier.

    Raises:
        TierValidationError: On a bad range, a non-positive price or an
                             overlap with an existing tier.
    """
    existing = await list_tiers(db)
    transferPricing.validate_tier_write(
        min_extra_km,
        max_extra_km,
        price_per_km,
        [to_tier_record(t) for t in existing],
    )

    tier = TransferPricingTier(
        min_extra_km=min_extra_km,
        max_extra_km=max_extra_km,
        price_per_km=price_per_km,
        sort_index=_next_sort_index(existing) if sort_index is None else sort_index,
        is_active=is_active,
    )
    db.add(tier)
    await db.flush()

    logger.info(
        "Transfer tier created: %s range=%s price_per_km=%s",
        tier.id,
        to_tier_record(tier).label,
        price_per_km,
    )
    return tier


async def update_tier(
    db: AsyncSession,
    tier_id: uuid.UUID,
    changes: dict[str, Any],
) -> TransferPricingTier:
    """Apply a partial update to a tier.

    ``changes`` holds only the fields being changed; an explicit ``None``
    for ``max_extra_km`` makes the tier unbounded.

    Raises:
        ValueError: If the tier does not exist.
        TierValidationError: If the updated range or price is invalid.
    """
    tier = await db.get(TransferPricingTier, tier_id)
    if tier is None:
        raise ValueError(f"Transfer pricing tier {tier_id} not found")

    min_extra_km = changes.get("min_extra_km", tier.min_extra_km)
    max_extra_km = changes["max_extra_km"] if "max_extra_km" in changes else tier.max_extra_km

    existing = await list_tiers(db)
    transferPricing.validate_tier_write(
        min_extra_km,
        max_extra_km,
        changes.get("price_per_km"),
        [to_tier_record(t) for t in existing],
        exclude_id=tier.id,
    )

    for field in ("min_extra_km", "max_extra_km", "price_per_km", "sort_index", "is_active"):
        if field in changes:
            setattr(tier, field, changes[field])
    await db.flush()

    logger.info("Transfer tier updated: %s fields=%s", tier_id, sorted(changes))
    return tier


async def delete_tier(db: AsyncSession, tier_id: uuid.UUID) -> None:
    tier = await db.get(TransferPricingTier, tier_id)
    if tier is None:
        raise ValueError(f"Transfer pricing tier {tier_id} not found")
    await db.delete(tier)
    await db.flush()
    logger.info("Transfer tier deleted: %s", tier_id)


async def seed_default_tiers(db: AsyncSession) -> list[TransferPricingTier]:
    """Insert the default distance tiers when no tier exists yet.

    Existing tiers are left untouched and returned as they are.
    """
    result = await db.execute(select(func.count()).select_from(TransferPricingTier))
    if result.scalar_one() > 0:
        logger.info("Transfer tiers already present; skipping default seed")
        return await list_tiers(db)

    tiers = []
    for index, (min_km, max_km, price) in enumerate(transferPricing.DEFAULT_TRANSFER_TIERS):
        tier = TransferPricingTier(
            min_extra_km=Decimal(min_km),
            max_extra_km=Decimal(max_km) if max_km is not None else None,
            price_per_km=price,
            sort_index=index,
            is_active=True,
        )
        db.add(tier)
        tiers.append(tier)
    await db.flush()

    logger.info("Seeded %d default transfer tiers", len(tiers))
    return tiers


# ---------------------------------------------------------------------------
# Quotes
# ---------------------------------------------------------------------------

async def _price(
    db: AsyncSession,
    distance_km: Decimal,
    vehicle_class: Optional[VehicleClass],
    transfer_type: TransferType,
) -> TransferPriceResult:
    tiers = await list_tiers(db, active_only=True)
    return transferPricing.compute_transfer_price(
        distance_km,
        to_class_record(vehicle_class),
        transfer_type,
        [to_tier_record(t) for t in tiers],
        default_price_per_km=settings.default_price_per_km,
        base_km_included=settings.transfer_base_km_included,
    )


async def calculate_transfer_price(
    db: AsyncSession,
    distance_km: Decimal,
    transfer_type: TransferType,
    class_id: Optional[uuid.UUID] = None,
) -> TransferPriceResult:
    """Quote a transfer for a vehicle class (defaults when ``class_id`` is None).

    Raises:
        ValueError: If ``class_id`` does not exist.
    """
    vehicle_class = None
    if class_id is not None:
        vehicle_class = await db.get(VehicleClass, class_id)
        if vehicle_class is None:
            raise ValueError(f"Vehicle class {class_id} not found")

    result = await _price(db, distance_km, vehicle_class, transfer_type)
    logger.debug(
        "Transfer quote: class=%s distance=%s type=%s total=%s",
        class_id,
        distance_km,
        transfer_type,
        result.total_price,
    )
    return result


async def calculate_transfer_price_by_vehicle(
    db: AsyncSession,
    vehicle_id: uuid.UUID,
    distance_km: Decimal,
    transfer_type: TransferType,
) -> TransferPriceResult:
    """Quote a transfer using the class of ``vehicle_id``.

    A vehicle without a class is priced with the default fare and multiplier.

    Raises:
        ValueError: If the vehicle does not exist.
    """
    vehicle = await db.get(Vehicle, vehicle_id)
    if vehicle is None:
        raise ValueError(f"Vehicle {vehicle_id} not found")
    return await _price(db, distance_km, vehicle.vehicle_class, transfer_type)
