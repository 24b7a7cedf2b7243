"""
Rental Quote Service
====================

Feeds stored vehicles, classes and the current-season pointer into the
pure day-rental engine, and persists the resulting quote on reservations.

The reservation stores the quote as a snapshot.  It is never recomputed,
so a booked price survives later tier or season changes.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import date
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from carhire.algorithms.additionalFeatures import AdditionalFeaturesSelection
from carhire.algorithms.seasonalAdjuster import MultiplierResult
from carhire.algorithms.tierResolver import (
    TierSavings,
    VehiclePricingInput,
    best_tier_savings,
    build_tiers,
)
from carhire.algorithms.vehiclePricing import ReservationQuote, quote_day_rental
from carhire.core.config import settings
from carhire.models import Reservation, Vehicle
from carhire.services import seasonService
from carhire.services.transferPricingService import to_class_record

logger = logging.getLogger(__name__)


@dataclass
class RentalQuote:
    vehicle_id: uuid.UUID
    quote: ReservationQuote
    season: MultiplierResult
    savings: Optional[TierSavings] = None


def to_pricing_input(vehicle: Vehicle) -> VehiclePricingInput:
    """Pricing-relevant subset of a stored vehicle.

    Raises:
        ValueError: If the stored tiers are malformed.
    """
    try:
        tiers = build_tiers(vehicle.pricing_tiers or [])
    except (KeyError, TypeError) as exc:
        raise ValueError(f"Vehicle {vehicle.id} has malformed pricing tiers: {exc}") from exc
    return VehiclePricingInput(
        vehicle_id=vehicle.id,
        pricing_tiers=tiers,
        price_per_day=vehicle.price_per_day,
        class_id=vehicle.class_id,
        vehicle_type=vehicle.type,
        warranty=vehicle.warranty,
    )


async def get_vehicle(db: AsyncSession, vehicle_id: uuid.UUID) -> Vehicle:
    vehicle = await db.get(Vehicle, vehicle_id)
    if vehicle is None:
        raise ValueError(f"Vehicle {vehicle_id} not found")
    return vehicle


async def quote_rental(
    db: AsyncSession,
    vehicle_id: uuid.UUID,
    pickup_date: date,
    return_date: date,
    pickup_time: str,
    return_time: str,
    pickup_location: Optional[str] = None,
    return_location: Optional[str] = None,
    selection: Optional[AdditionalFeaturesSelection] = None,
) -> RentalQuote:
    """Quote a day rental of a stored vehicle at the current-season multiplier.

    Raises:
        ValueError: If the vehicle does not exist.
    """
    vehicle = await get_vehicle(db, vehicle_id)
    pricing_input = to_pricing_input(vehicle)
    vehicle_class = to_class_record(vehicle.vehicle_class)
    season = await seasonService.get_current_multiplier(db)

    quote = quote_day_rental(
        pricing_input,
        season.multiplier,
        pickup_date,
        return_date,
        pickup_location,
        return_location,
        pickup_time,
        return_time,
        selection=selection,
        price_per_50km=vehicle_class.additional_50km_price,
        included_km_per_day=settings.included_km_per_day,
    )
    savings = best_tier_savings(pricing_input, quote.price_details.days, season.multiplier)
    return RentalQuote(vehicle_id=vehicle.id, quote=quote, season=season, savings=savings)


async def create_reservation(
    db: AsyncSession,
    vehicle_id: uuid.UUID,
    customer_name: str,
    customer_email: str,
    pickup_date: date,
    return_date: date,
    pickup_time: str,
    return_time: str,
    pickup_location: Optional[str] = None,
    return_location: Optional[str] = None,
    selection: Optional[AdditionalFeaturesSelection] = None,
    customer_phone: Optional[str] = None,
) -> Reservation:
    """Price the rental and store it with its quote snapshot.

    Raises:
        ValueError: If the vehicle does not exist or the trip cannot be
                    priced (return before pickup).
    """
    selection = selection or AdditionalFeaturesSelection()
    rental = await quote_rental(
        db,
        vehicle_id,
        pickup_date,
        return_date,
        pickup_time,
        return_time,
        pickup_location,
        return_location,
        selection,
    )
    quote = rental.quote
    details = quote.price_details
    if details.is_empty:
        raise ValueError("Return date must not precede pickup date")

    wire = quote.as_wire()
    reservation = Reservation(
        vehicle_id=vehicle_id,
        customer_name=customer_name,
        customer_email=customer_email,
        customer_phone=customer_phone,
        pickup_date=pickup_date,
        return_date=return_date,
        pickup_time=pickup_time,
        return_time=return_time,
        pickup_location=pickup_location,
        return_location=return_location,
        days=details.days,
        base_price=details.base_price,
        total_price=quote.total_price,
        seasonal_multiplier=details.seasonal_multiplier,
        is_scdw_selected=quote.is_scdw_selected,
        deductible_amount=quote.deductible_amount,
        protection_cost=quote.protection_cost,
        price_details=wire,
        additional_features={
            "scdwSelected": selection.scdw_selected,
            "snowChainsSelected": selection.snow_chains_selected,
            "childSeat1to4Count": selection.child_seat_1to4_count,
            "childSeat5to12Count": selection.child_seat_5to12_count,
            "extraKilometersCount": selection.extra_kilometers_count,
        },
    )
    db.add(reservation)
    await db.flush()

    logger.info(
        "Reservation created: %s vehicle=%s days=%d total=%s season=%s",
        reservation.id,
        vehicle_id,
        details.days,
        wire["totalPrice"],
        rental.season.season_name or "base",
    )
    return reservation


async def get_reservation(db: AsyncSession, reservation_id: uuid.UUID) -> Reservation:
    reservation = await db.get(Reservation, reservation_id)
    if reservation is None:
        raise ValueError(f"Reservation {reservation_id} not found")
    return reservation
