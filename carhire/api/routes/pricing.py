"""
Pricing API routes
==================

Endpoints for day-rental and transfer quotes.

  POST /api/v1/pricing/rental/quote       -- Quote a stored vehicle
  POST /api/v1/pricing/rental/calculate   -- Quote an inline vehicle (no lookups)
  GET  /api/v1/pricing/locations          -- Pickup / return location fees
  POST /api/v1/pricing/transfer/quote     -- Quote a transfer
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from carhire.algorithms.locationFees import list_locations
from carhire.algorithms.tierResolver import best_tier_savings
from carhire.algorithms.vehiclePricing import ReservationQuote, quote_day_rental
from carhire.api.deps import DBSession
from carhire.api.schemas.pricing import (
    LocationFeeOut,
    RentalCalculateRequest,
    RentalQuoteOut,
    RentalQuoteRequest,
    ReservationQuoteOut,
    TierSavingsOut,
    TransferQuoteOut,
    TransferQuoteRequest,
)
from carhire.core.config import settings
from carhire.services import rentalQuoteService, transferPricingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/pricing", tags=["Pricing"])


def _quote_out(quote: ReservationQuote) -> ReservationQuoteOut:
    return ReservationQuoteOut.model_validate(quote)


# ---------------------------------------------------------------------------
# POST /pricing/rental/quote
# ---------------------------------------------------------------------------

@router.post(
    "/rental/quote",
    response_model=RentalQuoteOut,
    summary="Quote a day rental of a stored vehicle",
    description=(
        "Prices the trip with the vehicle's tiers and the current season "
        "multiplier, plus the selected add-ons. Returns empty prices while "
        "the trip is incomplete or the return precedes the pickup."
    ),
)
async def quote_rental(body: RentalQuoteRequest, db: DBSession) -> RentalQuoteOut:
    try:
        rental = await rentalQuoteService.quote_rental(
            db=db,
            vehicle_id=body.vehicle_id,
            pickup_date=body.pickup_date,
            return_date=body.return_date,
            pickup_time=body.pickup_time,
            return_time=body.return_time,
            pickup_location=body.pickup_location,
            return_location=body.return_location,
            selection=body.additional_features.to_selection(),
        )
    except ValueError as exc:
        message = str(exc)
        if "not found" in message.lower():
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=message)
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=message
        )

    return RentalQuoteOut(
        vehicle_id=rental.vehicle_id,
        season_id=rental.season.season_id,
        season_name=rental.season.season_name,
        quote=_quote_out(rental.quote),
        savings=TierSavingsOut.model_validate(rental.savings) if rental.savings else None,
    )


# ---------------------------------------------------------------------------
# POST /pricing/rental/calculate
# ---------------------------------------------------------------------------

@router.post(
    "/rental/calculate",
    response_model=RentalQuoteOut,
    summary="Quote a day rental of an inline vehicle",
    description=(
        "Runs the pricing engine on the vehicle tiers and multiplier given in "
        "the body. Nothing is read from the database."
    ),
)
async def calculate_rental(body: RentalCalculateRequest) -> RentalQuoteOut:
    vehicle = body.vehicle.to_pricing_input()
    price_per_50km = body.vehicle.additional_50km_price
    if price_per_50km is None:
        price_per_50km = settings.default_additional_50km_price

    quote = quote_day_rental(
        vehicle,
        body.seasonal_multiplier,
        body.pickup_date,
        body.return_date,
        body.pickup_location,
        body.return_location,
        body.pickup_time,
        body.return_time,
        selection=body.additional_features.to_selection(),
        price_per_50km=price_per_50km,
        included_km_per_day=settings.included_km_per_day,
    )
    savings = best_tier_savings(vehicle, quote.price_details.days, body.seasonal_multiplier)
    return RentalQuoteOut(
        quote=_quote_out(quote),
        savings=TierSavingsOut.model_validate(savings) if savings else None,
    )


# ---------------------------------------------------------------------------
# GET /pricing/locations
# ---------------------------------------------------------------------------

@router.get(
    "/locations",
    response_model=list[LocationFeeOut],
    summary="List pickup / return locations and their fees",
)
async def get_locations() -> list[LocationFeeOut]:
    return [LocationFeeOut.model_validate(fee) for fee in list_locations()]


# ---------------------------------------------------------------------------
# POST /pricing/transfer/quote
# ---------------------------------------------------------------------------

@router.post(
    "/transfer/quote",
    response_model=TransferQuoteOut,
    summary="Quote a transfer",
    description=(
        "Base fare covers the first 15 km; the rest is priced with the active "
        "distance tier and the vehicle class multiplier, doubled for round trips. "
        "Amounts are rounded to cents."
    ),
)
async def quote_transfer(body: TransferQuoteRequest, db: DBSession) -> TransferQuoteOut:
    try:
        if body.vehicle_id is not None:
            result = await transferPricingService.calculate_transfer_price_by_vehicle(
                db=db,
                vehicle_id=body.vehicle_id,
                distance_km=body.distance_km,
                transfer_type=body.transfer_type,
            )
        else:
            result = await transferPricingService.calculate_transfer_price(
                db=db,
                distance_km=body.distance_km,
                transfer_type=body.transfer_type,
                class_id=body.class_id,
            )
    except ValueError as exc:
        message = str(exc)
        if "not found" in message.lower():
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=message)
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=message
        )

    return TransferQuoteOut(
        transfer_type=body.transfer_type,
        distance_km=body.distance_km,
        base_fare=result.base_fare,
        extra_km=result.extra_km,
        distance_charge=result.distance_charge,
        total_price=result.total_price,
        tier_price_per_km=result.tier_price_per_km,
    )
