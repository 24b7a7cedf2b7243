"""
Reservation API routes
======================

  POST /api/v1/reservations                  -- Book with a price snapshot
  GET  /api/v1/reservations/{reservation_id} -- Reservation and its snapshot
"""

from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, HTTPException, status

from carhire.api.deps import DBSession
from carhire.api.schemas.reservation import CreateReservationRequest, ReservationOut
from carhire.services import rentalQuoteService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reservations", tags=["Reservations"])


@router.post(
    "",
    response_model=ReservationOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create a reservation",
    description=(
        "Prices the rental at the current season and stores the quote with the "
        "reservation. The stored price is never recalculated."
    ),
)
async def create_reservation(body: CreateReservationRequest, db: DBSession) -> ReservationOut:
    try:
        reservation = await rentalQuoteService.create_reservation(
            db=db,
            vehicle_id=body.vehicle_id,
            customer_name=body.customer_name,
            customer_email=body.customer_email,
            customer_phone=body.customer_phone,
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
    return ReservationOut.model_validate(reservation)


@router.get(
    "/{reservation_id}",
    response_model=ReservationOut,
    summary="Get a reservation",
)
async def get_reservation(reservation_id: uuid.UUID, db: DBSession) -> ReservationOut:
    try:
        reservation = await rentalQuoteService.get_reservation(db, reservation_id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    return ReservationOut.model_validate(reservation)
