"""
Transfer pricing tier routes
============================

Admin management of the distance tiers used to price transfers.

  GET    /api/v1/transfer-pricing/tiers              -- List tiers
  POST   /api/v1/transfer-pricing/tiers              -- Create a tier (admin)
  PATCH  /api/v1/transfer-pricing/tiers/{tier_id}    -- Update a tier (admin)
  DELETE /api/v1/transfer-pricing/tiers/{tier_id}    -- Delete a tier (admin)
  POST   /api/v1/transfer-pricing/tiers/seed         -- Insert default tiers (admin)
"""

from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, HTTPException, Query, status

from carhire.algorithms.transferPricing import TierValidationError
from carhire.api.deps import AdminUser, DBSession
from carhire.api.schemas.transfer import CreateTierRequest, TierOut, UpdateTierRequest
from carhire.services import transferPricingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/transfer-pricing", tags=["Transfer Pricing"])


def _to_http_error(exc: ValueError) -> HTTPException:
    message = str(exc)
    if "not found" in message.lower():
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=message)
    if isinstance(exc, TierValidationError) and "overlaps" in message:
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=message)
    return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=message)


@router.get(
    "/tiers",
    response_model=list[TierOut],
    summary="List transfer pricing tiers",
)
async def list_tiers(
    db: DBSession,
    active_only: bool = Query(default=False, description="Only return active tiers"),
) -> list[TierOut]:
    tiers = await transferPricingService.list_tiers(db, active_only=active_only)
    return [TierOut.model_validate(t) for t in tiers]


@router.post(
    "/tiers",
    response_model=TierOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create a transfer pricing tier",
    description="Rejects ranges overlapping any stored tier (409) and non-positive prices (422).",
)
async def create_tier(body: CreateTierRequest, db: DBSession, admin: AdminUser) -> TierOut:
    try:
        tier = await transferPricingService.create_tier(
            db,
            min_extra_km=body.min_extra_km,
            max_extra_km=body.max_extra_km,
            price_per_km=body.price_per_km,
            sort_index=body.sort_index,
            is_active=body.is_active,
        )
    except ValueError as exc:
        raise _to_http_error(exc)
    return TierOut.model_validate(tier)


@router.post(
    "/tiers/seed",
    response_model=list[TierOut],
    summary="Insert the default transfer tiers",
    description="Does nothing when tiers already exist.",
)
async def seed_tiers(db: DBSession, admin: AdminUser) -> list[TierOut]:
    tiers = await transferPricingService.seed_default_tiers(db)
    return [TierOut.model_validate(t) for t in tiers]


@router.patch(
    "/tiers/{tier_id}",
    response_model=TierOut,
    summary="Update a transfer pricing tier",
    description="Only the fields present in the body are changed; send max_extra_km=null to unbound the tier.",
)
async def update_tier(
    tier_id: uuid.UUID,
    body: UpdateTierRequest,
    db: DBSession,
    admin: AdminUser,
) -> TierOut:
    # Only max_extra_km may be explicitly cleared
    changes = {
        key: value
        for key, value in body.model_dump(exclude_unset=True).items()
        if value is not None or key == "max_extra_km"
    }
    try:
        tier = await transferPricingService.update_tier(db, tier_id, changes)
    except ValueError as exc:
        raise _to_http_error(exc)
    return TierOut.model_validate(tier)


@router.delete(
    "/tiers/{tier_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a transfer pricing tier",
)
async def delete_tier(tier_id: uuid.UUID, db: DBSession, admin: AdminUser) -> None:
    try:
        await transferPricingService.delete_tier(db, tier_id)
    except ValueError as exc:
        raise _to_http_error(exc)
