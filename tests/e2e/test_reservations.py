"""
E2E tests for reservations.

Tests the booking flow through the HTTP API:
1. Admin sets the current season
2. Customer books a vehicle with SCDW
3. The stored price snapshot survives later season changes
"""

from __future__ import annotations

import uuid
from decimal import Decimal

import pytest
from httpx import AsyncClient

from tests.e2e.conftest import SUMMER_SEASON_ID, TIERED_VEHICLE_ID

pytestmark = pytest.mark.asyncio

RESERVATIONS_URL = "/api/v1/reservations"


def _booking(**overrides) -> dict:
    body = {
        "vehicle_id": str(TIERED_VEHICLE_ID),
        "customer_name": "Ana Pop",
        "customer_email": "ana.pop@example.com",
        "customer_phone": "+40 700 000 000",
        "pickup_date": "2025-03-03",
        "return_date": "2025-03-10",
        "pickup_time": "10:00",
        "return_time": "10:00",
        "pickup_location": "Cluj-Napoca",
        "return_location": "Aeroport Cluj-Napoca",
        "additional_features": {"scdw_selected": True},
    }
    body.update(overrides)
    return body


class TestReservationBooking:

    async def test_booking_in_season_with_scdw(self, client: AsyncClient, admin_headers: dict):
        await client.put(
            "/api/v1/seasons/current",
            json={"season_id": str(SUMMER_SEASON_ID)},
            headers=admin_headers,
        )

        resp = await client.post(RESERVATIONS_URL, json=_booking())
        assert resp.status_code == 201, resp.text
        data = resp.json()

        assert data["status"] == "pending"
        assert data["days"] == 7
        assert Decimal(data["base_price"]) == 420
        assert Decimal(data["total_price"]) == 541
        assert Decimal(data["seasonal_multiplier"]) == Decimal("1.5")
        assert data["is_scdw_selected"] is True
        assert Decimal(data["protection_cost"]) == 111
        assert Decimal(data["deductible_amount"]) == 0

        snapshot = data["price_details"]
        assert snapshot["totalPrice"] == 541
        assert snapshot["seasonalMultiplier"] == 1.5
        assert snapshot["scdwPrice"] == 111
        assert data["additional_features"]["scdwSelected"] is True

    async def test_snapshot_survives_season_change(
        self, client: AsyncClient, admin_headers: dict
    ):
        await client.put(
            "/api/v1/seasons/current",
            json={"season_id": str(SUMMER_SEASON_ID)},
            headers=admin_headers,
        )
        created = (await client.post(RESERVATIONS_URL, json=_booking())).json()

        resp = await client.delete("/api/v1/seasons/current", headers=admin_headers)
        assert resp.status_code == 204

        resp = await client.get(f"{RESERVATIONS_URL}/{created['id']}")
        assert resp.status_code == 200
        stored = resp.json()
        assert Decimal(stored["total_price"]) == 541
        assert stored["price_details"] == created["price_details"]

        # A new booking is priced at the base rate
        fresh = (await client.post(RESERVATIONS_URL, json=_booking())).json()
        assert Decimal(fresh["total_price"]) == 290 + 111

    async def test_booking_without_scdw_keeps_deductible(self, client: AsyncClient):
        resp = await client.post(
            RESERVATIONS_URL, json=_booking(additional_features={"snow_chains_selected": True})
        )
        data = resp.json()
        assert data["is_scdw_selected"] is False
        assert Decimal(data["deductible_amount"]) == 800
        assert Decimal(data["total_price"]) == 290 + 21

    async def test_return_before_pickup_returns_422(self, client: AsyncClient):
        resp = await client.post(RESERVATIONS_URL, json=_booking(return_date="2025-03-01"))
        assert resp.status_code == 422

    async def test_invalid_email_returns_422(self, client: AsyncClient):
        resp = await client.post(RESERVATIONS_URL, json=_booking(customer_email="nobody"))
        assert resp.status_code == 422

    async def test_unknown_vehicle_returns_404(self, client: AsyncClient):
        resp = await client.post(RESERVATIONS_URL, json=_booking(vehicle_id=str(uuid.uuid4())))
        assert resp.status_code == 404

    async def test_unknown_reservation_returns_404(self, client: AsyncClient):
        resp = await client.get(f"{RESERVATIONS_URL}/{uuid.uuid4()}")
        assert resp.status_code == 404
