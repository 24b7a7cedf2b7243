"""
Shared pytest fixtures for carhire unit tests.

Provides a mock database session and sample ORM objects (built as
``MagicMock(spec=...)``) that mirror production models without a live
database connection.
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from carhire.algorithms.tierResolver import PricingTier, VehiclePricingInput
from carhire.models import CurrentSeason, Season, TransferPricingTier, Vehicle, VehicleClass


# ---------------------------------------------------------------------------
# Database session mock
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_db() -> AsyncMock:
    """Async mock of ``AsyncSession``.

    Supports ``db.execute()``, ``db.get()``, ``db.add()``, ``db.delete()``
    and ``db.flush()`` out of the box.  Individual tests configure
    ``mock_db.execute.return_value`` / ``mock_db.get.return_value`` to
    control query results.
    """
    session = AsyncMock()
    session.add = MagicMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.delete = AsyncMock()
    session.get = AsyncMock(return_value=None)
    return session


# ---------------------------------------------------------------------------
# Pure pricing records
# ---------------------------------------------------------------------------


TIERED_PRICING = (
    PricingTier(min_days=1, max_days=3, price_per_day=Decimal("50")),
    PricingTier(min_days=4, max_days=7, price_per_day=Decimal("40")),
    PricingTier(min_days=8, max_days=None, price_per_day=Decimal("30")),
)


@pytest.fixture
def tiered_vehicle() -> VehiclePricingInput:
    """Vehicle with tiers 1-3: 50, 4-7: 40, 8+: 30."""
    return VehiclePricingInput(vehicle_id=uuid.uuid4(), pricing_tiers=TIERED_PRICING)


@pytest.fixture
def flat_vehicle() -> VehiclePricingInput:
    return VehiclePricingInput(vehicle_id=uuid.uuid4(), price_per_day=Decimal("45"))


# ---------------------------------------------------------------------------
# ORM fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_vehicle_class() -> VehicleClass:
    vehicle_class = MagicMock(spec=VehicleClass)
    vehicle_class.id = uuid.uuid4()
    vehicle_class.name = "SUV"
    vehicle_class.additional_50km_price = Decimal("7")
    vehicle_class.transfer_base_fare = Decimal("30")
    vehicle_class.transfer_multiplier = Decimal("1.2")
    return vehicle_class


@pytest.fixture
def sample_vehicle(sample_vehicle_class: VehicleClass) -> Vehicle:
    """A tiered SUV: 1-3 days 50, 4-7 days 40, 8+ days 30."""
    vehicle = MagicMock(spec=Vehicle)
    vehicle.id = uuid.uuid4()
    vehicle.make = "Dacia"
    vehicle.model = "Duster"
    vehicle.type = "suv"
    vehicle.price_per_day = None
    vehicle.pricing_tiers = [
        {"minDays": 1, "maxDays": 3, "pricePerDay": 50},
        {"minDays": 4, "maxDays": 7, "pricePerDay": 40},
        {"minDays": 8, "maxDays": None, "pricePerDay": 30},
    ]
    vehicle.warranty = None
    vehicle.is_active = True
    vehicle.class_id = sample_vehicle_class.id
    vehicle.vehicle_class = sample_vehicle_class
    return vehicle


@pytest.fixture
def sample_season() -> Season:
    """An active summer season with a 1.5x multiplier."""
    season = MagicMock(spec=Season)
    season.id = uuid.uuid4()
    season.name = "High season"
    season.description = "Summer"
    season.multiplier = Decimal("1.5")
    season.periods = [{"startDate": "2025-06-01", "endDate": "2025-08-31", "description": None}]
    season.is_active = True
    season.created_at = datetime(2025, 1, 1, tzinfo=timezone.utc)
    return season


@pytest.fixture
def sample_current_season(sample_season: Season) -> CurrentSeason:
    current = MagicMock(spec=CurrentSeason)
    current.id = uuid.uuid4()
    current.season_id = sample_season.id
    current.season = sample_season
    current.set_at = datetime(2025, 5, 20, 9, 0, tzinfo=timezone.utc)
    current.set_by = "admin-1"
    return current


def _make_tier(min_km, max_km, price, sort_index=0, is_active=True) -> TransferPricingTier:
    tier = MagicMock(spec=TransferPricingTier)
    tier.id = uuid.uuid4()
    tier.min_extra_km = Decimal(str(min_km))
    tier.max_extra_km = Decimal(str(max_km)) if max_km is not None else None
    tier.price_per_km = Decimal(str(price))
    tier.sort_index = sort_index
    tier.is_active = is_active
    return tier


@pytest.fixture
def default_tiers() -> list[TransferPricingTier]:
    return [
        _make_tier(0, 25, "1.6", 0),
        _make_tier(25, 65, "1.2", 1),
        _make_tier(65, 185, "1.0", 2),
        _make_tier(185, 285, "0.97", 3),
        _make_tier(285, 385, "0.95", 4),
        _make_tier(385, None, "0.9", 5),
    ]


@pytest.fixture
def tier_factory():
    """Build a mocked ``TransferPricingTier`` row: ``tier_factory(min, max, price)``."""
    return _make_tier
