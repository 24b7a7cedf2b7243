"""
E2E test fixtures for the carhire backend.

Provides:
- An in-memory SQLite database (aiosqlite) with every table created
- Seed data: vehicle classes, vehicles, a summer season, default transfer tiers
- httpx AsyncClient wired to the FastAPI app via ASGI transport
- Admin bearer-token headers
"""

from __future__ import annotations

import uuid
from decimal import Decimal
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.pool import StaticPool

from carhire.core.security import create_admin_token
from carhire.models import Base, Season, Vehicle, VehicleClass
from carhire.services import transferPricingService


@compiles(JSONB, "sqlite")
def compile_jsonb_sqlite(type_, compiler, **kw):
    return "JSON"


# A bare UUID column gets NUMERIC affinity in SQLite, which mangles all-digit hex
@compiles(UUID, "sqlite")
def compile_uuid_sqlite(type_, compiler, **kw):
    return "CHAR(32)"


# ---------------------------------------------------------------------------
# Stable IDs
# ---------------------------------------------------------------------------

SUV_CLASS_ID = uuid.UUID("11111111-1111-1111-1111-111111111111")
TIERED_VEHICLE_ID = uuid.UUID("22222222-2222-2222-2222-222222222222")
FLAT_VEHICLE_ID = uuid.UUID("33333333-3333-3333-3333-333333333333")
SUMMER_SEASON_ID = uuid.UUID("44444444-4444-4444-4444-444444444444")


# ---------------------------------------------------------------------------
# Async engine + session (in-memory SQLite, one database per test)
# ---------------------------------------------------------------------------

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    engine = create_async_engine(TEST_DB_URL, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session
        await session.rollback()

    await engine.dispose()


# ---------------------------------------------------------------------------
# Seed data
# ---------------------------------------------------------------------------

async def _seed_data(db: AsyncSession) -> None:
    suv = VehicleClass(
        id=SUV_CLASS_ID,
        name="SUV",
        additional_50km_price=Decimal("7"),
        transfer_base_fare=Decimal("30"),
        transfer_multiplier=Decimal("1.2"),
    )
    tiered = Vehicle(
        id=TIERED_VEHICLE_ID,
        make="Dacia",
        model="Duster",
        type="suv",
        pricing_tiers=[
            {"minDays": 1, "maxDays": 3, "pricePerDay": 50},
            {"minDays": 4, "maxDays": 7, "pricePerDay": 40},
            {"minDays": 8, "maxDays": None, "pricePerDay": 30},
        ],
        vehicle_class=suv,
    )
    flat = Vehicle(
        id=FLAT_VEHICLE_ID,
        make="Renault",
        model="Clio",
        type="economy",
        price_per_day=Decimal("35"),
        pricing_tiers=[],
        vehicle_class=None,
    )
    summer = Season(
        id=SUMMER_SEASON_ID,
        name="High season",
        description="Summer",
        multiplier=Decimal("1.5"),
        periods=[{"startDate": "2025-06-01", "endDate": "2025-08-31", "description": None}],
        is_active=True,
    )
    db.add_all([suv, tiered, flat, summer])
    await db.flush()

    await transferPricingService.seed_default_tiers(db)


@pytest_asyncio.fixture
async def seeded_db(db_session: AsyncSession) -> AsyncSession:
    await _seed_data(db_session)
    return db_session


# ---------------------------------------------------------------------------
# FastAPI client
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def client(seeded_db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """httpx AsyncClient talking to the app, with the DB dependency overridden."""
    from carhire.api.deps import get_db
    from carhire.main import app

    async def _override_get_db():
        yield seeded_db

    app.dependency_overrides[get_db] = _override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {create_admin_token('admin-1')}"}
