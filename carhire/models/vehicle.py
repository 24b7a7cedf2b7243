"""
SQLAlchemy models for vehicle_classes and vehicles.

Only the columns the pricing engine reads are modelled here; the catalogue
itself (images, descriptions, ordering) is managed elsewhere.
"""

import uuid
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy import Boolean, ForeignKey, Numeric, String
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class VehicleClass(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "vehicle_classes"

    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    # NULL pricing columns fall back to the configured defaults
    additional_50km_price: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(10, 2), nullable=True, default=Decimal("5")
    )
    transfer_base_fare: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(10, 2), nullable=True, default=Decimal("25")
    )
    transfer_multiplier: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(6, 3), nullable=True, default=Decimal("1.0")
    )

    vehicles: Mapped[list["Vehicle"]] = relationship(back_populates="vehicle_class")

    def __repr__(self) -> str:
        return f"<VehicleClass {self.name}>"


class Vehicle(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "vehicles"

    make: Mapped[str] = mapped_column(String(100), nullable=False)
    model: Mapped[str] = mapped_column(String(100), nullable=False)
    type: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    # Flat rate used when the vehicle has no tiers
    price_per_day: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)
    # [{"minDays": 1, "maxDays": 3, "pricePerDay": 50}, ...]
    pricing_tiers: Mapped[list[dict[str, Any]]] = mapped_column(
        JSONB, nullable=False, default=list
    )
    warranty: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    class_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("vehicle_classes.id", ondelete="SET NULL"),
        nullable=True,
    )
    vehicle_class: Mapped[Optional[VehicleClass]] = relationship(
        back_populates="vehicles", lazy="selectin"
    )

    def __repr__(self) -> str:
        return f"<Vehicle {self.make} {self.model}>"
