"""
SQLAlchemy model for reservations.

The price columns are a snapshot taken when the reservation is created.
They are never recomputed, so later tier or season changes do not alter a
booked price.
"""

import enum
import uuid
from datetime import date
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy import Boolean, Date, Enum, ForeignKey, Integer, Numeric, String
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class ReservationStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class Reservation(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "reservations"

    vehicle_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("vehicles.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    status: Mapped[ReservationStatus] = mapped_column(
        Enum(ReservationStatus, name="reservation_status"),
        nullable=False,
        default=ReservationStatus.PENDING,
    )

    # Customer
    customer_name: Mapped[str] = mapped_column(String(200), nullable=False)
    customer_email: Mapped[str] = mapped_column(String(255), nullable=False)
    customer_phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    # Trip
    pickup_date: Mapped[date] = mapped_column(Date, nullable=False)
    return_date: Mapped[date] = mapped_column(Date, nullable=False)
    pickup_time: Mapped[str] = mapped_column(String(5), nullable=False)
    return_time: Mapped[str] = mapped_column(String(5), nullable=False)
    pickup_location: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    return_location: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    # Price snapshot (whole EUR)
    days: Mapped[int] = mapped_column(Integer, nullable=False)
    base_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    total_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    seasonal_multiplier: Mapped[Decimal] = mapped_column(Numeric(6, 3), nullable=False)
    is_scdw_selected: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    deductible_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    protection_cost: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    price_details: Mapped[dict[str, Any]] = mapped_column(JSONB, nullable=False)
    additional_features: Mapped[dict[str, Any]] = mapped_column(
        JSONB, nullable=False, default=dict
    )

    def __repr__(self) -> str:
        return f"<Reservation {self.id} {self.pickup_date}->{self.return_date} {self.total_price}>"
