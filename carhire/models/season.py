"""
SQLAlchemy models for seasons and the current_season pointer.
"""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, Numeric, String, Text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Season(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "seasons"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    multiplier: Mapped[Decimal] = mapped_column(Numeric(6, 3), nullable=False)
    # [{"startDate": "2024-06-01", "endDate": "2024-08-31", "description": "..."}]
    periods: Mapped[list[dict[str, Any]]] = mapped_column(JSONB, nullable=False, default=list)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    def __repr__(self) -> str:
        return f"<Season {self.name} x{self.multiplier}>"


class CurrentSeason(UUIDPrimaryKeyMixin, Base):
    """Singleton pointer to the season applied to reservation prices.

    At most one row exists: every row carries ``singleton = TRUE``, which is
    both unique and checked, so a second concurrent insert fails instead of
    leaving two pointers.  ``seasonService.set_current_season`` replaces the
    row.
    """

    __tablename__ = "current_season"
    __table_args__ = (
        CheckConstraint("singleton", name="ck_current_season_singleton"),
    )

    singleton: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default="true",
        unique=True,
    )

    season_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("seasons.id", ondelete="CASCADE"),
        nullable=False,
    )
    set_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    set_by: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    season: Mapped[Season] = relationship(lazy="selectin")
