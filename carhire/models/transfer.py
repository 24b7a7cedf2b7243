"""
SQLAlchemy model for transfer_pricing_tiers (distance bands over the
kilometres beyond the base distance included in a transfer fare).
"""

from decimal import Decimal
from typing import Optional

from sqlalchemy import Boolean, Integer, Numeric
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class TransferPricingTier(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "transfer_pricing_tiers"

    min_extra_km: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    # NULL = unbounded
    max_extra_km: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)
    price_per_km: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    sort_index: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    def __repr__(self) -> str:
        upper = "inf" if self.max_extra_km is None else self.max_extra_km
        return f"<TransferPricingTier {self.min_extra_km}-{upper} @ {self.price_per_km}>"
