"""
Carhire SQLAlchemy Models
=========================

Central import point for all ORM models. Import ``Base`` from here for
Alembic auto-generation and for the ``create_all`` convenience in tests.

Usage::

    from carhire.models import Base, Vehicle, Season, Reservation
"""

# -- Base & Mixins --
from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin

# -- Fleet --
from .vehicle import Vehicle, VehicleClass

# -- Seasons --
from .season import CurrentSeason, Season

# -- Transfers --
from .transfer import TransferPricingTier

# -- Reservations --
from .reservation import Reservation, ReservationStatus

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDPrimaryKeyMixin",
    "Vehicle",
    "VehicleClass",
    "Season",
    "CurrentSeason",
    "TransferPricingTier",
    "Reservation",
    "ReservationStatus",
]
