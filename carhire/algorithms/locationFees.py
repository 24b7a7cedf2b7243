"""
Pickup / return location fees.

Flat EUR delivery fee per named location.  Lookup is an exact,
case-sensitive name match; unknown or empty names cost nothing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LocationFee:
    name: str
    price: int


LOCATION_FEES: tuple[LocationFee, ...] = (
    LocationFee("Aeroport Cluj-Napoca", 0),
    LocationFee("Alba-Iulia", 80),
    LocationFee("Bacau", 220),
    LocationFee("Baia mare", 120),
    LocationFee("Bistrita", 80),
    LocationFee("Brasov", 180),
    LocationFee("Bucuresti", 220),
    LocationFee("Cluj-Napoca", 10),
    LocationFee("Floresti", 10),
    LocationFee("Oradea", 120),
    LocationFee("Satu mare", 120),
    LocationFee("Sibiu", 120),
    LocationFee("Suceava", 220),
    LocationFee("Targu Mures", 70),
    LocationFee("Timisoara", 200),
)

_FEES_BY_NAME: dict[str, int] = {loc.name: loc.price for loc in LOCATION_FEES}


def get_location_fee(name: Optional[str]) -> int:
    """Return the flat fee for ``name``, or 0 when it is not in the table."""
    if not name:
        return 0
    fee = _FEES_BY_NAME.get(name)
    if fee is None:
        logger.debug("Unknown location %r; no location fee applied", name)
        return 0
    return fee


def list_locations() -> list[LocationFee]:
    return list(LOCATION_FEES)
