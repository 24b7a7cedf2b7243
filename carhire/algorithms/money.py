"""Decimal helpers shared by the pricing algorithms."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

Number = Union[int, float, str, Decimal]

WHOLE = Decimal("1")
CENTS = Decimal("0.01")


def to_decimal(value: Number) -> Decimal:
    """Convert a number to ``Decimal`` without inheriting float noise."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_whole(value: Number) -> int:
    """Round half-up to a whole number of EUR."""
    return int(to_decimal(value).quantize(WHOLE, rounding=ROUND_HALF_UP))


def round_cents(value: Number) -> Decimal:
    """Round half-up to two decimal places."""
    return to_decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def to_wire_number(value: Number) -> Union[int, float]:
    """JSON-friendly number: ``int`` when whole, ``float`` otherwise."""
    amount = to_decimal(value)
    if amount == amount.to_integral_value():
        return int(amount)
    return float(amount)
