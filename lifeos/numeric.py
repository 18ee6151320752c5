"""
Rounding helpers.

Python's round() uses banker's rounding; scores and money here use
half-up so that 87.5 displays as 88 everywhere.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Union


Number = Union[int, float, Decimal]

CENT = Decimal("0.01")


def to_decimal(value: Number) -> Decimal:
    """Convert without binary float noise (0.1 -> Decimal('0.1'))."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_half_up(value: Number) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(to_decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def round_money(value: Number) -> Decimal:
    """Round to 2 decimal places, halves away from zero."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def clamp(value, lower, upper):
    return max(lower, min(upper, value))
