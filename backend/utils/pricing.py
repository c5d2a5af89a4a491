# utils/pricing.py
"""Discount-chain pricing shared by purchase and sales lines.

Three percentage discounts are applied one after another on the running
price, then the flat currency discount is subtracted. The order is fixed:
swapping the flat discount with a percentage step changes the result.
"""
from decimal import Decimal
from typing import Union

Number = Union[Decimal, int, str]

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def _d(value: Number) -> Decimal:
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    # str() keeps floats like 0.1 from dragging binary noise into the result
    return Decimal(str(value))


def effective_price(
    base: Number,
    disc1: Number = ZERO,
    disc2: Number = ZERO,
    disc3: Number = ZERO,
    disc_flat: Number = ZERO,
) -> Decimal:
    """Unit price after the discount chain, never below zero."""
    price = _d(base)
    for pct in (disc1, disc2, disc3):
        price = price * (1 - _d(pct) / HUNDRED)
    price = price - _d(disc_flat)
    return max(ZERO, price)


def line_total(
    quantity: Number,
    base: Number,
    disc1: Number = ZERO,
    disc2: Number = ZERO,
    disc3: Number = ZERO,
    disc_flat: Number = ZERO,
) -> Decimal:
    return effective_price(base, disc1, disc2, disc3, disc_flat) * _d(quantity)
