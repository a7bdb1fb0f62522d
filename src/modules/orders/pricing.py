"""Money arithmetic for orders and order items.

All amounts are ``Decimal`` rounded half-up to cents.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import NamedTuple

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")

# Largest values the order columns hold: prices and adjustments are
# 12 digits, line and order totals 14 (two of them decimals).
MAX_PRICE = Decimal("9999999999.99")
MAX_AMOUNT = Decimal("999999999999.99")

AMOUNT_OUT_OF_RANGE_MESSAGE = "Order amount exceeds the maximum allowed value"


def to_money(value: Decimal | int | str) -> Decimal:
    return Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def line_total(quantity: int, unit_price: Decimal, discount: Decimal = ZERO) -> Decimal:
    """``quantity × unit_price − discount``, floored at zero."""
    return max(ZERO, to_money(unit_price * quantity - discount))


class OrderTotals(NamedTuple):
    subtotal: Decimal
    tax_amount: Decimal
    shipping_cost: Decimal
    discount: Decimal
    total_amount: Decimal


def order_totals(
    subtotal: Decimal,
    tax_rate: Decimal,
    shipping_cost: Decimal = ZERO,
    discount: Decimal = ZERO,
) -> OrderTotals:
    """``total = subtotal + tax + shipping − discount`` (may be negative;
    callers reject that)."""
    subtotal = to_money(subtotal)
    tax_amount = to_money(subtotal * tax_rate)
    shipping_cost = to_money(shipping_cost)
    discount = to_money(discount)
    return OrderTotals(
        subtotal=subtotal,
        tax_amount=tax_amount,
        shipping_cost=shipping_cost,
        discount=discount,
        total_amount=subtotal + tax_amount + shipping_cost - discount,
    )


def exceeds_limits(totals: OrderTotals) -> bool:
    """True when any amount would not fit its column."""
    return (
        totals.shipping_cost > MAX_PRICE
        or totals.discount > MAX_PRICE
        or max(totals.subtotal, totals.tax_amount, totals.total_amount) > MAX_AMOUNT
    )
