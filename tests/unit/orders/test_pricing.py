from decimal import Decimal

import pytest

from modules.orders.pricing import line_total, order_totals, to_money

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (Decimal("1.005"), Decimal("1.01")),
        (Decimal("1.004"), Decimal("1.00")),
        (Decimal("2.675"), Decimal("2.68")),
        (10, Decimal("10.00")),
    ],
)
def test_to_money_rounds_half_up(value, expected):
    assert to_money(value) == expected


class TestLineTotal:
    def test_quantity_times_price(self):
        assert line_total(3, Decimal("25000")) == Decimal("75000.00")

    def test_discount_is_subtracted(self):
        assert line_total(2, Decimal("100"), Decimal("15.50")) == Decimal("184.50")

    def test_floored_at_zero(self):
        assert line_total(1, Decimal("10"), Decimal("50")) == Decimal("0.00")


class TestOrderTotals:
    def test_tax_on_subtotal(self):
        totals = order_totals(Decimal("150000"), Decimal("0.19"))

        assert totals.subtotal == Decimal("150000.00")
        assert totals.tax_amount == Decimal("28500.00")
        assert totals.total_amount == Decimal("178500.00")

    def test_shipping_and_discount(self):
        totals = order_totals(
            Decimal("100"), Decimal("0.19"), Decimal("12.00"), Decimal("30.00")
        )
        assert totals.total_amount == Decimal("101.00")

    def test_tax_rounding(self):
        totals = order_totals(Decimal("0.05"), Decimal("0.19"))
        # 0.0095 rounds half-up to 0.01
        assert totals.tax_amount == Decimal("0.01")

    def test_negative_total_is_reported_not_clamped(self):
        totals = order_totals(Decimal("10"), Decimal("0"), Decimal("0"), Decimal("20"))
        assert totals.total_amount == Decimal("-10.00")
