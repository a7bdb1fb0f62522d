from decimal import Decimal

import pytest
from django.db import transaction
from freezegun import freeze_time

from modules.orders.constants import OrderStatus
from modules.orders.models import Order, OrderItem, OrderNumberSequence

pytestmark = pytest.mark.unit


def _next_number() -> str:
    with transaction.atomic():
        return OrderNumberSequence.next_order_number()


class TestOrderNumbers:
    @freeze_time("2026-04-10 12:00:00")
    def test_numbers_are_sequential_per_year(self):
        assert _next_number() == "ORD-2026-0001"
        assert _next_number() == "ORD-2026-0002"

    def test_new_year_restarts_the_sequence(self):
        with freeze_time("2026-12-31 12:00:00"):
            _next_number()
            assert _next_number() == "ORD-2026-0002"
        with freeze_time("2027-01-02 12:00:00"):
            assert _next_number() == "ORD-2027-0001"

        assert OrderNumberSequence.objects.get(year=2026).last_value == 2

    # 03:00 UTC on Jan 1 is still Dec 31 in Bogotá
    @freeze_time("2027-01-01 03:00:00")
    def test_year_follows_local_time(self):
        assert _next_number() == "ORD-2026-0001"

    @freeze_time("2026-04-10 12:00:00")
    def test_numbers_past_four_digits(self):
        OrderNumberSequence.objects.create(year=2026, last_value=9999)
        assert _next_number() == "ORD-2026-10000"


class TestOrderItem:
    def test_total_price_is_computed_on_save(self, customer, racket):
        order = Order.objects.create(order_number="ORD-2026-0100", customer=customer)
        item = OrderItem.objects.create(
            order=order,
            product=racket,
            quantity=3,
            unit_price=Decimal("100.00"),
            discount=Decimal("20.00"),
        )
        assert item.total_price == Decimal("280.00")

    def test_items_cascade_with_hard_deleted_order(self, customer, racket):
        order = Order.objects.create(order_number="ORD-2026-0101", customer=customer)
        OrderItem.objects.create(
            order=order, product=racket, quantity=1, unit_price=Decimal("1")
        )

        order.hard_delete()

        assert OrderItem.objects.count() == 0


class TestOrder:
    def test_defaults(self, customer):
        order = Order.objects.create(order_number="ORD-2026-0102", customer=customer)
        assert order.status == OrderStatus.PENDING
        assert order.total_amount == Decimal("0")
        assert order.is_terminal is False
        assert str(order) == "ORD-2026-0102 (PENDING)"

    def test_can_transition_to(self, customer):
        order = Order(order_number="x", customer=customer, status=OrderStatus.PENDING)
        assert order.can_transition_to(OrderStatus.PROCESSING)
        assert not order.can_transition_to(OrderStatus.SHIPPED)
