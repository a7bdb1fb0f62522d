from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

import pytest

from modules.order_items.dtos import AddOrderItemDTO, OrderItemFiltersDTO
from modules.orders.constants import OrderStatus
from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO
from shared.domain.errors import ErrorCode

pytestmark = pytest.mark.unit


@pytest.fixture()
def items(services):
    return services.order_items


@pytest.fixture()
def order(services, customer, balls):
    dto = CreateOrderDTO(
        customer_id=customer.id,
        items=[CreateOrderItemDTO(product_id=balls.id, quantity=2)],
    )
    return services.orders.create(dto).value


class TestCalculateTotals:
    def test_without_discount(self, items):
        assert items.calculate_totals(4, Decimal("12.50")) == Decimal("50.00")

    def test_discount_never_goes_below_zero(self, items):
        assert items.calculate_totals(1, Decimal("5"), Decimal("9")) == Decimal("0.00")


class TestValidateStock:
    def test_returns_products_by_id(self, items, racket, balls):
        result = items.validate_stock({str(racket.id): 10, str(balls.id): 1})
        assert set(result.value) == {str(racket.id), str(balls.id)}

    def test_single_violation_message(self, items, racket):
        result = items.validate_stock({str(racket.id): 12})

        assert result.error.code is ErrorCode.PRODUCT_INSUFFICIENT_INVENTORY
        assert result.error.message.endswith("Available: 10, Requested: 12")
        assert result.error.details == [
            {
                "code": "PRODUCT_INSUFFICIENT_INVENTORY",
                "product_id": str(racket.id),
                "requested": 12,
                "available": 10,
                "message": result.error.message,
            }
        ]

    def test_multiple_violations(self, items, racket, make_product):
        inactive = make_product(is_active=False)
        missing = str(uuid4())

        result = items.validate_stock(
            {str(racket.id): 99, str(inactive.id): 1, missing: 1}
        )

        assert result.error.code is ErrorCode.PRODUCT_NOT_FOUND
        assert result.error.message.startswith("3 items failed stock validation")
        assert len(result.error.details) == 3


class TestCreate:
    def test_adds_item_and_recomputes_totals(self, items, order, racket):
        result = items.create(
            AddOrderItemDTO(order_id=order.id, product_id=racket.id, quantity=1)
        )

        assert result.is_ok
        item = result.value
        assert item.unit_price == Decimal("100000.00")
        order.refresh_from_db()
        assert order.subtotal == Decimal("150000.00")
        assert order.tax_amount == Decimal("28500.00")
        assert order.total_amount == Decimal("178500.00")
        racket.refresh_from_db()
        assert racket.available_quantity == 9

    def test_discounted_line(self, items, order, racket):
        result = items.create(
            AddOrderItemDTO(
                order_id=order.id,
                product_id=racket.id,
                quantity=1,
                unit_price=Decimal("80000"),
                discount=Decimal("5000"),
            )
        )
        assert result.value.total_price == Decimal("75000.00")

    def test_only_pending_orders(self, services, items, order, racket):
        services.orders.update_status(str(order.id), OrderStatus.PROCESSING)

        result = items.create(
            AddOrderItemDTO(order_id=order.id, product_id=racket.id, quantity=1)
        )

        assert result.error.code is ErrorCode.ORDER_CANNOT_BE_MODIFIED
        racket.refresh_from_db()
        assert racket.available_quantity == 10

    def test_unknown_order(self, items, racket):
        result = items.create(
            AddOrderItemDTO(order_id=uuid4(), product_id=racket.id, quantity=1)
        )
        assert result.error.code is ErrorCode.ORDER_NOT_FOUND

    def test_insufficient_stock(self, items, order, racket):
        result = items.create(
            AddOrderItemDTO(order_id=order.id, product_id=racket.id, quantity=11)
        )
        assert result.error.code is ErrorCode.PRODUCT_INSUFFICIENT_INVENTORY
        assert order.items.count() == 1

    def test_line_beyond_column_range(self, items, order, make_product):
        product = make_product(sku="BULK-1", available_quantity=1000)

        result = items.create(
            AddOrderItemDTO(
                order_id=order.id,
                product_id=product.id,
                quantity=1000,
                unit_price=Decimal("9999999999.99"),
            )
        )

        assert result.error.code is ErrorCode.VALIDATION_INVALID_INPUT
        assert order.items.count() == 1
        product.refresh_from_db()
        assert product.available_quantity == 1000

    def test_order_total_beyond_column_range_rolls_back(self, items, order, make_product):
        product = make_product(sku="BULK-1", available_quantity=1000)

        # the line fits on its own but pushes the order past the limit
        result = items.create(
            AddOrderItemDTO(
                order_id=order.id,
                product_id=product.id,
                quantity=100,
                unit_price=Decimal("9999999999.99"),
            )
        )

        assert result.error.code is ErrorCode.VALIDATION_INVALID_INPUT
        assert order.items.count() == 1
        product.refresh_from_db()
        assert product.available_quantity == 1000
        order.refresh_from_db()
        assert order.subtotal == Decimal("50000.00")


class TestQueries:
    def test_get_by_id(self, items, order):
        item = order.items.get()
        assert items.get_by_id(str(item.id)).value.id == item.id

    @pytest.mark.parametrize("item_id", [str(uuid4()), "garbage"])
    def test_missing_item(self, items, item_id):
        result = items.get_by_id(item_id)

        assert result.error.code is ErrorCode.VALIDATION_INVALID_INPUT
        assert result.error.message == "Order item not found"

    def test_filter_by_order(self, services, items, order, customer, racket):
        other = services.orders.create(
            CreateOrderDTO(
                customer_id=customer.id,
                items=[CreateOrderItemDTO(product_id=racket.id, quantity=1)],
            )
        ).value

        page = items.get_all(OrderItemFiltersDTO(order_id=other.id)).value

        assert [i.product_id for i in page.data] == [racket.id]
