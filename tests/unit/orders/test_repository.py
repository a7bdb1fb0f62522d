from decimal import Decimal

import pytest
from freezegun import freeze_time

from modules.orders.models import Order, OrderItem, OrderNumberSequence
from modules.orders.repositories import OrderDjangoRepository
from shared.domain.errors import ErrorCode, ErrorLayer

pytestmark = pytest.mark.unit


@pytest.fixture()
def repository():
    return OrderDjangoRepository()


def _header(customer) -> dict:
    return {"customer_id": customer.id, "subtotal": Decimal("0"), "total_amount": Decimal("0")}


def _line(product, quantity) -> dict:
    return {"product_id": product.id, "quantity": quantity, "unit_price": product.price}


@freeze_time("2026-08-01 09:00:00")
def test_create_persists_items_and_reserves(repository, customer, racket, balls):
    result = repository.create(_header(customer), [_line(racket, 2), _line(balls, 5)])

    order = result.value
    assert order.order_number == "ORD-2026-0001"
    assert order.items.count() == 2
    racket.refresh_from_db()
    balls.refresh_from_db()
    assert (racket.available_quantity, balls.available_quantity) == (8, 45)


@freeze_time("2026-08-01 09:00:00")
def test_lost_stock_race_rolls_back_everything(repository, customer, racket, balls):
    # Stock checked earlier by the service is gone by the time the order is written.
    result = repository.create(_header(customer), [_line(racket, 2), _line(balls, 51)])

    assert result.is_err
    assert result.error.code is ErrorCode.PRODUCT_INSUFFICIENT_INVENTORY
    assert result.error.layer is ErrorLayer.REPOSITORY
    assert Order.objects.count() == 0
    assert OrderItem.objects.count() == 0
    racket.refresh_from_db()
    balls.refresh_from_db()
    assert (racket.available_quantity, balls.available_quantity) == (10, 50)
    assert not OrderNumberSequence.objects.filter(year=2026, last_value__gt=0).exists()


def test_cancel_of_cancelled_order_is_rejected_under_lock(repository, customer, balls):
    order = repository.create(_header(customer), [_line(balls, 1)]).value
    assert repository.cancel(str(order.id)).is_ok

    result = repository.cancel(str(order.id))

    assert result.error.code is ErrorCode.ORDER_ALREADY_CANCELLED
    balls.refresh_from_db()
    assert balls.available_quantity == 50


def test_change_status_rechecks_transition(repository, customer, balls):
    order = repository.create(_header(customer), [_line(balls, 1)]).value

    result = repository.change_status(str(order.id), "SHIPPED")

    assert result.error.code is ErrorCode.ORDER_INVALID_STATUS_TRANSITION
    order.refresh_from_db()
    assert order.status == "PENDING"


def test_missing_order_returns_none(repository):
    assert repository.get_by_id("nope").value is None
    assert repository.update("nope", {"notes": "x"}).value is None
    assert repository.soft_delete("nope").value is False


def test_refused_status_change_rolls_back_field_edits(repository, customer, balls):
    order = repository.create(_header(customer), [_line(balls, 1)]).value

    result = repository.update(str(order.id), {"notes": "rush"}, status="DELIVERED")

    assert result.error.code is ErrorCode.ORDER_INVALID_STATUS_TRANSITION
    order.refresh_from_db()
    assert (order.notes, order.status) == ("", "PENDING")


def test_update_can_cancel_in_the_same_write(repository, customer, balls):
    order = repository.create(_header(customer), [_line(balls, 3)]).value

    result = repository.update(
        str(order.id), {"notes": "customer called"}, status="CANCELLED", reason="dup"
    )

    assert result.value.status == "CANCELLED"
    assert result.value.notes == "customer called"
    assert result.value.cancellation_reason == "dup"
    balls.refresh_from_db()
    assert balls.available_quantity == 50
