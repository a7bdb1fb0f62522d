"""Order service layer (use cases).

Orchestrates order creation, status management and cancellation.  The
repository owns the transactions; this layer validates up front so that
the common failures never open one.

Business rules enforced:
- Every requested product must exist, be active and have stock; *all*
  violations are reported at once (see ``OrderItemService.validate_stock``).
- The customer comes from ``customer_id`` or is found/created by email.
- ``total = subtotal + tax + shipping − discount`` with
  ``tax = subtotal × TAX_RATE`` (half-up to cents); negative totals fail.
- Status changes follow ``VALID_TRANSITIONS``; moving to CANCELLED always
  goes through ``cancel`` so reserved stock is restored.
- Only PENDING or CANCELLED orders can be deleted.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import structlog
from django.conf import settings
from django.utils import timezone

from modules.core.pagination import PaginationDTO
from modules.orders.constants import (
    DELETABLE_STATES,
    PENDING_ORDERS_LIMIT,
    OrderStatus,
    can_transition,
)
from modules.orders.dtos import OrderFiltersDTO
from modules.orders.errors import (
    invalid_status_transition,
    order_already_cancelled,
    order_not_found,
    order_number_not_found,
)
from modules.orders.pricing import (
    AMOUNT_OUT_OF_RANGE_MESSAGE,
    MAX_PRICE,
    ZERO,
    exceeds_limits,
    order_totals,
)
from shared.domain.errors import required_field, validation_error
from shared.domain.result import Err, Ok, Result

if TYPE_CHECKING:
    from modules.core.pagination import Page
    from modules.customers.models import Customer
    from modules.customers.services import CustomerService
    from modules.order_items.services import OrderItemService
    from modules.orders.dtos import CreateOrderDTO, OrderStatsDTO, UpdateOrderDTO
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)

NEGATIVE_TOTAL_MESSAGE = "Order total cannot be negative"


class OrderService:
    """Application service for Order use-cases.

    Receives the order repository and the collaborating services via
    constructor injection.
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        customer_service: CustomerService,
        order_item_service: OrderItemService,
    ) -> None:
        self._repo = order_repository
        self._customers = customer_service
        self._items = order_item_service

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_by_id(self, id: str) -> Result[Order]:
        result = self._repo.get_by_id(id)
        if result.is_err:
            return result
        if result.value is None:
            return Err(order_not_found(id))
        return Ok(result.value)

    def get_by_order_number(self, order_number: str) -> Result[Order]:
        result = self._repo.get_by_order_number(order_number)
        if result.is_err:
            return result
        if result.value is None:
            return Err(order_number_not_found(order_number))
        return Ok(result.value)

    def get_all(
        self,
        filters: Optional[OrderFiltersDTO] = None,
        pagination: Optional[PaginationDTO] = None,
    ) -> Result[Page[Order]]:
        return self._repo.find_many(filters, pagination)

    def get_by_customer_id(
        self, customer_id: str, pagination: Optional[PaginationDTO] = None
    ) -> Result[Page[Order]]:
        return self._repo.find_many(
            OrderFiltersDTO(customer_id=customer_id), pagination
        )

    def get_pending(self, limit: int = PENDING_ORDERS_LIMIT) -> Result[list[Order]]:
        result = self._repo.find_many(
            OrderFiltersDTO(status=OrderStatus.PENDING),
            PaginationDTO(page=1, limit=limit),
        )
        if result.is_err:
            return result
        return Ok(result.value.data)

    def get_stats(self) -> Result[OrderStatsDTO]:
        return self._repo.get_stats()

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def _resolve_customer(self, dto: CreateOrderDTO) -> Result[Customer]:
        if dto.customer_id is not None:
            return self._customers.get_by_id(str(dto.customer_id))
        if dto.customer is not None:
            return self._customers.find_or_create(dto.customer)
        return Err(required_field("customer_id"))

    def create(self, dto: CreateOrderDTO) -> Result[Order]:
        """Validate stock, resolve the customer, price and persist.

        Stock is decremented by the repository in the same transaction that
        inserts the order and its items.
        """
        log = logger.bind(item_count=len(dto.items))
        log.info("order.creation_started")

        stock = self._items.validate_stock(dto.requested_quantities())
        if stock.is_err:
            return stock
        products = stock.value

        customer = self._resolve_customer(dto)
        if customer.is_err:
            log.warning("order.customer_unresolved", code=str(customer.error.code))
            return customer
        log = log.bind(customer_id=str(customer.value.id))

        lines = []
        for item in dto.items:
            product = products[str(item.product_id)]
            unit_price = item.unit_price if item.unit_price is not None else product.price
            if unit_price > MAX_PRICE:
                log.warning("order.unit_price_out_of_range", unit_price=str(unit_price))
                return Err(validation_error(AMOUNT_OUT_OF_RANGE_MESSAGE))
            lines.append(
                {
                    "product_id": product.id,
                    "quantity": item.quantity,
                    "unit_price": unit_price,
                }
            )

        subtotal = sum(
            (
                self._items.calculate_totals(line["quantity"], line["unit_price"])
                for line in lines
            ),
            ZERO,
        )
        totals = order_totals(
            subtotal, settings.TAX_RATE, dto.shipping_cost, dto.discount
        )
        if totals.total_amount < 0:
            log.warning("order.negative_total", total=str(totals.total_amount))
            return Err(validation_error(NEGATIVE_TOTAL_MESSAGE))
        if exceeds_limits(totals):
            log.warning("order.total_out_of_range", total=str(totals.total_amount))
            return Err(validation_error(AMOUNT_OUT_OF_RANGE_MESSAGE))

        result = self._repo.create(
            {
                "customer_id": customer.value.id,
                "notes": dto.notes,
                "customer_notes": dto.customer_notes,
                "shipping_address": dto.shipping_address,
                "billing_address": dto.billing_address,
                **totals._asdict(),
            },
            lines,
        )
        if result.is_ok:
            log.info(
                "order.created",
                order_id=str(result.value.id),
                order_number=result.value.order_number,
                total=str(result.value.total_amount),
            )
        return result

    # ------------------------------------------------------------------
    # Updates
    # ------------------------------------------------------------------

    def update(self, id: str, dto: UpdateOrderDTO) -> Result[Order]:
        """Apply field edits and an optional status change as one write.

        Shipping or discount edits re-derive the totals.  A status change
        that the locked row refuses rolls the field edits back with it.
        """
        current = self.get_by_id(id)
        if current.is_err:
            return current
        order = current.value

        status = dto.status if dto.status not in (None, order.status) else None
        if status is not None and not order.can_transition_to(status):
            return Err(invalid_status_transition(order.status, status))

        changes = dto.field_changes()
        if "shipping_cost" in changes or "discount" in changes:
            totals = order_totals(
                order.subtotal,
                settings.TAX_RATE,
                changes.get("shipping_cost", order.shipping_cost),
                changes.get("discount", order.discount),
            )
            if totals.total_amount < 0:
                return Err(validation_error(NEGATIVE_TOTAL_MESSAGE))
            if exceeds_limits(totals):
                return Err(validation_error(AMOUNT_OUT_OF_RANGE_MESSAGE))
            changes.update(totals._asdict())

        if not changes and status is None:
            return Ok(order)

        result = self._repo.update(
            id,
            changes,
            status=status,
            status_data=(
                {"shipped_at": timezone.now()} if status == OrderStatus.SHIPPED else None
            ),
            reason=dto.cancellation_reason or "",
        )
        if result.is_err:
            return result
        if result.value is None:
            return Err(order_not_found(id))
        return Ok(result.value)

    def update_status(
        self, id: str, status: str, reason: Optional[str] = None
    ) -> Result[Order]:
        if status == OrderStatus.CANCELLED:
            return self.cancel(id, reason)

        current = self.get_by_id(id)
        if current.is_err:
            return current
        if not current.value.can_transition_to(status):
            logger.warning(
                "order.invalid_transition",
                order_id=str(id),
                current_status=current.value.status,
                new_status=status,
            )
            return Err(invalid_status_transition(current.value.status, status))

        data = {"shipped_at": timezone.now()} if status == OrderStatus.SHIPPED else {}
        result = self._repo.change_status(id, status, data)
        if result.is_err:
            return result
        if result.value is None:
            return Err(order_not_found(id))
        return Ok(result.value)

    def cancel(self, id: str, reason: Optional[str] = None) -> Result[Order]:
        current = self.get_by_id(id)
        if current.is_err:
            return current
        order = current.value

        if order.status == OrderStatus.CANCELLED:
            return Err(order_already_cancelled(id))
        if not can_transition(order.status, OrderStatus.CANCELLED):
            return Err(invalid_status_transition(order.status, OrderStatus.CANCELLED))

        result = self._repo.cancel(id, reason or "")
        if result.is_err:
            return result
        if result.value is None:
            return Err(order_not_found(id))
        return Ok(result.value)

    def delete(self, id: str) -> Result[bool]:
        current = self.get_by_id(id)
        if current.is_err:
            return current
        if current.value.status not in DELETABLE_STATES:
            return Err(
                validation_error("Only cancelled or pending orders can be deleted")
            )

        result = self._repo.soft_delete(id)
        if result.is_err:
            return result
        if not result.value:
            return Err(order_not_found(id))
        return Ok(True)
