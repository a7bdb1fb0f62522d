"""Django ORM implementation of the Order repository.

Every public method runs inside ``transaction.atomic()`` (see
``db_operation``).  Business failures detected mid-transaction are raised as
``AppError`` so the whole unit of work rolls back, then returned as ``Err``.

Concurrency:
- order numbers come from the per-year ``OrderNumberSequence`` row, which
  stays locked until the creating transaction commits;
- stock is reserved with conditional ``UPDATE``s in product-id order, so an
  oversell attempt fails instead of driving stock negative;
- status changes and cancellation lock the order row (``select_for_update``)
  before re-checking the transition.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db.models import Avg, Count, DecimalField, Q, Sum
from django.db.models.functions import Coalesce
from django.utils import timezone

from modules.core.filters import apply_filters
from modules.core.pagination import Page, PaginationDTO, paginate
from modules.core.repositories.guards import db_operation
from modules.orders.constants import OrderStatus, can_transition
from modules.orders.dtos import OrderFiltersDTO, OrderStatsDTO
from modules.orders.errors import invalid_status_transition, order_already_cancelled
from modules.orders.filters import OrderFilter
from modules.orders.models import Order, OrderItem, OrderNumberSequence
from modules.orders.pricing import ZERO, to_money
from modules.orders.repositories.interfaces import IOrderRepository
from modules.products.errors import insufficient_inventory
from modules.products.models import Product
from shared.domain.errors import ErrorLayer
from shared.domain.result import Ok, Result

logger = structlog.get_logger(__name__)

MONEY = DecimalField(max_digits=14, decimal_places=2)


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    @staticmethod
    def _with_relations():
        return (
            Order.objects.alive()
            .select_related("customer")
            .prefetch_related("items__product")
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @db_operation("find order by ID")
    def get_by_id(self, id: str) -> Result[Optional[Order]]:
        try:
            return Ok(self._with_relations().filter(id=id).first())
        except (ValueError, ValidationError):
            return Ok(None)

    @db_operation("find order by number")
    def get_by_order_number(self, order_number: str) -> Result[Optional[Order]]:
        return Ok(self._with_relations().filter(order_number=order_number).first())

    @db_operation("find orders")
    def find_many(
        self,
        filters: Optional[OrderFiltersDTO] = None,
        pagination: Optional[PaginationDTO] = None,
    ) -> Result[Page[Order]]:
        queryset = apply_filters(OrderFilter, self._with_relations(), filters)
        return Ok(paginate(queryset.order_by("-created_at", "-id"), pagination))

    @db_operation("compute order statistics")
    def get_stats(self) -> Result[OrderStatsDTO]:
        billable = ~Q(status=OrderStatus.CANCELLED)
        totals = Order.objects.alive().aggregate(
            total=Count("id"),
            pending=Count("id", filter=Q(status=OrderStatus.PENDING)),
            processing=Count("id", filter=Q(status=OrderStatus.PROCESSING)),
            shipped=Count("id", filter=Q(status=OrderStatus.SHIPPED)),
            cancelled=Count("id", filter=Q(status=OrderStatus.CANCELLED)),
            revenue=Coalesce(
                Sum("total_amount", filter=billable), ZERO, output_field=MONEY
            ),
            average=Coalesce(
                Avg("total_amount", filter=billable), ZERO, output_field=MONEY
            ),
        )
        return Ok(
            OrderStatsDTO(
                total_orders=totals["total"],
                pending_orders=totals["pending"],
                processing_orders=totals["processing"],
                shipped_orders=totals["shipped"],
                cancelled_orders=totals["cancelled"],
                total_revenue=to_money(totals["revenue"]),
                average_order_value=to_money(totals["average"]),
            )
        )

    # ------------------------------------------------------------------
    # Create (aggregate root + children + stock)
    # ------------------------------------------------------------------

    @db_operation("create order")
    def create(
        self, data: Dict[str, Any], items: List[Dict[str, Any]]
    ) -> Result[Order]:
        order = Order(order_number=OrderNumberSequence.next_order_number(), **data)
        order.save()
        log = logger.bind(order_id=str(order.id), order_number=order.order_number)

        for item_data in sorted(items, key=lambda i: str(i["product_id"])):
            OrderItem(
                order=order,
                product_id=item_data["product_id"],
                quantity=item_data["quantity"],
                unit_price=item_data["unit_price"],
                discount=item_data.get("discount", ZERO),
            ).save()

            if not Product.objects.reserve(item_data["product_id"], item_data["quantity"]):
                product = Product.objects.filter(id=item_data["product_id"]).first()
                log.warning(
                    "order.stock_reservation_failed",
                    product_id=str(item_data["product_id"]),
                )
                raise insufficient_inventory(
                    str(product) if product else str(item_data["product_id"]),
                    product.available_quantity if product else 0,
                    item_data["quantity"],
                    ErrorLayer.REPOSITORY,
                )
            log.info(
                "order.stock_reserved",
                product_id=str(item_data["product_id"]),
                quantity=item_data["quantity"],
            )

        log.info("order.persisted", item_count=len(items))
        return Ok(self._with_relations().get(id=order.id))

    # ------------------------------------------------------------------
    # Updates
    # ------------------------------------------------------------------

    def _locked(self, id: str) -> Optional[Order]:
        try:
            return Order.objects.alive().select_for_update().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def _apply_status(
        self, order: Order, status: str, data: Optional[Dict[str, Any]] = None
    ) -> None:
        if not order.can_transition_to(status):
            raise invalid_status_transition(order.status, status)

        previous = order.status
        changes = dict(data or {}, status=status)
        for field, value in changes.items():
            setattr(order, field, value)
        order.save(update_fields=list(changes))
        logger.info(
            "order.status_updated",
            order_id=str(order.id),
            old_status=previous,
            new_status=status,
        )

    def _apply_cancel(self, order: Order, reason: str = "") -> None:
        if order.status == OrderStatus.CANCELLED:
            raise order_already_cancelled(str(order.id))
        if not can_transition(order.status, OrderStatus.CANCELLED):
            raise invalid_status_transition(order.status, OrderStatus.CANCELLED)

        log = logger.bind(order_id=str(order.id), previous_status=order.status)
        for item in order.items.order_by("product_id"):
            Product.objects.release(item.product_id, item.quantity)
            log.info(
                "order.stock_restored",
                product_id=str(item.product_id),
                quantity=item.quantity,
            )

        order.status = OrderStatus.CANCELLED
        order.cancelled_at = timezone.now()
        order.cancellation_reason = reason or ""
        order.save(update_fields=["status", "cancelled_at", "cancellation_reason"])
        log.info("order.cancelled")

    @db_operation("update order")
    def update(
        self,
        id: str,
        data: Dict[str, Any],
        status: Optional[str] = None,
        status_data: Optional[Dict[str, Any]] = None,
        reason: str = "",
    ) -> Result[Optional[Order]]:
        order = self._locked(id)
        if order is None:
            return Ok(None)
        if data:
            for field, value in data.items():
                setattr(order, field, value)
            order.save(update_fields=list(data))
            logger.info("order.updated", order_id=str(id), fields=sorted(data))

        if status == OrderStatus.CANCELLED:
            self._apply_cancel(order, reason)
        elif status is not None:
            self._apply_status(order, status, status_data)
        return Ok(self._with_relations().get(id=order.id))

    @db_operation("update order status")
    def change_status(
        self, id: str, status: str, data: Optional[Dict[str, Any]] = None
    ) -> Result[Optional[Order]]:
        order = self._locked(id)
        if order is None:
            return Ok(None)
        self._apply_status(order, status, data)
        return Ok(self._with_relations().get(id=order.id))

    @db_operation("cancel order")
    def cancel(self, id: str, reason: str = "") -> Result[Optional[Order]]:
        order = self._locked(id)
        if order is None:
            return Ok(None)
        self._apply_cancel(order, reason)
        return Ok(self._with_relations().get(id=order.id))

    @db_operation("delete order")
    def soft_delete(self, id: str) -> Result[bool]:
        order = self._locked(id)
        if order is None:
            return Ok(False)
        order.delete()
        logger.info("order.soft_deleted", order_id=str(id))
        return Ok(True)
