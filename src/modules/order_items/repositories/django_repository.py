"""Django ORM implementation of the OrderItem repository."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db.models import DecimalField, Sum
from django.db.models.functions import Coalesce

from modules.core.filters import apply_filters
from modules.core.pagination import Page, PaginationDTO, paginate
from modules.core.repositories.guards import db_operation
from modules.order_items.dtos import OrderItemFiltersDTO
from modules.order_items.filters import OrderItemFilter
from modules.order_items.repositories.interfaces import IOrderItemRepository
from modules.orders.constants import MODIFIABLE_STATES
from modules.orders.errors import order_cannot_be_modified
from modules.orders.models import Order, OrderItem
from modules.orders.pricing import (
    AMOUNT_OUT_OF_RANGE_MESSAGE,
    ZERO,
    exceeds_limits,
    order_totals,
)
from modules.products.errors import insufficient_inventory
from modules.products.models import Product
from shared.domain.errors import ErrorLayer, validation_error
from shared.domain.result import Ok, Result

logger = structlog.get_logger(__name__)


class OrderItemDjangoRepository(IOrderItemRepository):
    """Concrete OrderItem repository backed by Django ORM."""

    @staticmethod
    def _with_relations():
        return OrderItem.objects.select_related("order", "product").filter(
            order__is_deleted=False
        )

    @db_operation("find order item by ID")
    def get_by_id(self, id: str) -> Result[Optional[OrderItem]]:
        try:
            return Ok(self._with_relations().filter(id=id).first())
        except (ValueError, ValidationError):
            return Ok(None)

    @db_operation("find order items")
    def find_many(
        self,
        filters: Optional[OrderItemFiltersDTO] = None,
        pagination: Optional[PaginationDTO] = None,
    ) -> Result[Page[OrderItem]]:
        queryset = apply_filters(OrderItemFilter, self._with_relations(), filters)
        return Ok(paginate(queryset.order_by("created_at", "id"), pagination))

    @db_operation("create order item")
    def add_item(
        self, order_id: str, data: Dict[str, Any], tax_rate: Decimal
    ) -> Result[Optional[OrderItem]]:
        try:
            order = Order.objects.alive().select_for_update().filter(id=order_id).first()
        except (ValueError, ValidationError):
            return Ok(None)
        if order is None:
            return Ok(None)
        if order.status not in MODIFIABLE_STATES:
            raise order_cannot_be_modified(order_id, order.status)

        item = OrderItem(order=order, **data)
        item.save()

        if not Product.objects.reserve(item.product_id, item.quantity):
            product = Product.objects.filter(id=item.product_id).first()
            raise insufficient_inventory(
                str(product) if product else str(item.product_id),
                product.available_quantity if product else 0,
                item.quantity,
                ErrorLayer.REPOSITORY,
            )

        subtotal = order.items.aggregate(
            value=Coalesce(
                Sum("total_price"),
                ZERO,
                output_field=DecimalField(max_digits=20, decimal_places=2),
            )
        )["value"]
        totals = order_totals(subtotal, tax_rate, order.shipping_cost, order.discount)
        if totals.total_amount < 0:
            raise validation_error(
                "Order total cannot be negative", ErrorLayer.REPOSITORY
            )
        if exceeds_limits(totals):
            raise validation_error(AMOUNT_OUT_OF_RANGE_MESSAGE, ErrorLayer.REPOSITORY)
        for field, value in totals._asdict().items():
            setattr(order, field, value)
        order.save(update_fields=list(totals._asdict()))

        logger.info(
            "order_item.created",
            order_id=str(order.id),
            item_id=str(item.id),
            product_id=str(item.product_id),
            quantity=item.quantity,
            order_total=str(order.total_amount),
        )
        return Ok(self._with_relations().get(id=item.id))
