"""Order item service layer.

Owns the two pieces of item logic shared with order creation:

- ``calculate_totals``: ``max(0, quantity × unit_price − discount)``.
- ``validate_stock``: checks every requested product in one pass and
  reports *all* violations, not only the first one.

It also appends items to an existing PENDING order.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any, Mapping, Optional

import structlog
from django.conf import settings

from modules.order_items.errors import order_item_not_found, stock_validation_failed
from modules.orders.constants import MODIFIABLE_STATES
from modules.orders.errors import order_cannot_be_modified, order_not_found
from modules.orders.pricing import (
    AMOUNT_OUT_OF_RANGE_MESSAGE,
    MAX_AMOUNT,
    MAX_PRICE,
    ZERO,
    line_total,
)
from shared.domain.errors import ErrorCode, validation_error
from shared.domain.result import Err, Ok, Result

if TYPE_CHECKING:
    from modules.core.pagination import Page, PaginationDTO
    from modules.order_items.dtos import AddOrderItemDTO, OrderItemFiltersDTO
    from modules.order_items.repositories.interfaces import IOrderItemRepository
    from modules.orders.models import OrderItem
    from modules.orders.repositories.interfaces import IOrderRepository
    from modules.products.models import Product
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class OrderItemService:
    def __init__(
        self,
        repository: IOrderItemRepository,
        product_repository: IProductRepository,
        order_repository: IOrderRepository,
    ) -> None:
        self._repo = repository
        self._product_repo = product_repository
        self._order_repo = order_repository

    @staticmethod
    def calculate_totals(
        quantity: int, unit_price: Decimal, discount: Decimal = ZERO
    ) -> Decimal:
        return line_total(quantity, unit_price, discount)

    def validate_stock(self, requested: Mapping[str, int]) -> Result[dict[str, Product]]:
        """Products keyed by id when every request can be served.

        ``requested`` maps product id to the *total* quantity wanted.  On
        failure the error code follows NOT_FOUND > INACTIVE > INSUFFICIENT
        and ``details`` holds one entry per failing product.
        """
        found = self._product_repo.get_by_ids(list(requested))
        if found.is_err:
            return found
        products = found.value

        violations: list[dict[str, Any]] = []
        for product_id, quantity in requested.items():
            product = products.get(product_id)
            if product is None:
                violations.append(
                    {
                        "code": ErrorCode.PRODUCT_NOT_FOUND,
                        "product_id": product_id,
                        "requested": quantity,
                        "available": 0,
                        "message": f"Product with ID {product_id} not found",
                    }
                )
            elif not product.is_active:
                violations.append(
                    {
                        "code": ErrorCode.PRODUCT_INACTIVE,
                        "product_id": product_id,
                        "requested": quantity,
                        "available": product.available_quantity,
                        "message": f"Product {product} is inactive",
                    }
                )
            elif product.available_quantity < quantity:
                violations.append(
                    {
                        "code": ErrorCode.PRODUCT_INSUFFICIENT_INVENTORY,
                        "product_id": product_id,
                        "requested": quantity,
                        "available": product.available_quantity,
                        "message": (
                            f"Insufficient inventory for {product}. "
                            f"Available: {product.available_quantity}, "
                            f"Requested: {quantity}"
                        ),
                    }
                )

        if violations:
            logger.warning(
                "order_item.stock_validation_failed",
                violations=[(v["product_id"], str(v["code"])) for v in violations],
            )
            return Err(stock_validation_failed(violations))
        return Ok(products)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_by_id(self, id: str) -> Result[OrderItem]:
        result = self._repo.get_by_id(id)
        if result.is_err:
            return result
        if result.value is None:
            return Err(order_item_not_found(id))
        return Ok(result.value)

    def get_all(
        self,
        filters: Optional[OrderItemFiltersDTO] = None,
        pagination: Optional[PaginationDTO] = None,
    ) -> Result[Page[OrderItem]]:
        return self._repo.find_many(filters, pagination)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create(self, dto: AddOrderItemDTO) -> Result[OrderItem]:
        order_id = str(dto.order_id)
        product_id = str(dto.product_id)
        log = logger.bind(order_id=order_id, product_id=product_id)

        order = self._order_repo.get_by_id(order_id)
        if order.is_err:
            return order
        if order.value is None:
            return Err(order_not_found(order_id))
        if order.value.status not in MODIFIABLE_STATES:
            log.warning("order_item.order_not_modifiable", status=order.value.status)
            return Err(order_cannot_be_modified(order_id, order.value.status))

        stock = self.validate_stock({product_id: dto.quantity})
        if stock.is_err:
            return stock
        product = stock.value[product_id]

        unit_price = dto.unit_price if dto.unit_price is not None else product.price
        if (
            unit_price > MAX_PRICE
            or self.calculate_totals(dto.quantity, unit_price, dto.discount) > MAX_AMOUNT
        ):
            log.warning("order_item.amount_out_of_range", unit_price=str(unit_price))
            return Err(validation_error(AMOUNT_OUT_OF_RANGE_MESSAGE))
        result = self._repo.add_item(
            order_id,
            {
                "product_id": product.id,
                "quantity": dto.quantity,
                "unit_price": unit_price,
                "discount": dto.discount,
            },
            settings.TAX_RATE,
        )
        if result.is_err:
            return result
        if result.value is None:
            return Err(order_not_found(order_id))
        return Ok(result.value)
