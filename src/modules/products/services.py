"""Product service layer (use cases).

Business rules enforced here:
- Price must lie in ``[0, MAX_PRODUCT_PRICE]`` (``PRODUCT_PRICE_INVALID``).
- Quantities must be integers in ``[0, MAX_STOCK_QUANTITY]``
  (``PRODUCT_INVALID_QUANTITY``); restoring stock may not push past it.
- SKU is unique; a duplicate is a constraint violation (conflict).
- Reservations fail on inactive products (``PRODUCT_INACTIVE``) and when
  stock is short (``PRODUCT_INSUFFICIENT_INVENTORY``).
- Delete is soft and also deactivates the product.

Every method returns a ``Result``; repository failures are forwarded as-is.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Optional

import structlog
from django.conf import settings

from modules.products.constants import MAX_STOCK_QUANTITY
from modules.products.dtos import ProductFiltersDTO
from modules.products.errors import (
    insufficient_inventory,
    invalid_quantity,
    price_invalid,
    product_inactive,
    product_not_found,
)
from shared.domain.errors import constraint_violation
from shared.domain.result import Err, Ok, Result

if TYPE_CHECKING:
    from modules.core.pagination import Page, PaginationDTO
    from modules.products.constants import ProductCategory
    from modules.products.dtos import (
        CreateProductDTO,
        ProductStatsDTO,
        UpdateProductDTO,
    )
    from modules.products.models import Product
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection.
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Validation helpers
    # ------------------------------------------------------------------

    @staticmethod
    def validate_price(price: Decimal) -> Result[Decimal]:
        maximum = Decimal(str(settings.MAX_PRODUCT_PRICE))
        if price < 0 or price > maximum:
            return Err(price_invalid(price, maximum))
        return Ok(price)

    @staticmethod
    def validate_quantity(quantity: int | float) -> Result[int]:
        if isinstance(quantity, bool):
            return Err(invalid_quantity(quantity))
        if isinstance(quantity, float) and not quantity.is_integer():
            return Err(invalid_quantity(quantity))
        if quantity < 0 or quantity > MAX_STOCK_QUANTITY:
            return Err(invalid_quantity(quantity))
        return Ok(int(quantity))

    def _positive_quantity(self, quantity: int | float) -> Result[int]:
        result = self.validate_quantity(quantity)
        if result.is_ok and result.value == 0:
            return Err(invalid_quantity(quantity))
        return result

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_by_id(self, id: str) -> Result[Product]:
        result = self._repo.get_by_id(id)
        if result.is_err:
            return result
        if result.value is None:
            return Err(product_not_found(id))
        return Ok(result.value)

    def get_all(
        self,
        filters: Optional[ProductFiltersDTO] = None,
        pagination: Optional[PaginationDTO] = None,
    ) -> Result[Page[Product]]:
        return self._repo.find_many(filters, pagination)

    def get_active(self, pagination: Optional[PaginationDTO] = None) -> Result[Page[Product]]:
        """Active products that are in stock."""
        return self._repo.find_many(
            ProductFiltersDTO(is_active=True, in_stock=True), pagination
        )

    def get_by_category(
        self, category: ProductCategory, pagination: Optional[PaginationDTO] = None
    ) -> Result[Page[Product]]:
        return self._repo.find_many(
            ProductFiltersDTO(category=category, is_active=True), pagination
        )

    def get_low_stock(self, threshold: Optional[int] = None) -> Result[list[Product]]:
        if threshold is None:
            threshold = settings.LOW_STOCK_THRESHOLD
        return self._repo.find_low_stock(threshold)

    def get_stats(self, threshold: Optional[int] = None) -> Result[ProductStatsDTO]:
        if threshold is None:
            threshold = settings.LOW_STOCK_THRESHOLD
        return self._repo.get_stats(threshold)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create(self, dto: CreateProductDTO) -> Result[Product]:
        log = logger.bind(sku=dto.sku, name=str(dto.name))

        price = self.validate_price(dto.price)
        if price.is_err:
            log.warning("product.invalid_price", price=str(dto.price))
            return price
        quantity = self.validate_quantity(dto.available_quantity)
        if quantity.is_err:
            log.warning("product.invalid_quantity", quantity=dto.available_quantity)
            return quantity

        if dto.sku:
            existing = self._repo.get_by_sku(dto.sku)
            if existing.is_err:
                return existing
            if existing.value is not None:
                log.warning("product.duplicate_sku")
                return Err(constraint_violation(f"create product: SKU {dto.sku} already exists"))

        data = dto.model_dump()
        data.update(price=price.value, available_quantity=quantity.value, is_active=True)
        return self._repo.create(data)

    def update(self, id: str, dto: UpdateProductDTO) -> Result[Product]:
        changes = dto.changes()
        if "price" in changes:
            price = self.validate_price(changes["price"])
            if price.is_err:
                return price
        if "available_quantity" in changes:
            quantity = self.validate_quantity(changes["available_quantity"])
            if quantity.is_err:
                return quantity
            changes["available_quantity"] = quantity.value

        result = self._repo.update(id, changes)
        if result.is_err:
            return result
        if result.value is None:
            return Err(product_not_found(id))
        return Ok(result.value)

    def update_stock(self, id: str, amount: int | float) -> Result[Product]:
        """Set the available quantity to an absolute value."""
        quantity = self.validate_quantity(amount)
        if quantity.is_err:
            return quantity
        result = self._repo.update(id, {"available_quantity": quantity.value})
        if result.is_err:
            return result
        if result.value is None:
            return Err(product_not_found(id))
        logger.info("product.stock_updated", product_id=str(id), amount=quantity.value)
        return Ok(result.value)

    def reserve_stock(self, id: str, quantity: int | float) -> Result[Product]:
        requested = self._positive_quantity(quantity)
        if requested.is_err:
            return requested

        product = self.get_by_id(id)
        if product.is_err:
            return product
        log = logger.bind(product_id=str(id), quantity=requested.value)

        if not product.value.is_active:
            log.warning("product.reserve_inactive")
            return Err(product_inactive(str(product.value)))
        if product.value.available_quantity < requested.value:
            log.warning(
                "product.reserve_insufficient",
                available=product.value.available_quantity,
            )
            return Err(
                insufficient_inventory(
                    str(product.value), product.value.available_quantity, requested.value
                )
            )

        reserved = self._repo.decrement_stock(id, requested.value)
        if reserved.is_err:
            return reserved
        if not reserved.value:
            # Lost a race against a concurrent reservation.
            current = self.get_by_id(id)
            available = current.value.available_quantity if current.is_ok else 0
            return Err(insufficient_inventory(str(product.value), available, requested.value))

        log.info("product.stock_reserved")
        return self.get_by_id(id)

    def restore_stock(self, id: str, quantity: int | float) -> Result[Product]:
        requested = self._positive_quantity(quantity)
        if requested.is_err:
            return requested

        product = self.get_by_id(id)
        if product.is_err:
            return product

        if product.value.available_quantity + requested.value > MAX_STOCK_QUANTITY:
            return Err(invalid_quantity(quantity))

        restored = self._repo.increment_stock(id, requested.value)
        if restored.is_err:
            return restored
        logger.info("product.stock_restored", product_id=str(id), quantity=requested.value)
        return self.get_by_id(id)

    def activate(self, id: str) -> Result[Product]:
        return self._set_active(id, True)

    def deactivate(self, id: str) -> Result[Product]:
        return self._set_active(id, False)

    def _set_active(self, id: str, active: bool) -> Result[Product]:
        result = self._repo.update(id, {"is_active": active})
        if result.is_err:
            return result
        if result.value is None:
            return Err(product_not_found(id))
        logger.info("product.activation_changed", product_id=str(id), is_active=active)
        return Ok(result.value)

    def delete(self, id: str) -> Result[bool]:
        result = self._repo.soft_delete(id)
        if result.is_err:
            return result
        if not result.value:
            return Err(product_not_found(id))
        return Ok(True)
