"""Django ORM implementation of the Product repository.

Stock mutations delegate to ``ProductQuerySet.reserve`` / ``release``: single
conditional ``UPDATE`` statements built with ``F()`` expressions, so two
concurrent reservations can never oversell::

    UPDATE products SET available_quantity = available_quantity - :qty
     WHERE id = :id AND available_quantity >= :qty AND is_active AND NOT is_deleted
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db.models import Count, DecimalField, ExpressionWrapper, F, Q, Sum
from django.db.models.functions import Coalesce
from django.utils import timezone

from modules.core.filters import apply_filters
from modules.core.pagination import Page, PaginationDTO, paginate
from modules.core.repositories.guards import db_operation
from modules.products.dtos import ProductFiltersDTO, ProductStatsDTO
from modules.products.filters import ProductFilter
from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository
from shared.domain.result import Ok, Result

logger = structlog.get_logger(__name__)

INVENTORY_VALUE = ExpressionWrapper(
    F("price") * F("available_quantity"),
    output_field=DecimalField(max_digits=20, decimal_places=2),
)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @db_operation("find product by ID")
    def get_by_id(self, id: str) -> Result[Optional[Product]]:
        try:
            return Ok(Product.objects.alive().filter(id=id).first())
        except (ValueError, ValidationError):
            return Ok(None)

    @db_operation("find products by IDs")
    def get_by_ids(self, ids: list[str]) -> Result[Dict[str, Product]]:
        products = Product.objects.alive().filter(id__in=ids)
        return Ok({str(product.id): product for product in products})

    @db_operation("find product by SKU")
    def get_by_sku(self, sku: str) -> Result[Optional[Product]]:
        return Ok(Product.objects.filter(sku=sku.strip().upper()).first())

    @db_operation("find products")
    def find_many(
        self,
        filters: Optional[ProductFiltersDTO] = None,
        pagination: Optional[PaginationDTO] = None,
    ) -> Result[Page[Product]]:
        queryset = apply_filters(ProductFilter, Product.objects.alive(), filters)
        return Ok(paginate(queryset.order_by("name", "-created_at"), pagination))

    @db_operation("find low stock products")
    def find_low_stock(self, threshold: int) -> Result[list[Product]]:
        queryset = Product.objects.alive().filter(
            is_active=True, available_quantity__lte=threshold
        )
        return Ok(list(queryset.order_by("available_quantity", "name")))

    @db_operation("compute product statistics")
    def get_stats(self, low_stock_threshold: int) -> Result[ProductStatsDTO]:
        totals = Product.objects.alive().aggregate(
            total=Count("id"),
            active=Count("id", filter=Q(is_active=True)),
            low_stock=Count(
                "id",
                filter=Q(is_active=True, available_quantity__lte=low_stock_threshold),
            ),
            out_of_stock=Count("id", filter=Q(available_quantity=0)),
            inventory_value=Coalesce(
                Sum(INVENTORY_VALUE),
                Decimal("0"),
                output_field=DecimalField(max_digits=20, decimal_places=2),
            ),
        )
        return Ok(
            ProductStatsDTO(
                total_products=totals["total"],
                active_products=totals["active"],
                inactive_products=totals["total"] - totals["active"],
                low_stock_products=totals["low_stock"],
                out_of_stock_products=totals["out_of_stock"],
                total_inventory_value=Decimal(totals["inventory_value"]).quantize(
                    Decimal("0.01")
                ),
            )
        )

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    @db_operation("create product")
    def create(self, data: Dict[str, Any]) -> Result[Product]:
        product = Product(**data)
        product.save()
        logger.info("product.created", product_id=str(product.id), sku=product.sku)
        return Ok(product)

    @db_operation("update product")
    def update(self, id: str, data: Dict[str, Any]) -> Result[Optional[Product]]:
        product_result = self.get_by_id(id)
        if product_result.is_err or product_result.value is None:
            return product_result

        product = product_result.value
        for field, value in data.items():
            setattr(product, field, value)
        product.save(update_fields=list(data))
        logger.info("product.updated", product_id=str(id), fields=sorted(data))
        return Ok(product)

    @db_operation("reserve product stock")
    def decrement_stock(self, id: str, quantity: int) -> Result[bool]:
        return Ok(Product.objects.reserve(id, quantity))

    @db_operation("restore product stock")
    def increment_stock(self, id: str, quantity: int) -> Result[bool]:
        return Ok(Product.objects.release(id, quantity))

    @db_operation("delete product")
    def soft_delete(self, id: str) -> Result[bool]:
        try:
            updated = (
                Product.objects.alive()
                .filter(id=id)
                .update(is_deleted=True, is_active=False, updated_at=timezone.now())
            )
        except (ValueError, ValidationError):
            return Ok(False)
        if updated:
            logger.info("product.soft_deleted", product_id=str(id))
        return Ok(updated == 1)
