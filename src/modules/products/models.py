"""Product model.

- ``sku`` is optional but unique when present; normalised to upper-case and
  stored as NULL when blank so several SKU-less products can coexist.
- ``available_quantity`` can never go negative (check constraint); stock is
  mutated with conditional ``F()`` updates in the repository.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import F
from django.utils import timezone

from modules.core.models import SoftDeleteModel, SoftDeleteQuerySet
from modules.products.constants import ProductCategory, ProductName


class ProductQuerySet(SoftDeleteQuerySet):
    def reserve(self, product_id, quantity: int) -> bool:
        """Conditional decrement; ``False`` when stock is short or the
        product is inactive/deleted."""
        updated = self.filter(
            id=product_id,
            is_deleted=False,
            is_active=True,
            available_quantity__gte=quantity,
        ).update(
            available_quantity=F("available_quantity") - quantity,
            updated_at=timezone.now(),
        )
        return updated == 1

    def release(self, product_id, quantity: int) -> bool:
        updated = self.filter(id=product_id).update(
            available_quantity=F("available_quantity") + quantity,
            updated_at=timezone.now(),
        )
        return updated == 1


class Product(SoftDeleteModel):
    name = models.CharField(max_length=20, choices=ProductName.choices)
    description = models.TextField(blank=True, default="")
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
    )
    available_quantity = models.PositiveIntegerField(default=0)
    category = models.CharField(max_length=20, choices=ProductCategory.choices)
    brand = models.CharField(max_length=100, blank=True, default="")
    model = models.CharField(max_length=100, blank=True, default="")
    sku = models.CharField(max_length=64, unique=True, null=True, blank=True)
    image_url = models.URLField(max_length=500, blank=True, default="")
    is_active = models.BooleanField(default=True)

    objects = models.Manager.from_queryset(ProductQuerySet)()

    class Meta:
        db_table = "products"
        ordering = ["name", "-created_at"]
        indexes = [
            models.Index(fields=["category"], name="products_category_idx"),
            models.Index(fields=["is_active"], name="products_active_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gte=0),
                name="products_price_non_negative",
            ),
            models.CheckConstraint(
                condition=models.Q(available_quantity__gte=0),
                name="products_quantity_non_negative",
            ),
        ]

    @property
    def in_stock(self) -> bool:
        return self.available_quantity > 0

    def save(self, *args, **kwargs) -> None:
        self.sku = self.sku.strip().upper() if self.sku and self.sku.strip() else None
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        label = f"{self.get_name_display()} {self.brand} {self.model}".strip()
        return f"{self.sku} - {label}" if self.sku else label
