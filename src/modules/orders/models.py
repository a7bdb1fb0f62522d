"""Order, OrderItem and OrderNumberSequence models.

- ``order_number`` is ``<prefix>-<year>-<seq>`` where ``seq`` comes from the
  per-year ``OrderNumberSequence`` row, locked and incremented inside the
  same transaction that inserts the order.
- Customer and product FKs use PROTECT so financial history is never lost;
  items cascade with their order.
- ``OrderItem.unit_price`` is a snapshot of the price at order time and
  ``total_price`` is recalculated on every save.
- Monetary columns are non-negative (check constraints).
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import F
from django.utils import timezone

from modules.core.models import BaseModel, SoftDeleteModel
from modules.orders.constants import TERMINAL_STATES, OrderStatus, can_transition
from modules.orders.pricing import ZERO, line_total


class OrderNumberSequence(models.Model):
    """Running order counter, one row per calendar year."""

    year: models.PositiveIntegerField = models.PositiveIntegerField(primary_key=True)
    last_value: models.PositiveIntegerField = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "order_number_sequences"

    @classmethod
    def next_order_number(cls) -> str:
        """Reserve the next number for the current local year.

        Must run inside ``transaction.atomic()``: the row stays locked until
        the surrounding transaction commits.
        """
        year = timezone.localdate().year
        cls.objects.get_or_create(year=year)
        cls.objects.filter(year=year).update(last_value=F("last_value") + 1)
        sequence = cls.objects.select_for_update().get(year=year)
        return f"{settings.ORDER_NUMBER_PREFIX}-{year}-{sequence.last_value:04d}"

    def __str__(self) -> str:
        return f"{self.year}: {self.last_value}"


class Order(SoftDeleteModel):
    order_number: models.CharField = models.CharField(
        max_length=32, unique=True, editable=False
    )
    status: models.CharField = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING,
    )
    customer: models.ForeignKey = models.ForeignKey(
        "customers.Customer",
        on_delete=models.PROTECT,
        related_name="orders",
    )
    subtotal: models.DecimalField = models.DecimalField(
        max_digits=14, decimal_places=2, default=ZERO
    )
    tax_amount: models.DecimalField = models.DecimalField(
        max_digits=14, decimal_places=2, default=ZERO
    )
    shipping_cost: models.DecimalField = models.DecimalField(
        max_digits=12, decimal_places=2, default=ZERO
    )
    discount: models.DecimalField = models.DecimalField(
        max_digits=12, decimal_places=2, default=ZERO
    )
    total_amount: models.DecimalField = models.DecimalField(
        max_digits=14, decimal_places=2, default=ZERO
    )
    notes: models.TextField = models.TextField(blank=True, default="")
    customer_notes: models.TextField = models.TextField(blank=True, default="")
    shipping_address: models.TextField = models.TextField(blank=True, default="")
    billing_address: models.TextField = models.TextField(blank=True, default="")
    tracking_number: models.CharField = models.CharField(
        max_length=100, blank=True, default=""
    )
    shipped_at: models.DateTimeField = models.DateTimeField(null=True, blank=True)
    delivered_at: models.DateTimeField = models.DateTimeField(null=True, blank=True)
    cancelled_at: models.DateTimeField = models.DateTimeField(null=True, blank=True)
    cancellation_reason: models.TextField = models.TextField(blank=True, default="")

    class Meta:
        db_table = "orders"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status"], name="orders_status_idx"),
            models.Index(fields=["-created_at"], name="orders_created_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(subtotal__gte=0)
                & models.Q(tax_amount__gte=0)
                & models.Q(shipping_cost__gte=0)
                & models.Q(discount__gte=0)
                & models.Q(total_amount__gte=0),
                name="orders_amounts_non_negative",
            ),
        ]

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATES

    def can_transition_to(self, new_status: str) -> bool:
        return can_transition(self.status, new_status)

    def __str__(self) -> str:
        return f"{self.order_number} ({self.status})"


class OrderItem(BaseModel):
    """Line item.  Not soft-deleted: it lives and dies with its order."""

    order: models.ForeignKey = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="items",
    )
    product: models.ForeignKey = models.ForeignKey(
        "products.Product",
        on_delete=models.PROTECT,
        related_name="order_items",
    )
    quantity: models.PositiveIntegerField = models.PositiveIntegerField(
        validators=[MinValueValidator(1)],
    )
    unit_price: models.DecimalField = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
    )
    discount: models.DecimalField = models.DecimalField(
        max_digits=12, decimal_places=2, default=ZERO
    )
    total_price: models.DecimalField = models.DecimalField(
        max_digits=14, decimal_places=2, default=ZERO
    )

    class Meta:
        db_table = "order_items"
        ordering = ["created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="order_items_quantity_positive",
            ),
        ]

    def save(self, *args: Any, **kwargs: Any) -> None:
        self.total_price = line_total(self.quantity, self.unit_price, self.discount)
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.quantity}x {self.product_id} @ {self.unit_price}"
