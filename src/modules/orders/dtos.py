"""Order DTOs for the service layer.

Immutable pydantic models passed from the API layer to ``OrderService``.

- ``CreateOrderItemDTO`` / ``CreateOrderDTO``: order creation input.  The
  customer is given either by ``customer_id`` or by inline ``customer``
  data (reused by email when it already exists).
- ``UpdateOrderDTO``: partial update of an order.
- ``OrderFiltersDTO``: list filters.
- ``OrderStatsDTO``: aggregate output.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from modules.customers.dtos import CreateCustomerDTO
from modules.orders.constants import OrderStatus

# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateOrderItemDTO(BaseModel):
    """One requested line.  ``unit_price`` defaults to the current product price."""

    model_config = ConfigDict(frozen=True)

    product_id: UUID
    quantity: int
    unit_price: Optional[Decimal] = None

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1.")
        return v

    @field_validator("unit_price")
    @classmethod
    def unit_price_must_be_non_negative(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        if v is not None and v < 0:
            raise ValueError("Unit price cannot be negative.")
        return v


class CreateOrderDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    items: List[CreateOrderItemDTO]
    customer_id: Optional[UUID] = None
    customer: Optional[CreateCustomerDTO] = None
    notes: str = ""
    customer_notes: str = ""
    shipping_address: str = ""
    billing_address: str = ""
    shipping_cost: Decimal = Field(default=Decimal("0"), ge=0)
    discount: Decimal = Field(default=Decimal("0"), ge=0)

    @field_validator("items")
    @classmethod
    def items_must_not_be_empty(
        cls, v: List[CreateOrderItemDTO]
    ) -> List[CreateOrderItemDTO]:
        if not v:
            raise ValueError("Order must have at least one item.")
        return v

    def requested_quantities(self) -> dict[str, int]:
        """Total requested quantity per product (repeated lines are summed)."""
        totals: dict[str, int] = {}
        for item in self.items:
            key = str(item.product_id)
            totals[key] = totals.get(key, 0) + item.quantity
        return totals


class UpdateOrderDTO(BaseModel):
    """Partial update; ``None`` means "leave unchanged"."""

    model_config = ConfigDict(frozen=True)

    status: Optional[OrderStatus] = None
    notes: Optional[str] = None
    customer_notes: Optional[str] = None
    shipping_address: Optional[str] = None
    billing_address: Optional[str] = None
    tracking_number: Optional[str] = None
    shipping_cost: Optional[Decimal] = Field(default=None, ge=0)
    discount: Optional[Decimal] = Field(default=None, ge=0)
    cancellation_reason: Optional[str] = None

    def field_changes(self) -> dict:
        """Plain field changes (status and cancellation reason excluded)."""
        return self.model_dump(
            exclude_none=True, exclude={"status", "cancellation_reason"}
        )


class OrderFiltersDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Optional[OrderStatus] = None
    customer_id: Optional[UUID] = None
    customer_email: Optional[str] = None
    product_id: Optional[UUID] = None
    order_number: Optional[str] = None
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    min_amount: Optional[Decimal] = None
    max_amount: Optional[Decimal] = None


# ---------------------------------------------------------------------------
# Output DTOs
# ---------------------------------------------------------------------------


class OrderStatsDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_orders: int
    pending_orders: int
    processing_orders: int
    shipped_orders: int
    cancelled_orders: int
    total_revenue: Decimal
    average_order_value: Decimal
