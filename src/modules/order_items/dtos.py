"""Order item DTOs.

``AddOrderItemDTO`` appends a line to an existing PENDING order; the lines
of a brand-new order come in through ``orders.dtos.CreateOrderItemDTO``.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class AddOrderItemDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    order_id: UUID
    product_id: UUID
    quantity: int = Field(ge=1)
    unit_price: Optional[Decimal] = Field(default=None, ge=0)
    discount: Decimal = Field(default=Decimal("0"), ge=0)


class OrderItemFiltersDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    order_id: Optional[UUID] = None
    product_id: Optional[UUID] = None
    min_quantity: Optional[int] = None
    max_quantity: Optional[int] = None
