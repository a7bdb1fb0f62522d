"""Product DTOs for the service layer.

Immutable pydantic models passed from the API layer to ``ProductService``.
Quantities are accepted as ``int | float`` so the service, not the DTO,
decides that ``2.5`` is an invalid quantity (``PRODUCT_INVALID_QUANTITY``);
range checks on price and quantity live in the service for the same reason.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, field_validator

from modules.products.constants import ProductCategory, ProductName

Quantity = int | float


class CreateProductDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: ProductName
    price: Decimal
    available_quantity: Quantity
    category: ProductCategory
    description: str = ""
    brand: str = ""
    model: str = ""
    sku: str | None = None
    image_url: str = ""

    @field_validator("sku")
    @classmethod
    def blank_sku_is_none(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return v.strip().upper()


class UpdateProductDTO(BaseModel):
    """Partial update; ``None`` means "leave unchanged"."""

    model_config = ConfigDict(frozen=True)

    description: str | None = None
    price: Decimal | None = None
    available_quantity: Quantity | None = None
    category: ProductCategory | None = None
    brand: str | None = None
    model: str | None = None
    image_url: str | None = None
    is_active: bool | None = None

    def changes(self) -> dict:
        return self.model_dump(exclude_none=True)


class ProductFiltersDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: ProductName | None = None
    category: ProductCategory | None = None
    brand: str | None = None
    is_active: bool | None = None
    in_stock: bool | None = None


class ProductStatsDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_products: int
    active_products: int
    inactive_products: int
    low_stock_products: int
    out_of_stock_products: int
    total_inventory_value: Decimal
