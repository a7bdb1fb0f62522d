"""Product error factories."""

from __future__ import annotations

from decimal import Decimal

from modules.products.constants import MAX_STOCK_QUANTITY
from shared.domain.errors import AppError, ErrorCode, ErrorLayer


def product_not_found(product_id: object) -> AppError:
    return AppError(
        ErrorCode.PRODUCT_NOT_FOUND,
        f"Product with ID {product_id} not found",
        ErrorLayer.SERVICE,
    )


def product_inactive(name: str) -> AppError:
    return AppError(
        ErrorCode.PRODUCT_INACTIVE,
        f"Product {name} is inactive",
        ErrorLayer.SERVICE,
    )


def insufficient_inventory(
    name: str, available: int, requested: int, layer: ErrorLayer = ErrorLayer.SERVICE
) -> AppError:
    return AppError(
        ErrorCode.PRODUCT_INSUFFICIENT_INVENTORY,
        f"Insufficient inventory for {name}. "
        f"Available: {available}, Requested: {requested}",
        layer,
    )


def invalid_quantity(quantity: object) -> AppError:
    return AppError(
        ErrorCode.PRODUCT_INVALID_QUANTITY,
        f"Invalid quantity: {quantity}. Quantity must be an integer between 0 and "
        f"{MAX_STOCK_QUANTITY}",
        ErrorLayer.SERVICE,
    )


def price_invalid(price: Decimal, maximum: Decimal) -> AppError:
    return AppError(
        ErrorCode.PRODUCT_PRICE_INVALID,
        f"Invalid price: {price}. Price must be between 0 and {maximum}",
        ErrorLayer.SERVICE,
    )
