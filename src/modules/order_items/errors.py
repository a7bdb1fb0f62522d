"""Order item error factories."""

from __future__ import annotations

from typing import Any

from shared.domain.errors import AppError, ErrorCode, ErrorLayer

# Lower rank wins when several products of one request fail.
VIOLATION_PRECEDENCE: dict[ErrorCode, int] = {
    ErrorCode.PRODUCT_NOT_FOUND: 0,
    ErrorCode.PRODUCT_INACTIVE: 1,
    ErrorCode.PRODUCT_INSUFFICIENT_INVENTORY: 2,
}


def order_item_not_found(item_id: object) -> AppError:
    return AppError(
        ErrorCode.VALIDATION_INVALID_INPUT,
        "Order item not found",
        ErrorLayer.SERVICE,
        details=[{"attr": "id", "value": str(item_id)}],
    )


def stock_validation_failed(violations: list[dict[str, Any]]) -> AppError:
    """One error for every violation found; ``details`` lists them all."""
    ranked = sorted(violations, key=lambda v: VIOLATION_PRECEDENCE[v["code"]])
    if len(ranked) == 1:
        message = ranked[0]["message"]
    else:
        message = f"{len(ranked)} items failed stock validation: " + "; ".join(
            v["message"] for v in ranked
        )
    return AppError(
        ranked[0]["code"],
        message,
        ErrorLayer.SERVICE,
        details=[{**v, "code": str(v["code"])} for v in violations],
    )
