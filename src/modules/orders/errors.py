"""Order error factories."""

from __future__ import annotations

from shared.domain.errors import AppError, ErrorCode, ErrorLayer


def order_not_found(order_id: object) -> AppError:
    return AppError(
        ErrorCode.ORDER_NOT_FOUND,
        f"Order with ID {order_id} not found",
        ErrorLayer.SERVICE,
    )


def order_number_not_found(order_number: str) -> AppError:
    return AppError(
        ErrorCode.ORDER_NOT_FOUND,
        f"Order with number {order_number} not found",
        ErrorLayer.SERVICE,
    )


def order_already_cancelled(order_id: object) -> AppError:
    return AppError(
        ErrorCode.ORDER_ALREADY_CANCELLED,
        f"Order {order_id} is already cancelled",
        ErrorLayer.SERVICE,
    )


def invalid_status_transition(current: str, target: str) -> AppError:
    return AppError(
        ErrorCode.ORDER_INVALID_STATUS_TRANSITION,
        f"Cannot transition order from {current} to {target}",
        ErrorLayer.SERVICE,
    )


def order_cannot_be_modified(order_id: object, status: str) -> AppError:
    return AppError(
        ErrorCode.ORDER_CANNOT_BE_MODIFIED,
        f"Order {order_id} cannot be modified in status {status}",
        ErrorLayer.SERVICE,
    )
