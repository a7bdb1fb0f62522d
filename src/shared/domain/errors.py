"""Error taxonomy shared by every layer.

``AppError`` is the structured failure carried by ``Err``.  It subclasses
``Exception`` only so that repositories can raise it inside
``transaction.atomic()`` to roll a unit of work back; it is caught again in
the same repository method and returned as a value.

Codes are grouped by subject.  Entity-specific factories live next to each
module (``modules/<entity>/errors.py``); the generic ones are here.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Optional


class ErrorLayer(StrEnum):
    REPOSITORY = "repository"
    SERVICE = "service"
    ROUTER = "router"


class ErrorCode(StrEnum):
    # Order
    ORDER_NOT_FOUND = "ORDER_NOT_FOUND"
    ORDER_ALREADY_CANCELLED = "ORDER_ALREADY_CANCELLED"
    ORDER_INVALID_STATUS_TRANSITION = "ORDER_INVALID_STATUS_TRANSITION"
    ORDER_CANNOT_BE_MODIFIED = "ORDER_CANNOT_BE_MODIFIED"

    # Product
    PRODUCT_NOT_FOUND = "PRODUCT_NOT_FOUND"
    PRODUCT_OUT_OF_STOCK = "PRODUCT_OUT_OF_STOCK"
    PRODUCT_INSUFFICIENT_INVENTORY = "PRODUCT_INSUFFICIENT_INVENTORY"
    PRODUCT_INACTIVE = "PRODUCT_INACTIVE"
    PRODUCT_INVALID_QUANTITY = "PRODUCT_INVALID_QUANTITY"
    PRODUCT_PRICE_INVALID = "PRODUCT_PRICE_INVALID"

    # Customer
    CUSTOMER_NOT_FOUND = "CUSTOMER_NOT_FOUND"
    CUSTOMER_EMAIL_EXISTS = "CUSTOMER_EMAIL_EXISTS"
    CUSTOMER_INVALID_EMAIL = "CUSTOMER_INVALID_EMAIL"

    # Notification (external collaborator)
    NOTIFICATION_FAILED_TO_SEND = "NOTIFICATION_FAILED_TO_SEND"
    NOTIFICATION_GENERATION_FAILED = "NOTIFICATION_GENERATION_FAILED"

    # Database
    DATABASE_CONNECTION_ERROR = "DATABASE_CONNECTION_ERROR"
    DATABASE_QUERY_ERROR = "DATABASE_QUERY_ERROR"
    DATABASE_TRANSACTION_ERROR = "DATABASE_TRANSACTION_ERROR"
    DATABASE_CONSTRAINT_VIOLATION = "DATABASE_CONSTRAINT_VIOLATION"

    # Validation
    VALIDATION_INVALID_INPUT = "VALIDATION_INVALID_INPUT"
    VALIDATION_REQUIRED_FIELD = "VALIDATION_REQUIRED_FIELD"

    # Auth (reserved)
    AUTH_UNAUTHORIZED = "AUTH_UNAUTHORIZED"

    # System
    SYSTEM_INTERNAL_ERROR = "SYSTEM_INTERNAL_ERROR"


class AppError(Exception):
    """Structured domain failure.

    ``cause`` keeps the wrapped low-level exception for logs; it is never
    serialised to API callers.  ``details`` carries optional structured
    context (e.g. every stock violation of an order).
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        layer: ErrorLayer,
        cause: Optional[BaseException] = None,
        details: Optional[list[dict[str, Any]]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.layer = layer
        self.cause = cause
        self.details = details or []

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "code": str(self.code),
            "message": self.message,
            "layer": str(self.layer),
        }
        if self.details:
            data["details"] = self.details
        return data

    def __repr__(self) -> str:
        return f"AppError(code={self.code!s}, layer={self.layer!s}, message={self.message!r})"


# ---------------------------------------------------------------------------
# Generic factories
# ---------------------------------------------------------------------------


def database_error(operation: str, cause: Optional[BaseException] = None) -> AppError:
    return AppError(
        ErrorCode.DATABASE_QUERY_ERROR,
        f"Database error during {operation}",
        ErrorLayer.REPOSITORY,
        cause,
    )


def constraint_violation(
    operation: str, cause: Optional[BaseException] = None
) -> AppError:
    return AppError(
        ErrorCode.DATABASE_CONSTRAINT_VIOLATION,
        f"Constraint violation during {operation}",
        ErrorLayer.REPOSITORY,
        cause,
    )


def validation_error(
    message: str, layer: ErrorLayer = ErrorLayer.SERVICE
) -> AppError:
    return AppError(ErrorCode.VALIDATION_INVALID_INPUT, message, layer)


def required_field(field: str, layer: ErrorLayer = ErrorLayer.SERVICE) -> AppError:
    return AppError(
        ErrorCode.VALIDATION_REQUIRED_FIELD, f"Field '{field}' is required", layer
    )


def internal_error(
    operation: str,
    cause: Optional[BaseException] = None,
    layer: ErrorLayer = ErrorLayer.REPOSITORY,
) -> AppError:
    return AppError(
        ErrorCode.SYSTEM_INTERNAL_ERROR,
        f"Unexpected error during {operation}",
        layer,
        cause,
    )
