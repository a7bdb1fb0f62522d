"""Transport boundary: domain outcomes to HTTP.

Views call ``unwrap`` on every service ``Result``.  This is the only place
where an ``Err`` becomes a raised exception; its code is mapped to a
transport status category and the wrapped cause is dropped.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TypeVar

import structlog
from rest_framework import status
from rest_framework.exceptions import APIException

from shared.domain.errors import AppError, ErrorCode
from shared.domain.result import Result

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class TransportCategory(StrEnum):
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"
    INTERNAL = "internal"


CATEGORY_BY_CODE: dict[ErrorCode, TransportCategory] = {
    ErrorCode.ORDER_NOT_FOUND: TransportCategory.NOT_FOUND,
    ErrorCode.PRODUCT_NOT_FOUND: TransportCategory.NOT_FOUND,
    ErrorCode.CUSTOMER_NOT_FOUND: TransportCategory.NOT_FOUND,
    ErrorCode.ORDER_ALREADY_CANCELLED: TransportCategory.CONFLICT,
    ErrorCode.ORDER_INVALID_STATUS_TRANSITION: TransportCategory.CONFLICT,
    ErrorCode.ORDER_CANNOT_BE_MODIFIED: TransportCategory.CONFLICT,
    ErrorCode.PRODUCT_OUT_OF_STOCK: TransportCategory.CONFLICT,
    ErrorCode.PRODUCT_INSUFFICIENT_INVENTORY: TransportCategory.CONFLICT,
    ErrorCode.PRODUCT_INACTIVE: TransportCategory.CONFLICT,
    ErrorCode.CUSTOMER_EMAIL_EXISTS: TransportCategory.CONFLICT,
    ErrorCode.DATABASE_CONSTRAINT_VIOLATION: TransportCategory.CONFLICT,
    ErrorCode.PRODUCT_INVALID_QUANTITY: TransportCategory.BAD_REQUEST,
    ErrorCode.PRODUCT_PRICE_INVALID: TransportCategory.BAD_REQUEST,
    ErrorCode.CUSTOMER_INVALID_EMAIL: TransportCategory.BAD_REQUEST,
    ErrorCode.VALIDATION_INVALID_INPUT: TransportCategory.BAD_REQUEST,
    ErrorCode.VALIDATION_REQUIRED_FIELD: TransportCategory.BAD_REQUEST,
    ErrorCode.AUTH_UNAUTHORIZED: TransportCategory.UNAUTHORIZED,
}

STATUS_BY_CATEGORY: dict[TransportCategory, int] = {
    TransportCategory.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    TransportCategory.CONFLICT: status.HTTP_409_CONFLICT,
    TransportCategory.BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
    TransportCategory.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    TransportCategory.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def category_for(code: ErrorCode) -> TransportCategory:
    return CATEGORY_BY_CODE.get(code, TransportCategory.INTERNAL)


class DomainAPIException(APIException):
    """DRF exception raised from a domain ``AppError``."""

    def __init__(self, error: AppError) -> None:
        self.error = error
        self.category = category_for(error.code)
        self.status_code = STATUS_BY_CATEGORY[self.category]
        super().__init__(detail=error.message, code=str(error.code))


def unwrap(result: Result[T]) -> T:
    """Return the success value or raise ``DomainAPIException``."""
    if result.is_ok:
        return result.value

    error = result.error
    log = logger.bind(code=str(error.code), layer=str(error.layer))
    if category_for(error.code) is TransportCategory.INTERNAL:
        log.error(
            "api.domain_error",
            message=error.message,
            cause=repr(error.cause) if error.cause else None,
        )
    else:
        log.info("api.domain_error", message=error.message)
    raise DomainAPIException(error)
