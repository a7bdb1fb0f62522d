"""Customer error factories."""

from __future__ import annotations

from typing import Optional

from shared.domain.errors import AppError, ErrorCode, ErrorLayer


def customer_not_found(customer_id: object) -> AppError:
    return AppError(
        ErrorCode.CUSTOMER_NOT_FOUND,
        f"Customer with ID {customer_id} not found",
        ErrorLayer.SERVICE,
    )


def customer_email_exists(
    email: str,
    layer: ErrorLayer = ErrorLayer.SERVICE,
    cause: Optional[BaseException] = None,
) -> AppError:
    return AppError(
        ErrorCode.CUSTOMER_EMAIL_EXISTS,
        f"Customer with email {email} already exists",
        layer,
        cause,
    )


def invalid_email(email: str) -> AppError:
    return AppError(
        ErrorCode.CUSTOMER_INVALID_EMAIL,
        f"Invalid email format: {email}",
        ErrorLayer.SERVICE,
    )
