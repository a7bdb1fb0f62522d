"""Mapping of domain outcomes to transport errors."""

from __future__ import annotations

import pytest

from modules.core.api import DomainAPIException, TransportCategory, category_for, unwrap
from shared.domain.errors import AppError, ErrorCode, ErrorLayer, database_error
from shared.domain.result import Err, Ok

pytestmark = pytest.mark.unit


class TestCategoryFor:
    @pytest.mark.parametrize(
        "code, category",
        [
            (ErrorCode.ORDER_NOT_FOUND, TransportCategory.NOT_FOUND),
            (ErrorCode.PRODUCT_NOT_FOUND, TransportCategory.NOT_FOUND),
            (ErrorCode.CUSTOMER_NOT_FOUND, TransportCategory.NOT_FOUND),
            (ErrorCode.PRODUCT_INSUFFICIENT_INVENTORY, TransportCategory.CONFLICT),
            (ErrorCode.ORDER_INVALID_STATUS_TRANSITION, TransportCategory.CONFLICT),
            (ErrorCode.CUSTOMER_EMAIL_EXISTS, TransportCategory.CONFLICT),
            (ErrorCode.DATABASE_CONSTRAINT_VIOLATION, TransportCategory.CONFLICT),
            (ErrorCode.VALIDATION_INVALID_INPUT, TransportCategory.BAD_REQUEST),
            (ErrorCode.PRODUCT_PRICE_INVALID, TransportCategory.BAD_REQUEST),
            (ErrorCode.AUTH_UNAUTHORIZED, TransportCategory.UNAUTHORIZED),
            (ErrorCode.DATABASE_QUERY_ERROR, TransportCategory.INTERNAL),
            (ErrorCode.NOTIFICATION_FAILED_TO_SEND, TransportCategory.INTERNAL),
        ],
    )
    def test_category(self, code, category):
        assert category_for(code) is category


class TestUnwrap:
    def test_returns_value_of_ok(self):
        assert unwrap(Ok("value")) == "value"

    def test_raises_for_err(self):
        error = AppError(ErrorCode.ORDER_NOT_FOUND, "Order with ID 1 not found", ErrorLayer.SERVICE)
        with pytest.raises(DomainAPIException) as exc_info:
            unwrap(Err(error))
        assert exc_info.value.status_code == 404
        assert str(exc_info.value.detail) == "Order with ID 1 not found"

    def test_internal_errors_hide_cause(self):
        error = database_error("find orders", RuntimeError("password=hunter2"))
        with pytest.raises(DomainAPIException) as exc_info:
            unwrap(Err(error))
        assert exc_info.value.status_code == 500
        assert "hunter2" not in str(exc_info.value.detail)
