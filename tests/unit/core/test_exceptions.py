"""Error envelope produced by the DRF exception handler."""

from __future__ import annotations

import pytest
from rest_framework import exceptions
from rest_framework.exceptions import ErrorDetail

from modules.core.api import DomainAPIException
from modules.core.exceptions import _flatten, custom_exception_handler
from shared.domain.errors import internal_error

pytestmark = pytest.mark.unit


def _quantity_error() -> list[ErrorDetail]:
    return [ErrorDetail("Ensure this value is greater than or equal to 1.", code="min_value")]


class TestFlatten:
    def test_nested_list_errors_keyed_by_index(self):
        detail = {"items": {0: {"quantity": _quantity_error()}, 2: {"quantity": _quantity_error()}}}

        attrs = [item["attr"] for item in _flatten(detail)]

        assert attrs == ["items.0.quantity", "items.2.quantity"]

    def test_nested_list_errors_as_list(self):
        detail = {"items": [{}, {"quantity": _quantity_error()}]}

        assert [item["attr"] for item in _flatten(detail)] == ["items.1.quantity"]

    def test_non_field_errors_have_no_attr(self):
        detail = {"non_field_errors": [ErrorDetail("Give customer_id or customer", code="invalid")]}

        assert list(_flatten(detail)) == [
            {"code": "invalid", "detail": "Give customer_id or customer", "attr": None}
        ]


class TestHandler:
    def test_validation_error_envelope(self):
        exc = exceptions.ValidationError({"items": {0: {"quantity": _quantity_error()}}})

        response = custom_exception_handler(exc, {})

        assert response.status_code == 400
        assert response.data == {
            "type": "client_error",
            "errors": [
                {
                    "code": "min_value",
                    "detail": "Ensure this value is greater than or equal to 1.",
                    "attr": "items.0.quantity",
                }
            ],
        }

    def test_internal_error_envelope(self):
        error = internal_error("store quantity", OverflowError("too large"))

        response = custom_exception_handler(DomainAPIException(error), {})

        assert response.status_code == 500
        assert response.data["type"] == "server_error"
        assert response.data["errors"][0]["code"] == "SYSTEM_INTERNAL_ERROR"
        assert "too large" not in response.data["errors"][0]["detail"]
