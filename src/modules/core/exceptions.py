"""DRF exception handler producing one error envelope for every failure::

    {"type": "client_error", "errors": [{"code": ..., "detail": ..., "attr": ...}]}
"""

from __future__ import annotations

from typing import Any, Iterator, Optional

from django.core.exceptions import PermissionDenied
from django.http import Http404
from pydantic import ValidationError as PydanticValidationError
from rest_framework import exceptions
from rest_framework.views import exception_handler

from modules.core.api import DomainAPIException


def _flatten(detail: Any, attr: Optional[str] = None) -> Iterator[dict[str, Any]]:
    if isinstance(detail, dict):
        for key, value in detail.items():
            # list errors may arrive keyed by int index, so 0 is a valid key
            name = str(key) if key != "non_field_errors" else None
            if attr and name is not None:
                name = f"{attr}.{name}"
            yield from _flatten(value, name if name is not None else attr)
    elif isinstance(detail, list):
        for index, item in enumerate(detail):
            if isinstance(item, dict) and attr:
                yield from _flatten(item, f"{attr}.{index}")
            else:
                yield from _flatten(item, attr)
    else:
        yield {
            "code": getattr(detail, "code", None) or "error",
            "detail": str(detail),
            "attr": attr,
        }


def _pydantic_detail(exc: PydanticValidationError) -> dict[str, list[str]]:
    detail: dict[str, list[str]] = {}
    for error in exc.errors():
        attr = ".".join(str(part) for part in error["loc"]) or "non_field_errors"
        detail.setdefault(attr, []).append(error["msg"])
    return detail


def custom_exception_handler(exc: Exception, context: dict) -> Any:
    if isinstance(exc, Http404):
        exc = exceptions.NotFound()
    elif isinstance(exc, PydanticValidationError):
        exc = exceptions.ValidationError(_pydantic_detail(exc))
    elif isinstance(exc, PermissionDenied):
        exc = exceptions.PermissionDenied()

    response = exception_handler(exc, context)
    if response is None:
        return None

    errors = list(_flatten(exc.detail)) if isinstance(exc, exceptions.APIException) else []
    if isinstance(exc, DomainAPIException):
        for item in errors:
            item["code"] = str(exc.error.code)
        if exc.error.details:
            errors[0]["details"] = exc.error.details

    response.data = {
        "type": "server_error" if response.status_code >= 500 else "client_error",
        "errors": errors,
    }
    return response
