"""Filter plumbing: query string to filters DTO in views, DTO to ``FilterSet`` in repositories."""

from __future__ import annotations

from typing import Optional, Type, TypeVar

import django_filters
from django.db.models import QuerySet
from pydantic import BaseModel

from shared.domain.errors import ErrorLayer, validation_error

M = TypeVar("M", bound=BaseModel)


def apply_filters(
    filterset_class: Type[django_filters.FilterSet],
    queryset: QuerySet,
    filters: Optional[BaseModel],
) -> QuerySet:
    """Filtered queryset; raises ``AppError`` when the filter values are invalid."""
    if filters is None:
        return queryset
    data = filters.model_dump(mode="json", exclude_none=True)
    if not data:
        return queryset
    filterset = filterset_class(data=data, queryset=queryset)
    if not filterset.is_valid():
        raise validation_error(
            f"Invalid filters: {dict(filterset.errors)}", ErrorLayer.REPOSITORY
        )
    return filterset.qs


def filters_from_request(request, dto_class: Type[M]) -> M:
    """Filters DTO from the query string; blank parameters are ignored.

    Invalid values raise pydantic's ``ValidationError``, rendered as a 400
    by the exception handler.
    """
    params = {
        name: request.query_params[name]
        for name in dto_class.model_fields
        if request.query_params.get(name, "") != ""
    }
    return dto_class.model_validate(params)
