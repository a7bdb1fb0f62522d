"""Offset pagination shared by every list operation.

Repositories slice querysets with ``paginate``; views render the resulting
``Page`` with ``paginated_response`` as::

    {"data": [...], "pagination": {"page", "limit", "total",
                                   "total_pages", "has_next", "has_prev"}}
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Generic, Type, TypeVar

from django.conf import settings
from django.db.models import QuerySet
from pydantic import BaseModel, ConfigDict, Field
from rest_framework import serializers
from rest_framework.response import Response

T = TypeVar("T")


class PaginationDTO(BaseModel):
    """Page request.  ``limit`` is unbounded here; the API caps it."""

    model_config = ConfigDict(frozen=True)

    page: int = Field(default=1, ge=1)
    limit: int = Field(default_factory=lambda: settings.DEFAULT_PAGE_SIZE, ge=1)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class PageMeta:
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


@dataclass(frozen=True)
class Page(Generic[T]):
    data: list[T]
    pagination: PageMeta


def paginate(queryset: QuerySet, pagination: PaginationDTO | None = None) -> Page:
    pagination = pagination or PaginationDTO()
    total = queryset.count()
    total_pages = math.ceil(total / pagination.limit) if total else 0
    rows = list(queryset[pagination.offset : pagination.offset + pagination.limit])
    return Page(
        data=rows,
        pagination=PageMeta(
            page=pagination.page,
            limit=pagination.limit,
            total=total,
            total_pages=total_pages,
            has_next=pagination.page < total_pages,
            has_prev=pagination.page > 1,
        ),
    )


class PaginationQuerySerializer(serializers.Serializer):
    """Validates ``?page=&limit=`` on list endpoints."""

    page = serializers.IntegerField(min_value=1, required=False, default=1)
    limit = serializers.IntegerField(
        min_value=1,
        max_value=settings.MAX_PAGE_SIZE,
        required=False,
        default=settings.DEFAULT_PAGE_SIZE,
    )

    def to_dto(self) -> PaginationDTO:
        return PaginationDTO(**self.validated_data)


def pagination_from_request(request) -> PaginationDTO:
    serializer = PaginationQuerySerializer(data=request.query_params)
    serializer.is_valid(raise_exception=True)
    return serializer.to_dto()


def paginated_response(page: Page, serializer_class: Type[serializers.Serializer]) -> Response:
    return Response(
        {
            "data": serializer_class(page.data, many=True).data,
            "pagination": asdict(page.pagination),
        }
    )
