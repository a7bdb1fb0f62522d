"""Order item API views: list, retrieve and append to a PENDING order."""

from __future__ import annotations

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.api import unwrap
from modules.core.container import get_container
from modules.core.filters import filters_from_request
from modules.core.pagination import pagination_from_request, paginated_response
from modules.order_items.dtos import OrderItemFiltersDTO
from modules.order_items.serializers import AddOrderItemSerializer, OrderItemDetailSerializer


class OrderItemViewSet(GenericViewSet):
    serializer_class = OrderItemDetailSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = get_container().order_items

    def list(self, request: Request) -> Response:
        """GET /api/v1/order-items/"""
        page = unwrap(
            self._service.get_all(
                filters_from_request(request, OrderItemFiltersDTO),
                pagination_from_request(request),
            )
        )
        return paginated_response(page, OrderItemDetailSerializer)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/order-items/{pk}/"""
        item = unwrap(self._service.get_by_id(pk))
        return Response(OrderItemDetailSerializer(item).data)

    def create(self, request: Request) -> Response:
        """POST /api/v1/order-items/"""
        serializer = AddOrderItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        item = unwrap(self._service.create(serializer.to_dto()))
        return Response(
            OrderItemDetailSerializer(item).data, status=status.HTTP_201_CREATED
        )
