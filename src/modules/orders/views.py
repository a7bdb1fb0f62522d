"""Order API views.

Exposes ``OrderService`` over HTTP.  Domain failures are raised by
``unwrap`` and rendered by the project exception handler.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.api import unwrap
from modules.core.container import get_container
from modules.core.filters import filters_from_request
from modules.core.pagination import pagination_from_request, paginated_response
from modules.orders.dtos import OrderFiltersDTO
from modules.orders.serializers import (
    CancelOrderSerializer,
    CreateOrderSerializer,
    CustomerIdSerializer,
    OrderSerializer,
    OrderStatsSerializer,
    UpdateOrderSerializer,
    UpdateOrderStatusSerializer,
)


class OrderViewSet(GenericViewSet):
    """Order lifecycle endpoints.

    Does **not** extend ``ModelViewSet``: every read and write goes through
    ``OrderService`` so stock and totals stay consistent.
    """

    serializer_class = OrderSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = get_container().orders

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/"""
        page = unwrap(
            self._service.get_all(
                filters_from_request(request, OrderFiltersDTO),
                pagination_from_request(request),
            )
        )
        return paginated_response(page, OrderSerializer)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        order = unwrap(self._service.get_by_id(pk))
        return Response(OrderSerializer(order).data)

    @action(detail=False, methods=["get"], url_path=r"by-number/(?P<order_number>[^/]+)")
    def by_number(self, request: Request, order_number: str) -> Response:
        """GET /api/v1/orders/by-number/{order_number}/"""
        order = unwrap(self._service.get_by_order_number(order_number))
        return Response(OrderSerializer(order).data)

    @action(detail=False, methods=["get"], url_path=r"by-customer/(?P<customer_id>[^/]+)")
    def by_customer(self, request: Request, customer_id: str) -> Response:
        """GET /api/v1/orders/by-customer/{customer_id}/"""
        path = CustomerIdSerializer(data={"customer_id": customer_id})
        path.is_valid(raise_exception=True)
        page = unwrap(
            self._service.get_by_customer_id(
                str(path.validated_data["customer_id"]),
                pagination_from_request(request),
            )
        )
        return paginated_response(page, OrderSerializer)

    @action(detail=False, methods=["get"], url_path="pending")
    def pending(self, request: Request) -> Response:
        """GET /api/v1/orders/pending/ (at most 100, newest first)"""
        orders = unwrap(self._service.get_pending())
        return Response({"data": OrderSerializer(orders, many=True).data})

    @action(detail=False, methods=["get"], url_path="stats")
    def stats(self, request: Request) -> Response:
        """GET /api/v1/orders/stats/"""
        stats = unwrap(self._service.get_stats())
        return Response(OrderStatsSerializer(stats).data)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/"""
        serializer = CreateOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = unwrap(self._service.create(serializer.to_dto()))
        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/orders/{pk}/"""
        serializer = UpdateOrderSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        order = unwrap(self._service.update(pk, serializer.to_dto()))
        return Response(OrderSerializer(order).data)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/orders/{pk}/"""
        return self.partial_update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/orders/{pk}/ (PENDING or CANCELLED only)"""
        unwrap(self._service.delete(pk))
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["post"], url_path="status")
    def update_status(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/orders/{pk}/status/  ``{"status": ..., "reason": ...}``"""
        serializer = UpdateOrderStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = unwrap(
            self._service.update_status(
                pk,
                serializer.validated_data["status"],
                serializer.validated_data["reason"],
            )
        )
        return Response(OrderSerializer(order).data)

    @action(detail=True, methods=["post"], url_path="cancel")
    def cancel(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/orders/{pk}/cancel/  ``{"reason": ...}``"""
        serializer = CancelOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = unwrap(self._service.cancel(pk, serializer.validated_data["reason"]))
        return Response(OrderSerializer(order).data)
