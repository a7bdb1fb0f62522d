"""Product API views.

Exposes ``ProductService`` over HTTP.  Every service ``Result`` goes through
``unwrap``: a domain error becomes a ``DomainAPIException`` rendered by the
project exception handler, so the views themselves never build error
responses.
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
from modules.products.dtos import ProductFiltersDTO
from modules.products.serializers import (
    CategoryQuerySerializer,
    CreateProductSerializer,
    ProductSerializer,
    ProductStatsSerializer,
    QuantitySerializer,
    ThresholdQuerySerializer,
    UpdateProductSerializer,
)


class ProductViewSet(GenericViewSet):
    """Product endpoints.  All ORM access goes through the service layer."""

    serializer_class = ProductSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = get_container().products

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/products/"""
        page = unwrap(
            self._service.get_all(
                filters_from_request(request, ProductFiltersDTO),
                pagination_from_request(request),
            )
        )
        return paginated_response(page, ProductSerializer)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/products/{pk}/"""
        product = unwrap(self._service.get_by_id(pk))
        return Response(ProductSerializer(product).data)

    def create(self, request: Request) -> Response:
        """POST /api/v1/products/"""
        serializer = CreateProductSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        product = unwrap(self._service.create(serializer.to_dto()))
        return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/products/{pk}/"""
        serializer = UpdateProductSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        product = unwrap(self._service.update(pk, serializer.to_dto()))
        return Response(ProductSerializer(product).data)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/products/{pk}/"""
        return self.partial_update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/products/{pk}/ (soft delete)"""
        unwrap(self._service.delete(pk))
        return Response(status=status.HTTP_204_NO_CONTENT)

    # ------------------------------------------------------------------
    # Catalogue queries
    # ------------------------------------------------------------------

    @action(detail=False, methods=["get"], url_path="active")
    def active(self, request: Request) -> Response:
        """GET /api/v1/products/active/"""
        page = unwrap(self._service.get_active(pagination_from_request(request)))
        return paginated_response(page, ProductSerializer)

    @action(detail=False, methods=["get"], url_path="by-category")
    def by_category(self, request: Request) -> Response:
        """GET /api/v1/products/by-category/?category=PROFESSIONAL"""
        query = CategoryQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        page = unwrap(
            self._service.get_by_category(
                query.validated_data["category"], pagination_from_request(request)
            )
        )
        return paginated_response(page, ProductSerializer)

    @action(detail=False, methods=["get"], url_path="low-stock")
    def low_stock(self, request: Request) -> Response:
        """GET /api/v1/products/low-stock/?threshold=10"""
        query = ThresholdQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        products = unwrap(self._service.get_low_stock(query.validated_data["threshold"]))
        return Response({"data": ProductSerializer(products, many=True).data})

    @action(detail=False, methods=["get"], url_path="stats")
    def stats(self, request: Request) -> Response:
        """GET /api/v1/products/stats/"""
        query = ThresholdQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        stats = unwrap(self._service.get_stats(query.validated_data["threshold"]))
        return Response(ProductStatsSerializer(stats).data)

    # ------------------------------------------------------------------
    # Stock and activation
    # ------------------------------------------------------------------

    def _quantity(self, request: Request) -> float:
        serializer = QuantitySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return serializer.validated_data["quantity"]

    @action(detail=True, methods=["post"], url_path="stock")
    def update_stock(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/products/{pk}/stock/  ``{"quantity": N}`` (absolute)"""
        product = unwrap(self._service.update_stock(pk, self._quantity(request)))
        return Response(ProductSerializer(product).data)

    @action(detail=True, methods=["post"], url_path="reserve")
    def reserve(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/products/{pk}/reserve/  ``{"quantity": N}``"""
        product = unwrap(self._service.reserve_stock(pk, self._quantity(request)))
        return Response(ProductSerializer(product).data)

    @action(detail=True, methods=["post"], url_path="restore")
    def restore(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/products/{pk}/restore/  ``{"quantity": N}``"""
        product = unwrap(self._service.restore_stock(pk, self._quantity(request)))
        return Response(ProductSerializer(product).data)

    @action(detail=True, methods=["post"], url_path="activate")
    def activate(self, request: Request, pk: str | None = None) -> Response:
        product = unwrap(self._service.activate(pk))
        return Response(ProductSerializer(product).data)

    @action(detail=True, methods=["post"], url_path="deactivate")
    def deactivate(self, request: Request, pk: str | None = None) -> Response:
        product = unwrap(self._service.deactivate(pk))
        return Response(ProductSerializer(product).data)
