"""Customer API views."""

from __future__ import annotations

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.api import unwrap
from modules.core.container import get_container
from modules.core.filters import filters_from_request
from modules.core.pagination import pagination_from_request, paginated_response
from modules.customers.dtos import CustomerFiltersDTO
from modules.customers.serializers import (
    CreateCustomerSerializer,
    CustomerSerializer,
    UpdateCustomerSerializer,
)


class CustomerViewSet(GenericViewSet):
    """Customer CRUD through ``CustomerService``."""

    serializer_class = CustomerSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = get_container().customers

    def list(self, request: Request) -> Response:
        """GET /api/v1/customers/"""
        page = unwrap(
            self._service.get_all(
                filters_from_request(request, CustomerFiltersDTO),
                pagination_from_request(request),
            )
        )
        return paginated_response(page, CustomerSerializer)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/customers/{pk}/"""
        customer = unwrap(self._service.get_by_id(pk))
        return Response(CustomerSerializer(customer).data)

    def create(self, request: Request) -> Response:
        """POST /api/v1/customers/"""
        serializer = CreateCustomerSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        customer = unwrap(self._service.create(serializer.to_dto()))
        return Response(CustomerSerializer(customer).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/customers/{pk}/"""
        serializer = UpdateCustomerSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        customer = unwrap(self._service.update(pk, serializer.to_dto()))
        return Response(CustomerSerializer(customer).data)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/customers/{pk}/"""
        return self.partial_update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/customers/{pk}/ (soft delete)"""
        unwrap(self._service.delete(pk))
        return Response(status=status.HTTP_204_NO_CONTENT)
