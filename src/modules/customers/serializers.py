"""Customer DRF serializers.

``email`` is a plain ``CharField`` on input: a malformed address is
rejected by ``CustomerService`` with ``CUSTOMER_INVALID_EMAIL``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.customers.constants import DEFAULT_COUNTRY
from modules.customers.dtos import CreateCustomerDTO, UpdateCustomerDTO
from modules.customers.models import Customer


class CreateCustomerSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, allow_blank=True)
    email = serializers.CharField(max_length=254, allow_blank=True)
    phone = serializers.CharField(max_length=32, required=False, default="", allow_blank=True)
    address = serializers.CharField(required=False, default="", allow_blank=True)
    city = serializers.CharField(max_length=100, required=False, default="", allow_blank=True)
    state = serializers.CharField(max_length=100, required=False, default="", allow_blank=True)
    postal_code = serializers.CharField(
        max_length=20, required=False, default="", allow_blank=True
    )
    country = serializers.CharField(
        max_length=100, required=False, default=DEFAULT_COUNTRY, allow_blank=True
    )
    tax_id = serializers.CharField(max_length=32, required=False, default="", allow_blank=True)
    company_name = serializers.CharField(
        max_length=255, required=False, default="", allow_blank=True
    )

    def to_dto(self) -> CreateCustomerDTO:
        return CreateCustomerDTO(**self.validated_data)


class UpdateCustomerSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    email = serializers.CharField(max_length=254, required=False, allow_blank=True)
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True)
    address = serializers.CharField(required=False, allow_blank=True)
    city = serializers.CharField(max_length=100, required=False, allow_blank=True)
    state = serializers.CharField(max_length=100, required=False, allow_blank=True)
    postal_code = serializers.CharField(max_length=20, required=False, allow_blank=True)
    country = serializers.CharField(max_length=100, required=False, allow_blank=True)
    tax_id = serializers.CharField(max_length=32, required=False, allow_blank=True)
    company_name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    is_active = serializers.BooleanField(required=False)

    def to_dto(self) -> UpdateCustomerDTO:
        return UpdateCustomerDTO(**self.validated_data)


class CustomerSerializer(serializers.ModelSerializer):
    class Meta:
        model = Customer
        fields = [
            "id",
            "name",
            "email",
            "phone",
            "address",
            "city",
            "state",
            "postal_code",
            "country",
            "tax_id",
            "company_name",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class CustomerSummarySerializer(serializers.ModelSerializer):
    """Customer as embedded in an order."""

    class Meta:
        model = Customer
        fields = ["id", "name", "email", "phone", "company_name"]
        read_only_fields = fields
