"""Product DRF serializers.

Input serializers only check shapes; ranges (price ceiling, integral
quantities) are business rules and are left to ``ProductService`` so they
surface with their domain error codes.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.products.constants import ProductCategory, ProductName
from modules.products.dtos import CreateProductDTO, UpdateProductDTO
from modules.products.models import Product

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class CreateProductSerializer(serializers.Serializer):
    name = serializers.ChoiceField(choices=ProductName.choices)
    description = serializers.CharField(required=False, default="", allow_blank=True)
    price = serializers.DecimalField(max_digits=14, decimal_places=2)
    available_quantity = serializers.FloatField()
    category = serializers.ChoiceField(choices=ProductCategory.choices)
    brand = serializers.CharField(required=False, default="", allow_blank=True)
    model = serializers.CharField(required=False, default="", allow_blank=True)
    sku = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    image_url = serializers.URLField(required=False, default="", allow_blank=True)

    def to_dto(self) -> CreateProductDTO:
        return CreateProductDTO(**self.validated_data)


class UpdateProductSerializer(serializers.Serializer):
    description = serializers.CharField(required=False, allow_blank=True)
    price = serializers.DecimalField(max_digits=14, decimal_places=2, required=False)
    available_quantity = serializers.FloatField(required=False)
    category = serializers.ChoiceField(choices=ProductCategory.choices, required=False)
    brand = serializers.CharField(required=False, allow_blank=True)
    model = serializers.CharField(required=False, allow_blank=True)
    image_url = serializers.URLField(required=False, allow_blank=True)
    is_active = serializers.BooleanField(required=False)

    def to_dto(self) -> UpdateProductDTO:
        return UpdateProductDTO(**self.validated_data)


class QuantitySerializer(serializers.Serializer):
    """Body of the stock, reserve and restore actions."""

    quantity = serializers.FloatField()


class CategoryQuerySerializer(serializers.Serializer):
    category = serializers.ChoiceField(choices=ProductCategory.choices)


class ThresholdQuerySerializer(serializers.Serializer):
    threshold = serializers.IntegerField(
        min_value=0, required=False, allow_null=True, default=None
    )


# ---------------------------------------------------------------------------
# Output Serializers
# ---------------------------------------------------------------------------


class ProductSerializer(serializers.ModelSerializer):
    in_stock = serializers.BooleanField(read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "description",
            "price",
            "available_quantity",
            "in_stock",
            "category",
            "brand",
            "model",
            "sku",
            "image_url",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ProductStatsSerializer(serializers.Serializer):
    total_products = serializers.IntegerField()
    active_products = serializers.IntegerField()
    inactive_products = serializers.IntegerField()
    low_stock_products = serializers.IntegerField()
    out_of_stock_products = serializers.IntegerField()
    total_inventory_value = serializers.DecimalField(max_digits=20, decimal_places=2)
