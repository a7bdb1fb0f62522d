"""Order DRF serializers for API input/output.

Input serializers check request shapes and hand a pydantic DTO to
``OrderService``; output serializers render the Order aggregate with its
customer and items→product already loaded by the repository.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.customers.serializers import CreateCustomerSerializer, CustomerSummarySerializer
from modules.orders.constants import OrderStatus
from modules.orders.dtos import CreateOrderDTO, UpdateOrderDTO
from modules.orders.models import Order, OrderItem
from modules.products.models import Product

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class CreateOrderItemSerializer(serializers.Serializer):
    """One requested line; ``unit_price`` defaults to the product price."""

    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1)
    unit_price = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=0, required=False, allow_null=True
    )


class CreateOrderSerializer(serializers.Serializer):
    """Order creation payload.  Give ``customer_id`` or inline ``customer``."""

    items = CreateOrderItemSerializer(many=True, allow_empty=False)
    customer_id = serializers.UUIDField(required=False, allow_null=True)
    customer = CreateCustomerSerializer(required=False, allow_null=True)
    notes = serializers.CharField(required=False, default="", allow_blank=True)
    customer_notes = serializers.CharField(required=False, default="", allow_blank=True)
    shipping_address = serializers.CharField(required=False, default="", allow_blank=True)
    billing_address = serializers.CharField(required=False, default="", allow_blank=True)
    shipping_cost = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=0, required=False, default=0
    )
    discount = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=0, required=False, default=0
    )

    def to_dto(self) -> CreateOrderDTO:
        return CreateOrderDTO(**self.validated_data)


class UpdateOrderSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=OrderStatus.choices, required=False)
    notes = serializers.CharField(required=False, allow_blank=True)
    customer_notes = serializers.CharField(required=False, allow_blank=True)
    shipping_address = serializers.CharField(required=False, allow_blank=True)
    billing_address = serializers.CharField(required=False, allow_blank=True)
    tracking_number = serializers.CharField(max_length=100, required=False, allow_blank=True)
    shipping_cost = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=0, required=False
    )
    discount = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=0, required=False
    )
    cancellation_reason = serializers.CharField(required=False, allow_blank=True)

    def to_dto(self) -> UpdateOrderDTO:
        return UpdateOrderDTO(**self.validated_data)


class UpdateOrderStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=OrderStatus.choices)
    reason = serializers.CharField(required=False, allow_blank=True, default="")


class CancelOrderSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, default="")


class CustomerIdSerializer(serializers.Serializer):
    customer_id = serializers.UUIDField()


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class ProductSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Product
        fields = ["id", "name", "category", "brand", "model", "sku", "price"]
        read_only_fields = fields


class OrderItemSerializer(serializers.ModelSerializer):
    """Order line with the captured unit price and the product it refers to."""

    order_id = serializers.UUIDField(read_only=True)
    product = ProductSummarySerializer(read_only=True)

    class Meta:
        model = OrderItem
        fields = [
            "id",
            "order_id",
            "product",
            "quantity",
            "unit_price",
            "discount",
            "total_price",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    customer = CustomerSummarySerializer(read_only=True)
    items = OrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "status",
            "customer",
            "subtotal",
            "tax_amount",
            "shipping_cost",
            "discount",
            "total_amount",
            "notes",
            "customer_notes",
            "shipping_address",
            "billing_address",
            "tracking_number",
            "shipped_at",
            "delivered_at",
            "cancelled_at",
            "cancellation_reason",
            "items",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class OrderStatsSerializer(serializers.Serializer):
    total_orders = serializers.IntegerField()
    pending_orders = serializers.IntegerField()
    processing_orders = serializers.IntegerField()
    shipped_orders = serializers.IntegerField()
    cancelled_orders = serializers.IntegerField()
    total_revenue = serializers.DecimalField(max_digits=16, decimal_places=2)
    average_order_value = serializers.DecimalField(max_digits=16, decimal_places=2)
