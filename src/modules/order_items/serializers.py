"""Order item DRF serializers."""

from __future__ import annotations

from rest_framework import serializers

from modules.order_items.dtos import AddOrderItemDTO
from modules.orders.serializers import OrderItemSerializer


class AddOrderItemSerializer(serializers.Serializer):
    order_id = serializers.UUIDField()
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1)
    unit_price = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=0, required=False, allow_null=True
    )
    discount = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=0, required=False, default=0
    )

    def to_dto(self) -> AddOrderItemDTO:
        return AddOrderItemDTO(**self.validated_data)


class OrderItemDetailSerializer(OrderItemSerializer):
    """Standalone item: the line plus the number and status of its order."""

    order_number = serializers.CharField(source="order.order_number", read_only=True)
    order_status = serializers.CharField(source="order.status", read_only=True)

    class Meta(OrderItemSerializer.Meta):
        fields = OrderItemSerializer.Meta.fields + ["order_number", "order_status"]
        read_only_fields = fields
