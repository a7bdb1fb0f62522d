import django_filters

from modules.orders.models import OrderItem


class OrderItemFilter(django_filters.FilterSet):
    order_id = django_filters.UUIDFilter(field_name="order_id")
    product_id = django_filters.UUIDFilter(field_name="product_id")
    min_quantity = django_filters.NumberFilter(field_name="quantity", lookup_expr="gte")
    max_quantity = django_filters.NumberFilter(field_name="quantity", lookup_expr="lte")

    class Meta:
        model = OrderItem
        fields = ["order_id", "product_id", "min_quantity", "max_quantity"]
