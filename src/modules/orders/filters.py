import django_filters

from modules.orders.constants import OrderStatus
from modules.orders.models import Order


class OrderFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=OrderStatus.choices)
    customer_id = django_filters.UUIDFilter(field_name="customer_id")
    customer_email = django_filters.CharFilter(
        field_name="customer__email", lookup_expr="icontains"
    )
    product_id = django_filters.UUIDFilter(
        field_name="items__product_id", distinct=True
    )
    order_number = django_filters.CharFilter(
        field_name="order_number", lookup_expr="icontains"
    )
    date_from = django_filters.IsoDateTimeFilter(
        field_name="created_at", lookup_expr="gte"
    )
    date_to = django_filters.IsoDateTimeFilter(
        field_name="created_at", lookup_expr="lte"
    )
    min_amount = django_filters.NumberFilter(
        field_name="total_amount", lookup_expr="gte"
    )
    max_amount = django_filters.NumberFilter(
        field_name="total_amount", lookup_expr="lte"
    )

    class Meta:
        model = Order
        fields = [
            "status",
            "customer_id",
            "customer_email",
            "product_id",
            "order_number",
            "date_from",
            "date_to",
            "min_amount",
            "max_amount",
        ]
