import django_filters

from modules.products.constants import ProductCategory, ProductName
from modules.products.models import Product


class ProductFilter(django_filters.FilterSet):
    name = django_filters.ChoiceFilter(choices=ProductName.choices)
    category = django_filters.ChoiceFilter(choices=ProductCategory.choices)
    brand = django_filters.CharFilter(field_name="brand", lookup_expr="icontains")
    is_active = django_filters.BooleanFilter(field_name="is_active")
    in_stock = django_filters.BooleanFilter(method="filter_in_stock")

    class Meta:
        model = Product
        fields = ["name", "category", "brand", "is_active", "in_stock"]

    def filter_in_stock(self, queryset, name, value):
        if value is None:
            return queryset
        if value:
            return queryset.filter(available_quantity__gt=0)
        return queryset.filter(available_quantity=0)
