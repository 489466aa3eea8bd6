"""Query filters for the product list."""

from django.db.models import Q
from django_filters import rest_framework as filters

from .models import Product


class ProductFilterSet(filters.FilterSet):
    """`q` searches name and description; `min`/`max` bound price_cents inclusively."""

    q = filters.CharFilter(method="filter_q", label="Search name or description")
    min = filters.NumberFilter(field_name="price_cents", lookup_expr="gte", label="Minimum price in cents")
    max = filters.NumberFilter(field_name="price_cents", lookup_expr="lte", label="Maximum price in cents")

    class Meta:
        model = Product
        fields = ["q", "min", "max"]

    def filter_q(self, queryset, name, value):
        value = (value or "").strip()
        if not value:
            return queryset
        return queryset.filter(Q(name__icontains=value) | Q(description__icontains=value))
