"""Selectors for the catalog domain.

Read-only query helpers shared by the catalog API and the cart services.
"""

from typing import Optional

from django.db.models import QuerySet

from .models import Product


def list_products() -> QuerySet[Product]:
    """Return all products in id order; filtering is applied by the caller."""

    return Product.objects.order_by("id")


def get_product(product_id: int) -> Optional[Product]:
    """Return a single product by id, or None if not found."""

    try:
        return Product.objects.get(pk=product_id)
    except Product.DoesNotExist:
        return None
