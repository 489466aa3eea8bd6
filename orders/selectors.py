"""Selectors for order history reads."""

from common.exceptions import NotFound
from django.db.models import Prefetch, QuerySet

from .models import Order, OrderItem


def _with_items(qs: QuerySet[Order]) -> QuerySet[Order]:
    items = OrderItem.objects.select_related("product").order_by("product_id")
    return qs.prefetch_related(Prefetch("items", queryset=items))


def list_orders_for_user(*, user) -> QuerySet[Order]:
    """Return the user's orders, newest first, with items by product id."""

    return _with_items(Order.objects.filter(user=user).order_by("-id"))


def get_order_for_user(*, user, order_id: int) -> Order:
    """Return one of the user's orders; other users' orders are not found."""

    try:
        return _with_items(Order.objects.filter(user=user)).get(pk=order_id)
    except Order.DoesNotExist:
        raise NotFound("order not found")
