"""Selectors for cart reads."""

from django.db import IntegrityError, transaction
from django.db.models import QuerySet

from .models import Cart, CartItem


def get_active_cart_for_user(*, user, for_update: bool = False) -> Cart:
    """Return the user's active cart, creating it if missing.

    With `for_update=True` the cart row is locked until the surrounding
    transaction ends. The caller must already be inside `transaction.atomic()`.
    """

    qs = Cart.objects.filter(user=user, status=Cart.STATUS_ACTIVE)
    if for_update:
        qs = qs.select_for_update()
    cart = qs.first()
    if cart is not None:
        return cart
    try:
        with transaction.atomic():
            return Cart.objects.create(user=user, status=Cart.STATUS_ACTIVE)
    except IntegrityError:
        # A concurrent request created the active cart first.
        return qs.get()


def list_cart_lines(*, cart: Cart) -> QuerySet[CartItem]:
    """Return the cart's items joined with live product data, by product id."""

    return CartItem.objects.filter(cart=cart).select_related("product").order_by("product_id")
