"""Cart services: quantity mutations on the caller's active cart.

Every mutation runs in one transaction holding the active cart's row lock,
so it serializes against order placement for the same user.
"""

import logging

from catalog.selectors import get_product
from common.exceptions import InvalidArgument, NotFound
from django.db import transaction
from django.utils import timezone

from .models import Cart, CartItem
from .selectors import get_active_cart_for_user

logger = logging.getLogger("storefront.cart")


def _validate_quantity(quantity) -> int:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise InvalidArgument("quantity must be a positive integer")
    return quantity


@transaction.atomic
def set_item(*, user, product_id: int, quantity: int) -> Cart:
    """Set the quantity of a product in the cart, adding the line if absent.

    An existing quantity is replaced, not incremented.
    """

    _validate_quantity(quantity)
    product = get_product(product_id)
    if product is None:
        raise NotFound("product not found")
    cart = get_active_cart_for_user(user=user, for_update=True)
    _, created = CartItem.objects.update_or_create(cart=cart, product=product, defaults={"quantity": quantity})
    event = "cart.item_added" if created else "cart.item_updated"
    logger.info(
        event,
        extra={
            "event": event,
            "cart_id": cart.id,
            "user_id": getattr(user, "id", None),
            "product_id": product.id,
            "quantity": quantity,
        },
    )
    return cart


@transaction.atomic
def update_item_quantity(*, user, product_id: int, quantity: int) -> Cart:
    """Change the quantity of a product already in the cart."""

    _validate_quantity(quantity)
    cart = get_active_cart_for_user(user=user, for_update=True)
    updated = CartItem.objects.filter(cart=cart, product_id=product_id).update(quantity=quantity, updated_at=timezone.now())
    if not updated:
        raise NotFound("item not in cart")
    logger.info(
        "cart.item_updated",
        extra={
            "event": "cart.item_updated",
            "cart_id": cart.id,
            "user_id": getattr(user, "id", None),
            "product_id": product_id,
            "quantity": quantity,
        },
    )
    return cart


@transaction.atomic
def remove_item(*, user, product_id: int) -> Cart:
    """Remove a product from the cart."""

    cart = get_active_cart_for_user(user=user, for_update=True)
    deleted, _ = CartItem.objects.filter(cart=cart, product_id=product_id).delete()
    if not deleted:
        raise NotFound("item not in cart")
    logger.info(
        "cart.item_removed",
        extra={
            "event": "cart.item_removed",
            "cart_id": cart.id,
            "user_id": getattr(user, "id", None),
            "product_id": product_id,
        },
    )
    return cart
