"""Cart serializers for read and write operations."""

from common.fields import MAX_ID, StrictIntegerField
from rest_framework import serializers

from .selectors import list_cart_lines


class CartLineSerializer(serializers.Serializer):
    """A cart item flattened with the live product attributes."""

    product_id = serializers.IntegerField()
    quantity = serializers.IntegerField()
    name = serializers.CharField(source="product.name")
    description = serializers.CharField(source="product.description")
    price_cents = serializers.IntegerField(source="product.price_cents")
    image_url = serializers.CharField(source="product.image_url")


class CartReadSerializer(serializers.Serializer):
    """Read serializer for the cart id and its lines."""

    cart_id = serializers.IntegerField()
    items = CartLineSerializer(many=True)

    @classmethod
    def from_cart(cls, *, cart):
        return cls({"cart_id": cart.id, "items": list(list_cart_lines(cart=cart))})


class SetItemSerializer(serializers.Serializer):
    """Body for setting a product's quantity in the cart."""

    productId = StrictIntegerField(min_value=1, max_value=MAX_ID, source="product_id")
    quantity = StrictIntegerField(min_value=1)


class UpdateItemQuantitySerializer(serializers.Serializer):
    """Body for changing the quantity of a product already in the cart."""

    quantity = StrictIntegerField(min_value=1)
