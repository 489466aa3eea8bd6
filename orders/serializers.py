"""DRF serializers for orders.

All amounts are integer cents. Item names and images come from the live
product; prices and quantities come from the snapshot taken at placement.
"""

from rest_framework import serializers

from .models import Order, OrderItem


class OrderSerializer(serializers.ModelSerializer):
    """Order header as returned by order placement."""

    user_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Order
        fields = ["id", "user_id", "total_cents", "status", "created_at"]
        read_only_fields = fields


class OrderItemSerializer(serializers.ModelSerializer):
    order_id = serializers.IntegerField(read_only=True)
    product_id = serializers.IntegerField(read_only=True)
    name = serializers.CharField(source="product.name", read_only=True)
    image_url = serializers.CharField(source="product.image_url", read_only=True)

    class Meta:
        model = OrderItem
        fields = ["order_id", "product_id", "unit_price_cents", "quantity", "name", "image_url"]
        read_only_fields = fields


class OrderWithItemsSerializer(OrderSerializer):
    """Order header plus its items, used by the history endpoints."""

    items = OrderItemSerializer(many=True, read_only=True)

    class Meta(OrderSerializer.Meta):
        fields = OrderSerializer.Meta.fields + ["items"]
        read_only_fields = fields
