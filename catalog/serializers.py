"""Serializers for catalog read and admin write endpoints."""

from rest_framework import serializers

from .models import Product


class ProductSerializer(serializers.ModelSerializer):
    """Product representation; also used for admin create/update."""

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "description",
            "price_cents",
            "image_url",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]
        extra_kwargs = {
            "price_cents": {"min_value": 0},
        }
