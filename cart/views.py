"""DRF views for cart operations."""

from common.fields import parse_positive_id
from drf_spectacular.utils import OpenApiExample, extend_schema, inline_serializer
from rest_framework import serializers as rf_serializers
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .selectors import get_active_cart_for_user
from .serializers import CartReadSerializer, SetItemSerializer, UpdateItemQuantitySerializer
from .services import remove_item, set_item, update_item_quantity

ErrorSerializer = inline_serializer(
    name="CartError",
    fields={"kind": rf_serializers.CharField(), "detail": rf_serializers.CharField()},
)

CART_EXAMPLE = OpenApiExample(
    "Cart",
    value={
        "cart_id": 1,
        "items": [
            {
                "product_id": 3,
                "quantity": 2,
                "name": "USB Audio Interface",
                "description": "Two-input interface with low-latency monitoring.",
                "price_cents": 14900,
                "image_url": "https://images.example.com/audio-interface.jpg",
            }
        ],
    },
    response_only=True,
)


def parse_product_id(raw) -> int:
    return parse_positive_id(raw, "invalid product id")


class CartView(APIView):
    """Return the authenticated user's active cart."""

    permission_classes = [IsAuthenticated]
    throttle_scope = "cart"
    failure_message = "failed to fetch cart"

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Get active cart",
        description="Returns the authenticated user's active cart, creating an empty one if needed.",
        responses={200: CartReadSerializer},
        examples=[CART_EXAMPLE],
    )
    def get(self, request):
        cart = get_active_cart_for_user(user=request.user)
        return Response(CartReadSerializer.from_cart(cart=cart).data, status=status.HTTP_200_OK)


class CartItemsView(APIView):
    """Set a product's quantity in the cart."""

    permission_classes = [IsAuthenticated]
    throttle_scope = "cart_write"
    failure_message = "failed to add item"

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Set cart item",
        description="Adds the product to the cart or replaces its quantity.",
        request=SetItemSerializer,
        responses={201: CartReadSerializer, 400: ErrorSerializer, 404: ErrorSerializer},
        examples=[CART_EXAMPLE],
    )
    def post(self, request):
        serializer = SetItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        cart = set_item(user=request.user, **serializer.validated_data)
        return Response(CartReadSerializer.from_cart(cart=cart).data, status=status.HTTP_201_CREATED)


class CartItemDetailView(APIView):
    """Change the quantity of, or remove, a product in the cart."""

    permission_classes = [IsAuthenticated]
    throttle_scope = "cart_write"

    @property
    def failure_message(self):
        if self.request is not None and self.request.method == "DELETE":
            return "failed to remove item"
        return "failed to update item"

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Update cart item quantity",
        request=UpdateItemQuantitySerializer,
        responses={200: CartReadSerializer, 400: ErrorSerializer, 404: ErrorSerializer},
        examples=[CART_EXAMPLE],
    )
    def patch(self, request, product_id: str):
        pid = parse_product_id(product_id)
        serializer = UpdateItemQuantitySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        cart = update_item_quantity(user=request.user, product_id=pid, quantity=serializer.validated_data["quantity"])
        return Response(CartReadSerializer.from_cart(cart=cart).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Remove cart item",
        responses={200: CartReadSerializer, 400: ErrorSerializer, 404: ErrorSerializer},
        examples=[CART_EXAMPLE],
    )
    def delete(self, request, product_id: str):
        pid = parse_product_id(product_id)
        cart = remove_item(user=request.user, product_id=pid)
        return Response(CartReadSerializer.from_cart(cart=cart).data, status=status.HTTP_200_OK)
