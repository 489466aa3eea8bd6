"""Orders API endpoints.

- POST /api/orders places an order from the caller's active cart,
  idempotently when an `Idempotency-Key` header is sent.
- GET /api/orders lists the caller's orders, newest first.
- GET /api/orders/<id> returns one of the caller's orders.
"""

from common.fields import parse_positive_id
from drf_spectacular.utils import OpenApiExample, OpenApiParameter, extend_schema, inline_serializer
from rest_framework import serializers as rf_serializers
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .selectors import get_order_for_user, list_orders_for_user
from .serializers import OrderSerializer, OrderWithItemsSerializer
from .services import compute_request_hash, place_order, with_idempotency

ErrorSerializer = inline_serializer(
    name="OrderError",
    fields={"kind": rf_serializers.CharField(), "detail": rf_serializers.CharField()},
)

ORDER_EXAMPLE = {
    "id": 12,
    "user_id": 3,
    "total_cents": 1300,
    "status": "pending",
    "created_at": "2025-01-01T12:00:00Z",
    "items": [
        {
            "order_id": 12,
            "product_id": 1,
            "unit_price_cents": 500,
            "quantity": 2,
            "name": "HDMI Cable",
            "image_url": "https://images.example.com/hdmi-cable.jpg",
        },
        {
            "order_id": 12,
            "product_id": 2,
            "unit_price_cents": 300,
            "quantity": 1,
            "name": "Cable Ties",
            "image_url": "",
        },
    ],
}


class OrderListCreateView(APIView):
    """Place an order, or list the caller's orders."""

    permission_classes = [IsAuthenticated]

    @property
    def throttle_scope(self):
        return "orders_write" if self.request.method == "POST" else "orders"

    @property
    def failure_message(self):
        return "failed to place order" if self.request.method == "POST" else "failed to list orders"

    @extend_schema(
        tags=["Orders"],
        summary="List my orders",
        description="Returns the caller's orders, newest first, each with items ordered by product id.",
        responses={200: OrderWithItemsSerializer(many=True)},
        examples=[OpenApiExample("Orders", value=[ORDER_EXAMPLE], response_only=True)],
    )
    def get(self, request):
        orders = list_orders_for_user(user=request.user)
        return Response(OrderWithItemsSerializer(orders, many=True).data)

    @extend_schema(
        tags=["Orders"],
        summary="Place order",
        description=(
            "Converts the caller's active cart into an order priced from the current catalog. "
            "The cart becomes converted and a new empty cart is used afterwards.\n\n"
            "Idempotent when `Idempotency-Key` is set: repeats replay the first response; "
            "reusing a key with a different body, or while the first request is running, returns 409."
        ),
        request=None,
        parameters=[
            OpenApiParameter(
                name="Idempotency-Key",
                location=OpenApiParameter.HEADER,
                required=False,
                description="Makes the request idempotent for this user+path+method",
                type=str,
            )
        ],
        responses={
            201: inline_serializer(name="OrderPlacedResponse", fields={"order": OrderSerializer()}),
            400: ErrorSerializer,
            409: ErrorSerializer,
            500: ErrorSerializer,
        },
        examples=[
            OpenApiExample(
                "Placed",
                value={"order": {k: v for k, v in ORDER_EXAMPLE.items() if k != "items"}},
                response_only=True,
                status_codes=["201"],
            ),
            OpenApiExample(
                "Empty cart",
                value={"kind": "failed_precondition", "detail": "cart is empty"},
                response_only=True,
                status_codes=["400"],
            ),
        ],
    )
    def post(self, request):
        def _handler():
            order = place_order(user=request.user)
            return {"order": OrderSerializer(order).data}, status.HTTP_201_CREATED

        idem_key = request.headers.get("Idempotency-Key")
        if idem_key:
            body, code = with_idempotency(
                key=idem_key,
                user=request.user,
                path=request.path,
                method=request.method,
                handler=_handler,
                request_hash=compute_request_hash(request.data if isinstance(request.data, dict) else None),
            )
        else:
            body, code = _handler()
        return Response(body, status=code)


class OrderDetailView(APIView):
    """Retrieve a single order owned by the caller."""

    permission_classes = [IsAuthenticated]
    throttle_scope = "orders"
    failure_message = "failed to fetch order"

    @extend_schema(
        tags=["Orders"],
        summary="Get order detail",
        responses={200: OrderWithItemsSerializer, 400: ErrorSerializer, 404: ErrorSerializer},
        examples=[OpenApiExample("Order", value=ORDER_EXAMPLE, response_only=True)],
    )
    def get(self, request, order_id: str):
        order = get_order_for_user(user=request.user, order_id=parse_positive_id(order_id))
        return Response(OrderWithItemsSerializer(order).data)
