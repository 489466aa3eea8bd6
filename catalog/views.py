"""Product catalog endpoints.

Reads are public; create/update/delete require the admin role.
"""

import logging

from common.exceptions import Conflict, NotFound
from common.fields import parse_positive_id
from django.db.models import ProtectedError
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiExample, OpenApiParameter, extend_schema, extend_schema_view
from rest_framework import viewsets
from rest_framework.permissions import AllowAny
from users.permissions import IsAdminRole

from . import selectors
from .filters import ProductFilterSet
from .models import Product
from .pagination import PageLimitPagination
from .serializers import ProductSerializer

logger = logging.getLogger("storefront.catalog")

READ_ACTIONS = ("list", "retrieve")

FAILURE_MESSAGES = {
    "list": "failed to fetch products",
    "retrieve": "failed to fetch product",
    "create": "failed to create product",
    "update": "failed to update product",
    "partial_update": "failed to update product",
    "destroy": "failed to delete product",
}


@extend_schema_view(
    list=extend_schema(
        summary="List products",
        description=(
            "Returns products ordered by id. `q` matches name or description (case-insensitive); "
            "`min`/`max` bound `price_cents` inclusively. `page` defaults to 1 and `limit` to 10 (max 50)."
        ),
        tags=["Catalog Endpoints"],
        parameters=[
            OpenApiParameter("page", OpenApiTypes.INT, location="query", description="Page number (>= 1)"),
            OpenApiParameter("limit", OpenApiTypes.INT, location="query", description="Page size (1..50)"),
        ],
        examples=[
            OpenApiExample(
                "Product page",
                value={
                    "page": 1,
                    "limit": 10,
                    "total": 1,
                    "pages": 1,
                    "data": [
                        {
                            "id": 1,
                            "name": "Studio Monitor Speakers",
                            "description": "Nearfield monitors",
                            "price_cents": 29999,
                            "image_url": "https://images.example.com/monitors.jpg",
                            "created_at": "2025-01-01T12:00:00Z",
                            "updated_at": "2025-01-01T12:00:00Z",
                        }
                    ],
                },
                response_only=True,
            )
        ],
    ),
    retrieve=extend_schema(summary="Get product", tags=["Catalog Endpoints"]),
    create=extend_schema(summary="Create product (admin)", tags=["Admin Endpoints"]),
    update=extend_schema(summary="Replace product (admin)", tags=["Admin Endpoints"]),
    partial_update=extend_schema(summary="Update product (admin)", tags=["Admin Endpoints"]),
    destroy=extend_schema(
        summary="Delete product (admin)",
        description="Fails with 409 when the product is referenced by an order.",
        tags=["Admin Endpoints"],
    ),
)
class ProductViewSet(viewsets.ModelViewSet):
    serializer_class = ProductSerializer
    filterset_class = ProductFilterSet
    pagination_class = PageLimitPagination
    lookup_value_regex = "[^/]+"

    def get_queryset(self):
        return selectors.list_products()

    def get_permissions(self):
        if self.action in READ_ACTIONS:
            return [AllowAny()]
        return [IsAdminRole()]

    @property
    def failure_message(self):
        return FAILURE_MESSAGES.get(getattr(self, "action", None), "failed to process product request")

    def get_throttles(self):
        self.throttle_scope = "catalog" if self.action in READ_ACTIONS else "catalog_admin_write"
        return super().get_throttles()

    def get_object(self):
        product = selectors.get_product(parse_positive_id(self.kwargs["pk"]))
        if product is None:
            raise NotFound("product not found")
        self.check_object_permissions(self.request, product)
        return product

    def perform_create(self, serializer):
        product = serializer.save()
        logger.info(
            "catalog.product_created",
            extra={"event": "catalog.product_created", "product_id": product.id, "user_id": self.request.user.id},
        )

    def perform_update(self, serializer):
        product = serializer.save()
        logger.info(
            "catalog.product_updated",
            extra={
                "event": "catalog.product_updated",
                "product_id": product.id,
                "user_id": self.request.user.id,
                "fields": sorted(serializer.validated_data.keys()),
            },
        )

    def perform_destroy(self, instance: Product):
        product_id = instance.id
        try:
            instance.delete()
        except ProtectedError:
            raise Conflict("product is referenced by existing orders")
        logger.info(
            "catalog.product_deleted",
            extra={"event": "catalog.product_deleted", "product_id": product_id, "user_id": self.request.user.id},
        )
