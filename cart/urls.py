"""Cart URL routes mounted under /api/."""

from django.urls import path

from .views import CartItemDetailView, CartItemsView, CartView

app_name = "cart"

urlpatterns = [
    path("cart", CartView.as_view(), name="cart-detail"),
    path("cart/items", CartItemsView.as_view(), name="cart-items"),
    path("cart/items/<str:product_id>", CartItemDetailView.as_view(), name="cart-item-detail"),
]
