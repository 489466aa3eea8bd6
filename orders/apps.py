"""Django app configuration for orders."""

from django.apps import AppConfig


class OrdersConfig(AppConfig):
    """AppConfig for order placement and history."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "orders"
