"""Shared enumerations and choices used across apps."""

from django.db import models


class UserRole(models.TextChoices):
    """Closed set of roles a caller can hold."""

    USER = "user", "User"
    ADMIN = "admin", "Admin"


class CartStatus(models.TextChoices):
    """Statuses for shopping carts.

    A cart is converted exactly once, when an order is placed from it.
    """

    ACTIVE = "active", "Active"
    CONVERTED = "converted", "Converted"


class OrderStatus(models.TextChoices):
    """Lifecycle statuses for orders."""

    PENDING = "pending", "Pending"
