"""Order models.

Orders and their items are written once, when a cart is converted, and
never modified afterwards. Prices are copied from the catalog at that moment.
"""

from common.choices import OrderStatus
from django.conf import settings
from django.db import models


class ImmutableRecordError(Exception):
    """Raised when code attempts to modify a persisted order record."""


class ImmutableModel(models.Model):
    """Abstract base for rows that may be inserted but never updated."""

    class Meta:
        abstract = True

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ImmutableRecordError(f"{type(self).__name__} records cannot be modified")
        super().save(*args, **kwargs)


class Order(ImmutableModel):
    """Purchase order capturing a snapshot of a user's cart.

    `total_cents` is the sum of the items' `unit_price_cents * quantity`.
    """

    STATUS_PENDING = OrderStatus.PENDING
    STATUS_CHOICES = OrderStatus.choices

    user = models.ForeignKey(settings.AUTH_USER_MODEL, related_name="orders", on_delete=models.CASCADE)
    total_cents = models.BigIntegerField()
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-id"]
        indexes = [
            models.Index(fields=["user", "-id"], name="order_user_recent_idx"),
        ]
        constraints = [
            models.CheckConstraint(name="order_total_non_negative", condition=models.Q(total_cents__gte=0)),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"Order#{self.id} user={self.user_id} total={self.total_cents}"


class OrderItem(ImmutableModel):
    """Line item within an order with the unit price at placement time."""

    order = models.ForeignKey(Order, related_name="items", on_delete=models.CASCADE)
    product = models.ForeignKey("catalog.Product", related_name="order_items", on_delete=models.PROTECT)
    unit_price_cents = models.IntegerField()
    quantity = models.PositiveIntegerField()

    class Meta:
        ordering = ["product_id"]
        constraints = [
            models.UniqueConstraint(fields=["order", "product"], name="unique_product_per_order"),
            models.CheckConstraint(name="orderitem_price_non_negative", condition=models.Q(unit_price_cents__gte=0)),
            models.CheckConstraint(name="orderitem_quantity_positive", condition=models.Q(quantity__gte=1)),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"OrderItem#{self.id} order={self.order_id} product={self.product_id} qty={self.quantity}"

    @property
    def line_total_cents(self) -> int:
        return self.unit_price_cents * self.quantity


class IdempotencyKey(models.Model):
    """Stores idempotent request results to prevent duplicate processing."""

    key = models.CharField(max_length=128)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, null=True, blank=True, on_delete=models.CASCADE)
    scope = models.CharField(max_length=128)
    path = models.CharField(max_length=255)
    method = models.CharField(max_length=16)
    request_hash = models.CharField(max_length=64, null=True, blank=True)
    response_code = models.IntegerField(null=True, blank=True)
    response_json = models.JSONField(null=True, blank=True)
    expires_at = models.DateTimeField(null=True, blank=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["key", "scope", "path", "method"], name="uniq_idem_scope_path_method"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"IdempotencyKey {self.key} ({self.scope} {self.method} {self.path})"
