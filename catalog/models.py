"""Catalog app models.

The catalog is a flat list of products priced in minor currency units
(cents). It is read-mostly and mutated only by administrators.
"""

from django.db import models


class TimeStampedModel(models.Model):
    """Abstract base model adding created/updated timestamps."""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class Product(TimeStampedModel):
    """Sellable product.

    `price_cents` is the live price; orders copy it at placement time and
    never read it again.
    """

    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    price_cents = models.IntegerField()
    image_url = models.URLField(max_length=500, blank=True)

    class Meta:
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(name="product_price_non_negative", condition=models.Q(price_cents__gte=0)),
        ]
        indexes = [
            models.Index(fields=["price_cents"], name="product_price_idx"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return self.name
