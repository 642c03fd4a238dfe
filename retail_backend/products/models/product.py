# products/models/product.py

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models

from .catalog import Category, ClientType, Size


class Product(models.Model):
    """
    Represents a sellable product.

    STOCK MODEL (IMPORTANT):
    - stock is a per-product unit counter
    - PositiveIntegerField => the database itself rejects negative stock
    - sales decrement it with a conditional UPDATE (see sales.services.sale_creation);
      never read-modify-write it from application code
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")

    price = models.DecimalField(max_digits=12, decimal_places=2)
    stock = models.PositiveIntegerField(default=0)

    image = models.URLField(max_length=500, blank=True, default="")

    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="products",
    )

    client_type = models.ForeignKey(
        ClientType,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="products",
    )

    sizes = models.ManyToManyField(Size, blank=True, related_name="products")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["name"], name="product_name_idx"),
        ]

    def clean(self):
        if self.price is not None and self.price <= Decimal("0.00"):
            raise ValidationError({"price": "Price must be greater than zero."})

    def __str__(self):
        return self.name
