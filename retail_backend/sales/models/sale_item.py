# sales/models/sale_item.py

"""
SALE ITEM (IMMUTABLE SNAPSHOT)

One purchased line: product, quantity, the unit price captured at sale time
and the chosen size label. Append-only: rows are written once, with their sale.

product is SET_NULL on delete so sales history survives catalog cleanup.
"""

from __future__ import annotations

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models

from products.models import Product

from .sale import Sale


class SaleItem(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    sale = models.ForeignKey(
        Sale,
        on_delete=models.CASCADE,
        related_name="items",
    )

    product = models.ForeignKey(
        Product,
        on_delete=models.SET_NULL,
        null=True,
        related_name="sale_items",
    )

    quantity = models.PositiveIntegerField()

    unit_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
    )

    total_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        editable=False,
    )

    size = models.CharField(max_length=20, blank=True, null=True)

    # 0-based line order within the sale (first-seen order for inference)
    position = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["sale", "position"]
        indexes = [
            models.Index(fields=["product"], name="saleitem_product_idx"),
        ]

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError("SaleItem records are immutable")

        self.total_price = Decimal(self.unit_price) * Decimal(int(self.quantity or 0))
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.product} x {self.quantity}"
