# sales/models/sale.py

import uuid
from decimal import Decimal

from django.db import models
from django.utils import timezone

from customers.models import Customer
from products.models import ClientType


class Sale(models.Model):
    """
    Represents a completed checkout.

    GUARANTEES:
    - Created only by sales.services.sale_creation.create_sale (one atomic unit
      together with its items and the stock decrements)
    - Immutable record: customer, total, date, status never change after creation
    - client_type is the single exception: it may be (re)inferred later by the
      client-type backfill
    """

    STATUS_COMPLETED = "completed"

    STATUS_CHOICES = [
        (STATUS_COMPLETED, "Completed"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    customer = models.ForeignKey(
        Customer,
        on_delete=models.PROTECT,
        related_name="sales",
    )

    client_type = models.ForeignKey(
        ClientType,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="sales",
        help_text="Inferred from the purchased products (majority client type).",
    )

    total = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text="Total as submitted at checkout.",
    )

    status = models.CharField(
        max_length=32,
        choices=STATUS_CHOICES,
        default=STATUS_COMPLETED,
    )

    date = models.DateTimeField(default=timezone.now, help_text="Business date of the sale.")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-date", "-created_at"]
        indexes = [
            models.Index(fields=["date"], name="sale_date_idx"),
            models.Index(fields=["status"], name="sale_status_idx"),
        ]

    _IMMUTABLE_FIELDS = (
        "customer_id",
        "total",
        "status",
        "date",
        "created_at",
    )

    def _validate_immutable(self, previous: "Sale"):
        for field in self._IMMUTABLE_FIELDS:
            if getattr(self, field) != getattr(previous, field):
                raise ValueError(
                    f"Sale is immutable once {previous.status}. "
                    f"Field '{field.removesuffix('_id')}' cannot be changed."
                )

    def save(self, *args, **kwargs):
        if self.pk and not self._state.adding:
            previous = Sale.objects.filter(pk=self.pk).first()
            if previous is not None:
                self._validate_immutable(previous)

        super().save(*args, **kwargs)

    def __str__(self):
        return f"Sale {self.id} | {self.total}"
