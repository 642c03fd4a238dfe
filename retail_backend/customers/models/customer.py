# customers/models/customer.py

"""
CUSTOMER

A buyer. Created three ways:
- by an admin (dashboard CRUD)
- at checkout, upserted by email (sales.services.sale_creation)
- at registration, for the new customer-role user (users.services.accounts)

Email is the upsert key: stored trimmed + lower-cased, blank stored as NULL so
several email-less customers can coexist under the unique constraint.
"""

import uuid

from django.conf import settings
from django.db import models


def normalize_customer_email(email):
    email = (email or "").strip().lower()
    return email or None


class Customer(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=100)
    email = models.EmailField(unique=True, null=True, blank=True)
    phone = models.CharField(max_length=30, blank=True, default="")
    address = models.CharField(max_length=200, blank=True, default="")

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="customer",
    )

    client_type = models.ForeignKey(
        "products.ClientType",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="customers",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]

    def save(self, *args, **kwargs):
        self.email = normalize_customer_email(self.email)
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.name} <{self.email}>" if self.email else self.name
