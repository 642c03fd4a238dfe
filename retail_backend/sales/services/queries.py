# sales/services/queries.py

"""
SALES READ QUERIES

Plain reads are wrapped in the datastore retry policy (common.db_retry);
they are idempotent, so re-running one after a dropped connection is safe.
"""

from __future__ import annotations

from django.db.models import Q

from common.db_retry import with_db_retry
from customers.models import normalize_customer_email
from sales.models import Sale


def sales_queryset():
    return (
        Sale.objects.select_related("customer", "client_type")
        .prefetch_related("items__product")
        .order_by("-date", "-created_at")
    )


@with_db_retry()
def purchase_history_for(user) -> list:
    """
    Sales of the customer record belonging to this user: linked by account,
    or sharing the account's email. No customer record -> [].
    """
    match = Q(customer__user_id=user.pk)
    email = normalize_customer_email(getattr(user, "email", None))
    if email:
        match |= Q(customer__email=email)

    return list(sales_queryset().filter(match))
