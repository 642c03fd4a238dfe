# sales/services/client_type.py

"""
CLIENT TYPE INFERENCE

A sale is tagged with the client type (Mujer / Hombre / Niño / Niña) that most
of its distinct products belong to.

Rules:
- each distinct product counts once, whatever its quantity
- products without a client type are ignored
- ties go to the client type seen first in line order
- no client type at all -> None (the sale stays untagged)

backfill_sale_client_types() re-runs the inference for sales stored without a
client type (e.g. created before products were tagged).
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from django.db.models import Exists, OuterRef

from common.db_retry import with_db_retry
from sales.models import Sale, SaleItem

logger = logging.getLogger(__name__)


def infer_client_type_id(products: Iterable) -> Optional[object]:
    """
    products: Product-like objects (pk + client_type_id), in line order.
    """
    seen = set()
    counts: dict = {}

    for product in products:
        if product is None or product.pk in seen:
            continue
        seen.add(product.pk)

        client_type_id = product.client_type_id
        if client_type_id is None:
            continue
        counts[client_type_id] = counts.get(client_type_id, 0) + 1

    if not counts:
        return None

    # max() keeps the first maximal key: dicts iterate in first-seen order
    return max(counts, key=counts.get)


@with_db_retry()
def _untagged_sale_ids() -> list:
    return list(
        Sale.objects.filter(client_type__isnull=True)
        .filter(Exists(SaleItem.objects.filter(sale_id=OuterRef("pk"))))
        .order_by("date")
        .values_list("id", flat=True)
    )


@with_db_retry()
def _infer_for_sale(sale_id):
    items = SaleItem.objects.filter(sale_id=sale_id).select_related("product").order_by("position")
    return infer_client_type_id(item.product for item in items)


@with_db_retry()
def _tag_sale(sale_id, client_type_id) -> int:
    # update(): client_type is the only field a stored sale may change
    return Sale.objects.filter(pk=sale_id, client_type__isnull=True).update(
        client_type_id=client_type_id
    )


def backfill_sale_client_types() -> dict:
    sale_ids = _untagged_sale_ids()
    updated = 0

    for sale_id in sale_ids:
        client_type_id = _infer_for_sale(sale_id)
        if client_type_id is None:
            continue
        updated += _tag_sale(sale_id, client_type_id)

    logger.info(
        "sales.client_type_backfill",
        extra={"total": len(sale_ids), "updated": updated},
    )
    return {"total": len(sale_ids), "updated": updated}
