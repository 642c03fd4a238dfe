# sales/services/sale_creation.py

"""
SALE CREATION (APPLICATION SERVICE)

Purpose:
- Turn a checkout payload into a completed Sale, atomically.

Steps (strictly ordered, ONE transaction.atomic block):
1. Resolve the customer (by id, or upsert by normalized email)
2. Lock the referenced products (SELECT ... FOR UPDATE, primary-key order)
   and validate summed quantities against current stock
3. Infer the sale's client type from the purchased products
4. Create the Sale + one SaleItem per line
5. Decrement stock with a guarded UPDATE (stock >= q); zero rows -> abort
6. Re-read the sale with customer, client type and items

Any failure rolls back every write of the invocation: no sale, no items,
no stock change, no customer upsert.

Hard rules:
- Quantities are positive integer units.
- Unit prices are captured on the SaleItem at sale time.
- The submitted total is stored as given. A mismatch with sum(price * quantity)
  is logged; SALES_ENFORCE_SERVER_TOTAL=True rejects it instead.

Notes:
- On PostgreSQL the row locks serialize concurrent checkouts of the same
  products; the guarded UPDATE keeps stock >= 0 even without them (SQLite).
- This function is NOT retried as a whole. Connectivity errors surface as
  TransientError (503, retryable) and the client re-submits.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, time
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import IntegrityError, InterfaceError, OperationalError, transaction
from django.db.models import F
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

from customers.models import Customer, normalize_customer_email
from products.models import Product
from sales.models import Sale, SaleItem

from .client_type import infer_client_type_id
from .exceptions import (
    DuplicateError,
    InsufficientStockError,
    NotFoundError,
    TransientError,
    ValidationError,
)

logger = logging.getLogger(__name__)

TWOPLACES = Decimal("0.01")

# money columns are DecimalField(max_digits=12, decimal_places=2)
MAX_AMOUNT = Decimal("9999999999.99")


@dataclass(frozen=True)
class SaleLine:
    product_id: uuid.UUID
    quantity: int
    unit_price: Decimal
    size: Optional[str]


# =========================================================
# INPUT NORMALIZATION
# =========================================================
def _money(value, *, field: str) -> Decimal:
    if value is None or value == "" or isinstance(value, bool):
        raise ValidationError(f"{field} is required")

    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field} must be a number")

    if not amount.is_finite():
        raise ValidationError(f"{field} must be a number")
    if amount < 0:
        raise ValidationError(f"{field} must be non-negative")

    try:
        amount = amount.quantize(TWOPLACES, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValidationError(f"{field} must be a number")

    if amount > MAX_AMOUNT:
        raise ValidationError(f"{field} cannot exceed {MAX_AMOUNT}")

    return amount


def _to_int_qty(value) -> int:
    if isinstance(value, bool):
        raise ValueError("quantity must be a whole integer unit")

    if isinstance(value, int):
        return value

    if isinstance(value, float) and value.is_integer():
        return int(value)

    if isinstance(value, Decimal) and value == value.to_integral_value():
        return int(value)

    if isinstance(value, str):
        try:
            parsed = Decimal(value.strip())
        except InvalidOperation:
            parsed = None
        if parsed is not None and parsed.is_finite() and parsed == parsed.to_integral_value():
            return int(parsed)

    raise ValueError("quantity must be a whole integer unit")


def _to_uuid(value, *, field: str) -> uuid.UUID:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value).strip())
    except (TypeError, ValueError, AttributeError):
        raise ValidationError(f"{field} is not a valid id: {value!r}")


def _parse_sale_date(value) -> datetime:
    if value is None or value == "":
        return timezone.now()

    parsed = None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        s = value.strip()
        try:
            parsed = parse_datetime(s)
            if parsed is None:
                day = parse_date(s)
                if day is not None:
                    parsed = datetime.combine(day, time.min)
        except ValueError:
            parsed = None

    if parsed is None:
        raise ValidationError(f"date is not a valid date or datetime: {value!r}")

    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed)
    return parsed


def _normalize_lines(items) -> list[SaleLine]:
    if not items or not isinstance(items, (list, tuple)):
        raise ValidationError("items must be a non-empty list")

    lines: list[SaleLine] = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            raise ValidationError(f"items[{index}] must be an object")

        raw_product_id = item.get("product_id")
        if raw_product_id in (None, ""):
            raise ValidationError(f"items[{index}].product_id is required")
        product_id = _to_uuid(raw_product_id, field=f"items[{index}].product_id")

        try:
            quantity = _to_int_qty(item.get("quantity"))
        except ValueError:
            raise ValidationError(
                f"items[{index}].quantity must be a whole number, got {item.get('quantity')!r}"
            )
        if quantity <= 0:
            raise ValidationError(f"items[{index}].quantity must be greater than zero")

        unit_price = _money(item.get("price"), field=f"items[{index}].price")
        if unit_price * quantity > MAX_AMOUNT:
            raise ValidationError(f"items[{index}] line total cannot exceed {MAX_AMOUNT}")

        size = item.get("size")
        size = (str(size).strip() or None) if size not in (None, "") else None

        lines.append(SaleLine(product_id, quantity, unit_price, size))

    return lines


def _check_total(total: Decimal, lines: list[SaleLine]) -> None:
    computed = sum((line.unit_price * line.quantity for line in lines), Decimal("0.00"))
    if computed == total:
        return

    logger.warning(
        "sales.total_mismatch",
        extra={"submitted_total": str(total), "computed_total": str(computed)},
    )
    if getattr(settings, "SALES_ENFORCE_SERVER_TOTAL", False):
        raise ValidationError(
            f"total {total} does not match the sum of line prices {computed}",
            details={"submitted_total": str(total), "computed_total": str(computed)},
        )


# =========================================================
# STEP 1: CUSTOMER
# =========================================================
def _linkable_user(email: str, current_user):
    """
    A new/unlinked customer is attached to a user account with the same email:
    the authenticated user first, otherwise any registered user. Never to a user
    who already owns a customer record.
    """
    User = get_user_model()

    candidate = None
    if current_user is not None and getattr(current_user, "is_authenticated", False):
        if normalize_customer_email(current_user.email) == email:
            candidate = current_user

    if candidate is None:
        candidate = User.objects.filter(email=email).first()

    if candidate is None:
        return None

    if Customer.objects.filter(user_id=candidate.pk).exists():
        return None

    return candidate


def _resolve_customer(*, customer_id, name, email, phone, address, user) -> Customer:
    if customer_id is not None:
        customer = Customer.objects.select_for_update().filter(pk=customer_id).first()
        if customer is None:
            raise NotFoundError(f"customer {customer_id} not found")
        return customer

    name = (name or "").strip()
    email = normalize_customer_email(email)
    if not name or not email:
        raise ValidationError("customer information required: customer_id, or name and email")

    phone = (phone or "").strip()
    address = (address or "").strip()

    customer = Customer.objects.select_for_update().filter(email=email).first()

    if customer is None:
        customer = Customer.objects.create(
            name=name,
            email=email,
            phone=phone,
            address=address,
            user=_linkable_user(email, user),
        )
        logger.info("sales.customer_created", extra={"customer_id": str(customer.id)})
        return customer

    changed = []
    for field, value in (("name", name), ("phone", phone), ("address", address)):
        # blank input keeps the stored value
        if value and getattr(customer, field) != value:
            setattr(customer, field, value)
            changed.append(field)

    if customer.user_id is None:
        link = _linkable_user(email, user)
        if link is not None:
            customer.user = link
            changed.append("user")

    if changed:
        customer.save(update_fields=[*changed, "updated_at"])

    return customer


# =========================================================
# STEP 2: PRODUCTS + STOCK
# =========================================================
def _requested_quantities(lines: list[SaleLine]) -> dict:
    requested: dict = {}
    for line in lines:
        requested[line.product_id] = requested.get(line.product_id, 0) + line.quantity
    return requested


def _lock_and_validate_products(requested: dict) -> dict:
    products = list(
        Product.objects.select_for_update().filter(pk__in=list(requested)).order_by("pk")
    )
    by_id = {p.pk: p for p in products}

    missing = [str(pid) for pid in requested if pid not in by_id]
    if missing:
        raise ValidationError(
            f"Unknown product(s): {', '.join(missing)}",
            details={"missing_product_ids": missing},
        )

    for product in products:
        wanted = requested[product.pk]
        if wanted > product.stock:
            logger.info(
                "sales.stock_rejected",
                extra={
                    "product_id": str(product.pk),
                    "available": product.stock,
                    "requested": wanted,
                },
            )
            raise InsufficientStockError(
                product_id=product.pk,
                available=product.stock,
                requested=wanted,
                product_name=product.name,
            )

    return by_id


# =========================================================
# STEP 5: STOCK DECREMENT
# =========================================================
def _decrement_stock(products_by_id: dict, requested: dict) -> None:
    now = timezone.now()
    for product_id in sorted(products_by_id, key=lambda pk: pk.int):
        qty = requested[product_id]
        updated = Product.objects.filter(pk=product_id, stock__gte=qty).update(
            stock=F("stock") - qty,
            updated_at=now,
        )
        if updated != 1:
            available = (
                Product.objects.filter(pk=product_id).values_list("stock", flat=True).first() or 0
            )
            raise InsufficientStockError(
                product_id=product_id,
                available=available,
                requested=qty,
                product_name=products_by_id[product_id].name,
            )


def _load_sale(sale_id) -> Sale:
    return (
        Sale.objects.select_related("customer", "client_type")
        .prefetch_related("items__product")
        .get(pk=sale_id)
    )


# =========================================================
# PUBLIC API
# =========================================================
def create_sale(
    *,
    items,
    total,
    customer_id=None,
    customer_name: Optional[str] = None,
    customer_email: Optional[str] = None,
    customer_phone: Optional[str] = None,
    customer_address: Optional[str] = None,
    sale_date=None,
    user=None,
) -> Sale:
    lines = _normalize_lines(items)
    total_amount = _money(total, field="total")
    when = _parse_sale_date(sale_date)
    customer_pk = (
        _to_uuid(customer_id, field="customer_id") if customer_id not in (None, "") else None
    )

    _check_total(total_amount, lines)

    try:
        with transaction.atomic():
            customer = _resolve_customer(
                customer_id=customer_pk,
                name=customer_name,
                email=customer_email,
                phone=customer_phone,
                address=customer_address,
                user=user,
            )

            requested = _requested_quantities(lines)
            products_by_id = _lock_and_validate_products(requested)

            client_type_id = infer_client_type_id(
                products_by_id[line.product_id] for line in lines
            )

            sale = Sale.objects.create(
                customer=customer,
                client_type_id=client_type_id,
                total=total_amount,
                status=Sale.STATUS_COMPLETED,
                date=when,
            )

            for position, line in enumerate(lines):
                SaleItem.objects.create(
                    sale=sale,
                    product=products_by_id[line.product_id],
                    quantity=line.quantity,
                    unit_price=line.unit_price,
                    size=line.size,
                    position=position,
                )

            _decrement_stock(products_by_id, requested)

            sale = _load_sale(sale.pk)

    except IntegrityError as exc:
        logger.warning("sales.integrity_conflict", extra={"error": str(exc)})
        raise DuplicateError("Conflicting record while saving the sale; please retry") from exc
    except (OperationalError, InterfaceError) as exc:
        logger.warning("sales.datastore_unavailable", extra={"error": str(exc)})
        raise TransientError("Datastore temporarily unavailable; retry the checkout") from exc

    logger.info(
        "sales.created",
        extra={
            "sale_id": str(sale.pk),
            "customer_id": str(sale.customer_id),
            "client_type_id": str(sale.client_type_id) if sale.client_type_id else None,
            "lines": len(lines),
            "total": str(sale.total),
        },
    )
    return sale
