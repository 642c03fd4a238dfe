# sales/api/viewsets/sale.py

"""
======================================================
PATH: sales/api/viewsets/sale.py
======================================================
SALE VIEWSET

Purpose:
- Checkout: create a sale (storefront, anonymous or signed in)
- Sales history for the admin dashboard (list + retrieve with filters)
- "My purchases" for a signed-in customer
- Client-type backfill (admin maintenance)

Security:
- create:               AllowAny
- list:                 sales.view
- retrieve:             sales.view, or the customer who owns the sale
- my-purchases:         any authenticated user
- update-client-types:  sales.maintain

Errors:
- Service errors propagate to common.exception_handler, which maps them
  to {"error", "code", "retryable"} with the right status.
======================================================
"""

from __future__ import annotations

from datetime import datetime

from django.db.models import Q
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from common.db_retry import call_with_db_retry
from customers.models import normalize_customer_email
from permissions.roles import (
    CAP_SALES_MAINTAIN,
    CAP_SALES_VIEW,
    HasCapability,
    user_has_capability,
)
from sales.serializers import (
    ClientTypeBackfillResultSerializer,
    SaleCreateSerializer,
    SaleSerializer,
)
from sales.services.client_type import backfill_sale_client_types
from sales.services.queries import purchase_history_for, sales_queryset
from sales.services.sale_creation import create_sale


def _parse_day(s: str):
    try:
        return datetime.strptime(s, "%Y-%m-%d").date()
    except ValueError:
        return None


class SaleViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = SaleSerializer
    permission_classes = [IsAuthenticated]
    filterset_fields = ["status", "client_type", "customer"]
    lookup_value_regex = "[0-9a-fA-F-]{36}"

    def get_permissions(self):
        if self.action == "create":
            return [AllowAny()]

        if self.action == "list":
            self.required_capability = CAP_SALES_VIEW
            return [IsAuthenticated(), HasCapability()]

        if self.action == "update_client_types":
            self.required_capability = CAP_SALES_MAINTAIN
            return [IsAuthenticated(), HasCapability()]

        return [IsAuthenticated()]

    # ======================================================
    # QUERYSET
    # ======================================================

    def get_queryset(self):
        qs = sales_queryset()
        user = self.request.user

        # Non-admins only ever see their own sales (others -> 404)
        if not user_has_capability(user, CAP_SALES_VIEW):
            match = Q(customer__user_id=user.pk)
            email = normalize_customer_email(getattr(user, "email", None))
            if email:
                match |= Q(customer__email=email)
            qs = qs.filter(match)

        params = self.request.query_params

        date_from = (params.get("date_from") or "").strip()
        if date_from:
            d1 = _parse_day(date_from)
            if d1:
                qs = qs.filter(date__date__gte=d1)

        date_to = (params.get("date_to") or "").strip()
        if date_to:
            d2 = _parse_day(date_to)
            if d2:
                qs = qs.filter(date__date__lte=d2)

        return qs

    # ======================================================
    # LIST (retry-wrapped read)
    # ======================================================

    @extend_schema(
        parameters=[
            OpenApiParameter("date_from", str, description="YYYY-MM-DD (inclusive)"),
            OpenApiParameter("date_to", str, description="YYYY-MM-DD (inclusive)"),
        ]
    )
    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())

        page = call_with_db_retry(self.paginate_queryset, queryset)
        if page is not None:
            serializer = self.get_serializer(page, many=True)
            return self.get_paginated_response(serializer.data)

        sales = call_with_db_retry(list, queryset)
        return Response(self.get_serializer(sales, many=True).data)

    # ======================================================
    # CHECKOUT
    # POST /api/sales/
    # ======================================================

    @extend_schema(
        request=SaleCreateSerializer,
        responses={200: SaleSerializer},
        description=(
            "Create a sale: resolves/creates the customer, validates stock, "
            "infers the client type, stores the sale + items and decrements "
            "stock in one transaction."
        ),
    )
    def create(self, request, *args, **kwargs):
        ser = SaleCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        user = request.user if request.user and request.user.is_authenticated else None

        sale = create_sale(
            items=[dict(item) for item in data["items"]],
            total=data["total"],
            customer_id=data.get("customer_id"),
            customer_name=data.get("customer_name"),
            customer_email=data.get("customer_email"),
            customer_phone=data.get("customer_phone"),
            customer_address=data.get("customer_address"),
            sale_date=data.get("date"),
            user=user,
        )

        return Response(SaleSerializer(sale).data, status=status.HTTP_200_OK)

    # ======================================================
    # MY PURCHASES
    # GET /api/sales/my-purchases/
    # ======================================================

    @extend_schema(responses={200: SaleSerializer(many=True)})
    @action(detail=False, methods=["get"], url_path="my-purchases")
    def my_purchases(self, request):
        sales = purchase_history_for(request.user)
        return Response(SaleSerializer(sales, many=True).data)

    # ======================================================
    # CLIENT TYPE BACKFILL
    # POST /api/sales/update-client-types/
    # ======================================================

    @extend_schema(request=None, responses={200: ClientTypeBackfillResultSerializer})
    @action(detail=False, methods=["post"], url_path="update-client-types")
    def update_client_types(self, request):
        result = backfill_sale_client_types()
        return Response(
            {
                "message": f"Updated {result['updated']} of {result['total']} sales",
                "total": result["total"],
                "updated": result["updated"],
            }
        )
