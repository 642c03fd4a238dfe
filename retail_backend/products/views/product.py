# products/views/product.py

"""
PRODUCT VIEWSET

Purpose:
- Storefront browsing (AllowAny, read-only)
- Admin product management (catalog.edit)

Query params (list):
- q:           case-insensitive name search
- category:    category id
- client_type: client type id
- in_stock:    "true" -> only products with stock > 0
"""

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import viewsets

from permissions.roles import CatalogWriteOrReadOnly
from products.models import Product
from products.serializers import ProductSerializer


class ProductViewSet(viewsets.ModelViewSet):
    serializer_class = ProductSerializer
    permission_classes = [CatalogWriteOrReadOnly]
    filterset_fields = ["category", "client_type"]

    def get_queryset(self):
        qs = (
            Product.objects.select_related("category", "client_type")
            .prefetch_related("sizes")
            .order_by("-created_at")
        )

        q = (self.request.query_params.get("q") or "").strip()
        if q:
            qs = qs.filter(name__icontains=q)

        in_stock = (self.request.query_params.get("in_stock") or "").strip().lower()
        if in_stock in {"1", "true", "yes"}:
            qs = qs.filter(stock__gt=0)

        return qs

    @extend_schema(
        parameters=[
            OpenApiParameter("q", str, description="Name search"),
            OpenApiParameter("in_stock", bool, description="Only products with stock"),
        ]
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)
