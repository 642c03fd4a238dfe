# sales/api/urls.py

"""
SALES API URLS

Provides (mounted at /api/sales/):
- GET  /api/sales/                       list (admin)
- POST /api/sales/                       checkout (any)
- GET  /api/sales/<uuid>/                detail (admin or owning customer)
- GET  /api/sales/my-purchases/          current user's purchases
- POST /api/sales/update-client-types/   client-type backfill (admin)
"""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from sales.api.viewsets.sale import SaleViewSet

# DefaultRouter's api-root view would shadow the empty-prefix list route.
router = SimpleRouter()
router.register(r"", SaleViewSet, basename="sales")

urlpatterns = [
    path("", include(router.urls)),
]
