# products/urls.py

"""
PRODUCTS URLS

Registers catalog routes under /api/products/:
- products/      (read: any, write: catalog.edit)
- categories/    (read: any, write: catalog.edit)
- sizes/         (read-only)
- client-types/  (read-only)
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from products.views import CategoryViewSet, ClientTypeViewSet, ProductViewSet, SizeViewSet

router = DefaultRouter()

router.register(r"categories", CategoryViewSet, basename="categories")
router.register(r"products", ProductViewSet, basename="products")
router.register(r"sizes", SizeViewSet, basename="sizes")
router.register(r"client-types", ClientTypeViewSet, basename="client-types")

urlpatterns = [
    path("", include(router.urls)),
]
