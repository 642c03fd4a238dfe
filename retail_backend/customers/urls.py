# customers/urls.py

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from customers.views import CustomerViewSet

# DefaultRouter's api-root view would shadow the empty-prefix list route.
router = SimpleRouter()
router.register(r"", CustomerViewSet, basename="customers")

urlpatterns = [
    path("", include(router.urls)),
]
