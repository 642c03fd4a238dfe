# products/views/category.py

from rest_framework import viewsets
from rest_framework.permissions import AllowAny

from permissions.roles import CatalogWriteOrReadOnly
from products.models import Category, ClientType, Size
from products.serializers import CategorySerializer, ClientTypeSerializer, SizeSerializer


class CategoryViewSet(viewsets.ModelViewSet):
    """
    Category API

    Policy:
    - Anyone can READ categories (storefront filters + product forms)
    - Only users with catalog.edit can CREATE/UPDATE/DELETE
    """

    queryset = Category.objects.all().order_by("name")
    serializer_class = CategorySerializer
    permission_classes = [CatalogWriteOrReadOnly]
    pagination_class = None


class SizeViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = Size.objects.all().order_by("name")
    serializer_class = SizeSerializer
    permission_classes = [AllowAny]
    pagination_class = None


class ClientTypeViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = ClientType.objects.all().order_by("name")
    serializer_class = ClientTypeSerializer
    permission_classes = [AllowAny]
    pagination_class = None
