from .category import CategoryViewSet, ClientTypeViewSet, SizeViewSet
from .product import ProductViewSet

__all__ = [
    "CategoryViewSet",
    "ClientTypeViewSet",
    "ProductViewSet",
    "SizeViewSet",
]
