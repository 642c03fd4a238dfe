from .category import CategorySerializer, ClientTypeSerializer, SizeSerializer
from .product import ProductSerializer

__all__ = [
    "CategorySerializer",
    "ClientTypeSerializer",
    "ProductSerializer",
    "SizeSerializer",
]
