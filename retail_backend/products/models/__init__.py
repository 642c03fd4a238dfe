"""
PATH: products/models/__init__.py

Products models export surface.
"""

from .catalog import Category, ClientType, Size
from .product import Product

__all__ = [
    "Category",
    "ClientType",
    "Product",
    "Size",
]
