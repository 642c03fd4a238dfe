from .sale import ClientTypeBackfillResultSerializer, SaleCreateSerializer, SaleSerializer
from .sale_item import SaleItemInputSerializer, SaleItemSerializer

__all__ = [
    "ClientTypeBackfillResultSerializer",
    "SaleCreateSerializer",
    "SaleItemInputSerializer",
    "SaleItemSerializer",
    "SaleSerializer",
]
