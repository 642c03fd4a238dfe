# sales/serializers/sale_item.py

from rest_framework import serializers

from common.serializers import CamelCaseAliasMixin
from sales.models import SaleItem


class SaleItemSerializer(serializers.ModelSerializer):
    """
    Sale line item serializer (read-only).
    product may be null when the product was deleted after the sale.
    """

    product_name = serializers.SerializerMethodField()

    class Meta:
        model = SaleItem
        fields = [
            "id",
            "product",
            "product_name",
            "quantity",
            "unit_price",
            "total_price",
            "size",
        ]
        read_only_fields = fields

    def get_product_name(self, obj):
        product = getattr(obj, "product", None)
        return product.name if product is not None else None


class SaleItemInputSerializer(CamelCaseAliasMixin, serializers.Serializer):
    """
    One checkout line. Values are kept as submitted (strings or numbers);
    the sale service coerces and validates them.
    """

    field_aliases = {
        "productId": "product_id",
        "unitPrice": "price",
    }

    product_id = serializers.CharField()
    quantity = serializers.CharField()
    price = serializers.CharField()
    size = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=20)
