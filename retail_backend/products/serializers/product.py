# products/serializers/product.py

"""
PRODUCT SERIALIZER

Purpose:
- Canonical Product serializer for both the admin dashboard and the storefront.
- sizes are exchanged as a list of size names (["S", "M"]); an unknown name is a 400.
- categoryId / clientTypeId (storefront form keys) are accepted as aliases.
"""

from decimal import Decimal

from rest_framework import serializers

from common.serializers import CamelCaseAliasMixin
from products.models import Category, ClientType, Product, Size


class ProductSerializer(CamelCaseAliasMixin, serializers.ModelSerializer):
    field_aliases = {
        "categoryId": "category",
        "clientTypeId": "client_type",
    }

    category = serializers.PrimaryKeyRelatedField(
        queryset=Category.objects.all(),
        pk_field=serializers.UUIDField(),
        required=False,
        allow_null=True,
    )
    category_name = serializers.CharField(source="category.name", read_only=True, default=None)

    client_type = serializers.PrimaryKeyRelatedField(
        queryset=ClientType.objects.all(),
        pk_field=serializers.UUIDField(),
        required=False,
        allow_null=True,
    )
    client_type_name = serializers.CharField(source="client_type.name", read_only=True, default=None)

    sizes = serializers.SlugRelatedField(
        many=True,
        slug_field="name",
        queryset=Size.objects.all(),
        required=False,
    )

    image = serializers.URLField(max_length=500, required=False, allow_blank=True, allow_null=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "description",
            "price",
            "stock",
            "image",
            "category",
            "category_name",
            "client_type",
            "client_type_name",
            "sizes",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "category_name", "client_type_name", "created_at", "updated_at"]

    def validate_name(self, value):
        value = (value or "").strip()
        if len(value) < 2:
            raise serializers.ValidationError("name must be at least 2 characters")
        if len(value) > 100:
            raise serializers.ValidationError("name cannot exceed 100 characters")
        return value

    def validate_description(self, value):
        value = (value or "").strip()
        if len(value) > 500:
            raise serializers.ValidationError("description cannot exceed 500 characters")
        return value

    def validate_price(self, value):
        if value is None or value <= Decimal("0.00"):
            raise serializers.ValidationError("price must be greater than zero")
        return value

    def validate_image(self, value):
        return value or ""
