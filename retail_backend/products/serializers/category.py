# products/serializers/category.py

from rest_framework import serializers
from rest_framework.validators import UniqueValidator

from products.models import Category, ClientType, Size


class CategorySerializer(serializers.ModelSerializer):
    """
    Category serializer.

    Rules:
    - name is writable (so admins can create categories)
    - id + created_at are read-only
    """

    name = serializers.CharField(
        required=True,
        allow_blank=False,
        max_length=255,
        validators=[UniqueValidator(queryset=Category.objects.all(), lookup="iexact")],
    )

    class Meta:
        model = Category
        fields = ["id", "name", "created_at"]
        read_only_fields = ["id", "created_at"]

    def validate_name(self, value: str):
        v = (value or "").strip()
        if not v:
            raise serializers.ValidationError("name cannot be blank")
        return v


class SizeSerializer(serializers.ModelSerializer):
    class Meta:
        model = Size
        fields = ["id", "name"]


class ClientTypeSerializer(serializers.ModelSerializer):
    class Meta:
        model = ClientType
        fields = ["id", "name"]
