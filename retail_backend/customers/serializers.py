# customers/serializers.py

"""
CUSTOMER SERIALIZER

Validation:
- name: 2..100 characters
- email: optional, unique (case-insensitive)
- phone: optional, digits with an optional +, parentheses, dashes, dots or spaces
- address: optional, up to 200 characters
"""

import re

from rest_framework import serializers

from common.serializers import CamelCaseAliasMixin
from customers.models import Customer, normalize_customer_email
from products.models import ClientType

PHONE_RE = re.compile(r"^[+]?[(]?[0-9]{1,4}[)]?[-\s.]?[(]?[0-9]{1,4}[)]?[-\s.]?[0-9]{1,9}$")


class CustomerSerializer(CamelCaseAliasMixin, serializers.ModelSerializer):
    field_aliases = {"clientTypeId": "client_type"}

    name = serializers.CharField(max_length=100)
    email = serializers.EmailField(required=False, allow_blank=True, allow_null=True)
    phone = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    address = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=200)
    client_type = serializers.PrimaryKeyRelatedField(
        queryset=ClientType.objects.all(),
        pk_field=serializers.UUIDField(),
        required=False,
        allow_null=True,
    )
    client_type_name = serializers.CharField(source="client_type.name", read_only=True, default=None)
    user = serializers.UUIDField(source="user_id", read_only=True)

    class Meta:
        model = Customer
        fields = [
            "id",
            "name",
            "email",
            "phone",
            "address",
            "client_type",
            "client_type_name",
            "user",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "user", "created_at", "updated_at"]

    def validate_name(self, value):
        value = (value or "").strip()
        if len(value) < 2:
            raise serializers.ValidationError("name must be at least 2 characters")
        return value

    def validate_email(self, value):
        email = normalize_customer_email(value)
        if email is None:
            return None

        qs = Customer.objects.filter(email=email)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError("a customer with this email already exists")
        return email

    def validate_phone(self, value):
        value = (value or "").strip()
        if value and not PHONE_RE.match(value):
            raise serializers.ValidationError("phone number is not valid")
        return value

    def validate_address(self, value):
        return (value or "").strip()
