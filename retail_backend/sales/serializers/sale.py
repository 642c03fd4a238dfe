# sales/serializers/sale.py

from rest_framework import serializers

from common.serializers import CamelCaseAliasMixin
from customers.models import Customer
from products.models import ClientType
from sales.models import Sale

from .sale_item import SaleItemInputSerializer, SaleItemSerializer


class SaleCustomerSerializer(serializers.ModelSerializer):
    class Meta:
        model = Customer
        fields = ["id", "name", "email", "phone", "address"]
        read_only_fields = fields


class SaleClientTypeSerializer(serializers.ModelSerializer):
    class Meta:
        model = ClientType
        fields = ["id", "name"]
        read_only_fields = fields


class SaleSerializer(serializers.ModelSerializer):
    """
    Read model for a sale: customer, inferred client type and line items.
    """

    customer = SaleCustomerSerializer(read_only=True)
    client_type = SaleClientTypeSerializer(read_only=True, allow_null=True)
    items = SaleItemSerializer(many=True, read_only=True)

    class Meta:
        model = Sale
        fields = [
            "id",
            "customer",
            "client_type",
            "total",
            "status",
            "date",
            "created_at",
            "items",
        ]
        read_only_fields = fields


class SaleCreateSerializer(CamelCaseAliasMixin, serializers.Serializer):
    """
    Checkout payload.

    Either customer_id, or customer_name + customer_email (upsert by email).
    The storefront's camelCase keys are accepted as aliases.
    """

    field_aliases = {
        "customerId": "customer_id",
        "customerName": "customer_name",
        "customerEmail": "customer_email",
        "customerPhone": "customer_phone",
        "customerAddress": "customer_address",
    }

    customer_id = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    customer_name = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=100
    )
    customer_email = serializers.EmailField(required=False, allow_blank=True, allow_null=True)
    customer_phone = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=30
    )
    customer_address = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=200
    )

    items = SaleItemInputSerializer(many=True, allow_empty=False)
    total = serializers.CharField()
    date = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class ClientTypeBackfillResultSerializer(serializers.Serializer):
    message = serializers.CharField()
    total = serializers.IntegerField()
    updated = serializers.IntegerField()
