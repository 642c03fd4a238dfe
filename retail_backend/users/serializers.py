# users/serializers.py

from rest_framework import serializers

from common.serializers import CamelCaseAliasMixin
from users.models import User


# ---------------- REGISTER ----------------
class RegisterSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, style={"input_type": "password"})


# ---------------- LOGIN (INPUT ONLY) ----------------
class LoginSerializer(serializers.Serializer):
    """
    Input validation only.
    Authentication is handled in the view.
    """

    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, style={"input_type": "password"})


# ---------------- USER OUTPUT ----------------
class UserSerializer(serializers.ModelSerializer):
    """
    Safe user representation for frontend consumption.
    """

    customer_id = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ["id", "email", "name", "role", "customer_id"]

    def get_customer_id(self, obj):
        customer = getattr(obj, "customer", None)
        return str(customer.id) if customer is not None else None


class LoginResponseSerializer(serializers.Serializer):
    access = serializers.CharField()
    refresh = serializers.CharField()
    user = UserSerializer()


# ---------------- PROFILE ----------------
class ProfileSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ["id", "name", "email"]
        read_only_fields = ["id", "email"]


class ProfileUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(allow_blank=True, trim_whitespace=False)


# ---------------- PASSWORD ----------------
class PasswordChangeSerializer(CamelCaseAliasMixin, serializers.Serializer):
    field_aliases = {
        "currentPassword": "current_password",
        "newPassword": "new_password",
    }

    current_password = serializers.CharField(write_only=True, trim_whitespace=False)
    new_password = serializers.CharField(write_only=True, trim_whitespace=False)
