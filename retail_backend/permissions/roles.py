# permissions/roles.py

from __future__ import annotations

from typing import Optional

from rest_framework.permissions import SAFE_METHODS, BasePermission


# =========================================================
# ROLE CONSTANTS
# =========================================================
# admin    -> store staff using the dashboard
# customer -> storefront shopper (self-registered)
ROLE_ADMIN = "admin"
ROLE_CUSTOMER = "customer"

ROLE_CHOICES = (
    (ROLE_ADMIN, "Admin"),
    (ROLE_CUSTOMER, "Customer"),
)

ALL_ROLES = {ROLE_ADMIN, ROLE_CUSTOMER}


# =========================================================
# CAPABILITIES (THE REAL PERMISSION LANGUAGE)
# =========================================================
# Views should protect capabilities, not raw roles.
CAP_CATALOG_EDIT = "catalog.edit"          # products, categories, sizes, client types
CAP_CUSTOMERS_MANAGE = "customers.manage"
CAP_SALES_VIEW = "sales.view"              # every sale, not only one's own
CAP_SALES_MAINTAIN = "sales.maintain"      # backfills / repairs
CAP_PURCHASES_VIEW_OWN = "purchases.view_own"

ALL_CAPABILITIES = {
    CAP_CATALOG_EDIT,
    CAP_CUSTOMERS_MANAGE,
    CAP_SALES_VIEW,
    CAP_SALES_MAINTAIN,
    CAP_PURCHASES_VIEW_OWN,
}


# =========================================================
# ROLE → CAPABILITY MAP
# =========================================================
ROLE_CAPABILITIES: dict[str, set[str]] = {
    ROLE_ADMIN: {
        *ALL_CAPABILITIES,
    },
    ROLE_CUSTOMER: {
        CAP_PURCHASES_VIEW_OWN,
    },
}


# =========================================================
# Helpers
# =========================================================
def get_user_role(user) -> Optional[str]:
    role = getattr(user, "role", None)
    if role is None and getattr(user, "is_superuser", False):
        return ROLE_ADMIN
    return role


def capabilities_for(user) -> set[str]:
    if not user or not getattr(user, "is_authenticated", False):
        return set()
    return set(ROLE_CAPABILITIES.get(get_user_role(user), set()))


def user_has_capability(user, capability: str) -> bool:
    return capability in capabilities_for(user)


def is_admin_user(user) -> bool:
    return bool(user and getattr(user, "is_authenticated", False)) and (
        get_user_role(user) == ROLE_ADMIN or bool(getattr(user, "is_superuser", False))
    )


# =========================================================
# Base Role Permission (Internal Use)
# =========================================================
class BaseRolePermission(BasePermission):
    """
    Base permission for role-based access control.

    Subclasses must define:
    - allowed_roles (set)
    """

    allowed_roles: set[str] = set()

    def has_permission(self, request, view):
        user = request.user

        if not user or not user.is_authenticated:
            return False

        user_role = get_user_role(user)
        if not user_role:
            return False

        return user_role in self.allowed_roles


# =========================================================
# Capability Permissions
# =========================================================
class HasCapability(BasePermission):
    """
    Require a specific capability.

    Usage:
        permission_classes = [IsAuthenticated, HasCapability]
        view.required_capability = CAP_SALES_VIEW
    """

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False

        required = getattr(view, "required_capability", None)
        if not required:
            # deny-by-default to avoid accidental open endpoints
            return False

        return user_has_capability(user, required)


class HasAnyCapability(BasePermission):
    """
    Require ANY capability from a list.

    Usage:
        view.required_any_capabilities = {CAP_SALES_VIEW, CAP_PURCHASES_VIEW_OWN}
    """

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False

        required = getattr(view, "required_any_capabilities", None)
        if not required:
            return False

        caps = capabilities_for(user)
        return any(cap in caps for cap in set(required))


class CatalogWriteOrReadOnly(BasePermission):
    """
    Storefront reads are public; writes need catalog.edit.
    """

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return True
        return user_has_capability(request.user, CAP_CATALOG_EDIT)


# =========================================================
# Role Permissions
# =========================================================
class IsAdmin(BaseRolePermission):
    allowed_roles = {ROLE_ADMIN}


class IsCustomer(BaseRolePermission):
    allowed_roles = {ROLE_CUSTOMER}
