from types import SimpleNamespace

from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from django.test import TestCase
from rest_framework.test import APIRequestFactory

from permissions.roles import (
    CAP_CATALOG_EDIT,
    CAP_PURCHASES_VIEW_OWN,
    CAP_SALES_VIEW,
    CatalogWriteOrReadOnly,
    HasAnyCapability,
    HasCapability,
    IsAdmin,
    IsCustomer,
    capabilities_for,
    is_admin_user,
)

User = get_user_model()


class RolePermissionTests(TestCase):
    """
    Tests for role and capability permissions.

    GUARANTEES:
    - admins hold every capability
    - customers only see their own purchases
    - anonymous users are denied everywhere except catalog reads
    """

    def setUp(self):
        self.factory = APIRequestFactory()

        self.admin = User.objects.create_user(
            email="admin@example.com",
            password="pass123",
            role="admin",
        )
        self.customer = User.objects.create_user(
            email="customer@example.com",
            password="pass123",
            role="customer",
        )

    # --------------------------------------------------
    # Helpers
    # --------------------------------------------------

    def _request_for(self, user, method="get"):
        request = getattr(self.factory, method)("/")
        request.user = user
        return request

    def _view(self, **attrs):
        return SimpleNamespace(**attrs)

    # --------------------------------------------------
    # CAPABILITIES
    # --------------------------------------------------

    def test_capability_map(self):
        self.assertIn(CAP_SALES_VIEW, capabilities_for(self.admin))
        self.assertEqual(capabilities_for(self.customer), {CAP_PURCHASES_VIEW_OWN})
        self.assertEqual(capabilities_for(AnonymousUser()), set())

    def test_superuser_without_role_is_admin(self):
        superuser = SimpleNamespace(is_authenticated=True, is_superuser=True, role=None)

        self.assertTrue(is_admin_user(superuser))
        self.assertIn(CAP_CATALOG_EDIT, capabilities_for(superuser))

    def test_has_capability(self):
        view = self._view(required_capability=CAP_SALES_VIEW)

        self.assertTrue(HasCapability().has_permission(self._request_for(self.admin), view))
        self.assertFalse(HasCapability().has_permission(self._request_for(self.customer), view))

    def test_has_capability_denies_when_view_declares_none(self):
        self.assertFalse(HasCapability().has_permission(self._request_for(self.admin), self._view()))

    def test_has_any_capability(self):
        view = self._view(required_any_capabilities={CAP_SALES_VIEW, CAP_PURCHASES_VIEW_OWN})

        self.assertTrue(HasAnyCapability().has_permission(self._request_for(self.customer), view))
        self.assertFalse(
            HasAnyCapability().has_permission(self._request_for(AnonymousUser()), view)
        )

    # --------------------------------------------------
    # CATALOG
    # --------------------------------------------------

    def test_catalog_reads_are_public(self):
        request = self._request_for(AnonymousUser())

        self.assertTrue(CatalogWriteOrReadOnly().has_permission(request, None))

    def test_catalog_writes_need_admin(self):
        perm = CatalogWriteOrReadOnly()

        self.assertTrue(perm.has_permission(self._request_for(self.admin, "post"), None))
        self.assertFalse(perm.has_permission(self._request_for(self.customer, "post"), None))
        self.assertFalse(perm.has_permission(self._request_for(AnonymousUser(), "delete"), None))

    # --------------------------------------------------
    # ROLES
    # --------------------------------------------------

    def test_role_permissions(self):
        admin_req = self._request_for(self.admin)
        customer_req = self._request_for(self.customer)

        self.assertTrue(IsAdmin().has_permission(admin_req, None))
        self.assertFalse(IsAdmin().has_permission(customer_req, None))
        self.assertTrue(IsCustomer().has_permission(customer_req, None))
        self.assertFalse(IsCustomer().has_permission(self._request_for(AnonymousUser()), None))
