from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from customers.models import Customer
from products.models import ClientType
from sales.models import Sale

User = get_user_model()


class CustomerApiTests(TestCase):
    """
    Tests for customer management.

    GUARANTEES:
    - Only admins (customers.manage) reach the customer API
    - Emails are normalized and unique
    - Invalid name / phone / address are rejected
    - A customer with sales cannot be deleted
    """

    def setUp(self):
        self.client = APIClient()
        self.admin = User.objects.create_user(
            email="admin@example.com",
            password="pass123",
            role="admin",
        )
        self.shopper = User.objects.create_user(
            email="shopper@example.com",
            password="pass123",
        )
        self.mujer = ClientType.objects.create(name="Mujer")
        self.maria = Customer.objects.create(
            name="María García",
            email="maria@example.com",
            phone="300-123-4567",
        )
        self.url = "/api/customers/"

    # --------------------------------------------------
    # ACCESS
    # --------------------------------------------------

    def test_anonymous_is_rejected(self):
        self.assertEqual(self.client.get(self.url).status_code, 401)

    def test_customer_role_is_forbidden(self):
        self.client.force_authenticate(self.shopper)

        self.assertEqual(self.client.get(self.url).status_code, 403)

    def test_admin_lists_and_searches(self):
        Customer.objects.create(name="Juan Pérez", email="juan@example.com")
        self.client.force_authenticate(self.admin)

        res = self.client.get(self.url)
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["count"], 2)

        res = self.client.get(self.url, {"q": "juan"})
        self.assertEqual([c["name"] for c in res.data["results"]], ["Juan Pérez"])

    # --------------------------------------------------
    # CREATE / UPDATE
    # --------------------------------------------------

    def test_admin_creates_customer(self):
        self.client.force_authenticate(self.admin)

        res = self.client.post(
            self.url,
            {
                "name": "Ana Martínez",
                "email": " Ana@Example.com",
                "phone": "(300) 555-1234",
                "clientTypeId": str(self.mujer.id),
            },
            format="json",
        )

        self.assertEqual(res.status_code, 201)
        customer = Customer.objects.get(pk=res.data["id"])
        self.assertEqual(customer.email, "ana@example.com")
        self.assertEqual(customer.client_type_id, self.mujer.id)

    def test_duplicate_email_is_rejected(self):
        self.client.force_authenticate(self.admin)

        res = self.client.post(
            self.url,
            {"name": "Otra María", "email": "MARIA@example.com"},
            format="json",
        )

        self.assertEqual(res.status_code, 400)
        self.assertIn("email", res.data["details"])

    def test_update_keeps_own_email(self):
        self.client.force_authenticate(self.admin)

        res = self.client.patch(
            f"{self.url}{self.maria.id}/",
            {"email": "maria@example.com", "address": "Calle 10 # 5-20"},
            format="json",
        )

        self.assertEqual(res.status_code, 200)
        self.maria.refresh_from_db()
        self.assertEqual(self.maria.address, "Calle 10 # 5-20")

    def test_field_validation(self):
        self.client.force_authenticate(self.admin)

        cases = [
            {"name": "A"},
            {"name": "Ana", "phone": "call me maybe"},
            {"name": "Ana", "address": "x" * 201},
        ]
        for payload in cases:
            with self.subTest(payload=payload):
                res = self.client.post(self.url, payload, format="json")
                self.assertEqual(res.status_code, 400)
                self.assertEqual(res.data["code"], "validation_error")

    # --------------------------------------------------
    # DELETE
    # --------------------------------------------------

    def test_delete_customer_without_sales(self):
        self.client.force_authenticate(self.admin)

        res = self.client.delete(f"{self.url}{self.maria.id}/")

        self.assertEqual(res.status_code, 204)
        self.assertFalse(Customer.objects.filter(pk=self.maria.pk).exists())

    def test_delete_customer_with_sales_is_conflict(self):
        Sale.objects.create(customer=self.maria, total=Decimal("100.00"))
        self.client.force_authenticate(self.admin)

        res = self.client.delete(f"{self.url}{self.maria.id}/")

        self.assertEqual(res.status_code, 409)
        self.assertEqual(res.data["code"], "protected")
        self.assertTrue(Customer.objects.filter(pk=self.maria.pk).exists())
