from datetime import datetime
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.utils import timezone
from rest_framework.test import APIClient

from customers.models import Customer
from products.models import ClientType, Product
from sales.models import Sale
from sales.services.sale_creation import create_sale

User = get_user_model()


class SalesApiTests(TestCase):
    """
    Tests for the sales endpoints.

    GUARANTEES:
    - Anyone can check out; storefront camelCase payloads are accepted
    - Stock conflicts answer 409 with the offending product
    - Only admins list every sale; customers see only their own
    - The client-type backfill is admin-only
    """

    def setUp(self):
        self.client = APIClient()

        self.admin = User.objects.create_user(
            email="admin@example.com",
            password="pass123",
            role="admin",
        )
        self.shopper = User.objects.create_user(
            email="maria@example.com",
            password="pass123",
            name="María",
        )
        self.stranger = User.objects.create_user(
            email="juan@example.com",
            password="pass123",
        )

        self.mujer = ClientType.objects.create(name="Mujer")
        self.vestido = Product.objects.create(
            name="VESTIDOS",
            price=Decimal("120000.00"),
            stock=5,
            client_type=self.mujer,
        )

        self.url = "/api/sales/"

    def _storefront_payload(self, quantity=2, **overrides):
        payload = {
            "customerName": "María García",
            "customerEmail": "maria@example.com",
            "customerPhone": "300-123-4567",
            "customerAddress": "Calle 5",
            "items": [
                {
                    "productId": str(self.vestido.id),
                    "quantity": quantity,
                    "price": 120000,
                    "size": "M",
                }
            ],
            "total": 120000 * quantity,
        }
        payload.update(overrides)
        return payload

    def _sale_for(self, email, name="Cliente", when=None):
        return create_sale(
            items=[{"product_id": str(self.vestido.id), "quantity": 1, "price": "120000"}],
            total="120000",
            customer_name=name,
            customer_email=email,
            sale_date=when,
        )

    # --------------------------------------------------
    # CHECKOUT
    # --------------------------------------------------

    def test_anonymous_checkout(self):
        res = self.client.post(self.url, self._storefront_payload(), format="json")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["status"], "completed")
        self.assertEqual(res.data["total"], "240000.00")
        self.assertEqual(res.data["customer"]["email"], "maria@example.com")
        self.assertEqual(res.data["client_type"]["name"], "Mujer")
        self.assertEqual(len(res.data["items"]), 1)
        self.assertEqual(res.data["items"][0]["product_name"], "VESTIDOS")
        self.assertEqual(res.data["items"][0]["size"], "M")

        self.vestido.refresh_from_db()
        self.assertEqual(self.vestido.stock, 3)

    def test_checkout_with_string_quantities_answers_200(self):
        res = self.client.post(
            self.url,
            {
                "customerName": "Ana",
                "customerEmail": "ana@x.com",
                "items": [{"productId": str(self.vestido.id), "quantity": "2", "price": "100"}],
                "total": "200",
            },
            format="json",
        )

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["total"], "200.00")
        self.assertEqual(res.data["items"][0]["quantity"], 2)
        self.assertTrue(Customer.objects.filter(email="ana@x.com", name="Ana").exists())
        self.vestido.refresh_from_db()
        self.assertEqual(self.vestido.stock, 3)

    def test_out_of_range_amounts_are_validation_errors(self):
        cases = {
            "price": self._storefront_payload(
                items=[{"productId": str(self.vestido.id), "quantity": 1, "price": "1e30"}]
            ),
            "total": self._storefront_payload(total="99999999999999"),
        }
        for label, payload in cases.items():
            with self.subTest(label):
                res = self.client.post(self.url, payload, format="json")

                self.assertEqual(res.status_code, 400)
                self.assertEqual(res.data["code"], "validation_error")

        self.assertEqual(Sale.objects.count(), 0)
        self.vestido.refresh_from_db()
        self.assertEqual(self.vestido.stock, 5)

    def test_signed_in_checkout_links_customer(self):
        self.client.force_authenticate(self.shopper)

        res = self.client.post(self.url, self._storefront_payload(quantity=1), format="json")

        self.assertEqual(res.status_code, 200)
        customer = Customer.objects.get(email="maria@example.com")
        self.assertEqual(customer.user_id, self.shopper.id)

    def test_insufficient_stock_is_conflict(self):
        res = self.client.post(self.url, self._storefront_payload(quantity=6), format="json")

        self.assertEqual(res.status_code, 409)
        self.assertEqual(res.data["code"], "insufficient_stock")
        self.assertFalse(res.data["retryable"])
        self.assertEqual(res.data["details"]["product_id"], str(self.vestido.id))
        self.assertEqual(res.data["details"]["available"], 5)
        self.assertEqual(res.data["details"]["requested"], 6)
        self.assertEqual(Sale.objects.count(), 0)

    def test_empty_items_is_validation_error(self):
        res = self.client.post(self.url, self._storefront_payload(items=[]), format="json")

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["code"], "validation_error")

    def test_unknown_product_is_validation_error(self):
        payload = self._storefront_payload()
        payload["items"][0]["productId"] = "00000000-0000-0000-0000-000000000001"

        res = self.client.post(self.url, payload, format="json")

        self.assertEqual(res.status_code, 400)
        self.assertIn("missing_product_ids", res.data["details"])

    # --------------------------------------------------
    # LIST / RETRIEVE
    # --------------------------------------------------

    def test_list_requires_admin(self):
        self.assertEqual(self.client.get(self.url).status_code, 401)

        self.client.force_authenticate(self.shopper)
        self.assertEqual(self.client.get(self.url).status_code, 403)

    def test_admin_lists_sales_with_date_filter(self):
        old = timezone.make_aware(datetime(2024, 1, 10, 12, 0))
        recent = timezone.make_aware(datetime(2024, 6, 10, 12, 0))
        self._sale_for("maria@example.com", when=old)
        self._sale_for("juan@example.com", when=recent)
        self.client.force_authenticate(self.admin)

        res = self.client.get(self.url)
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["count"], 2)

        res = self.client.get(self.url, {"date_from": "2024-06-01"})
        self.assertEqual(res.data["count"], 1)
        self.assertEqual(res.data["results"][0]["customer"]["email"], "juan@example.com")

    def test_retrieve_own_sale_only(self):
        sale = self._sale_for("maria@example.com")
        detail = f"{self.url}{sale.id}/"

        self.client.force_authenticate(self.shopper)
        self.assertEqual(self.client.get(detail).status_code, 200)

        self.client.force_authenticate(self.stranger)
        self.assertEqual(self.client.get(detail).status_code, 404)

        self.client.force_authenticate(self.admin)
        self.assertEqual(self.client.get(detail).status_code, 200)

    # --------------------------------------------------
    # MY PURCHASES
    # --------------------------------------------------

    def test_my_purchases(self):
        mine = self._sale_for("maria@example.com")
        self._sale_for("juan@example.com")
        self.client.force_authenticate(self.shopper)

        res = self.client.get(f"{self.url}my-purchases/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual([s["id"] for s in res.data], [str(mine.id)])

    def test_my_purchases_without_customer_record_is_empty(self):
        self.client.force_authenticate(self.stranger)

        res = self.client.get(f"{self.url}my-purchases/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data, [])

    def test_my_purchases_requires_authentication(self):
        self.assertEqual(self.client.get(f"{self.url}my-purchases/").status_code, 401)

    # --------------------------------------------------
    # CLIENT TYPE BACKFILL
    # --------------------------------------------------

    def test_backfill_endpoint(self):
        self.vestido.client_type = None
        self.vestido.save()
        self._sale_for("maria@example.com")
        self.vestido.client_type = self.mujer
        self.vestido.save()

        self.client.force_authenticate(self.shopper)
        self.assertEqual(self.client.post(f"{self.url}update-client-types/").status_code, 403)

        self.client.force_authenticate(self.admin)
        res = self.client.post(f"{self.url}update-client-types/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["total"], 1)
        self.assertEqual(res.data["updated"], 1)
        self.assertEqual(Sale.objects.get().client_type_id, self.mujer.id)
