from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from products.models import Category, ClientType, Product, Size

User = get_user_model()


class ProductApiTests(TestCase):
    """
    Tests for the catalog API.

    GUARANTEES:
    - Storefront reads are public
    - Writes require the admin role (catalog.edit)
    - Sizes are exchanged by name; unknown sizes are rejected
    - Invalid price / name never reach the database
    """

    def setUp(self):
        self.client = APIClient()

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

        self.category = Category.objects.create(name="Vestidos")
        self.mujer = ClientType.objects.create(name="Mujer")
        self.size_s = Size.objects.create(name="S")
        self.size_m = Size.objects.create(name="M")

        self.product = Product.objects.create(
            name="VESTIDO FLORAL",
            price=Decimal("120000.00"),
            stock=10,
            category=self.category,
            client_type=self.mujer,
        )
        self.product.sizes.set([self.size_s])

        self.url = "/api/products/products/"

    def _payload(self, **overrides):
        payload = {
            "name": "FALDA LARGA",
            "description": "Falda de algodón",
            "price": "85000.00",
            "stock": 20,
            "category": str(self.category.id),
            "client_type": str(self.mujer.id),
            "sizes": ["S", "M"],
        }
        payload.update(overrides)
        return payload

    # --------------------------------------------------
    # READ
    # --------------------------------------------------

    def test_anonymous_can_list_products(self):
        res = self.client.get(self.url)

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["count"], 1)
        row = res.data["results"][0]
        self.assertEqual(row["name"], "VESTIDO FLORAL")
        self.assertEqual(row["sizes"], ["S"])
        self.assertEqual(row["category_name"], "Vestidos")
        self.assertEqual(row["client_type_name"], "Mujer")

    def test_search_and_stock_filters(self):
        Product.objects.create(name="ABRIGO", price=Decimal("300000.00"), stock=0)

        res = self.client.get(self.url, {"q": "abri"})
        self.assertEqual([p["name"] for p in res.data["results"]], ["ABRIGO"])

        res = self.client.get(self.url, {"in_stock": "true"})
        self.assertEqual([p["name"] for p in res.data["results"]], ["VESTIDO FLORAL"])

    def test_filter_by_client_type(self):
        Product.objects.create(name="POLO", price=Decimal("50000.00"), stock=3)

        res = self.client.get(self.url, {"client_type": str(self.mujer.id)})

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["count"], 1)

    # --------------------------------------------------
    # WRITE PERMISSIONS
    # --------------------------------------------------

    def test_anonymous_cannot_create(self):
        res = self.client.post(self.url, self._payload(), format="json")

        self.assertEqual(res.status_code, 401)
        self.assertFalse(Product.objects.filter(name="FALDA LARGA").exists())

    def test_customer_cannot_create(self):
        self.client.force_authenticate(self.customer)

        res = self.client.post(self.url, self._payload(), format="json")

        self.assertEqual(res.status_code, 403)
        self.assertEqual(res.data["code"], "permission_denied")

    def test_admin_creates_product_with_sizes(self):
        self.client.force_authenticate(self.admin)

        res = self.client.post(self.url, self._payload(), format="json")

        self.assertEqual(res.status_code, 201)
        product = Product.objects.get(name="FALDA LARGA")
        self.assertEqual(sorted(product.sizes.values_list("name", flat=True)), ["M", "S"])
        self.assertEqual(product.client_type_id, self.mujer.id)

    def test_camel_case_aliases_are_accepted(self):
        self.client.force_authenticate(self.admin)
        payload = self._payload()
        payload["categoryId"] = payload.pop("category")
        payload["clientTypeId"] = payload.pop("client_type")

        res = self.client.post(self.url, payload, format="json")

        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["category"], str(self.category.id))

    def test_admin_updates_and_deletes(self):
        self.client.force_authenticate(self.admin)
        detail = f"{self.url}{self.product.id}/"

        res = self.client.patch(detail, {"stock": 4, "sizes": ["M"]}, format="json")
        self.assertEqual(res.status_code, 200)
        self.product.refresh_from_db()
        self.assertEqual(self.product.stock, 4)
        self.assertEqual(list(self.product.sizes.values_list("name", flat=True)), ["M"])

        res = self.client.delete(detail)
        self.assertEqual(res.status_code, 204)
        self.assertFalse(Product.objects.filter(pk=self.product.pk).exists())

    # --------------------------------------------------
    # VALIDATION
    # --------------------------------------------------

    def test_unknown_size_is_rejected(self):
        self.client.force_authenticate(self.admin)

        res = self.client.post(self.url, self._payload(sizes=["S", "XXXL"]), format="json")

        self.assertEqual(res.status_code, 400)
        self.assertIn("sizes", res.data["details"])
        self.assertFalse(Product.objects.filter(name="FALDA LARGA").exists())

    def test_price_must_be_positive(self):
        self.client.force_authenticate(self.admin)

        res = self.client.post(self.url, self._payload(price="0"), format="json")

        self.assertEqual(res.status_code, 400)
        self.assertIn("price", res.data["details"])

    def test_negative_stock_is_rejected(self):
        self.client.force_authenticate(self.admin)

        res = self.client.post(self.url, self._payload(stock=-1), format="json")

        self.assertEqual(res.status_code, 400)
        self.assertIn("stock", res.data["details"])

    def test_name_length(self):
        self.client.force_authenticate(self.admin)

        res = self.client.post(self.url, self._payload(name="A"), format="json")

        self.assertEqual(res.status_code, 400)
        self.assertIn("name", res.data["details"])

    def test_malformed_category_id_is_400(self):
        self.client.force_authenticate(self.admin)

        res = self.client.post(self.url, self._payload(category="not-a-uuid"), format="json")

        self.assertEqual(res.status_code, 400)
