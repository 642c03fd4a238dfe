from unittest import mock

from django.db.utils import OperationalError
from django.test import TestCase
from rest_framework.test import APIClient


class HealthCheckTests(TestCase):
    def setUp(self):
        self.client = APIClient()

    def test_api_root_lists_modules(self):
        res = self.client.get("/api/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(set(res.data["modules"]), {"products", "customers", "sales"})

    def test_health_ok(self):
        res = self.client.get("/api/health/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data, {"status": "ok", "db": "ok"})

    def test_health_reports_database_down(self):
        broken = mock.MagicMock()
        broken.cursor.side_effect = OperationalError("connection refused")

        with mock.patch("backend.urls.connections", {"default": broken}):
            res = self.client.get("/api/health/")

        self.assertEqual(res.status_code, 503)
        self.assertEqual(res.data["db"], "down")
