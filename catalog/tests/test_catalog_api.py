from __future__ import annotations

from decimal import Decimal
from io import BytesIO, StringIO

from django.core.files.uploadedfile import SimpleUploadedFile
from django.core.management import call_command
from openpyxl import Workbook
from rest_framework import status
from rest_framework.test import APITestCase

from bookings import lifecycle
from bookings.tests.helpers import make_admin, make_user
from catalog.models import Service
from catalog.seed_data import SERVICES
from users.models import User
from users.permissions import Actor

ACTIVE_SEED_SERVICES = [row for row in SERVICES if row.get("is_active", True)]


def workbook_upload(rows, name="services.xlsx"):
    wb = Workbook()
    ws = wb.active
    for row in rows:
        ws.append(row)
    buffer = BytesIO()
    wb.save(buffer)
    return SimpleUploadedFile(
        name,
        buffer.getvalue(),
        content_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    )


class SeedCommandTests(APITestCase):
    def test_seed_catalog_with_users(self) -> None:
        out = StringIO()

        call_command("seed_catalog", "--with-users", stdout=out)

        self.assertEqual(Service.objects.count(), len(SERVICES))
        self.assertFalse(Service.objects.get(category="visa", service_id="A").is_active)
        self.assertIn("DRIVING LICENCE", out.getvalue())
        admin = User.objects.get(email="admin@1point1solution.com")
        self.assertTrue(admin.is_admin)
        self.assertTrue(admin.check_password("admin@123"))

    def test_reseed_is_idempotent(self) -> None:
        call_command("seed_catalog", stdout=StringIO())
        first_ids = set(Service.objects.values_list("pk", flat=True))

        call_command("seed_catalog", stdout=StringIO())

        self.assertEqual(set(Service.objects.values_list("pk", flat=True)), first_ids)


class PublicCatalogTests(APITestCase):
    def setUp(self) -> None:
        call_command("seed_catalog", stdout=StringIO())

    def test_services_grouped_by_category(self) -> None:
        response = self.client.get("/api/services/")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["count"], len(ACTIVE_SEED_SERVICES))
        self.assertNotIn("visa", response.data["services"])
        licence = response.data["services"]["driving-licence"]
        self.assertEqual([s["serviceId"] for s in licence], list("ABCDEFGH"))
        self.assertEqual(licence[0]["totalFee"], Decimal("1000.00"))
        self.assertEqual(len(licence[0]["steps"]), 3)

    def test_categories(self) -> None:
        response = self.client.get("/api/services/categories/")

        categories = {row["category"]: row for row in response.data["categories"]}
        self.assertEqual(categories["passport"]["count"], 3)
        self.assertEqual(categories["passport"]["label"], "Passport")
        self.assertEqual(categories["passport"]["services"][1]["name"], "Tatkal Passport")
        self.assertNotIn("visa", categories)

    def test_services_by_category(self) -> None:
        ok = self.client.get("/api/services/category/registration-certificate/")
        empty = self.client.get("/api/services/category/visa/")

        self.assertEqual(ok.data["count"], 9)
        self.assertEqual(empty.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(empty.data["message"], "No services found for this category")

    def test_service_by_id_and_code(self) -> None:
        service = Service.objects.get(category="passport", service_id="B")

        by_pk = self.client.get(f"/api/services/id/{service.pk}/")
        by_code = self.client.get("/api/services/passport/b/")
        missing = self.client.get("/api/services/passport/Z/")

        self.assertEqual(by_pk.data["service"]["name"], "Tatkal Passport")
        self.assertEqual(by_code.data["service"]["id"], service.pk)
        self.assertEqual(missing.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(missing.data["message"], "Service not found")

    def test_catalog_ignores_bad_tokens(self) -> None:
        self.client.credentials(HTTP_AUTHORIZATION="Bearer not-a-token")

        response = self.client.get("/api/services/")

        self.assertEqual(response.status_code, status.HTTP_200_OK)


class SeedEndpointTests(APITestCase):
    url = "/api/services/seed/"

    def setUp(self) -> None:
        self.admin = make_admin()
        self.client.force_authenticate(self.admin)

    def test_requires_admin(self) -> None:
        self.client.force_authenticate(make_user())

        response = self.client.post(self.url)

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_seed_builtin_catalog(self) -> None:
        response = self.client.post(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["message"], "Services seeded successfully")
        self.assertEqual(response.data["count"], len(SERVICES))
        self.assertEqual(response.data["created"], len(SERVICES))

    def test_seed_from_workbook(self) -> None:
        upload = workbook_upload([
            ["category", "service_id", "name", "description", "fee", "requirements"],
            ["rti", "a", "RTI Filing", "File an RTI application", 350, "ID Proof; Address Proof"],
            ["passport", "A", "Passport Fresh", "New passport", "1200", None],
            ["unknown", "A", "Broken", "Nope", 1, None],
        ])

        response = self.client.post(self.url, {"file": upload}, format="multipart")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["count"], 2)
        self.assertEqual(len(response.data["errors"]), 1)
        self.assertIn("Row 4", response.data["errors"][0])
        rti = Service.objects.get(category="rti", service_id="A")
        self.assertEqual(rti.fee, Decimal("350"))
        self.assertEqual(rti.requirements, ["ID Proof", "Address Proof"])

    def test_workbook_without_required_columns(self) -> None:
        upload = workbook_upload([["category", "name"], ["rti", "RTI"]])

        response = self.client.post(self.url, {"file": upload}, format="multipart")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("Missing required columns", response.data["message"])

    def test_rejects_non_xlsx_upload(self) -> None:
        upload = SimpleUploadedFile("services.csv", b"category,service_id\n", content_type="text/csv")

        response = self.client.post(self.url, {"file": upload}, format="multipart")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "Only .xlsx files allowed")

    def test_reseed_keeps_booked_services(self) -> None:
        self.client.post(self.url)
        booked = Service.objects.get(category="rti", service_id="A")
        user = make_user()
        booking = lifecycle.create_booking(Actor.from_user(user), user, booked)
        upload = workbook_upload([
            ["category", "service_id", "name", "description", "fee"],
            ["passport", "A", "Passport Fresh", "New passport", 1200],
        ])

        response = self.client.post(self.url, {"file": upload}, format="multipart")

        self.assertEqual(response.data["deactivated"], 1)
        booked.refresh_from_db()
        self.assertFalse(booked.is_active)
        booking.refresh_from_db()
        self.assertEqual(booking.service_id, booked.pk)
        self.assertEqual(Service.objects.filter(is_active=True).count(), 1)
