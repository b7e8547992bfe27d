from __future__ import annotations

from decimal import Decimal

from django.test import override_settings
from rest_framework import status
from rest_framework.test import APITestCase

from bookings import lifecycle
from bookings.models import BookingStatus, PaymentStatus
from bookings.tests.helpers import make_admin, make_service, make_user
from users.permissions import Actor


class PaymentAPITestCase(APITestCase):
    def setUp(self) -> None:
        self.user = make_user()
        self.service = make_service()
        self.booking = lifecycle.create_booking(Actor.from_user(self.user), self.user, self.service)
        self.client.force_authenticate(self.user)

    def url(self, suffix="") -> str:
        return f"/api/payments/{self.booking.booking_id}/{suffix}"


class PaymentMethodsTests(APITestCase):
    def test_methods_are_public(self) -> None:
        response = self.client.get("/api/payments/methods/")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        ids = [method["id"] for method in response.data["methods"]]
        self.assertEqual(ids, ["cash", "upi", "bank_transfer", "online", "not_paid"])


class BookingPaymentTests(PaymentAPITestCase):
    def test_get_payment_details(self) -> None:
        response = self.client.get(self.url())

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        payment = response.data["payment"]
        self.assertEqual(payment["bookingId"], self.booking.booking_id)
        self.assertEqual(payment["amount"], Decimal("500.00"))
        self.assertEqual(payment["status"], PaymentStatus.PENDING)
        self.assertIsNone(payment["date"])

    def test_lowercase_reference_is_accepted(self) -> None:
        response = self.client.get(f"/api/payments/{self.booking.booking_id.lower()}/")

        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_put_paid_starts_processing(self) -> None:
        response = self.client.put(
            self.url(), {"paymentStatus": "paid", "paymentMethod": "bank_transfer", "transactionId": "NEFT-9"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["message"], "Payment updated successfully")
        payment = response.data["payment"]
        self.assertEqual(payment["status"], PaymentStatus.PAID)
        self.assertEqual(payment["method"], "bank_transfer")
        self.assertEqual(payment["bookingStatus"], BookingStatus.PROCESSING)
        self.booking.refresh_from_db()
        self.assertEqual(len(self.booking.tracking), 2)

    def test_other_user_is_forbidden(self) -> None:
        self.client.force_authenticate(make_user())

        response = self.client.get(self.url())

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_unknown_booking(self) -> None:
        response = self.client.get("/api/payments/BK000000000000/")

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["message"], "Booking not found")


class TestPaymentEndpointTests(PaymentAPITestCase):
    @override_settings(PAYMENTS_ENABLE_TEST_ENDPOINT=True)
    def test_test_payment_when_enabled(self) -> None:
        response = self.client.post(f"/api/payments/test/{self.booking.booking_id}/")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["message"], "Test payment successful")
        self.assertEqual(response.data["payment"]["method"], "upi")
        self.assertTrue(response.data["payment"]["transactionId"].startswith("TEST_"))
        self.assertEqual(response.data["payment"]["bookingStatus"], BookingStatus.PROCESSING)

    @override_settings(PAYMENTS_ENABLE_TEST_ENDPOINT=False)
    def test_test_payment_when_disabled(self) -> None:
        response = self.client.post(f"/api/payments/test/{self.booking.booking_id}/")

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.booking.refresh_from_db()
        self.assertEqual(self.booking.payment_status, PaymentStatus.PENDING)


class ReceiptTests(PaymentAPITestCase):
    def test_receipt_requires_payment(self) -> None:
        response = self.client.get(self.url("receipt/"))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "Receipt is only available for paid bookings")

    def test_receipt_pdf_for_paid_booking(self) -> None:
        lifecycle.mark_paid(self.booking, Actor.from_user(make_admin()))

        response = self.client.get(self.url("receipt/"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response["Content-Type"], "application/pdf")
        self.assertIn(self.booking.booking_id, response["Content-Disposition"])
        self.assertTrue(response.content.startswith(b"%PDF"))
