from __future__ import annotations

from decimal import Decimal

from rest_framework import status
from rest_framework.test import APITestCase

from bookings.models import Booking, BookingStatus, PaymentStatus
from bookings.tests.helpers import make_admin, make_service, make_user

MISSING_UUID = "00000000-0000-0000-0000-000000000000"


class BookingAPITestCase(APITestCase):
    def setUp(self) -> None:
        self.user = make_user()
        self.admin = make_admin()
        self.service = make_service()
        self.client.force_authenticate(self.user)

    def create_booking(self, **payload) -> dict:
        body = {"serviceId": str(self.service.pk), **payload}
        response = self.client.post("/api/bookings/", body, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        return response.data["booking"]


class CreateBookingAPITests(BookingAPITestCase):
    def test_create_cash_booking(self) -> None:
        response = self.client.post(
            "/api/bookings/",
            {"serviceId": str(self.service.pk), "paymentMethod": "cash", "additionalInfo": "Morning slot"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data["success"])
        self.assertEqual(response.data["message"], "Booking created successfully")
        booking = response.data["booking"]
        self.assertRegex(booking["bookingId"], r"^BK\d{12}$")
        self.assertEqual(booking["service"], "Learner Licence")
        self.assertEqual(booking["status"], BookingStatus.PENDING)
        self.assertEqual(booking["paymentStatus"], PaymentStatus.PENDING)
        self.assertEqual(booking["amount"], Decimal("500.00"))

        stored = Booking.objects.get(booking_id=booking["bookingId"])
        self.assertEqual(stored.additional_info, "Morning slot")
        self.assertEqual(len(stored.tracking), 1)

    def test_create_upi_booking_starts_processing(self) -> None:
        booking = self.create_booking(paymentMethod="upi", transactionId="UPI-778")

        self.assertEqual(booking["status"], BookingStatus.PROCESSING)
        self.assertEqual(booking["paymentStatus"], PaymentStatus.PAID)
        self.assertEqual(len(Booking.objects.get(pk=booking["id"]).tracking), 2)

    def test_non_numeric_service_id_is_rejected(self) -> None:
        response = self.client.post("/api/bookings/", {"serviceId": "abc"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(response.data["success"])
        self.assertEqual(response.data["message"], "Invalid service ID format")

    def test_unknown_service_returns_404(self) -> None:
        response = self.client.post("/api/bookings/", {"serviceId": "9999"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["message"], "Service not found")

    def test_inactive_service_is_rejected(self) -> None:
        self.service.is_active = False
        self.service.save()

        response = self.client.post("/api/bookings/", {"serviceId": str(self.service.pk)}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "This service is currently unavailable")

    def test_anonymous_request_gets_401_envelope(self) -> None:
        self.client.force_authenticate(None)

        response = self.client.post("/api/bookings/", {"serviceId": str(self.service.pk)}, format="json")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(response.data["success"])


class ReadBookingAPITests(BookingAPITestCase):
    def test_owner_can_read_booking(self) -> None:
        created = self.create_booking()

        response = self.client.get(f"/api/bookings/{created['id']}/")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["booking"]["bookingId"], created["bookingId"])
        self.assertEqual(response.data["booking"]["service"]["serviceId"], "A")
        self.assertEqual(len(response.data["booking"]["tracking"]), 1)

    def test_other_user_gets_403_and_missing_booking_404(self) -> None:
        created = self.create_booking()
        self.client.force_authenticate(make_user())

        forbidden = self.client.get(f"/api/bookings/{created['id']}/")
        missing = self.client.get(f"/api/bookings/{MISSING_UUID}/")

        self.assertEqual(forbidden.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(forbidden.data["message"], "Not authorized to access this booking")
        self.assertEqual(missing.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(missing.data["message"], "Booking not found")

    def test_admin_can_read_any_booking(self) -> None:
        created = self.create_booking()
        self.client.force_authenticate(self.admin)

        response = self.client.get(f"/api/bookings/{created['id']}/")

        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_my_bookings_lists_only_own_bookings(self) -> None:
        self.create_booking()
        self.create_booking(paymentMethod="upi")
        other = make_user()
        self.client.force_authenticate(other)
        self.create_booking()
        self.client.force_authenticate(self.user)

        response = self.client.get("/api/bookings/my-bookings/")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["count"], 2)
        self.assertTrue(all(b["user"] == self.user.pk for b in response.data["bookings"]))

        filtered = self.client.get("/api/bookings/my-bookings/", {"status": "processing"})
        self.assertEqual(filtered.data["count"], 1)

    def test_stats_counts_own_bookings(self) -> None:
        self.create_booking()
        self.create_booking(paymentMethod="upi")

        response = self.client.get("/api/bookings/stats/")

        stats = response.data["stats"]
        self.assertEqual(stats["totalBookings"], 2)
        self.assertEqual(stats["pendingBookings"], 2)
        self.assertEqual(stats["completedBookings"], 0)
        self.assertEqual({row["status"] for row in stats["statusBreakdown"]}, {"pending", "processing"})


class BookingActionAPITests(BookingAPITestCase):
    def test_payment_update_moves_booking_to_processing(self) -> None:
        created = self.create_booking(paymentMethod="cash")

        response = self.client.put(
            f"/api/bookings/{created['id']}/payment/",
            {"paymentStatus": "paid", "paymentMethod": "upi", "transactionId": "TXN-1"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        booking = response.data["booking"]
        self.assertEqual(booking["status"], BookingStatus.PROCESSING)
        self.assertEqual(booking["paymentStatus"], PaymentStatus.PAID)
        self.assertEqual(booking["transactionId"], "TXN-1")
        self.assertIsNotNone(booking["paymentDate"])

    def test_invalid_payment_status_is_rejected(self) -> None:
        created = self.create_booking()

        response = self.client.put(
            f"/api/bookings/{created['id']}/payment/", {"paymentStatus": "bogus"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("paymentStatus", response.data["errors"])

    def test_cancel_twice_fails_the_second_time(self) -> None:
        created = self.create_booking()

        first = self.client.put(f"/api/bookings/{created['id']}/cancel/")
        second = self.client.put(f"/api/bookings/{created['id']}/cancel/")

        self.assertEqual(first.status_code, status.HTTP_200_OK)
        self.assertEqual(first.data["booking"]["status"], BookingStatus.CANCELLED)
        self.assertEqual(first.data["booking"]["paymentStatus"], PaymentStatus.FAILED)
        self.assertEqual(second.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(second.data["message"], "Booking cannot be cancelled as it is already cancelled")
        self.assertEqual(second.data["code"], "invalid_transition")

    def test_status_change_is_admin_only(self) -> None:
        created = self.create_booking()

        response = self.client.put(
            f"/api/bookings/{created['id']}/status/", {"status": "processing"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["message"], "Not authorized as admin")

    def test_admin_status_change_and_invalid_value(self) -> None:
        created = self.create_booking()
        self.client.force_authenticate(self.admin)

        ok = self.client.put(
            f"/api/bookings/{created['id']}/status/", {"status": "processing"}, format="json"
        )
        bad = self.client.put(
            f"/api/bookings/{created['id']}/status/", {"status": "archived"}, format="json"
        )
        backwards = self.client.put(
            f"/api/bookings/{created['id']}/status/", {"status": "pending"}, format="json"
        )

        self.assertEqual(ok.status_code, status.HTTP_200_OK)
        self.assertEqual(ok.data["booking"]["tracking"][-1]["updatedBy"], self.admin.full_name)
        self.assertEqual(bad.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(bad.data["message"], "Invalid status. Must be: pending, processing, completed, or cancelled")
        self.assertEqual(backwards.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(backwards.data["message"], "Cannot change booking status from processing to pending")

    def test_admin_mark_paid(self) -> None:
        created = self.create_booking()
        self.client.force_authenticate(self.admin)

        response = self.client.put(f"/api/bookings/{created['id']}/mark-paid/", {}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        booking = response.data["booking"]
        self.assertEqual(booking["status"], BookingStatus.PROCESSING)
        self.assertEqual(booking["paymentStatus"], PaymentStatus.PAID)
        self.assertEqual(booking["paymentMethod"], "cash")
        self.assertEqual(booking["tracking"][-1]["message"], "Payment marked as received by admin")

    def test_owner_cannot_mark_paid(self) -> None:
        created = self.create_booking()

        response = self.client.put(f"/api/bookings/{created['id']}/mark-paid/", {}, format="json")

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
