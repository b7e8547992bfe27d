from __future__ import annotations

from rest_framework import status
from rest_framework.test import APITestCase

from bookings import lifecycle
from bookings.tests.helpers import make_service, make_user
from users.models import User
from users.permissions import Actor


class RegisterAPITests(APITestCase):
    url = "/api/auth/register/"

    def test_register_returns_tokens_and_profile(self) -> None:
        response = self.client.post(
            self.url,
            {
                "fullName": "Anitha Kumar",
                "email": "Anitha@Example.com",
                "phone": "9876501234",
                "password": "Sunflower#2024",
                "address": {"city": "Chennai", "pincode": "600001"},
            },
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertTrue(response.data["success"])
        self.assertIn("token", response.data)
        self.assertIn("refresh", response.data)
        self.assertEqual(response.data["user"]["email"], "anitha@example.com")
        self.assertEqual(response.data["user"]["role"], User.Role.USER)
        self.assertNotIn("password", response.data["user"])
        self.assertTrue(User.objects.get(email="anitha@example.com").check_password("Sunflower#2024"))

    def test_duplicate_email_is_rejected(self) -> None:
        make_user(email="taken@example.com")

        response = self.client.post(
            self.url,
            {"fullName": "Someone", "email": "TAKEN@example.com", "password": "Sunflower#2024"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "User already exists")

    def test_invalid_pincode_is_rejected(self) -> None:
        response = self.client.post(
            self.url,
            {
                "fullName": "Someone",
                "email": "someone@example.com",
                "password": "Sunflower#2024",
                "address": {"pincode": "12"},
            },
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("address", response.data["errors"])


class LoginAPITests(APITestCase):
    url = "/api/auth/login/"

    def setUp(self) -> None:
        self.user = make_user(email="login@example.com")

    def test_login_and_use_token(self) -> None:
        response = self.client.post(
            self.url, {"email": "LOGIN@example.com", "password": "StrongPass123"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["message"], "Login successful")

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['token']}")
        me = self.client.get("/api/auth/me/")
        self.assertEqual(me.status_code, status.HTTP_200_OK)
        self.assertEqual(me.data["user"]["email"], "login@example.com")

    def test_wrong_password(self) -> None:
        response = self.client.post(self.url, {"email": "login@example.com", "password": "nope"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(response.data["success"])
        self.assertEqual(response.data["message"], "Invalid email or password")

    def test_deactivated_account(self) -> None:
        self.user.is_active = False
        self.user.save()

        response = self.client.post(
            self.url, {"email": "login@example.com", "password": "StrongPass123"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data["message"], "User account is deactivated")

    def test_refresh_token(self) -> None:
        login = self.client.post(
            self.url, {"email": "login@example.com", "password": "StrongPass123"}, format="json"
        )

        response = self.client.post("/api/auth/token/refresh/", {"refresh": login.data["refresh"]}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn("access", response.data)


class ProfileAPITests(APITestCase):
    url = "/api/auth/me/"

    def setUp(self) -> None:
        self.user = make_user()
        self.client.force_authenticate(self.user)

    def test_profile_includes_booking_stats(self) -> None:
        service = make_service()
        actor = Actor.from_user(self.user)
        lifecycle.create_booking(actor, self.user, service)
        lifecycle.create_booking(actor, self.user, service, payment_method="upi")

        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data["user"]["bookings"]), 2)
        self.assertEqual(
            response.data["stats"],
            {"totalBookings": 2, "activeBookings": 2, "completedBookings": 0, "totalSpent": 500.0},
        )

    def test_requires_authentication(self) -> None:
        self.client.force_authenticate(None)

        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_update_profile(self) -> None:
        response = self.client.patch(
            self.url,
            {"fullName": "Renamed User", "panNumber": "abcde1234f", "address": {"city": "Salem"}},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.user.refresh_from_db()
        self.assertEqual(self.user.full_name, "Renamed User")
        self.assertEqual(self.user.pan_number, "ABCDE1234F")
        self.assertEqual(self.user.address["city"], "Salem")

    def test_email_and_role_cannot_change(self) -> None:
        email = self.client.patch(self.url, {"email": "new@example.com"}, format="json")
        role = self.client.patch(self.url, {"role": "admin"}, format="json")

        self.assertEqual(email.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(role.status_code, status.HTTP_400_BAD_REQUEST)
        self.user.refresh_from_db()
        self.assertEqual(self.user.role, User.Role.USER)

    def test_invalid_aadhaar(self) -> None:
        response = self.client.patch(self.url, {"aadhaarNumber": "1234"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "Aadhaar number must be 12 digits.")
