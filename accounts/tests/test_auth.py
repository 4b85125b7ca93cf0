from rest_framework import status
from rest_framework.test import APITestCase

from accounts.models import StaffAccount
from accounts.principals import GuestPrincipal, StaffPrincipal
from accounts.services import authenticate_credentials
from guest.models import Guest

LOGIN_URL = "/api/auth/login/"
REFRESH_URL = "/api/auth/token/refresh/"
ME_URL = "/api/auth/me/"


class AuthAPITestCase(APITestCase):

    def setUp(self):
        self.staff = StaffAccount.objects.create_user(
            email="Manager@Hotel.test",
            password="password123",
            name="Mia Manager",
            role=StaffAccount.Role.MANAGER,
        )
        self.guest = Guest.objects.create(
            first_name="Ann", last_name="Lee", email="ann@example.com", password="secret1"
        )

    def _login(self, email, password):
        return self.client.post(LOGIN_URL, {"email": email, "password": password})

    def test_staff_login(self):
        response = self._login("manager@hotel.test", "password123")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["role"], "manager")
        self.assertEqual(response.data["kind"], "staff")
        self.assertEqual(response.data["name"], "Mia Manager")
        self.assertIn("access", response.data)
        self.assertIn("refresh", response.data)

    def test_guest_login(self):
        response = self._login("ANN@example.com", "secret1")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["role"], "user")
        self.assertEqual(response.data["kind"], "guest")
        self.assertEqual(response.data["name"], "Ann Lee")

    def test_invalid_credentials(self):
        passwordless = Guest.objects.create(first_name="Bob", email="bob@example.com")
        for email, password in (
            ("manager@hotel.test", "wrong"),
            ("ann@example.com", "wrong"),
            (passwordless.email, ""),
            ("nobody@example.com", "password123"),
        ):
            with self.subTest(email=email):
                response = self._login(email, password)
                self.assertIn(
                    response.status_code,
                    (status.HTTP_400_BAD_REQUEST, status.HTTP_401_UNAUTHORIZED),
                )
                self.assertNotIn("access", response.data)

    def test_inactive_staff_cannot_login(self):
        self.staff.is_active = False
        self.staff.save()

        response = self._login("manager@hotel.test", "password123")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_me_with_access_token(self):
        for email, password, kind in (
            ("manager@hotel.test", "password123", "staff"),
            ("ann@example.com", "secret1", "guest"),
        ):
            with self.subTest(kind=kind):
                access = self._login(email, password).data["access"]
                self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")

                response = self.client.get(ME_URL)

                self.assertEqual(response.status_code, status.HTTP_200_OK)
                self.assertEqual(response.data["email"], email)
                self.assertEqual(response.data["kind"], kind)
        self.client.credentials()

    def test_me_requires_token(self):
        self.assertEqual(self.client.get(ME_URL).status_code, status.HTTP_401_UNAUTHORIZED)

        self.client.credentials(HTTP_AUTHORIZATION="Bearer not-a-token")
        self.assertEqual(self.client.get(ME_URL).status_code, status.HTTP_401_UNAUTHORIZED)

    def test_refresh_for_guest(self):
        refresh = self._login("ann@example.com", "secret1").data["refresh"]

        response = self.client.post(REFRESH_URL, {"refresh": refresh})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['access']}")
        self.assertEqual(self.client.get(ME_URL).data["kind"], "guest")

    def test_refresh_rejects_garbage(self):
        response = self.client.post(REFRESH_URL, {"refresh": "garbage"})

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_token_for_deleted_guest_rejected(self):
        access = self._login("ann@example.com", "secret1").data["access"]
        self.guest.delete()
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")

        self.assertEqual(self.client.get(ME_URL).status_code, status.HTTP_401_UNAUTHORIZED)


class AuthenticateCredentialsTestCase(APITestCase):

    def test_staff_checked_before_guest(self):
        StaffAccount.objects.create_user(
            email="shared@example.com", password="password123", name="Sam Shared"
        )
        Guest.objects.create(
            first_name="Sam", email="shared@example.com", password="password123"
        )

        principal = authenticate_credentials("shared@example.com", "password123")

        self.assertIsInstance(principal, StaffPrincipal)

    def test_guest_fallback(self):
        Guest.objects.create(first_name="Ann", email="ann@example.com", password="secret1")

        principal = authenticate_credentials(" Ann@Example.com ", "secret1")

        self.assertIsInstance(principal, GuestPrincipal)
        self.assertEqual(principal.role, "user")
        self.assertFalse(principal.is_staff)
