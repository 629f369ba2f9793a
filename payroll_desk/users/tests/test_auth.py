from io import StringIO

from django.core.management import CommandError, call_command
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase
from rest_framework_simplejwt.tokens import AccessToken
from rolepermissions.checkers import has_permission, has_role

from payroll_desk.employees.tests.factories import create_admin, create_clerk
from payroll_desk.users.models import User

LOGIN_URL = reverse("login")
LOGOUT_URL = reverse("logout")
ME_URL = reverse("me")
REFRESH_URL = reverse("token_refresh")


class LoginTests(APITestCase):
    def setUp(self):
        self.user = create_clerk(username="ayse", password="s3cret")

    def login(self, username="ayse", password="s3cret"):
        return self.client.post(LOGIN_URL, {"username": username, "password": password}, format="json")

    def test_login_returns_tokens_and_user(self):
        response = self.login()

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        body = response.json()
        self.assertEqual(body["user"]["username"], "ayse")
        self.assertEqual(body["user"]["role"], User.USER)

        access = AccessToken(body["token"])
        self.assertEqual(access["username"], "ayse")
        self.assertEqual(access["role"], User.USER)

    def test_token_authenticates_requests(self):
        token = self.login().json()["token"]

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
        response = self.client.get(ME_URL)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["username"], "ayse")

    def test_wrong_password(self):
        response = self.login(password="nope")

        body = response.json()
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(body["code"], "INVALID_CREDENTIALS")
        self.assertEqual(body["status"], 401)

    def test_inactive_user_cannot_log_in(self):
        self.user.is_active = False
        self.user.save()
        self.assertEqual(self.login().status_code, status.HTTP_401_UNAUTHORIZED)

    def test_missing_fields(self):
        response = self.client.post(LOGIN_URL, {"username": "ayse"}, format="json")
        body = response.json()
        self.assertEqual(body["code"], "VALIDATION_ERROR")
        self.assertIn("password", body["details"])

    def test_me_requires_token(self):
        response = self.client.get(ME_URL)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

        self.client.credentials(HTTP_AUTHORIZATION="Bearer not-a-token")
        response = self.client.get(ME_URL)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_logout_blacklists_refresh_token(self):
        tokens = self.login().json()
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['token']}")

        response = self.client.post(LOGOUT_URL, {"refresh": tokens["refresh"]}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        self.client.credentials()
        response = self.client.post(REFRESH_URL, {"refresh": tokens["refresh"]}, format="json")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_logout_with_garbage_token(self):
        self.client.force_authenticate(user=self.user)
        response = self.client.post(LOGOUT_URL, {"refresh": "garbage"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("refresh", response.json()["details"])

    def test_logout_without_refresh_token(self):
        self.client.force_authenticate(user=self.user)
        response = self.client.post(LOGOUT_URL, {}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)


class RoleSyncTests(APITestCase):
    def test_roles_follow_user_role(self):
        clerk = create_clerk()
        self.assertTrue(has_role(clerk, "clerk"))
        self.assertFalse(has_permission(clerk, "delete_employees"))

        clerk.role = User.ADMIN
        clerk.save()
        self.assertTrue(has_role(clerk, "admin"))
        self.assertFalse(has_role(clerk, "clerk"))
        self.assertTrue(has_permission(clerk, "delete_employees"))

    def test_admin_role(self):
        admin = create_admin()
        self.assertTrue(has_role(admin, "admin"))


class CreatePayrollUserCommandTests(APITestCase):
    def test_creates_clerk_by_default(self):
        out = StringIO()
        call_command("createpayrolluser", "mehmet", "pw", stdout=out)

        user = User.objects.get(username="mehmet")
        self.assertEqual(user.role, User.USER)
        self.assertFalse(user.is_staff)
        self.assertTrue(user.check_password("pw"))
        self.assertIn("Created mehmet", out.getvalue())

    def test_creates_admin(self):
        call_command("createpayrolluser", "boss", "pw", role=User.ADMIN, stdout=StringIO())
        user = User.objects.get(username="boss")
        self.assertTrue(user.is_staff)
        self.assertTrue(has_role(user, "admin"))

    def test_duplicate_username(self):
        create_clerk(username="mehmet")
        with self.assertRaises(CommandError):
            call_command("createpayrolluser", "mehmet", "pw", stdout=StringIO())


class HealthTests(APITestCase):
    def test_health_is_public(self):
        response = self.client.get(reverse("health"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json(), {"status": "ok"})


class UserManagementTests(APITestCase):
    def test_admin_creates_clerk(self):
        self.client.force_authenticate(user=create_admin())

        response = self.client.post(
            reverse("users"), {"username": "elif", "password": "s3cret"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.json()["role"], User.USER)
        self.assertTrue(has_role(User.objects.get(username="elif"), "clerk"))

        names = [row["username"] for row in self.client.get(reverse("users")).json()]
        self.assertEqual(names, ["boss", "elif"])

    def test_duplicate_username_conflicts(self):
        self.client.force_authenticate(user=create_admin())
        response = self.client.post(
            reverse("users"), {"username": "boss", "password": "s3cret"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.json()["code"], "USER_EXISTS")

    def test_clerk_cannot_manage_users(self):
        self.client.force_authenticate(user=create_clerk())
        response = self.client.get(reverse("users"))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
