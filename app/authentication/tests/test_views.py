"""
Tests for authentication endpoints.

Covers token issuance, the current-user endpoint, password change with
token revocation, and account deletion.
"""

from freezegun import freeze_time
from rest_framework import status
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from authentication.models import User

AUTH_URL = "/api/v1/auth/"
NEW_PASSWORD = "Str0ng-New-Passw0rd!"


def bearer(token):
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
    return client


class TestTokenObtain:
    def test_login_returns_token_pair(self, api_client, user):
        response = api_client.post(
            f"{AUTH_URL}token/",
            {"email": user.email, "password": "TestPass123!"},
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        assert {"access", "refresh"} <= set(response.data)

    def test_wrong_password_rejected(self, api_client, user):
        response = api_client.post(
            f"{AUTH_URL}token/",
            {"email": user.email, "password": "wrong"},
            format="json",
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestCurrentUser:
    def test_returns_own_account(self, bearer_client, user):
        response = bearer_client.get(f"{AUTH_URL}me/")

        assert response.status_code == status.HTTP_200_OK
        assert response.data["email"] == user.email
        assert response.data["is_confirmed"] is True

    def test_anonymous_rejected(self, api_client):
        response = api_client.get(f"{AUTH_URL}me/")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestPasswordChange:
    def test_change_revokes_current_token(self, user):
        with freeze_time("2026-01-01 10:00:00"):
            client = bearer(AccessToken.for_user(user))

        with freeze_time("2026-01-01 10:05:00"):
            response = client.post(
                f"{AUTH_URL}password/change/",
                {"old_password": "TestPass123!", "new_password": NEW_PASSWORD},
                format="json",
            )
            follow_up = client.get(f"{AUTH_URL}me/")

        assert response.status_code == status.HTTP_200_OK
        assert follow_up.status_code == status.HTTP_401_UNAUTHORIZED
        assert follow_up.data["detail"].code == "TOKEN_REVOKED"

    def test_wrong_old_password(self, bearer_client):
        response = bearer_client.post(
            f"{AUTH_URL}password/change/",
            {"old_password": "nope", "new_password": NEW_PASSWORD},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "old_password" in response.data


class TestAccountDelete:
    def test_user_deletes_own_account(self, bearer_client, user):
        response = bearer_client.delete(f"{AUTH_URL}users/{user.pk}/")

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not User.objects.filter(pk=user.pk).exists()

    def test_cannot_delete_someone_else(self, bearer_client, other_user):
        response = bearer_client.delete(f"{AUTH_URL}users/{other_user.pk}/")

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data["error_code"] == "NOT_ALLOWED"

    def test_admin_deletes_any_account(self, admin_user, other_user):
        response = bearer(AccessToken.for_user(admin_user)).delete(
            f"{AUTH_URL}users/{other_user.pk}/"
        )

        assert response.status_code == status.HTTP_204_NO_CONTENT
