"""
Test configuration and fixtures for authentication tests.
"""

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from authentication.tests.factories import AdminUserFactory, UserFactory


@pytest.fixture
def user(db):
    """A confirmed, active user."""
    return UserFactory()


@pytest.fixture
def other_user(db):
    return UserFactory()


@pytest.fixture
def admin_user(db):
    return AdminUserFactory()


@pytest.fixture
def access_token(user):
    """A freshly minted access token for `user`."""
    return str(AccessToken.for_user(user))


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def bearer_client(access_token):
    """APIClient sending `user`'s token in the Authorization header."""
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {access_token}")
    return client
