"""
Test configuration and fixtures for company and application tests.

This module provides:
- Owner, HR member, applicant and outsider users
- A company with one open job, and an application to it
- Autospecced mocks of the realtime channel and notification dispatcher
- API client helpers for authenticated requests
"""

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from authentication.tests.factories import AdminUserFactory, UserFactory
from chat.realtime import RealtimeChannel
from companies.tests.factories import ApplicationFactory, CompanyFactory, JobFactory
from notifications.services import NotificationDispatcher


# =============================================================================
# User Fixtures
# =============================================================================


@pytest.fixture
def owner(db):
    return UserFactory()


@pytest.fixture
def hr_member(db):
    return UserFactory()


@pytest.fixture
def applicant(db):
    return UserFactory(first_name="Ada", last_name="Lovelace")


@pytest.fixture
def outsider(db):
    return UserFactory()


@pytest.fixture
def admin_user(db):
    return AdminUserFactory()


# =============================================================================
# Company Fixtures
# =============================================================================


@pytest.fixture
def company(db, owner, hr_member):
    return CompanyFactory(name="Acme", created_by=owner, hr_members=[hr_member])


@pytest.fixture
def job(company, hr_member):
    """Open job posted by the HR member."""
    return JobFactory(company=company, title="Backend Engineer", added_by=hr_member)


@pytest.fixture
def application(job, applicant):
    return ApplicationFactory(job=job, applicant=applicant)


# =============================================================================
# Collaborator Fixtures
# =============================================================================


@pytest.fixture
def realtime(mocker):
    return mocker.Mock(spec=RealtimeChannel)


@pytest.fixture
def notifier(mocker):
    return mocker.Mock(spec=NotificationDispatcher)


# =============================================================================
# API Client Fixtures
# =============================================================================


def client_for(user) -> APIClient:
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {AccessToken.for_user(user)}")
    return client


@pytest.fixture
def owner_client(owner):
    return client_for(owner)


@pytest.fixture
def hr_client(hr_member):
    return client_for(hr_member)


@pytest.fixture
def applicant_client(applicant):
    return client_for(applicant)


@pytest.fixture
def outsider_client(outsider):
    return client_for(outsider)


@pytest.fixture
def api_client():
    return APIClient()
