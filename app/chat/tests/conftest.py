"""
Test configuration and fixtures for chat tests.

This module provides:
- User fixtures with different chat capabilities (HR, owner, candidate, admin)
- Chat and message fixtures
- API client helpers for authenticated requests
- A recording stand-in for the realtime channel

Usage:
    def test_example(recruiter_client, chat):
        response = recruiter_client.get(f"/api/v1/chats/{chat.id}/")
        assert response.status_code == 200
"""

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from authentication.tests.factories import AdminUserFactory, UserFactory
from chat.realtime import RealtimeChannel
from chat.tests.factories import ChatFactory, MessageFactory
from companies.tests.factories import CompanyFactory


# =============================================================================
# User Fixtures
# =============================================================================


@pytest.fixture
def company_owner(db):
    """User who created a company (HR-capable through ownership)."""
    owner = UserFactory()
    CompanyFactory(created_by=owner)
    return owner


@pytest.fixture
def company(db, company_owner):
    return company_owner.created_companies.get()


@pytest.fixture
def recruiter(db, company):
    """User listed in a company's HR members (HR-capable through membership)."""
    user = UserFactory()
    company.hr_members.add(user)
    return user


@pytest.fixture
def candidate(db):
    """Plain user with no company ties."""
    return UserFactory()


@pytest.fixture
def outsider(db):
    """Plain user who is not a party to any test chat."""
    return UserFactory()


@pytest.fixture
def admin_user(db):
    return AdminUserFactory()


# =============================================================================
# Chat Fixtures
# =============================================================================


@pytest.fixture
def chat(db, recruiter, candidate):
    """Chat started by the recruiter with the candidate."""
    return ChatFactory(initiator=recruiter, counterparty=candidate)


@pytest.fixture
def chat_with_messages(chat, recruiter, candidate):
    """Chat holding three messages, oldest first in creation order."""
    MessageFactory(chat=chat, sender=recruiter, body="Hi, are you available?")
    MessageFactory(chat=chat, sender=candidate, body="Yes, I am.")
    MessageFactory(chat=chat, sender=recruiter, body="Great, let's talk.")
    return chat


# =============================================================================
# Token and Client Fixtures
# =============================================================================


def token_for(user) -> str:
    return str(AccessToken.for_user(user))


def client_for(user) -> APIClient:
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {token_for(user)}")
    return client


@pytest.fixture
def recruiter_client(recruiter):
    return client_for(recruiter)


@pytest.fixture
def candidate_client(candidate):
    return client_for(candidate)


@pytest.fixture
def outsider_client(outsider):
    return client_for(outsider)


@pytest.fixture
def admin_client(admin_user):
    return client_for(admin_user)


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def tokens(recruiter, candidate, outsider):
    """
    Access tokens minted up front.

    Async tests cannot touch the ORM directly, so tokens are issued in
    this synchronous fixture.
    """
    return {
        "recruiter": token_for(recruiter),
        "candidate": token_for(candidate),
        "outsider": token_for(outsider),
    }


# =============================================================================
# Realtime Fixtures
# =============================================================================


class RecordingRealtimeChannel(RealtimeChannel):
    """RealtimeChannel that records broadcasts instead of sending them."""

    def __init__(self):
        super().__init__()
        self.sent = []

    def broadcast(self, room, event, payload):
        self.sent.append((room, event, payload))
        return True

    async def abroadcast(self, room, event, payload):
        self.sent.append((room, event, payload))
        return True


@pytest.fixture
def recording_realtime():
    return RecordingRealtimeChannel()
