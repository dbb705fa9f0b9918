"""
Test configuration and fixtures for notification tests.

This module provides:
- Complete payloads for every notification kind
- A dispatcher bound to a mock task, for enqueue behavior without Celery

Usage:
    def test_example(status_payload, mailoutbox):
        deliver_notification("application_status", status_payload)
        assert len(mailoutbox) == 1
"""

import pytest

from notifications.services import NotificationDispatcher


# =============================================================================
# Payload Fixtures
# =============================================================================


@pytest.fixture
def base_context():
    """Template context shared by all application notifications."""
    return {
        "application_id": 42,
        "job_title": "Backend Engineer",
        "company_name": "Acme",
        "applicant_name": "Ada Lovelace",
        "applicant_email": "ada@example.com",
        "status": "pending",
    }


@pytest.fixture
def confirmation_payload(base_context):
    return {**base_context, "recipients": ["ada@example.com"]}


@pytest.fixture
def new_application_payload(base_context):
    return {**base_context, "recipients": ["hr1@acme.example.com", "hr2@acme.example.com"]}


@pytest.fixture
def status_payload(base_context):
    return {**base_context, "status": "accepted", "recipients": ["ada@example.com"]}


# =============================================================================
# Dispatcher Fixtures
# =============================================================================


@pytest.fixture
def task(mocker):
    """Stand-in for deliver_notification exposing .delay."""
    return mocker.Mock()


@pytest.fixture
def dispatcher(task):
    return NotificationDispatcher(task=task)
