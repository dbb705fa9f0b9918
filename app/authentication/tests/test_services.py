"""
Tests for CredentialVerifier and AccountService.

Verifies:
- One verification routine: missing, malformed, expired and wrong-type
  tokens are rejected, as are inactive and unconfirmed users
- A credential change revokes every token issued before it
- Account deletion removes everything the user owns or takes part in,
  and only the user or an admin may do it
"""

import pytest
from freezegun import freeze_time
from rest_framework_simplejwt.token_blacklist.models import BlacklistedToken
from rest_framework_simplejwt.tokens import AccessToken, RefreshToken

from authentication.models import User
from authentication.services import AccountService, CredentialVerifier
from authentication.tests.factories import UserFactory
from chat.models import Chat, Message
from chat.tests.factories import ChatFactory, MessageFactory
from companies.models import Application, Company, Job
from companies.tests.factories import ApplicationFactory, CompanyFactory, JobFactory
from core.exceptions import AuthenticationError
from core.services import ErrorKind

NEW_PASSWORD = "Str0ng-New-Passw0rd!"


def rejection_code(raw_token):
    with pytest.raises(AuthenticationError) as exc_info:
        CredentialVerifier.verify(raw_token)
    return exc_info.value.error_code


class TestCredentialVerifier:
    def test_valid_token_resolves_user(self, user, access_token):
        credential = CredentialVerifier.verify(access_token)

        assert credential.user == user
        assert credential.user_id == user.pk
        assert credential.issued_at is not None

    @pytest.mark.parametrize("raw_token", [None, ""])
    def test_missing_token(self, raw_token):
        assert rejection_code(raw_token) == "TOKEN_MISSING"

    def test_malformed_token(self, db):
        assert rejection_code("not-a-jwt") == "TOKEN_INVALID"

    def test_refresh_token_is_not_an_access_token(self, user):
        assert rejection_code(str(RefreshToken.for_user(user))) == "TOKEN_INVALID"

    def test_expired_token(self, user):
        with freeze_time("2026-01-01 10:00:00"):
            token = str(AccessToken.for_user(user))

        with freeze_time("2026-01-01 12:00:00"):
            assert rejection_code(token) == "TOKEN_INVALID"

    def test_inactive_user(self, user, access_token):
        user.is_active = False
        user.save(update_fields=["is_active"])

        assert rejection_code(access_token) == "USER_INACTIVE"

    def test_deleted_user(self, user, access_token):
        user.delete()

        assert rejection_code(access_token) == "USER_INACTIVE"

    def test_unconfirmed_user(self, db):
        user = UserFactory(is_confirmed=False)

        assert rejection_code(str(AccessToken.for_user(user))) == "USER_UNCONFIRMED"

    def test_rejection_is_authentication_kind(self, db):
        with pytest.raises(AuthenticationError) as exc_info:
            CredentialVerifier.verify("not-a-jwt")

        assert exc_info.value.error_kind == ErrorKind.UNAUTHENTICATED
        assert exc_info.value.http_status == 401


class TestChangePassword:
    def test_sets_new_password(self, user):
        result = AccountService.change_password(user, NEW_PASSWORD)

        user.refresh_from_db()
        assert result.success is True
        assert user.check_password(NEW_PASSWORD)
        assert user.credentials_changed_at is not None

    def test_earlier_tokens_revoked(self, user):
        """
        Why it matters: After a password change, a stolen token must stop
        working on REST and realtime paths at once.
        """
        with freeze_time("2026-01-01 10:00:00"):
            token = str(AccessToken.for_user(user))

        with freeze_time("2026-01-01 10:05:00"):
            AccountService.change_password(user, NEW_PASSWORD)
            assert rejection_code(token) == "TOKEN_REVOKED"

    def test_tokens_issued_after_change_accepted(self, user):
        with freeze_time("2026-01-01 10:00:00"):
            AccountService.change_password(user, NEW_PASSWORD)

        with freeze_time("2026-01-01 10:01:00"):
            credential = CredentialVerifier.verify(str(AccessToken.for_user(user)))

        assert credential.user == user

    def test_outstanding_refresh_tokens_blacklisted(self, user):
        RefreshToken.for_user(user)
        RefreshToken.for_user(user)

        AccountService.change_password(user, NEW_PASSWORD)

        assert BlacklistedToken.objects.filter(token__user=user).count() == 2


class TestDeleteAccount:
    def test_cascade_removes_owned_and_joined_records(self, user):
        """
        Deleting a user removes their applications, their chats with the
        messages, their HR memberships and the companies they created
        with those companies' jobs and applications.
        """
        owned = CompanyFactory(created_by=user)
        owned_job = JobFactory(company=owned)
        ApplicationFactory(job=owned_job)
        other_company = CompanyFactory(hr_members=[user])
        ApplicationFactory(applicant=user)
        chat = ChatFactory(initiator=user)
        MessageFactory(chat=chat)
        unrelated_chat = ChatFactory()

        result = AccountService.delete_account(user, user.pk)

        assert result.success is True
        assert not User.objects.filter(pk=user.pk).exists()
        assert not Company.objects.filter(pk=owned.pk).exists()
        assert not Job.objects.filter(pk=owned_job.pk).exists()
        assert not Application.objects.filter(job=owned_job).exists()
        assert not Application.objects.filter(applicant_id=user.pk).exists()
        assert not Chat.objects.filter(pk=chat.pk).exists()
        assert not Message.objects.filter(chat_id=chat.pk).exists()
        assert Chat.objects.filter(pk=unrelated_chat.pk).exists()
        assert Company.objects.filter(pk=other_company.pk).exists()
        assert other_company.hr_members.count() == 0

    def test_admin_may_delete_other_user(self, admin_user, user):
        result = AccountService.delete_account(admin_user, user.pk)

        assert result.success is True

    def test_other_user_forbidden(self, user, other_user):
        result = AccountService.delete_account(other_user, user.pk)

        assert result.error_code == "NOT_ALLOWED"
        assert result.error_kind == ErrorKind.FORBIDDEN
        assert User.objects.filter(pk=user.pk).exists()

    def test_missing_user_not_found(self, admin_user):
        result = AccountService.delete_account(admin_user, 999999)

        assert result.error_code == "USER_NOT_FOUND"
