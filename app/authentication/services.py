"""
Authentication services.

This module provides:
- CredentialVerifier: the single token verification routine used by the
  DRF authentication class and by the realtime consumer
- AccountService: credential changes and account deletion

Related files:
    - backends.py: DRF authentication delegating to CredentialVerifier
    - chat/consumers.py: per-action verification of realtime sends

Security:
    - Access tokens are validated by simplejwt (signature, expiry, type)
    - Unconfirmed and inactive accounts are rejected
    - Tokens issued before the last credential change are rejected
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from django.utils import timezone
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import AccessToken
from rest_framework_simplejwt.utils import datetime_from_epoch

from core.exceptions import AuthenticationError
from core.services import BaseService, ErrorKind, ServiceResult

from authentication.models import User


@dataclass(frozen=True)
class VerifiedCredential:
    """Identity resolved from a verified access token."""

    user: User
    issued_at: datetime | None
    token: AccessToken

    @property
    def user_id(self) -> int:
        return self.user.pk


class CredentialVerifier(BaseService):
    """
    Verify access tokens and resolve the acting user.

    Both the REST and realtime paths call verify(), so a token accepted by
    one is accepted by the other.

    Usage:
        try:
            credential = CredentialVerifier.verify(raw_token)
        except AuthenticationError as exc:
            ...
        actor = credential.user
    """

    @classmethod
    def verify(cls, raw_token: str | bytes | None) -> VerifiedCredential:
        """
        Validate a raw access token.

        Raises:
            AuthenticationError: token missing, invalid, expired or revoked
                by a later credential change; user missing, inactive or
                unconfirmed
        """
        if not raw_token:
            raise AuthenticationError(
                "Authentication credentials were not provided",
                error_code="TOKEN_MISSING",
            )

        try:
            token = AccessToken(raw_token)
            user_id = token["user_id"]
        except (TokenError, KeyError) as exc:
            cls.get_logger().info(f"Rejected access token: {exc}")
            raise AuthenticationError(
                "Invalid or expired token",
                error_code="TOKEN_INVALID",
            ) from exc

        user = User.objects.filter(pk=user_id).first()
        if user is None or not user.is_active:
            raise AuthenticationError(
                "User not found or inactive",
                error_code="USER_INACTIVE",
            )

        if not user.is_confirmed:
            raise AuthenticationError(
                "Please confirm your email first",
                error_code="USER_UNCONFIRMED",
            )

        issued_at_epoch = token.payload.get("iat")
        if user.credentials_changed_at is not None:
            changed_at_epoch = int(user.credentials_changed_at.timestamp())
            if issued_at_epoch is None or changed_at_epoch > int(issued_at_epoch):
                raise AuthenticationError(
                    "Credentials changed, please log in again",
                    error_code="TOKEN_REVOKED",
                )

        issued_at = (
            datetime_from_epoch(issued_at_epoch) if issued_at_epoch is not None else None
        )
        return VerifiedCredential(user=user, issued_at=issued_at, token=token)


class AccountService(BaseService):
    """
    Account lifecycle operations.

    delete_account() runs the explicit cascade that removes everything a
    user owns or takes part in before removing the user.
    """

    @classmethod
    def change_password(cls, user: User, new_password: str) -> ServiceResult[User]:
        """
        Set a new password and revoke every token issued before now.

        Outstanding refresh tokens are blacklisted and access tokens stop
        verifying because credentials_changed_at moves past their iat.
        """
        from rest_framework_simplejwt.token_blacklist.models import (
            BlacklistedToken,
            OutstandingToken,
        )

        with cls.atomic():
            user.set_password(new_password)
            user.credentials_changed_at = timezone.now()
            user.save(update_fields=["password", "credentials_changed_at", "updated_at"])

            for outstanding in OutstandingToken.objects.filter(user=user):
                BlacklistedToken.objects.get_or_create(token=outstanding)

        cls.get_logger().info(f"Credentials changed for user {user.id}")
        return ServiceResult.success(user)

    @classmethod
    def delete_account(cls, actor: User, user_id: int) -> ServiceResult[None]:
        """
        Delete a user and everything that depends on them.

        Order, in one transaction:
            1. Applications submitted by the user
            2. Chats the user is party to, with their messages
            3. Membership in other companies' HR sets
            4. Companies the user created, through the company cascade
            5. The user

        Error codes:
            USER_NOT_FOUND: No such user
            NOT_ALLOWED: Actor is neither the user nor elevated
        """
        from chat.services import ChatService
        from companies.models import Application, Company
        from companies.services import CompanyService

        user = User.objects.filter(pk=user_id).first()
        if user is None:
            return ServiceResult.failure(
                "User not found",
                error_code="USER_NOT_FOUND",
                error_kind=ErrorKind.NOT_FOUND,
            )

        if actor.pk != user.pk and not actor.is_elevated:
            return ServiceResult.failure(
                "You are not allowed to delete this account",
                error_code="NOT_ALLOWED",
                error_kind=ErrorKind.FORBIDDEN,
            )

        with cls.atomic():
            Application.objects.filter(applicant=user).delete()
            ChatService.purge_chats_for_user(user)
            for company in Company.objects.filter(hr_members=user):
                company.hr_members.remove(user)
            for company in Company.objects.filter(created_by=user):
                CompanyService.purge_company(company)
            user.delete()

        cls.get_logger().info(f"User {user_id} deleted by {actor.id}")
        return ServiceResult.success(None)
