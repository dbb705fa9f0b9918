"""
The marketplace account.

Candidates, recruiters and administrators share one User model. Hiring
rights come from company membership (companies.models); platform-wide
privilege comes from the role.
"""

from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.db import models

from authentication.managers import UserManager


class UserRole(models.TextChoices):
    """Admins bypass membership and participancy checks."""

    USER = "user", "User"
    ADMIN = "admin", "Admin"


class User(AbstractBaseUser, PermissionsMixin):
    """
    Account keyed by email.

    ``credentials_changed_at`` is the revocation watermark: access tokens
    whose iat precedes it are refused by CredentialVerifier. The name and
    picture fields are public and appear in chat previews.
    """

    email = models.EmailField(
        unique=True,
        db_index=True,
        max_length=254,
        help_text="User's email address (primary identifier)",
    )
    first_name = models.CharField(max_length=50, blank=True, default="")
    last_name = models.CharField(max_length=50, blank=True, default="")
    profile_pic = models.URLField(
        blank=True,
        default="",
        help_text="Public URL of the profile picture",
    )

    role = models.CharField(
        max_length=10,
        choices=UserRole.choices,
        default=UserRole.USER,
    )
    is_confirmed = models.BooleanField(
        default=False,
        help_text="Whether the user's email has been confirmed",
    )
    credentials_changed_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="Tokens issued before this time are rejected",
    )

    is_active = models.BooleanField(
        default=True,
        help_text="Whether this user account is active. Deselect instead of deleting.",
    )
    is_staff = models.BooleanField(
        default=False,
        help_text="Whether the user can access the admin site.",
    )

    date_joined = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = []

    objects = UserManager()

    class Meta:
        verbose_name = "user"
        verbose_name_plural = "users"

    def __str__(self) -> str:
        return self.email

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_elevated(self) -> bool:
        """Admins bypass company and participancy checks."""
        return self.role == UserRole.ADMIN or self.is_superuser
