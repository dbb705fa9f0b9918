"""Manager for the email-keyed User model."""

from django.contrib.auth.models import BaseUserManager


class UserManager(BaseUserManager):
    """
    Creates users keyed by email.

    Accounts created without a password get an unusable one and can only
    sign in once a password is set. Superusers are confirmed admins.
    """

    use_in_migrations = True

    def _build(self, email, password, **fields):
        if not email:
            raise ValueError("An email address is required")

        user = self.model(email=self.normalize_email(email), **fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_user(self, email, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        return self._build(email, password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        """Create a staff superuser holding the admin role."""
        defaults = {
            "is_staff": True,
            "is_superuser": True,
            "is_confirmed": True,
            "role": "admin",
        }
        for field, value in defaults.items():
            extra_fields.setdefault(field, value)

        for flag in ("is_staff", "is_superuser"):
            if extra_fields[flag] is not True:
                raise ValueError(f"A superuser needs {flag}=True")

        return self._build(email, password, **extra_fields)
