"""
Accounts and credentials: the email-keyed user model, access-token
verification shared by REST and the realtime channel, password change
with token revocation and account deletion.
"""

from django.apps import AppConfig


class AuthenticationConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "authentication"
    verbose_name = "Accounts"
