"""
Outbound notification mail. Services hand a kind and payload to the
dispatcher; a Celery task renders and sends it.
"""

from django.apps import AppConfig


class NotificationsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "notifications"
    verbose_name = "Notification delivery"
