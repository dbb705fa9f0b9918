# =============================================================================
# Django Project Configuration Package
# =============================================================================
# Settings, URLs, ASGI/WSGI applications, Celery, and config.wiring (the
# realtime channel and notification dispatcher shared by views, consumer
# and services).
#
# The Celery app is imported here so notifications.tasks is registered
# whenever Django starts, in the web process and in workers alike.
# =============================================================================

from config.celery import app as celery_app

__all__ = ("celery_app",)
