"""
Celery tasks for notification delivery.

Tasks:
    deliver_notification: Render a notification template and email it

Design:
    - The task receives the kind and a JSON-serializable payload; it does
      not touch the database, so it is safe to run long after the
      triggering request
    - SMTP and socket errors are transient and retried with backoff
    - An unknown kind or a payload missing a template placeholder is a
      permanent failure: logged and dropped, never retried

Usage:
    # Enqueued by NotificationDispatcher.notify()
    deliver_notification.delay("application_status", payload)
"""

from __future__ import annotations

import logging
from smtplib import SMTPException
from typing import Any

from celery import shared_task
from django.conf import settings
from django.core.mail import send_mail

from notifications.constants import NOTIFICATION_TEMPLATES

logger = logging.getLogger(__name__)


def render_notification(kind: str, payload: dict[str, Any]) -> tuple[str, str] | None:
    """
    Render (subject, body) for a notification kind.

    Returns None for an unknown kind.

    Raises:
        KeyError: If the payload lacks a placeholder used by the template
    """
    template = NOTIFICATION_TEMPLATES.get(kind)
    if template is None:
        return None
    return template["subject"].format(**payload), template["body"].format(**payload)


@shared_task(
    bind=True,
    autoretry_for=(SMTPException, OSError),
    retry_backoff=True,
    retry_kwargs={"max_retries": 3},
)
def deliver_notification(self, kind: str, payload: dict[str, Any]) -> bool:
    """
    Email a notification to its recipients.

    Args:
        kind: A NOTIFICATION_KINDS value
        payload: Template context plus "recipients", a list of addresses

    Returns:
        True if the mail was handed to the backend, False if dropped

    Raises:
        SMTPException, OSError: On transient failure (triggers retry)
    """
    recipients = payload.get("recipients") or []
    if not recipients:
        logger.info(f"Notification {kind} has no recipients, skipping")
        return False

    try:
        rendered = render_notification(kind, payload)
    except KeyError as e:
        logger.error(f"Notification {kind} payload is missing placeholder {e}, dropping")
        return False

    if rendered is None:
        logger.warning(f"Unknown notification kind {kind!r}, dropping")
        return False

    subject, body = rendered
    send_mail(
        subject,
        body,
        settings.DEFAULT_FROM_EMAIL,
        recipients,
        fail_silently=False,
    )

    logger.info(
        f"Notification {kind} sent to {len(recipients)} recipient(s) "
        f"(attempt {self.request.retries + 1})"
    )
    return True
