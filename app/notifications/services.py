"""
Notification dispatcher.

NotificationDispatcher is the only way business code sends out-of-band
notifications. One instance is built at process start (config/wiring.py)
and passed to the services that notify.

Dispatch is fire-and-forget: notify() enqueues deliver_notification and
returns. A broker outage is logged and swallowed so that the operation
that triggered the notification still succeeds.

Usage:
    dispatcher = NotificationDispatcher()
    dispatcher.notify(
        NOTIFICATION_KINDS.APPLICATION_CONFIRMATION,
        {"recipients": ["a@example.com"], "applicant_name": "Ann", ...},
    )
"""

from __future__ import annotations

import logging
from typing import Any

from notifications.constants import NOTIFICATION_TEMPLATES
from notifications.tasks import deliver_notification

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """Enqueue notification deliveries without blocking the caller."""

    def __init__(self, task=deliver_notification):
        self.task = task

    def notify(self, kind: str, payload: dict[str, Any]) -> bool:
        """
        Enqueue a notification.

        Args:
            kind: A NOTIFICATION_KINDS value
            payload: JSON-serializable template context with "recipients"

        Returns:
            True if the task was enqueued, False if it was skipped or the
            broker refused it
        """
        if kind not in NOTIFICATION_TEMPLATES:
            logger.warning(f"Refusing to dispatch unknown notification kind {kind!r}")
            return False

        if not payload.get("recipients"):
            logger.debug(f"Notification {kind} has no recipients, not dispatching")
            return False

        try:
            self.task.delay(kind, payload)
        except Exception:
            logger.exception(f"Failed to enqueue notification {kind}")
            return False

        logger.debug(f"Enqueued notification {kind} for {len(payload['recipients'])} recipient(s)")
        return True
