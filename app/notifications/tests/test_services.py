"""
Tests for NotificationDispatcher.

Verifies:
- notify() enqueues the delivery task with the kind and payload
- Unknown kinds and empty recipient lists are not enqueued
- A broker failure is contained and reported as False
"""

from notifications.constants import NOTIFICATION_KINDS
from notifications.services import NotificationDispatcher
from notifications.tasks import deliver_notification

class TestNotify:
    def test_enqueues_task(self, dispatcher, task, status_payload):
        queued = dispatcher.notify(NOTIFICATION_KINDS.APPLICATION_STATUS, status_payload)

        assert queued is True
        task.delay.assert_called_once_with(
            NOTIFICATION_KINDS.APPLICATION_STATUS, status_payload
        )

    def test_unknown_kind_not_enqueued(self, dispatcher, task, status_payload):
        assert dispatcher.notify("weekly_digest", status_payload) is False
        task.delay.assert_not_called()

    def test_empty_recipients_not_enqueued(self, dispatcher, task, base_context):
        queued = dispatcher.notify(
            NOTIFICATION_KINDS.APPLICATION_STATUS, {**base_context, "recipients": []}
        )

        assert queued is False
        task.delay.assert_not_called()

    def test_broker_outage_contained(self, dispatcher, task, status_payload):
        """
        Why it matters: The operation that triggered the notification has
        already committed; a broker outage must not surface as its error.
        """
        task.delay.side_effect = ConnectionError("connection refused")

        queued = dispatcher.notify(NOTIFICATION_KINDS.APPLICATION_STATUS, status_payload)

        assert queued is False

    def test_default_task_is_delivery_task(self):
        assert NotificationDispatcher().task is deliver_notification

    def test_eager_dispatch_delivers_mail(self, confirmation_payload, mailoutbox):
        queued = NotificationDispatcher().notify(
            NOTIFICATION_KINDS.APPLICATION_CONFIRMATION, confirmation_payload
        )

        assert queued is True
        assert len(mailoutbox) == 1
        assert mailoutbox[0].subject == "Application received: Backend Engineer"
