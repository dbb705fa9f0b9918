"""
Notifications app for out-of-band (email) notifications.

This app provides:
- NotificationDispatcher: fire-and-forget entry point used by services
- deliver_notification: Celery task that renders and emails a notification
- NOTIFICATION_TEMPLATES: plain-text subject and body per kind

Usage:
    from config.wiring import notification_dispatcher

    notification_dispatcher.notify(
        NOTIFICATION_KINDS.APPLICATION_STATUS,
        {"recipients": [applicant.email], "job_title": job.title, ...},
    )
"""
