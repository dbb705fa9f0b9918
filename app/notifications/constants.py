"""
Notification kinds and their email templates.

Templates are rendered with str.format against the notification payload,
so every placeholder must be a payload key.

Import example:
    from notifications.constants import NOTIFICATION_KINDS, NOTIFICATION_TEMPLATES
"""

from typing import Final


class NOTIFICATION_KINDS:
    APPLICATION_CONFIRMATION: Final[str] = "application_confirmation"
    NEW_APPLICATION: Final[str] = "new_application"
    APPLICATION_STATUS: Final[str] = "application_status"


NOTIFICATION_TEMPLATES: Final[dict[str, dict[str, str]]] = {
    NOTIFICATION_KINDS.APPLICATION_CONFIRMATION: {
        "subject": "Application received: {job_title}",
        "body": (
            "Hi {applicant_name},\n\n"
            "Your application for {job_title} at {company_name} has been "
            "received. We will let you know when its status changes."
        ),
    },
    NOTIFICATION_KINDS.NEW_APPLICATION: {
        "subject": "New application for {job_title}",
        "body": (
            "{applicant_name} ({applicant_email}) applied for {job_title} "
            "at {company_name}."
        ),
    },
    NOTIFICATION_KINDS.APPLICATION_STATUS: {
        "subject": "Application update: {job_title}",
        "body": (
            "Hi {applicant_name},\n\n"
            "Your application for {job_title} at {company_name} is now "
            "{status}."
        ),
    },
}
