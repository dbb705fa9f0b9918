"""
Constants for the companies module.

Import example:
    from companies.constants import NOTIFICATION_LIMITS
"""

from typing import Final


class NOTIFICATION_LIMITS:
    """Fan-out limits for application notifications."""

    # HR members emailed about a new application, besides the job creator
    MAX_HR_RECIPIENTS: Final[int] = 5
