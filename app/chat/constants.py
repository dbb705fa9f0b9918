"""
Constants and configuration for the chat module.

Import example:
    from chat.constants import MESSAGE_CONFIG, PAGINATION_CONFIG, REALTIME_EVENTS
"""

from typing import Final


# =============================================================================
# Message Configuration
# =============================================================================


class MESSAGE_CONFIG:
    """Configuration for message bodies. Bodies are trimmed before checks."""

    MAX_BODY_LENGTH: Final[int] = 2000  # Characters
    MIN_BODY_LENGTH: Final[int] = 1


# =============================================================================
# Pagination Configuration
# =============================================================================


class PAGINATION_CONFIG:
    """Offset pagination limits for history and chat lists."""

    HISTORY_DEFAULT_PAGE_SIZE: Final[int] = 50
    HISTORY_MAX_PAGE_SIZE: Final[int] = 100
    # Keeps OFFSET within a 64-bit integer on every backend
    HISTORY_MAX_PAGE: Final[int] = 1_000_000

    CHAT_LIST_DEFAULT_PAGE_SIZE: Final[int] = 20
    CHAT_LIST_MAX_PAGE_SIZE: Final[int] = 50


# =============================================================================
# Realtime Configuration
# =============================================================================


class REALTIME_EVENTS:
    """Event names delivered to websocket clients."""

    NEW_MESSAGE: Final[str] = "new_message"
    CHAT_CREATED: Final[str] = "chat_created"
    APPLICATION_STATUS_UPDATE: Final[str] = "application_status_update"
    NEW_APPLICATION: Final[str] = "new_application"
    JOINED: Final[str] = "joined"
    LEFT: Final[str] = "left"
    ERROR: Final[str] = "error"


class ROOM_PREFIXES:
    """
    Channel group prefixes.

    Channels group names only allow ASCII alphanumerics, hyphens,
    underscores and periods, so rooms are written user_{id}, not user:{id}.
    """

    USER: Final[str] = "user"
    COMPANY: Final[str] = "company"
    CHAT: Final[str] = "chat"
