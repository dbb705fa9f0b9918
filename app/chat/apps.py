"""
Chat application configuration.

This app provides one-to-one chats between users with:
- Initiation gated on HR capability (company creator or HR member)
- Paginated history and chat previews
- The realtime channel (rooms, broadcasts, WebSocket consumer)
"""

from django.apps import AppConfig


class ChatConfig(AppConfig):
    """Configuration for the chat application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "chat"
    verbose_name = "Chat"
