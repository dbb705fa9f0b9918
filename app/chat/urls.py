"""
URL configuration for the chat REST API.

Mounted under /api/v1/chats/. Views receive the process-wide
RealtimeChannel from config.wiring.
"""

from django.urls import path

from chat.views import (
    ChatDetailView,
    ChatHistoryWithUserView,
    ChatListCreateView,
    ChatMessageCreateView,
)
from config.wiring import realtime_channel

app_name = "chat"

urlpatterns = [
    path(
        "",
        ChatListCreateView.as_view(realtime=realtime_channel),
        name="chat-list",
    ),
    path(
        "history/<int:user_id>/",
        ChatHistoryWithUserView.as_view(realtime=realtime_channel),
        name="chat-history-with-user",
    ),
    path(
        "<int:chat_id>/",
        ChatDetailView.as_view(realtime=realtime_channel),
        name="chat-detail",
    ),
    path(
        "<int:chat_id>/messages/",
        ChatMessageCreateView.as_view(realtime=realtime_channel),
        name="chat-message-create",
    ),
]
