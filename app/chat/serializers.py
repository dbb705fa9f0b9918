"""
Serializers for chat API and realtime payloads.

Output serializers are shared by the REST views and the realtime consumer,
so a message looks the same whether it arrives in an HTTP response or in
a websocket event.

Input serializers validate query strings and request shape; message body
rules and policy stay in ChatService.
"""

from rest_framework import serializers

from authentication.serializers import PublicUserSerializer
from chat.constants import PAGINATION_CONFIG
from chat.models import Chat, Message
from core.helpers import pagination_metadata


# =============================================================================
# Output
# =============================================================================


class MessageSerializer(serializers.ModelSerializer):
    chat_id = serializers.IntegerField(read_only=True)
    sender_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Message
        fields = ["id", "chat_id", "sender_id", "body", "created_at"]
        read_only_fields = fields


class ChatSerializer(serializers.ModelSerializer):
    initiator = PublicUserSerializer(read_only=True)
    counterparty = PublicUserSerializer(read_only=True)

    class Meta:
        model = Chat
        fields = ["id", "initiator", "counterparty", "created_at", "updated_at"]
        read_only_fields = fields


class LastMessageSerializer(serializers.ModelSerializer):
    sender_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Message
        fields = ["body", "sender_id", "created_at"]
        read_only_fields = fields


class ChatPreviewSerializer(serializers.Serializer):
    """Serializes chat.services.ChatPreview."""

    id = serializers.IntegerField(source="chat.id")
    other_user = PublicUserSerializer(allow_null=True)
    last_message = LastMessageSerializer(allow_null=True)
    created_at = serializers.DateTimeField(source="chat.created_at")
    updated_at = serializers.DateTimeField(source="chat.updated_at")


class HistoryPageSerializer(serializers.Serializer):
    """Serializes chat.services.HistoryPage with pagination metadata."""

    chat = ChatSerializer(allow_null=True)
    messages = MessageSerializer(many=True)
    pagination = serializers.SerializerMethodField()

    def get_pagination(self, page) -> dict:
        return pagination_metadata(page.total_count, page.page, page.page_size)


# =============================================================================
# Input
# =============================================================================


class ChatCreateSerializer(serializers.Serializer):
    counterparty_id = serializers.IntegerField(min_value=1)


class MessageCreateSerializer(serializers.Serializer):
    # Raw JSON value; ChatService.clean_body owns every body rule
    message = serializers.JSONField(allow_null=True)


class HistoryQuerySerializer(serializers.Serializer):
    page = serializers.IntegerField(
        min_value=1, max_value=PAGINATION_CONFIG.HISTORY_MAX_PAGE, default=1
    )
    page_size = serializers.IntegerField(
        min_value=1,
        max_value=PAGINATION_CONFIG.HISTORY_MAX_PAGE_SIZE,
        default=PAGINATION_CONFIG.HISTORY_DEFAULT_PAGE_SIZE,
    )
