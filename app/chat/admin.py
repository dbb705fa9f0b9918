"""
Django admin configuration for chat models.

Provides admin interfaces for:
- Chat inspection
- Message moderation
"""

from django.contrib import admin

from chat.models import Chat, Message


class MessageInline(admin.TabularInline):
    """Most recent messages shown on the chat page."""

    model = Message
    extra = 0
    readonly_fields = ["sender", "body", "created_at"]
    raw_id_fields = ["sender"]
    ordering = ["-created_at"]


@admin.register(Chat)
class ChatAdmin(admin.ModelAdmin):
    """Admin interface for Chat model."""

    list_display = ["id", "initiator", "counterparty", "created_at", "updated_at"]
    search_fields = ["initiator__email", "counterparty__email"]
    readonly_fields = ["participant_low", "participant_high", "created_at", "updated_at"]
    raw_id_fields = ["initiator", "counterparty"]
    inlines = [MessageInline]
    ordering = ["-updated_at"]


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    """Admin interface for Message model."""

    list_display = ["id", "chat", "sender", "body_preview", "created_at"]
    list_filter = ["created_at"]
    search_fields = ["body", "sender__email"]
    readonly_fields = ["created_at", "updated_at"]
    raw_id_fields = ["chat", "sender"]
    ordering = ["-created_at"]

    @admin.display(description="Body Preview")
    def body_preview(self, obj: Message) -> str:
        """Return truncated body for list display."""
        max_length = 50
        if len(obj.body) > max_length:
            return obj.body[:max_length] + "..."
        return obj.body
