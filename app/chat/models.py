"""
Chat models.

This module defines the persistent state of direct recruiter/candidate
conversations:
- Chat: A conversation between exactly two users
- Message: A single line appended to a Chat

Uniqueness:
    At most one Chat exists per unordered pair of users. The pair is
    stored canonically (participant_low < participant_high) under a unique
    constraint, so concurrent first-contact attempts cannot both insert.

Ordering:
    Messages are appended by ChatService.post_message() only. Appends to a
    chat hold that chat's row lock, and created_at never moves backwards
    within a chat.

Related files:
    - services.py: ChatService, the single writer of this state
    - authorization.py: Who may start, read and post to a chat
"""

from __future__ import annotations

from django.conf import settings
from django.db import models
from django.db.models import F, Q
from django.utils import timezone

from chat.constants import MESSAGE_CONFIG
from core.models import BaseModel


def canonical_pair(user_a_id: int, user_b_id: int) -> tuple[int, int]:
    """Return the two user ids ordered as stored on Chat."""
    return (user_a_id, user_b_id) if user_a_id < user_b_id else (user_b_id, user_a_id)


class ChatQuerySet(models.QuerySet):
    def for_user(self, user_id: int) -> ChatQuerySet:
        """Chats where the user is either party."""
        return self.filter(Q(participant_low_id=user_id) | Q(participant_high_id=user_id))

    def between(self, user_a_id: int, user_b_id: int) -> ChatQuerySet:
        low, high = canonical_pair(user_a_id, user_b_id)
        return self.filter(participant_low_id=low, participant_high_id=high)


class Chat(BaseModel):
    """
    A conversation thread between exactly two users.

    Fields:
        initiator: The user who opened the chat. Must have passed the
            initiation policy at creation time unless elevated.
        counterparty: The other party
        participant_low / participant_high: The same two users in
            canonical id order, backing the unordered-pair constraint
        updated_at: Advances on every message append; drives chat lists
    """

    initiator = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="initiated_chats",
    )
    counterparty = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="received_chats",
    )
    participant_low = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="+",
    )
    participant_high = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="+",
    )

    objects = ChatQuerySet.as_manager()

    class Meta:
        ordering = ["-updated_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["participant_low", "participant_high"],
                name="unique_chat_per_user_pair",
            ),
            models.CheckConstraint(
                condition=Q(participant_low_id__lt=F("participant_high_id")),
                name="chat_participants_canonical_order",
            ),
        ]
        indexes = [
            models.Index(
                fields=["participant_low", "-updated_at"], name="chat_low_updated_idx"
            ),
            models.Index(
                fields=["participant_high", "-updated_at"], name="chat_high_updated_idx"
            ),
        ]

    def __str__(self) -> str:
        return f"Chat {self.pk} ({self.initiator_id} -> {self.counterparty_id})"

    def save(self, *args, **kwargs):
        self.participant_low_id, self.participant_high_id = canonical_pair(
            self.initiator_id, self.counterparty_id
        )
        super().save(*args, **kwargs)

    @property
    def participant_ids(self) -> tuple[int, int]:
        return (self.initiator_id, self.counterparty_id)

    def other_party_id(self, user_id: int) -> int:
        return self.counterparty_id if user_id == self.initiator_id else self.initiator_id


class Message(BaseModel):
    """
    A single chat line, owned by its Chat.

    created_at is assigned by ChatService at append time rather than by
    auto_now_add so that it can be clamped to the previous message's
    timestamp.
    """

    chat = models.ForeignKey(
        Chat,
        on_delete=models.CASCADE,
        related_name="messages",
    )
    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="chat_messages",
    )
    body = models.TextField(max_length=MESSAGE_CONFIG.MAX_BODY_LENGTH)
    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(
                fields=["chat", "-created_at", "-id"], name="message_chat_created_idx"
            ),
        ]

    def __str__(self) -> str:
        return f"Message {self.pk} in chat {self.chat_id}"
