"""
Chat services: the single writer of Chat and Message state.

ChatService is called by both the REST views and the realtime consumer.
Neither adapter touches the models directly for writes, so the two paths
cannot drift apart in authorization or persistence rules.

Operations:
    create_or_get_chat      Idempotent get-or-create for an unordered pair
    post_message            Atomic append with a monotonic per-chat clock
    send_direct_message     Realtime send addressed to a user, not a chat
    get_history             Newest-first offset pagination
    get_history_with_user   History addressed by the other party
    list_chats              Chat previews with explicit data loaders
    delete_chat             Chat and messages removed in one transaction
    purge_chats_for_user    Cascade step of account deletion

Concurrency:
    - Two first-contact attempts for the same pair race on the
      unique_chat_per_user_pair constraint. The loser re-fetches the
      winner's chat instead of surfacing the IntegrityError.
    - Appends lock the chat row (select_for_update) for the duration of
      the insert, so concurrent posts to one chat serialize while posts to
      different chats proceed independently.

Error codes:
    SELF_CHAT, USER_NOT_FOUND, INITIATION_NOT_ALLOWED, CHAT_NOT_FOUND,
    NOT_PARTICIPANT, POST_NOT_ALLOWED, EMPTY_MESSAGE, MESSAGE_TOO_LONG,
    INVALID_MESSAGE, RECEIVER_REQUIRED, INVALID_PAGINATION
"""

from __future__ import annotations

from dataclasses import dataclass

from django.db import IntegrityError, transaction
from django.db.models import Max
from django.utils import timezone

from authentication.models import User
from chat.authorization import ChatAuthorizationPolicy, require_chat_access
from chat.constants import MESSAGE_CONFIG, PAGINATION_CONFIG
from chat.models import Chat, Message
from core.helpers import page_offset
from core.services import BaseService, ErrorKind, ServiceResult


# =============================================================================
# Result types
# =============================================================================


@dataclass
class ChatResolution:
    chat: Chat
    created: bool


@dataclass
class PostedMessage:
    message: Message
    chat: Chat


@dataclass
class DirectSend:
    chat: Chat
    message: Message
    chat_created: bool


@dataclass
class HistoryPage:
    """One page of a chat's messages, newest first."""

    chat: Chat | None
    messages: list[Message]
    total_count: int
    page: int
    page_size: int


@dataclass
class ChatPreview:
    """A chat as shown in the caller's chat list."""

    chat: Chat
    other_user: User | None
    last_message: Message | None


# =============================================================================
# ChatService
# =============================================================================


class ChatService(BaseService):
    """
    Chat lifecycle and message operations.

    All methods are classmethods returning ServiceResult. Methods
    decorated with require_chat_access must be called with keyword
    arguments.
    """

    @classmethod
    def create_or_get_chat(
        cls,
        actor: User,
        counterparty_id: int,
    ) -> ServiceResult[ChatResolution]:
        """
        Return the chat between actor and counterparty, creating it if needed.

        Implementation:
            1. Reject self-chat
            2. Load the counterparty
            3. Check the initiation policy
            4. Look up the existing chat for the unordered pair
            5. Otherwise create it with actor as initiator, re-fetching if
               a concurrent call inserted first

        Error codes:
            SELF_CHAT (BAD_REQUEST), USER_NOT_FOUND (NOT_FOUND),
            INITIATION_NOT_ALLOWED (FORBIDDEN)
        """
        if actor.pk == counterparty_id:
            return ServiceResult.failure(
                "You cannot start a chat with yourself",
                error_code="SELF_CHAT",
                error_kind=ErrorKind.BAD_REQUEST,
            )

        counterparty = User.objects.filter(pk=counterparty_id).first()
        if counterparty is None:
            return ServiceResult.failure(
                "Receiver not found",
                error_code="USER_NOT_FOUND",
                error_kind=ErrorKind.NOT_FOUND,
            )

        if not ChatAuthorizationPolicy.can_initiate(actor, counterparty):
            return ServiceResult.failure(
                "Only HR members, company owners or admins can start a chat",
                error_code="INITIATION_NOT_ALLOWED",
                error_kind=ErrorKind.FORBIDDEN,
            )

        existing = Chat.objects.between(actor.pk, counterparty.pk).first()
        if existing is not None:
            return ServiceResult.success(ChatResolution(chat=existing, created=False))

        try:
            with transaction.atomic():
                chat = Chat.objects.create(initiator=actor, counterparty=counterparty)
        except IntegrityError:
            chat = Chat.objects.between(actor.pk, counterparty.pk).first()
            if chat is None:
                raise
            cls.get_logger().info(
                f"Concurrent chat creation for users {actor.pk} and "
                f"{counterparty.pk} resolved to chat {chat.pk}"
            )
            return ServiceResult.success(ChatResolution(chat=chat, created=False))

        cls.get_logger().info(
            f"Created chat {chat.pk} initiated by user {actor.pk} "
            f"with user {counterparty.pk}"
        )
        return ServiceResult.success(ChatResolution(chat=chat, created=True))

    @classmethod
    def clean_body(cls, body) -> ServiceResult[str]:
        """
        Trim a message body and check it is non-empty and within bounds.

        Sole body check for REST and the realtime channel; both pass the
        raw JSON value through. Non-strings are rejected, never coerced.
        PostgreSQL text columns cannot hold NUL.
        """
        if not isinstance(body, str) or "\x00" in body:
            return ServiceResult.failure(
                "Message must be text without NUL characters",
                error_code="INVALID_MESSAGE",
                error_kind=ErrorKind.BAD_REQUEST,
            )

        cleaned = body.strip()
        if len(cleaned) < MESSAGE_CONFIG.MIN_BODY_LENGTH:
            return ServiceResult.failure(
                "Message cannot be empty",
                error_code="EMPTY_MESSAGE",
                error_kind=ErrorKind.BAD_REQUEST,
            )
        if len(cleaned) > MESSAGE_CONFIG.MAX_BODY_LENGTH:
            return ServiceResult.failure(
                f"Message cannot exceed {MESSAGE_CONFIG.MAX_BODY_LENGTH} characters",
                error_code="MESSAGE_TOO_LONG",
                error_kind=ErrorKind.BAD_REQUEST,
            )
        return ServiceResult.success(cleaned)

    @classmethod
    @require_chat_access()
    def post_message(
        cls,
        actor: User,
        chat_id: int,
        body: str,
        _chat: Chat | None = None,
    ) -> ServiceResult[PostedMessage]:
        """
        Append a message to a chat.

        This is the only code path that creates Message rows.

        Implementation:
            1. Chat lookup and participancy (require_chat_access)
            2. Posting policy
            3. Body validation
            4. In one transaction: lock the chat row, stamp the message
               no earlier than the chat's latest message, insert it and
               advance the chat's updated_at

        Error codes:
            CHAT_NOT_FOUND (NOT_FOUND), NOT_PARTICIPANT (FORBIDDEN),
            POST_NOT_ALLOWED (FORBIDDEN), EMPTY_MESSAGE / MESSAGE_TOO_LONG /
            INVALID_MESSAGE (BAD_REQUEST)
        """
        if not ChatAuthorizationPolicy.can_post(actor, _chat):
            return ServiceResult.failure(
                "You are not allowed to post in this chat",
                error_code="POST_NOT_ALLOWED",
                error_kind=ErrorKind.FORBIDDEN,
            )

        cleaned = cls.clean_body(body)
        if not cleaned:
            return cleaned

        with cls.atomic():
            chat = Chat.objects.select_for_update().filter(pk=_chat.pk).first()
            if chat is None:
                return ServiceResult.failure(
                    "Chat not found",
                    error_code="CHAT_NOT_FOUND",
                    error_kind=ErrorKind.NOT_FOUND,
                )

            created_at = timezone.now()
            latest = (
                Message.objects.filter(chat=chat)
                .order_by("-created_at", "-id")
                .values_list("created_at", flat=True)
                .first()
            )
            if latest is not None and latest > created_at:
                created_at = latest

            message = Message.objects.create(
                chat=chat,
                sender=actor,
                body=cleaned.data,
                created_at=created_at,
            )
            chat.save(update_fields=["updated_at"])

        cls.get_logger().debug(f"User {actor.pk} posted message {message.pk} to chat {chat.pk}")
        return ServiceResult.success(PostedMessage(message=message, chat=chat))

    @classmethod
    def send_direct_message(
        cls,
        actor: User,
        counterparty_id: int | None,
        body: str,
    ) -> ServiceResult[DirectSend]:
        """
        Send a message addressed to a user rather than to a chat id.

        An existing chat between the two is reused without an initiation
        check, so a candidate can answer a recruiter this way. Without one,
        the chat is created through create_or_get_chat() and its policy.
        The message itself always goes through post_message().

        Error codes:
            RECEIVER_REQUIRED (BAD_REQUEST) plus those of
            create_or_get_chat() and post_message()
        """
        cleaned = cls.clean_body(body)
        if not cleaned:
            return cleaned

        if counterparty_id is None:
            return ServiceResult.failure(
                "A receiver is required to start a chat",
                error_code="RECEIVER_REQUIRED",
                error_kind=ErrorKind.BAD_REQUEST,
            )

        chat = Chat.objects.between(actor.pk, counterparty_id).first()
        created = False
        if chat is None:
            resolution = cls.create_or_get_chat(actor, counterparty_id)
            if not resolution:
                return resolution
            chat = resolution.data.chat
            created = resolution.data.created

        posted = cls.post_message(actor=actor, chat_id=chat.pk, body=cleaned.data)
        if not posted:
            return posted

        return ServiceResult.success(
            DirectSend(
                chat=posted.data.chat,
                message=posted.data.message,
                chat_created=created,
            )
        )

    @classmethod
    @require_chat_access()
    def get_history(
        cls,
        actor: User,
        chat_id: int,
        page: int = 1,
        page_size: int = PAGINATION_CONFIG.HISTORY_DEFAULT_PAGE_SIZE,
        _chat: Chat | None = None,
    ) -> ServiceResult[HistoryPage]:
        """
        Return one page of messages, newest first.

        total_count covers every message in the chat regardless of page.
        page_size is capped at PAGINATION_CONFIG.HISTORY_MAX_PAGE_SIZE.
        """
        if not 1 <= page <= PAGINATION_CONFIG.HISTORY_MAX_PAGE or page_size < 1:
            return ServiceResult.failure(
                f"page must be between 1 and {PAGINATION_CONFIG.HISTORY_MAX_PAGE}"
                " and page_size must be positive",
                error_code="INVALID_PAGINATION",
                error_kind=ErrorKind.BAD_REQUEST,
            )
        page_size = min(page_size, PAGINATION_CONFIG.HISTORY_MAX_PAGE_SIZE)

        messages = Message.objects.filter(chat=_chat).select_related("sender")
        total_count = messages.count()
        offset = page_offset(page, page_size)
        page_messages = list(messages.order_by("-created_at", "-id")[offset : offset + page_size])

        return ServiceResult.success(
            HistoryPage(
                chat=_chat,
                messages=page_messages,
                total_count=total_count,
                page=page,
                page_size=page_size,
            )
        )

    @classmethod
    def get_history_with_user(
        cls,
        actor: User,
        other_user_id: int,
        page: int = 1,
        page_size: int = PAGINATION_CONFIG.HISTORY_DEFAULT_PAGE_SIZE,
    ) -> ServiceResult[HistoryPage]:
        """
        History of the chat between the actor and another user.

        Returns an empty page with chat=None when the two have never
        talked.
        """
        chat = Chat.objects.between(actor.pk, other_user_id).first()
        if chat is None:
            return ServiceResult.success(
                HistoryPage(
                    chat=None,
                    messages=[],
                    total_count=0,
                    page=page,
                    page_size=min(page_size, PAGINATION_CONFIG.HISTORY_MAX_PAGE_SIZE),
                )
            )
        return cls.get_history(actor=actor, chat_id=chat.pk, page=page, page_size=page_size)

    @classmethod
    def list_chats(cls, actor: User) -> ServiceResult[list[ChatPreview]]:
        """
        Every chat the actor is party to, most recently active first.

        Related data is fetched by explicit loaders rather than joins on
        the chat query, so the denormalized preview fields are visible here.
        """
        chats = list(Chat.objects.for_user(actor.pk).order_by("-updated_at", "-id"))

        other_users = cls._load_users({chat.other_party_id(actor.pk) for chat in chats})
        last_messages = cls._load_last_messages([chat.pk for chat in chats])

        previews = [
            ChatPreview(
                chat=chat,
                other_user=other_users.get(chat.other_party_id(actor.pk)),
                last_message=last_messages.get(chat.pk),
            )
            for chat in chats
        ]
        return ServiceResult.success(previews)

    @classmethod
    @require_chat_access()
    def delete_chat(
        cls,
        actor: User,
        chat_id: int,
        _chat: Chat | None = None,
    ) -> ServiceResult[None]:
        """Delete a chat and all of its messages atomically."""
        with cls.atomic():
            deleted_messages, _ = Message.objects.filter(chat=_chat).delete()
            _chat.delete()

        cls.get_logger().info(
            f"Chat {chat_id} deleted by user {actor.pk} "
            f"({deleted_messages} messages removed)"
        )
        return ServiceResult.success(None)

    @classmethod
    def purge_chats_for_user(cls, user: User) -> int:
        """
        Delete every chat the user is party to, with their messages.

        Used by account deletion. Returns the number of chats removed.
        """
        with cls.atomic():
            chat_ids = list(Chat.objects.for_user(user.pk).values_list("pk", flat=True))
            Message.objects.filter(chat_id__in=chat_ids).delete()
            Chat.objects.filter(pk__in=chat_ids).delete()
        return len(chat_ids)

    # -------------------------------------------------------------------------
    # Data loaders
    # -------------------------------------------------------------------------

    @staticmethod
    def _load_users(user_ids: set[int]) -> dict[int, User]:
        if not user_ids:
            return {}
        return User.objects.only(
            "id", "first_name", "last_name", "profile_pic"
        ).in_bulk(list(user_ids))

    @staticmethod
    def _load_last_messages(chat_ids: list[int]) -> dict[int, Message]:
        """Latest message per chat. Ids grow with append order within a chat."""
        if not chat_ids:
            return {}
        latest_ids = (
            Message.objects.filter(chat_id__in=chat_ids)
            .order_by()
            .values("chat_id")
            .annotate(latest_id=Max("id"))
            .values_list("latest_id", flat=True)
        )
        messages = Message.objects.in_bulk(list(latest_ids))
        return {message.chat_id: message for message in messages.values()}
