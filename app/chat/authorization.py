"""
Authorization policy for chat operations.

This module decides who may start, read and post to a chat. It is
distinct from DRF permission classes, which only require an authenticated
caller; every chat-specific decision is made here and called from
ChatService, so the REST and realtime paths share it.

Rules:
    - Initiating a chat requires elevated privilege or HR capability
      (creator or HR member of at least one company). Self-chat is never
      allowed.
    - Replying is not gated: the initiator, the counterparty and elevated
      users may post.
    - Reading history, joining a chat room and deleting a chat require
      being a party or elevated.

HR capability is queried on every check and never cached, so removing a
user from a company's HR set takes effect on their next chat action.

Key Components:
    ChatAuthorizationPolicy: Stateless boolean checks
    require_chat_access: Decorator that loads the chat and enforces access

Error Codes:
    CHAT_NOT_FOUND: Chat does not exist
    NOT_PARTICIPANT: Actor is neither a party nor elevated
"""

from __future__ import annotations

from functools import wraps
from typing import TYPE_CHECKING, Callable, TypeVar

from core.services import ErrorKind, ServiceResult

if TYPE_CHECKING:
    from authentication.models import User
    from chat.models import Chat


T = TypeVar("T")


class ChatAuthorizationPolicy:
    """
    Stateless authorization checks for chats.

    All methods are classmethods returning booleans so they compose
    easily in services and consumers.
    """

    @classmethod
    def is_hr_capable(cls, user: User) -> bool:
        """True if the user created a company or sits in a company's HR set."""
        from companies.models import Company

        return Company.objects.managed_by(user).exists()

    @classmethod
    def can_initiate(cls, actor: User, counterparty: User) -> bool:
        if actor.pk == counterparty.pk:
            return False
        if actor.is_elevated:
            return True
        return cls.is_hr_capable(actor)

    @classmethod
    def is_participant(cls, actor: User, chat: Chat) -> bool:
        return actor.pk in chat.participant_ids

    @classmethod
    def can_access(cls, actor: User, chat: Chat) -> bool:
        """Read, join or delete: any party, or an elevated user."""
        return actor.is_elevated or cls.is_participant(actor, chat)

    @classmethod
    def can_post(cls, actor: User, chat: Chat) -> bool:
        """
        Post a message to an existing chat.

        The initiator was vetted when the chat was created and the
        counterparty only replies, so neither needs an HR check here.
        """
        if actor.is_elevated:
            return True
        return actor.pk == chat.initiator_id or actor.pk == chat.counterparty_id


def require_chat_access(
    chat_id_param: str = "chat_id",
    actor_param: str = "actor",
) -> Callable:
    """
    Decorator that loads a chat and requires the actor to have access.

    The loaded chat is injected into the wrapped method as `_chat`. Service
    methods must be called with keyword arguments for the lookup to work.

    Returns:
        ServiceResult.failure with CHAT_NOT_FOUND (NOT_FOUND) or
        NOT_PARTICIPANT (FORBIDDEN) when the check fails

    Example:
        class ChatService(BaseService):
            @classmethod
            @require_chat_access()
            def get_history(cls, actor, chat_id, page=1, _chat=None):
                ...
    """

    def decorator(
        func: Callable[..., ServiceResult[T]],
    ) -> Callable[..., ServiceResult[T]]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> ServiceResult[T]:
            from chat.models import Chat

            actor = kwargs.get(actor_param)
            chat_id = kwargs.get(chat_id_param)

            if actor is None or chat_id is None:
                return ServiceResult.failure(
                    "Missing required parameters",
                    error_code="INVALID_REQUEST",
                    error_kind=ErrorKind.BAD_REQUEST,
                )

            chat = Chat.objects.filter(pk=chat_id).first()
            if chat is None:
                return ServiceResult.failure(
                    "Chat not found",
                    error_code="CHAT_NOT_FOUND",
                    error_kind=ErrorKind.NOT_FOUND,
                )

            if not ChatAuthorizationPolicy.can_access(actor, chat):
                return ServiceResult.failure(
                    "You are not a participant in this chat",
                    error_code="NOT_PARTICIPANT",
                    error_kind=ErrorKind.FORBIDDEN,
                )

            kwargs["_chat"] = chat
            return func(*args, **kwargs)

        return wrapper

    return decorator
