"""
WebSocket consumer for the realtime channel.

A single consumer serves every realtime client. Connections are accepted
anonymously; the acting identity is resolved per action from the token
carried in the payload, exactly as the REST authentication resolves it.

Channel Groups:
    user_{id}, company_{id}, chat_{id} (see chat.realtime)

Message Types (from client):
    - join_user_room: {"user_id"}
    - join_company_room: {"company_id"}
    - join_chat: {"chat_id", "token"?}  requires access to the chat
    - leave_room: {"room"}
    - send_message: {"chat_id"?, "body", "sender_id", "receiver_id"?, "token"}

Message Types (to client):
    - joined / left: Room membership acknowledgements
    - new_message: {"chat_id", "message"}
    - chat_created: {"chat", "message"}
    - new_application, application_status_update: Forwarded broadcasts
    - error: {"message", "error_code"}, only ever sent to the caller

Writes go through ChatService; this module holds no business rules of its
own beyond matching the declared sender to the verified token.
"""

from __future__ import annotations

import logging

from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncJsonWebsocketConsumer
from django.contrib.auth.models import AnonymousUser
from django.db import OperationalError

from authentication.services import CredentialVerifier
from chat.authorization import ChatAuthorizationPolicy
from chat.constants import REALTIME_EVENTS
from chat.models import Chat
from chat.serializers import ChatSerializer, MessageSerializer
from chat.services import ChatService
from core.exceptions import AuthenticationError, TransientError
from core.exception_handlers import GENERIC_ERROR_MESSAGE, TRANSIENT_ERROR_MESSAGE

logger = logging.getLogger(__name__)


class RealtimeConsumer(AsyncJsonWebsocketConsumer):
    """
    Realtime adapter over ChatService and RealtimeChannel.

    Attributes:
        realtime: The process-wide RealtimeChannel (injected via as_asgi)
        rooms: Groups this connection joined, discarded on disconnect
    """

    def __init__(self, *args, realtime=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.realtime = realtime
        self.rooms: set[str] = set()

    async def connect(self):
        await self.accept()
        logger.debug(f"Realtime connection opened: {self.channel_name}")

    async def disconnect(self, close_code):
        for room in self.rooms:
            await self.channel_layer.group_discard(room, self.channel_name)
        logger.debug(
            f"Realtime connection closed ({close_code}), left {len(self.rooms)} rooms"
        )
        self.rooms.clear()

    async def receive_json(self, content, **kwargs):
        """
        Dispatch a client action.

        Unexpected failures are logged with the action type and answered
        with a generic error; store timeouts are reported as retryable.
        """
        if not isinstance(content, dict):
            await self.send_error("Malformed message", "BAD_REQUEST")
            return

        message_type = content.get("type")
        handler = self.handlers.get(message_type)
        if handler is None:
            await self.send_error(f"Unknown message type: {message_type}", "BAD_REQUEST")
            return

        try:
            await handler(self, content)
        except OperationalError as exc:
            logger.warning(f"Record store unavailable during {message_type}: {exc}")
            transient = TransientError(TRANSIENT_ERROR_MESSAGE)
            await self.send_error(transient.message, transient.error_code)
        except Exception:
            logger.exception(f"Unhandled error while processing {message_type}")
            await self.send_error(GENERIC_ERROR_MESSAGE, "INTERNAL")

    # -------------------------------------------------------------------------
    # Room membership
    # -------------------------------------------------------------------------

    async def _join(self, room: str):
        await self.channel_layer.group_add(room, self.channel_name)
        self.rooms.add(room)
        await self.send_json({"type": REALTIME_EVENTS.JOINED, "room": room})

    async def handle_join_user_room(self, content):
        user_id = _as_id(content.get("user_id"))
        if user_id is None:
            await self.send_error("user_id is required", "BAD_REQUEST")
            return
        await self._join(self.realtime.user_room(user_id))

    async def handle_join_company_room(self, content):
        company_id = _as_id(content.get("company_id"))
        if company_id is None:
            await self.send_error("company_id is required", "BAD_REQUEST")
            return
        await self._join(self.realtime.company_room(company_id))

    async def handle_join_chat(self, content):
        """Join a chat room after checking the caller can read that chat."""
        chat_id = _as_id(content.get("chat_id"))
        if chat_id is None:
            await self.send_error("chat_id is required", "BAD_REQUEST")
            return

        actor = await self._resolve_actor(content.get("token"))
        if actor is None:
            return

        error = await self._check_chat_access(actor, chat_id)
        if error is not None:
            await self.send_error(*error)
            return

        await self._join(self.realtime.chat_room(chat_id))

    async def handle_leave_room(self, content):
        room = content.get("room")
        if room not in self.rooms:
            await self.send_error("Not a member of that room", "BAD_REQUEST")
            return
        await self.channel_layer.group_discard(room, self.channel_name)
        self.rooms.discard(room)
        await self.send_json({"type": REALTIME_EVENTS.LEFT, "room": room})

    # -------------------------------------------------------------------------
    # Messaging
    # -------------------------------------------------------------------------

    async def handle_send_message(self, content):
        """
        Persist a message sent over the socket and fan it out.

        The token in the payload is verified independently of any
        connection-level user, and the declared sender_id must match it.
        """
        try:
            credential = await database_sync_to_async(CredentialVerifier.verify)(
                content.get("token")
            )
        except AuthenticationError as exc:
            await self.send_error("Invalid or expired token", exc.error_code)
            return

        actor = credential.user
        if _as_id(content.get("sender_id")) != actor.pk:
            logger.warning(
                f"Rejected realtime send: declared sender {content.get('sender_id')!r} "
                f"does not match token user {actor.pk}"
            )
            await self.send_error("Unauthorized sender", "SENDER_MISMATCH")
            return

        body = content.get("body")
        chat_id = content.get("chat_id")

        if chat_id is not None:
            chat_id = _as_id(chat_id)
            if chat_id is None:
                await self.send_error("chat_id must be an integer", "BAD_REQUEST")
                return
            result = await database_sync_to_async(ChatService.post_message)(
                actor=actor, chat_id=chat_id, body=body
            )
            if not result.success:
                await self.send_error(result.error, result.error_code)
                return
            message_data = await self._serialize_message(result.data.message)
            await self.realtime.abroadcast(
                self.realtime.chat_room(chat_id),
                REALTIME_EVENTS.NEW_MESSAGE,
                {"chat_id": chat_id, "message": message_data},
            )
            return

        receiver_id = _as_id(content.get("receiver_id"))
        result = await database_sync_to_async(ChatService.send_direct_message)(
            actor, receiver_id, body
        )
        if not result.success:
            await self.send_error(result.error, result.error_code)
            return

        sent = result.data
        message_data = await self._serialize_message(sent.message)
        if sent.chat_created:
            chat_data = await self._serialize_chat(sent.chat)
            payload = {"chat": chat_data, "message": message_data}
            for user_id in sent.chat.participant_ids:
                await self.realtime.abroadcast(
                    self.realtime.user_room(user_id),
                    REALTIME_EVENTS.CHAT_CREATED,
                    payload,
                )
        else:
            await self.realtime.abroadcast(
                self.realtime.chat_room(sent.chat.pk),
                REALTIME_EVENTS.NEW_MESSAGE,
                {"chat_id": sent.chat.pk, "message": message_data},
            )

    # -------------------------------------------------------------------------
    # Channel layer events
    # -------------------------------------------------------------------------

    async def realtime_event(self, event):
        """Forward a RealtimeChannel broadcast to the client."""
        await self.send_json({"type": event["event"], "data": event["payload"]})

    async def send_error(self, message: str, error_code: str | None = None):
        await self.send_json(
            {
                "type": REALTIME_EVENTS.ERROR,
                "message": message,
                "error_code": error_code,
            }
        )

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    async def _resolve_actor(self, token):
        """
        Identity for gated actions: the payload token if given, otherwise
        the user attached to the connection by JWTAuthMiddleware.

        Sends an error event and returns None when neither is usable.
        """
        if token:
            try:
                credential = await database_sync_to_async(CredentialVerifier.verify)(token)
            except AuthenticationError as exc:
                await self.send_error("Invalid or expired token", exc.error_code)
                return None
            return credential.user

        user = self.scope.get("user")
        if user is None or isinstance(user, AnonymousUser):
            await self.send_error("Authentication required", "UNAUTHENTICATED")
            return None
        return user

    @database_sync_to_async
    def _check_chat_access(self, actor, chat_id: int) -> tuple[str, str] | None:
        chat = Chat.objects.filter(pk=chat_id).first()
        if chat is None:
            return ("Chat not found", "CHAT_NOT_FOUND")
        if not ChatAuthorizationPolicy.can_access(actor, chat):
            return ("You are not a participant in this chat", "NOT_PARTICIPANT")
        return None

    @database_sync_to_async
    def _serialize_message(self, message) -> dict:
        return dict(MessageSerializer(message).data)

    @database_sync_to_async
    def _serialize_chat(self, chat) -> dict:
        return dict(ChatSerializer(chat).data)

    handlers = {
        "join_user_room": handle_join_user_room,
        "join_company_room": handle_join_company_room,
        "join_chat": handle_join_chat,
        "leave_room": handle_leave_room,
        "send_message": handle_send_message,
    }


def _as_id(value) -> int | None:
    """Coerce a client-supplied id to a positive int, or None."""
    if isinstance(value, bool):
        return None
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None
