"""
Realtime broadcast primitive.

RealtimeChannel wraps the Channels layer and is the only way business code
pushes events to connected clients. One instance is built at process start
(config/wiring.py) and handed to the views, the consumer and the services
that broadcast. Nothing fetches it from request state.

Rooms:
    user_{id}     direct notifications (status changes, new chats)
    company_{id}  HR-facing notifications (new applications)
    chat_{id}     live messages for one conversation

Delivery is best-effort. A broadcast happens after the state change has
committed; if the layer is unreachable the failure is logged and the
operation still succeeds, because clients can always recover the state
through REST history.

Usage:
    realtime = RealtimeChannel()
    realtime.to_user(user.id, REALTIME_EVENTS.CHAT_CREATED, payload)

    # Inside a consumer
    await realtime.abroadcast(realtime.chat_room(chat_id), event, payload)
"""

from __future__ import annotations

import logging
from typing import Any

from asgiref.sync import async_to_sync
from channels.layers import DEFAULT_CHANNEL_LAYER, get_channel_layer

from chat.constants import ROOM_PREFIXES

logger = logging.getLogger(__name__)

# Consumer handler invoked for every broadcast (RealtimeConsumer.realtime_event)
EVENT_MESSAGE_TYPE = "realtime.event"


class RealtimeChannel:
    """Fan-out of server events to user, company and chat rooms."""

    def __init__(self, alias: str = DEFAULT_CHANNEL_LAYER):
        self.alias = alias

    @property
    def layer(self):
        return get_channel_layer(self.alias)

    # -------------------------------------------------------------------------
    # Room names
    # -------------------------------------------------------------------------

    @staticmethod
    def user_room(user_id: int) -> str:
        return f"{ROOM_PREFIXES.USER}_{user_id}"

    @staticmethod
    def company_room(company_id: int) -> str:
        return f"{ROOM_PREFIXES.COMPANY}_{company_id}"

    @staticmethod
    def chat_room(chat_id: int) -> str:
        return f"{ROOM_PREFIXES.CHAT}_{chat_id}"

    # -------------------------------------------------------------------------
    # Broadcasting
    # -------------------------------------------------------------------------

    @staticmethod
    def build_message(event: str, payload: dict[str, Any]) -> dict[str, Any]:
        return {"type": EVENT_MESSAGE_TYPE, "event": event, "payload": payload}

    def broadcast(self, room: str, event: str, payload: dict[str, Any]) -> bool:
        """
        Send an event to every connection in a room from synchronous code.

        Returns:
            True if the layer accepted the message, False otherwise
        """
        layer = self.layer
        if layer is None:
            logger.warning(f"No channel layer configured, dropped {event} for {room}")
            return False

        try:
            async_to_sync(layer.group_send)(room, self.build_message(event, payload))
        except Exception:
            logger.exception(f"Failed to broadcast {event} to {room}")
            return False

        logger.debug(f"Broadcast {event} to {room}")
        return True

    async def abroadcast(self, room: str, event: str, payload: dict[str, Any]) -> bool:
        """Async counterpart of broadcast() for use inside consumers."""
        layer = self.layer
        if layer is None:
            logger.warning(f"No channel layer configured, dropped {event} for {room}")
            return False

        try:
            await layer.group_send(room, self.build_message(event, payload))
        except Exception:
            logger.exception(f"Failed to broadcast {event} to {room}")
            return False

        logger.debug(f"Broadcast {event} to {room}")
        return True

    def to_user(self, user_id: int, event: str, payload: dict[str, Any]) -> bool:
        return self.broadcast(self.user_room(user_id), event, payload)

    def to_company(self, company_id: int, event: str, payload: dict[str, Any]) -> bool:
        return self.broadcast(self.company_room(company_id), event, payload)

    def to_chat(self, chat_id: int, event: str, payload: dict[str, Any]) -> bool:
        return self.broadcast(self.chat_room(chat_id), event, payload)
