"""
Process-wide collaborators.

Built once at import time and passed explicitly to views, consumers and
services, which never look them up from request state.

    realtime_channel        chat.realtime.RealtimeChannel
    notification_dispatcher notifications.services.NotificationDispatcher
"""

from chat.realtime import RealtimeChannel
from notifications.services import NotificationDispatcher

realtime_channel = RealtimeChannel()
notification_dispatcher = NotificationDispatcher()
