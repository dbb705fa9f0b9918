"""
WebSocket URL routing for the realtime channel.

URL Patterns:
    ws/realtime/ - The single realtime endpoint (rooms are joined per action)

Authentication:
    A token may be passed as ?token=<jwt_access_token> to attach a
    connection user; actions that write still carry their own token.
"""

from django.urls import path

from chat import consumers
from config.wiring import realtime_channel

websocket_urlpatterns = [
    path(
        "ws/realtime/",
        consumers.RealtimeConsumer.as_asgi(realtime=realtime_channel),
    ),
]
