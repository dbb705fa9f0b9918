"""
ASGI entry point.

HTTP goes to Django; WebSocket connections to /ws/realtime/ reach the
realtime consumer. Any ASGI server works:

    uvicorn config.asgi:application --app-dir app

Broadcasts cross process boundaries through CHANNEL_LAYERS.
"""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

# Apps must be loaded before the consumer modules import models
django_asgi_app = get_asgi_application()

from channels.routing import ProtocolTypeRouter, URLRouter  # noqa: E402
from channels.security.websocket import AllowedHostsOriginValidator  # noqa: E402

from chat.middleware import JWTAuthMiddleware  # noqa: E402
from chat.routing import websocket_urlpatterns  # noqa: E402

# The middleware resolves a connection user when a token is offered and
# otherwise leaves the scope anonymous; it never refuses the handshake.
realtime_app = JWTAuthMiddleware(URLRouter(websocket_urlpatterns))

application = ProtocolTypeRouter(
    {
        "http": django_asgi_app,
        "websocket": AllowedHostsOriginValidator(realtime_app),
    }
)
