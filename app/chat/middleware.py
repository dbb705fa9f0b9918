"""
WebSocket authentication middleware.

Attaches an optional connection-level user to the scope. The realtime
channel accepts anonymous connections, so a missing or bad token never
rejects the handshake; it simply leaves scope["user"] anonymous.

Token Passing Methods:
    1. Query string: ws://host/ws/realtime/?token=<jwt_token>
    2. Subprotocol: Sec-WebSocket-Protocol: jwt, <jwt_token>

Usage in config/asgi.py:
    application = ProtocolTypeRouter({
        "websocket": JWTAuthMiddleware(URLRouter(websocket_urlpatterns)),
    })
"""

from __future__ import annotations

import logging
from urllib.parse import parse_qs

from channels.db import database_sync_to_async
from channels.middleware import BaseMiddleware
from django.contrib.auth.models import AnonymousUser

from authentication.services import CredentialVerifier
from core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


class JWTAuthMiddleware(BaseMiddleware):
    """
    Resolve the connection user with the same verifier REST uses.

    Token sources (in order of precedence):
        1. Query string: ?token=<jwt_token>
        2. Subprotocol: Sec-WebSocket-Protocol: jwt, <jwt_token>
    """

    async def __call__(self, scope, receive, send):
        scope = dict(scope)
        token = self._get_token_from_query(scope) or self._get_token_from_subprotocol(
            scope
        )

        if token:
            scope["user"] = await self._get_user_from_token(token)
        else:
            scope["user"] = AnonymousUser()

        return await super().__call__(scope, receive, send)

    def _get_token_from_query(self, scope) -> str | None:
        query_string = scope.get("query_string", b"").decode()
        token_list = parse_qs(query_string).get("token", [])
        return token_list[0] if token_list else None

    def _get_token_from_subprotocol(self, scope) -> str | None:
        subprotocols = scope.get("subprotocols", [])
        if len(subprotocols) >= 2 and subprotocols[0] == "jwt":
            return subprotocols[1]
        return None

    @database_sync_to_async
    def _get_user_from_token(self, token: str):
        try:
            return CredentialVerifier.verify(token).user
        except AuthenticationError as exc:
            logger.info(f"WebSocket connected without identity: {exc}")
            return AnonymousUser()
