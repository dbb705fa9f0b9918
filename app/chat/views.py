"""
REST views for chats.

These views are a thin adapter over ChatService: they validate request
shape, call the service, and map ServiceResult failures to HTTP statuses
through ErrorKind. No chat state is written here.

URL Structure:
    /api/v1/chats/                      GET (previews), POST (get-or-create)
    /api/v1/chats/{id}/                 GET (history), DELETE
    /api/v1/chats/{id}/messages/        POST
    /api/v1/chats/history/{user_id}/    GET (history with a user)

Design Decisions:
    - The RealtimeChannel is injected through as_view(realtime=...) from
      config.wiring, never looked up from the request
    - Posting over REST also pushes new_message to the chat room, so
      clients watching the chat live see messages from either path
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from chat.constants import REALTIME_EVENTS
from chat.pagination import ChatListPagination
from chat.serializers import (
    ChatCreateSerializer,
    ChatPreviewSerializer,
    ChatSerializer,
    HistoryPageSerializer,
    HistoryQuerySerializer,
    MessageCreateSerializer,
    MessageSerializer,
)
from chat.services import ChatService
from core.services import error_response


class ChatAPIView(APIView):
    """Base view carrying the injected realtime channel."""

    permission_classes = [IsAuthenticated]
    realtime = None


class ChatListCreateView(ChatAPIView):
    pagination_class = ChatListPagination

    @extend_schema(tags=["Chats"], responses=ChatPreviewSerializer(many=True))
    def get(self, request):
        """List the caller's chats, most recently active first."""
        result = ChatService.list_chats(request.user)
        if not result.success:
            return error_response(result)

        paginator = self.pagination_class()
        page = paginator.paginate_queryset(result.data, request, view=self)
        serializer = ChatPreviewSerializer(page, many=True)
        return paginator.get_paginated_response(serializer.data)

    @extend_schema(
        tags=["Chats"],
        request=ChatCreateSerializer,
        responses={
            200: ChatSerializer,
            400: OpenApiResponse(description="Self-chat or malformed body"),
            403: OpenApiResponse(description="Caller may not start chats"),
            404: OpenApiResponse(description="Counterparty not found"),
        },
    )
    def post(self, request):
        """Get or create the chat between the caller and counterparty_id."""
        serializer = ChatCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = ChatService.create_or_get_chat(
            request.user, serializer.validated_data["counterparty_id"]
        )
        if not result.success:
            return error_response(result)

        data = ChatSerializer(result.data.chat).data
        data["created"] = result.data.created
        return Response(data, status=status.HTTP_200_OK)


class ChatDetailView(ChatAPIView):
    @extend_schema(
        tags=["Chats"],
        parameters=[HistoryQuerySerializer],
        responses=HistoryPageSerializer,
    )
    def get(self, request, chat_id: int):
        """Paginated message history, newest first."""
        query = HistoryQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        result = ChatService.get_history(
            actor=request.user,
            chat_id=chat_id,
            page=query.validated_data["page"],
            page_size=query.validated_data["page_size"],
        )
        if not result.success:
            return error_response(result)
        return Response(HistoryPageSerializer(result.data).data)

    @extend_schema(tags=["Chats"], responses={204: None})
    def delete(self, request, chat_id: int):
        result = ChatService.delete_chat(actor=request.user, chat_id=chat_id)
        if not result.success:
            return error_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)


class ChatHistoryWithUserView(ChatAPIView):
    @extend_schema(
        tags=["Chats"],
        parameters=[HistoryQuerySerializer],
        responses=HistoryPageSerializer,
    )
    def get(self, request, user_id: int):
        """History of the caller's chat with user_id; empty if none exists."""
        query = HistoryQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        result = ChatService.get_history_with_user(
            request.user,
            user_id,
            page=query.validated_data["page"],
            page_size=query.validated_data["page_size"],
        )
        if not result.success:
            return error_response(result)
        return Response(HistoryPageSerializer(result.data).data)


class ChatMessageCreateView(ChatAPIView):
    @extend_schema(tags=["Chats"], request=MessageCreateSerializer)
    def post(self, request, chat_id: int):
        """Append a message and push it to the chat room."""
        serializer = MessageCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = ChatService.post_message(
            actor=request.user,
            chat_id=chat_id,
            body=serializer.validated_data["message"],
        )
        if not result.success:
            return error_response(result)

        message_data = MessageSerializer(result.data.message).data
        if self.realtime is not None:
            self.realtime.to_chat(
                chat_id,
                REALTIME_EVENTS.NEW_MESSAGE,
                {"chat_id": chat_id, "message": message_data},
            )

        return Response(
            {
                "chat": ChatSerializer(result.data.chat).data,
                "message": message_data,
            },
            status=status.HTTP_200_OK,
        )
