"""
Tests for chat REST endpoints.

Verifies:
- Authentication is required and uses the shared credential verifier
- ServiceResult failures map to the right HTTP status
- Response shapes (previews, history pagination, post result)
- REST posts are pushed to the chat room
"""

import pytest
from rest_framework import status

from chat.models import Chat, Message
from chat.realtime import RealtimeChannel
from chat.services import ChatService
from chat.tests.conftest import client_for
from chat.tests.factories import ChatFactory
from config.wiring import realtime_channel

CHATS_URL = "/api/v1/chats/"


def chat_url(chat_id):
    return f"{CHATS_URL}{chat_id}/"


def messages_url(chat_id):
    return f"{CHATS_URL}{chat_id}/messages/"


class TestAuthentication:
    def test_anonymous_request_rejected(self, api_client):
        response = api_client.get(CHATS_URL)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_unconfirmed_user_rejected(self, candidate):
        candidate.is_confirmed = False
        candidate.save(update_fields=["is_confirmed"])

        response = client_for(candidate).get(CHATS_URL)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestChatCreate:
    def test_hr_user_creates_chat(self, recruiter_client, candidate):
        response = recruiter_client.post(
            CHATS_URL, {"counterparty_id": candidate.pk}, format="json"
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["created"] is True
        assert response.data["counterparty"]["id"] == candidate.pk
        assert "email" not in response.data["counterparty"]

    def test_repeat_returns_same_chat(self, recruiter_client, candidate):
        first = recruiter_client.post(
            CHATS_URL, {"counterparty_id": candidate.pk}, format="json"
        )
        second = recruiter_client.post(
            CHATS_URL, {"counterparty_id": candidate.pk}, format="json"
        )

        assert first.data["id"] == second.data["id"]
        assert second.data["created"] is False

    def test_candidate_forbidden(self, candidate_client, outsider):
        response = candidate_client.post(
            CHATS_URL, {"counterparty_id": outsider.pk}, format="json"
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data["error_code"] == "INITIATION_NOT_ALLOWED"

    def test_self_chat_bad_request(self, recruiter_client, recruiter):
        response = recruiter_client.post(
            CHATS_URL, {"counterparty_id": recruiter.pk}, format="json"
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == "SELF_CHAT"

    def test_unknown_counterparty_not_found(self, recruiter_client):
        response = recruiter_client.post(
            CHATS_URL, {"counterparty_id": 999999}, format="json"
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_missing_counterparty_bad_request(self, recruiter_client):
        response = recruiter_client.post(CHATS_URL, {}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestChatList:
    def test_lists_previews(self, candidate_client, chat_with_messages, recruiter):
        response = candidate_client.get(CHATS_URL)

        assert response.status_code == status.HTTP_200_OK
        assert response.data["count"] == 1
        preview = response.data["results"][0]
        assert preview["id"] == chat_with_messages.pk
        assert preview["other_user"]["id"] == recruiter.pk
        assert preview["last_message"]["body"] == "Great, let's talk."

    def test_page_size_respected(self, recruiter_client, recruiter):
        for _ in range(3):
            ChatFactory(initiator=recruiter)

        response = recruiter_client.get(CHATS_URL, {"page_size": 2})

        assert response.data["count"] == 3
        assert len(response.data["results"]) == 2


class TestChatHistory:
    def test_history_with_pagination_metadata(self, candidate_client, chat_with_messages):
        response = candidate_client.get(
            chat_url(chat_with_messages.pk), {"page": 1, "page_size": 2}
        )

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data["messages"]) == 2
        pagination = response.data["pagination"]
        assert pagination["total_count"] == 3
        assert pagination["total_pages"] == 2
        assert pagination["has_next"] is True

    def test_page_size_over_limit_rejected(self, candidate_client, chat):
        response = candidate_client.get(chat_url(chat.pk), {"page_size": 101})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_huge_page_number_rejected(self, candidate_client, chat):
        response = candidate_client.get(
            chat_url(chat.pk), {"page": "100000000000000000000000"}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_huge_page_number_rejected_for_user_history(self, candidate_client, recruiter):
        response = candidate_client.get(
            f"{CHATS_URL}history/{recruiter.pk}/", {"page": "100000000000000000000000"}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_third_party_forbidden(self, outsider_client, chat):
        response = outsider_client.get(chat_url(chat.pk))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_missing_chat_not_found(self, candidate_client):
        response = candidate_client.get(chat_url(999999))

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_history_with_user(self, candidate_client, chat_with_messages, recruiter):
        response = candidate_client.get(f"{CHATS_URL}history/{recruiter.pk}/")

        assert response.status_code == status.HTTP_200_OK
        assert response.data["pagination"]["total_count"] == 3

    def test_history_with_stranger_is_empty(self, candidate_client, outsider):
        response = candidate_client.get(f"{CHATS_URL}history/{outsider.pk}/")

        assert response.status_code == status.HTTP_200_OK
        assert response.data["chat"] is None
        assert response.data["messages"] == []


class TestMessageCreate:
    def test_candidate_replies(self, candidate_client, chat, mocker):
        to_chat = mocker.patch.object(realtime_channel, "to_chat", return_value=True)

        response = candidate_client.post(
            messages_url(chat.pk), {"message": "Thanks for reaching out"}, format="json"
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["message"]["body"] == "Thanks for reaching out"
        assert response.data["chat"]["id"] == chat.pk
        to_chat.assert_called_once()
        chat_id, event, payload = to_chat.call_args.args
        assert chat_id == chat.pk
        assert event == "new_message"
        assert payload["message"]["id"] == response.data["message"]["id"]

    def test_third_party_forbidden(self, outsider_client, chat, mocker):
        to_chat = mocker.patch.object(realtime_channel, "to_chat")

        response = outsider_client.post(
            messages_url(chat.pk), {"message": "Hi"}, format="json"
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert not Message.objects.exists()
        to_chat.assert_not_called()

    def test_blank_message_rejected(self, candidate_client, chat):
        response = candidate_client.post(
            messages_url(chat.pk), {"message": "   "}, format="json"
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == "EMPTY_MESSAGE"

    @pytest.mark.parametrize("body", ["a\x00b", 12345, None, ["hello"], {"text": "hi"}])
    def test_unusable_body_rejected_like_realtime_path(self, candidate_client, candidate, chat, body):
        """
        Why it matters: A body the realtime channel refuses must not be
        stored over REST, and the other way round.
        """
        response = candidate_client.post(messages_url(chat.pk), {"message": body}, format="json")
        direct = ChatService.post_message(actor=candidate, chat_id=chat.pk, body=body)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == "INVALID_MESSAGE"
        assert direct.error_code == "INVALID_MESSAGE"
        assert not Message.objects.exists()

    def test_body_stored_identically_on_both_paths(self, candidate_client, candidate, chat):
        response = candidate_client.post(
            messages_url(chat.pk), {"message": "  Same text  "}, format="json"
        )
        direct = ChatService.post_message(actor=candidate, chat_id=chat.pk, body="  Same text  ")

        assert response.data["message"]["body"] == direct.data.message.body == "Same text"

    def test_broadcast_failure_does_not_fail_post(self, candidate_client, chat, mocker):
        """
        Why it matters: The message is committed before the broadcast;
        an unreachable channel layer must not turn a saved message into
        an error response.
        """
        broken_layer = mocker.Mock()
        broken_layer.group_send = mocker.AsyncMock(side_effect=ConnectionError("redis down"))
        mocker.patch.object(
            RealtimeChannel, "layer", new_callable=mocker.PropertyMock, return_value=broken_layer
        )

        response = candidate_client.post(
            messages_url(chat.pk), {"message": "Still saved"}, format="json"
        )

        assert response.status_code == status.HTTP_200_OK
        assert Message.objects.filter(chat=chat, body="Still saved").exists()


class TestChatDelete:
    def test_party_deletes_chat(self, recruiter_client, chat_with_messages):
        response = recruiter_client.delete(chat_url(chat_with_messages.pk))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Chat.objects.filter(pk=chat_with_messages.pk).exists()
        assert not Message.objects.exists()

    def test_third_party_forbidden(self, outsider_client, chat):
        response = outsider_client.delete(chat_url(chat.pk))

        assert response.status_code == status.HTTP_403_FORBIDDEN
