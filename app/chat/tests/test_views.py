"""
Tests for chat API views.

Covers:
- ConversationViewSet: list, create (get-or-create), retrieve
- MessageViewSet: list (paging), create (send)
- Error bodies and the status code each error code maps to
"""

from datetime import datetime, timedelta, timezone as dt_timezone

import pytest
from rest_framework import status

from chat.constants import MESSAGE_CONFIG, ChatErrorCode
from chat.models import Conversation, Message
from chat.tests.factories import MessageFactory


BASE_URL = "/api/v1/chat/conversations/"


def conversation_url(conversation_id):
    return f"{BASE_URL}{conversation_id}/"


def messages_url(conversation_id):
    return f"{BASE_URL}{conversation_id}/messages/"


# =============================================================================
# Authentication
# =============================================================================


@pytest.mark.django_db
class TestAuthenticationRequired:
    """Every chat endpoint requires an authenticated user."""

    def test_list_conversations_requires_auth(self, api_client):
        response = api_client.get(BASE_URL)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_send_message_requires_auth(self, api_client, conversation):
        response = api_client.post(
            messages_url(conversation.id), {"message": "Hi"}, format="json"
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert not Message.objects.exists()


# =============================================================================
# Conversations
# =============================================================================


@pytest.mark.django_db
class TestCreateConversation:
    """Tests for POST /conversations/."""

    def test_creates_conversation(self, brand_client, brand_user, influencer_user):
        response = brand_client.post(
            BASE_URL, {"participant_id": str(influencer_user.id)}, format="json"
        )

        assert response.status_code == status.HTTP_201_CREATED
        conversation = Conversation.objects.get()
        assert response.data["conversation_id"] == conversation.id
        body = response.data["conversation"]
        assert body["id"] == conversation.id
        assert sorted(body["participants"]) == sorted(
            [str(brand_user.id), str(influencer_user.id)]
        )
        assert body["participant_details"][str(influencer_user.id)] == {
            "name": "Ivy Influencer",
            "role": "influencer",
        }
        assert body["last_message"] is None
        assert body["last_message_sender"] is None

    def test_existing_conversation_returns_200(
        self, influencer_client, conversation, brand_user
    ):
        response = influencer_client.post(
            BASE_URL, {"participant_id": str(brand_user.id)}, format="json"
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["conversation_id"] == conversation.id
        assert Conversation.objects.count() == 1

    def test_missing_participant_returns_400(self, brand_client):
        response = brand_client.post(BASE_URL, {}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == ChatErrorCode.VALIDATION_ERROR

    def test_self_conversation_returns_400(self, brand_client, brand_user):
        response = brand_client.post(
            BASE_URL, {"participant_id": str(brand_user.id)}, format="json"
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == ChatErrorCode.SELF_CONVERSATION

    def test_unknown_participant_returns_404(self, brand_client):
        response = brand_client.post(
            BASE_URL,
            {"participant_id": "00000000-0000-0000-0000-000000000000"},
            format="json",
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["error_code"] == ChatErrorCode.PARTICIPANT_NOT_FOUND

    def test_invalid_pairing_returns_403(self, brand_client, other_brand_user):
        response = brand_client.post(
            BASE_URL, {"participant_id": str(other_brand_user.id)}, format="json"
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data == {
            "error": "Chat is only allowed between brands and influencers/UGC creators",
            "error_code": ChatErrorCode.INVALID_PAIRING,
        }


@pytest.mark.django_db
class TestListConversations:
    """Tests for GET /conversations/."""

    def test_lists_own_conversations(self, brand_client, conversation):
        response = brand_client.get(BASE_URL)

        assert response.status_code == status.HTTP_200_OK
        assert [c["id"] for c in response.data["conversations"]] == [conversation.id]

    def test_outsider_sees_nothing(self, other_brand_client, conversation):
        response = other_brand_client.get(BASE_URL)

        assert response.status_code == status.HTTP_200_OK
        assert response.data["conversations"] == []


@pytest.mark.django_db
class TestRetrieveConversation:
    """Tests for GET /conversations/{id}/."""

    def test_participant_gets_conversation(self, influencer_client, conversation):
        response = influencer_client.get(conversation_url(conversation.id))

        assert response.status_code == status.HTTP_200_OK
        assert response.data["conversation"]["id"] == conversation.id

    def test_outsider_gets_403(self, other_brand_client, conversation):
        response = other_brand_client.get(conversation_url(conversation.id))

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data["error_code"] == ChatErrorCode.NOT_PARTICIPANT

    def test_unknown_id_gets_404(self, brand_client):
        response = brand_client.get(conversation_url("missing"))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["error_code"] == ChatErrorCode.CONVERSATION_NOT_FOUND


# =============================================================================
# Messages
# =============================================================================


@pytest.mark.django_db
class TestSendMessage:
    """Tests for POST /conversations/{id}/messages/."""

    def test_sends_message(self, brand_client, brand_user, conversation):
        response = brand_client.post(
            messages_url(conversation.id), {"message": "Hello!"}, format="json"
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["is_filtered"] is False
        message = response.data["message"]
        assert message["message"] == "Hello!"
        assert message["conversation_id"] == conversation.id
        assert message["sender_id"] == str(brand_user.id)
        assert message["sender_name"] == "Acme Brand"
        assert message["is_filtered"] is False

    def test_contact_info_is_masked(self, influencer_client, conversation):
        """
        The response carries the filtered text, never the submitted text.

        Why it matters: contact details must not leave the platform.
        """
        response = influencer_client.post(
            messages_url(conversation.id),
            {"message": "Call me on 555-123-4567"},
            format="json",
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["is_filtered"] is True
        assert "555" not in response.data["message"]["message"]

    def test_empty_message_returns_400(self, brand_client, conversation):
        response = brand_client.post(
            messages_url(conversation.id), {"message": "   "}, format="json"
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == ChatErrorCode.EMPTY_MESSAGE

    def test_missing_message_returns_400(self, brand_client, conversation):
        response = brand_client.post(messages_url(conversation.id), {}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == ChatErrorCode.EMPTY_MESSAGE

    def test_too_long_message_returns_400(self, brand_client, conversation):
        response = brand_client.post(
            messages_url(conversation.id),
            {"message": "a" * (MESSAGE_CONFIG.MAX_CONTENT_LENGTH + 1)},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == ChatErrorCode.MESSAGE_TOO_LONG

    def test_outsider_gets_403(self, other_brand_client, conversation):
        response = other_brand_client.post(
            messages_url(conversation.id), {"message": "Hi"}, format="json"
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert not Message.objects.exists()

    def test_unknown_conversation_gets_404(self, brand_client):
        response = brand_client.post(
            messages_url("missing"), {"message": "Hi"}, format="json"
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_conversation_preview_reflects_last_message(
        self, brand_client, brand_user, conversation
    ):
        brand_client.post(
            messages_url(conversation.id), {"message": "First"}, format="json"
        )
        brand_client.post(
            messages_url(conversation.id), {"message": "Second"}, format="json"
        )

        response = brand_client.get(conversation_url(conversation.id))

        body = response.data["conversation"]
        assert body["last_message"] == "Second"
        assert body["last_message_sender"] == str(brand_user.id)


@pytest.mark.django_db
class TestListMessages:
    """Tests for GET /conversations/{id}/messages/."""

    @pytest.fixture
    def history(self, conversation):
        start = datetime(2026, 3, 1, tzinfo=dt_timezone.utc)
        return [
            MessageFactory(
                conversation=conversation,
                content=f"message {i}",
                timestamp=start + timedelta(minutes=i),
            )
            for i in range(3)
        ]

    def test_returns_page_envelope(self, brand_client, conversation, history):
        response = brand_client.get(messages_url(conversation.id))

        assert response.status_code == status.HTTP_200_OK
        assert [m["message"] for m in response.data["messages"]] == [
            "message 0",
            "message 1",
            "message 2",
        ]
        assert response.data["conversation"]["id"] == conversation.id
        assert response.data["page"] == 1
        assert response.data["limit"] == 50
        assert response.data["has_more"] is False

    def test_paging_parameters(self, brand_client, conversation, history):
        response = brand_client.get(messages_url(conversation.id), {"page": 2, "limit": 2})

        assert response.status_code == status.HTTP_200_OK
        assert [m["message"] for m in response.data["messages"]] == ["message 0"]
        assert response.data["page"] == 2
        assert response.data["limit"] == 2
        assert response.data["has_more"] is False

    @pytest.mark.parametrize(
        "params, field",
        [
            ({"page": 0}, "page"),
            ({"page": "abc"}, "page"),
            ({"limit": 0}, "limit"),
            ({"limit": 101}, "limit"),
        ],
    )
    def test_invalid_paging_returns_400(
        self, brand_client, conversation, params, field
    ):
        response = brand_client.get(messages_url(conversation.id), params)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == ChatErrorCode.VALIDATION_ERROR
        assert field in response.data["errors"]

    def test_outsider_gets_403(self, other_brand_client, conversation, history):
        response = other_brand_client.get(messages_url(conversation.id))

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data["error_code"] == ChatErrorCode.NOT_PARTICIPANT
