"""
Serializers for chat API.

This module provides serializers for the chat system:
- Conversation serializers (read, create request, response envelopes)
- Message serializers (read, create request, page envelope)

Serializer Hierarchy:
    ConversationSerializer: Conversation with participants and cache fields
    ConversationCreateSerializer: Body of POST /conversations/
    ConversationCreateResponseSerializer: {conversation_id, conversation}
    ConversationListResponseSerializer: {conversations}
    ConversationDetailResponseSerializer: {conversation}

    MessageSerializer: Stored (filtered) message
    MessageCreateSerializer: Body of POST /conversations/{id}/messages/
    MessageListQuerySerializer: page/limit query parameters
    SentMessageSerializer: {message, is_filtered}
    MessagePageSerializer: {messages, conversation, page, limit, has_more}

Design Decisions:
    - Read and write serializers are separate for clarity
    - Request serializers stay permissive about content; emptiness and
      length are business rules enforced by chat.services so every
      failure carries an error_code
    - Envelope serializers read directly from the service result types
"""

from __future__ import annotations

from django.conf import settings
from rest_framework import serializers

from chat.constants import MESSAGE_CONFIG
from chat.models import Conversation, Message


# =============================================================================
# Conversation Serializers
# =============================================================================


class ConversationSerializer(serializers.ModelSerializer):
    """
    Conversation representation.

    participants lists the two user ids in canonical order;
    participant_details is the name/role snapshot taken at creation.
    """

    participants = serializers.ListField(
        source="participant_ids",
        child=serializers.CharField(),
        read_only=True,
        help_text="The two participant ids",
    )
    last_message_sender = serializers.CharField(
        source="last_message_sender_id",
        read_only=True,
        allow_null=True,
        help_text="Sender of the most recent message",
    )

    class Meta:
        model = Conversation
        fields = [
            "id",
            "participants",
            "participant_details",
            "last_message",
            "last_message_time",
            "last_message_sender",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ConversationCreateSerializer(serializers.Serializer):
    """Request body for opening a conversation."""

    participant_id = serializers.CharField(
        required=False,
        allow_blank=True,
        allow_null=True,
        help_text="Id of the user to chat with",
    )


class ConversationCreateResponseSerializer(serializers.Serializer):
    conversation_id = serializers.CharField(source="conversation.id")
    conversation = ConversationSerializer()


class ConversationListResponseSerializer(serializers.Serializer):
    conversations = ConversationSerializer(many=True)


class ConversationDetailResponseSerializer(serializers.Serializer):
    conversation = ConversationSerializer()


# =============================================================================
# Message Serializers
# =============================================================================


class MessageSerializer(serializers.ModelSerializer):
    """
    Message representation.

    message carries the stored text, which is already filtered.
    """

    conversation_id = serializers.CharField(read_only=True)
    sender_id = serializers.CharField(read_only=True, allow_null=True)
    message = serializers.CharField(
        source="content",
        read_only=True,
        help_text="Filtered message text",
    )

    class Meta:
        model = Message
        fields = [
            "id",
            "conversation_id",
            "sender_id",
            "sender_name",
            "message",
            "timestamp",
            "is_filtered",
        ]
        read_only_fields = fields


class MessageCreateSerializer(serializers.Serializer):
    """Request body for sending a message."""

    message = serializers.CharField(
        required=False,
        allow_blank=True,
        allow_null=True,
        trim_whitespace=False,
        help_text=f"Message text (max {MESSAGE_CONFIG.MAX_CONTENT_LENGTH} characters)",
    )


class MessageListQuerySerializer(serializers.Serializer):
    """Query parameters for paging through messages."""

    page = serializers.IntegerField(required=False, default=1, min_value=1)
    limit = serializers.IntegerField(required=False, min_value=1)

    def validate_limit(self, value):
        max_limit = getattr(
            settings, "CHAT_MESSAGES_MAX_LIMIT", MESSAGE_CONFIG.MAX_PAGE_SIZE
        )
        if value > max_limit:
            raise serializers.ValidationError(
                f"Ensure this value is less than or equal to {max_limit}."
            )
        return value


class SentMessageSerializer(serializers.Serializer):
    message = MessageSerializer()
    is_filtered = serializers.BooleanField()


class MessagePageSerializer(serializers.Serializer):
    messages = MessageSerializer(many=True)
    conversation = ConversationSerializer()
    page = serializers.IntegerField()
    limit = serializers.IntegerField()
    has_more = serializers.BooleanField()
