"""
Chat system models.

This module defines the data models for brand/creator chat:
- Two-party conversations keyed by the sorted pair of participant ids
- Append-only messages storing already filtered text

Models:
    Conversation: Container for messages between exactly two users
    Message: Individual message within a conversation

QuerySets:
    ConversationQuerySet: Membership and recency filters
    MessageQuerySet: Per-conversation and ordering helpers

Design Decisions:
    - The conversation id is derived from the participant pair, so at most
      one conversation exists per unordered pair without a helper table
    - Participants are stored canonically (user_lower < user_higher)
    - Conversations cache their last message; the cache is written in the
      same transaction as the message insert (see chat.services)
    - Messages are never edited or deleted by the chat core
"""

from __future__ import annotations

from django.conf import settings
from django.db import models
from django.db.models import F, Q

from core.helpers import random_base36
from core.models import BaseModel
from chat.constants import CONVERSATION_CONFIG, MESSAGE_CONFIG


# =============================================================================
# QuerySets
# =============================================================================


class ConversationQuerySet(models.QuerySet):
    """
    Chainable filters for conversations.

    Usage:
        Conversation.objects.for_user(user_id).recent_first()
    """

    def for_user(self, user_id) -> ConversationQuerySet:
        """Conversations where the user is either participant."""
        return self.filter(Q(user_lower_id=user_id) | Q(user_higher_id=user_id))

    def recent_first(self) -> ConversationQuerySet:
        """Most recently active first; id breaks ties."""
        return self.order_by("-updated_at", "id")


class MessageQuerySet(models.QuerySet):
    """
    Chainable filters for messages.

    Usage:
        Message.objects.for_conversation(conversation).newest_first()[:50]
    """

    def for_conversation(self, conversation) -> MessageQuerySet:
        return self.filter(conversation=conversation)

    def chronological(self) -> MessageQuerySet:
        """Oldest first; id breaks timestamp ties."""
        return self.order_by("timestamp", "id")

    def newest_first(self) -> MessageQuerySet:
        return self.order_by("-timestamp", "-id")


# =============================================================================
# Models
# =============================================================================


class Conversation(BaseModel):
    """
    A conversation between a brand and a creator.

    Fields:
        id: "<lower>_<higher>", the participant ids sorted and joined
        user_lower: Participant whose id sorts first
        user_higher: Participant whose id sorts second
        participant_details: {user_id: {"name", "role"}} snapshot taken at
            creation and never re-synced
        last_message: Text of the most recent message (null until first)
        last_message_time: Timestamp of the most recent message
        last_message_sender: Sender of the most recent message
        created_at: When the conversation was created (from BaseModel)
        updated_at: Advanced on every message (from BaseModel)

    Constraints:
        - CheckConstraint(user_lower_id < user_higher_id): Enforce canonical order
        - The primary key makes the pair unique

    Usage:
        conversation.participant_ids  # ["<lower>", "<higher>"]
    """

    id = models.CharField(
        primary_key=True,
        max_length=CONVERSATION_CONFIG.ID_MAX_LENGTH,
        editable=False,
        help_text="Sorted participant ids joined with an underscore",
    )

    user_lower = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="+",
        help_text="Participant with the lexicographically lower id",
    )
    user_higher = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="+",
        help_text="Participant with the lexicographically higher id",
    )

    participant_details = models.JSONField(
        default=dict,
        help_text="Participant name/role snapshot captured at creation",
    )

    # Last-message cache
    last_message = models.TextField(
        null=True,
        blank=True,
        help_text="Filtered text of the most recent message",
    )
    last_message_time = models.DateTimeField(
        null=True,
        blank=True,
        help_text="Timestamp of the most recent message",
    )
    last_message_sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
        help_text="Sender of the most recent message",
    )

    objects = ConversationQuerySet.as_manager()

    class Meta:
        db_table = "chat_conversation"
        ordering = ["-updated_at", "id"]
        constraints = [
            models.CheckConstraint(
                condition=Q(user_lower_id__lt=F("user_higher_id")),
                name="chat_conversation_user_lower_less_than_higher",
            ),
        ]
        indexes = [
            models.Index(
                fields=["user_lower", "-updated_at"],
                name="chat_conv_lower_recent_idx",
            ),
            models.Index(
                fields=["user_higher", "-updated_at"],
                name="chat_conv_higher_recent_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"Conversation({self.pk})"

    @property
    def participant_ids(self) -> list[str]:
        """Participant ids in canonical (sorted) order."""
        return [str(self.user_lower_id), str(self.user_higher_id)]


def generate_message_id(timestamp) -> str:
    """
    Build a message id from its send time.

    Format: msg_<epoch milliseconds>_<9 random base36 chars>

    Example:
        generate_message_id(now)  # "msg_1767225600000_k3v9x0q2m"
    """
    epoch_ms = int(timestamp.timestamp() * 1000)
    suffix = random_base36(MESSAGE_CONFIG.ID_RANDOM_LENGTH)
    return f"{MESSAGE_CONFIG.ID_PREFIX}_{epoch_ms}_{suffix}"


class Message(models.Model):
    """
    A message within a conversation.

    Messages are written once and never mutated. The stored content is
    the output of the content filter; the raw text is never persisted.

    Fields:
        id: msg_<epoch ms>_<random>, see generate_message_id
        conversation: Conversation this message belongs to
        sender: User who sent the message (null if the account is removed)
        sender_name: Sender's display name at send time
        content: Filtered message text
        timestamp: Send time; primary ordering key, id breaks ties
        is_filtered: Whether the filter changed the submitted text
    """

    id = models.CharField(
        primary_key=True,
        max_length=40,
        editable=False,
        help_text="Message identifier",
    )

    conversation = models.ForeignKey(
        Conversation,
        on_delete=models.CASCADE,
        related_name="messages",
        help_text="Conversation this message belongs to",
    )

    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="sent_messages",
        help_text="User who sent this message",
    )
    sender_name = models.CharField(
        max_length=254,
        help_text="Sender display name captured at send time",
    )

    content = models.TextField(
        help_text="Filtered message text",
    )

    timestamp = models.DateTimeField(
        help_text="When the message was sent",
    )

    is_filtered = models.BooleanField(
        default=False,
        help_text="Whether contact information was masked",
    )

    objects = MessageQuerySet.as_manager()

    class Meta:
        db_table = "chat_message"
        ordering = ["timestamp", "id"]
        indexes = [
            models.Index(
                fields=["conversation", "timestamp", "id"],
                name="chat_msg_conv_time_idx",
            ),
        ]

    def __str__(self) -> str:
        """Return human-readable representation."""
        content_preview = (
            self.content[:50] + "..." if len(self.content) > 50 else self.content
        )
        return f"{self.sender_name}: {content_preview}"
