"""
Chat system service layer.

This module provides the business logic for brand/creator chat,
encapsulating all operations on conversations and messages.

Services:
    ConversationService: Get-or-create, list and fetch conversations
    MessageService: Send and page through messages

Design Principles:
    - Services are stateless (use class methods)
    - Expected failures return ServiceResult.failure()
    - Storage and directory failures are logged and returned as
      INTERNAL_ERROR with a generic message
    - Message insert and last-message cache update share one transaction
    - Raw message text is never logged

Collaborators (resolved from settings):
    CHAT_USER_DIRECTORY: chat.protocols.UserDirectory implementation
    CHAT_CLOCK: chat.protocols.Clock callable
    CHAT_TEXT_REDACTOR: see chat.content_filter

Usage:
    from chat.services import ConversationService, MessageService

    result = ConversationService.get_or_create_conversation(brand.id, creator.id)
    if result.success:
        conversation = result.data.conversation

    result = MessageService.send_message(conversation.id, brand.id, "Hello!")
    if result.success:
        result.data.is_filtered  # False
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from django.conf import settings
from django.db import DatabaseError, IntegrityError
from django.utils.module_loading import import_string

from core.exceptions import ExternalServiceError
from core.services import BaseService, ServiceResult

from chat.authorization import (
    ChatAuthorizationService,
    build_conversation_id,
    is_pairing_allowed,
    require_conversation_participant,
)
from chat.constants import MESSAGE_CONFIG, ChatErrorCode
from chat.content_filter import filter_message
from chat.models import Conversation, Message, generate_message_id

if TYPE_CHECKING:
    from chat.protocols import Clock, UserDirectory


def get_user_directory() -> UserDirectory:
    """Resolve the directory configured by CHAT_USER_DIRECTORY."""
    return import_string(
        getattr(
            settings,
            "CHAT_USER_DIRECTORY",
            "authentication.services.UserDirectoryService",
        )
    )


def get_clock() -> Clock:
    """Resolve the clock configured by CHAT_CLOCK."""
    return import_string(getattr(settings, "CHAT_CLOCK", "django.utils.timezone.now"))


# =============================================================================
# Result types
# =============================================================================


@dataclass
class ConversationResult:
    """Conversation plus whether this call created it."""

    conversation: Conversation
    created: bool


@dataclass
class SentMessage:
    """Stored message plus whether the content filter changed it."""

    message: Message
    is_filtered: bool


@dataclass
class MessagePage:
    """
    One page of a conversation's history.

    Attributes:
        messages: Messages in ascending timestamp order
        conversation: The conversation the page belongs to
        page: 1-based page number (page 1 is the most recent window)
        limit: Page size
        has_more: Whether older messages exist beyond this page
    """

    messages: list[Message]
    conversation: Conversation
    page: int
    limit: int
    has_more: bool


# =============================================================================
# Conversations
# =============================================================================


class ConversationService(BaseService):
    """
    Service for conversation operations.

    Methods:
        get_or_create_conversation: Open (or reopen) a brand/creator conversation
        list_conversations: A user's conversations, most recent first
        get_conversation: A single conversation the user participates in
    """

    @classmethod
    def get_or_create_conversation(
        cls,
        current_user_id,
        participant_id,
    ) -> ServiceResult[ConversationResult]:
        """
        Create or retrieve the conversation between two users.

        Conversations are unique per user pair: the id is derived from
        the sorted participant ids, so both users reach the same record
        regardless of who initiates.

        Implementation:
            1. Validate participant_id is present and not the caller
            2. Resolve both users through the directory
            3. If the derived id exists, return it unchanged
            4. Check the pairing rule
            5. Create with a participant snapshot; on a concurrent insert
               of the same id, return the winner's record

        Args:
            current_user_id: Authenticated user's id
            participant_id: Id of the other user

        Returns:
            ServiceResult with ConversationResult(conversation, created)

        Error codes:
            VALIDATION_ERROR: participant_id missing
            SELF_CONVERSATION: participant_id is the caller
            PARTICIPANT_NOT_FOUND: Either user unknown to the directory
            INVALID_PAIRING: Roles are not brand + influencer/ugc_creator
            INTERNAL_ERROR: Storage or directory failure
        """
        validation = cls.validate_required(
            current_user_id=current_user_id,
            participant_id=participant_id,
        )
        if validation:
            return validation

        current_user_id = str(current_user_id)
        participant_id = str(participant_id).strip()

        if participant_id == current_user_id:
            return ServiceResult.failure(
                "Cannot create conversation with yourself",
                error_code=ChatErrorCode.SELF_CONVERSATION,
            )

        directory = get_user_directory()
        try:
            current_entry = directory.lookup(current_user_id)
            participant_entry = directory.lookup(participant_id)
        except ExternalServiceError as e:
            return cls.handle_exception(e, "Directory lookup for new conversation")

        if current_entry is None or participant_entry is None:
            return ServiceResult.failure(
                "Participant not found",
                error_code=ChatErrorCode.PARTICIPANT_NOT_FOUND,
            )

        # Both ids may name the same user in different spellings
        if current_entry.id == participant_entry.id:
            return ServiceResult.failure(
                "Cannot create conversation with yourself",
                error_code=ChatErrorCode.SELF_CONVERSATION,
            )

        conversation_id = build_conversation_id(current_entry.id, participant_entry.id)

        try:
            existing = Conversation.objects.filter(pk=conversation_id).first()
            if existing is not None:
                cls.get_logger().debug(
                    f"Found existing conversation {conversation_id}"
                )
                return ServiceResult.success(
                    ConversationResult(conversation=existing, created=False)
                )

            if not is_pairing_allowed(current_entry.role, participant_entry.role):
                cls.get_logger().warning(
                    f"Rejected pairing {current_entry.role} -> "
                    f"{participant_entry.role} for users "
                    f"{current_entry.id} and {participant_entry.id}"
                )
                return ServiceResult.failure(
                    "Chat is only allowed between brands and influencers/UGC creators",
                    error_code=ChatErrorCode.INVALID_PAIRING,
                )

            conversation, created = cls._create(
                conversation_id, current_entry, participant_entry
            )
        except DatabaseError as e:
            return cls.handle_exception(e, f"Creating conversation {conversation_id}")

        return ServiceResult.success(
            ConversationResult(conversation=conversation, created=created)
        )

    @classmethod
    def _create(cls, conversation_id, *entries) -> tuple[Conversation, bool]:
        lower_id, higher_id = sorted(entry.id for entry in entries)
        now = get_clock()()

        try:
            with cls.atomic():
                conversation = Conversation.objects.create(
                    id=conversation_id,
                    user_lower_id=lower_id,
                    user_higher_id=higher_id,
                    participant_details={
                        entry.id: {"name": entry.display_name, "role": entry.role}
                        for entry in entries
                    },
                    created_at=now,
                    updated_at=now,
                )
        except IntegrityError:
            # Lost a race with the other participant creating the same pair
            existing = Conversation.objects.filter(pk=conversation_id).first()
            if existing is None:
                raise
            cls.get_logger().info(
                f"Conversation {conversation_id} created concurrently; reusing it"
            )
            return existing, False

        cls.get_logger().info(
            f"Created conversation {conversation_id} "
            f"between users {lower_id} and {higher_id}"
        )
        return conversation, True

    @classmethod
    def list_conversations(cls, user_id) -> ServiceResult[list[Conversation]]:
        """
        List conversations the user participates in.

        Args:
            user_id: Requesting user's id

        Returns:
            ServiceResult with conversations ordered by updated_at descending
        """
        try:
            conversations = list(
                Conversation.objects.for_user(user_id).recent_first()
            )
        except DatabaseError as e:
            return cls.handle_exception(e, f"Listing conversations for {user_id}")

        return ServiceResult.success(conversations)

    @classmethod
    @require_conversation_participant()
    def get_conversation(
        cls,
        conversation_id: str,
        user_id,
        _conversation: Conversation | None = None,
    ) -> ServiceResult[Conversation]:
        """
        Fetch a conversation the user participates in.

        Error codes:
            CONVERSATION_NOT_FOUND: No conversation with this id
            NOT_PARTICIPANT: User is not one of the participants
        """
        return ServiceResult.success(_conversation)


# =============================================================================
# Messages
# =============================================================================


class MessageService(BaseService):
    """
    Service for message operations.

    Methods:
        send_message: Filter and store a message, updating the conversation cache
        list_messages: Page through history, newest window first
    """

    @classmethod
    def send_message(
        cls,
        conversation_id: str,
        sender_id,
        text: str | None,
    ) -> ServiceResult[SentMessage]:
        """
        Send a text message to a conversation.

        The trimmed text passes through the content filter; only the
        filtered text is stored. The message insert and the
        conversation's last-message cache update commit together.

        Args:
            conversation_id: Target conversation id
            sender_id: Sending user's id
            text: Message text as submitted

        Returns:
            ServiceResult with SentMessage(message, is_filtered)

        Error codes:
            EMPTY_MESSAGE: Text empty after trimming
            MESSAGE_TOO_LONG: Text exceeds the maximum length
            CONVERSATION_NOT_FOUND: No conversation with this id
            NOT_PARTICIPANT: Sender is not one of the participants
            INTERNAL_ERROR: Storage or directory failure
        """
        text = text.strip() if isinstance(text, str) else ""
        if not text:
            return ServiceResult.failure(
                "Message content is required",
                error_code=ChatErrorCode.EMPTY_MESSAGE,
            )
        if len(text) > MESSAGE_CONFIG.MAX_CONTENT_LENGTH:
            return ServiceResult.failure(
                f"Message cannot exceed {MESSAGE_CONFIG.MAX_CONTENT_LENGTH} characters",
                error_code=ChatErrorCode.MESSAGE_TOO_LONG,
            )

        access = ChatAuthorizationService.get_participant_conversation(
            conversation_id, sender_id
        )
        if not access.success:
            return access
        conversation = access.data

        try:
            sender = get_user_directory().lookup(str(sender_id))
        except ExternalServiceError as e:
            return cls.handle_exception(e, f"Resolving sender {sender_id}")
        sender_name = sender.display_name if sender else str(sender_id)

        filtered = filter_message(text)
        timestamp = get_clock()()

        try:
            with cls.atomic():
                message = Message.objects.create(
                    id=generate_message_id(timestamp),
                    conversation=conversation,
                    sender_id=sender_id,
                    sender_name=sender_name,
                    content=filtered.text,
                    timestamp=timestamp,
                    is_filtered=filtered.is_filtered,
                )
                Conversation.objects.filter(pk=conversation.pk).update(
                    last_message=message.content,
                    last_message_time=message.timestamp,
                    last_message_sender_id=sender_id,
                    updated_at=message.timestamp,
                )
        except DatabaseError as e:
            return cls.handle_exception(
                e, f"Storing message in conversation {conversation_id}"
            )

        cls.get_logger().debug(
            f"User {sender_id} sent message {message.id} to conversation "
            f"{conversation_id} (length={len(text)}, filtered={filtered.is_filtered})"
        )

        return ServiceResult.success(
            SentMessage(message=message, is_filtered=filtered.is_filtered)
        )

    @classmethod
    @require_conversation_participant(user_param="requester_id")
    def list_messages(
        cls,
        conversation_id: str,
        requester_id,
        page: int = 1,
        limit: int | None = None,
        _conversation: Conversation | None = None,
    ) -> ServiceResult[MessagePage]:
        """
        Return one page of a conversation's messages.

        Page 1 holds the most recent `limit` messages; each page is
        returned in ascending timestamp order.

        Args:
            conversation_id: Conversation id
            requester_id: Requesting user's id
            page: 1-based page number
            limit: Page size (defaults to CHAT_MESSAGES_DEFAULT_LIMIT)

        Returns:
            ServiceResult with MessagePage

        Error codes:
            CONVERSATION_NOT_FOUND: No conversation with this id
            NOT_PARTICIPANT: Requester is not one of the participants
            VALIDATION_ERROR: page or limit out of range
        """
        default_limit = getattr(
            settings, "CHAT_MESSAGES_DEFAULT_LIMIT", MESSAGE_CONFIG.DEFAULT_PAGE_SIZE
        )
        max_limit = getattr(
            settings, "CHAT_MESSAGES_MAX_LIMIT", MESSAGE_CONFIG.MAX_PAGE_SIZE
        )
        if limit is None:
            limit = default_limit

        errors = {}
        if not isinstance(page, int) or page < 1:
            errors["page"] = ["Must be a positive integer."]
        if not isinstance(limit, int) or not 1 <= limit <= max_limit:
            errors["limit"] = [f"Must be between 1 and {max_limit}."]
        if errors:
            return ServiceResult.failure(
                "Invalid paging parameters",
                error_code=ChatErrorCode.VALIDATION_ERROR,
                errors=errors,
            )

        offset = (page - 1) * limit
        try:
            window = list(
                Message.objects.for_conversation(_conversation)
                .newest_first()[offset : offset + limit + 1]
            )
        except DatabaseError as e:
            return cls.handle_exception(
                e, f"Listing messages for conversation {conversation_id}"
            )

        has_more = len(window) > limit
        messages = window[:limit]
        messages.reverse()

        return ServiceResult.success(
            MessagePage(
                messages=messages,
                conversation=_conversation,
                page=page,
                limit=limit,
                has_more=has_more,
            )
        )
