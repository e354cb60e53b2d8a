"""
Constants and configuration for chat module features.

This module centralizes configuration values for:
- Message operations (content limits, identifiers, paging)
- Conversation identifiers
- Content filtering
- Error codes and their HTTP status mapping

Paging defaults can be overridden via Django settings
(CHAT_MESSAGES_DEFAULT_LIMIT, CHAT_MESSAGES_MAX_LIMIT).
Import example:
    from chat.constants import MESSAGE_CONFIG, ChatErrorCode
"""

from typing import Final

from rest_framework import status


# =============================================================================
# Message Configuration
# =============================================================================


class MESSAGE_CONFIG:
    """Configuration for message operations."""

    # Content limits (applied after trimming)
    MAX_CONTENT_LENGTH: Final[int] = 5000  # Characters

    # Identifier format: msg_<epoch ms>_<random base36>
    ID_PREFIX: Final[str] = "msg"
    ID_RANDOM_LENGTH: Final[int] = 9

    # Paging
    DEFAULT_PAGE_SIZE: Final[int] = 50
    MAX_PAGE_SIZE: Final[int] = 100


# =============================================================================
# Conversation Configuration
# =============================================================================


class CONVERSATION_CONFIG:
    """Configuration for conversation identifiers."""

    ID_SEPARATOR: Final[str] = "_"
    # Two UUIDs plus separator
    ID_MAX_LENGTH: Final[int] = 73


# =============================================================================
# Content Filter Configuration
# =============================================================================


class FILTER_CONFIG:
    """Configuration for the contact-information filter."""

    MASK_TOKEN: Final[str] = "*****"


# =============================================================================
# Error Codes
# =============================================================================


class ChatErrorCode:
    """Machine-readable error codes returned by chat services."""

    VALIDATION_ERROR: Final[str] = "VALIDATION_ERROR"
    EMPTY_MESSAGE: Final[str] = "EMPTY_MESSAGE"
    MESSAGE_TOO_LONG: Final[str] = "MESSAGE_TOO_LONG"
    CONVERSATION_NOT_FOUND: Final[str] = "CONVERSATION_NOT_FOUND"
    PARTICIPANT_NOT_FOUND: Final[str] = "PARTICIPANT_NOT_FOUND"
    NOT_PARTICIPANT: Final[str] = "NOT_PARTICIPANT"
    INVALID_PAIRING: Final[str] = "INVALID_PAIRING"
    SELF_CONVERSATION: Final[str] = "SELF_CONVERSATION"
    INTERNAL_ERROR: Final[str] = "INTERNAL_ERROR"


ERROR_STATUS: Final[dict[str, int]] = {
    ChatErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ChatErrorCode.EMPTY_MESSAGE: status.HTTP_400_BAD_REQUEST,
    ChatErrorCode.MESSAGE_TOO_LONG: status.HTTP_400_BAD_REQUEST,
    ChatErrorCode.SELF_CONVERSATION: status.HTTP_400_BAD_REQUEST,
    ChatErrorCode.CONVERSATION_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ChatErrorCode.PARTICIPANT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ChatErrorCode.NOT_PARTICIPANT: status.HTTP_403_FORBIDDEN,
    ChatErrorCode.INVALID_PAIRING: status.HTTP_403_FORBIDDEN,
    ChatErrorCode.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}
