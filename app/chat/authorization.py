"""
Service-level authorization for chat operations.

This module provides centralized authorization checks for chat features:
the marketplace pairing rule, conversation id derivation and
conversation membership.

Key Components:
    is_pairing_allowed: Pure pairing rule over two roles
    build_conversation_id: Order-independent id for a pair of users
    ChatAuthorizationService: Stateless service class with membership checks
    require_conversation_participant: Decorator for conversation-level access

Error Codes:
    CONVERSATION_NOT_FOUND: No conversation with the given id
    NOT_PARTICIPANT: User is not one of the two participants
    VALIDATION_ERROR: Missing required parameters (user or ID)

Usage:
    # Direct method call
    if ChatAuthorizationService.is_conversation_participant(user_id, conversation):
        # proceed with operation

    # Decorator usage
    class ConversationService(BaseService):
        @classmethod
        @require_conversation_participant()
        def get_conversation(cls, conversation_id, user_id, _conversation=None):
            # _conversation is injected by decorator
            return ServiceResult.success(_conversation)
"""

from __future__ import annotations

import inspect
from functools import wraps
from typing import TYPE_CHECKING, Callable, TypeVar

from django.db import DatabaseError

from authentication.models import UserRole
from chat.constants import CONVERSATION_CONFIG, ChatErrorCode
from core.services import BaseService, ServiceResult

if TYPE_CHECKING:
    from chat.models import Conversation


T = TypeVar("T")

# Brands talk to creators; creators never talk to each other
BRAND_COUNTERPART_ROLES = frozenset({UserRole.INFLUENCER, UserRole.UGC_CREATOR})


def is_pairing_allowed(role_a: str, role_b: str) -> bool:
    """
    Check whether two roles may share a conversation.

    Allowed iff one role is brand and the other is influencer or
    ugc_creator, in either order. Values outside UserRole are rejected.

    Example:
        is_pairing_allowed("brand", "influencer")  # True
        is_pairing_allowed("influencer", "ugc_creator")  # False
    """
    if role_a not in UserRole.values or role_b not in UserRole.values:
        return False
    if role_a == UserRole.BRAND:
        return role_b in BRAND_COUNTERPART_ROLES
    if role_b == UserRole.BRAND:
        return role_a in BRAND_COUNTERPART_ROLES
    return False


def build_conversation_id(user_a, user_b) -> str:
    """
    Derive the conversation id for a pair of users.

    The two ids (string form) are sorted lexicographically and joined,
    so the result does not depend on argument order.

    Example:
        build_conversation_id("b-id", "a-id")  # "a-id_b-id"
    """
    lower, higher = sorted((str(user_a), str(user_b)))
    return f"{lower}{CONVERSATION_CONFIG.ID_SEPARATOR}{higher}"


class ChatAuthorizationService(BaseService):
    """
    Stateless service providing authorization checks for chat operations.

    All methods are classmethods and can be called directly without instantiation.
    """

    @classmethod
    def is_conversation_participant(
        cls,
        user_id,
        conversation: "Conversation",
    ) -> bool:
        """
        Check if user is one of the conversation's two participants.

        Args:
            user_id: User id (UUID or string form)
            conversation: Conversation instance

        Returns:
            True if user is a participant, False otherwise
        """
        if user_id is None:
            return False
        return str(user_id) in conversation.participant_ids

    @classmethod
    def get_participant_conversation(
        cls,
        conversation_id: str,
        user_id,
    ) -> ServiceResult["Conversation"]:
        """
        Load a conversation the user participates in.

        Args:
            conversation_id: Conversation id
            user_id: Requesting user's id

        Returns:
            ServiceResult with the Conversation, or a failure with
            CONVERSATION_NOT_FOUND, NOT_PARTICIPANT or INTERNAL_ERROR
        """
        from chat.models import Conversation

        try:
            conversation = Conversation.objects.filter(pk=conversation_id).first()
        except DatabaseError as e:
            return cls.handle_exception(e, f"Loading conversation {conversation_id}")

        if conversation is None:
            return ServiceResult.failure(
                "Conversation not found",
                error_code=ChatErrorCode.CONVERSATION_NOT_FOUND,
            )

        if not cls.is_conversation_participant(user_id, conversation):
            cls.get_logger().warning(
                f"User {user_id} denied access to conversation {conversation_id}"
            )
            return ServiceResult.failure(
                "You are not a participant in this conversation",
                error_code=ChatErrorCode.NOT_PARTICIPANT,
            )

        return ServiceResult.success(conversation)


def require_conversation_participant(
    conversation_id_param: str = "conversation_id",
    user_param: str = "user_id",
) -> Callable:
    """
    Decorator that requires user to be a conversation participant.

    Extracts user and conversation_id from the call arguments, loads the
    conversation and checks membership before allowing the method to
    execute. On success, injects the conversation as _conversation
    kwarg to avoid a redundant query.

    Args:
        conversation_id_param: Name of the kwarg containing conversation ID
        user_param: Name of the kwarg containing the user id

    Returns:
        ServiceResult.failure with CONVERSATION_NOT_FOUND or NOT_PARTICIPANT
        if the check fails, VALIDATION_ERROR if required params are missing

    Example:
        class MessageService(BaseService):
            @classmethod
            @require_conversation_participant(user_param="requester_id")
            def list_messages(cls, conversation_id, requester_id, _conversation=None):
                ...
    """

    def decorator(
        func: Callable[..., ServiceResult[T]],
    ) -> Callable[..., ServiceResult[T]]:
        signature = inspect.signature(func)

        @wraps(func)
        def wrapper(*args, **kwargs) -> ServiceResult[T]:
            arguments = signature.bind_partial(*args, **kwargs).arguments
            user_id = arguments.get(user_param)
            conversation_id = arguments.get(conversation_id_param)

            if user_id is None or not conversation_id:
                return ServiceResult.failure(
                    "Missing required parameters",
                    error_code=ChatErrorCode.VALIDATION_ERROR,
                )

            result = ChatAuthorizationService.get_participant_conversation(
                conversation_id, user_id
            )
            if not result.success:
                return result

            kwargs["_conversation"] = result.data
            return func(*args, **kwargs)

        return wrapper

    return decorator
