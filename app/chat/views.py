"""
ViewSets for chat API.

This module provides REST API endpoints for the chat system:
- ConversationViewSet: Open, list and fetch conversations
- MessageViewSet: Send and page through messages (nested under conversation)

URL Structure:
    /api/v1/chat/conversations/                  GET, POST
    /api/v1/chat/conversations/{id}/             GET
    /api/v1/chat/conversations/{id}/messages/    GET, POST

Design Decisions:
    - Views handle HTTP concerns only; all rules live in chat.services
    - Service error codes map to HTTP statuses through ERROR_STATUS
    - Error body: {"error": <message>, "error_code": <code>}
"""

from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import (
    OpenApiParameter,
    OpenApiResponse,
    extend_schema,
    extend_schema_view,
)
from rest_framework import status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.services import ServiceResult
from chat.constants import ERROR_STATUS, ChatErrorCode
from chat.serializers import (
    ConversationCreateResponseSerializer,
    ConversationCreateSerializer,
    ConversationDetailResponseSerializer,
    ConversationListResponseSerializer,
    MessageCreateSerializer,
    MessageListQuerySerializer,
    MessagePageSerializer,
    SentMessageSerializer,
)
from chat.services import ConversationService, MessageService


def error_response(result: ServiceResult) -> Response:
    """Render a failed ServiceResult with the status its error code maps to."""
    return Response(
        result.to_response(),
        status=ERROR_STATUS.get(
            result.error_code, status.HTTP_500_INTERNAL_SERVER_ERROR
        ),
    )


@extend_schema_view(
    list=extend_schema(
        operation_id="list_conversations",
        summary="List conversations",
        description="Conversations the current user participates in, most recently active first.",
        responses={200: ConversationListResponseSerializer},
        tags=["Chat - Conversations"],
    ),
    create=extend_schema(
        operation_id="create_conversation",
        summary="Open conversation",
        description=(
            "Return the conversation with the given participant, creating it if "
            "needed. Only brands and influencers/UGC creators may be paired."
        ),
        request=ConversationCreateSerializer,
        responses={
            200: OpenApiResponse(
                response=ConversationCreateResponseSerializer,
                description="Existing conversation returned",
            ),
            201: OpenApiResponse(
                response=ConversationCreateResponseSerializer,
                description="Conversation created",
            ),
            400: OpenApiResponse(description="Missing participant or self-conversation"),
            403: OpenApiResponse(description="Roles may not be paired"),
            404: OpenApiResponse(description="Participant not found"),
        },
        tags=["Chat - Conversations"],
    ),
    retrieve=extend_schema(
        operation_id="get_conversation",
        summary="Get conversation",
        responses={
            200: ConversationDetailResponseSerializer,
            403: OpenApiResponse(description="Not a participant in this conversation"),
            404: OpenApiResponse(description="Conversation not found"),
        },
        tags=["Chat - Conversations"],
    ),
)
class ConversationViewSet(viewsets.ViewSet):
    """
    ViewSet for conversation operations.

    list:
        Get all conversations for the current user.

    create:
        Get or create the conversation with another user.
        Returns 200 for an existing conversation, 201 when created.

    retrieve:
        Get conversation details. Participants only.
    """

    permission_classes = [IsAuthenticated]
    lookup_value_regex = "[^/]+"

    def list(self, request):
        result = ConversationService.list_conversations(request.user.id)
        if not result.success:
            return error_response(result)

        serializer = ConversationListResponseSerializer({"conversations": result.data})
        return Response(serializer.data)

    def create(self, request):
        """Open a conversation with another user."""
        serializer = ConversationCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = ConversationService.get_or_create_conversation(
            current_user_id=request.user.id,
            participant_id=serializer.validated_data.get("participant_id"),
        )
        if not result.success:
            return error_response(result)

        output_serializer = ConversationCreateResponseSerializer(result.data)
        return Response(
            output_serializer.data,
            status=status.HTTP_201_CREATED if result.data.created else status.HTTP_200_OK,
        )

    def retrieve(self, request, pk=None):
        result = ConversationService.get_conversation(
            conversation_id=pk,
            user_id=request.user.id,
        )
        if not result.success:
            return error_response(result)

        serializer = ConversationDetailResponseSerializer({"conversation": result.data})
        return Response(serializer.data)


@extend_schema_view(
    list=extend_schema(
        operation_id="list_messages",
        summary="List messages",
        description=(
            "Page through a conversation's messages. Page 1 holds the most recent "
            "messages; each page is in ascending timestamp order."
        ),
        parameters=[
            OpenApiParameter("page", OpenApiTypes.INT, description="1-based page number"),
            OpenApiParameter("limit", OpenApiTypes.INT, description="Page size (1-100)"),
        ],
        responses={
            200: MessagePageSerializer,
            400: OpenApiResponse(description="Invalid paging parameters"),
            403: OpenApiResponse(description="Not a participant in this conversation"),
            404: OpenApiResponse(description="Conversation not found"),
        },
        tags=["Chat - Messages"],
    ),
    create=extend_schema(
        operation_id="send_message",
        summary="Send message",
        description=(
            "Send a message. Contact information (emails, phone numbers, messaging "
            "apps, @handles) is masked before the message is stored."
        ),
        request=MessageCreateSerializer,
        responses={
            201: SentMessageSerializer,
            400: OpenApiResponse(description="Empty or overly long message"),
            403: OpenApiResponse(description="Not a participant in this conversation"),
            404: OpenApiResponse(description="Conversation not found"),
        },
        tags=["Chat - Messages"],
    ),
)
class MessageViewSet(viewsets.ViewSet):
    """
    ViewSet for message operations within a conversation.

    list:
        Get a page of messages, newest window first, oldest-first within the page.

    create:
        Send a message to the conversation.
    """

    permission_classes = [IsAuthenticated]

    def list(self, request, conversation_pk=None):
        query = MessageListQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return error_response(
                ServiceResult.failure(
                    "Invalid paging parameters",
                    error_code=ChatErrorCode.VALIDATION_ERROR,
                    errors=query.errors,
                )
            )

        result = MessageService.list_messages(
            conversation_id=conversation_pk,
            requester_id=request.user.id,
            page=query.validated_data["page"],
            limit=query.validated_data.get("limit"),
        )
        if not result.success:
            return error_response(result)

        return Response(MessagePageSerializer(result.data).data)

    def create(self, request, conversation_pk=None):
        """Send a message."""
        serializer = MessageCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = MessageService.send_message(
            conversation_id=conversation_pk,
            sender_id=request.user.id,
            text=serializer.validated_data.get("message"),
        )
        if not result.success:
            return error_response(result)

        return Response(
            SentMessageSerializer(result.data).data,
            status=status.HTTP_201_CREATED,
        )
