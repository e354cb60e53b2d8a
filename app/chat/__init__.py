"""
Chat app for brand/creator messaging.

This app handles:
- Conversations between a brand and an influencer or UGC creator
- Message sending and paged history
- Masking of contact information before messages are stored

Related apps:
    - authentication: User model and the user directory

Usage:
    from chat.services import ConversationService, MessageService

    # Open a conversation
    result = ConversationService.get_or_create_conversation(
        current_user_id=brand.id,
        participant_id=creator.id,
    )

    # Send message
    result = MessageService.send_message(
        conversation_id=result.data.conversation.id,
        sender_id=brand.id,
        text="Hello!",
    )
"""
