"""
Factory Boy factories for chat models.

Provides realistic test data generation for:
- Conversation: Brand/influencer conversations in canonical participant order
- Message: Stored (already filtered) messages

Usage:
    from chat.tests.factories import ConversationFactory, MessageFactory

    # Conversation between a new brand and a new influencer
    conversation = ConversationFactory()

    # Conversation between specific users
    conversation = ConversationFactory(first=brand, second=creator)

    # Message in a conversation
    message = MessageFactory(conversation=conversation, sender=brand)
"""

import factory
from django.utils import timezone

from authentication.tests.factories import BrandFactory, InfluencerFactory
from chat.authorization import build_conversation_id
from chat.models import Conversation, Message, generate_message_id


def _ordered(obj):
    return sorted((obj.first, obj.second), key=lambda user: str(user.pk))


class ConversationFactory(factory.django.DjangoModelFactory):
    """
    Factory for Conversation model.

    first/second are the two participants in any order; the factory
    derives the id, canonical user_lower/user_higher and the
    participant snapshot from them.

    Examples:
        # Default brand + influencer pair
        conversation = ConversationFactory()

        # Specific pair
        conversation = ConversationFactory(first=brand, second=ugc_creator)
    """

    class Meta:
        model = Conversation
        exclude = ("first", "second")

    first = factory.SubFactory(BrandFactory)
    second = factory.SubFactory(InfluencerFactory)

    id = factory.LazyAttribute(
        lambda o: build_conversation_id(o.first.pk, o.second.pk)
    )
    user_lower = factory.LazyAttribute(lambda o: _ordered(o)[0])
    user_higher = factory.LazyAttribute(lambda o: _ordered(o)[1])
    participant_details = factory.LazyAttribute(
        lambda o: {
            str(user.pk): {"name": user.get_full_name(), "role": user.role}
            for user in (o.first, o.second)
        }
    )


class MessageFactory(factory.django.DjangoModelFactory):
    """
    Factory for Message model.

    Sender defaults to the conversation's first canonical participant.

    Examples:
        message = MessageFactory(conversation=conversation, content="Hi")

        # Message at a specific time
        message = MessageFactory(conversation=conversation, timestamp=when)
    """

    class Meta:
        model = Message

    conversation = factory.SubFactory(ConversationFactory)
    sender = factory.LazyAttribute(lambda o: o.conversation.user_lower)
    sender_name = factory.LazyAttribute(lambda o: o.sender.get_full_name())
    content = factory.Faker("sentence", nb_words=6)
    timestamp = factory.LazyFunction(timezone.now)
    is_filtered = False
    id = factory.LazyAttribute(lambda o: generate_message_id(o.timestamp))
