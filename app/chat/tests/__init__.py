"""
Tests for the chat app.

Modules:
- test_content_filter.py: Contact-information redaction
- test_authorization.py: Pairing rule, conversation ids, membership checks
- test_models.py: Conversation/Message models and querysets
- test_services.py: ConversationService and MessageService
- test_views.py: REST endpoints
"""
