"""
Chat application configuration.

This app provides brand/creator chat with:
- Two-party conversations restricted by marketplace role
- Contact-information filtering on every message
- A last-message cache maintained with each send
"""

from django.apps import AppConfig


class ChatConfig(AppConfig):
    """Configuration for the chat application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "chat"
    verbose_name = "Chat"
