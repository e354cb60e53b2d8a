"""
Contact-information filter for chat messages.

Marketplace participants must not move negotiations off-platform, so
every message is redacted before it is stored. The default redactor
masks, in order:

1. Email addresses
2. Phone-number-like digit runs
3. Messaging-app references (WhatsApp, Telegram and their short links)
4. @handle tokens

Each match is replaced with the mask token. The phone pattern also
masks ordinary numbers such as prices or dates.

Usage:
    from chat.content_filter import filter_message

    result = filter_message("Call me on 555-123-4567")
    result.text         # "Call me on *****"
    result.is_filtered  # True

The redactor can be replaced through the CHAT_TEXT_REDACTOR setting
(dotted path to a class implementing chat.protocols.TextRedactor).
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, NamedTuple

from django.conf import settings
from django.utils.module_loading import import_string

from chat.constants import FILTER_CONFIG
from chat.protocols import TextRedactor

if TYPE_CHECKING:
    from re import Pattern

DEFAULT_REDACTOR = "chat.content_filter.ContactInfoRedactor"


class FilterResult(NamedTuple):
    """Redacted text and whether redaction changed it."""

    text: str
    is_filtered: bool


class ContactInfoRedactor:
    """
    Masks contact information in free text.

    Patterns are applied sequentially, each over the output of the
    previous one. A later pass can expose a match an earlier one missed
    (masked digits restore the word boundary after an email), so the
    sequence repeats until the text stops changing. Every change removes
    letters, digits or "@", which bounds the number of rounds.
    """

    EMAIL_PATTERN: Pattern[str] = re.compile(
        r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Z|a-z]{2,}\b"
    )
    PHONE_PATTERN: Pattern[str] = re.compile(
        r"(\+?\d{1,4}[-.\s]?)?\(?\d{1,4}\)?[-.\s]?\d{1,4}[-.\s]?\d{1,9}"
    )
    MESSAGING_APP_PATTERN: Pattern[str] = re.compile(
        r"whatsapp|wa\.me|t\.me|telegram", re.IGNORECASE
    )
    HANDLE_PATTERN: Pattern[str] = re.compile(r"@[a-zA-Z0-9._]+")

    PATTERNS: tuple[Pattern[str], ...] = (
        EMAIL_PATTERN,
        PHONE_PATTERN,
        MESSAGING_APP_PATTERN,
        HANDLE_PATTERN,
    )

    def __init__(self, mask: str = FILTER_CONFIG.MASK_TOKEN):
        self.mask = mask

    def redact(self, text: str) -> str:
        for _ in range(len(text) + 1):
            redacted = self._redact_once(text)
            if redacted == text:
                break
            text = redacted
        return text

    def _redact_once(self, text: str) -> str:
        for pattern in self.PATTERNS:
            text = pattern.sub(self.mask, text)
        return text


def get_redactor() -> TextRedactor:
    """
    Instantiate the redactor configured by CHAT_TEXT_REDACTOR.

    Returns:
        TextRedactor instance (ContactInfoRedactor by default)
    """
    path = getattr(settings, "CHAT_TEXT_REDACTOR", DEFAULT_REDACTOR)
    return import_string(path)()


def filter_message(text: str, redactor: TextRedactor | None = None) -> FilterResult:
    """
    Redact contact information from a message.

    Args:
        text: Message text (callers trim it first)
        redactor: Redactor to use; the configured one when omitted

    Returns:
        FilterResult with the redacted text and is_filtered flag

    Example:
        filter_message("reach me at a@b.com")
        # FilterResult(text='reach me at *****', is_filtered=True)
    """
    redactor = redactor or get_redactor()
    redacted = redactor.redact(text)
    return FilterResult(text=redacted, is_filtered=redacted != text)
