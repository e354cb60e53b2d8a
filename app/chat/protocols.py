"""
Protocol definitions for the chat core's collaborators.

The chat services depend on these interfaces rather than on concrete
classes, so the redactor, user directory and clock can be swapped
through settings or replaced in tests.

Available Protocols:
    TextRedactor: Masks disallowed content in message text
    UserDirectory: Resolves user ids to display name and role
    Clock: Supplies the current time

Usage:
    from chat.protocols import UserDirectory

    class StaticDirectory:
        @classmethod
        def lookup(cls, user_id): ...

    # StaticDirectory is a valid UserDirectory
    # even without explicit inheritance (duck typing)
    directory: UserDirectory = StaticDirectory

Note:
    - Protocols are primarily for type checking
    - @runtime_checkable allows isinstance() checks
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from datetime import datetime

    from authentication.services import DirectoryEntry


@runtime_checkable
class TextRedactor(Protocol):
    """
    Protocol for message text redaction.

    Implementations must be total over strings (never raise) and
    idempotent: redacting already redacted text changes nothing.
    """

    def redact(self, text: str) -> str:
        """Return text with disallowed content replaced by a mask."""
        ...


@runtime_checkable
class UserDirectory(Protocol):
    """
    Protocol for user identity lookups.

    Implementations return None for unknown users and raise
    core.exceptions.ExternalServiceError for transient failures.
    """

    def lookup(self, user_id: str) -> DirectoryEntry | None:
        """Resolve a user id to its directory entry."""
        ...


@runtime_checkable
class Clock(Protocol):
    """Protocol for a zero-argument callable returning an aware datetime."""

    def __call__(self) -> datetime:
        ...
