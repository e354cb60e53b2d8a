"""
Authentication services.

This module provides the read-only user directory consumed by other apps:
- DirectoryEntry: Snapshot of the fields chat needs about a user
- UserDirectoryService: Resolves a user id to a DirectoryEntry

Related files:
    - models.py: User, UserRole
    - chat/protocols.py: UserDirectory protocol this service satisfies

Note:
    "Not found" and "directory failed" are distinct outcomes. Unknown,
    malformed or inactive ids resolve to None; database failures raise
    ExternalServiceError so callers never mistake an outage for a
    missing user.
"""

from __future__ import annotations

from dataclasses import dataclass

from django.db import DatabaseError

from core.exceptions import ExternalServiceError
from core.helpers import validate_uuid
from core.services import BaseService
from authentication.models import User


@dataclass(frozen=True)
class DirectoryEntry:
    """
    Identity snapshot for a single user.

    Attributes:
        id: User id in string form
        display_name: Name shown to other users
        role: UserRole value
    """

    id: str
    display_name: str
    role: str


class UserDirectoryService(BaseService):
    """
    Read-only user lookups.

    Usage:
        entry = UserDirectoryService.lookup(user_id)
        if entry is None:
            ...  # unknown or inactive user
    """

    @classmethod
    def lookup(cls, user_id) -> DirectoryEntry | None:
        """
        Resolve a user id to its directory entry.

        Args:
            user_id: User id (UUID or its string form)

        Returns:
            DirectoryEntry, or None when the id is malformed, unknown,
            or belongs to an inactive account

        Raises:
            ExternalServiceError: If the user store cannot be queried
        """
        if user_id is None or not validate_uuid(user_id):
            return None

        try:
            user = (
                User.objects.filter(pk=user_id, is_active=True)
                .only("id", "email", "display_name", "role")
                .first()
            )
        except DatabaseError as e:
            cls.get_logger().error(
                f"User directory lookup failed for {user_id}", exc_info=e
            )
            raise ExternalServiceError(
                "User directory unavailable",
                error_code="DIRECTORY_UNAVAILABLE",
            ) from e

        if user is None:
            cls.get_logger().debug(f"No active user for id {user_id}")
            return None

        return DirectoryEntry(
            id=str(user.pk),
            display_name=user.get_full_name(),
            role=user.role,
        )
