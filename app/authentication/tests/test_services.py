"""
Tests for UserDirectoryService.

The directory is the chat app's only view of users. These tests pin down
the difference between "not found" (None) and "lookup failed" (raises).

Test Organization:
    - One test class per outcome family
    - Tests use descriptive names following: test_<scenario>_<expected_outcome>
"""

import uuid
from unittest import mock

import pytest
from django.db import DatabaseError

from authentication.models import UserRole
from authentication.services import DirectoryEntry, UserDirectoryService
from core.exceptions import ExternalServiceError


class TestUserDirectoryLookupFound:
    """Tests for lookups that resolve to a user."""

    def test_returns_entry_with_display_name_and_role(self, brand_user):
        """
        Known active user resolves to a DirectoryEntry.

        Why it matters: Chat snapshots name and role from this entry
        when a conversation is created.
        """
        entry = UserDirectoryService.lookup(brand_user.id)

        assert entry == DirectoryEntry(
            id=str(brand_user.id),
            display_name="Acme Brand",
            role=UserRole.BRAND,
        )

    def test_accepts_string_ids(self, brand_user):
        entry = UserDirectoryService.lookup(str(brand_user.id))

        assert entry is not None
        assert entry.id == str(brand_user.id)

    def test_display_name_falls_back_to_email(self, influencer_user):
        entry = UserDirectoryService.lookup(influencer_user.id)

        assert entry.display_name == influencer_user.email


class TestUserDirectoryLookupNotFound:
    """Tests for lookups that resolve to None."""

    def test_unknown_id_returns_none(self, db):
        assert UserDirectoryService.lookup(uuid.uuid4()) is None

    @pytest.mark.parametrize("value", ["not-a-uuid", "", None, "123"])
    def test_malformed_id_returns_none(self, db, value):
        """
        Malformed ids never reach the database.

        Why it matters: Request bodies carry arbitrary strings; a bad id
        must read as "participant not found", not as a server error.
        """
        assert UserDirectoryService.lookup(value) is None

    def test_inactive_user_returns_none(self, inactive_user):
        """
        Deactivated accounts are invisible to chat.

        Why it matters: A deactivated user must not be able to open
        new conversations or be chatted with.
        """
        assert UserDirectoryService.lookup(inactive_user.id) is None


class TestUserDirectoryLookupFailure:
    """Tests for storage failures."""

    def test_database_error_raises_external_service_error(self, db):
        """
        Database failures surface as ExternalServiceError.

        Why it matters: Callers must not confuse an outage with an
        unknown user.
        """
        with mock.patch(
            "authentication.services.User.objects.filter",
            side_effect=DatabaseError("connection lost"),
        ):
            with pytest.raises(ExternalServiceError) as exc_info:
                UserDirectoryService.lookup(uuid.uuid4())

        assert exc_info.value.error_code == "DIRECTORY_UNAVAILABLE"
        assert isinstance(exc_info.value.__cause__, DatabaseError)
