"""
Tests for authentication models.

Covers:
- UserRole: the closed set of marketplace roles
- User: UUID primary key, display name fallbacks
"""

import uuid

from authentication.models import UserRole
from authentication.tests.factories import UserFactory


class TestUserRole:
    """Tests for the UserRole choices."""

    def test_contains_every_marketplace_role(self):
        assert set(UserRole.values) == {
            "brand",
            "influencer",
            "ugc_creator",
            "admin",
            "support",
            "content_creator",
        }


class TestUser:
    """Tests for the User model."""

    def test_primary_key_is_uuid(self, db):
        user = UserFactory()

        assert isinstance(user.pk, uuid.UUID)

    def test_str_returns_email(self, db):
        user = UserFactory(email="str@example.com")

        assert str(user) == "str@example.com"

    def test_full_name_prefers_display_name(self, db):
        user = UserFactory(email="named@example.com", display_name="Jane Creator")

        assert user.get_full_name() == "Jane Creator"

    def test_full_name_falls_back_to_email(self, db):
        user = UserFactory(email="anon@example.com", display_name="")

        assert user.get_full_name() == "anon@example.com"

    def test_short_name_falls_back_to_email_local_part(self, db):
        user = UserFactory(email="anon@example.com", display_name="")

        assert user.get_short_name() == "anon"
