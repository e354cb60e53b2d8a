"""
Test configuration and fixtures for authentication tests.

This module provides:
- User fixtures for each marketplace role
- Inactive user fixture for directory lookups

Usage:
    def test_example(brand_user):
        assert brand_user.role == "brand"
"""

import pytest

from authentication.models import User
from authentication.tests.factories import (
    BrandFactory,
    InfluencerFactory,
    UserFactory,
)


# =============================================================================
# User Fixtures
# =============================================================================


@pytest.fixture
def user(db):
    """Create a basic active user."""
    return UserFactory()


@pytest.fixture
def brand_user(db):
    """Create an active brand user with a display name."""
    return BrandFactory(display_name="Acme Brand")


@pytest.fixture
def influencer_user(db):
    """Create an active influencer without a display name."""
    return InfluencerFactory(display_name="")


@pytest.fixture
def inactive_user(db):
    """Create a deactivated user."""
    return UserFactory(is_active=False)


@pytest.fixture
def superuser(db):
    """Create a superuser with admin privileges."""
    return User.objects.create_superuser(
        email="admin@example.com",
        password="AdminPass123!",
    )
