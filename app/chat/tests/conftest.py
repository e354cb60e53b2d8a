"""
Test configuration and fixtures for chat tests.

This module provides:
- User fixtures for each side of a chat (brand, influencer, UGC creator)
- Conversation fixtures
- API client helpers for authenticated requests

Usage:
    def test_example(conversation, brand_client):
        response = brand_client.get(f'/api/v1/chat/conversations/{conversation.id}/')
        assert response.status_code == 200
"""

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from authentication.models import UserRole
from authentication.tests.factories import (
    BrandFactory,
    InfluencerFactory,
    UGCCreatorFactory,
    UserFactory,
)
from chat.tests.factories import ConversationFactory


# =============================================================================
# User Fixtures
# =============================================================================


@pytest.fixture
def brand_user(db):
    """Create a brand user."""
    return BrandFactory(display_name="Acme Brand")


@pytest.fixture
def influencer_user(db):
    """Create an influencer user."""
    return InfluencerFactory(display_name="Ivy Influencer")


@pytest.fixture
def ugc_user(db):
    """Create a UGC creator user."""
    return UGCCreatorFactory(display_name="Uma UGC")


@pytest.fixture
def other_brand_user(db):
    """Create a second brand user."""
    return BrandFactory(display_name="Other Brand")


@pytest.fixture
def support_user(db):
    """Create a platform support user (never pairable)."""
    return UserFactory(role=UserRole.SUPPORT)


# =============================================================================
# Conversation Fixtures
# =============================================================================


@pytest.fixture
def conversation(db, brand_user, influencer_user):
    """Conversation between brand_user and influencer_user."""
    return ConversationFactory(first=brand_user, second=influencer_user)


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
def api_client():
    """Unauthenticated API client."""
    return APIClient()


@pytest.fixture
def authenticated_client_factory(db):
    """
    Factory to create authenticated clients for any user.

    Usage:
        def test_example(authenticated_client_factory, some_user):
            client = authenticated_client_factory(some_user)
            response = client.get('/api/v1/chat/conversations/')
    """

    def _make_client(user):
        client = APIClient()
        token = AccessToken.for_user(user)
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
        return client

    return _make_client


@pytest.fixture
def brand_client(authenticated_client_factory, brand_user):
    """API client authenticated as the brand user."""
    return authenticated_client_factory(brand_user)


@pytest.fixture
def influencer_client(authenticated_client_factory, influencer_user):
    """API client authenticated as the influencer user."""
    return authenticated_client_factory(influencer_user)


@pytest.fixture
def other_brand_client(authenticated_client_factory, other_brand_user):
    """API client authenticated as the second brand user."""
    return authenticated_client_factory(other_brand_user)
