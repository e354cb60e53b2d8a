"""
Helper functions for common infrastructure operations.

This module provides domain-agnostic utility functions for:
- Random identifier fragments (cryptographic)
- UUID validation

These utilities are pure infrastructure - they have no knowledge
of domain concepts like conversations, roles, or business logic.

Usage:
    from core.helpers import random_base36, validate_uuid

    suffix = random_base36(9)
    if validate_uuid(user_id):
        ...
"""

from __future__ import annotations

import secrets
import string
import uuid

BASE36_ALPHABET = string.digits + string.ascii_lowercase


def random_base36(length: int = 9) -> str:
    """
    Generate a cryptographically secure random base36 string.

    Args:
        length: Number of characters to generate

    Returns:
        String of lowercase letters and digits

    Example:
        random_base36(9)  # 'k3v9x0q2m'
    """
    return "".join(secrets.choice(BASE36_ALPHABET) for _ in range(length))


def validate_uuid(value: str) -> bool:
    """
    Check if string is a valid UUID.

    Args:
        value: String to validate

    Returns:
        True if valid UUID format

    Example:
        is_valid = validate_uuid("550e8400-e29b-41d4-a716-446655440000")  # True
    """
    try:
        uuid.UUID(str(value))
        return True
    except (ValueError, TypeError, AttributeError):
        return False
