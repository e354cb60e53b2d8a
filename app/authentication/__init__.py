"""
Authentication application.

This app owns the marketplace user model and the read-only user
directory consumed by the chat app.

Key components:
    - User model: Custom email-based user with a marketplace role
    - UserRole: Closed set of marketplace roles
    - UserDirectoryService: Resolves user ids to display name and role

Usage:
    from authentication.models import User, UserRole
    from authentication.services import UserDirectoryService
"""
