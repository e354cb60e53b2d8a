"""
Authentication models.

This module defines the user model shared by the marketplace apps:
- UserRole: Closed set of marketplace roles
- User: Custom user model with email-based authentication and a role

Related files:
    - managers.py: Custom user manager for email-based creation
    - services.py: UserDirectoryService read-only lookups used by chat

Security:
    - User passwords hashed with Django's PBKDF2
    - Primary keys are non-guessable UUIDs
"""

from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.db import models
from django.utils import timezone

from core.model_mixins import UUIDPrimaryKeyMixin
from authentication.managers import UserManager


class UserRole(models.TextChoices):
    """
    Marketplace roles.

    Only brand, influencer and ugc_creator take part in chat pairings;
    the remaining roles exist for platform operation.
    """

    BRAND = "brand", "Brand"
    INFLUENCER = "influencer", "Influencer"
    UGC_CREATOR = "ugc_creator", "UGC Creator"
    ADMIN = "admin", "Admin"
    SUPPORT = "support", "Support"
    CONTENT_CREATOR = "content_creator", "Content Creator"


class User(UUIDPrimaryKeyMixin, AbstractBaseUser, PermissionsMixin):
    """
    Custom User model using email as the login identifier.

    Fields:
        id: UUID primary key; its string form identifies the user in chat
        email: Login identifier, unique
        display_name: Public name shown to chat counterparts
        role: Marketplace role (UserRole)
        is_active: Whether the user account is active
        is_staff: Whether the user can access staff tooling
        date_joined: When the user account was created

    Usage:
        brand = User.objects.create_user(
            email='team@brand.example',
            password='securepassword',
            display_name='Acme Brand',
            role=UserRole.BRAND,
        )
    """

    email = models.EmailField(
        unique=True,
        db_index=True,
        max_length=254,
        help_text="User's email address (login identifier)",
    )
    display_name = models.CharField(
        max_length=150,
        blank=True,
        help_text="Public name shown to chat counterparts",
    )
    role = models.CharField(
        max_length=20,
        choices=UserRole.choices,
        default=UserRole.CONTENT_CREATOR,
        db_index=True,
        help_text="Marketplace role",
    )

    # Account status flags
    is_active = models.BooleanField(
        default=True,
        help_text="Whether this user account is active. Deselect instead of deleting.",
    )
    is_staff = models.BooleanField(
        default=False,
        help_text="Whether the user can access the admin site.",
    )

    date_joined = models.DateTimeField(
        default=timezone.now,
        help_text="When the user account was created",
    )

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = []

    objects = UserManager()

    class Meta:
        verbose_name = "user"
        verbose_name_plural = "users"
        ordering = ["-date_joined"]

    def __str__(self):
        """Return the user's email as string representation."""
        return self.email

    def get_full_name(self):
        """
        Return the name shown to other users.

        Returns:
            str: display_name, or email if no display name is set.
        """
        return self.display_name or self.email

    def get_short_name(self):
        """Return display_name or the email local part."""
        return self.display_name or self.email.split("@")[0]
