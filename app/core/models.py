"""
Core base model providing common functionality for domain models.

This module contains the abstract base class inherited by domain models
that carry creation and modification timestamps.

Base Classes:
    BaseModel: Abstract model with timestamps (created_at, updated_at)

For mixins (UUIDPrimaryKeyMixin), see core.model_mixins.

Usage:
    from core.models import BaseModel

    class Conversation(BaseModel):
        last_message = models.TextField(null=True)

    # Timestamps default to now, but services may stamp them explicitly
    Conversation.objects.create(created_at=now, updated_at=now)

Note:
    - Always list mixins before BaseModel in inheritance
    - Timestamps are plain defaults rather than auto_now/auto_now_add so
      a service-supplied clock value is persisted as given
"""

from __future__ import annotations

from django.db import models
from django.utils import timezone


class BaseModel(models.Model):
    """
    Abstract base model providing common timestamp fields.

    Fields:
        created_at: Defaults to the current time when the object is created
        updated_at: Defaults to the current time; callers advance it
            explicitly when the record changes

    Note:
        This is an abstract model (Meta.abstract = True) so it doesn't
        create a database table. Fields are added to inheriting models.
    """

    created_at = models.DateTimeField(
        default=timezone.now,
        db_index=True,  # Index for efficient time-based queries
        help_text="Timestamp when this record was created",
    )
    updated_at = models.DateTimeField(
        default=timezone.now,
        db_index=True,
        help_text="Timestamp when this record was last modified",
    )

    class Meta:
        abstract = True
        ordering = ["-created_at"]

    def __str__(self) -> str:
        """Default string representation using primary key."""
        return f"{self.__class__.__name__}(id={self.pk})"
