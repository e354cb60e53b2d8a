"""
Initial schema for the chat app.

Creates:
    - Conversation: keyed by the sorted participant pair, with canonical
      user_lower/user_higher ordering and the last-message cache
    - Message: append-only filtered messages
"""

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Conversation",
            fields=[
                (
                    "created_at",
                    models.DateTimeField(
                        db_index=True,
                        default=django.utils.timezone.now,
                        help_text="Timestamp when this record was created",
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        db_index=True,
                        default=django.utils.timezone.now,
                        help_text="Timestamp when this record was last modified",
                    ),
                ),
                (
                    "id",
                    models.CharField(
                        editable=False,
                        help_text="Sorted participant ids joined with an underscore",
                        max_length=73,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "participant_details",
                    models.JSONField(
                        default=dict,
                        help_text="Participant name/role snapshot captured at creation",
                    ),
                ),
                (
                    "last_message",
                    models.TextField(
                        blank=True,
                        help_text="Filtered text of the most recent message",
                        null=True,
                    ),
                ),
                (
                    "last_message_time",
                    models.DateTimeField(
                        blank=True,
                        help_text="Timestamp of the most recent message",
                        null=True,
                    ),
                ),
                (
                    "last_message_sender",
                    models.ForeignKey(
                        blank=True,
                        help_text="Sender of the most recent message",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "user_higher",
                    models.ForeignKey(
                        help_text="Participant with the lexicographically higher id",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "user_lower",
                    models.ForeignKey(
                        help_text="Participant with the lexicographically lower id",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "chat_conversation",
                "ordering": ["-updated_at", "id"],
                "indexes": [
                    models.Index(
                        fields=["user_lower", "-updated_at"],
                        name="chat_conv_lower_recent_idx",
                    ),
                    models.Index(
                        fields=["user_higher", "-updated_at"],
                        name="chat_conv_higher_recent_idx",
                    ),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(
                            ("user_lower_id__lt", models.F("user_higher_id"))
                        ),
                        name="chat_conversation_user_lower_less_than_higher",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Message",
            fields=[
                (
                    "id",
                    models.CharField(
                        editable=False,
                        help_text="Message identifier",
                        max_length=40,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "sender_name",
                    models.CharField(
                        help_text="Sender display name captured at send time",
                        max_length=254,
                    ),
                ),
                ("content", models.TextField(help_text="Filtered message text")),
                ("timestamp", models.DateTimeField(help_text="When the message was sent")),
                (
                    "is_filtered",
                    models.BooleanField(
                        default=False,
                        help_text="Whether contact information was masked",
                    ),
                ),
                (
                    "conversation",
                    models.ForeignKey(
                        help_text="Conversation this message belongs to",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="messages",
                        to="chat.conversation",
                    ),
                ),
                (
                    "sender",
                    models.ForeignKey(
                        blank=True,
                        help_text="User who sent this message",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="sent_messages",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "chat_message",
                "ordering": ["timestamp", "id"],
                "indexes": [
                    models.Index(
                        fields=["conversation", "timestamp", "id"],
                        name="chat_msg_conv_time_idx",
                    ),
                ],
            },
        ),
    ]
