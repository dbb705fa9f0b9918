"""Abstract timestamped base shared by the company and chat models."""

from __future__ import annotations

from django.db import models


class BaseModel(models.Model):
    """
    Adds ``created_at`` and ``updated_at`` and orders newest first.

    Message overrides ``created_at`` because it assigns its own
    per-chat monotonic timestamp.
    """

    created_at = models.DateTimeField(
        auto_now_add=True,
        db_index=True,
        help_text="Timestamp when this record was created",
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="Timestamp when this record was last modified",
    )

    class Meta:
        abstract = True
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{type(self).__name__} #{self.pk}"
