"""
Abstract models shared by the platform apps.

Usage:
    from core.models import BaseModel

    class Event(BaseModel):
        title = models.CharField(max_length=255)
"""

from __future__ import annotations

from django.db import models


class BaseModel(models.Model):
    """
    Adds created_at / updated_at to a model and orders newest first.

    Devotees, favorites, events and donations all extend it. Organization
    accounts do not; they use date_joined from the auth user.
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
        return f"{self.__class__.__name__}(id={self.pk})"
