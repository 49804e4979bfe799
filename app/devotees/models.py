"""
Devotee models.

This module defines:
- Devotee: A donor identified by a unique mobile number
- DevoteeFavorite: An organization a devotee follows (bounded list)

Devotees are deliberately not Django auth users. They authenticate with
their own access tokens (see devotees.authentication) and never reach
the admin site or organization portal.
"""

from django.conf import settings
from django.db import models

from core.models import BaseModel


class Devotee(BaseModel):
    """
    Donor account.

    Fields:
        mobile: Unique mobile number (identity)
        name, email, city: Optional profile data
        is_active: Inactive devotees cannot authenticate
    """

    mobile = models.CharField(max_length=20, unique=True)
    name = models.CharField(max_length=255, blank=True, default="")
    email = models.EmailField(blank=True, default="")
    city = models.CharField(max_length=100, blank=True, default="")
    is_active = models.BooleanField(default=True)

    favorite_organizations = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        through="DevoteeFavorite",
        related_name="followers",
        blank=True,
    )

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return self.name or self.mobile

    @property
    def is_authenticated(self) -> bool:
        """Always True; lets DRF treat a devotee as request.user."""
        return True

    @property
    def is_anonymous(self) -> bool:
        return False


class DevoteeFavorite(BaseModel):
    """
    A favorite organization of a devotee.

    Donations are only accepted for organizations in this list.
    """

    devotee = models.ForeignKey(
        Devotee,
        on_delete=models.CASCADE,
        related_name="favorites",
    )
    organization = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="favorited_by",
    )
    display_order = models.PositiveSmallIntegerField(default=1)

    class Meta:
        ordering = ["display_order", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["devotee", "organization"],
                name="unique_devotee_favorite",
            ),
        ]

    def __str__(self):
        return f"{self.devotee} -> {self.organization} (#{self.display_order})"
