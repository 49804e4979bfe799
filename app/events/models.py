"""
Event models.

This module defines:
- EventType: general / crowdfunding / charity
- Event: An activity owned by one organization

Money fields are integer paise. raised_amount_paise is written only by
events.services.EventFundingAggregator, with an atomic increment.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q

from core.helpers import format_minor_units
from core.models import BaseModel


class EventType(models.TextChoices):
    GENERAL = "general", "General"
    CROWDFUNDING = "crowdfunding", "Crowdfunding"
    CHARITY = "charity", "Charity"


# Event types that must declare a fundraising target
EVENT_TYPES_WITH_TARGET = (EventType.CROWDFUNDING, EventType.CHARITY)


class Event(BaseModel):
    """
    An activity owned by one organization.

    Fields:
        organization: Owning organization (role=admin user)
        event_type: general, crowdfunding or charity
        title, description, location: Display data
        start_date, end_date: Date range (end_date optional)
        target_amount_paise: Fundraising target (required for crowdfunding/charity)
        raised_amount_paise: Running total of captured donations
        is_active: Inactive events accept no donations and are not credited
    """

    organization = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="events",
    )
    event_type = models.CharField(
        max_length=20,
        choices=EventType.choices,
        default=EventType.GENERAL,
    )
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    start_date = models.DateField()
    end_date = models.DateField(null=True, blank=True)
    location = models.CharField(max_length=500, blank=True, default="")
    target_amount_paise = models.PositiveBigIntegerField(null=True, blank=True)
    raised_amount_paise = models.PositiveBigIntegerField(default=0, editable=False)
    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ["start_date", "id"]
        indexes = [
            models.Index(fields=["organization", "start_date"], name="event_org_start_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=~Q(event_type__in=EVENT_TYPES_WITH_TARGET)
                | Q(target_amount_paise__isnull=False, target_amount_paise__gt=0),
                name="event_target_required_for_fundraising",
            ),
            models.CheckConstraint(
                condition=Q(end_date__isnull=True) | Q(end_date__gte=models.F("start_date")),
                name="event_end_not_before_start",
            ),
        ]

    def __str__(self):
        return self.title

    def clean(self):
        errors = {}
        if self.event_type in EVENT_TYPES_WITH_TARGET and not self.target_amount_paise:
            errors["target_amount_paise"] = (
                "A target amount is required for crowdfunding and charity events."
            )
        if self.end_date and self.start_date and self.end_date < self.start_date:
            errors["end_date"] = "End date cannot be before start date."
        if errors:
            raise ValidationError(errors)

    @property
    def progress_percent(self) -> Decimal | None:
        """Raised amount as a percentage of the target, capped at 100."""
        if not self.target_amount_paise:
            return None
        percent = Decimal(self.raised_amount_paise * 100) / self.target_amount_paise
        return min(percent, Decimal(100)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

    @property
    def raised_amount(self) -> str:
        return format_minor_units(self.raised_amount_paise)

    @property
    def target_amount(self) -> str | None:
        if self.target_amount_paise is None:
            return None
        return format_minor_units(self.target_amount_paise)
