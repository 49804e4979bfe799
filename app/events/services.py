"""
Event service layer.

Services:
    EventFundingAggregator: Credits captured donations to an event's raised total
    EventService: Devotee-facing event listing

Concurrency:
    Two devotees can capture donations against the same event at the same
    moment, possibly on different application instances. The aggregator
    therefore never reads the current total into Python; it issues a single
    UPDATE ... SET raised_amount_paise = raised_amount_paise + %s, so the
    database serializes concurrent credits on the row and no update is lost.

Usage:
    from events.services import EventFundingAggregator

    aggregator = EventFundingAggregator()
    aggregator.add_raised(event_id=3, amount_paise=50000)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from django.contrib.auth import get_user_model
from django.db import DatabaseError
from django.db.models import F, Q
from django.utils import timezone

from core.exceptions import NotFoundError, StorageError, ValidationError
from core.services import BaseService, ServiceResult
from events.models import Event

if TYPE_CHECKING:
    from authentication.models import User


class EventFundingAggregator(BaseService):
    """
    The only writer of Event.raised_amount_paise.

    Amounts only ever increase the total. Crediting an event that was
    deleted or deactivated after the donation was opened is skipped and
    logged as an anomaly; the donation itself stays captured.
    """

    def add_raised(self, event_id: int, amount_paise: int) -> bool:
        """
        Atomically add amount_paise to the event's raised total.

        Returns:
            True if the event was credited, False if it was skipped

        Raises:
            ValidationError: If amount_paise is not a positive integer
            StorageError: If the UPDATE failed
        """
        if not isinstance(amount_paise, int) or amount_paise <= 0:
            raise ValidationError(
                "Raised amount must be a positive number of paise",
                error_code="INVALID_AMOUNT",
                details={"event_id": event_id, "amount_paise": amount_paise},
            )

        logger = self.get_logger()
        try:
            updated = Event.objects.filter(pk=event_id, is_active=True).update(
                raised_amount_paise=F("raised_amount_paise") + amount_paise,
                updated_at=timezone.now(),
            )
        except DatabaseError as e:
            logger.error(
                f"Database error crediting {amount_paise} paise to event {event_id}",
                extra={"event_id": event_id, "amount_paise": amount_paise},
                exc_info=True,
            )
            raise StorageError(
                "Could not update the event total. Please retry verification.",
                error_code="EVENT_NOT_CREDITED",
                details={"event_id": event_id},
            ) from e

        if not updated:
            logger.warning(
                f"Event {event_id} missing or inactive; skipped crediting {amount_paise} paise",
                extra={"event_id": event_id, "amount_paise": amount_paise, "anomaly": True},
            )
            return False

        logger.info(
            f"Credited {amount_paise} paise to event {event_id}",
            extra={"event_id": event_id, "amount_paise": amount_paise},
        )
        return True


@dataclass
class OrganizationEvents:
    """Events of one organization, as shown to devotees."""

    organization: User
    events: list[Event]


class EventService(BaseService):
    """Read-side queries over events."""

    @classmethod
    def get_active_organization(cls, organization_id: int) -> User:
        """
        Raises:
            NotFoundError: If no active organization has this id
        """
        organization = (
            get_user_model().objects.organizations().filter(pk=organization_id).first()
        )
        if organization is None:
            raise NotFoundError(
                "Organization not found.",
                error_code="ORGANIZATION_NOT_FOUND",
                details={"organization_id": organization_id},
            )
        return organization

    @classmethod
    def get_donatable_event(cls, event_id: int, organization_id: int) -> Event:
        """
        An active event owned by the given organization.

        Raises:
            NotFoundError: If the event is missing, inactive, or owned by another organization
        """
        event = Event.objects.filter(
            pk=event_id,
            organization_id=organization_id,
            is_active=True,
        ).first()
        if event is None:
            raise NotFoundError(
                "Event not found for this organization.",
                error_code="EVENT_NOT_FOUND",
                details={"event_id": event_id, "organization_id": organization_id},
            )
        return event

    @classmethod
    def list_organization_events(
        cls,
        organization_id: int,
        upcoming_only: bool = True,
    ) -> ServiceResult[OrganizationEvents]:
        """
        Active events of an active organization, soonest first.

        With upcoming_only, events that already ended are left out; an event
        without an end date counts as ended once its start date has passed.

        Error codes:
            ORGANIZATION_NOT_FOUND: Unknown or inactive organization
        """
        try:
            organization = cls.get_active_organization(organization_id)
        except NotFoundError as e:
            return ServiceResult.from_exception(e)

        events = Event.objects.filter(organization=organization, is_active=True)
        if upcoming_only:
            today = timezone.localdate()
            events = events.filter(
                Q(end_date__gte=today) | Q(end_date__isnull=True, start_date__gte=today)
            )

        return ServiceResult.success(
            OrganizationEvents(
                organization=organization,
                events=list(events.order_by("start_date", "id")),
            )
        )
