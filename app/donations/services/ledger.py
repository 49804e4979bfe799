"""
Donation ledger.

The ledger is the only code that creates Donation rows or moves them
between states. It owns the guarantees that:

- exactly one donation exists per gateway order id
- a captured donation is recorded once and never re-captured
- captured and failed donations are terminal

State changes go through the django-fsm transitions on Donation.
capture() and mark_failed() expect a row fetched with
get_for_verification(lock=True) inside the caller's transaction, so
concurrent verifications of the same order are serialized on the row.

Usage:
    from donations.services import DonationLedger

    ledger = DonationLedger()
    with ledger.atomic():
        donation = ledger.get_for_verification("order_abc", devotee_id, lock=True)
        ledger.capture(donation, payment_id="pay_1", signature=sig)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from django.db import DatabaseError
from django.db.models import Count, Sum
from django_fsm import TransitionNotAllowed

from core.exceptions import NotFoundError, StorageError
from core.helpers import format_minor_units
from core.services import BaseService
from donations.exceptions import InvalidStateError
from donations.models import Donation
from donations.state_machines import DonationStatus

if TYPE_CHECKING:
    from donations.adapters import PaymentDetails


@dataclass
class DonationStats:
    """Captured donation totals for one devotee."""

    total_donations: int
    total_amount_paise: int

    @property
    def total_amount(self) -> str:
        return format_minor_units(self.total_amount_paise)


class DonationLedger(BaseService):
    """Persistence and state rules for donations."""

    def open(
        self,
        devotee_id: int,
        organization_id: int,
        amount_paise: int,
        gateway_order_id: str,
        event_id: int | None = None,
        currency: str = "INR",
    ) -> Donation:
        """
        Persist a PENDING donation for a freshly created gateway order.

        The caller has already checked the favorite, organization and
        event rules.

        Raises:
            StorageError: If the row could not be written
        """
        logger = self.get_logger()
        try:
            with self.atomic():
                donation = Donation.objects.create(
                    devotee_id=devotee_id,
                    organization_id=organization_id,
                    event_id=event_id,
                    amount_paise=amount_paise,
                    currency=currency,
                    gateway_order_id=gateway_order_id,
                )
        except DatabaseError as e:
            logger.error(
                f"Database error opening donation for order {gateway_order_id}",
                extra={"gateway_order_id": gateway_order_id, "devotee_id": devotee_id},
                exc_info=True,
            )
            raise StorageError(
                "Could not record the donation. Please try again.",
                error_code="DONATION_NOT_SAVED",
                details={"gateway_order_id": gateway_order_id},
            ) from e

        logger.info(
            f"Opened donation {donation.id} for order {gateway_order_id}",
            extra={
                "donation_id": donation.id,
                "devotee_id": devotee_id,
                "organization_id": organization_id,
                "event_id": event_id,
                "amount_paise": amount_paise,
            },
        )
        return donation

    def get_for_verification(
        self, gateway_order_id: str, devotee_id: int, lock: bool = False
    ) -> Donation:
        """
        Fetch the donation for a gateway order, scoped to the devotee.

        A devotee can never see or settle another devotee's order, even
        with a leaked order id; such lookups are simply not found.

        Args:
            lock: Take a row lock (SELECT ... FOR UPDATE). Only valid
                  inside a transaction.

        Raises:
            NotFoundError: If no donation matches the order and devotee
            StorageError: If the lookup or the lock failed
        """
        try:
            queryset = Donation.objects.filter(
                gateway_order_id=gateway_order_id, devotee_id=devotee_id
            )
            if lock:
                queryset = queryset.select_for_update()
            donation = queryset.first()
        except DatabaseError as e:
            self.get_logger().error(
                f"Database error loading donation for order {gateway_order_id}",
                extra={"gateway_order_id": gateway_order_id, "lock": lock},
                exc_info=True,
            )
            raise StorageError(
                "Could not load the donation. Please retry verification.",
                error_code="DONATION_NOT_LOADED",
                details={"gateway_order_id": gateway_order_id},
            ) from e
        if donation is None:
            raise NotFoundError(
                "Donation not found.",
                error_code="DONATION_NOT_FOUND",
                details={"gateway_order_id": gateway_order_id},
            )
        return donation

    def capture(
        self,
        donation: Donation,
        payment_id: str,
        signature: str,
        details: PaymentDetails | None = None,
    ) -> Donation:
        """
        Record a verified payment against a pending donation.

        Capturing an already captured donation is a no-op that returns
        the existing row.

        Raises:
            InvalidStateError: If the donation has failed
            StorageError: If the row could not be written
        """
        if donation.status == DonationStatus.CAPTURED:
            return donation
        if donation.status == DonationStatus.FAILED:
            raise InvalidStateError(
                f"Donation {donation.id} has failed and cannot be captured",
                details={"donation_id": donation.id, "status": donation.status},
            )

        try:
            donation.capture(
                payment_id=payment_id,
                signature=signature,
                utr=details.acquirer_reference if details else None,
                bank_transaction_id=details.bank_transaction_id if details else None,
                payment_method=details.method if details else None,
            )
        except TransitionNotAllowed as e:
            raise InvalidStateError(
                f"Donation {donation.id} cannot be captured from {donation.status}",
                details={"donation_id": donation.id, "status": donation.status},
            ) from e

        self._save(donation)
        self.get_logger().info(
            f"Captured donation {donation.id}",
            extra={
                "donation_id": donation.id,
                "gateway_order_id": donation.gateway_order_id,
                "gateway_payment_id": payment_id,
                "amount_paise": donation.amount_paise,
            },
        )
        return donation

    def mark_failed(self, donation: Donation, reason: str = "") -> Donation:
        """
        Move a pending donation to FAILED.

        Failing an already failed donation is a no-op.

        Raises:
            InvalidStateError: If the donation was captured
            StorageError: If the row could not be written
        """
        if donation.status == DonationStatus.FAILED:
            return donation
        if donation.status == DonationStatus.CAPTURED:
            raise InvalidStateError(
                f"Donation {donation.id} is captured and cannot be failed",
                details={"donation_id": donation.id, "status": donation.status},
            )

        try:
            donation.fail(reason=reason)
        except TransitionNotAllowed as e:
            raise InvalidStateError(
                f"Donation {donation.id} cannot be failed from {donation.status}",
                details={"donation_id": donation.id, "status": donation.status},
            ) from e

        self._save(donation)
        self.get_logger().warning(
            f"Donation {donation.id} marked failed: {reason}",
            extra={"donation_id": donation.id, "gateway_order_id": donation.gateway_order_id},
        )
        return donation

    def list_for_devotee(self, devotee_id: int, offset: int, limit: int) -> tuple[list[Donation], int]:
        """A page of the devotee's donations, newest first, with the total count."""
        queryset = Donation.objects.filter(devotee_id=devotee_id).select_related(
            "organization", "event"
        )
        total = queryset.count()
        donations = list(queryset.order_by("-created_at", "-id")[offset : offset + limit])
        return donations, total

    def stats_for_devotee(self, devotee_id: int) -> DonationStats:
        """Count and sum of the devotee's captured donations."""
        totals = Donation.objects.filter(
            devotee_id=devotee_id, status=DonationStatus.CAPTURED
        ).aggregate(count=Count("id"), amount=Sum("amount_paise"))
        return DonationStats(
            total_donations=totals["count"] or 0,
            total_amount_paise=totals["amount"] or 0,
        )

    def _save(self, donation: Donation) -> None:
        try:
            donation.save()
        except DatabaseError as e:
            self.get_logger().error(
                f"Database error saving donation {donation.id}",
                extra={"donation_id": donation.id},
                exc_info=True,
            )
            raise StorageError(
                "Could not update the donation. Please retry verification.",
                error_code="DONATION_NOT_SAVED",
                details={"donation_id": donation.id},
            ) from e
