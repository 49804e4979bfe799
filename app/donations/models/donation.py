"""
Donation model.

A Donation is one attempt by a devotee to give money to an organization,
optionally toward one of its events. It is opened in PENDING when the
gateway order is created and moves exactly once to CAPTURED or FAILED
when the payment is verified. Donations are never deleted; they are the
audit trail of money moved.

Usage:
    from donations.models import Donation
    from donations.state_machines import DonationStatus

    donation = Donation.objects.create(
        devotee=devotee,
        organization=temple,
        amount_paise=50000,
        gateway_order_id="order_abc",
    )

    # State transitions using django-fsm
    donation.capture(payment_id="pay_123", signature="...")
    donation.save()
"""

from __future__ import annotations

from django.conf import settings
from django.db import models
from django.utils import timezone
from django_fsm import FSMField, transition

from core.helpers import format_minor_units
from core.models import BaseModel
from donations.state_machines import DonationStatus


class Donation(BaseModel):
    """
    One donation attempt by a devotee toward an organization.

    State Flow:
        PENDING -> CAPTURED
        PENDING -> FAILED

    Invariants:
        - gateway_order_id is set at creation and unique
        - gateway_payment_id / gateway_signature are set only by capture()
        - event, when set, belongs to organization (checked before opening)
    """

    devotee = models.ForeignKey(
        "devotees.Devotee",
        on_delete=models.PROTECT,
        related_name="donations",
    )
    organization = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="donations",
    )
    event = models.ForeignKey(
        "events.Event",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="donations",
    )

    # ==========================================================================
    # Money
    # ==========================================================================

    amount_paise = models.PositiveBigIntegerField(
        help_text="Donation amount in paise (INR minor units)",
    )
    currency = models.CharField(max_length=3, default="INR")

    # ==========================================================================
    # Gateway References
    # ==========================================================================

    gateway_order_id = models.CharField(
        max_length=64,
        unique=True,
        help_text="Razorpay order id (order_xxx); one donation per order",
    )
    gateway_payment_id = models.CharField(max_length=64, null=True, blank=True)
    gateway_signature = models.CharField(max_length=128, null=True, blank=True)
    utr = models.CharField(
        max_length=64,
        null=True,
        blank=True,
        help_text="Acquirer reference (UTR / RRN) reported by the gateway",
    )
    bank_transaction_id = models.CharField(max_length=64, null=True, blank=True)
    payment_method = models.CharField(max_length=32, null=True, blank=True)

    # ==========================================================================
    # State
    # ==========================================================================

    status = FSMField(
        default=DonationStatus.PENDING,
        choices=DonationStatus.choices,
        db_index=True,
        protected=True,  # Prevent direct assignment outside transitions
    )
    captured_at = models.DateTimeField(null=True, blank=True)
    failed_at = models.DateTimeField(null=True, blank=True)
    failure_reason = models.CharField(max_length=255, blank=True, default="")

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["devotee", "created_at"], name="donation_devotee_created_idx"),
            models.Index(fields=["devotee", "status"], name="donation_devotee_status_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(amount_paise__gt=0),
                name="donation_amount_positive",
            ),
        ]

    def __str__(self) -> str:
        return f"Donation({self.id}, {self.status}, {self.amount} {self.currency})"

    @property
    def amount(self) -> str:
        """Amount in rupees with 2 fraction digits."""
        return format_minor_units(self.amount_paise)

    @property
    def is_captured(self) -> bool:
        return self.status == DonationStatus.CAPTURED

    @property
    def is_failed(self) -> bool:
        return self.status == DonationStatus.FAILED

    # ==========================================================================
    # State Transitions (django-fsm)
    # ==========================================================================

    @transition(
        field=status,
        source=DonationStatus.PENDING,
        target=DonationStatus.CAPTURED,
    )
    def capture(
        self,
        payment_id: str,
        signature: str,
        utr: str | None = None,
        bank_transaction_id: str | None = None,
        payment_method: str | None = None,
    ):
        """
        Record a verified payment.

        Transition: PENDING -> CAPTURED
        """
        self.gateway_payment_id = payment_id
        self.gateway_signature = signature
        self.utr = utr
        self.bank_transaction_id = bank_transaction_id
        self.payment_method = payment_method
        self.captured_at = timezone.now()

    @transition(
        field=status,
        source=DonationStatus.PENDING,
        target=DonationStatus.FAILED,
    )
    def fail(self, reason: str = ""):
        """
        Mark the donation as failed.

        Transition: PENDING -> FAILED
        """
        self.failed_at = timezone.now()
        self.failure_reason = reason[:255]
