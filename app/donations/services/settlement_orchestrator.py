"""
Donation settlement orchestrator.

Coordinates the payment gateway, the donation ledger and the event
funding aggregator into the operations the API exposes:

- create_donation_order: validate, create a gateway order, open a PENDING donation
- verify_donation_payment: check the checkout signature and capture the donation
- list_donations / get_donation_stats: a devotee's donation history

Create-order Flow:
    1. Validate amount and convert to paise
    2. Organization must be one of the devotee's favorites
    3. Organization must exist and be active
    4. Event, if given, must be active and owned by the organization
    5. Create the gateway order
    6. Open the PENDING donation

    Nothing is written before step 6. If step 6 fails the gateway order
    is orphaned and simply expires unused on the gateway side.

Verify Flow:
    1. Look up the donation by (order id, devotee)
    2. Already captured -> success, nothing credited again
    3. Already failed -> PolicyError
    4. Bad signature -> mark FAILED, PolicyError
    5. Best-effort payment details fetch
    6. Capture under a row lock
    7. Credit the event total in the same transaction

    Gateway, configuration and storage errors leave the donation PENDING
    so the devotee can retry verification.

Usage:
    from donations.services import DonationSettlementOrchestrator

    orchestrator = DonationSettlementOrchestrator()
    result = orchestrator.create_donation_order(
        devotee_id=devotee.id,
        organization_id=7,
        amount="500",
        event_id=3,
    )
    if result.success:
        order_id = result.data.order.order_id
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from django.conf import settings
from django.db import DatabaseError

from core.exceptions import BaseApplicationError, PolicyError, StorageError, ValidationError
from core.helpers import (
    MINOR_UNITS_PER_MAJOR,
    calculate_pagination,
    to_minor_units,
)
from core.services import BaseService, ServiceResult
from devotees.services import FavoriteService
from donations.adapters import GatewayOrder, PaymentDetails, RazorpayAdapter, build_receipt
from donations.services.ledger import DonationLedger, DonationStats
from events.services import EventFundingAggregator, EventService

if TYPE_CHECKING:
    from authentication.models import User
    from donations.models import Donation
    from events.models import Event


# =============================================================================
# Result Types
# =============================================================================


@dataclass
class DonationOrderResult:
    """A freshly opened donation and the gateway order backing it."""

    donation: Donation
    order: GatewayOrder
    organization: User
    event: Event | None = None


@dataclass
class VerificationResult:
    """
    Outcome of a successful verification.

    Attributes:
        donation: The captured donation
        already_captured: The donation was captured by an earlier call
        event_credited: This call added the amount to the event total
    """

    donation: Donation
    already_captured: bool = False
    event_credited: bool = False


@dataclass
class DonationPage:
    donations: list[Donation]
    pagination: dict[str, Any]


# =============================================================================
# Orchestrator
# =============================================================================


class DonationSettlementOrchestrator(BaseService):
    """
    Entry point for donation order creation and payment verification.

    Dependency Injection:
        The gateway, ledger and aggregator can be injected for testing.
        The gateway defaults to RazorpayAdapter.from_settings(), built on
        first use so that read-only operations never need credentials.

    Usage:
        # Production
        orchestrator = DonationSettlementOrchestrator()

        # Testing with a fake gateway
        orchestrator = DonationSettlementOrchestrator(gateway=FakeGateway())
    """

    def __init__(
        self,
        gateway: RazorpayAdapter | None = None,
        ledger: DonationLedger | None = None,
        aggregator: EventFundingAggregator | None = None,
    ):
        self._gateway = gateway
        self.ledger = ledger or DonationLedger()
        self.aggregator = aggregator or EventFundingAggregator()

    @property
    def gateway(self) -> RazorpayAdapter:
        if self._gateway is None:
            self._gateway = RazorpayAdapter.from_settings()
        return self._gateway

    # =========================================================================
    # Create Order
    # =========================================================================

    def create_donation_order(
        self,
        devotee_id: int,
        organization_id: int,
        amount: Any,
        event_id: int | None = None,
    ) -> ServiceResult[DonationOrderResult]:
        """
        Create a gateway order and open a PENDING donation for it.

        Args:
            devotee_id: Donating devotee
            organization_id: Receiving organization, must be a favorite
            amount: Amount in rupees, e.g. "25.00"
            event_id: Optional event of that organization to fund

        Error kinds:
            ValidationError: Amount malformed or out of range
            PolicyError: Organization is not a favorite (NOT_FAVORITED)
            NotFoundError: Organization or event missing or inactive
            ConfigurationError: Gateway credentials missing
            GatewayError: Gateway call failed
            StorageError: Donation could not be saved; retry order creation
        """
        logger = self.get_logger()
        log_context = {
            "devotee_id": devotee_id,
            "organization_id": organization_id,
            "event_id": event_id,
        }

        try:
            amount_paise = self.validate_amount(amount)

            if not FavoriteService.is_favorite(devotee_id, organization_id):
                raise PolicyError(
                    "not favorited",
                    error_code="NOT_FAVORITED",
                    details={"organization_id": organization_id},
                )

            organization = EventService.get_active_organization(organization_id)
            event = None
            if event_id is not None:
                event = EventService.get_donatable_event(event_id, organization_id)

            order = self.gateway.create_order(
                amount_paise=amount_paise,
                receipt=build_receipt(devotee_id, organization_id),
                notes={
                    "devotee_id": str(devotee_id),
                    "organization_id": str(organization_id),
                    "event_id": str(event_id) if event_id is not None else "",
                },
            )

            donation = self.ledger.open(
                devotee_id=devotee_id,
                organization_id=organization_id,
                event_id=event_id,
                amount_paise=amount_paise,
                gateway_order_id=order.order_id,
                currency=order.currency,
            )

        except BaseApplicationError as e:
            return self.handle_exception(e, context="Donation order not created")
        except DatabaseError as e:
            return self._storage_failure(e, "Donation order not created", log_context)

        logger.info(
            "Donation order created",
            extra={
                **log_context,
                "donation_id": donation.id,
                "gateway_order_id": order.order_id,
                "amount_paise": amount_paise,
            },
        )
        return ServiceResult.success(
            DonationOrderResult(
                donation=donation,
                order=order,
                organization=organization,
                event=event,
            )
        )

    @staticmethod
    def validate_amount(amount: Any) -> int:
        """
        Round a rupee amount to the nearest paisa and check the configured bounds.

        Returns:
            Amount in paise

        Raises:
            ValidationError: If the amount is malformed or out of range
        """
        try:
            amount_paise = to_minor_units(amount)
        except ValueError as e:
            raise ValidationError(
                "Amount must be a number.",
                error_code="INVALID_AMOUNT",
                details={"amount": [str(e)]},
            ) from e

        minimum = Decimal(str(getattr(settings, "DONATION_MIN_AMOUNT", 1)))
        maximum = Decimal(str(getattr(settings, "DONATION_MAX_AMOUNT", 1_000_000)))

        if amount_paise < minimum * MINOR_UNITS_PER_MAJOR:
            raise ValidationError(
                f"Minimum donation amount is {minimum:.2f}.",
                error_code="AMOUNT_BELOW_MINIMUM",
                details={"amount": [f"Must be at least {minimum:.2f}."]},
            )
        if amount_paise > maximum * MINOR_UNITS_PER_MAJOR:
            raise ValidationError(
                f"Maximum donation amount is {maximum:.2f}.",
                error_code="AMOUNT_ABOVE_MAXIMUM",
                details={"amount": [f"Must be at most {maximum:.2f}."]},
            )
        return amount_paise

    # =========================================================================
    # Verify Payment
    # =========================================================================

    def verify_donation_payment(
        self,
        gateway_order_id: str,
        payment_id: str,
        signature: str,
        devotee_id: int,
    ) -> ServiceResult[VerificationResult]:
        """
        Verify a checkout signature and capture the donation.

        Safe to call repeatedly and concurrently for the same order: the
        capture runs under a row lock and the event total is credited
        only by the call that moves the donation to CAPTURED.

        Error kinds:
            NotFoundError: No donation for this order and devotee
            PolicyError: PAYMENT_FAILED or SIGNATURE_MISMATCH
            ConfigurationError: Gateway secret missing (donation stays pending)
            StorageError: Capture could not be saved (donation stays pending)
        """
        try:
            return self._verify(gateway_order_id, payment_id, signature, devotee_id)
        except BaseApplicationError as e:
            return self.handle_exception(
                e, context=f"Verification of order {gateway_order_id} rejected"
            )
        except DatabaseError as e:
            return self._storage_failure(
                e,
                f"Verification of order {gateway_order_id} not saved",
                {"gateway_order_id": gateway_order_id, "devotee_id": devotee_id},
            )

    def _verify(
        self,
        gateway_order_id: str,
        payment_id: str,
        signature: str,
        devotee_id: int,
    ) -> ServiceResult[VerificationResult]:
        logger = self.get_logger()

        donation = self.ledger.get_for_verification(gateway_order_id, devotee_id)
        if donation.is_captured:
            return ServiceResult.success(
                VerificationResult(donation=donation, already_captured=True)
            )
        if donation.is_failed:
            raise self._payment_failed(donation)

        if not self.gateway.verify_signature(gateway_order_id, payment_id, signature):
            with self.atomic():
                locked = self.ledger.get_for_verification(
                    gateway_order_id, devotee_id, lock=True
                )
                if locked.is_captured:
                    return ServiceResult.success(
                        VerificationResult(donation=locked, already_captured=True)
                    )
                self.ledger.mark_failed(locked, reason="signature mismatch")
            raise PolicyError(
                "signature mismatch",
                error_code="SIGNATURE_MISMATCH",
                details={"donation_id": donation.id},
            )

        # Network call stays outside the row lock
        details = self._fetch_payment_details(payment_id, donation)

        with self.atomic():
            locked = self.ledger.get_for_verification(gateway_order_id, devotee_id, lock=True)
            if locked.is_captured:
                return ServiceResult.success(
                    VerificationResult(donation=locked, already_captured=True)
                )
            if locked.is_failed:
                raise self._payment_failed(locked)

            captured = self.ledger.capture(locked, payment_id, signature, details)
            credited = False
            if captured.event_id is not None:
                credited = self.aggregator.add_raised(
                    captured.event_id, captured.amount_paise
                )

        logger.info(
            f"Donation {captured.id} verified",
            extra={
                "donation_id": captured.id,
                "devotee_id": devotee_id,
                "gateway_order_id": gateway_order_id,
                "event_id": captured.event_id,
                "event_credited": credited,
            },
        )
        return ServiceResult.success(
            VerificationResult(donation=captured, event_credited=credited)
        )

    def _fetch_payment_details(self, payment_id: str, donation: Donation) -> PaymentDetails | None:
        """Enrichment only; any failure is logged and ignored."""
        try:
            return self.gateway.fetch_payment_details(payment_id)
        except Exception:
            self.get_logger().warning(
                f"Could not fetch payment details for {payment_id}; capturing without them",
                extra={"donation_id": donation.id, "gateway_payment_id": payment_id},
                exc_info=True,
            )
            return None

    def _storage_failure(
        self, exc: DatabaseError, context: str, log_context: dict[str, Any]
    ) -> ServiceResult:
        """Database errors not already translated, such as a failed commit."""
        self.get_logger().error(context, extra=log_context, exc_info=exc)
        return ServiceResult.from_exception(
            StorageError(
                "Could not save the donation. Please try again.",
                error_code="DATABASE_ERROR",
            )
        )

    @staticmethod
    def _payment_failed(donation: Donation) -> PolicyError:
        return PolicyError(
            "payment failed",
            error_code="PAYMENT_FAILED",
            details={"donation_id": donation.id},
        )

    # =========================================================================
    # History
    # =========================================================================

    def list_donations(
        self, devotee_id: int, page: int = 1, limit: int | None = None
    ) -> ServiceResult[DonationPage]:
        """
        A page of the devotee's donations, newest first.

        Error kinds:
            ValidationError: page < 1 or limit outside 1..DONATION_PAGE_SIZE_MAX
        """
        default_limit = getattr(settings, "DONATION_PAGE_SIZE_DEFAULT", 20)
        max_limit = getattr(settings, "DONATION_PAGE_SIZE_MAX", 50)
        if limit is None:
            limit = default_limit

        errors = {}
        if not isinstance(page, int) or isinstance(page, bool) or page < 1:
            errors["page"] = ["Must be a positive integer."]
        if not isinstance(limit, int) or isinstance(limit, bool) or not 1 <= limit <= max_limit:
            errors["limit"] = [f"Must be between 1 and {max_limit}."]
        if errors:
            return ServiceResult.failure(
                "Invalid pagination parameters.",
                error_code="INVALID_PAGINATION",
                error_kind=ValidationError.kind,
                errors=errors,
            )

        offset = (page - 1) * limit
        donations, total = self.ledger.list_for_devotee(devotee_id, offset=offset, limit=limit)
        return ServiceResult.success(
            DonationPage(
                donations=donations,
                pagination=calculate_pagination(total=total, page=page, per_page=limit),
            )
        )

    def get_donation_stats(self, devotee_id: int) -> ServiceResult[DonationStats]:
        """Totals over the devotee's captured donations."""
        return ServiceResult.success(self.ledger.stats_for_devotee(devotee_id))
