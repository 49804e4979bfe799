"""
Donation services.

This module provides:
- DonationLedger: Persistence and state rules for donations
- DonationSettlementOrchestrator: Order creation, verification and history

Usage:
    from donations.services import DonationSettlementOrchestrator

    result = DonationSettlementOrchestrator().verify_donation_payment(
        gateway_order_id="order_abc",
        payment_id="pay_1",
        signature=signature,
        devotee_id=devotee.id,
    )
"""

from donations.services.ledger import DonationLedger, DonationStats
from donations.services.settlement_orchestrator import (
    DonationOrderResult,
    DonationPage,
    DonationSettlementOrchestrator,
    VerificationResult,
)

__all__ = [
    "DonationLedger",
    "DonationOrderResult",
    "DonationPage",
    "DonationSettlementOrchestrator",
    "DonationStats",
    "VerificationResult",
]
