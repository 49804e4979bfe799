"""
Fixtures for donation tests.

FakeGateway stands in for RazorpayAdapter: it signs with a fixed secret
exactly like the real adapter and records every order it creates, so
orchestrator tests run without network access.
"""

import hashlib
import hmac
import itertools

import pytest

from donations.adapters import GatewayOrder, PaymentDetails, RazorpayAdapter
from donations.exceptions import GatewayTimeoutError
from donations.services import DonationSettlementOrchestrator

GATEWAY_SECRET = "test_secret"


def sign(order_id, payment_id, secret=GATEWAY_SECRET):
    """Checkout signature the gateway would hand to the client."""
    return hmac.new(
        secret.encode(), f"{order_id}|{payment_id}".encode(), hashlib.sha256
    ).hexdigest()


class FakeGateway(RazorpayAdapter):
    """
    In-memory gateway.

    Attributes:
        next_order_ids: Order ids to hand out, in order
        create_error / fetch_error: Raised by the matching call when set
        payment_details: Returned by fetch_payment_details
    """

    _counter = itertools.count(1)

    def __init__(self):
        super().__init__(key_id="rzp_test_key", key_secret=GATEWAY_SECRET)
        self.next_order_ids = []
        self.created_orders = []
        self.fetched_payments = []
        self.create_error = None
        self.fetch_error = None
        self.payment_details = PaymentDetails(
            method="upi", acquirer_reference="412345678901"
        )

    def create_order(self, amount_paise, receipt, notes=None):
        if self.create_error is not None:
            raise self.create_error
        order_id = (
            self.next_order_ids.pop(0)
            if self.next_order_ids
            else f"order_fake{next(self._counter):06d}"
        )
        order = GatewayOrder(
            order_id=order_id,
            amount_paise=amount_paise,
            currency=self.currency,
            key_id=self.key_id,
            receipt=receipt,
            raw_response={"notes": notes or {}},
        )
        self.created_orders.append(order)
        return order

    def fetch_payment_details(self, payment_id):
        self.fetched_payments.append(payment_id)
        if self.fetch_error is not None:
            raise self.fetch_error
        return self.payment_details


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def orchestrator(gateway):
    return DonationSettlementOrchestrator(gateway=gateway)


@pytest.fixture
def timeout_error():
    return GatewayTimeoutError("Payment gateway timed out", gateway_code="timeout")
