"""
Razorpay API adapter for donation payments.

This module provides the RazorpayAdapter class which encapsulates all
Razorpay API interactions. Every gateway call made by the donations app
goes through this adapter so that timeouts, error translation and
logging are handled in one place.

Features:
- Configurable timeout on every API call
- Automatic error translation to domain exceptions
- Structured logging with timing metrics
- Constant-time checkout signature verification

Configuration (via settings):
- RAZORPAY_KEY_ID: Public key id, also handed to the client checkout
- RAZORPAY_KEY_SECRET: API secret, used for API auth and signatures
- RAZORPAY_API_TIMEOUT_SECONDS: API call timeout (default: 10)
- DONATION_CURRENCY: Order currency (default: INR)

Usage:
    from donations.adapters import RazorpayAdapter

    gateway = RazorpayAdapter.from_settings()
    order = gateway.create_order(amount_paise=50000, receipt="don_7_3_1715300000")

    if gateway.verify_signature(order.order_id, payment_id, signature):
        details = gateway.fetch_payment_details(payment_id)

Note:
    The key secret and checkout signatures are never logged.
"""

from __future__ import annotations

import hashlib
import hmac
import logging
import time
from dataclasses import dataclass, field
from typing import Any

import razorpay
import requests
from django.conf import settings

from core.exceptions import ConfigurationError, ValidationError
from donations.exceptions import (
    GatewayError,
    GatewayRequestError,
    GatewayTimeoutError,
    GatewayUnavailableError,
)

# Razorpay caps order receipts at 40 characters
RECEIPT_MAX_LENGTH = 40


# =============================================================================
# Data Types
# =============================================================================


@dataclass
class GatewayOrder:
    """
    Result of creating a Razorpay order.

    Attributes:
        order_id: Razorpay order id (order_xxx)
        amount_paise: Amount the order was created for
        currency: ISO 4217 currency code
        key_id: Public key id the client checkout needs
        receipt: Receipt string sent with the order
        raw_response: Full Razorpay response dict (for debugging)
    """

    order_id: str
    amount_paise: int
    currency: str
    key_id: str
    receipt: str = ""
    raw_response: dict[str, Any] = field(default_factory=dict, repr=False)


@dataclass
class PaymentDetails:
    """
    Enrichment data for a captured payment.

    Every field is optional; Razorpay only reports what the payment
    method provides.
    """

    method: str | None = None
    acquirer_reference: str | None = None
    bank_transaction_id: str | None = None


def build_receipt(devotee_id: int, organization_id: int, timestamp: int | None = None) -> str:
    """
    Build an order receipt of the form don_<devotee>_<organization>_<unix ts>.

    Truncated to the gateway's 40 character limit.
    """
    if timestamp is None:
        timestamp = int(time.time())
    return f"don_{devotee_id}_{organization_id}_{timestamp}"[:RECEIPT_MAX_LENGTH]


# =============================================================================
# Razorpay Adapter
# =============================================================================


class RazorpayAdapter:
    """
    Adapter for Razorpay API operations.

    Wraps the official razorpay client. Instances are cheap; one is
    normally built per request via from_settings(). Tests pass a mock
    client instead.

    Usage:
        gateway = RazorpayAdapter.from_settings()
        order = gateway.create_order(50000, receipt)
    """

    def __init__(
        self,
        key_id: str,
        key_secret: str,
        timeout: float = 10,
        currency: str = "INR",
        client: Any = None,
    ):
        self.key_id = key_id or ""
        self.key_secret = key_secret or ""
        self.timeout = timeout
        self.currency = currency
        self._client = client

    @classmethod
    def from_settings(cls) -> RazorpayAdapter:
        """Build an adapter from Django settings."""
        return cls(
            key_id=getattr(settings, "RAZORPAY_KEY_ID", ""),
            key_secret=getattr(settings, "RAZORPAY_KEY_SECRET", ""),
            timeout=getattr(settings, "RAZORPAY_API_TIMEOUT_SECONDS", 10),
            currency=getattr(settings, "DONATION_CURRENCY", "INR"),
        )

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """Get logger for this adapter."""
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    # =========================================================================
    # Configuration
    # =========================================================================

    @property
    def is_configured(self) -> bool:
        return bool(self.key_id and self.key_secret)

    def _require_credentials(self) -> None:
        if not self.is_configured:
            raise ConfigurationError(
                "Payment gateway credentials are not configured",
                error_code="GATEWAY_NOT_CONFIGURED",
            )

    @property
    def client(self):
        """Lazily build the razorpay client."""
        self._require_credentials()
        if self._client is None:
            self._client = razorpay.Client(auth=(self.key_id, self.key_secret))
        return self._client

    # =========================================================================
    # Core Operations
    # =========================================================================

    def create_order(
        self, amount_paise: int, receipt: str, notes: dict[str, Any] | None = None
    ) -> GatewayOrder:
        """
        Create a Razorpay order.

        Args:
            amount_paise: Positive amount in paise
            receipt: Merchant receipt string (max 40 chars)
            notes: Key-value pairs stored on the order for reconciliation

        Returns:
            GatewayOrder with the order id and checkout key

        Raises:
            ValidationError: amount_paise is not a positive integer
            ConfigurationError: Credentials missing
            GatewayTimeoutError: Request timed out
            GatewayUnavailableError: Network failure or gateway 5xx
            GatewayRequestError: Gateway rejected the request
            GatewayError: Unusable response
        """
        if isinstance(amount_paise, bool) or not isinstance(amount_paise, int) or amount_paise <= 0:
            raise ValidationError(
                "Order amount must be a positive number of paise",
                error_code="INVALID_AMOUNT",
                details={"amount_paise": repr(amount_paise)},
            )

        client = self.client
        logger = self.get_logger()

        log_context = {
            "operation": "create_order",
            "amount_paise": amount_paise,
            "currency": self.currency,
            "receipt": receipt,
        }

        start_time = time.time()
        logger.info("Starting Razorpay operation", extra=log_context)

        try:
            response = client.order.create(
                data={
                    "amount": amount_paise,
                    "currency": self.currency,
                    "receipt": receipt[:RECEIPT_MAX_LENGTH],
                    "notes": notes or {},
                    "payment_capture": 1,
                },
                timeout=self.timeout,
            )
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            self._handle_razorpay_error(e, log_context, duration_ms)
            raise  # Never reached, but satisfies type checker

        duration_ms = (time.time() - start_time) * 1000
        order_id = (response or {}).get("id")
        status = (response or {}).get("status")

        if not order_id or status != "created":
            logger.error(
                "Razorpay returned an unusable order",
                extra={**log_context, "status": status, "duration_ms": duration_ms},
            )
            raise GatewayError(
                "Payment gateway returned an invalid order",
                gateway_code="invalid_order_response",
                details={"status": status},
            )

        logger.info(
            "Razorpay operation completed",
            extra={
                **log_context,
                "order_id": order_id,
                "status": status,
                "duration_ms": duration_ms,
            },
        )

        return GatewayOrder(
            order_id=order_id,
            amount_paise=response.get("amount", amount_paise),
            currency=response.get("currency", self.currency),
            key_id=self.key_id,
            receipt=receipt,
            raw_response=dict(response),
        )

    def verify_signature(self, order_id: str, payment_id: str, signature: str) -> bool:
        """
        Check a checkout signature.

        The expected signature is the lowercase hex HMAC-SHA256 of
        "<order_id>|<payment_id>" keyed with the API secret. Comparison
        is constant-time. Missing or non-string inputs are never valid.

        Raises:
            ConfigurationError: Secret missing
        """
        if not self.key_secret:
            raise ConfigurationError(
                "Payment gateway secret is not configured",
                error_code="GATEWAY_NOT_CONFIGURED",
            )
        if not all(isinstance(v, str) and v for v in (order_id, payment_id, signature)):
            return False

        expected = hmac.new(
            self.key_secret.encode(),
            f"{order_id}|{payment_id}".encode(),
            hashlib.sha256,
        ).hexdigest()
        return hmac.compare_digest(expected, signature)

    def fetch_payment_details(self, payment_id: str) -> PaymentDetails:
        """
        Fetch method and bank references for a payment.

        Raises:
            ConfigurationError: Credentials missing
            GatewayError: Any gateway failure (see create_order)
        """
        client = self.client
        logger = self.get_logger()

        log_context = {
            "operation": "fetch_payment",
            "payment_id": payment_id,
        }

        start_time = time.time()
        logger.debug("Starting Razorpay operation", extra=log_context)

        try:
            payment = client.payment.fetch(payment_id, timeout=self.timeout)
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            self._handle_razorpay_error(e, log_context, duration_ms)
            raise

        duration_ms = (time.time() - start_time) * 1000
        logger.debug(
            "Razorpay operation completed",
            extra={**log_context, "duration_ms": duration_ms},
        )

        payment = payment or {}
        acquirer_data = payment.get("acquirer_data") or {}
        return PaymentDetails(
            method=payment.get("method"),
            acquirer_reference=acquirer_data.get("rrn") or acquirer_data.get("upi_transaction_id"),
            bank_transaction_id=acquirer_data.get("bank_transaction_id"),
        )

    # =========================================================================
    # Error Handling
    # =========================================================================

    def _handle_razorpay_error(
        self,
        error: Exception,
        log_context: dict[str, Any],
        duration_ms: float,
    ) -> None:
        """
        Translate razorpay and requests exceptions to domain exceptions.

        Raises:
            GatewayTimeoutError: Request timed out
            GatewayUnavailableError: Connection failure or gateway 5xx
            GatewayRequestError: Invalid request, auth failure or unknown id
            GatewayError: Anything else
        """
        logger = self.get_logger()
        log_context = {**log_context, "duration_ms": duration_ms}

        if isinstance(error, requests.exceptions.Timeout):
            logger.warning("Razorpay request timed out", extra=log_context)
            raise GatewayTimeoutError(
                "Payment gateway timed out",
                gateway_code="timeout",
            ) from error

        elif isinstance(error, requests.exceptions.ConnectionError):
            logger.warning("Could not connect to Razorpay", extra=log_context)
            raise GatewayUnavailableError(
                "Payment gateway is unreachable",
                gateway_code="connection_error",
            ) from error

        elif isinstance(error, razorpay.errors.BadRequestError):
            logger.error(
                "Razorpay rejected the request",
                extra={**log_context, "error": str(error)},
            )
            raise GatewayRequestError(
                str(error) or "Payment gateway rejected the request",
                gateway_code="bad_request",
            ) from error

        elif isinstance(error, (razorpay.errors.ServerError, razorpay.errors.GatewayError)):
            logger.error(
                "Razorpay server error",
                extra={**log_context, "error": str(error)},
            )
            raise GatewayUnavailableError(
                "Payment gateway is unavailable",
                gateway_code="server_error",
            ) from error

        elif isinstance(error, requests.exceptions.RequestException):
            logger.error(
                "Razorpay request failed",
                extra={**log_context, "error": str(error)},
            )
            raise GatewayUnavailableError(
                "Payment gateway request failed",
                gateway_code="request_error",
            ) from error

        logger.exception(
            "Unexpected error from Razorpay",
            extra={**log_context, "error_type": type(error).__name__},
        )
        raise GatewayError(
            "Unexpected payment gateway error",
            gateway_code="unexpected",
            details={"error_type": type(error).__name__},
        ) from error
