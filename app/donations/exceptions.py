"""
Donation-specific exceptions.

Exception Hierarchy:
    ConflictError (core)
    └── InvalidStateError - Donation state transition not allowed

    ExternalServiceError (core)
    └── GatewayError - Base for all payment gateway failures
        ├── GatewayTimeoutError - Gateway did not answer in time (transient, retry)
        ├── GatewayUnavailableError - Connection failure or gateway 5xx (transient, retry)
        └── GatewayRequestError - Gateway rejected the request (permanent)

Usage:
    from donations.exceptions import GatewayError, InvalidStateError

    try:
        order = gateway.create_order(amount_paise, receipt)
    except GatewayError as e:
        if e.is_retryable:
            ...  # tell the devotee to try again shortly

Note:
    Gateway errors raised while verifying a payment leave the donation
    pending. Only a signature mismatch moves a donation to failed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.exceptions import ConflictError, ExternalServiceError

if TYPE_CHECKING:
    from typing import Any


class InvalidStateError(ConflictError):
    """
    Raised when a donation cannot move to the requested state.

    Captured and failed donations are terminal; a failed donation can
    never be captured and a captured one can never be failed.

    Example:
        raise InvalidStateError(
            "Donation 42 is failed and cannot be captured",
            details={"donation_id": 42, "status": "failed"},
        )
    """

    default_error_code: str = "INVALID_STATE"
    kind: str = "InvalidStateError"


class GatewayError(ExternalServiceError):
    """
    Base exception for payment gateway failures.

    Attributes:
        gateway_code: Short code naming the failure (timeout, server_error, ...)
        is_retryable: Whether the same call may succeed if repeated
    """

    default_error_code: str = "GATEWAY_ERROR"
    kind: str = "GatewayError"
    is_retryable: bool = False

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        gateway_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        details = details or {}
        if gateway_code:
            details["gateway_code"] = gateway_code
        super().__init__(message, error_code=error_code, details=details)
        self.gateway_code = gateway_code


class GatewayTimeoutError(GatewayError):
    """Raised when the gateway does not respond within the configured timeout."""

    default_error_code: str = "GATEWAY_TIMEOUT"
    is_retryable: bool = True


class GatewayUnavailableError(GatewayError):
    """
    Raised on network failures and gateway server errors.

    Transient; the call is safe to repeat.
    """

    default_error_code: str = "GATEWAY_UNAVAILABLE"
    is_retryable: bool = True


class GatewayRequestError(GatewayError):
    """
    Raised when the gateway rejects the request.

    Covers invalid parameters, authentication failures and unknown
    payment ids. Permanent: repeating the call will not help.
    """

    default_error_code: str = "GATEWAY_REQUEST_REJECTED"
    is_retryable: bool = False
