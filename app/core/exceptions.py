"""
Application error taxonomy.

Every domain failure is one of a small set of kinds. The kind is what
callers branch on and what the API edge turns into an HTTP status; the
error_code narrows it down for clients (NOT_FAVORITED, EVENT_NOT_FOUND).

Hierarchy:
    BaseApplicationError
    ├── ValidationError       malformed or out-of-range input       422
    ├── PolicyError           business rule refused the request     400
    ├── NotFoundError         organization / event / donation       404
    ├── ConflictError         request clashes with current state    409
    ├── ConfigurationError    required settings missing             503
    ├── ExternalServiceError  third-party call failed               502
    └── StorageError          database read or write failed         503

App-specific subclasses (donations.exceptions) keep or refine the kind.

Usage:
    from core.exceptions import PolicyError

    raise PolicyError("not favorited", error_code="NOT_FAVORITED")
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


class BaseApplicationError(Exception):
    """
    Root of the taxonomy.

    Attributes:
        message: Human-readable description, safe to show to clients
        error_code: Stable machine-readable code
        details: Identifiers and field errors for logs and clients
        kind: Taxonomy entry, shared by a whole branch of the hierarchy
    """

    default_error_code: str = "APPLICATION_ERROR"
    kind: str = "ApplicationError"

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


class ValidationError(BaseApplicationError):
    """
    Input the caller can fix: a malformed amount, a page size out of range.

    Example:
        raise ValidationError(
            "Maximum donation amount is 1000000.00.",
            error_code="AMOUNT_ABOVE_MAXIMUM",
        )
    """

    default_error_code: str = "VALIDATION_ERROR"
    kind: str = "ValidationError"


class PolicyError(BaseApplicationError):
    """
    Well-formed request refused by a business rule.

    Donating to an organization that is not a favorite, a checkout
    signature that does not match, verifying a donation that already failed.
    """

    default_error_code: str = "POLICY_VIOLATION"
    kind: str = "PolicyError"


class NotFoundError(BaseApplicationError):
    """
    Missing, inactive or foreign resource.

    Records owned by someone else are reported as not found rather than
    forbidden.
    """

    default_error_code: str = "NOT_FOUND"
    kind: str = "NotFoundError"


class ConflictError(BaseApplicationError):
    default_error_code: str = "CONFLICT"
    kind: str = "ConflictError"


class ConfigurationError(BaseApplicationError):
    """
    Required settings are absent.

    Gateway credentials are only needed by order creation and
    verification, so this surfaces per request instead of at start-up.
    """

    default_error_code: str = "CONFIGURATION_ERROR"
    kind: str = "ConfigurationError"


class ExternalServiceError(BaseApplicationError):
    default_error_code: str = "EXTERNAL_SERVICE_ERROR"
    kind: str = "ExternalServiceError"


class StorageError(BaseApplicationError):
    """
    A database read or write failed. Retryable.

    A failed capture is retried through verification again, which
    re-checks the donation state first.
    """

    default_error_code: str = "STORAGE_ERROR"
    kind: str = "StorageError"
