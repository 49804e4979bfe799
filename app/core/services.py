"""
Service layer building blocks.

Services hold the business rules; views only parse requests and render
results. Inside a service, failures are raised as core.exceptions errors.
At the boundary a caller sees a ServiceResult: either data, or an error
message with a stable error_code and error_kind that the API edge maps
to an HTTP status (see core.views.error_response).

Usage:
    from core.services import BaseService, ServiceResult

    class FavoriteService(BaseService):
        @classmethod
        def set_favorites(cls, devotee, organization_ids):
            ...
            with cls.atomic():
                ...
            return ServiceResult.success(favorites)

    result = DonationSettlementOrchestrator().create_donation_order(...)
    if not result.success:
        return error_response(result)
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

from django.db import transaction

if TYPE_CHECKING:
    from collections.abc import Generator
    from typing import Any

    from core.exceptions import BaseApplicationError

T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """
    Outcome of a service call.

    Attributes:
        success: Whether the operation succeeded
        data: Payload on success
        error: Human-readable message on failure
        error_code: Stable machine-readable code (NOT_FAVORITED, GATEWAY_TIMEOUT, ...)
        error_kind: Taxonomy entry (ValidationError, PolicyError, ...)
        errors: Field-level messages for validation failures
        details: Identifiers from the failing error, passed through to clients
    """

    success: bool
    data: T | None = None
    error: str | None = None
    error_code: str | None = None
    error_kind: str | None = None
    errors: dict[str, list[str]] | None = None
    details: dict[str, Any] | None = None

    @classmethod
    def success(cls, data: T) -> ServiceResult[T]:
        return cls(success=True, data=data)

    @classmethod
    def failure(
        cls,
        error: str,
        error_code: str | None = None,
        error_kind: str | None = None,
        errors: dict[str, list[str]] | None = None,
        details: dict[str, Any] | None = None,
    ) -> ServiceResult[T]:
        return cls(
            success=False,
            error=error,
            error_code=error_code,
            error_kind=error_kind,
            errors=errors,
            details=details,
        )

    @classmethod
    def from_exception(cls, exc: BaseApplicationError) -> ServiceResult[T]:
        """
        Failed result carrying the exception's message, code, kind and details.

        Example:
            try:
                gateway.create_order(amount_paise, receipt)
            except GatewayError as e:
                return ServiceResult.from_exception(e)
        """
        return cls(
            success=False,
            error=exc.message,
            error_code=exc.error_code,
            error_kind=exc.kind,
            details=exc.details or None,
        )

    def __bool__(self) -> bool:
        return self.success


class BaseService:
    """
    Common plumbing for service classes.

    Services keep no per-request state on the class. Collaborators such as
    the payment gateway are passed to the constructor rather than looked up
    from module globals.
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """Logger named <module>.<Class>, so each service can be filtered on its own."""
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @classmethod
    @contextmanager
    def atomic(cls) -> Generator[None, None, None]:
        """
        Run the block in a database transaction (a savepoint when nested).

        Example:
            with cls.atomic():
                donation = ledger.capture(locked, ...)
                aggregator.add_raised(donation.event_id, donation.amount_paise)
        """
        with transaction.atomic():
            yield

    @classmethod
    def handle_exception(
        cls,
        exc: BaseApplicationError,
        context: str = "",
        log_level: int = logging.WARNING,
    ) -> ServiceResult:
        """Log an application error and turn it into a failed ServiceResult."""
        message = f"{context}: {exc}" if context else str(exc)
        cls.get_logger().log(
            log_level,
            message,
            extra={"error_code": exc.error_code, "error_kind": exc.kind},
        )
        return ServiceResult.from_exception(exc)
