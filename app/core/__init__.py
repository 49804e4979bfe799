"""
Core Application - Infrastructure & Base Classes

This app contains infrastructure code shared by the domain apps:

- Generic, reusable base classes (no domain-specific logic)
- The application error taxonomy
- Money and pagination helpers

Models (import from core.models):
    - BaseModel: Abstract model with timestamps (created_at, updated_at)

Services (import from core.services):
    - BaseService: Base class for service layer
    - ServiceResult: Standard result wrapper for success/failure handling

Exceptions (import from core.exceptions):
    - BaseApplicationError: Base exception with error codes and kinds
    - ValidationError, PolicyError, NotFoundError, ConflictError
    - ConfigurationError, ExternalServiceError, StorageError

Helpers (import from core.helpers):
    - to_minor_units / format_minor_units: Major <-> minor currency units
    - calculate_pagination: Pagination metadata calculation

Note:
    Django models are NOT imported here to avoid AppRegistryNotReady
    errors. Import them directly from core.models.
"""

# Services (no Django model dependencies)
from .services import BaseService, ServiceResult

# Exceptions (no Django dependencies)
from .exceptions import (
    BaseApplicationError,
    ConfigurationError,
    ConflictError,
    ExternalServiceError,
    NotFoundError,
    PolicyError,
    StorageError,
    ValidationError,
)

# Helpers (no Django dependencies)
from .helpers import (
    calculate_pagination,
    format_minor_units,
    to_minor_units,
)

__all__ = [
    # Services
    "BaseService",
    "ServiceResult",
    # Exceptions
    "BaseApplicationError",
    "ValidationError",
    "PolicyError",
    "NotFoundError",
    "ConflictError",
    "ConfigurationError",
    "ExternalServiceError",
    "StorageError",
    # Helpers
    "calculate_pagination",
    "format_minor_units",
    "to_minor_units",
]
