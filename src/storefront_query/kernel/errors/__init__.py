"""Kernel error hierarchy: public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError              (domain.py)
    │   ├── InvariantViolationError
    │   └── ValidationError
    │       └── FilterValidationError
    ├── ApplicationError         (application.py)
    └── InfrastructureError      (infrastructure.py)
        ├── ExternalServiceError
        ├── SerializationError
        └── TimeoutError
"""

from storefront_query.kernel.errors.application import ApplicationError
from storefront_query.kernel.errors.base import BaseError
from storefront_query.kernel.errors.domain import (
    DomainError,
    FilterValidationError,
    InvariantViolationError,
    ValidationError,
)
from storefront_query.kernel.errors.infrastructure import (
    ExternalServiceError,
    InfrastructureError,
    SerializationError,
)
from storefront_query.kernel.errors.infrastructure import TimeoutError as InfrastructureTimeoutError

__all__ = [
    "ApplicationError",
    "BaseError",
    "DomainError",
    "ExternalServiceError",
    "FilterValidationError",
    "InfrastructureError",
    "InfrastructureTimeoutError",
    "InvariantViolationError",
    "SerializationError",
    "ValidationError",
]
