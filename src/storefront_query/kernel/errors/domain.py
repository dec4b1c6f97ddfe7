"""Domain errors – filter validation and state invariant violations."""

from __future__ import annotations

from typing import Any

from storefront_query.kernel.errors.base import BaseError


class DomainError(BaseError):
    """Raised when a catalog rule is violated."""

    default_code = "domain_error"


class InvariantViolationError(DomainError):
    """A FilterState reached a component in a malformed shape.

    This is a programming error: the store is responsible for never producing
    such a state.
    """

    default_code = "invariant_violation"

    def __init__(self, message: str, *, violations: list[str] | None = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.violations: list[str] = violations or []

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["violations"] = self.violations
        return base


class ValidationError(DomainError):
    """Input data does not meet validation rules.

    ``errors`` is a list of field-level failures, each a dict with ``field``
    and ``message`` keys.
    """

    default_code = "validation_error"

    def __init__(
        self,
        message: str,
        *,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.errors: list[dict[str, Any]] = errors or []

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["errors"] = self.errors
        return base


class FilterValidationError(ValidationError):
    """A FilterStore mutation was rejected; the state is unchanged."""

    default_code = "filter_validation_error"

    def __init__(self, field: str, message: str, *, value: Any = None, **kwargs: Any) -> None:
        super().__init__(
            message,
            errors=[{"field": field, "message": message, "value": value}],
            **kwargs,
        )
        self.field = field
        self.value = value


__all__ = [
    "DomainError",
    "FilterValidationError",
    "InvariantViolationError",
    "ValidationError",
]
