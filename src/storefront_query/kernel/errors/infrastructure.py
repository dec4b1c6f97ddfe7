"""Infrastructure errors – content repository and transport failures."""

from __future__ import annotations

from typing import Any

from storefront_query.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """I/O failure that is not a catalog rule violation."""

    default_code = "infrastructure_error"


class TimeoutError(InfrastructureError):  # noqa: A001
    """A repository request exceeded its deadline."""

    default_code = "infrastructure_timeout"


class SerializationError(InfrastructureError):
    """The repository answered with a body that could not be decoded."""

    default_code = "serialization_error"

    def __init__(
        self,
        message: str,
        *,
        payload_type: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.payload_type = payload_type


class ExternalServiceError(InfrastructureError):
    """The content repository returned an unexpected response."""

    default_code = "external_service_error"

    def __init__(
        self,
        service: str,
        message: str | None = None,
        *,
        status_code: int | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"External service '{service}' error", **kwargs)
        self.service = service
        self.status_code = status_code

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["service"] = self.service
        base["status_code"] = self.status_code
        return base


__all__ = [
    "ExternalServiceError",
    "InfrastructureError",
    "SerializationError",
    "TimeoutError",
]
