"""URL-safe slug value object."""

from __future__ import annotations

import dataclasses
import re
from typing import Final

from storefront_query.kernel.errors.domain import ValidationError

_SLUG_PATTERN: Final = re.compile(r"[a-z0-9]+(?:-[a-z0-9]+)*")


@dataclasses.dataclass(frozen=True, slots=True)
class Slug:
    """Lowercase category/brand identifier as used by the content repository."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not _SLUG_PATTERN.fullmatch(self.value):
            raise ValidationError(
                f"Invalid slug (must be lowercase alphanumeric + hyphens): {self.value!r}"
            )

    def __str__(self) -> str:
        return self.value

    @staticmethod
    def is_valid(value: object) -> bool:
        return isinstance(value, str) and _SLUG_PATTERN.fullmatch(value) is not None


__all__ = ["Slug"]
