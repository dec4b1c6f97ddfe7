"""Application search – SearchPolicy (minimum term length)."""
from __future__ import annotations

import dataclasses

__all__ = ["SearchPolicy"]


@dataclasses.dataclass(frozen=True)
class SearchPolicy:
    """Decides when a free-text term is worth a repository query.

    Terms shorter than ``min_length`` after trimming may still be stored in
    the filter state, but they are never sent to the repository and
    suggestion surfaces treat them as cleared.
    """

    min_length: int = 2

    @staticmethod
    def normalize(text: str | None) -> str:
        return (text or "").strip()

    def is_searchable(self, text: str | None) -> bool:
        return len(self.normalize(text)) >= self.min_length

    def display_term(self, text: str | None) -> str | None:
        term = self.normalize(text)
        return term if len(term) >= self.min_length else None
