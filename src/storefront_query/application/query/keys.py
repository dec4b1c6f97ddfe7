"""Application query – CacheKey builder."""
from __future__ import annotations

import hashlib
import json
from typing import Any

__all__ = ["CacheKey"]


class CacheKey:
    """Factory for deterministic cache key strings."""

    @staticmethod
    def canonical(payload: Any) -> str:
        return json.dumps(payload, sort_keys=True, separators=(",", ":"), default=str)

    @staticmethod
    def for_query(query_type: str, payload: Any) -> str:
        # deterministic: sorted keys, compact JSON, SHA-256 first 16 hex chars
        digest = hashlib.sha256(CacheKey.canonical(payload).encode()).hexdigest()[:16]
        return f"query:{query_type}:{digest}"
