"""Strapi adapter – bracket-notation query-string encoding.

A compiled query's nested filter mapping is flattened into the parameter
names the Strapi REST API expects::

    {"price": {"$gte": 50}}            -> filters[price][$gte]=50
    {"$or": [{"name": {"$containsi": "x"}}]}
                                       -> filters[$or][0][name][$containsi]=x
"""
from __future__ import annotations

from typing import Any, Mapping

from storefront_query.application.query.compiler import CompiledQuery

__all__ = ["encode_filters", "encode_query", "format_scalar"]


def format_scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _flatten(prefix: str, value: Any, out: list[tuple[str, str]]) -> None:
    if isinstance(value, Mapping):
        for key, nested in value.items():
            _flatten(f"{prefix}[{key}]", nested, out)
    elif isinstance(value, (list, tuple)):
        for index, nested in enumerate(value):
            _flatten(f"{prefix}[{index}]", nested, out)
    else:
        out.append((prefix, format_scalar(value)))


def encode_filters(filters: Mapping[str, Any]) -> list[tuple[str, str]]:
    pairs: list[tuple[str, str]] = []
    _flatten("filters", filters, pairs)
    return pairs


def encode_query(query: CompiledQuery, *, populate: str | None = None) -> list[tuple[str, str]]:
    """Ordered ``(name, value)`` pairs for ``GET /products``."""
    pairs: list[tuple[str, str]] = []
    if populate:
        pairs.append(("populate", populate))
    pairs.extend(encode_filters(query.filters))
    pairs.append(("sort", query.sort))
    pairs.append(("pagination[page]", str(query.page)))
    pairs.append(("pagination[pageSize]", str(query.page_size)))
    return pairs
