"""Strapi adapter – response body → ProductPage.

Accepts both the v4 envelope (``{"id": 1, "attributes": {...}}`` with
relations wrapped in ``{"data": ...}``) and the flattened v5 shape.
"""
from __future__ import annotations

from typing import Any, Mapping

from storefront_query.application.fetch.result import Pagination, Product, ProductPage
from storefront_query.kernel.errors import SerializationError

__all__ = ["parse_product", "parse_product_page"]


def _unwrap(item: Mapping[str, Any]) -> dict[str, Any]:
    attributes = item.get("attributes")
    if isinstance(attributes, Mapping):
        return {"id": item.get("id"), **attributes}
    return dict(item)


def _relation_slug(value: Any) -> str | None:
    if isinstance(value, Mapping) and "data" in value:
        value = value["data"]
    if not isinstance(value, Mapping):
        return None
    slug = _unwrap(value).get("slug")
    return slug if isinstance(slug, str) else None


def _optional_float(value: Any) -> float | None:
    return None if value is None else float(value)


def parse_product(item: Any) -> Product:
    if not isinstance(item, Mapping):
        raise SerializationError(f"Expected a product object, got {type(item).__name__}", payload_type="product")
    raw = _unwrap(item)
    try:
        return Product(
            id=int(raw["id"]),
            name=str(raw["name"]),
            slug=str(raw["slug"]),
            price=float(raw["price"]),
            description=raw.get("description") or "",
            short_description=raw.get("shortDescription"),
            category=_relation_slug(raw.get("category")),
            brand=_relation_slug(raw.get("brand")),
            average_rating=_optional_float(raw.get("averageRating")),
            review_count=int(raw.get("reviewCount") or 0),
            stock_quantity=int(raw.get("stockQuantity") or 0),
            featured=bool(raw.get("featured", False)),
            trending=bool(raw.get("trending", False)),
            trending_score=_optional_float(raw.get("trendingScore")),
            created_at=raw.get("createdAt"),
            attributes=raw,
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise SerializationError(
            f"Malformed product payload: {exc!r}",
            payload_type="product",
            cause=exc,
        ) from exc


def parse_product_page(body: Any, *, page: int, page_size: int) -> ProductPage:
    """Decode a list response; missing pagination metadata is derived from *body*."""
    if not isinstance(body, Mapping) or not isinstance(body.get("data"), list):
        raise SerializationError("Expected a list response with a 'data' array", payload_type="product_page")
    items = tuple(parse_product(item) for item in body["data"])
    meta = body.get("meta") or {}
    raw_pagination = meta.get("pagination") if isinstance(meta, Mapping) else None
    if not isinstance(raw_pagination, Mapping):
        return ProductPage(items=items, pagination=Pagination.for_total(page, page_size, len(items)))
    try:
        pagination = Pagination(
            page=int(raw_pagination.get("page", page)),
            page_size=int(raw_pagination.get("pageSize", page_size)),
            page_count=int(raw_pagination.get("pageCount", 0)),
            total=int(raw_pagination.get("total", len(items))),
        )
    except (TypeError, ValueError) as exc:
        raise SerializationError(
            f"Malformed pagination metadata: {exc!r}",
            payload_type="pagination",
            cause=exc,
        ) from exc
    return ProductPage(items=items, pagination=pagination)
