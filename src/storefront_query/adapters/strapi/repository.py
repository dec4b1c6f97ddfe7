"""Strapi adapter – StrapiProductRepository."""
from __future__ import annotations

from typing import Any

from storefront_query.adapters.http.client import HttpxHttpClient
from storefront_query.adapters.strapi.encoding import encode_query
from storefront_query.adapters.strapi.mapper import parse_product_page
from storefront_query.application.fetch.result import ProductPage
from storefront_query.application.query.compiler import CompiledQuery
from storefront_query.config import CatalogSettings
from storefront_query.kernel.errors import SerializationError
from storefront_query.observability.logging import get_logger

__all__ = ["StrapiProductRepository"]

logger = get_logger(__name__)

PRODUCTS_PATH = "/products"


class StrapiProductRepository:
    """:class:`ProductRepository` backed by the Strapi REST API."""

    def __init__(
        self,
        client: HttpxHttpClient,
        *,
        populate: str | None = "mainImage,images,category,brand,tags",
        path: str = PRODUCTS_PATH,
    ) -> None:
        self._client = client
        self._populate = populate
        self._path = path

    @classmethod
    def from_settings(cls, settings: CatalogSettings, **client_kwargs: Any) -> "StrapiProductRepository":
        client = HttpxHttpClient(
            base_url=settings.repository_url.rstrip("/"),
            timeout=settings.request_timeout,
            **client_kwargs,
        )
        return cls(client, populate=settings.populate or None)

    async def __aenter__(self) -> "StrapiProductRepository":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def find_products(self, query: CompiledQuery) -> ProductPage:
        params = encode_query(query, populate=self._populate)
        logger.debug("repository_request", path=self._path, sort=query.sort, page=query.page)
        response = await self._client.get(self._path, params=params)
        try:
            body = response.json()
        except ValueError as exc:
            raise SerializationError(
                "Repository response is not valid JSON",
                payload_type="product_page",
                cause=exc,
            ) from exc
        page = parse_product_page(body, page=query.page, page_size=query.page_size)
        logger.debug("repository_response", items=len(page.items), total=page.pagination.total)
        return page
