"""Application fetch – query execution with per-query de-duplication and caching."""
from storefront_query.application.fetch.cache import CacheEntry, ResultCache
from storefront_query.application.fetch.fetcher import FetchHandle, FetchListener, FetchStatus, ProductFetcher
from storefront_query.application.fetch.ports import ProductRepository
from storefront_query.application.fetch.result import Pagination, Product, ProductPage

__all__ = [
    "CacheEntry",
    "FetchHandle",
    "FetchListener",
    "FetchStatus",
    "Pagination",
    "Product",
    "ProductFetcher",
    "ProductPage",
    "ProductRepository",
    "ResultCache",
]
