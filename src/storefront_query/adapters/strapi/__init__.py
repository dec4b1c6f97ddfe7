"""Strapi adapter – product repository over the Strapi REST API."""
from storefront_query.adapters.strapi.encoding import encode_filters, encode_query
from storefront_query.adapters.strapi.mapper import parse_product, parse_product_page
from storefront_query.adapters.strapi.repository import StrapiProductRepository

__all__ = [
    "StrapiProductRepository",
    "encode_filters",
    "encode_query",
    "parse_product",
    "parse_product_page",
]
