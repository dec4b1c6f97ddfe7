"""
storefront_query – product discovery core for the storefront.

Import path convention::

    from storefront_query.application.filters import FilterStore, FilterState
    from storefront_query.application.query import compile_query
    from storefront_query.application.fetch import ProductFetcher
    from storefront_query.adapters.strapi import StrapiProductRepository
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
