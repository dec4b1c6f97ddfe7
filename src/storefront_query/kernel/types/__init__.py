"""Kernel types – small validated value objects."""
from storefront_query.kernel.types.slug import Slug

__all__ = ["Slug"]
