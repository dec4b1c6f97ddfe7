"""Observability – structured logging helpers."""
from storefront_query.observability.logging.factory import JsonLoggerFactory
from storefront_query.observability.logging.processors import get_logger

__all__ = ["JsonLoggerFactory", "get_logger"]
