"""Application urlsync – two-way binding between FilterState and the URL."""
from storefront_query.application.urlsync.codec import OWNED_PARAMS, UrlCodec, parse_query_string, to_query_params
from storefront_query.application.urlsync.sync import History, UrlSync

__all__ = ["History", "OWNED_PARAMS", "UrlCodec", "UrlSync", "parse_query_string", "to_query_params"]
