"""Application discovery – listing sessions and search suggestions."""
from storefront_query.application.discovery.session import DiscoverySession
from storefront_query.application.discovery.suggestions import SearchSuggestions, Suggestions

__all__ = ["DiscoverySession", "SearchSuggestions", "Suggestions"]
