"""Application search – keystroke debouncing and the minimum-term policy."""
from storefront_query.application.search.debouncer import SearchDebouncer
from storefront_query.application.search.policy import SearchPolicy

__all__ = ["SearchDebouncer", "SearchPolicy"]
