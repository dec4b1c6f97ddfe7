"""HTTP adapter – async httpx client with error mapping."""
from storefront_query.adapters.http.client import HttpClient, HttpxHttpClient

__all__ = ["HttpClient", "HttpxHttpClient"]
