"""HTTP adapter – HttpxHttpClient."""
from __future__ import annotations

from typing import Any

import httpx

from storefront_query.kernel.errors import ExternalServiceError
from storefront_query.kernel.errors import InfrastructureTimeoutError as AppTimeoutError


class HttpxHttpClient:
    """Thin async httpx wrapper with structured error mapping.

    Pass ``client`` to share an existing :class:`httpx.AsyncClient`; it is
    then left open on exit.
    """

    def __init__(
        self,
        base_url: str = "",
        timeout: float = 10.0,
        *,
        client: httpx.AsyncClient | None = None,
        **kwargs: Any,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout, **kwargs)

    async def __aenter__(self) -> "HttpxHttpClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self._request("GET", url, **kwargs)

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._client.request(method, url, **kwargs)
            response.raise_for_status()
            return response
        except httpx.TimeoutException as exc:
            raise AppTimeoutError(f"HTTP request timed out: {method} {url}", cause=exc) from exc
        except httpx.HTTPStatusError as exc:
            raise ExternalServiceError(
                service=url,
                message=f"HTTP {exc.response.status_code} from {method} {url}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise ExternalServiceError(service=url, message=str(exc) or type(exc).__name__) from exc


HttpClient = HttpxHttpClient

__all__ = ["HttpClient", "HttpxHttpClient"]
