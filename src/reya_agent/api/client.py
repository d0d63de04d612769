"""
Async HTTP client for the Reya trading API.

Single attempt per call, no retries: the first failure is surfaced to the
caller as UpstreamFetchError and nothing upstream of it caches a result.
"""
import logging
from typing import Any, Optional

import httpx

from ..constants import DEFAULT_REQUEST_TIMEOUT_SECONDS
from ..exceptions import UpstreamFetchError

logger = logging.getLogger(__name__)


class ReyaApiClient:
    """
    Opaque fetcher: GET path -> JSON.
    
    Owns one httpx.AsyncClient for the plugin lifetime unless one is injected.
    """
    
    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT_SECONDS,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        :param base_url: Validated API base URL without trailing slash
        :param timeout_seconds: Per-request timeout
        :param http_client: Optional preconfigured client (tests inject a MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            timeout=timeout_seconds,
            headers={"Accept": "application/json"},
        )
    
    async def get_json(self, path: str, resource_kind: str) -> Any:
        """
        Fetch and decode one endpoint.
        
        :param path: Endpoint path starting with "/"
        :param resource_kind: Resource label carried by errors and logs
        :return: Decoded JSON body
        :raises: UpstreamFetchError on transport failure, non-2xx status or invalid JSON
        """
        url = f"{self.base_url}{path}"
        
        try:
            response = await self._http.get(url)
        except httpx.RequestError as e:
            logger.error(f"Reya API request failed: {resource_kind} {url} - {e!r}")
            raise UpstreamFetchError(resource_kind, url, reason=type(e).__name__) from e
        
        if not response.is_success:
            logger.error(
                f"Reya API returned HTTP {response.status_code} for {resource_kind} {url}"
            )
            raise UpstreamFetchError(resource_kind, url, status_code=response.status_code)
        
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Reya API returned invalid JSON for {resource_kind} {url}")
            raise UpstreamFetchError(
                resource_kind, url, status_code=response.status_code, reason="invalid JSON"
            ) from e
    
    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._http.aclose()
