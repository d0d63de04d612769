import logging
from typing import Any, Callable, Optional, TypeVar

from pydantic import ValidationError

from ..api.client import ReyaApiClient
from ..cache import ResourceKind, TTLCache, resource_key
from ..config import CacheTTLConfig
from ..exceptions import UpstreamFetchError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ResourceService:
    """
    Shared plumbing for the resource services.
    
    Parsing happens inside the loader, so a malformed payload raises before
    anything reaches the cache.
    """
    
    def __init__(self, client: ReyaApiClient, cache: TTLCache, ttl: CacheTTLConfig):
        self._client = client
        self._cache = cache
        self._ttl = ttl
    
    async def _cached(
        self,
        kind: ResourceKind,
        path: str,
        parse: Callable[[Any], T],
        ttl_seconds: float,
        identifier: Optional[str] = None,
    ) -> T:
        key = resource_key(kind, identifier)
        
        async def load() -> T:
            payload = await self._client.get_json(path, kind.value)
            try:
                return parse(payload)
            except (ValidationError, TypeError, AttributeError) as e:
                logger.error(f"Unexpected {kind.value} payload for key {key}: {e}")
                raise UpstreamFetchError(
                    kind.value,
                    f"{self._client.base_url}{path}",
                    reason="unexpected payload shape",
                ) from e
        
        return await self._cache.fetch_or_load(key, load, ttl_seconds)
