"""
Process-local read-through cache with lazy expiry.
"""
import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    """Immutable cached value. Replaced wholesale on refresh."""
    value: T
    stored_at: float
    ttl_seconds: float

    def is_expired(self, now: float) -> bool:
        return now - self.stored_at > self.ttl_seconds


class TTLCache:
    """
    Key/value cache where every entry carries its own TTL.
    
    Expired entries are treated as absent and left in place until the key is
    written again. Failed loads never store anything, so the next call goes
    back to the network.
    """
    
    def __init__(self, clock: Callable[[], float] = time.monotonic):
        """
        :param clock: Monotonic time source in seconds (injectable for tests)
        """
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
    
    def get(self, key: str) -> Optional[Any]:
        """
        Return the cached value if present and unexpired.
        
        :param key: Cache key
        :return: Cached value or None
        """
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_expired(self._clock()):
            return None
        return entry.value
    
    def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        """Store a value under key for ttl_seconds."""
        self._entries[key] = CacheEntry(
            value=value,
            stored_at=self._clock(),
            ttl_seconds=ttl_seconds,
        )
    
    async def fetch_or_load(
        self,
        key: str,
        loader: Callable[[], Awaitable[T]],
        ttl_seconds: float,
    ) -> T:
        """
        Return the cached value, or await loader and cache its result.
        
        Exceptions raised by loader propagate unchanged and leave the key
        uncached.
        
        :param key: Cache key
        :param loader: Coroutine function performing the remote fetch
        :param ttl_seconds: Freshness window for a successful load
        :return: Cached or freshly loaded value
        """
        entry = self._entries.get(key)
        if entry is not None and not entry.is_expired(self._clock()):
            logger.debug(f"Cache hit for {key}")
            return entry.value
        
        logger.info(f"Cache miss for {key}")
        value = await loader()
        self.set(key, value, ttl_seconds)
        return value
    
    def invalidate(self, key: str) -> None:
        """Drop a single key."""
        self._entries.pop(key, None)
    
    def clear(self) -> None:
        """Drop every entry."""
        self._entries.clear()
    
    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None
    
    def __len__(self) -> int:
        now = self._clock()
        return sum(1 for entry in self._entries.values() if not entry.is_expired(now))
