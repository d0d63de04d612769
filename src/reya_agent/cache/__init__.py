"""
Read-through TTL cache fronting the Reya API.

One cache instance is shared by all resource services; keys are built per
resource kind so they never collide.
"""
from .resource_keys import ResourceKind, resource_key
from .ttl_cache import CacheEntry, TTLCache

__all__ = ["ResourceKind", "resource_key", "CacheEntry", "TTLCache"]
