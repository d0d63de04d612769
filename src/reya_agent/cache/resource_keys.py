"""
Resource kinds and cache key construction.
"""
from enum import Enum
from typing import Optional


class ResourceKind(str, Enum):
    """Kinds of remote resources, each with its own TTL."""
    MARKETS = "markets"
    MARKETS_DATA = "markets-data"
    MARKET_DATA = "market-data"
    ASSETS = "assets"
    PRICES = "prices"
    PRICE = "price"
    FEE_TIERS = "fee-tiers"
    GLOBAL_FEES = "global-fees"


def resource_key(kind: ResourceKind, identifier: Optional[str] = None) -> str:
    """
    Build the cache key for a resource.
    
    Singleton resources use the kind alone ("markets"); per-identifier
    resources append it ("market-data:7"). The kind prefix keeps keys of
    different kinds disjoint.
    
    :param kind: ResourceKind of the cached object
    :param identifier: Optional id (market id, asset pair id)
    :return: Opaque cache key
    """
    if identifier is None:
        return kind.value
    return f"{kind.value}:{identifier}"
