"""
Cached resource services over the Reya API.

All services share one TTLCache and one ReyaApiClient; each resource kind
uses its own TTL from CacheTTLConfig.
"""
from .base import ResourceService
from .market_service import MarketService
from .price_service import PriceService, PricesSummary
from .asset_service import AssetService, AssetsSummary
from .fee_service import FeeService

__all__ = [
    "ResourceService",
    "MarketService",
    "PriceService",
    "PricesSummary",
    "AssetService",
    "AssetsSummary",
    "FeeService",
]
