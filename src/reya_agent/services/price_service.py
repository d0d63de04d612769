"""
Oracle, pool and mark prices.
"""
import math
from dataclasses import dataclass
from typing import Optional, Tuple

from ..cache import ResourceKind
from ..constants import PRICES, price_by_pair_path
from ..models import Price
from .base import ResourceService


@dataclass(frozen=True)
class PricesSummary:
    total_markets: int
    average_price: float
    min_price: Optional[float]
    max_price: Optional[float]
    last_update: Optional[int]


def _parse_prices(payload) -> Tuple[Price, ...]:
    # The endpoint returns an object keyed by asset pair id
    return tuple(
        Price.model_validate({**price, "assetPairId": asset_pair_id})
        for asset_pair_id, price in payload.items()
    )


def to_float(value) -> Optional[float]:
    """Parse a price string, returning None for missing or non-finite values."""
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


class PriceService(ResourceService):
    
    async def get_prices(self) -> Tuple[Price, ...]:
        return await self._cached(
            ResourceKind.PRICES,
            PRICES,
            _parse_prices,
            self._ttl.prices,
        )
    
    async def get_price(self, asset_pair_id: str) -> Price:
        return await self._cached(
            ResourceKind.PRICE,
            price_by_pair_path(asset_pair_id),
            lambda payload: Price.model_validate(
                {"assetPairId": asset_pair_id, **payload}
            ),
            self._ttl.prices,
            identifier=asset_pair_id,
        )
    
    async def get_price_by_market_id(self, market_id) -> Optional[Price]:
        prices = await self.get_prices()
        wanted = str(market_id)
        return next((p for p in prices if str(p.market_id) == wanted), None)
    
    async def get_prices_summary(self) -> PricesSummary:
        prices = await self.get_prices()
        numeric = [
            value for value in (to_float(p.price) for p in prices)
            if value is not None and value > 0
        ]
        updates = [p.updated_at or 0 for p in prices]
        
        return PricesSummary(
            total_markets=len(prices),
            average_price=sum(numeric) / len(numeric) if numeric else 0.0,
            min_price=min(numeric) if numeric else None,
            max_price=max(numeric) if numeric else None,
            last_update=max(updates) if updates else None,
        )
