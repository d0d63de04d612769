"""
Markets and per-market trading data.
"""
import logging
from typing import List, Optional, Tuple

from ..cache import ResourceKind
from ..constants import MARKETS, MARKETS_DATA, market_data_path
from ..models import Market, MarketData
from .base import ResourceService

logger = logging.getLogger(__name__)


class MarketService(ResourceService):
    
    async def get_markets(self) -> Tuple[Market, ...]:
        return await self._cached(
            ResourceKind.MARKETS,
            MARKETS,
            lambda payload: tuple(Market.model_validate(item) for item in payload),
            self._ttl.markets,
        )
    
    async def get_markets_data(self) -> Tuple[MarketData, ...]:
        return await self._cached(
            ResourceKind.MARKETS_DATA,
            MARKETS_DATA,
            lambda payload: tuple(MarketData.model_validate(item) for item in payload),
            self._ttl.market_data,
        )
    
    async def get_market_data(self, market_id: str) -> MarketData:
        market_id = str(market_id)
        return await self._cached(
            ResourceKind.MARKET_DATA,
            market_data_path(market_id),
            MarketData.model_validate,
            self._ttl.market_data,
            identifier=market_id,
        )
    
    async def get_market_by_ticker(self, ticker: str) -> Optional[Market]:
        markets = await self.get_markets()
        wanted = ticker.lower()
        return next((m for m in markets if m.ticker.lower() == wanted), None)
    
    async def find_market_by_symbol(self, symbol: str) -> Optional[Market]:
        """
        Resolve an asset symbol ("SOL") to its market ("SOL-rUSD").
        
        Tries, in order: exact ticker, "SYMBOL-" prefix, ticker substring,
        base asset, ticker component.
        
        :param symbol: Asset symbol, any case
        :return: First matching Market or None
        """
        markets = await self.get_markets()
        wanted = symbol.strip().upper()
        if not wanted:
            return None
        
        strategies = (
            ("exact ticker", lambda m: m.ticker.upper() == wanted),
            ("ticker prefix", lambda m: m.ticker.upper().startswith(wanted + "-")),
            ("ticker substring", lambda m: wanted in m.ticker.upper()),
            ("base asset", lambda m: bool(m.base_asset) and m.base_asset.upper() == wanted),
            ("ticker component", lambda m: any(
                wanted in part for part in m.ticker.upper().split("-")
            )),
        )
        for label, matches in strategies:
            market = next((m for m in markets if matches(m)), None)
            if market is not None:
                logger.info(f"Resolved symbol {wanted} to {market.ticker} by {label}")
                return market
        
        logger.info(f"No market found for symbol {wanted}")
        return None
    
    async def get_similar_markets(self, symbol: str) -> List[Market]:
        """Active markets sharing a 2-3 letter prefix with symbol (for suggestions)."""
        markets = await self.get_markets()
        wanted = symbol.strip().upper()
        if len(wanted) < 2:
            return []
        similar = []
        for market in markets:
            if not market.is_active:
                continue
            ticker = market.ticker.upper()
            base = ticker.split("-")[0]
            if wanted[:2] in ticker or wanted[:3] in ticker or base[:2] in wanted:
                similar.append(market)
        return similar
    
    async def get_top_markets_by_volume(self, limit: int = 5) -> List[MarketData]:
        markets_data = await self.get_markets_data()
        ranked = sorted(markets_data, key=lambda md: md.last24h_volume, reverse=True)
        return ranked[:limit]
