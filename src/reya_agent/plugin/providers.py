"""
Context providers.

DispatchProvider runs first (priority -50) and publishes the gate's
DispatchFlags; the resource providers read them and stay silent unless API
use was allowed for the turn.
"""
import logging
from typing import Optional

from ..exceptions import UpstreamFetchError
from ..interaction.dispatch_gate import DispatchGate
from ..interaction.intent_analyzer import IntentAnalyzer
from ..services import AssetService, MarketService, PriceService
from .admission import api_allowed
from .formatting import format_price, format_timestamp, format_volume
from .runtime import DISPATCH_STATE_KEY, AgentRuntime, Message, Provider, ProviderResult, TurnState

logger = logging.getLogger(__name__)


class DispatchProvider(Provider):
    """Analyzes intent and publishes dispatch flags for later components."""
    
    name = "SMART_REYA_DISPATCH_PROVIDER"
    description = "Analyzes user intent and sets smart dispatch gating flags"
    priority = -50
    
    def __init__(self, analyzer: IntentAnalyzer, gate: DispatchGate):
        self._analyzer = analyzer
        self._gate = gate
    
    async def get(self, runtime: AgentRuntime, message: Message, state: TurnState) -> ProviderResult:
        try:
            analysis = await self._analyzer.analyze(message.text)
            flags = self._gate.decide(analysis)
        except Exception as e:
            # No flags means every API action declines this turn
            logger.error(f"Smart dispatch provider failed: {e!r}")
            return ProviderResult(data={"smart_dispatch_error": str(e)})
        
        return ProviderResult(
            values={DISPATCH_STATE_KEY: flags},
            data={"smart_dispatch_raw": analysis},
        )


class _GatedResourceProvider(Provider):
    """Skips the API entirely on turns the gate did not open."""
    
    failure_text = ""
    
    async def get(self, runtime: AgentRuntime, message: Message, state: TurnState) -> ProviderResult:
        if not api_allowed(state):
            logger.debug(f"{self.name}: skipped, API use not allowed this turn")
            return ProviderResult()
        
        try:
            text = await self._context_text()
        except UpstreamFetchError as e:
            logger.error(f"{self.name}: {e}")
            return ProviderResult(
                data={f"{self.name}_error": str(e)},
                text=self.failure_text,
            )
        return ProviderResult(text=text)
    
    async def _context_text(self) -> Optional[str]:
        raise NotImplementedError


class MarketProvider(_GatedResourceProvider):
    name = "reyaMarketProvider"
    description = "Active markets and volume leaders on Reya Network"
    failure_text = "Failed to fetch market data from Reya Network"
    
    def __init__(self, markets: MarketService):
        self._markets = markets
    
    async def _context_text(self) -> str:
        markets = await self._markets.get_markets()
        top = await self._markets.get_top_markets_by_volume(3)
        tickers = {m.id: m.ticker for m in markets}
        active = [m for m in markets if m.is_active]
        leaders = ", ".join(
            f"{tickers.get(md.market_id, md.market_id)} (${format_volume(md.last24h_volume)})"
            for md in top
        )
        return (
            f"Reya Network DEX has {len(active)} active perpetual markets. "
            f"Top volume leaders: {leaders}."
        )


class PriceProvider(_GatedResourceProvider):
    name = "reyaPriceProvider"
    description = "Live price feeds on Reya Network"
    failure_text = "Failed to fetch price data from Reya Network"
    
    def __init__(self, prices: PriceService, markets: MarketService):
        self._prices = prices
        self._markets = markets
    
    async def _context_text(self) -> str:
        prices = await self._prices.get_prices()
        summary = await self._prices.get_prices_summary()
        markets = await self._markets.get_markets()
        tickers = {m.id: m.ticker for m in markets}
        
        top = ", ".join(
            f"{tickers.get(str(p.market_id), f'Market {p.market_id}')}: ${format_price(p.price)}"
            for p in prices[:3]
        )
        return (
            f"REYA NETWORK LIVE PRICE DATA: {summary.total_markets} active price feeds. "
            f"Top markets: {top}. Last update: {format_timestamp(summary.last_update)}."
        )


class AssetProvider(_GatedResourceProvider):
    name = "reyaAssetProvider"
    description = "Supported assets and collateral on Reya Network"
    failure_text = "Failed to fetch asset data from Reya Network"
    
    def __init__(self, assets: AssetService):
        self._assets = assets
    
    async def _context_text(self) -> str:
        assets = await self._assets.get_assets()
        summary = await self._assets.get_assets_summary()
        major = ", ".join(f"{a.short} ({a.name})" for a in assets[:3])
        decimals = ", ".join(str(d) for d in summary.unique_decimals)
        return (
            f"Reya Network supports {summary.total_assets} assets for trading and collateral. "
            f"Major assets include: {major}. Decimal precision: {decimals}."
        )
