"""
Runtime actions.

Resource actions (prices, markets, assets) only run when the dispatch gate
allowed API use for the turn and the message is on their topic. Upstream
failures become a generic apology; raw errors never reach the user.
"""
import logging
import re
from typing import Any, Dict, Optional, Tuple

from ..cache import ResourceKind
from ..exceptions import UpstreamFetchError
from ..interaction.output_parser import parse_key_value_tags
from ..interaction.prompts import SYMBOL_EXTRACTION_PROMPT
from ..interaction.topic_matcher import REYA_RELATED_KEYWORDS, matches_keywords
from ..services import AssetService, MarketService, PriceService
from .admission import admit
from .formatting import (
    format_change,
    format_date,
    format_price,
    format_timestamp,
    format_volume,
)
from .runtime import Action, ActionResult, AgentRuntime, HandlerCallback, Message, TurnState

logger = logging.getLogger(__name__)

RETRY_LATER = (
    "Sorry, I couldn't fetch the {what} data from Reya Network right now. "
    "Please try again in a moment."
)


def _example(user_text: str, reply: str, action: str):
    return [
        {"name": "{{user1}}", "content": {"text": user_text}},
        {"name": "{{agent}}", "content": {"text": reply, "actions": [action]}},
    ]


class SmartDispatchAction(Action):
    """
    Reports the gate's routing decision for Reya-related messages.

    Produces no reply of its own: knowledge-routed turns are left to the
    knowledge responder, API-routed turns to the resource actions.
    """

    name = "SMART_REYA_DISPATCH"
    similes = ["REYA_SMART_ROUTER", "REYA_INTENT_DISPATCHER", "REYA_INTELLIGENT_HANDLER"]
    description = (
        "Routes Reya Network queries to the appropriate data source based on user intent analysis"
    )
    examples = [
        _example("что такое rUSD?", "Let me explain rUSD.", "SMART_REYA_DISPATCH"),
        _example("What's the BTC price on Reya?", "Checking the live BTC price.", "SMART_REYA_DISPATCH"),
    ]

    async def validate(self, runtime: AgentRuntime, message: Message, state: TurnState) -> bool:
        return matches_keywords(REYA_RELATED_KEYWORDS, message.text)

    async def handler(
        self,
        runtime: AgentRuntime,
        message: Message,
        state: TurnState,
        options: Optional[Dict[str, Any]] = None,
        callback: Optional[HandlerCallback] = None,
    ) -> ActionResult:
        flags = state.dispatch_flags
        if flags is None:
            logger.warning("Smart dispatch action: no dispatch flags in state, letting others handle")
            return ActionResult(
                success=False,
                values={"handled_by": "smart_dispatcher", "source": "fallback"},
                data={"action_name": self.name},
            )

        logger.info(
            f"Smart dispatch action: source={flags.used_source} "
            f"blocked_apis={flags.block_other_actions}"
        )
        return ActionResult(
            success=True,
            values={
                "handled_by": "smart_dispatcher",
                "source": flags.used_source,
                "blocked_apis": flags.block_other_actions,
                "allow_api_actions": flags.allow_api_actions,
            },
            data={"action_name": self.name, "dispatch_flags": flags},
        )


class ResourceAction(Action):
    """Gated action backed by the Reya API."""

    resource_kind: ResourceKind
    resource_label = "Reya"

    async def validate(self, runtime: AgentRuntime, message: Message, state: TurnState) -> bool:
        return admit(self.resource_kind, message, state)

    async def handler(
        self,
        runtime: AgentRuntime,
        message: Message,
        state: TurnState,
        options: Optional[Dict[str, Any]] = None,
        callback: Optional[HandlerCallback] = None,
    ) -> ActionResult:
        logger.info(f"Executing {self.name}")
        try:
            text, values = await self._respond(runtime, message, state)
        except UpstreamFetchError as e:
            logger.error(f"Error in {self.name}: {e}")
            apology = RETRY_LATER.format(what=self.resource_label)
            if callback:
                await callback({"text": apology, "action": self.name, "error": True})
            return ActionResult(
                success=False,
                text=apology,
                data={"action_name": self.name, "resource_kind": e.resource_kind},
                error=e,
            )

        if callback:
            await callback({"text": text, "action": self.name})
        return ActionResult(
            success=True,
            text=text,
            values=values,
            data={"action_name": self.name},
        )

    async def _respond(
        self, runtime: AgentRuntime, message: Message, state: TurnState
    ) -> Tuple[str, Dict[str, Any]]:
        raise NotImplementedError


class GetPricesAction(ResourceAction):
    name = "GET_REYA_PRICES"
    similes = [
        "REYA_PRICE_CHECK",
        "REYA_SPECIFIC_PRICE",
        "REYA_PRICE_LOOKUP",
        "REYA_PRICE_DATA",
        "CHECK_REYA_PRICE",
    ]
    description = (
        "Get current prices from Reya Network DEX for specific assets or a general price overview"
    )
    examples = [
        _example("What's the current price of SOL on Reya?", "I'll check the current SOL price on Reya Network.", "GET_REYA_PRICES"),
        _example("сколько стоит HYPE", "Проверю текущую цену HYPE на Reya Network.", "GET_REYA_PRICES"),
        _example("show me market overview", "Here's a price overview from Reya Network.", "GET_REYA_PRICES"),
    ]
    resource_kind = ResourceKind.PRICES
    resource_label = "price"

    NAME_TO_SYMBOL = {
        "bitcoin": "BTC",
        "ethereum": "ETH",
        "solana": "SOL",
        "uniswap": "UNI",
        "chainlink": "LINK",
        "dogecoin": "DOGE",
    }
    NOT_SYMBOLS = {"REYA", "DEX", "API", "USD", "PRICE", "WHAT", "SHOW", "THE"}
    _TICKER_RE = re.compile(r"\b[A-Z]{2,5}\b")

    def __init__(self, prices: PriceService, markets: MarketService):
        self._prices = prices
        self._markets = markets

    async def _respond(self, runtime, message, state):
        symbol = await self._extract_symbol(runtime, message, state)
        if symbol:
            text = await self._specific_price(symbol)
        else:
            text = await self._overview()
        values = {
            "symbol": symbol or "",
            "type": "specific_price" if symbol else "general_overview",
            "prices_fetched": True,
        }
        return text, values

    async def _extract_symbol(
        self, runtime: AgentRuntime, message: Message, state: TurnState
    ) -> Optional[str]:
        flags = state.dispatch_flags
        if flags is not None and flags.extracted_entities.assets:
            return flags.extracted_entities.assets[0].upper()

        try:
            response = await runtime.complete(SYMBOL_EXTRACTION_PROMPT.format(message=message.text))
        except Exception as e:
            logger.warning(f"Symbol extraction via model failed, scanning text instead: {e}")
            return self._symbol_from_text(message.text)

        extracted = parse_key_value_tags(response)
        symbol = extracted.get("symbol", "").strip().upper()
        if extracted.get("type", "general").lower() == "specific" and symbol:
            return symbol
        if not extracted:
            return self._symbol_from_text(message.text)
        return None

    def _symbol_from_text(self, text: str) -> Optional[str]:
        lowered = text.lower()
        for name, symbol in self.NAME_TO_SYMBOL.items():
            if name in lowered:
                return symbol
        for token in self._TICKER_RE.findall(text):
            if token not in self.NOT_SYMBOLS:
                return token
        return None

    async def _specific_price(self, symbol: str) -> str:
        market = await self._markets.find_market_by_symbol(symbol)
        if market is None:
            return await self._not_found(symbol)

        price = await self._prices.get_price_by_market_id(market.id)
        if price is None:
            return (
                f"I found the {market.ticker} market but couldn't get the current price. "
                f"Please try again."
            )

        lines = [
            f"Current {symbol} price on Reya Network:",
            "",
            f"**{market.ticker}**",
            f"• Mark Price: ${format_price(price.price)}",
            f"• Oracle Price: ${format_price(price.oracle_price)}",
            f"• Pool Price: ${format_price(price.pool_price)}",
        ]
        try:
            market_data = await self._markets.get_market_data(market.id)
            lines.append(f"• 24h Change: {format_change(market_data.price_change24h_percentage)}")
        except UpstreamFetchError as e:
            logger.warning(f"Could not fetch 24h change for {market.ticker}: {e}")
        lines.append(f"• Last Update: {format_timestamp(price.updated_at)}")
        lines.extend([
            "",
            "The mark price is what you'll trade at, while oracle and pool prices show market dynamics.",
        ])
        return "\n".join(lines)

    async def _not_found(self, symbol: str) -> str:
        markets = await self._markets.get_markets()
        similar = await self._markets.get_similar_markets(symbol)
        available = ", ".join([m.ticker for m in markets if m.is_active][:15])

        text = f"I couldn't find a **{symbol}** market on Reya Network."
        if similar:
            text += f"\n\n🤔 **Did you mean one of these?**\n{', '.join(m.ticker for m in similar)}"
        text += f"\n\n📋 **Available markets** (first 15): {available}"
        text += "\n\n💡 Try asking for a market overview, or use the exact ticker like \"BTC-rUSD\"."
        return text

    async def _overview(self) -> str:
        prices = await self._prices.get_prices()
        summary = await self._prices.get_prices_summary()
        markets = await self._markets.get_markets()
        tickers = {m.id: m.ticker for m in markets}

        valid = [p for p in prices if format_price(p.price) != "N/A"][:5]
        rows = "\n".join(
            f"{i}. {tickers.get(str(p.market_id), f'Market {p.market_id}')}: ${format_price(p.price)}"
            for i, p in enumerate(valid, start=1)
        )
        return (
            f"Reya Network Market Overview:\n\n"
            f"**{summary.total_markets} Active Markets**\n"
            f"{rows}\n\n"
            f"**Market Statistics:**\n"
            f"• Average Price: ${format_price(summary.average_price)}\n"
            f"• Price Range: ${format_price(summary.min_price)} - ${format_price(summary.max_price)}\n"
            f"• Last Update: {format_timestamp(summary.last_update)}"
        )


class GetMarketsAction(ResourceAction):
    name = "GET_REYA_MARKETS"
    similes = ["REYA_MARKETS", "REYA_MARKET_OVERVIEW", "REYA_TRADING_PAIRS"]
    description = (
        "Get market data from Reya Network DEX including active markets, volumes, and trading pairs"
    )
    examples = [
        _example("What markets are available on Reya?", "Here are the active Reya Network markets.", "GET_REYA_MARKETS"),
        _example("какие рынки доступны?", "Вот активные рынки Reya Network.", "GET_REYA_MARKETS"),
    ]
    resource_kind = ResourceKind.MARKETS
    resource_label = "market"

    def __init__(self, markets: MarketService):
        self._markets = markets

    async def _respond(self, runtime, message, state):
        markets = await self._markets.get_markets()
        top = await self._markets.get_top_markets_by_volume(5)
        tickers = {m.id: m.ticker for m in markets}
        active = [m for m in markets if m.is_active]

        rows = "\n".join(
            f"{i}. {tickers.get(md.market_id, md.market_id)} - ${format_volume(md.last24h_volume)}"
            for i, md in enumerate(top, start=1)
        )
        text = (
            f"Reya Network currently has {len(active)} active markets.\n\n"
            f"Top markets by 24h volume:\n{rows}"
        )
        values = {"active_markets_count": len(active), "total_markets": len(markets)}
        return text, values


class GetAssetsAction(ResourceAction):
    name = "GET_REYA_ASSETS"
    similes = ["REYA_ASSETS", "REYA_SUPPORTED_TOKENS", "REYA_COLLATERAL"]
    description = (
        "Get asset information from Reya Network including supported tokens, contracts, and asset details"
    )
    examples = [
        _example("Which assets are supported on Reya?", "Here are the assets Reya Network supports.", "GET_REYA_ASSETS"),
        _example("какие активы поддерживаются?", "Вот поддерживаемые активы Reya Network.", "GET_REYA_ASSETS"),
    ]
    resource_kind = ResourceKind.ASSETS
    resource_label = "asset"

    MAJOR_ASSETS = ("USDC", "USDT", "ETH", "BTC", "WETH", "WBTC")
    # Checked in order; "eth" also catches "ethereum"
    SPECIFIC_ASSET_HINTS = (("usdc", "USDC"), ("usdt", "USDT"), ("eth", "ETH"))

    def __init__(self, assets: AssetService):
        self._assets = assets

    async def _respond(self, runtime, message, state):
        text = message.text.lower()
        specific = next(
            (symbol for hint, symbol in self.SPECIFIC_ASSET_HINTS if hint in text), None
        )
        if specific:
            reply = await self._asset_details(specific)
        else:
            reply = await self._overview()
        return reply, {"specific_asset": specific}

    async def _asset_details(self, symbol: str) -> str:
        asset = await self._assets.get_asset_by_symbol(symbol)
        if asset is None:
            return f"I couldn't find {symbol} in the supported assets on Reya Network."
        return (
            f"**{asset.name} ({asset.short})** Details:\n\n"
            f"• **Contract:** `{asset.address}`\n"
            f"• **Decimals:** {asset.decimals}\n"
            f"• **Created:** {format_date(asset.created_at)}\n"
            f"• **Last Updated:** {format_date(asset.updated_at)}\n\n"
            f"This asset is supported for trading and collateral on Reya Network."
        )

    async def _overview(self) -> str:
        assets = await self._assets.get_assets()
        summary = await self._assets.get_assets_summary()
        major = [a for a in assets if a.short.upper() in self.MAJOR_ASSETS][:10]
        rows = "\n".join(f"• **{a.short}** ({a.name}) - {a.decimals} decimals" for a in major)

        text = (
            f"Reya Network Asset Overview:\n\n"
            f"• Total Supported Assets: {summary.total_assets}\n"
            f"• Decimal Configurations: {', '.join(str(d) for d in summary.unique_decimals)}\n\n"
            f"**Major Assets Available:**\n{rows}"
        )
        if len(major) < len(assets):
            text += f"\n\n...and {len(assets) - len(major)} more assets for trading and collateral."
        return text
