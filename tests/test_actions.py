"""
Tests for the runtime actions.
"""
import pytest

from reya_agent.constants import ASSETS, MARKETS, PRICES, market_data_path
from reya_agent.interaction import DispatchGate, ExtractedEntities, IntentAnalysis, IntentKind
from reya_agent.plugin import (
    DISPATCH_STATE_KEY,
    GetAssetsAction,
    GetMarketsAction,
    GetPricesAction,
    Message,
    SmartDispatchAction,
    TurnState,
)
from reya_agent.services import AssetService, MarketService, PriceService

from conftest import FakeRuntime


def state_for(intent, assets=None):
    analysis = IntentAnalysis.for_intent(intent, 0.9, "test", ExtractedEntities(assets=assets or []))
    return TurnState(values={DISPATCH_STATE_KEY: DispatchGate().decide(analysis)})


class Replies:
    """Callback that records what an action emitted."""

    def __init__(self):
        self.contents = []

    async def __call__(self, content):
        self.contents.append(content)

    @property
    def texts(self):
        return [c["text"] for c in self.contents]


@pytest.fixture
def services(reya_api, cache, ttl_config):
    client = reya_api.client()
    return (
        MarketService(client, cache, ttl_config),
        PriceService(client, cache, ttl_config),
        AssetService(client, cache, ttl_config),
    )


@pytest.fixture
def price_action(services):
    markets, prices, _ = services
    return GetPricesAction(prices, markets)


@pytest.fixture
def replies():
    return Replies()


class TestSmartDispatchAction:
    """Tests for the routing-report action."""

    @pytest.mark.asyncio
    async def test_validates_on_reya_keywords(self):
        """Test dispatch validation keywords."""
        action = SmartDispatchAction()
        state = TurnState()

        assert await action.validate(FakeRuntime(), Message(text="что такое rUSD?"), state)
        assert not await action.validate(FakeRuntime(), Message(text="tell me a joke"), state)

    @pytest.mark.asyncio
    async def test_reports_flags_without_replying(self, replies):
        """Test dispatch reports flags silently."""
        action = SmartDispatchAction()

        result = await action.handler(
            FakeRuntime(),
            Message(text="what is rUSD"),
            state_for(IntentKind.KNOWLEDGE_QUERY),
            callback=replies,
        )

        assert result.success is True
        assert result.values["source"] == "knowledge_base"
        assert result.values["blocked_apis"] is True
        assert replies.contents == []

    @pytest.mark.asyncio
    async def test_missing_flags_reports_failure(self, replies):
        """Test handling when no dispatch flags were published."""
        result = await SmartDispatchAction().handler(
            FakeRuntime(), Message(text="reya"), TurnState(), callback=replies
        )

        assert result.success is False
        assert result.values["source"] == "fallback"
        assert replies.contents == []


class TestGetPricesAction:
    """Tests for price replies."""

    @pytest.mark.asyncio
    async def test_declines_knowledge_turn(self, price_action):
        """Test knowledge questions are left to the knowledge base."""
        admitted = await price_action.validate(
            FakeRuntime(), Message(text="what is BTC price"), state_for(IntentKind.KNOWLEDGE_QUERY)
        )

        assert admitted is False

    @pytest.mark.asyncio
    async def test_specific_price_from_extracted_entities(self, price_action, replies):
        """Test symbol taken from extracted entities."""
        runtime = FakeRuntime()

        result = await price_action.handler(
            runtime,
            Message(text="price of solana"),
            state_for(IntentKind.PRICE_QUERY, ["sol"]),
            callback=replies,
        )

        assert result.success is True
        assert result.values["symbol"] == "SOL"
        assert result.values["type"] == "specific_price"
        text = replies.texts[0]
        assert "**SOL-rUSD**" in text
        assert "Mark Price: $150.75" in text
        assert "Oracle Price: $150.70" in text
        assert "24h Change: 📈 +0.40%" in text
        # Entities already named the symbol
        assert runtime.prompts == []

    @pytest.mark.asyncio
    async def test_symbol_from_model_tags(self, price_action, replies):
        """Test symbol taken from model tag output."""
        runtime = FakeRuntime("<response><symbol>btc</symbol><type>specific</type></response>")

        await price_action.handler(
            runtime, Message(text="how much is bitcoin"), state_for(IntentKind.PRICE_QUERY),
            callback=replies,
        )

        assert "**BTC-rUSD**" in replies.texts[0]
        assert "Mark Price: $65,005.50" in replies.texts[0]
        assert "24h Change: 📉 -1.25%" in replies.texts[0]

    @pytest.mark.asyncio
    async def test_symbol_from_text_when_model_fails(self, price_action, replies):
        """Test symbol recovered from text on model failure."""
        runtime = FakeRuntime(RuntimeError("model unavailable"))

        result = await price_action.handler(
            runtime, Message(text="what's ethereum worth"), state_for(IntentKind.PRICE_QUERY),
            callback=replies,
        )

        assert result.values["symbol"] == "ETH"
        # 18-decimal fixed point oracle price
        assert "Oracle Price: $3,500.00" in replies.texts[0]

    @pytest.mark.asyncio
    async def test_overview_for_general_request(self, price_action, replies):
        """Test the general price overview."""
        runtime = FakeRuntime("<response><symbol></symbol><type>general</type></response>")

        result = await price_action.handler(
            runtime, Message(text="show me prices"), state_for(IntentKind.PRICE_QUERY),
            callback=replies,
        )

        text = replies.texts[0]
        assert result.values["type"] == "general_overview"
        assert "Reya Network Market Overview" in text
        assert "**3 Active Markets**" in text
        assert "BTC-rUSD: $65,005.50" in text
        assert "Price Range: $150.75 - $65,005.50" in text

    @pytest.mark.asyncio
    async def test_overview_with_very_large_price(self, price_action, reya_api, replies):
        """Test overview formatting of a price far above the usual range."""
        reya_api.routes[PRICES] = {
            "ETHUSD": {"marketId": 1, "price": "5e25", "updatedAt": 1700000000000},
        }
        runtime = FakeRuntime("<response><symbol></symbol><type>general</type></response>")

        result = await price_action.handler(
            runtime, Message(text="show me prices"), state_for(IntentKind.PRICE_QUERY),
            callback=replies,
        )

        assert result.success is True
        assert "Reya Network Market Overview" in replies.texts[0]
        assert "50,000,000,000,000,000,000,000,000.00" in replies.texts[0]

    @pytest.mark.asyncio
    async def test_unknown_symbol_suggests_markets(self, price_action, replies):
        """Test unknown symbols list active markets."""
        await price_action.handler(
            FakeRuntime(), Message(text="DOGE price"), state_for(IntentKind.PRICE_QUERY, ["DOGE"]),
            callback=replies,
        )

        text = replies.texts[0]
        assert "couldn't find a **DOGE** market" in text
        assert "ETH-rUSD, BTC-rUSD, SOL-rUSD" in text
        assert "OLD-rUSD" not in text

    @pytest.mark.asyncio
    async def test_missing_24h_change_is_tolerated(self, price_action, reya_api, replies):
        """Test price reply without market data."""
        reya_api.failures[market_data_path("3")] = 500

        result = await price_action.handler(
            FakeRuntime(), Message(text="SOL price"), state_for(IntentKind.PRICE_QUERY, ["SOL"]),
            callback=replies,
        )

        assert result.success is True
        assert "Mark Price: $150.75" in replies.texts[0]
        assert "24h Change" not in replies.texts[0]

    @pytest.mark.asyncio
    async def test_upstream_failure_becomes_apology(self, price_action, reya_api, replies):
        """Test upstream errors never reach the user."""
        reya_api.failures[MARKETS] = 503

        result = await price_action.handler(
            FakeRuntime(), Message(text="SOL price"), state_for(IntentKind.PRICE_QUERY, ["SOL"]),
            callback=replies,
        )

        assert result.success is False
        assert replies.contents[0]["error"] is True
        text = replies.texts[0]
        assert "try again in a moment" in text
        assert "503" not in text
        assert "api.reya.test" not in text

    @pytest.mark.asyncio
    async def test_prices_failure_in_overview(self, price_action, reya_api, replies):
        """Test prices fetch failure in the overview."""
        reya_api.failures[PRICES] = 500

        result = await price_action.handler(
            FakeRuntime(), Message(text="market overview"), state_for(IntentKind.PRICE_QUERY),
            callback=replies,
        )

        assert result.success is False
        assert "Sorry" in replies.texts[0]


class TestGetMarketsAction:
    """Tests for market replies."""

    @pytest.mark.asyncio
    async def test_markets_summary(self, services, replies):
        """Test the active market summary."""
        markets, _, _ = services
        action = GetMarketsAction(markets)
        state = state_for(IntentKind.MARKET_QUERY)
        message = Message(text="what markets are on reya?")

        assert await action.validate(FakeRuntime(), message, state)
        result = await action.handler(FakeRuntime(), message, state, callback=replies)

        text = replies.texts[0]
        assert result.values == {"active_markets_count": 3, "total_markets": 4}
        assert "3 active markets" in text
        assert "1. BTC-rUSD - $9,000,000" in text
        assert "2. ETH-rUSD - $1,500,000" in text


class TestGetAssetsAction:
    """Tests for asset replies."""

    @pytest.mark.asyncio
    async def test_specific_asset(self, services, replies):
        """Test a single asset reply."""
        _, _, assets = services
        action = GetAssetsAction(assets)

        result = await action.handler(
            FakeRuntime(), Message(text="tell me about USDC"), state_for(IntentKind.ASSET_QUERY),
            callback=replies,
        )

        text = replies.texts[0]
        assert result.values["specific_asset"] == "USDC"
        assert "**USD Coin (USDC)** Details" in text
        assert "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48" in text
        assert "**Created:** 2024-01-01" in text

    @pytest.mark.asyncio
    async def test_assets_overview(self, services, replies):
        """Test the general asset overview."""
        _, _, assets = services
        action = GetAssetsAction(assets)

        await action.handler(
            FakeRuntime(), Message(text="which tokens are supported"), state_for(IntentKind.ASSET_QUERY),
            callback=replies,
        )

        text = replies.texts[0]
        assert "Total Supported Assets: 3" in text
        assert "Decimal Configurations: 6, 18" in text
        assert "**WETH** (Wrapped Ether) - 18 decimals" in text
        assert "...and 1 more assets" in text

    @pytest.mark.asyncio
    async def test_assets_failure(self, services, reya_api, replies):
        """Test asset fetch failure becomes an apology."""
        _, _, assets = services
        reya_api.failures[ASSETS] = 500

        result = await GetAssetsAction(assets).handler(
            FakeRuntime(), Message(text="supported tokens"), state_for(IntentKind.ASSET_QUERY),
            callback=replies,
        )

        assert result.success is False
        assert "asset data" in replies.texts[0]
