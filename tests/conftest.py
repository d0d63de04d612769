"""
Shared fakes for the Reya agent tests.

The remote API is served by httpx.MockTransport, the host runtime by a small
fake with a scripted completion.
"""
import json

import httpx
import pytest

from reya_agent.api import ReyaApiClient
from reya_agent.cache import TTLCache
from reya_agent.config import CacheTTLConfig, ReyaAgentConfig
from reya_agent.constants import (
    ASSETS,
    FEE_TIER_PARAMETERS,
    GLOBAL_FEE_PARAMETERS,
    MARKETS,
    MARKETS_DATA,
    PRICES,
    market_data_path,
)

BASE_URL = "https://api.reya.test"

MARKETS_PAYLOAD = [
    {"id": 1, "ticker": "ETH-rUSD", "markPrice": 3500.5, "isActive": True, "maxLeverage": 25, "baseAsset": "ETH"},
    {"id": 2, "ticker": "BTC-rUSD", "markPrice": 65005.5, "isActive": True, "maxLeverage": 25, "baseAsset": "BTC"},
    {"id": 3, "ticker": "SOL-rUSD", "markPrice": 150.75, "isActive": True, "maxLeverage": 20, "baseAsset": "SOL"},
    {"id": 4, "ticker": "OLD-rUSD", "markPrice": 1.0, "isActive": False},
]

MARKETS_DATA_PAYLOAD = [
    {"marketId": 1, "last24hVolume": 1500000.0, "priceChange24HPercentage": 2.5, "longOI": 120.0},
    {"marketId": 2, "last24hVolume": 9000000.0, "priceChange24HPercentage": -1.25},
    {"marketId": 3, "last24hVolume": 250000.0, "priceChange24HPercentage": 0.4},
]

PRICES_PAYLOAD = {
    "ETHUSD": {
        "marketId": 1,
        "oraclePrice": "3500000000000000000000",
        "poolPrice": "3499.5",
        "price": "3500.25",
        "updatedAt": 1700000000000,
    },
    "BTCUSD": {
        "marketId": 2,
        "oraclePrice": "65000.1",
        "poolPrice": "65010",
        "price": "65005.5",
        "updatedAt": 1700000005000,
    },
    "SOLUSD": {
        "marketId": 3,
        "oraclePrice": "150.7",
        "poolPrice": "150.8",
        "price": "150.75",
        "updatedAt": 1700000001000,
    },
}

ASSETS_PAYLOAD = [
    {
        "address": "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48",
        "name": "USD Coin",
        "short": "USDC",
        "decimals": 6,
        "createdAt": "2024-01-01T00:00:00Z",
        "updatedAt": "2024-06-01T00:00:00Z",
    },
    {
        "address": "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2",
        "name": "Wrapped Ether",
        "short": "WETH",
        "decimals": 18,
        "createdAt": "2024-03-01T00:00:00Z",
    },
    {
        "address": "0xa9F32a851B1800742e47725DA54a09A7Ef2556A3",
        "name": "Reya USD",
        "short": "rUSD",
        "decimals": 6,
        "createdAt": "2023-11-15T00:00:00Z",
    },
]

FEE_TIERS_PAYLOAD = [
    {"tier_id": 0, "taker_fee": "0.0004", "maker_fee": "0.0", "volume": "0"},
    {"tier_id": 1, "taker_fee": "0.00035", "maker_fee": "0.0", "volume": "10000000"},
]

GLOBAL_FEES_PAYLOAD = {
    "og_discount": "0.1",
    "referee_discount": "0.05",
    "referrer_rebate": "0.1",
    "affiliate_referrer_rebate": "0.15",
}


class FakeReyaApi:
    """Scripted Reya API behind an httpx.MockTransport."""

    def __init__(self):
        self.routes = {
            MARKETS: MARKETS_PAYLOAD,
            MARKETS_DATA: MARKETS_DATA_PAYLOAD,
            market_data_path("1"): MARKETS_DATA_PAYLOAD[0],
            market_data_path("2"): MARKETS_DATA_PAYLOAD[1],
            market_data_path("3"): MARKETS_DATA_PAYLOAD[2],
            ASSETS: ASSETS_PAYLOAD,
            PRICES: PRICES_PAYLOAD,
            FEE_TIER_PARAMETERS: FEE_TIERS_PAYLOAD,
            GLOBAL_FEE_PARAMETERS: GLOBAL_FEES_PAYLOAD,
        }
        self.failures = {}
        self.requests = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.requests.append(path)
        if path in self.failures:
            failure = self.failures[path]
            if isinstance(failure, Exception):
                raise failure
            return httpx.Response(failure, json={"error": "upstream failure"})
        if path in self.routes:
            return httpx.Response(200, content=json.dumps(self.routes[path]).encode(),
                                  headers={"Content-Type": "application/json"})
        return httpx.Response(404, json={"error": "not found"})

    def calls(self, path: str) -> int:
        return self.requests.count(path)

    def client(self) -> ReyaApiClient:
        http = httpx.AsyncClient(transport=httpx.MockTransport(self.handler))
        return ReyaApiClient(BASE_URL, http_client=http)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeRuntime:
    """
    Host runtime with scripted completions.

    completion may be a string, an exception to raise, or a callable
    taking the prompt.
    """

    def __init__(self, completion="", settings=None):
        self.completion = completion
        self.settings = dict(settings or {})
        self.prompts = []

    def get_setting(self, key):
        return self.settings.get(key)

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if isinstance(self.completion, Exception):
            raise self.completion
        if callable(self.completion):
            return self.completion(prompt)
        return self.completion


def intent_json(intent: str, confidence: float = 0.9, assets=None) -> str:
    return json.dumps({
        "intent": intent,
        "confidence": confidence,
        "reasoning": f"classified as {intent}",
        "extractedEntities": {"assets": assets or []},
    })


@pytest.fixture
def reya_api():
    return FakeReyaApi()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return TTLCache(clock=clock)


@pytest.fixture
def ttl_config():
    return CacheTTLConfig()


@pytest.fixture
def agent_config():
    return ReyaAgentConfig(api_base_url=BASE_URL)
