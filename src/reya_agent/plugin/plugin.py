"""
Plugin assembly.

All dependency wiring lives here: one API client and one TTLCache per plugin
instance, shared by every service, provider and action.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ..api import ReyaApiClient
from ..cache import TTLCache
from ..config import ReyaAgentConfig
from ..config_loader import load_config_from_env, validate_config
from ..interaction.dispatch_gate import DispatchGate
from ..interaction.intent_analyzer import IntentAnalyzer
from ..services import AssetService, FeeService, MarketService, PriceService
from .actions import GetAssetsAction, GetMarketsAction, GetPricesAction, SmartDispatchAction
from .providers import AssetProvider, DispatchProvider, MarketProvider, PriceProvider
from .runtime import Action, AgentRuntime, Provider

logger = logging.getLogger(__name__)


@dataclass
class ReyaPlugin:
    """Providers and actions registered with the host runtime."""

    name: str
    description: str
    config: ReyaAgentConfig
    client: ReyaApiClient
    cache: TTLCache
    markets: MarketService
    prices: PriceService
    assets: AssetService
    fees: FeeService
    providers: List[Provider] = field(default_factory=list)
    actions: List[Action] = field(default_factory=list)

    async def aclose(self) -> None:
        """Release the shared HTTP client."""
        await self.client.aclose()
        logger.info("Reya plugin closed")


def create_plugin(
    runtime: AgentRuntime,
    config: Optional[ReyaAgentConfig] = None,
    client: Optional[ReyaApiClient] = None,
    cache: Optional[TTLCache] = None,
) -> ReyaPlugin:
    """
    Build the Reya plugin for a host runtime.

    Configuration is validated before anything else is constructed, so an
    invalid base URL or TTL fails here rather than on the first message.

    :param runtime: Host runtime (settings and text completion)
    :param config: Optional explicit configuration; loaded from runtime settings and env otherwise
    :param client: Optional prebuilt API client (tests inject one over a mock transport)
    :param cache: Optional shared cache (tests inject one with a fake clock)
    :return: Assembled ReyaPlugin
    :raises: ConfigurationError if the configuration is invalid
    """
    if config is None:
        config = load_config_from_env(runtime.get_setting)
    else:
        config = validate_config(config)

    client = client or ReyaApiClient(config.api_base_url, config.request_timeout_seconds)
    cache = cache or TTLCache()

    markets = MarketService(client, cache, config.cache_ttl)
    prices = PriceService(client, cache, config.cache_ttl)
    assets = AssetService(client, cache, config.cache_ttl)
    fees = FeeService(client, cache, config.cache_ttl)

    providers: List[Provider] = [
        DispatchProvider(IntentAnalyzer(runtime), DispatchGate()),
        MarketProvider(markets),
        PriceProvider(prices, markets),
        AssetProvider(assets),
    ]
    providers.sort(key=lambda p: p.priority)

    actions: List[Action] = [
        SmartDispatchAction(),
        GetPricesAction(prices, markets),
        GetMarketsAction(markets),
        GetAssetsAction(assets),
    ]

    logger.info(
        f"Reya plugin initialized: base_url={client.base_url}, "
        f"providers={[p.name for p in providers]}, actions={[a.name for a in actions]}"
    )
    return ReyaPlugin(
        name="reya",
        description=(
            "Reya Network DEX integration: live markets, prices and assets with "
            "intent-gated dispatch between the API and the knowledge base"
        ),
        config=config,
        client=client,
        cache=cache,
        markets=markets,
        prices=prices,
        assets=assets,
        fees=fees,
        providers=providers,
        actions=actions,
    )
