"""
Host runtime plugin: dispatch and resource providers, resource actions.

create_plugin() wires everything around one API client and one cache.
"""
from .runtime import (
    DISPATCH_STATE_KEY,
    Action,
    ActionResult,
    AgentRuntime,
    LangChainRuntime,
    Message,
    Provider,
    ProviderResult,
    TurnState,
    compose_state,
)
from .admission import admit, api_allowed
from .providers import AssetProvider, DispatchProvider, MarketProvider, PriceProvider
from .actions import GetAssetsAction, GetMarketsAction, GetPricesAction, SmartDispatchAction
from .plugin import ReyaPlugin, create_plugin

__all__ = [
    "DISPATCH_STATE_KEY",
    "Action",
    "ActionResult",
    "AgentRuntime",
    "LangChainRuntime",
    "Message",
    "Provider",
    "ProviderResult",
    "TurnState",
    "compose_state",
    "admit",
    "api_allowed",
    "AssetProvider",
    "DispatchProvider",
    "MarketProvider",
    "PriceProvider",
    "GetAssetsAction",
    "GetMarketsAction",
    "GetPricesAction",
    "SmartDispatchAction",
    "ReyaPlugin",
    "create_plugin",
]
