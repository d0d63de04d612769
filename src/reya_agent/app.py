"""
Public application facade for the Reya agent plugin.

Lets a script or a simple host drive the plugin one message at a time
without implementing the full runtime contract.
"""
import logging
from typing import Any, Dict, List, Optional

from .cache import ResourceKind
from .config import ReyaAgentConfig
from .config_loader import load_config_from_env
from .interaction import IntentKind
from .llm_factory import get_llm_instance
from .plugin import (
    Action,
    AgentRuntime,
    LangChainRuntime,
    Message,
    ReyaPlugin,
    TurnState,
    compose_state,
    create_plugin,
)

logger = logging.getLogger(__name__)

INTENT_RESOURCES = {
    IntentKind.PRICE_QUERY: ResourceKind.PRICES,
    IntentKind.MARKET_QUERY: ResourceKind.MARKETS,
    IntentKind.ASSET_QUERY: ResourceKind.ASSETS,
}


class ReyaAgentApp:
    """
    Public application facade for the Reya agent plugin.

    Usage:
        app = ReyaAgentApp(load_config_from_env())
        app.initialize()
        reply = await app.respond("What's the BTC price on Reya?")
        await app.aclose()
    """

    def __init__(self, config: Optional[ReyaAgentConfig] = None):
        """
        :param config: ReyaAgentConfig instance; loaded from the environment when omitted
        """
        self._config = config
        self._runtime: Optional[AgentRuntime] = None
        self._plugin: Optional[ReyaPlugin] = None

    @property
    def plugin(self) -> ReyaPlugin:
        if not self._plugin:
            raise RuntimeError("App not initialized. Call initialize() first.")
        return self._plugin

    def initialize(self, runtime: Optional[AgentRuntime] = None, llm: Any = None, **plugin_kwargs) -> None:
        """
        Build the runtime and the plugin.

        Without a runtime, a LangChainRuntime is created around ``llm`` or,
        when that is missing too, around the model named by the config.

        :param runtime: Optional host runtime
        :param llm: Optional LangChain chat model
        :param plugin_kwargs: Passed through to create_plugin (client, cache)
        :raises: ConfigurationError if the configuration is invalid
        """
        if self._plugin:
            return

        if self._config is None:
            self._config = load_config_from_env(runtime.get_setting if runtime else None)

        if runtime is None:
            if llm is None:
                llm = get_llm_instance(
                    provider=self._config.llm_provider,
                    model=self._config.llm_model,
                )
            runtime = LangChainRuntime(llm)

        self._runtime = runtime
        self._plugin = create_plugin(runtime, self._config, **plugin_kwargs)

    async def respond(self, text: str, user: Optional[str] = None) -> Optional[str]:
        """
        Handle one message.

        Providers compose the turn state, then validated actions run in order
        until one of them emits a reply.

        :param text: User message
        :param user: Optional user identifier
        :return: Reply text, or None when no action answered (knowledge base / chat turn)
        :raises: RuntimeError if initialize() has not been called
        """
        plugin = self.plugin
        message = Message(text=text, user=user)
        state = await compose_state(self._runtime, message, plugin.providers)

        replies: List[str] = []

        async def collect(content: Dict[str, Any]) -> None:
            replies.append(content["text"])

        for action in self._ordered_actions(state):
            if not await action.validate(self._runtime, message, state):
                continue
            result = await action.handler(self._runtime, message, state, callback=collect)
            logger.debug(f"{action.name} finished: success={result.success}")
            if replies:
                return replies[-1]

        flags = state.dispatch_flags
        logger.info(
            f"No action replied (source={flags.used_source if flags else 'none'})"
        )
        return None

    def _ordered_actions(self, state: TurnState) -> List[Action]:
        # Topic keywords overlap ("reya", "market"), so the action serving the
        # classified intent gets the first chance to answer
        flags = state.dispatch_flags
        preferred = INTENT_RESOURCES.get(flags.intent) if flags else None
        return sorted(
            self.plugin.actions,
            key=lambda action: getattr(action, "resource_kind", None) != preferred,
        )

    async def aclose(self) -> None:
        if self._plugin:
            await self._plugin.aclose()
            self._plugin = None
