"""
Dispatch gate: turns an IntentAnalysis into routing flags.

The gate is a pure function of its input. It never calls handlers; its
output is threaded to them through per-turn state.
"""
import logging
import time
from dataclasses import dataclass
from typing import Dict, Tuple

from .intent_types import ExtractedEntities, IntentAnalysis, IntentKind

logger = logging.getLogger(__name__)

KNOWLEDGE_SOURCE = "knowledge_base"
REYA_API_SOURCE = "reya_api"


@dataclass(frozen=True)
class DispatchFlags:
    """Routing decision for one turn. Read-only once published."""
    intent: IntentKind
    allow_api_actions: bool
    block_other_actions: bool
    used_source: str
    extracted_entities: ExtractedEntities
    timestamp: float
    confidence: float = 0.0
    reasoning: str = ""
    should_use_api: bool = False
    should_use_knowledge: bool = False


# intent -> (allow_api_actions, block_other_actions, used_source)
ROUTING_TABLE: Dict[IntentKind, Tuple[bool, bool, str]] = {
    IntentKind.KNOWLEDGE_QUERY: (False, True, KNOWLEDGE_SOURCE),
    IntentKind.PRICE_QUERY: (True, False, REYA_API_SOURCE),
    IntentKind.MARKET_QUERY: (True, False, REYA_API_SOURCE),
    IntentKind.ASSET_QUERY: (True, False, REYA_API_SOURCE),
    IntentKind.COMPARISON_QUERY: (False, False, "comparison_query"),
    IntentKind.HISTORICAL_DATA_QUERY: (False, False, "historical_data_query"),
    IntentKind.GENERAL_CHAT: (False, False, "general_chat"),
}


def _route_for(intent) -> Tuple[bool, bool, str]:
    route = ROUTING_TABLE.get(intent)
    if route is not None:
        return route
    # Unrecognized value: no gate opinion
    label = getattr(intent, "value", intent)
    return (False, False, str(label).lower())


class DispatchGate:
    """
    Maps intents to DispatchFlags via ROUTING_TABLE.
    
    - KNOWLEDGE_QUERY: API actions blocked, knowledge responder owns the reply
    - PRICE/MARKET/ASSET_QUERY: API actions may validate and respond
    - everything else: no opinion, actions use their own admission checks
    """
    
    def __init__(self, clock=time.time):
        self._clock = clock
    
    def decide(self, analysis: IntentAnalysis) -> DispatchFlags:
        """
        Build the routing flags for an analysis.
        
        :param analysis: IntentAnalysis from the classifier
        :return: DispatchFlags
        """
        allow, block, source = _route_for(analysis.intent)
        flags = DispatchFlags(
            intent=analysis.intent,
            allow_api_actions=allow,
            block_other_actions=block,
            used_source=source,
            extracted_entities=analysis.extracted_entities,
            timestamp=self._clock(),
            confidence=analysis.confidence,
            reasoning=analysis.reasoning,
            should_use_api=analysis.should_use_api,
            should_use_knowledge=analysis.should_use_knowledge,
        )
        logger.info(
            f"Dispatch decision: intent={getattr(analysis.intent, 'value', analysis.intent)} "
            f"allow_api_actions={allow} block_other_actions={block} source={source}"
        )
        return flags
