"""
Intent taxonomy for incoming messages.

INTENT_SOURCE_FLAGS is the single table both the model path and the keyword
fallback take their API/knowledge flags from.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple


class IntentKind(str, Enum):
    """Closed set of message intents."""
    KNOWLEDGE_QUERY = "KNOWLEDGE_QUERY"
    PRICE_QUERY = "PRICE_QUERY"
    MARKET_QUERY = "MARKET_QUERY"
    ASSET_QUERY = "ASSET_QUERY"
    COMPARISON_QUERY = "COMPARISON_QUERY"
    HISTORICAL_DATA_QUERY = "HISTORICAL_DATA_QUERY"
    GENERAL_CHAT = "GENERAL_CHAT"


# intent -> (should_use_api, should_use_knowledge)
INTENT_SOURCE_FLAGS: Dict[IntentKind, Tuple[bool, bool]] = {
    IntentKind.KNOWLEDGE_QUERY: (False, True),
    IntentKind.PRICE_QUERY: (True, False),
    IntentKind.MARKET_QUERY: (True, False),
    IntentKind.ASSET_QUERY: (True, False),
    IntentKind.COMPARISON_QUERY: (True, True),
    # No historical endpoint exists on the API
    IntentKind.HISTORICAL_DATA_QUERY: (False, False),
    IntentKind.GENERAL_CHAT: (False, False),
}


def source_flags_for(intent: IntentKind) -> Tuple[bool, bool]:
    """
    Get (should_use_api, should_use_knowledge) for an intent.
    
    :param intent: IntentKind value
    :return: Tuple of flags
    """
    return INTENT_SOURCE_FLAGS[intent]


@dataclass(frozen=True)
class ExtractedEntities:
    assets: List[str] = field(default_factory=list)
    timeframe: Optional[str] = None
    query_type: Optional[str] = None


@dataclass(frozen=True)
class IntentAnalysis:
    """Classification of one message. Produced fresh per turn."""
    intent: IntentKind
    confidence: float
    reasoning: str
    should_use_api: bool
    should_use_knowledge: bool
    extracted_entities: ExtractedEntities = field(default_factory=ExtractedEntities)

    @classmethod
    def for_intent(
        cls,
        intent: IntentKind,
        confidence: float,
        reasoning: str,
        extracted_entities: Optional[ExtractedEntities] = None,
    ) -> "IntentAnalysis":
        """Build an analysis whose flags come from INTENT_SOURCE_FLAGS."""
        should_use_api, should_use_knowledge = source_flags_for(intent)
        return cls(
            intent=intent,
            confidence=min(max(float(confidence), 0.0), 1.0),
            reasoning=reasoning,
            should_use_api=should_use_api,
            should_use_knowledge=should_use_knowledge,
            extracted_entities=extracted_entities or ExtractedEntities(),
        )
