"""
Interaction layer: intent classification, dispatch gating and topic matching.

Sits between the host runtime's message intake and the resource actions.
The gate's flags are the only channel between the two.
"""
from .intent_types import (
    ExtractedEntities,
    IntentAnalysis,
    IntentKind,
    INTENT_SOURCE_FLAGS,
    source_flags_for,
)
from .intent_analyzer import CompletionModel, IntentAnalyzer
from .dispatch_gate import DispatchFlags, DispatchGate, ROUTING_TABLE
from .output_parser import (
    ParsedIntent,
    UnparseableOutput,
    parse_intent_output,
    parse_key_value_tags,
)
from .topic_matcher import TOPIC_KEYWORDS, matches_keywords, matches_topic

__all__ = [
    "ExtractedEntities",
    "IntentAnalysis",
    "IntentKind",
    "INTENT_SOURCE_FLAGS",
    "source_flags_for",
    "CompletionModel",
    "IntentAnalyzer",
    "DispatchFlags",
    "DispatchGate",
    "ROUTING_TABLE",
    "ParsedIntent",
    "UnparseableOutput",
    "parse_intent_output",
    "parse_key_value_tags",
    "TOPIC_KEYWORDS",
    "matches_keywords",
    "matches_topic",
]
