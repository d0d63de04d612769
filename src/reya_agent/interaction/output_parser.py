"""
Parsing of model completions for intent analysis.

parse_intent_output never raises: it returns either ParsedIntent or
UnparseableOutput, and callers decide what to do with the latter.
"""
import json
import re
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from .intent_types import ExtractedEntities, IntentKind

logger = logging.getLogger(__name__)

DEFAULT_MODEL_CONFIDENCE = 0.8

_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL | re.IGNORECASE)
_TAG_RE = re.compile(r"<([A-Za-z_][\w-]*)>(.*?)</\1>", re.DOTALL)


@dataclass(frozen=True)
class ParsedIntent:
    intent: IntentKind
    confidence: float
    reasoning: str
    extracted_entities: ExtractedEntities
    # Flags as claimed by the model; informational only
    claimed_should_use_api: Optional[bool] = None
    claimed_should_use_knowledge: Optional[bool] = None


@dataclass(frozen=True)
class UnparseableOutput:
    raw: str
    reason: str


IntentParseResult = Union[ParsedIntent, UnparseableOutput]


def parse_key_value_tags(text: str) -> Dict[str, str]:
    """
    Extract <key>value</key> pairs from a completion.
    
    Nested wrappers such as <response> are unwrapped; the innermost
    occurrence of each key wins.
    
    :param text: Model output
    :return: Mapping of tag name to stripped text
    """
    values: Dict[str, str] = {}
    for name, body in _TAG_RE.findall(text or ""):
        if _TAG_RE.search(body):
            values.update(parse_key_value_tags(body))
        else:
            values[name] = body.strip()
    return values


def _extract_json_object(text: str) -> Optional[Dict[str, Any]]:
    candidates = [m.strip() for m in _FENCE_RE.findall(text)]
    candidates.append(text.strip())
    
    # Prose around the object: take the outermost braces
    start, end = text.find("{"), text.rfind("}")
    if start != -1 and end > start:
        candidates.append(text[start:end + 1])
    
    for candidate in candidates:
        try:
            parsed = json.loads(candidate)
        except ValueError:
            continue
        if isinstance(parsed, dict):
            return parsed
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    return None


def _as_confidence(value: Any) -> Optional[float]:
    if value is None or value == "":
        return DEFAULT_MODEL_CONFIDENCE
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not 0.0 <= number <= 1.0:
        return None
    return number


def _as_assets(value: Any) -> List[str]:
    if isinstance(value, str):
        value = [part for part in re.split(r"[,\s]+", value) if part]
    if not isinstance(value, list):
        return []
    return [str(item).strip().upper() for item in value if item is not None and str(item).strip()]


def _entities_from(raw: Any, flat: Dict[str, Any]) -> ExtractedEntities:
    entities = raw if isinstance(raw, dict) else {}
    timeframe = entities.get("timeframe", flat.get("timeframe"))
    query_type = entities.get("queryType", flat.get("queryType"))
    return ExtractedEntities(
        assets=_as_assets(entities.get("assets", flat.get("assets"))),
        timeframe=str(timeframe) if timeframe else None,
        query_type=str(query_type) if query_type else None,
    )


def parse_intent_output(text: str) -> IntentParseResult:
    """
    Parse an intent-analysis completion.
    
    Accepts a JSON object (bare, fenced, or embedded in prose) or an explicit
    tag format (<intent>PRICE_QUERY</intent><confidence>0.9</confidence>...).
    
    :param text: Raw model output
    :return: ParsedIntent, or UnparseableOutput with the reason
    """
    if not text or not text.strip():
        return UnparseableOutput(raw=text or "", reason="empty completion")
    
    fields = _extract_json_object(text)
    if fields is None:
        fields = parse_key_value_tags(text)
    if not fields:
        return UnparseableOutput(raw=text, reason="no JSON object or tags found")
    
    label = str(fields.get("intent", "")).strip().upper()
    try:
        intent = IntentKind(label)
    except ValueError:
        return UnparseableOutput(raw=text, reason=f"unknown intent {label!r}")
    
    confidence = _as_confidence(fields.get("confidence"))
    if confidence is None:
        return UnparseableOutput(raw=text, reason=f"invalid confidence {fields.get('confidence')!r}")
    
    return ParsedIntent(
        intent=intent,
        confidence=confidence,
        reasoning=str(fields.get("reasoning") or "LLM analysis"),
        extracted_entities=_entities_from(fields.get("extractedEntities"), fields),
        claimed_should_use_api=_as_bool(fields.get("shouldUseAPI")),
        claimed_should_use_knowledge=_as_bool(fields.get("shouldUseKnowledge")),
    )
