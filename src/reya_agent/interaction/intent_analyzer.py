"""
Model-backed intent classification with a deterministic keyword fallback.
"""
import logging
from typing import Protocol

from ..exceptions import ClassificationError
from .intent_types import IntentAnalysis, IntentKind, source_flags_for
from .output_parser import ParsedIntent, UnparseableOutput, parse_intent_output
from .prompts import INTENT_ANALYSIS_PROMPT

logger = logging.getLogger(__name__)


class CompletionModel(Protocol):
    """The one capability the analyzer needs from the host runtime."""
    
    async def complete(self, prompt: str) -> str:
        ...


class IntentAnalyzer:
    """
    Assigns exactly one IntentKind to a message.
    
    The model path is tried first. Any failure on it (transport, parse,
    unknown label) is logged and answered by keyword matching instead, so
    callers always receive a valid IntentAnalysis.
    """
    
    # English and Russian markers, matched as lowercase substrings
    KNOWLEDGE_MARKERS = ("что такое", "what is", "explain", "как работает", "how does")
    PRICE_MARKERS = ("цена", "price", "стоимость", "сколько стоит")
    
    FALLBACK_CONFIDENCE = 0.7
    FALLBACK_CHAT_CONFIDENCE = 0.5
    
    def __init__(self, model: CompletionModel):
        """
        :param model: Object exposing async complete(prompt) -> str
        """
        self._model = model
    
    async def analyze(self, message_text: str) -> IntentAnalysis:
        """
        Classify a message.
        
        :param message_text: Raw user message
        :return: IntentAnalysis (never raises for model or parse failures)
        """
        text = message_text or ""
        logger.info(f"Analyzing intent for message: {text!r}")
        
        try:
            analysis = await self._analyze_with_model(text)
        except Exception as e:
            logger.warning(f"Intent analysis via model failed, using keyword fallback: {e}")
            return self.fallback_analysis(text)
        
        logger.info(
            f"Intent analysis: intent={analysis.intent.value} "
            f"confidence={analysis.confidence:.2f} "
            f"api={analysis.should_use_api} knowledge={analysis.should_use_knowledge}"
        )
        return analysis
    
    async def _analyze_with_model(self, text: str) -> IntentAnalysis:
        prompt = INTENT_ANALYSIS_PROMPT.format(message=text)
        response = await self._model.complete(prompt)
        logger.debug(f"Intent model response: {response!r}")
        
        result = parse_intent_output(response)
        if isinstance(result, UnparseableOutput):
            raise ClassificationError(f"Unparseable intent output: {result.reason}")
        
        return self._to_analysis(result)
    
    @staticmethod
    def _to_analysis(parsed: ParsedIntent) -> IntentAnalysis:
        should_use_api, should_use_knowledge = source_flags_for(parsed.intent)
        if parsed.claimed_should_use_api not in (None, should_use_api) or \
           parsed.claimed_should_use_knowledge not in (None, should_use_knowledge):
            logger.debug(
                f"Model flags for {parsed.intent.value} disagree with the intent table; "
                f"using table values"
            )
        return IntentAnalysis.for_intent(
            parsed.intent,
            parsed.confidence,
            parsed.reasoning,
            parsed.extracted_entities,
        )
    
    def fallback_analysis(self, message_text: str) -> IntentAnalysis:
        """
        Deterministic keyword classification.
        
        Knowledge markers win over price markers ("what is the BTC price"
        counts as an explanation request).
        
        :param message_text: Raw user message
        :return: KNOWLEDGE_QUERY, PRICE_QUERY or GENERAL_CHAT analysis
        """
        text = (message_text or "").lower()
        
        if any(marker in text for marker in self.KNOWLEDGE_MARKERS):
            return IntentAnalysis.for_intent(
                IntentKind.KNOWLEDGE_QUERY,
                self.FALLBACK_CONFIDENCE,
                "Fallback: detected explanation request",
            )
        
        if any(marker in text for marker in self.PRICE_MARKERS):
            return IntentAnalysis.for_intent(
                IntentKind.PRICE_QUERY,
                self.FALLBACK_CONFIDENCE,
                "Fallback: detected price request",
            )
        
        return IntentAnalysis.for_intent(
            IntentKind.GENERAL_CHAT,
            self.FALLBACK_CHAT_CONFIDENCE,
            "Fallback: no clear intent detected",
        )
