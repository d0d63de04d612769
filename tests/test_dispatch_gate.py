"""
Tests for the dispatch gate.
"""
import dataclasses

import pytest

from reya_agent.interaction import (
    DispatchGate,
    ExtractedEntities,
    IntentAnalysis,
    IntentKind,
    ROUTING_TABLE,
)


def analysis_for(intent, assets=None):
    return IntentAnalysis.for_intent(
        intent, 0.9, "test", ExtractedEntities(assets=assets or [])
    )


@pytest.fixture
def gate():
    return DispatchGate(clock=lambda: 1700000000.0)


class TestDispatchGate:
    """Tests for intent -> DispatchFlags."""

    def test_routing_table_covers_every_intent(self):
        """Adding an IntentKind member requires a routing row."""
        assert set(ROUTING_TABLE) == set(IntentKind)

    @pytest.mark.parametrize("intent", list(IntentKind))
    def test_gate_is_total(self, gate, intent):
        """Test every intent yields flags."""
        flags = gate.decide(analysis_for(intent))

        assert flags.intent == intent
        assert isinstance(flags.allow_api_actions, bool)
        assert isinstance(flags.block_other_actions, bool)
        assert flags.used_source

    def test_knowledge_blocks_api(self, gate):
        """Test knowledge routing."""
        flags = gate.decide(analysis_for(IntentKind.KNOWLEDGE_QUERY))

        assert flags.allow_api_actions is False
        assert flags.block_other_actions is True
        assert flags.used_source == "knowledge_base"

    @pytest.mark.parametrize(
        "intent",
        [IntentKind.PRICE_QUERY, IntentKind.MARKET_QUERY, IntentKind.ASSET_QUERY],
    )
    def test_resource_intents_allow_api(self, gate, intent):
        """Test API routing."""
        flags = gate.decide(analysis_for(intent))

        assert flags.allow_api_actions is True
        assert flags.block_other_actions is False
        assert flags.used_source == "reya_api"

    @pytest.mark.parametrize(
        "intent, source",
        [
            (IntentKind.COMPARISON_QUERY, "comparison_query"),
            (IntentKind.HISTORICAL_DATA_QUERY, "historical_data_query"),
            (IntentKind.GENERAL_CHAT, "general_chat"),
        ],
    )
    def test_other_intents_have_no_opinion(self, gate, intent, source):
        """Test neutral intents."""
        flags = gate.decide(analysis_for(intent))

        assert flags.allow_api_actions is False
        assert flags.block_other_actions is False
        assert flags.used_source == source

    def test_unrecognized_intent_uses_catch_all(self, gate):
        """Test catch-all rule."""
        analysis = dataclasses.replace(analysis_for(IntentKind.GENERAL_CHAT), intent="SWAP_QUERY")

        flags = gate.decide(analysis)

        assert flags.allow_api_actions is False
        assert flags.block_other_actions is False
        assert flags.used_source == "swap_query"

    def test_flags_carry_analysis_details(self, gate):
        """Test flag contents."""
        flags = gate.decide(analysis_for(IntentKind.PRICE_QUERY, ["SOL"]))

        assert flags.extracted_entities.assets == ["SOL"]
        assert flags.timestamp == 1700000000.0
        assert flags.confidence == 0.9
        assert flags.should_use_api is True

    def test_decision_is_pure(self, gate):
        """Test repeated decisions are identical."""
        analysis = analysis_for(IntentKind.MARKET_QUERY)

        assert gate.decide(analysis) == gate.decide(analysis)

    def test_flags_are_read_only(self, gate):
        """Test flags cannot be mutated."""
        flags = gate.decide(analysis_for(IntentKind.PRICE_QUERY))

        with pytest.raises(dataclasses.FrozenInstanceError):
            flags.allow_api_actions = False
