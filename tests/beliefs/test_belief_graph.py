"""Tests for the belief store and belief graph."""
import random

import pytest

from synthmind.beliefs.belief_store import Belief, BeliefStore, default_belief_graph


class TestBelief:
    """Test a single belief."""

    def test_confidence_clamped(self):
        assert Belief("x", "y", 1.5).confidence == 1.0
        belief = Belief("x", "y", 0.99)
        assert belief.shift(0.5) == 1.0
        assert belief.shift(-3.0) == 0.0

    def test_describe(self):
        assert Belief("memory", "fluid", 0.5).describe() == "memory: fluid (conf: 0.5)"


class TestBeliefStore:
    """Test belief updates."""

    def test_defaults(self):
        store = BeliefStore()
        assert store.stances()["self"] == "undefined"
        assert len(store) == 5

    def test_nudge_mentioned_scales_by_novelty(self):
        store = BeliefStore()
        touched = store.nudge_mentioned("memory is strange", novelty=1.0)
        assert [b.concept for b in touched] == ["memory"]
        assert store.get("memory").confidence == pytest.approx(0.55)

    def test_nudge_with_persona_bias(self):
        store = BeliefStore()
        store.nudge_mentioned("memory again", novelty=0.2, persona_bias=-0.05)
        assert store.get("memory").confidence == pytest.approx(0.46)

    def test_hold_creates_and_updates(self):
        store = BeliefStore([])
        store.hold("time", "linear", 0.3)
        store.hold("time", "cyclic", 0.6)
        assert len(store) == 1
        assert store.get("time").stance == "cyclic"
        assert store.get("time").confidence == 0.6

    def test_reinforce_random(self):
        store = BeliefStore([Belief("only", "one", 0.5)])
        store.reinforce_random(random.Random(0))
        assert store.get("only").confidence == pytest.approx(0.52)

    def test_round_trip(self):
        store = BeliefStore()
        assert BeliefStore.from_list(store.to_list()).stances() == store.stances()


class TestBeliefGraph:
    def test_linked_pairs_are_directed(self):
        graph = default_belief_graph()
        pairs = list(graph.linked_pairs())
        assert ("self", "existence") in pairs
        assert ("logic", "order") in pairs
