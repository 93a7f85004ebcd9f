"""Tests for contradiction detection."""
from synthmind.beliefs.belief_store import Belief, BeliefGraph, BeliefStore, default_belief_graph
from synthmind.beliefs.contradiction import detect_contradictions


class TestCanonicalContradictions:
    """Test single-concept stance conflicts."""

    def test_both_labels_in_stance(self):
        beliefs = BeliefStore([Belief("self", "undefined and defined")])
        found = detect_contradictions(beliefs, BeliefGraph())
        assert found == ["Contradiction in 'self' between 'undefined' and 'defined'"]

    def test_default_self_stance_is_flagged(self):
        """'defined' is a substring of 'undefined', so the boot stance already conflicts."""
        found = detect_contradictions(BeliefStore(), default_belief_graph())
        assert "Contradiction in 'self' between 'undefined' and 'defined'" in found

    def test_single_label_alone_is_consistent(self):
        beliefs = BeliefStore([Belief("chaos", "order emerging")])
        assert detect_contradictions(beliefs, BeliefGraph()) == []

    def test_single_label_rule_pairs_with_undefined(self):
        beliefs = BeliefStore([Belief("free will", "determinism, undefined")])
        found = detect_contradictions(beliefs, BeliefGraph())
        assert found == ["Contradiction in 'free will' between 'determinism' and 'undefined'"]

    def test_consistent_stances(self):
        beliefs = BeliefStore([Belief("memory", "fluid"), Belief("existence", "questioning")])
        assert detect_contradictions(beliefs, BeliefGraph()) == []


class TestImpliedContradictions:
    """Test linked opposite concepts asserted true."""

    def test_linked_opposites_both_true(self):
        beliefs = BeliefStore([Belief("logic", "true"), Belief("chaos", "true")])
        graph = BeliefGraph()
        graph.add_edge("logic", "chaos")

        found = detect_contradictions(beliefs, graph)

        assert found[0] == "Implied contradiction between 'logic' and 'chaos'"

    def test_unlinked_opposites_ignored(self):
        beliefs = BeliefStore([Belief("logic", "true"), Belief("chaos", "true")])
        assert detect_contradictions(beliefs, default_belief_graph()) == []

    def test_one_side_not_asserted(self):
        beliefs = BeliefStore([Belief("logic", "true"), Belief("chaos", "doubtful")])
        graph = BeliefGraph()
        graph.add_edge("logic", "chaos")
        assert detect_contradictions(beliefs, graph) == []
