"""Beliefs, the belief association graph, and contradiction detection."""
from synthmind.beliefs.belief_store import Belief, BeliefGraph, BeliefStore
from synthmind.beliefs.contradiction import detect_contradictions

__all__ = ["Belief", "BeliefGraph", "BeliefStore", "detect_contradictions"]
