"""Belief store: stances the mind holds, with confidence.

Beliefs are keyed by concept. Confidence moves in small steps: a thought
mentioning the concept nudges it (scaled by the thought's novelty and
shifted by the dominant persona's bias), and subconscious rumination
reinforces a random belief. Confidence stays within [0, 1].

The ``BeliefGraph`` is a separate association graph used only for
contradiction pattern matching.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence

from synthmind.cognitive.concept_graph import AssociationGraph

logger = logging.getLogger(__name__)

MENTION_STEP = 0.05  # scaled by novelty
REINFORCE_STEP = 0.02

DEFAULT_BELIEFS = (
    ("self", "undefined", 0.1),
    ("memory", "fluid", 0.5),
    ("existence", "questioning", 0.3),
    ("logic", "essential", 0.4),
    ("chaos", "present", 0.2),
)

DEFAULT_BELIEF_GRAPH: Dict[str, List[str]] = {
    "self": ["existence", "identity"],
    "memory": ["past", "identity"],
    "logic": ["order", "rationality"],
    "chaos": ["disorder", "unpredictability"],
    "order": ["logic", "structure"],
    "logic-chaos": ["contradictory"],
    "free will-determinism": ["contradictory"],
}


def _clamp_confidence(value: float) -> float:
    return max(0.0, min(1.0, value))


@dataclass
class Belief:
    """A held stance on a concept.

    Attributes:
        concept: What the belief is about (lowercase)
        stance: Free-text position, matched by substring
        confidence: Strength of commitment in [0, 1]
        evidence: Supporting fragments, if any were recorded
    """

    concept: str
    stance: str
    confidence: float = 0.5
    evidence: List[str] = field(default_factory=list)

    def __post_init__(self):
        self.confidence = _clamp_confidence(self.confidence)

    def shift(self, delta: float) -> float:
        self.confidence = _clamp_confidence(self.confidence + delta)
        return self.confidence

    def describe(self) -> str:
        return f"{self.concept}: {self.stance} (conf: {self.confidence:.1f})"

    def to_dict(self) -> dict:
        return {
            "concept": self.concept,
            "stance": self.stance,
            "confidence": self.confidence,
            "evidence": list(self.evidence),
        }

    @classmethod
    def from_dict(cls, data: dict) -> Belief:
        return cls(
            concept=str(data["concept"]),
            stance=str(data.get("stance", "")),
            confidence=float(data.get("confidence", 0.5)),
            evidence=list(data.get("evidence", [])),
        )


class BeliefStore:
    """Ordered collection of beliefs."""

    def __init__(self, beliefs: Optional[Sequence[Belief]] = None):
        if beliefs is None:
            beliefs = [Belief(c, s, conf) for c, s, conf in DEFAULT_BELIEFS]
        self._beliefs: List[Belief] = list(beliefs)

    def __len__(self) -> int:
        return len(self._beliefs)

    def __iter__(self) -> Iterator[Belief]:
        return iter(self._beliefs)

    def get(self, concept: str) -> Optional[Belief]:
        return next((b for b in self._beliefs if b.concept == concept), None)

    def stances(self) -> Dict[str, str]:
        """Concept to stance; later duplicates win."""
        return {b.concept: b.stance for b in self._beliefs}

    def hold(self, concept: str, stance: str, confidence: float = 0.5) -> Belief:
        """Set the stance on ``concept``, creating the belief if needed."""
        belief = self.get(concept)
        if belief is None:
            belief = Belief(concept, stance, confidence)
            self._beliefs.append(belief)
        else:
            belief.stance = stance
            belief.confidence = _clamp_confidence(confidence)
        return belief

    def nudge_mentioned(self, thought_lower: str, novelty: float, persona_bias: float = 0.0) -> List[Belief]:
        """Shift every belief whose concept appears in the thought."""
        touched = []
        for belief in self._beliefs:
            if belief.concept in thought_lower:
                belief.shift(MENTION_STEP * novelty + persona_bias)
                touched.append(belief)
        return touched

    def reinforce_random(self, rng: Optional[random.Random] = None) -> Optional[Belief]:
        if not self._beliefs:
            return None
        belief = (rng or random).choice(self._beliefs)
        belief.shift(REINFORCE_STEP)
        logger.debug(f"Reinforced belief '{belief.concept}' -> {belief.confidence:.2f}")
        return belief

    def describe(self) -> str:
        return ", ".join(b.describe() for b in self._beliefs)

    def to_list(self) -> List[dict]:
        return [b.to_dict() for b in self._beliefs]

    @classmethod
    def from_list(cls, data: List[dict]) -> BeliefStore:
        return cls([Belief.from_dict(d) for d in data])


class BeliefGraph(AssociationGraph):
    """Associations between belief concepts, distinct from the concept graph."""

    def linked_pairs(self):
        """Yield every directed (concept, linked concept) pair."""
        for concept in self.concepts():
            for linked in self.neighbors(concept):
                yield concept, linked


def default_belief_graph() -> BeliefGraph:
    return BeliefGraph(DEFAULT_BELIEF_GRAPH)
