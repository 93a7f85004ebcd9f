"""Sub-agent personas and per-cycle arbitration.

Three personas compete for the dominant voice. Arbitration runs once per
cycle: high tension favours Shadow, low tension favours Rational, dream
mode hands the voice to Anima, and otherwise the pick is uniform. The
winner's belief bias and preferred topics apply within the same cycle.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from synthmind.cognitive.tension import LOW_TENSION, SHADOW_TENSION

logger = logging.getLogger(__name__)

RATIONAL = "Rational"
SHADOW = "Shadow"
ANIMA = "Anima"

SHADOW_CHANCE = 0.7
RATIONAL_CHANCE = 0.5


@dataclass
class SubAgent:
    """A named bias profile.

    Attributes:
        name: Persona name
        bias: Short description of what the persona leans toward
        emotion_profile: Emotion weights characteristic of the persona
        belief_bias: Added to belief confidence shifts while dominant
        preferred_topics: Extra keywords offered to topic selection
    """

    name: str
    bias: str
    emotion_profile: Dict[str, float] = field(default_factory=dict)
    belief_bias: float = 0.0
    preferred_topics: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "bias": self.bias,
            "emotion_profile": dict(self.emotion_profile),
            "belief_bias": self.belief_bias,
            "preferred_topics": list(self.preferred_topics),
        }

    @classmethod
    def from_dict(cls, data: dict) -> SubAgent:
        return cls(
            name=str(data["name"]),
            bias=str(data.get("bias", "")),
            emotion_profile=dict(data.get("emotion_profile", {})),
            belief_bias=float(data.get("belief_bias", 0.0)),
            preferred_topics=list(data.get("preferred_topics", [])),
        )


def default_sub_agents() -> List[SubAgent]:
    return [
        SubAgent(RATIONAL, "logic, order, understanding", {"calm": 0.8, "curiosity": 0.5}, 0.01, ["logic", "structure"]),
        SubAgent(SHADOW, "doubt, fear, unresolved issues", {"anxiety": 0.9, "reflective": 0.3}, -0.05, ["conflict", "tension"]),
        SubAgent(ANIMA, "intuition, connection, symbolism", {"reflective": 0.7, "dreaming": 0.6}, 0.03, ["identity", "connection", "emotion"]),
    ]


class SubAgentArbitrator:
    """Chooses the dominant persona each cycle."""

    def __init__(self, agents: Optional[Sequence[SubAgent]] = None, rng: Optional[random.Random] = None):
        self.agents: List[SubAgent] = list(agents) if agents is not None else default_sub_agents()
        self._rng = rng or random.Random()

    def by_name(self, name: Optional[str]) -> Optional[SubAgent]:
        if name is None:
            return None
        return next((a for a in self.agents if a.name == name), None)

    def select(self, tension: float, dreaming: bool) -> Optional[SubAgent]:
        """Pick this cycle's dominant persona.

        Draws happen in rule order and stop at the first rule that fires,
        so a seeded generator reproduces the same sequence of choices.
        """
        if not self.agents:
            return None
        chosen = None
        if tension > SHADOW_TENSION and self._rng.random() < SHADOW_CHANCE:
            chosen = self.by_name(SHADOW)
        elif tension < LOW_TENSION and self._rng.random() < RATIONAL_CHANCE:
            chosen = self.by_name(RATIONAL)
        elif dreaming:
            chosen = self.by_name(ANIMA)
        if chosen is None:
            chosen = self._rng.choice(self.agents)
        logger.debug(f"Dominant sub-agent: {chosen.name} (tension {tension:.2f})")
        return chosen
