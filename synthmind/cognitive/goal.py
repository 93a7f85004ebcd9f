"""Goals: weighted drives that bias thought generation.

The goal list is never emptied. Thinking about a goal lowers its urgency
toward a floor of 0.1; when every goal has gone quiet a new one may be
adopted at moderate urgency.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence

logger = logging.getLogger(__name__)

MIN_URGENCY = 0.1
RELIEF_STEP = 0.05
LOW_URGENCY = 0.3  # all goals under this may trigger adoption of a new one
NEW_GOAL_CHANCE = 0.05
NEW_GOAL_URGENCY = 0.5
CANDIDATE_GOALS = ("find meaning", "seek connection", "understand chaos", "resolve paradox")

DEFAULT_GOALS = (("understand self", 0.6), ("seek novelty", 0.4))


@dataclass
class Goal:
    description: str
    urgency: float

    def __post_init__(self):
        self.urgency = max(MIN_URGENCY, min(1.0, self.urgency))

    @property
    def match_token(self) -> str:
        """Second word of the description, or empty when there is none."""
        parts = self.description.split(" ")
        return parts[1] if len(parts) > 1 else ""

    def to_dict(self) -> dict:
        return {"goal": self.description, "urgency": self.urgency}

    @classmethod
    def from_dict(cls, data: dict) -> Goal:
        return cls(description=str(data["goal"]), urgency=float(data.get("urgency", NEW_GOAL_URGENCY)))


class GoalSet:
    """Ordered goal list."""

    def __init__(self, goals: Optional[Sequence[Goal]] = None):
        if goals is None:
            goals = [Goal(d, u) for d, u in DEFAULT_GOALS]
        self._goals: List[Goal] = list(goals)

    def __len__(self) -> int:
        return len(self._goals)

    def __iter__(self) -> Iterator[Goal]:
        return iter(self._goals)

    def get(self, description: str) -> Optional[Goal]:
        return next((g for g in self._goals if g.description == description), None)

    def most_urgent(self) -> Optional[Goal]:
        """Highest urgency; the earliest goal wins ties."""
        best = None
        for goal in self._goals:
            if best is None or goal.urgency > best.urgency:
                best = goal
        return best

    def adopt(self, description: str, urgency: float) -> Goal:
        """Add a goal, or raise an existing one to at least ``urgency``."""
        existing = self.get(description)
        if existing is not None:
            existing.urgency = max(existing.urgency, urgency)
            return existing
        goal = Goal(description, urgency)
        self._goals.append(goal)
        logger.info(f"Adopted goal '{description}' (urgency {goal.urgency:.2f})")
        return goal

    def relieve(self, goal: Goal, amount: float = RELIEF_STEP) -> None:
        goal.urgency = max(MIN_URGENCY, goal.urgency - amount)

    def relieve_matching(self, thought_lower: str) -> List[Goal]:
        """Lower urgency of goals whose second word appears in the thought.

        A goal with a single word matches every thought.
        """
        matched = [g for g in self._goals if g.match_token in thought_lower]
        for goal in matched:
            self.relieve(goal)
        return matched

    def all_quiet(self) -> bool:
        return all(g.urgency < LOW_URGENCY for g in self._goals)

    def maybe_adopt_new(self, rng: Optional[random.Random] = None) -> Optional[Goal]:
        rng = rng or random
        if rng.random() < NEW_GOAL_CHANCE and self.all_quiet():
            return self.adopt(rng.choice(CANDIDATE_GOALS), NEW_GOAL_URGENCY)
        return None

    def to_list(self) -> List[dict]:
        return [g.to_dict() for g in self._goals]

    @classmethod
    def from_list(cls, data: List[dict]) -> GoalSet:
        return cls([Goal.from_dict(d) for d in data])
