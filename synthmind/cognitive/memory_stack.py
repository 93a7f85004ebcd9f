"""Bounded, newest-first buffer of remembered fragments.

Each insert decays every existing fragment (floored at 0.1), prepends the
new one and evicts anything past capacity. Fragments are never removed
any other way.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterator, List, Optional, Sequence

from synthmind.affect.emotional_gradient import Emotion
from synthmind.cognitive.repetition import SIMILARITY_WINDOW, is_too_similar

logger = logging.getLogger(__name__)

MEMORY_CAPACITY = 10
MIN_STRENGTH = 0.1
MAX_STRENGTH = 1.0

# Fixed strengths by fragment origin
THOUGHT_STRENGTH = 1.0
GOAL_STRENGTH = 0.9
INTUITION_STRENGTH = 0.8
DREAM_STRENGTH = 0.7
SUBCONSCIOUS_STRENGTH = 0.5
EXTERNAL_STRENGTH = 0.3


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _clamp_strength(value: float) -> float:
    return max(MIN_STRENGTH, min(MAX_STRENGTH, value))


@dataclass
class MemoryFragment:
    """A short remembered text unit.

    Attributes:
        text: The fragment itself
        emotion: Emotion tag at the time it was stored
        strength: Salience in [0.1, 1.0], decays on each later insert
        timestamp: When the fragment was stored
        source: Optional origin tag (external, subconscious, intuition, goal)
    """

    text: str
    emotion: Emotion
    strength: float = THOUGHT_STRENGTH
    timestamp: datetime = field(default_factory=_utcnow)
    source: Optional[str] = None

    def __post_init__(self):
        self.emotion = Emotion.parse(self.emotion)
        self.strength = _clamp_strength(self.strength)

    def to_dict(self) -> dict:
        data = {
            "text": self.text,
            "emotion": self.emotion.tag,
            "strength": self.strength,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.source:
            data["source"] = self.source
        return data

    @classmethod
    def from_dict(cls, data: dict) -> MemoryFragment:
        timestamp = data.get("timestamp")
        return cls(
            text=str(data["text"]),
            emotion=Emotion.parse(data.get("emotion", Emotion.CALM)),
            strength=float(data.get("strength", THOUGHT_STRENGTH)),
            timestamp=datetime.fromisoformat(timestamp) if timestamp else _utcnow(),
            source=data.get("source"),
        )


def default_fragments() -> List[MemoryFragment]:
    """Boot memories in boot order, so the oldest sits at the front."""
    now = _utcnow().timestamp()
    boot = [
        ("Booting subconscious...", Emotion.CALM, 3),
        ("Linking core drives...", Emotion.CALM, 2),
        ("Scanning ambient noise...", Emotion.CURIOSITY, 1),
    ]
    return [
        MemoryFragment(text, emotion, 1.0, datetime.fromtimestamp(now - age, tz=timezone.utc))
        for text, emotion, age in boot
    ]


class MemoryStack:
    """Newest-first fragment buffer with capacity eviction."""

    def __init__(
        self,
        fragments: Optional[Sequence[MemoryFragment]] = None,
        capacity: int = MEMORY_CAPACITY,
    ):
        self.capacity = capacity
        source = default_fragments() if fragments is None else fragments
        self._fragments: List[MemoryFragment] = list(source)[:capacity]

    def __len__(self) -> int:
        return len(self._fragments)

    def __iter__(self) -> Iterator[MemoryFragment]:
        return iter(self._fragments)

    def __getitem__(self, index: int) -> MemoryFragment:
        return self._fragments[index]

    @property
    def fragments(self) -> List[MemoryFragment]:
        return list(self._fragments)

    def insert(self, fragment: MemoryFragment, decay_rate: float) -> MemoryFragment:
        """Decay existing fragments, prepend ``fragment``, truncate to capacity."""
        for existing in self._fragments:
            existing.strength = max(MIN_STRENGTH, existing.strength * decay_rate)
        self._fragments.insert(0, fragment)
        evicted = len(self._fragments) - self.capacity
        if evicted > 0:
            del self._fragments[self.capacity:]
            logger.debug(f"Evicted {evicted} memory fragment(s)")
        return fragment

    def texts(self, limit: Optional[int] = None) -> List[str]:
        items = self._fragments if limit is None else self._fragments[:limit]
        return [f.text for f in items]

    def sample(self, k: int, rng: Optional[random.Random] = None) -> List[MemoryFragment]:
        rng = rng or random
        return rng.sample(self._fragments, min(k, len(self._fragments)))

    def is_too_similar(self, candidate: str) -> bool:
        return is_too_similar(candidate, self.texts(SIMILARITY_WINDOW))

    def to_list(self) -> List[dict]:
        return [f.to_dict() for f in self._fragments]

    @classmethod
    def from_list(cls, data: List[dict], capacity: int = MEMORY_CAPACITY) -> MemoryStack:
        return cls([MemoryFragment.from_dict(item) for item in data], capacity=capacity)
