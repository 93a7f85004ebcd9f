"""Attention stack: the few concepts currently holding focus."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence

ATTENTION_CAPACITY = 5
REINFORCE_STEP = 0.2
ATTENTION_DECAY = 0.9  # per normal cycle
MIN_ATTENTION_WEIGHT = 0.1


@dataclass
class AttentionItem:
    concept: str
    weight: float = 1.0

    def to_dict(self) -> dict:
        return {"concept": self.concept, "weight": self.weight}

    @classmethod
    def from_dict(cls, data: dict) -> AttentionItem:
        return cls(concept=str(data["concept"]), weight=float(data.get("weight", 1.0)))


DEFAULT_ATTENTION = (("consciousness", 1.0), ("self", 0.8), ("memory", 0.6))


class AttentionStack:
    """Weighted salient concepts, kept sorted by descending weight.

    Mentioning a concept again reinforces it (+0.2, capped at 1.0); new
    concepts enter at 1.0. ``decay_and_prune`` then shrinks every weight by
    0.9, drops entries under 0.1 and keeps the top five.
    """

    def __init__(self, items: Optional[Sequence[AttentionItem]] = None, capacity: int = ATTENTION_CAPACITY):
        self.capacity = capacity
        if items is None:
            items = [AttentionItem(c, w) for c, w in DEFAULT_ATTENTION]
        self._items: List[AttentionItem] = list(items)
        self._settle()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[AttentionItem]:
        return iter(self._items)

    def concepts(self) -> List[str]:
        return [item.concept for item in self._items]

    def weight_of(self, concept: str) -> Optional[float]:
        for item in self._items:
            if item.concept == concept:
                return item.weight
        return None

    def attend(self, concepts: Iterable[str]) -> None:
        for concept in concepts:
            existing = next((i for i in self._items if i.concept == concept), None)
            if existing is not None:
                existing.weight = min(1.0, existing.weight + REINFORCE_STEP)
            else:
                self._items.append(AttentionItem(concept, 1.0))

    def decay_and_prune(self) -> None:
        for item in self._items:
            item.weight *= ATTENTION_DECAY
        self._settle()

    def update(self, concepts: Iterable[str]) -> None:
        """One cycle of attention: reinforce or admit, then decay and prune."""
        self.attend(concepts)
        self.decay_and_prune()

    def _settle(self) -> None:
        kept = [i for i in self._items if i.weight >= MIN_ATTENTION_WEIGHT]
        # sorted() is stable, so equal weights keep their earlier order
        self._items = sorted(kept, key=lambda i: -i.weight)[: self.capacity]

    def describe(self) -> str:
        return ", ".join(f"{i.concept} (weight: {i.weight:.1f})" for i in self._items)

    def to_list(self) -> List[dict]:
        return [i.to_dict() for i in self._items]

    @classmethod
    def from_list(cls, data: List[dict]) -> AttentionStack:
        return cls([AttentionItem.from_dict(d) for d in data])
