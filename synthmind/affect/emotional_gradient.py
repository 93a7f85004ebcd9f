"""Normalized emotion weights.

The gradient is a vector over five emotions stored as a numpy array in
enumeration order. Every mutation ends with a renormalization so the
weights always sum to 1; the dominant emotion is the arg-max, with ties
going to the emotion listed first.
"""
from __future__ import annotations

import logging
import random
from enum import Enum
from typing import Dict, List, Mapping, Optional, Tuple, Union

import numpy as np

logger = logging.getLogger(__name__)


class Emotion(str, Enum):
    """Fixed emotion set. Declaration order is the tie-break order."""

    CURIOSITY = "curiosity"
    CALM = "calm"
    ANXIETY = "anxiety"
    REFLECTIVE = "reflective"
    DREAMING = "dreaming"

    @property
    def tag(self) -> str:
        """Upper-case label used on memory fragments."""
        return self.name

    @classmethod
    def parse(cls, value: Union["Emotion", str]) -> "Emotion":
        """Accept an Emotion, its value or its tag."""
        if isinstance(value, Emotion):
            return value
        try:
            return cls(value.lower())
        except ValueError:
            return cls[value.upper()]


EMOTION_ORDER: Tuple[Emotion, ...] = tuple(Emotion)

# Raw boot weights, normalized on construction
DEFAULT_GRADIENT: Dict[Emotion, float] = {
    Emotion.CURIOSITY: 0.6,
    Emotion.CALM: 0.3,
    Emotion.ANXIETY: 0.1,
    Emotion.REFLECTIVE: 0.2,
    Emotion.DREAMING: 0.0,
}

PERTURB_DECAY = 0.95
PERTURB_BASE_CHANCE = 0.2
PERTURB_TENSION_FACTOR = 0.3
PERTURB_BOOST = 0.1
ANXIETY_TENSION_THRESHOLD = 0.5  # above this, half of the boosts go to anxiety


class EmotionalGradient:
    """Emotion weight vector that sums to 1 after every update."""

    def __init__(self, weights: Optional[Mapping[Union[Emotion, str], float]] = None):
        source = DEFAULT_GRADIENT if weights is None else weights
        self._weights = np.zeros(len(EMOTION_ORDER), dtype=float)
        for key, value in source.items():
            try:
                emotion = Emotion.parse(key)
            except (KeyError, ValueError, AttributeError):
                logger.warning(f"Ignoring unknown emotion {key!r} in gradient")
                continue
            self._weights[EMOTION_ORDER.index(emotion)] = float(value)
        self.normalize()

    def __getitem__(self, emotion: Union[Emotion, str]) -> float:
        return float(self._weights[EMOTION_ORDER.index(Emotion.parse(emotion))])

    @property
    def total(self) -> float:
        return float(self._weights.sum())

    def normalize(self) -> None:
        """Clip to [0, 1] and rescale to unit sum; an all-zero vector becomes uniform."""
        np.clip(self._weights, 0.0, 1.0, out=self._weights)
        total = self._weights.sum()
        if total <= 0.0:
            self._weights[:] = 1.0 / len(EMOTION_ORDER)
        else:
            self._weights /= total

    def adjust(self, deltas: Mapping[Union[Emotion, str], float]) -> None:
        """Apply named additive adjustments, each capped to [0, 1], then renormalize."""
        for key, delta in deltas.items():
            idx = EMOTION_ORDER.index(Emotion.parse(key))
            self._weights[idx] = min(1.0, max(0.0, self._weights[idx] + delta))
        self.normalize()

    def dominant(self) -> Emotion:
        # np.argmax returns the first maximal index
        return EMOTION_ORDER[int(np.argmax(self._weights))]

    def ranked(self) -> List[Tuple[Emotion, float]]:
        """Emotions by descending weight; equal weights keep enumeration order."""
        order = sorted(range(len(EMOTION_ORDER)), key=lambda i: -self._weights[i])
        return [(EMOTION_ORDER[i], float(self._weights[i])) for i in order]

    def describe(self, top: int = 2) -> str:
        """Short summary such as ``CURIOSITY (45%), CALM (23%)``."""
        return ", ".join(f"{e.tag} ({w * 100:.0f}%)" for e, w in self.ranked()[:top])

    def perturb(self, tension: float, rng: Optional[random.Random] = None) -> Optional[Emotion]:
        """Decay every weight, maybe boost one emotion, renormalize.

        Returns the boosted emotion, or None when no boost fired.
        """
        rng = rng or random
        self._weights *= PERTURB_DECAY
        boosted = None
        if rng.random() < PERTURB_BASE_CHANCE + PERTURB_TENSION_FACTOR * tension:
            if tension > ANXIETY_TENSION_THRESHOLD and rng.random() < 0.5:
                boosted = Emotion.ANXIETY
            else:
                boosted = rng.choice(EMOTION_ORDER)
            idx = EMOTION_ORDER.index(boosted)
            self._weights[idx] = min(1.0, self._weights[idx] + PERTURB_BOOST)
        self.normalize()
        return boosted

    def to_dict(self) -> Dict[str, float]:
        return {e.value: float(w) for e, w in zip(EMOTION_ORDER, self._weights)}

    @classmethod
    def from_dict(cls, data: Mapping[str, float]) -> "EmotionalGradient":
        return cls(data)

    def __repr__(self) -> str:
        weights = ", ".join(f"{k}={v:.3f}" for k, v in self.to_dict().items())
        return f"EmotionalGradient({weights})"
