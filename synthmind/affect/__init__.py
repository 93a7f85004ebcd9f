"""Emotional gradient over the fixed emotion set."""
from synthmind.affect.emotional_gradient import (
    DEFAULT_GRADIENT,
    EMOTION_ORDER,
    Emotion,
    EmotionalGradient,
)

__all__ = ["DEFAULT_GRADIENT", "EMOTION_ORDER", "Emotion", "EmotionalGradient"]
