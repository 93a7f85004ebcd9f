"""Dream generation and dream-reflection integration."""
from synthmind.dreams.base import DreamMaterial
from synthmind.dreams.dream_cycle import (
    DREAM_ENTRY_SHIFT,
    DREAM_EXIT_SHIFT,
    build_dream_prompt,
    build_reflection_prompt,
    integrate_dream,
)

__all__ = [
    "DREAM_ENTRY_SHIFT",
    "DREAM_EXIT_SHIFT",
    "DreamMaterial",
    "build_dream_prompt",
    "build_reflection_prompt",
    "integrate_dream",
]
