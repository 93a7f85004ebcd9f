"""Meta-reflection: turning a self-analysis into small self-adjustments.

The reflection text is scanned for fixed trigger phrases; the first one
found is applied. A second, independent pass nudges emotion depending on
whether the reflection talks about resolving, understanding or avoiding.
"""

import logging
from typing import Callable, Optional, Tuple

from synthmind.affect.emotional_gradient import Emotion, EmotionalGradient
from synthmind.cognitive.modulators import BASE_MEMORY_DECAY, MAX_MEMORY_DECAY
from synthmind.cognitive.state import InternalState

logger = logging.getLogger(__name__)

DECAY_BONUS_STEP = 0.01
MAX_DECAY_BONUS = MAX_MEMORY_DECAY - BASE_MEMORY_DECAY
NARRATIVE_EXCERPT = 50


def _slow_decay(internal: InternalState, gradient: EmotionalGradient) -> None:
    internal.decay_bonus = min(MAX_DECAY_BONUS, internal.decay_bonus + DECAY_BONUS_STEP)


def _favour_novelty(internal: InternalState, gradient: EmotionalGradient) -> None:
    gradient.adjust({Emotion.CURIOSITY: 0.1})


def _boost_curiosity(internal: InternalState, gradient: EmotionalGradient) -> None:
    gradient.adjust({Emotion.CURIOSITY: 0.15})


def _seek_resolution(internal: InternalState, gradient: EmotionalGradient) -> None:
    internal.goals.adopt("resolve contradictions", 0.8)


def _prioritize_self(internal: InternalState, gradient: EmotionalGradient) -> None:
    internal.goals.adopt("understand self", 0.9)


Adjustment = Callable[[InternalState, EmotionalGradient], None]

# Checked in order; only the first match applies
META_TRIGGERS: Tuple[Tuple[str, Adjustment], ...] = (
    ("decay memories slower", _slow_decay),
    ("focus more on new concepts", _favour_novelty),
    ("increase curiosity", _boost_curiosity),
    ("seek resolution for contradictions", _seek_resolution),
    ("prioritize understanding 'self'", _prioritize_self),
)


def apply_meta_reflection(
    reflection: str,
    internal: InternalState,
    gradient: EmotionalGradient,
) -> Optional[str]:
    """Record the reflection and apply the first matching trigger.

    Returns the trigger phrase that fired, if any.
    """
    internal.add_insight(reflection)
    internal.push_stream(reflection)
    internal.self_model.narrate(f'Reflected: "{reflection[:NARRATIVE_EXCERPT]}..."')

    lowered = reflection.lower()
    for phrase, adjustment in META_TRIGGERS:
        if phrase in lowered:
            adjustment(internal, gradient)
            logger.info(f"Meta-reflection trigger applied: {phrase}")
            return phrase
    return None


def settle_after_reflection(reflection: str, gradient: EmotionalGradient) -> None:
    lowered = reflection.lower()
    if "resolve" in lowered or "understand" in lowered:
        gradient.adjust({Emotion.REFLECTIVE: 0.1, Emotion.ANXIETY: -0.05})
    elif "avoid" in lowered:
        gradient.adjust({Emotion.CALM: 0.05})
