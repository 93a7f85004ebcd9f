"""Cycle-local emotion modulators.

Each cycle derives four control parameters from a fixed baseline, shifted
additively by the current emotion weights and then gated by cognitive
maturity: a young mind dreams far less and changes beliefs reluctantly.
"""

from dataclasses import asdict, dataclass

from synthmind.affect.emotional_gradient import Emotion, EmotionalGradient

BASE_MEMORY_DECAY = 0.95
BASE_TOPIC_SWITCH = 0.2
BASE_DREAM_CHANCE = 0.15
BASE_BELIEF_THRESHOLD = 0.05
MAX_MEMORY_DECAY = 0.99

EARLY_MATURITY = 0.3
MID_MATURITY = 0.6
EARLY_DREAM_GATE = 0.1
EARLY_BELIEF_GATE = 0.5
MID_DREAM_GATE = 0.5


@dataclass(frozen=True)
class EmotionModulators:
    memory_decay_rate: float
    topic_switch_chance: float
    dream_chance: float
    belief_change_threshold: float  # reported only; no update rule reads it yet

    def to_dict(self) -> dict:
        return asdict(self)


def compute_modulators(
    gradient: EmotionalGradient,
    maturity: float,
    decay_bonus: float = 0.0,
) -> EmotionModulators:
    """Derive this cycle's modulators.

    Args:
        gradient: Current emotional gradient
        maturity: Cognitive maturity in [0, 1]
        decay_bonus: Persistent increment earned from meta-reflection
    """
    anxiety = gradient[Emotion.ANXIETY]
    calm = gradient[Emotion.CALM]

    decay = BASE_MEMORY_DECAY + anxiety * 0.03 - calm * 0.02 + decay_bonus
    topic_switch = BASE_TOPIC_SWITCH + gradient[Emotion.CURIOSITY] * 0.2 - anxiety * 0.1
    dream = BASE_DREAM_CHANCE + gradient[Emotion.REFLECTIVE] * 0.1 + gradient[Emotion.DREAMING] * 0.15
    belief = BASE_BELIEF_THRESHOLD + anxiety * 0.03 - calm * 0.02

    if maturity < EARLY_MATURITY:
        dream *= EARLY_DREAM_GATE
        belief *= EARLY_BELIEF_GATE
    elif maturity < MID_MATURITY:
        dream *= MID_DREAM_GATE

    return EmotionModulators(
        memory_decay_rate=min(MAX_MEMORY_DECAY, decay),
        topic_switch_chance=topic_switch,
        dream_chance=dream,
        belief_change_threshold=belief,
    )
