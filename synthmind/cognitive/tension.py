"""Mental tension: scalar measure of unresolved internal conflict."""

import logging

logger = logging.getLogger(__name__)

# Named adjustments applied by the cycle logic
CONTRADICTION_STEP = 0.1  # per newly detected contradiction
CONFLICT_VOCABULARY_STEP = 0.2
RESOLUTION_STEP = 0.1
ANXIOUS_REPEAT_STEP = 0.1
CALM_NOVELTY_RELIEF = 0.15
FORCED_SHIFT_RELIEF = 0.3

HIGH_TENSION = 0.7  # forces a topic shift
SHADOW_TENSION = 0.6
LOW_TENSION = 0.3


class TensionMeter:
    """A value that is clamped to [0, 1] on every write."""

    def __init__(self, value: float = 0.0):
        self._value = 0.0
        self.value = value

    @property
    def value(self) -> float:
        return self._value

    @value.setter
    def value(self, new_value: float) -> None:
        self._value = max(0.0, min(1.0, float(new_value)))

    def raise_by(self, amount: float) -> float:
        self.value = self._value + amount
        return self._value

    def lower_by(self, amount: float) -> float:
        self.value = self._value - amount
        return self._value

    def __float__(self) -> float:
        return self._value

    def __repr__(self) -> str:
        return f"TensionMeter({self._value:.3f})"
