"""Tests for the normalized emotional gradient."""
import pytest

from conftest import ScriptedRandom
from synthmind.affect.emotional_gradient import (
    EMOTION_ORDER,
    Emotion,
    EmotionalGradient,
)


class TestEmotionalGradientCreation:
    """Test gradient initialization."""

    def test_default_gradient_is_normalized(self):
        """Boot weights are rescaled to sum to 1."""
        gradient = EmotionalGradient()
        assert gradient.total == pytest.approx(1.0)
        assert gradient[Emotion.CURIOSITY] == pytest.approx(0.5)
        assert gradient[Emotion.CALM] == pytest.approx(0.25)
        assert gradient[Emotion.DREAMING] == 0.0

    def test_all_zero_becomes_uniform(self):
        """An all-zero vector normalizes to equal weights."""
        gradient = EmotionalGradient({e: 0.0 for e in EMOTION_ORDER})
        for emotion in EMOTION_ORDER:
            assert gradient[emotion] == pytest.approx(0.2)

    def test_accepts_tags_and_values(self):
        """Keys may be enum members, values or upper-case tags."""
        gradient = EmotionalGradient({"CALM": 1.0, "anxiety": 1.0})
        assert gradient[Emotion.CALM] == pytest.approx(0.5)
        assert gradient["ANXIETY"] == pytest.approx(0.5)

    def test_unknown_emotion_ignored(self):
        """Unknown keys are skipped rather than rejected."""
        gradient = EmotionalGradient({"calm": 1.0, "boredom": 3.0})
        assert gradient[Emotion.CALM] == pytest.approx(1.0)


class TestDominantEmotion:
    """Test arg-max selection."""

    def test_default_dominant_is_curiosity(self):
        assert EmotionalGradient().dominant() is Emotion.CURIOSITY

    def test_ties_go_to_enumeration_order(self):
        """CALM is listed before ANXIETY, so it wins a tie."""
        gradient = EmotionalGradient({"anxiety": 0.5, "calm": 0.5})
        assert gradient.dominant() is Emotion.CALM

    def test_describe_top_two(self):
        """Summary lists the two strongest emotions as percentages."""
        assert EmotionalGradient().describe() == "CURIOSITY (50%), CALM (25%)"


class TestAdjust:
    """Test additive adjustments."""

    def test_adjust_keeps_unit_sum(self):
        gradient = EmotionalGradient()
        gradient.adjust({Emotion.ANXIETY: 0.3, Emotion.CURIOSITY: -0.2})
        assert gradient.total == pytest.approx(1.0)

    def test_adjust_caps_each_weight_before_normalizing(self):
        """A huge delta is capped at 1.0 before rescaling."""
        gradient = EmotionalGradient()
        gradient.adjust({Emotion.CURIOSITY: 5.0})
        assert gradient[Emotion.CURIOSITY] == pytest.approx(1.0 / 1.5)

    def test_adjust_never_goes_negative(self):
        gradient = EmotionalGradient()
        gradient.adjust({Emotion.DREAMING: -1.0})
        assert gradient[Emotion.DREAMING] == 0.0


class TestPerturb:
    """Test per-cycle drift."""

    def test_no_boost_preserves_ratios(self):
        """Uniform decay followed by renormalization changes nothing."""
        gradient = EmotionalGradient()
        before = gradient.to_dict()
        boosted = gradient.perturb(0.0, ScriptedRandom())
        assert boosted is None
        for key, value in gradient.to_dict().items():
            assert value == pytest.approx(before[key])

    def test_high_tension_can_boost_anxiety(self):
        """Above 0.5 tension, a coin flip routes the boost to anxiety."""
        gradient = EmotionalGradient()
        anxiety_before = gradient[Emotion.ANXIETY]
        boosted = gradient.perturb(0.8, ScriptedRandom(0.0, 0.0))
        assert boosted is Emotion.ANXIETY
        assert gradient[Emotion.ANXIETY] > anxiety_before
        assert gradient.total == pytest.approx(1.0)

    def test_sum_stays_one_over_many_cycles(self):
        import random

        rng = random.Random(3)
        gradient = EmotionalGradient()
        for _ in range(200):
            gradient.perturb(rng.random(), rng)
            assert gradient.total == pytest.approx(1.0)
            assert all(0.0 <= w <= 1.0 for w in gradient.to_dict().values())


class TestGradientSerialization:
    """Test dict round trip."""

    def test_from_dict_restores_weights(self):
        gradient = EmotionalGradient({"calm": 0.7, "reflective": 0.3})
        restored = EmotionalGradient.from_dict(gradient.to_dict())
        assert restored[Emotion.CALM] == pytest.approx(0.7)
        assert restored.dominant() is Emotion.CALM
