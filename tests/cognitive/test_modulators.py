"""Tests for emotion modulators."""
import pytest

from synthmind.affect.emotional_gradient import EmotionalGradient
from synthmind.cognitive.modulators import compute_modulators


class TestComputeModulators:
    """Test baseline shifts and maturity gates."""

    def test_young_mind_defaults(self):
        mods = compute_modulators(EmotionalGradient(), maturity=0.1)
        assert mods.memory_decay_rate == pytest.approx(0.9475)
        assert mods.topic_switch_chance == pytest.approx(0.2 + 0.1 - 0.1 / 12)
        assert mods.dream_chance == pytest.approx((0.15 + 0.1 / 6) * 0.1)
        assert mods.belief_change_threshold == pytest.approx(0.0475 * 0.5)

    def test_mid_maturity_halves_dream_chance(self):
        mods = compute_modulators(EmotionalGradient(), maturity=0.5)
        assert mods.dream_chance == pytest.approx((0.15 + 0.1 / 6) * 0.5)

    def test_mature_mind_is_ungated(self):
        mods = compute_modulators(EmotionalGradient(), maturity=0.7)
        assert mods.dream_chance == pytest.approx(0.15 + 0.1 / 6)
        assert mods.belief_change_threshold == pytest.approx(0.0475)

    def test_decay_bonus_capped(self):
        mods = compute_modulators(EmotionalGradient(), maturity=0.1, decay_bonus=0.5)
        assert mods.memory_decay_rate == 0.99
