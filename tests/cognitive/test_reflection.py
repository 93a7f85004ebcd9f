"""Tests for meta-reflection triggers."""
import pytest

from synthmind.affect.emotional_gradient import Emotion, EmotionalGradient
from synthmind.cognitive.reflection import (
    MAX_DECAY_BONUS,
    apply_meta_reflection,
    settle_after_reflection,
)
from synthmind.cognitive.state import InternalState


class TestApplyMetaReflection:
    """Test trigger matching and side effects."""

    def test_records_insight_and_narrative(self):
        internal = InternalState()
        apply_meta_reflection("nothing to change", internal, EmotionalGradient())
        assert internal.insights[-1].text == "nothing to change"
        assert internal.current_stream[-1] == "nothing to change"
        assert internal.self_model.identity_narrative[-1].insight == 'Reflected: "nothing to change..."'

    def test_decay_trigger(self):
        internal = InternalState()
        fired = apply_meta_reflection("I should decay memories slower.", internal, EmotionalGradient())
        assert fired == "decay memories slower"
        assert internal.decay_bonus == pytest.approx(0.01)

    def test_decay_bonus_capped(self):
        internal = InternalState()
        internal.decay_bonus = MAX_DECAY_BONUS
        apply_meta_reflection("decay memories slower", internal, EmotionalGradient())
        assert internal.decay_bonus == pytest.approx(MAX_DECAY_BONUS)

    def test_curiosity_trigger(self):
        internal = InternalState()
        gradient = EmotionalGradient()
        before = gradient[Emotion.CURIOSITY]
        fired = apply_meta_reflection("Increase curiosity to break loops.", internal, gradient)
        assert fired == "increase curiosity"
        assert gradient[Emotion.CURIOSITY] > before

    def test_resolution_trigger_adopts_goal(self):
        internal = InternalState()
        apply_meta_reflection("Seek resolution for contradictions.", internal, EmotionalGradient())
        assert internal.goals.get("resolve contradictions").urgency == 0.8

    def test_self_trigger_raises_existing_goal(self):
        internal = InternalState()
        apply_meta_reflection("Prioritize understanding 'self'.", internal, EmotionalGradient())
        assert internal.goals.get("understand self").urgency == 0.9
        assert len(internal.goals) == 2

    def test_only_first_trigger_applies(self):
        internal = InternalState()
        gradient = EmotionalGradient()
        before = gradient[Emotion.CURIOSITY]
        fired = apply_meta_reflection("decay memories slower and increase curiosity", internal, gradient)
        assert fired == "decay memories slower"
        assert gradient[Emotion.CURIOSITY] == pytest.approx(before)

    def test_insights_bounded(self):
        internal = InternalState()
        for i in range(8):
            apply_meta_reflection(f"reflection {i}", internal, EmotionalGradient())
        assert [i.text for i in internal.insights] == [f"reflection {i}" for i in range(3, 8)]


class TestSettleAfterReflection:
    """Test emotional settling."""

    def test_understanding_turns_reflective(self):
        gradient = EmotionalGradient()
        before = gradient[Emotion.REFLECTIVE]
        settle_after_reflection("I want to understand", gradient)
        assert gradient[Emotion.REFLECTIVE] > before

    def test_avoidance_calms(self):
        gradient = EmotionalGradient()
        before = gradient[Emotion.CALM]
        settle_after_reflection("Avoid thinking about time", gradient)
        assert gradient[Emotion.CALM] > before
