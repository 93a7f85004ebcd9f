"""Tests for goals and the goal set."""
import pytest

from conftest import ScriptedRandom
from synthmind.cognitive.goal import CANDIDATE_GOALS, Goal, GoalSet


class TestGoal:
    """Test goal values."""

    def test_urgency_clamped(self):
        assert Goal("a b", 3.0).urgency == 1.0
        assert Goal("a b", 0.0).urgency == 0.1

    def test_match_token_is_second_word(self):
        assert Goal("understand self", 0.5).match_token == "self"
        assert Goal("wander", 0.5).match_token == ""

    def test_to_dict_uses_goal_key(self):
        assert Goal("seek novelty", 0.4).to_dict() == {"goal": "seek novelty", "urgency": 0.4}


class TestGoalSet:
    """Test goal selection and updates."""

    def test_most_urgent_default(self):
        assert GoalSet().most_urgent().description == "understand self"

    def test_ties_go_to_earliest(self):
        goals = GoalSet([Goal("first one", 0.5), Goal("second one", 0.5)])
        assert goals.most_urgent().description == "first one"

    def test_adopt_existing_raises_urgency(self):
        goals = GoalSet()
        goals.adopt("understand self", 0.9)
        assert len(goals) == 2
        assert goals.get("understand self").urgency == 0.9

    def test_adopt_never_lowers(self):
        goals = GoalSet()
        goals.adopt("understand self", 0.2)
        assert goals.get("understand self").urgency == 0.6

    def test_relieve_floors_at_minimum(self):
        goals = GoalSet([Goal("a b", 0.12)])
        goals.relieve(goals.get("a b"))
        assert goals.get("a b").urgency == 0.1

    def test_relieve_matching(self):
        goals = GoalSet()
        matched = goals.relieve_matching("who is my self anyway")
        assert [g.description for g in matched] == ["understand self"]
        assert goals.get("understand self").urgency == pytest.approx(0.55)
        assert goals.get("seek novelty").urgency == pytest.approx(0.4)

    def test_new_goal_only_when_all_quiet(self):
        assert GoalSet().maybe_adopt_new(ScriptedRandom(0.0)) is None

        quiet = GoalSet([Goal("a b", 0.2)])
        adopted = quiet.maybe_adopt_new(ScriptedRandom(0.0))
        assert adopted is not None
        assert adopted.description in CANDIDATE_GOALS
        assert adopted.urgency == 0.5
