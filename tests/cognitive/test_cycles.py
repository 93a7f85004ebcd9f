"""Tests for per-cycle state commits."""
import pytest

from conftest import ScriptedRandom
from synthmind.affect.emotional_gradient import Emotion
from synthmind.cognitive.concept_graph import CoOccurrenceTable
from synthmind.cognitive.cycles import (
    GENERIC_CONFLICT,
    NOVEL,
    REPETITIVE,
    TopicShift,
    commit_goal_thought,
    commit_intuition,
    commit_thought,
    form_schema,
    ruminate,
    shift_topic,
)
from synthmind.cognitive.memory_stack import MemoryFragment, MemoryStack
from synthmind.cognitive.state import MindState


class TestCommitThought:
    """Test the normal-cycle commit."""

    def test_thought_stored_and_linked(self, quiet_rng):
        state = MindState()
        commit_thought(state, "hello world test thought", NOVEL, None, 0.95, quiet_rng)

        assert state.memory[0].text == "hello world test thought"
        assert state.memory[0].strength == 1.0
        assert state.memory[0].emotion is Emotion.CURIOSITY
        assert state.concept_graph.has_edge("hello", "world")
        assert state.belief_graph.has_edge("test", "thought")
        assert state.internal.current_stream[-1] == "hello world test thought"
        assert state.internal.attention.weight_of("hello") == pytest.approx(0.9)
        assert state.thought == "hello world test thought"

    def test_conflict_vocabulary_raises_tension(self, quiet_rng):
        state = MindState()
        commit_thought(state, "this tension again", NOVEL, None, 0.95, quiet_rng)

        assert state.internal.conflicts == [GENERIC_CONFLICT]
        assert state.tension == pytest.approx(0.2)
        assert state.internal.self_model.last_conflict == GENERIC_CONFLICT

    def test_conflict_resolved_by_first_word(self, quiet_rng):
        state = MindState()
        state.internal.conflicts = ["memory gap"]
        state.internal.tension.value = 0.5

        commit_thought(state, "my memory feels clearer", NOVEL, None, 0.95, quiet_rng)

        assert state.internal.conflicts == []
        assert state.tension == pytest.approx(0.4)
        assert state.internal.self_model.last_conflict == "none"

    def test_answered_question_removed(self, quiet_rng):
        state = MindState()
        state.internal.open_questions = ["what perception means?"]
        commit_thought(state, "perception is slippery", NOVEL, None, 0.95, quiet_rng)
        assert state.internal.open_questions == []

    def test_question_thought_adopted_on_chance(self):
        state = MindState()
        state.internal.open_questions = []
        commit_thought(state, "is anything real?", NOVEL, None, 0.95, ScriptedRandom(0.0))
        assert "is anything real?" in state.internal.open_questions

    def test_repetition_sets_loop_flag(self, quiet_rng):
        state = MindState()
        commit_thought(state, "something", REPETITIVE, None, 0.95, quiet_rng)
        assert state.internal.self_model.loop_detected is True

    def test_belief_nudged_by_mention(self, quiet_rng):
        state = MindState()
        commit_thought(state, "logic holds", NOVEL, None, 0.95, quiet_rng)
        assert state.internal.beliefs.get("logic").confidence == pytest.approx(0.45)

    def test_environment_reacts(self, quiet_rng):
        state = MindState()
        commit_thought(state, "it is too quiet", NOVEL, None, 0.95, quiet_rng)
        assert state.environment.noise == "medium"


class TestShiftTopic:
    """Test loop breaking and topic rotation."""

    def _clear_memory(self, state):
        state.memory = MemoryStack([MemoryFragment("calm steady light", Emotion.CALM)])

    def test_stuck_mind_forces_shift(self, quiet_rng):
        """A tense mind dwelling on "ugh" is pushed to a new topic."""
        state = MindState()
        state.memory = MemoryStack([MemoryFragment("ugh, this again.", Emotion.ANXIETY)])
        state.internal.tension.value = 0.8
        state.topic_lock = 1
        reflective_before = state.gradient[Emotion.REFLECTIVE]

        result = shift_topic(state, "ugh, this again.", None, 0.0, quiet_rng)

        assert result is TopicShift.FORCED
        assert state.topic_lock == 3
        assert state.tension == pytest.approx(0.5)
        assert state.gradient[Emotion.REFLECTIVE] > reflective_before
        assert state.topic in state.concept_graph

    def test_stuck_keywords_force_shift(self, quiet_rng):
        """A stuck word in recent memory forces a shift even at low tension."""
        state = MindState()
        state.memory = MemoryStack([MemoryFragment("ugh", Emotion.ANXIETY)])
        state.topic_lock = 2
        assert shift_topic(state, "anything", None, 0.0, quiet_rng) is TopicShift.FORCED

    def test_lock_counts_down(self, quiet_rng):
        state = MindState()
        self._clear_memory(state)
        state.topic_lock = 2
        assert shift_topic(state, "anything", None, 0.2, quiet_rng) is TopicShift.HELD
        assert state.topic_lock == 1

    def test_expired_lock_reselects(self, quiet_rng):
        state = MindState()
        self._clear_memory(state)
        state.topic_lock = 0
        result = shift_topic(state, "thinking about memory", None, 0.0, quiet_rng)
        assert result is TopicShift.RESELECTED
        assert state.topic_lock == 3
        # attention still holds "consciousness", which is scanned first
        assert state.topic in state.concept_graph.neighbors("consciousness")


class TestRuminate:
    """Test subconscious processing."""

    def test_conflict_rumination(self):
        state = MindState()
        state.internal.conflicts = ["x conflict"]

        result = ruminate(state, 0.95, ScriptedRandom(0.0, 0.0, 0.0))

        assert result.fragment.text == "(Subconscious): still feeling that x conflict... why?"
        assert state.memory[0].strength == 0.5
        assert state.memory[0].emotion is Emotion.ANXIETY
        assert state.internal.self_model.loop_detected is True
        assert result.reinforced is not None
        assert result.wants_intuition is True

    def test_question_rumination(self):
        state = MindState()
        state.internal.open_questions = ["who am I"]
        result = ruminate(state, 0.95, ScriptedRandom(0.0))
        assert result.fragment.text == "(Subconscious): what about who am I?"
        assert state.memory[0].emotion is Emotion.REFLECTIVE

    def test_quiet_rumination(self, quiet_rng):
        state = MindState()
        state.internal.open_questions = []
        result = ruminate(state, 0.95, quiet_rng)
        assert result.fragment is None
        assert result.reinforced is None
        assert result.wants_intuition is False
        assert len(state.memory) == 3


class TestOtherCommits:
    """Test intuition, schema and goal commits."""

    def test_commit_intuition(self):
        state = MindState()
        commit_intuition(state, "it's all connected", 0.95)
        assert state.memory[0].strength == 0.8
        assert state.memory[0].source == "intuition"
        assert state.thought == "(Intuition): it's all connected"

    def test_form_schema(self):
        state = MindState()
        table = CoOccurrenceTable()
        table.observe_all(["alpha beta"] * 4)

        name = form_schema(state, table)

        assert name == "alpha-beta"
        assert 'What is "alpha-beta"?' in state.internal.open_questions
        assert state.thought == "(Schema Formed): New connection: alpha-beta"

    def test_form_schema_without_pattern(self):
        state = MindState()
        assert form_schema(state, CoOccurrenceTable()) is None

    def test_commit_goal_thought(self):
        state = MindState()
        goal = state.internal.goals.most_urgent()
        commit_goal_thought(state, goal, "need more info", 0.95)
        assert goal.urgency == pytest.approx(0.55)
        assert state.memory[0].strength == 0.9
        assert state.memory[0].source == "goal"
        assert state.thought == "(Goal-Directed): need more info"
