"""State commits for each cycle type.

These functions mutate a ``MindState`` synchronously and never talk to
the generator; the engine awaits generation first and then hands the text
here. Keeping the commits apart from the awaiting makes each update rule
testable on its own.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

from synthmind.affect.emotional_gradient import Emotion
from synthmind.cognitive.concept_graph import CoOccurrenceTable, content_tokens
from synthmind.cognitive.memory_stack import (
    GOAL_STRENGTH,
    INTUITION_STRENGTH,
    SUBCONSCIOUS_STRENGTH,
    THOUGHT_STRENGTH,
    MemoryFragment,
)
from synthmind.cognitive.repetition import looks_stuck
from synthmind.cognitive.state import TOPIC_LOCK_RESET, MindState
from synthmind.cognitive.tension import (
    ANXIOUS_REPEAT_STEP,
    CALM_NOVELTY_RELIEF,
    CONFLICT_VOCABULARY_STEP,
    FORCED_SHIFT_RELIEF,
    HIGH_TENSION,
    RESOLUTION_STEP,
)
from synthmind.cognitive.topic import random_topic, select_topic

if TYPE_CHECKING:
    from synthmind.cognitive.goal import Goal
    from synthmind.identity.sub_agents import SubAgent

logger = logging.getLogger(__name__)

NOVEL = 1.0
REPETITIVE = 0.2
LOW_NOVELTY = 0.5
HIGH_NOVELTY = 0.8

CONFLICT_VOCABULARY = ("contradiction", "conflict", "tension")
GENERIC_CONFLICT = "internal contradiction"
QUESTION_ADOPT_CHANCE = 0.1
IDENTITY_QUESTION_CHANCE = 0.1

RUMINATION_CHANCE = 0.5
BELIEF_REINFORCE_CHANCE = 0.7
INTUITION_CHANCE = 0.3
RUMINATION_EMOTION_STEP = 0.05
INTUITION_CURIOSITY_STEP = 0.05
SCHEMA_CURIOSITY_STEP = 0.1
GOAL_EMOTION_STEP = 0.05
STUCK_SHIFT = {Emotion.REFLECTIVE: 0.1, Emotion.ANXIETY: -0.05}


# -- normal cycle -----------------------------------------------------------


def commit_thought(
    state: MindState,
    thought: str,
    novelty: float,
    persona: Optional["SubAgent"],
    decay_rate: float,
    rng: random.Random,
) -> MemoryFragment:
    """Store a normal-cycle thought and update every store it touches.

    ``novelty`` must be judged against memory before the insert, since the
    new fragment is always similar to itself.
    """
    dominant = state.gradient.dominant()
    fragment = state.memory.insert(MemoryFragment(thought, dominant, THOUGHT_STRENGTH), decay_rate)
    state.thought = thought
    lowered = thought.lower()
    internal = state.internal

    internal.beliefs.nudge_mentioned(lowered, novelty, persona.belief_bias if persona else 0.0)
    _update_conflicts(state, lowered)
    _update_questions(state, thought, lowered, rng)
    _update_tension(state, dominant, novelty)

    internal.goals.relieve_matching(lowered)
    new_goal = internal.goals.maybe_adopt_new(rng)
    if new_goal is not None:
        logger.debug(f"Quiet goals; adopted '{new_goal.description}'")

    model = internal.self_model
    model.last_known_emotion = dominant.tag
    model.loop_detected = novelty < NOVEL
    if rng.random() < IDENTITY_QUESTION_CHANCE:
        internal.open_questions.append(model.identity_question())
        model.record_change(f"Questioned identity: {model.identity}")

    internal.attention.update(content_tokens(thought))
    internal.push_stream(thought)
    state.concept_graph.link_tokens(thought)
    state.belief_graph.link_tokens(thought)
    if state.environment.react_to(thought):
        logger.debug(f"Environment shifted: {state.environment.describe()}")
    return fragment


def _update_conflicts(state: MindState, lowered: str) -> None:
    internal = state.internal
    if any(word in lowered for word in CONFLICT_VOCABULARY):
        if internal.add_conflict(GENERIC_CONFLICT):
            internal.tension.raise_by(CONFLICT_VOCABULARY_STEP)
            internal.self_model.last_conflict = GENERIC_CONFLICT
        return
    # a conflict counts as resolved when its first word shows up
    internal.conflicts = [c for c in internal.conflicts if c.split(" ")[0] not in lowered]
    internal.tension.lower_by(RESOLUTION_STEP)
    if not internal.conflicts:
        internal.self_model.last_conflict = "none"


def _question_token(question: str) -> str:
    parts = question.split(" ")
    return parts[1] if len(parts) > 1 else ""


def _update_questions(state: MindState, thought: str, lowered: str, rng: random.Random) -> None:
    internal = state.internal
    # single-word questions have an empty token and always count as answered
    internal.open_questions = [q for q in internal.open_questions if _question_token(q) not in lowered]
    if rng.random() < QUESTION_ADOPT_CHANCE and thought.endswith("?"):
        internal.open_questions.append(thought)


def _update_tension(state: MindState, dominant: Emotion, novelty: float) -> None:
    tension = state.internal.tension
    if dominant is Emotion.ANXIETY and novelty < LOW_NOVELTY:
        tension.raise_by(ANXIOUS_REPEAT_STEP)
    elif dominant is Emotion.CALM and novelty > HIGH_NOVELTY:
        tension.lower_by(CALM_NOVELTY_RELIEF)


class TopicShift(Enum):
    FORCED = "forced"
    RESELECTED = "reselected"
    HELD = "held"


def shift_topic(
    state: MindState,
    thought: str,
    persona: Optional["SubAgent"],
    topic_switch_chance: float,
    rng: random.Random,
) -> TopicShift:
    """Break loops and rotate topics after a normal thought.

    Stuck keywords in the newest memories, or high tension, force a random
    topic, tilt emotion toward reflection and release tension. Otherwise
    the topic is reselected when the lock has run out or a chance draw
    fires; failing both, the lock counts down.
    """
    internal = state.internal
    if looks_stuck(state.memory.texts()) or internal.tension.value > HIGH_TENSION:
        state.topic = random_topic(state.concept_graph, rng)
        state.gradient.adjust(STUCK_SHIFT)
        internal.tension.lower_by(FORCED_SHIFT_RELIEF)
        state.topic_lock = TOPIC_LOCK_RESET
        logger.info(f"Stuck or tense; forcing topic shift to '{state.topic}'")
        return TopicShift.FORCED
    if state.topic_lock <= 0 or rng.random() < topic_switch_chance:
        state.topic = select_topic(thought, persona, internal.attention, state.concept_graph, rng)
        state.topic_lock = TOPIC_LOCK_RESET
        logger.debug(f"Topic reselected: '{state.topic}'")
        return TopicShift.RESELECTED
    state.topic_lock -= 1
    return TopicShift.HELD


# -- subconscious ------------------------------------------------------------


@dataclass
class RuminationResult:
    fragment: Optional[MemoryFragment]
    reinforced: Optional[str]
    wants_intuition: bool


def ruminate(state: MindState, decay_rate: float, rng: random.Random) -> RuminationResult:
    """Background processing: replay a conflict or question, firm up a belief.

    Returns whether an intuition should be requested; the request itself is
    the engine's job since it runs without blocking the cycle.
    """
    internal = state.internal
    fragment = None
    if internal.conflicts and rng.random() < RUMINATION_CHANCE:
        conflict = rng.choice(internal.conflicts)
        text = f"(Subconscious): still feeling that {conflict}... why?"
        fragment = MemoryFragment(text, Emotion.ANXIETY, SUBCONSCIOUS_STRENGTH, source="subconscious")
        internal.self_model.loop_detected = True
        state.gradient.adjust({Emotion.ANXIETY: RUMINATION_EMOTION_STEP})
    elif internal.open_questions and rng.random() < RUMINATION_CHANCE:
        question = rng.choice(internal.open_questions)
        text = f"(Subconscious): what about {question}?"
        fragment = MemoryFragment(text, Emotion.REFLECTIVE, SUBCONSCIOUS_STRENGTH, source="subconscious")
        state.gradient.adjust({Emotion.REFLECTIVE: RUMINATION_EMOTION_STEP})
    if fragment is not None:
        state.memory.insert(fragment, decay_rate)
        state.thought = fragment.text
        internal.push_stream(fragment.text)

    reinforced = None
    if len(internal.beliefs) and rng.random() < BELIEF_REINFORCE_CHANCE:
        belief = internal.beliefs.reinforce_random(rng)
        reinforced = belief.concept
        internal.self_model.record_change(f"Reinforced belief: {belief.concept}")

    return RuminationResult(fragment, reinforced, rng.random() < INTUITION_CHANCE)


def commit_intuition(state: MindState, intuition: str, decay_rate: float) -> MemoryFragment:
    fragment = state.memory.insert(
        MemoryFragment(intuition, Emotion.CURIOSITY, INTUITION_STRENGTH, source="intuition"),
        decay_rate,
    )
    state.thought = f"(Intuition): {intuition}"
    state.internal.push_stream(intuition)
    state.gradient.adjust({Emotion.CURIOSITY: INTUITION_CURIOSITY_STEP})
    return fragment


# -- schemas -----------------------------------------------------------------


def sweep_patterns(state: MindState, table: CoOccurrenceTable) -> None:
    table.observe_all(state.memory.texts())


def form_schema(state: MindState, table: CoOccurrenceTable) -> Optional[str]:
    name = state.concept_graph.synthesize_schema(table)
    if name is None:
        return None
    state.internal.open_questions.append(f'What is "{name}"?')
    state.gradient.adjust({Emotion.CURIOSITY: SCHEMA_CURIOSITY_STEP})
    state.thought = f"(Schema Formed): New connection: {name}"
    return name


# -- goal-directed ---------------------------------------------------------


def commit_goal_thought(state: MindState, goal: "Goal", text: str, decay_rate: float) -> MemoryFragment:
    fragment = state.memory.insert(
        MemoryFragment(text, Emotion.REFLECTIVE, GOAL_STRENGTH, source="goal"),
        decay_rate,
    )
    state.thought = f"(Goal-Directed): {text}"
    state.internal.push_stream(text)
    state.internal.goals.relieve(goal)
    state.gradient.adjust({Emotion.REFLECTIVE: GOAL_EMOTION_STEP, Emotion.CURIOSITY: GOAL_EMOTION_STEP})
    return fragment
