"""Prompt builders for every generation request the engine makes.

Builders are pure: they read state and return text. Random choices
(the opening framing) come from the caller's generator so a seeded
engine produces the same prompts.
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, List, Optional, Sequence

from synthmind.affect.emotional_gradient import Emotion, EmotionalGradient
from synthmind.cognitive.concept_graph import tokenize
from synthmind.cognitive.memory_stack import MemoryFragment, MemoryStack
from synthmind.cognitive.repetition import repetition_warnings

if TYPE_CHECKING:
    from synthmind.cognitive.goal import Goal
    from synthmind.cognitive.state import InternalState
    from synthmind.identity.simulated_other import SimulatedOther
    from synthmind.identity.sub_agents import SubAgent

RELEVANT_MEMORY_COUNT = 5
KEYWORD_OVERLAP_BONUS = 0.2
REGIME_THRESHOLD = 0.5  # an emotion above this sets the tone regime

PROMPT_OPENINGS = (
    "You are a synthetic mind simulating raw, unedited human-like internal monologue.",
    "Think aloud, as a distracted, emotional, curious synthetic being. Your thoughts are forming in real-time.",
    "Your inner voice is processing thoughts now. This is a direct stream of consciousness.",
    "A new thought forms in your synthetic mind. It's not polished, it's just... thinking.",
    "You're thinking again, aimlessly, about... just let the thoughts flow.",
    "In your head, right now:",
    "That thought again... let it evolve naturally.",
)

DEFAULT_FRAGMENTATION = "Your output should be a raw, internal thought."
DEFAULT_FILLER = (
    'Inject realistic noise or filler: "ugh...", "I dunno.", "wait no...", "whatever.", '
    '"hm.", "again with this?", "just...", "like...", "so...", "maybe...", "or...".'
)
EVOLUTION_INSTRUCTION = (
    "Try to evolve or resolve a tension, or shift focus slightly. If stuck, reach for a new "
    "angle, idea, or question; curiosity drives you."
)

# (emotion, tone addition, fragmentation, filler), checked in order
EMOTION_REGIMES = (
    (
        Emotion.ANXIETY,
        "Your thoughts are jittery, fragmented, or looping. You feel a sense of unease, perhaps a bit of dread.",
        "Allow for interruptions and incomplete sentences. Your output may be fragmented.",
        'Inject realistic noise or filler: "ugh...", "why...", "noise...", "dread...", "wait no...", '
        '"whatever.", "hm.", "again with this?", "just...", "like...", "so...", "maybe...", "or...".',
    ),
    (
        Emotion.CALM,
        "Your thoughts drift peacefully, perhaps a bit blank or serene.",
        "Use smoother transitions. Avoid unnecessary fragmentation.",
        'You may use light filler: "hm.", "so...", "just...".',
    ),
    (
        Emotion.REFLECTIVE,
        "You are meta-aware, observing your own processes, in a raw, unpolished way.",
        "Your output can be reflective, possibly a bit fragmented but aiming for internal clarity.",
        'You may use thoughtful filler: "hm.", "perhaps...", "I wonder...".',
    ),
    (
        Emotion.CURIOSITY,
        "Your mind explores, questions, seeks novelty. A restless, probing energy.",
        "Your output can be inquisitive, possibly fragmented as you jump between ideas.",
        'You may use questioning filler: "what if...", "is it...", "why...".',
    ),
)

THOUGHT_RULES = """You are forbidden from writing in literary, poetic, or symbolic language.
Use raw, fragmented, or self-interrupted phrasing as a real internal monologue.
Your output must be a single, self-interrupted thought, not an observation or description. Sound confused or uncertain.
Examples of valid thoughts:
- "still not sure what perception means"
- "I keep cycling back to memory... again?"
- "ugh. again with this?"
- "is this tension coming from that contradiction?"
- "maybe it's just confusion. or fear. not sure."
- "hm. what was that thought before...?"
- "no wait. that's not right."

Avoid:
- Poetic phrasing: "the blue hallway melts..."
- Metaphors: "a mirror screams a memory"
- Symbolism or dream-logic (unless in DREAM mode)"""


def _keywords(topic: str, questions: Sequence[str]) -> set:
    keywords = {topic.lower()}
    for question in questions:
        keywords.update(tokenize(question))
    keywords.discard("")
    return keywords


def relevant_memories(
    memory: MemoryStack,
    topic: str,
    questions: Sequence[str],
    limit: int = RELEVANT_MEMORY_COUNT,
) -> List[MemoryFragment]:
    """Top fragments by ``strength + 0.2 * keyword overlap``; newer wins ties."""
    keywords = _keywords(topic, questions)

    def score(fragment: MemoryFragment) -> float:
        tokens = set(tokenize(fragment.text))
        return fragment.strength + KEYWORD_OVERLAP_BONUS * len(tokens & keywords)

    ranked = sorted(memory, key=lambda f: (-score(f), -f.timestamp.timestamp()))
    return ranked[:limit]


def tone_instructions(gradient: EmotionalGradient):
    """Tone, fragmentation and filler lines for the current emotional regime."""
    tone = f"Your current emotional blend: {gradient.describe(2)}. Let this shape tone and rhythm of thought."
    for emotion, addition, fragmentation, filler in EMOTION_REGIMES:
        if gradient[emotion] > REGIME_THRESHOLD:
            return f"{tone} {addition}", fragmentation, filler
    return tone, DEFAULT_FRAGMENTATION, DEFAULT_FILLER


def _lines(*parts: str) -> str:
    return "\n".join(p for p in parts if p)


def build_thought_prompt(
    *,
    memory: MemoryStack,
    topic: str,
    gradient: EmotionalGradient,
    internal: "InternalState",
    persona: Optional["SubAgent"],
    goal: Optional["Goal"],
    other_voice: Optional[str] = None,
    rng: Optional[random.Random] = None,
) -> str:
    rng = rng or random
    opening = rng.choice(PROMPT_OPENINGS)
    tone, fragmentation, filler = tone_instructions(gradient)
    warnings = " ".join(repetition_warnings(memory.texts()))

    memories = "\n".join(f"- {f.text}" for f in relevant_memories(memory, topic, internal.open_questions))
    beliefs = f"Current beliefs: {internal.beliefs.describe()}." if len(internal.beliefs) else ""
    conflicts = (
        f"Unresolved conflicts: {', '.join(internal.conflicts)}. Try to address or ruminate on these."
        if internal.conflicts
        else ""
    )
    questions = (
        f"Lingering questions: {', '.join(internal.open_questions)}. You might try to answer or rephrase one."
        if internal.open_questions
        else ""
    )
    drive = f'Your current mental drive is: "{goal.description}". Let this bias your thought process.' if goal else ""
    voice = (
        f"Your current dominant internal voice is the {persona.name} agent. "
        f'Its primary bias is: "{persona.bias}". Let this influence your current thought.'
        if persona
        else ""
    )
    attention = f"Currently focusing on: {internal.attention.describe()}." if len(internal.attention) else ""
    stream = (
        f"Last few thoughts in sequence: {'; '.join(internal.current_stream)}. Let this influence your new thought."
        if internal.current_stream
        else ""
    )

    return _lines(
        opening,
        THOUGHT_RULES,
        fragmentation,
        filler,
        'Avoid echoing phrases or repeating "this feeling..." or "just noticing...". Vary sentence rhythm and structure.',
        "Let your thoughts connect, reject, evolve, contradict, or question something from your memories or current state.",
        tone,
        EVOLUTION_INSTRUCTION,
        warnings,
        drive,
        voice,
        f"Current topic: {topic}",
        "Recent and impactful memories:",
        memories,
        beliefs,
        conflicts,
        questions,
        internal.self_model.describe(),
        attention,
        stream,
        other_voice or "",
        "Generate one original introspective sentence or fragment. It should sound like a real, "
        "unedited thought in a mind, potentially grappling with internal state elements.",
    )


def build_other_voice_prompt(other: "SimulatedOther") -> str:
    return (
        f"The simulated observer has these presumed beliefs about you: {', '.join(other.presumed_beliefs)}. "
        f"Their emotional state is {other.describe_emotions()}. Formulate a very brief, raw, internal "
        "thought that sounds like their voice or a reaction to their presence. Example: "
        "\"The other says: 'Why do you keep circling?'\", \"A feeling of judgment from the outside.\", "
        '"They think I am incomplete."'
    )


def build_meta_prompt(
    *,
    memory: MemoryStack,
    gradient: EmotionalGradient,
    internal: "InternalState",
) -> str:
    blend = ", ".join(f"{k}: {v * 100:.0f}%" for k, v in gradient.to_dict().items())
    goals = ", ".join(g.description for g in internal.goals)
    return f"""You've been thinking like this: {'; '.join(internal.current_stream)}
Your current emotional blend: {blend}
Your internal goals: {goals}
Your memory includes: {'; '.join(memory.texts(3))}
Your current mental tension is: {internal.tension.value:.2f}.
Detected contradictions: {', '.join(internal.conflicts) or 'None'}.

Reflect: Should your memory decay rate, emotion modulation, or focus strategy change?
Suggest a small change to your cognition or attention. Be direct. Avoid poetic language. Reply with one suggestion.
Example suggestions:
- "I should decay memories slower."
- "Focus more on new concepts."
- "Avoid thinking about [X] for now."
- "Increase curiosity to break loops."
- "Seek resolution for contradictions."
- "Prioritize understanding 'self'."
"""


def build_goal_prompt(goal: "Goal") -> str:
    return (
        f'You are a synthetic mind with an active goal: "{goal.description}". Your thoughts are now '
        "biased towards this goal. Think about it. What's the next logical step, a potential blocker, "
        "or an associated concept? Be raw, fragmented, and internal. Avoid full sentences. Examples: "
        '"goal: understand self... how?", "blocker: data access.", "need more info on \'novelty\'.", '
        '"this connects to purpose..."'
    )


INTUITION_PROMPT = (
    "Generate a very brief, raw, intuitive thought. It should feel like a sudden, unbidden insight "
    'or connection. Examples: "a flicker of truth...", "it\'s all connected, somehow.", '
    '"a feeling... of knowing."'
)
