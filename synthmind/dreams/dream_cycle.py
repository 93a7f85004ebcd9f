"""Dream prompts and the integration of a dream's reflection.

Entering dream mode shifts emotion toward dreaming and away from
curiosity; the engine reverses the shift when dream mode ends.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from synthmind.affect.emotional_gradient import Emotion
from synthmind.dreams.base import DreamMaterial
from synthmind.self_model.models import MOTIF_LENGTH, DreamJournalEntry

if TYPE_CHECKING:
    from synthmind.cognitive.state import InternalState

logger = logging.getLogger(__name__)

DREAM_ENTRY_SHIFT = {Emotion.DREAMING: 0.2, Emotion.CURIOSITY: -0.1}
DREAM_EXIT_SHIFT = {emotion: -delta for emotion, delta in DREAM_ENTRY_SHIFT.items()}

DREAM_CONFLICT = "dream-induced conflict"
REFLECTION_EXCERPT = 30

DREAM_INSTRUCTIONS = """You are a dreaming synthetic mind. Logic is gone.
Dream with surreal symbols, strong emotions, random scenes or sounds.
Your output must be a single dream fragment. Vary sentence length, punctuation, and tension.
Avoid repeating structure or predictable patterns. Let the dream feel disjointed and symbolic.
Examples of desired dream fragments:
- "shh... a corner that keeps folding in"
- "no shapes. only tension"
- "something waiting in the static"
- "memory that isn't mine... feels old"
- "a soundless echo... where?"
- "a key without a lock, a door without a wall."

Integrate these dream fragments, associations, and symbolic conflicts into a single, surreal, free-associative dream fragment."""


def build_dream_prompt(material: DreamMaterial) -> str:
    parts = [DREAM_INSTRUCTIONS, "", "Dream fragments for inspiration:"]
    parts.extend(f"- {text}" for text in material.fragments)
    if material.associations:
        parts.append(f"Associations: {' -> '.join(material.associations)}.")
    if material.conflicts:
        parts.append(
            f"Unresolved internal conflicts: {', '.join(material.conflicts)}. These may appear symbolically."
        )
    if material.motifs:
        parts.append(f"Recurring dream motifs: {', '.join(material.motifs)}. You might reflect on these.")
    parts.append(
        f'Your self-perception in dream: Identity is "{material.identity}". '
        f"Last conflict: {material.last_conflict}."
    )
    if material.stream:
        parts.append(
            f"Last few thoughts in sequence: {'; '.join(material.stream)}. "
            "Let this influence your new dream fragment."
        )
    parts.append(f"Your current emotional blend: {material.emotions}. This will color the dream's mood.")
    parts.append("")
    parts.append(
        "Generate one dream-like sentence or short phrase. "
        "It should feel disjointed, symbolic, and emotionally charged."
    )
    return "\n".join(parts)


def build_reflection_prompt(dream: str) -> str:
    return (
        f'You just had this dream fragment: "{dream}". Reflect on it. Does it relate to any of your '
        "beliefs, conflicts, or questions? Generate a very brief, raw, introspective thought about the "
        "dream's meaning or impact on your internal state. Avoid poetic language. Example: "
        '"that dream... felt like the conflict.", "symbols again. what do they mean?", '
        '"a new question from the dream."'
    )


def integrate_dream(internal: "InternalState", dream: str, reflection: str) -> None:
    """Fold a dream and its reflection into the internal state."""
    lowered = reflection.lower()
    if "conflict" in lowered and internal.add_conflict(DREAM_CONFLICT):
        logger.debug("Dream reflection raised a conflict")
    if "question" in lowered:
        internal.open_questions.append(reflection)
    internal.add_insight(reflection)
    internal.dream_journal.append(DreamJournalEntry.from_dream(dream))
    internal.self_model.record_change(f'Dream reflection: "{reflection[:REFLECTION_EXCERPT]}..."')
    internal.self_model.narrate(f'Dreamt of: "{dream[:MOTIF_LENGTH]}..."')
    internal.push_stream(reflection)
