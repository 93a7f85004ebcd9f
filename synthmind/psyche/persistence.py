"""Per-store (de)serialization against a key-value store.

Each top-level store is written under its own key as a JSON string and
read back independently. A missing key leaves that store at its
default; a key that fails to decode does the same and logs a warning.
The co-occurrence table is session-only and never written.
"""

import json
import logging
from typing import Any, Callable, Dict, Tuple

from synthmind.affect.emotional_gradient import EmotionalGradient
from synthmind.beliefs.belief_store import BeliefGraph
from synthmind.cognitive.concept_graph import ConceptGraph
from synthmind.cognitive.memory_stack import MemoryStack
from synthmind.cognitive.state import InternalState, MindState, Mode
from synthmind.identity.simulated_other import SimulatedOther
from synthmind.psyche.store import KeyValueStore
from synthmind.sensing.environment import EnvironmentState

logger = logging.getLogger(__name__)

Encoder = Callable[[MindState], Any]
Decoder = Callable[[MindState, Any], None]


def _set(attr: str, convert: Callable[[Any], Any]) -> Decoder:
    def decode(state: MindState, value: Any) -> None:
        setattr(state, attr, convert(value))

    return decode


def _maturity(value: Any) -> float:
    return max(0.0, min(1.0, float(value)))


def _topic(value: Any) -> str:
    if not isinstance(value, str) or not value:
        raise ValueError("topic must be a non-empty string")
    return value


CODECS: Dict[str, Tuple[Encoder, Decoder]] = {
    "mode": (lambda s: s.mode.value, _set("mode", Mode)),
    "topic": (lambda s: s.topic, _set("topic", _topic)),
    "memory_stack": (lambda s: s.memory.to_list(), _set("memory", MemoryStack.from_list)),
    "emotional_gradient": (lambda s: s.gradient.to_dict(), _set("gradient", EmotionalGradient.from_dict)),
    "internal_state": (lambda s: s.internal.to_dict(), _set("internal", InternalState.from_dict)),
    "topic_lock_counter": (lambda s: s.topic_lock, _set("topic_lock", int)),
    "concept_graph": (lambda s: s.concept_graph.to_dict(), _set("concept_graph", ConceptGraph.from_dict)),
    "belief_graph": (lambda s: s.belief_graph.to_dict(), _set("belief_graph", BeliefGraph.from_dict)),
    "cognitive_maturity": (lambda s: s.maturity, _set("maturity", _maturity)),
    "environment": (lambda s: s.environment.to_dict(), _set("environment", EnvironmentState.from_dict)),
    "simulated_other": (lambda s: s.simulated_other.to_dict(), _set("simulated_other", SimulatedOther.from_dict)),
}

STATE_KEYS = tuple(CODECS)


def save_state(store: KeyValueStore, state: MindState) -> None:
    values = {key: json.dumps(encode(state)) for key, (encode, _) in CODECS.items()}
    set_many = getattr(store, "set_many", None)
    if set_many is not None:
        set_many(values)
        return
    for key, value in values.items():
        store.set(key, value)


def load_state(store: KeyValueStore) -> MindState:
    """Rebuild a MindState, falling back to defaults key by key."""
    state = MindState()
    for key, (_, decode) in CODECS.items():
        raw = store.get(key)
        if raw is None:
            logger.debug(f"No persisted value for '{key}', using default")
            continue
        try:
            decode(state, json.loads(raw))
        except (ValueError, TypeError, KeyError, AttributeError) as e:
            logger.warning(f"Discarding malformed persisted '{key}': {e}")
    return state
