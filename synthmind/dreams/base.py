"""
Raw material for a dream.

A dream is assembled from three randomly sampled memories, a short random
walk over the concept graph, the unresolved conflicts, recurring motifs
from earlier dreams, a little self-model context, the recent stream and
the two strongest emotions. ``DreamMaterial.gather`` collects all of it
from the engine's state without mutating anything.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from synthmind.cognitive.state import MindState

DREAM_SAMPLE_SIZE = 3
DREAM_WALK_STEPS = 3


@dataclass
class DreamMaterial:
    fragments: List[str] = field(default_factory=list)
    associations: List[str] = field(default_factory=list)
    conflicts: List[str] = field(default_factory=list)
    motifs: List[str] = field(default_factory=list)
    identity: str = ""
    last_conflict: str = ""
    stream: List[str] = field(default_factory=list)
    emotions: str = ""

    @classmethod
    def gather(cls, state: "MindState", rng: Optional[random.Random] = None) -> DreamMaterial:
        rng = rng or random
        internal = state.internal
        return cls(
            fragments=[f.text for f in state.memory.sample(DREAM_SAMPLE_SIZE, rng)],
            associations=state.concept_graph.random_walk(DREAM_WALK_STEPS, rng),
            conflicts=list(internal.conflicts),
            motifs=[entry.motif for entry in internal.dream_journal],
            identity=internal.self_model.identity,
            last_conflict=internal.self_model.last_conflict,
            stream=list(internal.current_stream),
            emotions=state.gradient.describe(2),
        )
