"""Contradiction detection over current belief stances.

Two kinds of pattern are recognised:

- Canonical contradictions: a single concept whose stance contains both
  of two opposite labels (for example ``self`` being both "undefined" and
  "defined"). Rules written with a single label pair it with "undefined",
  so ``chaos`` only conflicts when its stance holds both "order" and
  "undefined".
- Implied contradictions: a pair of concepts linked in the belief graph
  that are both asserted "true" while being known opposites.

The detector is pure; callers merge the result into the conflict list
and raise tension for each new entry.
"""

from typing import List, Mapping, Sequence, Tuple

from synthmind.beliefs.belief_store import BeliefGraph, BeliefStore

# (concept, label, opposite label)
CANONICAL_CONTRADICTIONS: Sequence[Tuple[str, str, str]] = (
    ("self", "undefined", "defined"),
    ("chaos", "order", "undefined"),
    ("free will", "determinism", "undefined"),
    ("memory", "fluid", "static"),
    ("existence", "real", "simulated"),
)

# Linked pairs that contradict when both hold as "true"
OPPOSED_PAIRS = (frozenset(("logic", "chaos")),)
ASSERTION_MARKER = "true"


def _canonical_conflicts(stances: Mapping[str, str]) -> List[str]:
    found = []
    for concept, first, second in CANONICAL_CONTRADICTIONS:
        stance = stances.get(concept)
        if not stance:
            continue
        if first in stance and second in stance:
            found.append(f"Contradiction in '{concept}' between '{first}' and '{second}'")
    return found


def _implied_conflicts(stances: Mapping[str, str], graph: BeliefGraph) -> List[str]:
    found = []
    for concept_a, concept_b in graph.linked_pairs():
        if frozenset((concept_a, concept_b)) not in OPPOSED_PAIRS:
            continue
        stance_a = stances.get(concept_a)
        stance_b = stances.get(concept_b)
        if stance_a and stance_b and ASSERTION_MARKER in stance_a and ASSERTION_MARKER in stance_b:
            found.append(f"Implied contradiction between '{concept_a}' and '{concept_b}'")
    return found


def detect_contradictions(beliefs: BeliefStore, graph: BeliefGraph) -> List[str]:
    """Deduplicated conflict descriptions, in detection order."""
    stances = beliefs.stances()
    found = _canonical_conflicts(stances) + _implied_conflicts(stances, graph)
    return list(dict.fromkeys(found))
