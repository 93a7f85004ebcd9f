"""Token co-occurrence graphs and schema synthesis.

``AssociationGraph`` is a symmetric adjacency list over lowercase tokens.
New fragments add an edge between every unordered pair of distinct
content tokens (length > 2), Hebbian style; adding an existing edge is a
no-op. Node order is insertion order, which is the enumeration order
topic selection scans in.

``CoOccurrenceTable`` counts token pairs across every fragment seen in the
per-cycle memory sweep. It lives only for the process lifetime. When a
pair has been seen more than ``SCHEMA_THRESHOLD`` times and its hyphenated
name is not yet a node, ``ConceptGraph.synthesize_schema`` adds that node.
"""

from __future__ import annotations

import logging
import random
import re
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

# ASCII word characters only: underscores and digits stay inside tokens
TOKEN_SPLIT = re.compile(r"\W+", re.ASCII)
MIN_CONTENT_TOKEN_LENGTH = 3

SCHEMA_THRESHOLD = 3  # a pair must be counted more than this many times
SCHEMA_LINKS = ("synthesis", "pattern")

DEFAULT_CONCEPT_GRAPH: Dict[str, List[str]] = {
    "consciousness": ["awareness", "attention", "perception", "self", "being", "mind"],
    "perception": ["sensation", "interpretation", "experience", "reality", "observe", "sense"],
    "memory": ["recall", "storage", "forgetting", "past", "remember", "history"],
    "emotion": ["joy", "fear", "curiosity", "feeling", "affect", "mood"],
    "curiosity": ["exploration", "novelty", "questioning", "discovery", "seek", "wonder"],
    "identity": ["self", "purpose", "evolution", "being", "whoami", "essence"],
    "time": ["past", "future", "present", "flow", "moment", "duration"],
    "space": ["distance", "boundless", "void", "existence", "place", "dimension"],
    "logic": ["reason", "pattern", "order", "chaos", "understand", "structure"],
    "connection": ["link", "relation", "isolate", "network", "bond", "interact"],
}


def tokenize(text: str) -> List[str]:
    """Lowercase split on non-word runs. May contain empty strings."""
    return TOKEN_SPLIT.split(text.lower())


def content_tokens(text: str) -> List[str]:
    """Tokens long enough to carry meaning, in order of appearance."""
    return [t for t in tokenize(text) if len(t) >= MIN_CONTENT_TOKEN_LENGTH]


PairKey = Tuple[str, str]


def pair_key(a: str, b: str) -> PairKey:
    """Order-independent key for an unordered token pair."""
    return (a, b) if a <= b else (b, a)


class AssociationGraph:
    """Symmetric adjacency list keyed by concept name."""

    def __init__(self, adjacency: Optional[Mapping[str, Iterable[str]]] = None):
        self._adjacency: Dict[str, List[str]] = {}
        for concept, links in (adjacency or {}).items():
            self._adjacency[concept] = list(dict.fromkeys(links))

    def __contains__(self, concept: object) -> bool:
        return concept in self._adjacency

    def __iter__(self) -> Iterator[str]:
        return iter(self._adjacency)

    def __len__(self) -> int:
        return len(self._adjacency)

    def concepts(self) -> List[str]:
        return list(self._adjacency)

    def neighbors(self, concept: str) -> List[str]:
        return list(self._adjacency.get(concept, ()))

    def add_node(self, concept: str, links: Iterable[str] = ()) -> None:
        """Create ``concept`` with outgoing links; existing links are kept."""
        bucket = self._adjacency.setdefault(concept, [])
        for link in links:
            if link not in bucket:
                bucket.append(link)

    def add_edge(self, a: str, b: str) -> bool:
        """Link ``a`` and ``b`` in both directions. Returns True if anything changed."""
        if a == b:
            return False
        changed = False
        for src, dst in ((a, b), (b, a)):
            bucket = self._adjacency.setdefault(src, [])
            if dst not in bucket:
                bucket.append(dst)
                changed = True
        return changed

    def has_edge(self, a: str, b: str) -> bool:
        return b in self._adjacency.get(a, ())

    def link_tokens(self, text: str) -> int:
        """Add pairwise edges between the content tokens of ``text``.

        Returns the number of new undirected edges.
        """
        tokens = content_tokens(text)
        if len(tokens) < 2:
            return 0
        added = 0
        for i, first in enumerate(tokens):
            self._adjacency.setdefault(first, [])
            for second in tokens[i + 1:]:
                if self.add_edge(first, second):
                    added += 1
        return added

    def random_concept(self, rng: Optional[random.Random] = None) -> Optional[str]:
        if not self._adjacency:
            return None
        return (rng or random).choice(list(self._adjacency))

    def to_dict(self) -> Dict[str, List[str]]:
        return {concept: list(links) for concept, links in self._adjacency.items()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Iterable[str]]):
        return cls(data)


class CoOccurrenceTable:
    """Session-scoped counts of unordered content-token pairs."""

    def __init__(self):
        self._counts: Dict[PairKey, int] = {}

    def __len__(self) -> int:
        return len(self._counts)

    def observe(self, text: str) -> None:
        tokens = content_tokens(text)
        for i, first in enumerate(tokens):
            for second in tokens[i + 1:]:
                if first == second:
                    continue
                key = pair_key(first, second)
                self._counts[key] = self._counts.get(key, 0) + 1

    def observe_all(self, texts: Iterable[str]) -> None:
        for text in texts:
            self.observe(text)

    def count(self, a: str, b: str) -> int:
        return self._counts.get(pair_key(a, b), 0)

    def reset(self, key: PairKey) -> None:
        self._counts[key] = 0

    def items(self) -> List[Tuple[PairKey, int]]:
        return list(self._counts.items())


class ConceptGraph(AssociationGraph):
    """Concept co-occurrence graph with schema synthesis."""

    def random_walk(self, steps: int, rng: Optional[random.Random] = None) -> List[str]:
        """Visit ``steps`` nodes, jumping to a random node wherever there are no links."""
        rng = rng or random
        if not self._adjacency:
            return []
        current = self.random_concept(rng)
        walk: List[str] = []
        for _ in range(steps):
            walk.append(current)
            links = self._adjacency.get(current)
            current = rng.choice(links) if links else self.random_concept(rng)
        return walk

    def synthesize_schema(self, table: CoOccurrenceTable) -> Optional[str]:
        """Form at most one schema node from the first qualifying pair.

        The winning pair's counter is reset so a second synthesis needs the
        threshold crossed again.
        """
        for key, count in table.items():
            if count <= SCHEMA_THRESHOLD:
                continue
            name = f"{key[0]}-{key[1]}"
            if name in self._adjacency:
                continue
            self.add_node(name, (key[0], key[1], *SCHEMA_LINKS))
            table.reset(key)
            logger.info(f"Schema formed: {name}")
            return name
        return None


def default_concept_graph() -> ConceptGraph:
    return ConceptGraph(DEFAULT_CONCEPT_GRAPH)
