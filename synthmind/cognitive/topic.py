"""Topic selection over the concept graph."""

import logging
import random
from typing import Optional, Set

from synthmind.cognitive.attention import AttentionStack
from synthmind.cognitive.concept_graph import ConceptGraph, tokenize
from synthmind.identity.sub_agents import SubAgent

logger = logging.getLogger(__name__)

FALLBACK_TOPIC = "consciousness"


def candidate_keywords(
    thought: str,
    persona: Optional[SubAgent],
    attention: Optional[AttentionStack],
) -> Set[str]:
    keywords: Set[str] = set(tokenize(thought))
    if attention is not None:
        keywords.update(c.lower() for c in attention.concepts())
    if persona is not None:
        keywords.update(t.lower() for t in persona.preferred_topics)
    return keywords


def select_topic(
    thought: str,
    persona: Optional[SubAgent],
    attention: Optional[AttentionStack],
    graph: ConceptGraph,
    rng: Optional[random.Random] = None,
) -> str:
    """Pick the next topic.

    Scans concepts in graph order and takes the first whose own name or
    neighbour list meets the candidate keywords, then returns a random
    neighbour of it (or the concept itself if it has none). With no match
    anywhere, a random concept is returned.
    """
    rng = rng or random
    keywords = candidate_keywords(thought, persona, attention)
    for concept in graph.concepts():
        links = graph.neighbors(concept)
        if concept in keywords or any(k in links for k in keywords):
            return rng.choice(links) if links else concept
    return random_topic(graph, rng)


def random_topic(graph: ConceptGraph, rng: Optional[random.Random] = None) -> str:
    return graph.random_concept(rng) or FALLBACK_TOPIC

