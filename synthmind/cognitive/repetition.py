"""Repetition guards for generated fragments.

Three cheap lexical checks keep the stream from looping:

- ``is_too_similar``: prefix-containment against the newest memories,
  used as the retry gate for normal thoughts and as the loop signal.
- ``repetition_warnings``: banned filler phrases seen in recent memory
  become "avoid repeating" lines in the next prompt.
- ``looks_stuck``: stuck keywords in recent memory force a topic shift.
"""

import math
from typing import Iterable, List

SIMILARITY_WINDOW = 3  # newest memories compared against a candidate
SIMILARITY_OVERLAP = 0.6  # leading share of the shorter string that must be contained
MIN_COMPARABLE_LENGTH = 5  # skip comparisons when the shorter string is shorter than this

BANNED_PHRASE_WINDOW = 4
BANNED_PHRASES = (
    "ugh",
    "noise",
    "why",
    "scanning",
    "loop",
    "dread",
    "fragment",
    "repetitive",
    "this feeling",
    "just noticing",
)

STUCK_WINDOW = 3
STUCK_KEYWORDS = ("noise", "why", "loop", "ugh", "dread", "fragment", "repetitive", "circling")


def _normalize(text: str) -> str:
    return text.lower().strip()


def is_too_similar(candidate: str, recent_texts: Iterable[str]) -> bool:
    """True when candidate and one of the newest texts share a long leading run.

    Both directions are checked: the candidate containing the leading 60% of
    an old text, or an old text containing the leading 60% of the candidate.
    The 60% is measured on the shorter of the two strings.
    """
    new = _normalize(candidate)
    for i, old_text in enumerate(recent_texts):
        if i >= SIMILARITY_WINDOW:
            break
        old = _normalize(old_text)
        shorter = min(len(new), len(old))
        if shorter < MIN_COMPARABLE_LENGTH:
            continue
        prefix_len = math.ceil(shorter * SIMILARITY_OVERLAP)
        if old[:prefix_len] in new or new[:prefix_len] in old:
            return True
    return False


def repetition_warnings(recent_texts: Iterable[str]) -> List[str]:
    """Warnings for banned phrases present in the newest memories."""
    window = " ".join(list(recent_texts)[:BANNED_PHRASE_WINDOW]).lower()
    return [
        f'Avoid repeating "{phrase}" again unless meaningfully evolved.'
        for phrase in BANNED_PHRASES
        if phrase in window
    ]


def looks_stuck(recent_texts: Iterable[str]) -> bool:
    window = " ".join(list(recent_texts)[:STUCK_WINDOW]).lower()
    return any(keyword in window for keyword in STUCK_KEYWORDS)
