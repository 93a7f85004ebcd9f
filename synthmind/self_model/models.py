"""Dataclasses for the mind's model of itself.

The self-model is an append-only record of identity-relevant events:
a free-form change log, and a timestamped identity narrative. It also
carries a handful of "last seen" fields that prompt builders quote back
to the generator. Dream motifs and insights are stored alongside it.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _parse_timestamp(value: Optional[str]) -> datetime:
    if not value:
        return _utcnow()
    try:
        return datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return _utcnow()


@dataclass
class NarrativeEntry:
    """One line of the identity narrative."""

    insight: str
    timestamp: datetime = field(default_factory=_utcnow)

    def to_dict(self) -> dict:
        return {"insight": self.insight, "timestamp": self.timestamp.isoformat()}

    @classmethod
    def from_dict(cls, data: dict) -> "NarrativeEntry":
        return cls(insight=str(data["insight"]), timestamp=_parse_timestamp(data.get("timestamp")))


@dataclass
class Insight:
    """A reflection worth keeping (dream or meta-reflection)."""

    text: str
    timestamp: datetime = field(default_factory=_utcnow)

    def to_dict(self) -> dict:
        return {"text": self.text, "timestamp": self.timestamp.isoformat()}

    @classmethod
    def from_dict(cls, data: dict) -> "Insight":
        return cls(text=str(data["text"]), timestamp=_parse_timestamp(data.get("timestamp")))


MOTIF_LENGTH = 50


@dataclass
class DreamJournalEntry:
    """Leading fragment of a dream, kept as a recurring motif."""

    motif: str
    timestamp: datetime = field(default_factory=_utcnow)

    @classmethod
    def from_dream(cls, dream: str) -> "DreamJournalEntry":
        return cls(motif=dream[:MOTIF_LENGTH])

    def to_dict(self) -> dict:
        return {"motif": self.motif, "timestamp": self.timestamp.isoformat()}

    @classmethod
    def from_dict(cls, data: dict) -> "DreamJournalEntry":
        return cls(motif=str(data["motif"]), timestamp=_parse_timestamp(data.get("timestamp")))


@dataclass
class SelfModel:
    """Symbolic self-description.

    Attributes:
        identity: Current identity label
        recent_changes: Unbounded log of self-modifications
        last_known_emotion: Tag of the dominant emotion after the last thought
        last_conflict: Most recent conflict name, or "none"
        loop_detected: Whether the last thought repeated recent memory
        identity_narrative: Unbounded timestamped narrative
    """

    identity: str = "v0id"
    recent_changes: List[str] = field(default_factory=list)
    last_known_emotion: str = "CURIOSITY"
    last_conflict: str = "undefined"
    loop_detected: bool = False
    identity_narrative: List[NarrativeEntry] = field(
        default_factory=lambda: [NarrativeEntry("Initial boot, self undefined.")]
    )

    def record_change(self, change: str) -> None:
        self.recent_changes.append(change)

    def narrate(self, insight: str) -> NarrativeEntry:
        entry = NarrativeEntry(insight)
        self.identity_narrative.append(entry)
        return entry

    def identity_question(self) -> str:
        return f"Am I really just '{self.identity}'? Does it mean something?"

    def describe(self) -> str:
        return (
            f'Your self-perception: Identity is "{self.identity}". '
            f"Last emotion: {self.last_known_emotion}. "
            f"Last conflict: {self.last_conflict}. "
            f"Loop detected: {str(self.loop_detected).lower()}. "
            f"Recent self-changes: {', '.join(self.recent_changes)}."
        )

    def to_dict(self) -> dict:
        return {
            "identity": self.identity,
            "recent_changes": list(self.recent_changes),
            "last_known_emotion": self.last_known_emotion,
            "last_conflict": self.last_conflict,
            "loop_detected": self.loop_detected,
            "identity_narrative": [e.to_dict() for e in self.identity_narrative],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SelfModel":
        default = cls()
        narrative = data.get("identity_narrative")
        return cls(
            identity=str(data.get("identity", default.identity)),
            recent_changes=list(data.get("recent_changes", [])),
            last_known_emotion=str(data.get("last_known_emotion", default.last_known_emotion)),
            last_conflict=str(data.get("last_conflict", default.last_conflict)),
            loop_detected=bool(data.get("loop_detected", False)),
            identity_narrative=(
                [NarrativeEntry.from_dict(e) for e in narrative]
                if narrative is not None
                else default.identity_narrative
            ),
        )
