"""Self-model: identity narrative, change log, dream journal, insights."""

from .models import DreamJournalEntry, Insight, NarrativeEntry, SelfModel

__all__ = ["DreamJournalEntry", "Insight", "NarrativeEntry", "SelfModel"]
