"""Persistence of the mind's stores and read-only snapshots for renderers."""
from synthmind.psyche.persistence import STATE_KEYS, load_state, save_state
from synthmind.psyche.schema import MindSnapshot, build_snapshot
from synthmind.psyche.store import InMemoryStore, JsonFileStore, KeyValueStore

__all__ = [
    "InMemoryStore",
    "JsonFileStore",
    "KeyValueStore",
    "MindSnapshot",
    "STATE_KEYS",
    "build_snapshot",
    "load_state",
    "save_state",
]
