"""Synthetic mind: a periodic cognitive-state simulation engine."""

__version__ = "0.1.0"
