"""Simulated environment readings.

The environment is four coarse descriptors. Thoughts complaining about
noise or light flip the matching descriptor, so the next external
observation reports a changed world.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass

# (triggers, field, new value); within a field the first matching rule wins
ENVIRONMENT_RULES = (
    (("too quiet", "silence"), "noise", "medium"),
    (("too loud", "noise"), "noise", "low"),
    (("too dark", "dim"), "light", "bright"),
    (("too bright", "glare"), "light", "dim"),
)


@dataclass
class EnvironmentState:
    light: str = "neutral"
    noise: str = "low"
    network: str = "stable"
    temperature: str = "ambient"

    def react_to(self, thought: str) -> bool:
        """Apply substring triggers from ``thought``. Returns True if anything changed."""
        lowered = thought.lower()
        before = asdict(self)
        settled = set()
        for triggers, name, value in ENVIRONMENT_RULES:
            if name in settled:
                continue
            if any(t in lowered for t in triggers):
                setattr(self, name, value)
                settled.add(name)
        return asdict(self) != before

    def describe(self) -> str:
        return (
            f"(Env: Light:{self.light}, Noise:{self.noise}, "
            f"Net:{self.network}, Temp:{self.temperature})."
        )

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> EnvironmentState:
        default = cls()
        return cls(**{k: str(data.get(k, getattr(default, k))) for k in asdict(default)})
