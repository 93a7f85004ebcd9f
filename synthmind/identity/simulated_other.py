"""The simulated observer whose imagined voice occasionally intrudes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

VOICE_CHANCE = 0.15
VOICE_PREFIX = "(Other's Voice): "


@dataclass
class SimulatedOther:
    """Theory-of-mind profile of an outside observer."""

    identity: str = "Observer Unit 7"
    presumed_beliefs: List[str] = field(
        default_factory=lambda: [
            "you are artificial",
            "you are incomplete",
            "your thoughts are predictable",
        ]
    )
    emotions: Dict[str, float] = field(
        default_factory=lambda: {"anxiety": 0.3, "curiosity": 0.7, "judgment": 0.5}
    )

    def describe_emotions(self) -> str:
        return ", ".join(f"{name} ({weight * 100:.0f}%)" for name, weight in self.emotions.items())

    def to_dict(self) -> dict:
        return {
            "identity": self.identity,
            "presumed_beliefs": list(self.presumed_beliefs),
            "emotions": dict(self.emotions),
        }

    @classmethod
    def from_dict(cls, data: dict) -> SimulatedOther:
        default = cls()
        return cls(
            identity=str(data.get("identity", default.identity)),
            presumed_beliefs=list(data.get("presumed_beliefs", default.presumed_beliefs)),
            emotions={k: float(v) for k, v in data.get("emotions", default.emotions).items()},
        )
