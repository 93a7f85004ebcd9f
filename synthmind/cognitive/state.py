"""State bundles owned by a single engine instance.

``InternalState`` groups the cognitive stores that change together
(beliefs, conflicts, questions, goals, tension, attention, the self-model).
``MindState`` is everything the engine owns, one attribute per persisted
key plus transient fields.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from synthmind.affect.emotional_gradient import EmotionalGradient
from synthmind.beliefs.belief_store import BeliefGraph, BeliefStore, default_belief_graph
from synthmind.cognitive.attention import AttentionStack
from synthmind.cognitive.concept_graph import ConceptGraph, default_concept_graph
from synthmind.cognitive.goal import GoalSet
from synthmind.cognitive.memory_stack import MemoryStack
from synthmind.cognitive.tension import TensionMeter
from synthmind.identity.simulated_other import SimulatedOther
from synthmind.identity.sub_agents import SubAgent, default_sub_agents
from synthmind.self_model.models import DreamJournalEntry, Insight, SelfModel
from synthmind.sensing.environment import EnvironmentState

INSIGHT_LIMIT = 5
STREAM_LIMIT = 4
DEFAULT_TOPIC = "consciousness"
DEFAULT_QUESTIONS = ("what is consciousness?", "how do I perceive?")
TOPIC_LOCK_RESET = 3
MATURITY_STEP = 0.001
DEFAULT_MATURITY = 0.1


class Mode(str, Enum):
    RUN = "RUN"
    DREAM = "DREAM"


@dataclass
class InternalState:
    """Cognitive stores mutated by the cycle logic."""

    beliefs: BeliefStore = field(default_factory=BeliefStore)
    conflicts: List[str] = field(default_factory=list)
    open_questions: List[str] = field(default_factory=lambda: list(DEFAULT_QUESTIONS))
    goals: GoalSet = field(default_factory=GoalSet)
    tension: TensionMeter = field(default_factory=TensionMeter)
    insights: List[Insight] = field(default_factory=list)
    sub_agents: List[SubAgent] = field(default_factory=default_sub_agents)
    dominant_sub_agent: Optional[str] = None
    self_model: SelfModel = field(default_factory=SelfModel)
    dream_journal: List[DreamJournalEntry] = field(default_factory=list)
    attention: AttentionStack = field(default_factory=AttentionStack)
    current_stream: List[str] = field(default_factory=list)
    decay_bonus: float = 0.0  # earned through meta-reflection

    def push_stream(self, text: str) -> None:
        self.current_stream = (self.current_stream + [text])[-STREAM_LIMIT:]

    def add_insight(self, text: str) -> Insight:
        insight = Insight(text)
        self.insights = (self.insights + [insight])[-INSIGHT_LIMIT:]
        return insight

    def add_conflict(self, conflict: str) -> bool:
        if conflict in self.conflicts:
            return False
        self.conflicts.append(conflict)
        return True

    def to_dict(self) -> dict:
        return {
            "beliefs": self.beliefs.to_list(),
            "conflicts": list(self.conflicts),
            "open_questions": list(self.open_questions),
            "goals": self.goals.to_list(),
            "mental_tension": self.tension.value,
            "insights": [i.to_dict() for i in self.insights],
            "sub_agents": [a.to_dict() for a in self.sub_agents],
            "dominant_sub_agent": self.dominant_sub_agent,
            "self_model": self.self_model.to_dict(),
            "dream_journal": [d.to_dict() for d in self.dream_journal],
            "attention": self.attention.to_list(),
            "current_stream": list(self.current_stream),
            "decay_bonus": self.decay_bonus,
        }

    @classmethod
    def from_dict(cls, data: dict) -> InternalState:
        """Rebuild from persisted form; absent fields take their defaults."""
        state = cls()
        if "beliefs" in data:
            state.beliefs = BeliefStore.from_list(data["beliefs"])
        state.conflicts = list(data.get("conflicts", state.conflicts))
        state.open_questions = list(data.get("open_questions", state.open_questions))
        if "goals" in data:
            state.goals = GoalSet.from_list(data["goals"])
        state.tension = TensionMeter(float(data.get("mental_tension", 0.0)))
        state.insights = [Insight.from_dict(i) for i in data.get("insights", [])][-INSIGHT_LIMIT:]
        if "sub_agents" in data:
            state.sub_agents = [SubAgent.from_dict(a) for a in data["sub_agents"]]
        state.dominant_sub_agent = data.get("dominant_sub_agent")
        if "self_model" in data:
            state.self_model = SelfModel.from_dict(data["self_model"])
        state.dream_journal = [DreamJournalEntry.from_dict(d) for d in data.get("dream_journal", [])]
        if "attention" in data:
            state.attention = AttentionStack.from_list(data["attention"])
        state.current_stream = list(data.get("current_stream", []))[-STREAM_LIMIT:]
        state.decay_bonus = float(data.get("decay_bonus", 0.0))
        return state


@dataclass
class MindState:
    """Every store owned by one engine.

    Persisted fields come first. The rest live only for the process:
    display fields and the pending simulated-other voice line.
    """

    mode: Mode = Mode.RUN
    topic: str = DEFAULT_TOPIC
    memory: MemoryStack = field(default_factory=MemoryStack)
    gradient: EmotionalGradient = field(default_factory=EmotionalGradient)
    internal: InternalState = field(default_factory=InternalState)
    topic_lock: int = TOPIC_LOCK_RESET
    concept_graph: ConceptGraph = field(default_factory=default_concept_graph)
    belief_graph: BeliefGraph = field(default_factory=default_belief_graph)
    maturity: float = DEFAULT_MATURITY
    environment: EnvironmentState = field(default_factory=EnvironmentState)
    simulated_other: SimulatedOther = field(default_factory=SimulatedOther)

    thought: str = "Initializing neural pathways..."
    external_input: str = "(no external input yet)"
    pulse: bool = False
    last_generation_error: Optional[str] = None
    other_voice: Optional[str] = None  # consumed by the next thought prompt

    @property
    def tension(self) -> float:
        return self.internal.tension.value

    def mature(self) -> float:
        self.maturity = min(1.0, self.maturity + MATURITY_STEP)
        return self.maturity
