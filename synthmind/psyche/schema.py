"""Read-only snapshot of every store, for renderers and the CLI."""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from synthmind.cognitive.modulators import EmotionModulators
from synthmind.cognitive.state import MindState


class MemoryView(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    emotion: str
    strength: float = Field(ge=0.1, le=1.0)
    timestamp: str
    source: Optional[str] = None


class BeliefView(BaseModel):
    model_config = ConfigDict(frozen=True)

    concept: str
    stance: str
    confidence: float = Field(ge=0.0, le=1.0)


class GoalView(BaseModel):
    model_config = ConfigDict(frozen=True)

    goal: str
    urgency: float


class AttentionView(BaseModel):
    model_config = ConfigDict(frozen=True)

    concept: str
    weight: float = Field(ge=0.1, le=1.0)


class MindSnapshot(BaseModel):
    """Everything a renderer may show after a cycle."""

    model_config = ConfigDict(frozen=True)

    mode: str
    thought: str
    topic: str
    topic_lock: int
    dominant_emotion: str
    emotional_gradient: Dict[str, float]
    mental_tension: float = Field(ge=0.0, le=1.0)
    dominant_sub_agent: Optional[str] = None
    cognitive_maturity: float
    memory: List[MemoryView]
    beliefs: List[BeliefView]
    conflicts: List[str]
    open_questions: List[str]
    goals: List[GoalView]
    insights: List[str]
    self_model: dict
    dream_journal: List[str]
    attention: List[AttentionView]
    current_stream: List[str]
    environment: Dict[str, str]
    simulated_other: dict
    concept_graph: Dict[str, List[str]]
    belief_graph: Dict[str, List[str]]
    external_input: str
    pulse: bool
    modulators: Optional[Dict[str, float]] = None
    last_generation_error: Optional[str] = None


def build_snapshot(state: MindState, modulators: Optional[EmotionModulators] = None) -> MindSnapshot:
    internal = state.internal
    return MindSnapshot(
        mode=state.mode.value,
        thought=state.thought,
        topic=state.topic,
        topic_lock=state.topic_lock,
        dominant_emotion=state.gradient.dominant().tag,
        emotional_gradient=state.gradient.to_dict(),
        mental_tension=internal.tension.value,
        dominant_sub_agent=internal.dominant_sub_agent,
        cognitive_maturity=state.maturity,
        memory=[MemoryView(**f.to_dict()) for f in state.memory],
        beliefs=[BeliefView(concept=b.concept, stance=b.stance, confidence=b.confidence) for b in internal.beliefs],
        conflicts=list(internal.conflicts),
        open_questions=list(internal.open_questions),
        goals=[GoalView(**g.to_dict()) for g in internal.goals],
        insights=[i.text for i in internal.insights],
        self_model=internal.self_model.to_dict(),
        dream_journal=[d.motif for d in internal.dream_journal],
        attention=[AttentionView(**a.to_dict()) for a in internal.attention],
        current_stream=list(internal.current_stream),
        environment=state.environment.to_dict(),
        simulated_other=state.simulated_other.to_dict(),
        concept_graph=state.concept_graph.to_dict(),
        belief_graph=state.belief_graph.to_dict(),
        external_input=state.external_input,
        pulse=state.pulse,
        modulators=modulators.to_dict() if modulators else None,
        last_generation_error=state.last_generation_error,
    )
