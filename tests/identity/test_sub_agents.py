"""Tests for sub-agent arbitration and the simulated other."""
from conftest import ScriptedRandom
from synthmind.identity.simulated_other import SimulatedOther
from synthmind.identity.sub_agents import SubAgent, SubAgentArbitrator, default_sub_agents


class TestSubAgentArbitrator:
    """Test persona selection rules."""

    def test_high_tension_favours_shadow(self):
        arbitrator = SubAgentArbitrator(default_sub_agents(), ScriptedRandom(0.0))
        assert arbitrator.select(0.8, dreaming=False).name == "Shadow"

    def test_low_tension_favours_rational(self):
        arbitrator = SubAgentArbitrator(default_sub_agents(), ScriptedRandom(0.0))
        assert arbitrator.select(0.1, dreaming=False).name == "Rational"

    def test_dreaming_hands_voice_to_anima(self):
        arbitrator = SubAgentArbitrator(default_sub_agents(), ScriptedRandom())
        assert arbitrator.select(0.5, dreaming=True).name == "Anima"

    def test_otherwise_uniform(self):
        arbitrator = SubAgentArbitrator(default_sub_agents(), ScriptedRandom())
        assert arbitrator.select(0.5, dreaming=False).name in {"Rational", "Shadow", "Anima"}

    def test_no_agents(self):
        assert SubAgentArbitrator([], ScriptedRandom()).select(0.9, dreaming=True) is None

    def test_by_name(self):
        arbitrator = SubAgentArbitrator()
        assert arbitrator.by_name("Anima").belief_bias == 0.03
        assert arbitrator.by_name(None) is None


class TestSerialization:
    def test_sub_agent_round_trip(self):
        agent = default_sub_agents()[1]
        assert SubAgent.from_dict(agent.to_dict()) == agent

    def test_simulated_other_round_trip(self):
        other = SimulatedOther()
        restored = SimulatedOther.from_dict(other.to_dict())
        assert restored == other
        assert other.describe_emotions() == "anxiety (30%), curiosity (70%), judgment (50%)"
