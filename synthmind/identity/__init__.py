"""Internal personas and the simulated external observer."""
from synthmind.identity.simulated_other import SimulatedOther
from synthmind.identity.sub_agents import SubAgent, SubAgentArbitrator, default_sub_agents

__all__ = ["SimulatedOther", "SubAgent", "SubAgentArbitrator", "default_sub_agents"]
