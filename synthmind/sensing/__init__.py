"""External stimuli and the simulated environment."""
from synthmind.sensing.environment import EnvironmentState
from synthmind.sensing.stimuli import StimulusFeed

__all__ = ["EnvironmentState", "StimulusFeed"]
