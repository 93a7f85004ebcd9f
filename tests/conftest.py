"""Pytest configuration and shared fixtures."""

import asyncio
import random
from typing import List, Union

import pytest

from config.settings import Settings
from synthmind.cognitive.engine import MindEngine, Tick
from synthmind.cognitive.state import MindState
from synthmind.psyche.store import InMemoryStore

DEFAULT_REPLY = "hello world test thought"


class ScriptedRandom(random.Random):
    """Random whose ``random()`` replays scripted draws, then a default.

    ``choice``/``sample``/``shuffle`` still come from the seeded stream, so
    tests can force chance branches without fixing every selection.
    """

    def __init__(self, *draws: float, default: float = 0.99, seed: int = 7):
        super().__init__(seed)
        self.draws: List[float] = list(draws)
        self.default = default

    def random(self) -> float:
        if self.draws:
            return self.draws.pop(0)
        return self.default

    def getrandbits(self, k: int) -> int:
        return super().getrandbits(k)


class ScriptedGenerator:
    """Text generator returning queued replies (or raising queued errors).

    A non-zero ``delay`` makes every call take that many seconds.
    """

    def __init__(self, *replies: Union[str, Exception], default: str = DEFAULT_REPLY, delay: float = 0.0):
        self.replies = list(replies)
        self.default = default
        self.delay = delay
        self.prompts: List[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.replies:
            reply = self.replies.pop(0)
            if isinstance(reply, Exception):
                raise reply
            return reply
        return self.default


@pytest.fixture
def settings():
    """Fast, offline settings that ignore any local .env file."""
    return Settings(_env_file=None, cycle_interval=0.01, dream_duration=0.01, use_real_internet=False)


@pytest.fixture
def quiet_rng():
    """No chance branch ever fires."""
    return ScriptedRandom()


@pytest.fixture
def generator():
    return ScriptedGenerator()


@pytest.fixture
def state():
    return MindState()


@pytest.fixture
def engine(settings, generator, quiet_rng):
    return MindEngine(generator, settings=settings, rng=quiet_rng)


@pytest.fixture
def store():
    return InMemoryStore()


def make_tick(engine: MindEngine, persona=None, goal=None) -> Tick:
    return Tick(persona=persona, goal=goal, modulators=engine.current_modulators())
