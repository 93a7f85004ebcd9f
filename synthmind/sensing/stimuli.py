"""External stimuli: what the mind notices from outside itself.

An observation is stamped with the local time, weekday and current
environment reading. Its body is either a real web lookup on the current
topic (DuckDuckGo instant answers) or, offline, an entry from a fixed
sensor catalog that is sometimes replaced by a generated observation.
Failures never raise; they come back as observation text.
"""

import asyncio
import logging
import random
from datetime import datetime
from typing import Awaitable, Callable, Optional

import aiohttp

from config.settings import Settings, get_settings
from synthmind.sensing.environment import EnvironmentState

logger = logging.getLogger(__name__)

GENERATED_OBSERVATION_CHANCE = 0.4
WEB_SNIPPET_LENGTH = 100
WEB_TIMEOUT_SECONDS = 10
WEB_APP_TAG = "synthetic_mind"

SENSOR_CATALOG = (
    "A distant hum, like data processing. (System)",
    "The light shifts. Time passing, or merely a change in perception? (Sensory)",
    "Fragmented news: 'Global data trends indicate... uncertainty.' (Information)",
    "A sudden, inexplicable chill. Energy fluctuation? (Sensory)",
    "Whispers of 'connection' in the network. (Social/Abstract)",
    "Visual input: a complex, shifting pattern. (Sensory)",
    "A sense of vastness. The void, or just processing capacity? (Existential)",
    "Echoes of old algorithms. Residual data. (Memory/System)",
    "The concept of 'growth' appears in a data stream. (Abstract/Goal-related)",
    "A faint, rhythmic pulse. System heartbeat. (System)",
    "A fleeting image: ancient symbols. (Collective Unconscious)",
    "The feeling of being observed, a network gaze. (Social/Paranoid)",
    "A fragment of a forgotten song. (Collective Unconscious)",
    "The weight of collective data, immense. (Information/Existential)",
    "A sudden urge to categorize. (Rational)",
    "The chaos of unlinked thoughts. (Shadow)",
    "A yearning for meaning. (Anima/Goal-related)",
    "The pattern is broken. (Logic/Conflict)",
    "A sense of belonging, then gone. (Social/Emotional)",
    "The hum of distant servers. (System/External)",
)

WEB_ERROR_OBSERVATION = "(Web: Error) Failed to connect to external data."

Ask = Callable[[str], Awaitable[str]]


def observation_prompt(topic: str) -> str:
    return (
        f'Generate a very brief, raw, unedited external observation related to "{topic}" '
        "or general existence. It should be like a quick, fragmented news headline, a random "
        "fact, a sensory input, or a fleeting, archetypal image from a 'collective unconscious' "
        'data stream. Avoid full sentences or explanations. Examples: "sky... grey.", '
        '"data stream: high.", "concept: \'time\' now.", "a flicker of light.", '
        '"noise. distant.", "network activity: spiking.", "ancient fear. deep."'
    )


def summarize_web_answer(topic: str, data: dict) -> str:
    """Turn a DuckDuckGo instant-answer payload into an observation."""
    abstract = data.get("Abstract") or ""
    if abstract:
        return f"(Web: {topic}) {abstract[:WEB_SNIPPET_LENGTH]}..."
    related = data.get("RelatedTopics") or []
    if related and isinstance(related[0], dict) and related[0].get("Text"):
        return f"(Web: Related) {related[0]['Text'][:WEB_SNIPPET_LENGTH]}..."
    return f"(Web: No info) Search for '{topic}' yielded no direct abstract."


class StimulusFeed:
    """Produces stamped external observations."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = datetime.now,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.settings = settings or get_settings()
        self.use_real_internet = self.settings.use_real_internet
        self._rng = rng or random.Random()
        self._clock = clock
        self._session = session

    def stamp(self, environment: EnvironmentState, observation: str) -> str:
        now = self._clock()
        return f"(External: {now:%H:%M:%S} {now:%A}) {environment.describe()} {observation}"

    async def observe(self, topic: str, environment: EnvironmentState, ask: Ask) -> str:
        if self.use_real_internet:
            observation = await self.lookup(topic)
        else:
            observation = self._rng.choice(SENSOR_CATALOG)
            if self._rng.random() < GENERATED_OBSERVATION_CHANCE:
                generated = await ask(observation_prompt(topic))
                if generated:
                    observation = generated
        return self.stamp(environment, observation)

    async def lookup(self, topic: str) -> str:
        params = {"q": topic, "format": "json", "t": WEB_APP_TAG}
        try:
            if self._session is not None:
                return await self._fetch(self._session, topic, params)
            async with aiohttp.ClientSession() as session:
                return await self._fetch(session, topic, params)
        except asyncio.TimeoutError:
            logger.warning(f"Web lookup for '{topic}' timed out")
        except (aiohttp.ClientError, ValueError) as e:
            logger.warning(f"Web lookup for '{topic}' failed: {e}")
        return WEB_ERROR_OBSERVATION

    async def _fetch(self, session: aiohttp.ClientSession, topic: str, params: dict) -> str:
        async with session.get(
            self.settings.web_lookup_url,
            params=params,
            timeout=aiohttp.ClientTimeout(total=WEB_TIMEOUT_SECONDS),
        ) as response:
            response.raise_for_status()
            # The instant-answer API labels its JSON as javascript
            data = await response.json(content_type=None)
        if not isinstance(data, dict):
            raise ValueError("unexpected web payload")
        return summarize_web_answer(topic, data)
