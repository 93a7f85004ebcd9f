"""Tick controller for the synthetic mind.

The engine is a single-writer actor. One task owns ``MindState``: it
waits for the next tick deadline and runs a cycle. While waiting, and
again at the start of every cycle, it applies state patches delivered by
background work. Background work is
anything that must not block a cycle:

- the intuition aside requested by subconscious rumination
- the simulated-other voice line offered to the next thought prompt
- the revert that ends dream mode a few seconds after it began

Background tasks never touch state directly; they deliver a patch, and
patches delivered after ``stop`` are dropped. Stopping cancels the tick
loop and every pending dream revert. Generation requests already in flight
are left to finish and their results discarded.

Each cycle, in order:
    1. toggle the display pulse and advance cognitive maturity
    2. maybe store an external observation
    3. pick the dominant sub-agent
    4. compute emotion modulators
    5. plan and run cycle types from the decision table
    6. after a normal thought, run the stuck / topic-shift check
    7. perturb the emotional gradient
    8. persist, when a store is attached

Usage:
    engine = MindEngine(HuggingFaceGenerator(settings), store=JsonFileStore(path))
    await engine.run(max_cycles=10)
"""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, List, Optional, Set, Tuple

from config.settings import Settings, get_settings
from synthmind.affect.emotional_gradient import Emotion
from synthmind.beliefs.contradiction import detect_contradictions
from synthmind.cognitive.concept_graph import CoOccurrenceTable
from synthmind.cognitive.cycle_table import CycleContext, CycleType, plan_cycle
from synthmind.cognitive.cycles import (
    NOVEL,
    REPETITIVE,
    commit_goal_thought,
    commit_intuition,
    commit_thought,
    form_schema,
    ruminate,
    shift_topic,
    sweep_patterns,
)
from synthmind.cognitive.goal import Goal
from synthmind.cognitive.memory_stack import DREAM_STRENGTH, EXTERNAL_STRENGTH, MemoryFragment
from synthmind.cognitive.modulators import EmotionModulators, compute_modulators
from synthmind.cognitive.prompts import (
    INTUITION_PROMPT,
    build_goal_prompt,
    build_meta_prompt,
    build_other_voice_prompt,
    build_thought_prompt,
)
from synthmind.cognitive.reflection import apply_meta_reflection, settle_after_reflection
from synthmind.cognitive.state import MindState, Mode
from synthmind.cognitive.tension import CONTRADICTION_STEP
from synthmind.cognitive.topic import select_topic
from synthmind.dreams.base import DreamMaterial
from synthmind.dreams.dream_cycle import (
    DREAM_ENTRY_SHIFT,
    DREAM_EXIT_SHIFT,
    build_dream_prompt,
    build_reflection_prompt,
    integrate_dream,
)
from synthmind.identity.simulated_other import VOICE_CHANCE, VOICE_PREFIX
from synthmind.identity.sub_agents import SubAgent, SubAgentArbitrator
from synthmind.inference.errors import GenerationError, GenerationTransportError
from synthmind.inference.hf_client import TextGenerator
from synthmind.psyche.persistence import load_state, save_state
from synthmind.psyche.schema import MindSnapshot, build_snapshot
from synthmind.psyche.store import KeyValueStore
from synthmind.sensing.stimuli import StimulusFeed

logger = logging.getLogger(__name__)

EXTERNAL_STIMULUS_CHANCE = 0.2
MAX_THOUGHT_ATTEMPTS = 3
STUCK_FILLERS = ("ugh.", "why?")

StatePatch = Callable[[MindState], None]
CycleCallback = Callable[[MindSnapshot], None]


@dataclass
class Tick:
    """Per-cycle values shared by the cycle handlers."""

    persona: Optional[SubAgent]
    goal: Optional[Goal]
    modulators: EmotionModulators
    thought: Optional[str] = None


class MindEngine:
    """Owns one mind's state and drives its cycles."""

    def __init__(
        self,
        generator: TextGenerator,
        *,
        settings: Optional[Settings] = None,
        state: Optional[MindState] = None,
        store: Optional[KeyValueStore] = None,
        stimuli: Optional[StimulusFeed] = None,
        rng: Optional[random.Random] = None,
        on_cycle: Optional[CycleCallback] = None,
    ):
        self.settings = settings or get_settings()
        self.generator = generator
        self.store = store
        self.rng = rng or random.Random()
        if state is None:
            state = load_state(store) if store is not None else MindState()
        self.state = state
        self.arbitrator = SubAgentArbitrator(self.state.internal.sub_agents, self.rng)
        self.stimuli = stimuli or StimulusFeed(self.settings, rng=self.rng)
        self.patterns = CoOccurrenceTable()
        self.on_cycle = on_cycle

        self.cycles_run = 0
        self.last_plan: List[CycleType] = []
        self.modulators: Optional[EmotionModulators] = None

        self._patches: "asyncio.Queue[Tuple[str, StatePatch]]" = asyncio.Queue()
        self._background: Set[asyncio.Task] = set()
        self._dream_reverts: Set[asyncio.Task] = set()
        self._runner: Optional[asyncio.Task] = None
        self._stopped = False

        self._handlers: Dict[CycleType, Callable[[Tick], Awaitable[None]]] = {
            CycleType.DREAM: self.run_dream_cycle,
            CycleType.SUBCONSCIOUS: self.run_subconscious_cycle,
            CycleType.PATTERN_SWEEP: self.run_pattern_sweep,
            CycleType.SCHEMA: self.run_schema_check,
            CycleType.SELF_INSPECTION: self.run_self_inspection,
            CycleType.GOAL: self.run_goal_cycle,
            CycleType.NORMAL: self.run_normal_cycle,
        }

    # -- lifecycle -----------------------------------------------------------

    @property
    def running(self) -> bool:
        return self._runner is not None and not self._runner.done()

    def start(self, max_cycles: Optional[int] = None) -> asyncio.Task:
        if self.running:
            raise RuntimeError("Engine already running")
        self._stopped = False
        self._runner = asyncio.create_task(self._run(max_cycles), name="mind-engine")
        logger.info(f"Mind engine started (interval {self.settings.cycle_interval}s)")
        return self._runner

    async def stop(self) -> None:
        """Stop ticking and cancel pending dream reverts.

        In-flight generation tasks keep running; whatever they deliver
        afterwards is dropped.
        """
        self._stopped = True
        for revert in list(self._dream_reverts):
            revert.cancel()
        self._dream_reverts.clear()
        runner, self._runner = self._runner, None
        if runner is not None and not runner.done():
            runner.cancel()
            try:
                await runner
            except asyncio.CancelledError:
                pass
        if self.store is not None:
            self.save()
        logger.info(f"Mind engine stopped after {self.cycles_run} cycles")

    async def run(self, max_cycles: Optional[int] = None) -> None:
        """Run until ``max_cycles`` complete (or forever), then stop."""
        runner = self.start(max_cycles)
        try:
            await runner
        finally:
            await self.stop()

    async def _run(self, max_cycles: Optional[int]) -> None:
        loop = asyncio.get_running_loop()
        interval = self.settings.cycle_interval
        next_tick = loop.time() + interval
        try:
            while not self._stopped:
                remaining = next_tick - loop.time()
                if remaining > 0:
                    try:
                        label, patch = await asyncio.wait_for(self._patches.get(), remaining)
                    except asyncio.TimeoutError:
                        continue
                    self._apply(label, patch)
                    continue

                next_tick = max(next_tick + interval, loop.time())
                # patches queued during an overrunning cycle land before the next
                self.apply_pending_patches()
                try:
                    await self.run_cycle()
                except Exception as e:
                    logger.error(f"Cognitive cycle failed: {e}", exc_info=True)

                if max_cycles is not None and self.cycles_run >= max_cycles:
                    logger.info(f"Reached max cycles ({max_cycles})")
                    break
        except asyncio.CancelledError:
            logger.info("Mind engine loop cancelled")
            raise

    # -- patches and background work -----------------------------------------

    def _deliver(self, label: str, patch: StatePatch) -> None:
        if self._stopped:
            logger.debug(f"Dropping '{label}' patch; engine stopped")
            return
        self._patches.put_nowait((label, patch))

    def _apply(self, label: str, patch: StatePatch) -> None:
        try:
            patch(self.state)
            logger.debug(f"Applied '{label}' patch")
        except Exception as e:
            logger.error(f"Patch '{label}' failed: {e}", exc_info=True)

    def apply_pending_patches(self) -> int:
        """Apply every queued patch now. Returns how many were applied."""
        applied = 0
        while True:
            try:
                label, patch = self._patches.get_nowait()
            except asyncio.QueueEmpty:
                return applied
            self._apply(label, patch)
            applied += 1

    def _spawn(self, coro: Awaitable[None], name: str) -> asyncio.Task:
        task = asyncio.create_task(coro, name=name)
        self._background.add(task)
        task.add_done_callback(self._background.discard)
        return task

    async def wait_for_background(self) -> None:
        """Wait for in-flight background generation (not the dream revert)."""
        while self._background:
            await asyncio.gather(*list(self._background), return_exceptions=True)

    # -- generation ----------------------------------------------------------

    async def _generate(self, prompt: str) -> Tuple[str, Optional[str]]:
        """Text and error marker; on failure the marker is the text."""
        try:
            return (await self.generator.generate(prompt)).strip(), None
        except GenerationError as e:
            logger.warning(f"Generation failed: {e.marker}")
            return e.marker, e.marker
        except Exception as e:
            logger.error(f"Unexpected generator failure: {e}", exc_info=True)
            marker = GenerationTransportError(str(e)).marker
            return marker, marker

    async def _ask(self, prompt: str) -> str:
        text, error = await self._generate(prompt)
        self.state.last_generation_error = error
        return text

    # -- the cycle -----------------------------------------------------------

    def current_modulators(self) -> EmotionModulators:
        state = self.state
        return compute_modulators(state.gradient, state.maturity, state.internal.decay_bonus)

    async def run_cycle(self) -> List[CycleType]:
        """Run one full cycle and return the executed plan."""
        state = self.state
        state.pulse = not state.pulse
        state.mature()

        # Neither the external insert nor persona selection touches the
        # gradient, so these modulators hold for the whole cycle.
        modulators = self.current_modulators()
        self.modulators = modulators

        if self.rng.random() < EXTERNAL_STIMULUS_CHANCE:
            await self.observe_external(modulators.memory_decay_rate)

        persona = self.select_persona()
        goal = state.internal.goals.most_urgent()
        tick = Tick(persona=persona, goal=goal, modulators=modulators)

        ctx = CycleContext(
            memory_length=len(state.memory),
            maturity=state.maturity,
            dream_chance=modulators.dream_chance,
            has_goal=goal is not None,
            rng=self.rng,
        )
        plan = plan_cycle(ctx)
        for cycle in plan:
            await self._handlers[cycle](tick)

        if plan[-1] is CycleType.NORMAL and tick.thought is not None:
            shift_topic(state, tick.thought, persona, modulators.topic_switch_chance, self.rng)

        state.gradient.perturb(state.tension, self.rng)

        self.cycles_run += 1
        self.last_plan = plan
        if self.store is not None:
            self.save()
        if self.on_cycle is not None:
            self.on_cycle(self.snapshot())
        return plan

    async def observe_external(self, decay_rate: float) -> MemoryFragment:
        state = self.state
        observation = await self.stimuli.observe(state.topic, state.environment, self._ask)
        state.external_input = observation
        return state.memory.insert(
            MemoryFragment(observation, Emotion.CURIOSITY, EXTERNAL_STRENGTH, source="external"),
            decay_rate,
        )

    def select_persona(self) -> Optional[SubAgent]:
        internal = self.state.internal
        persona = self.arbitrator.select(internal.tension.value, self.state.mode is Mode.DREAM)
        internal.dominant_sub_agent = persona.name if persona else None
        return persona

    # -- cycle handlers --------------------------------------------------------

    async def run_dream_cycle(self, tick: Tick) -> None:
        state = self.state
        state.mode = Mode.DREAM
        state.gradient.adjust(DREAM_ENTRY_SHIFT)
        logger.info("Entering dream mode")

        material = DreamMaterial.gather(state, self.rng)
        dream = await self._ask(build_dream_prompt(material))
        state.thought = dream
        state.memory.insert(
            MemoryFragment(dream, Emotion.DREAMING, DREAM_STRENGTH),
            tick.modulators.memory_decay_rate,
        )

        reflection = await self._ask(build_reflection_prompt(dream))
        state.thought = f"(Dream Reflection): {reflection}"
        integrate_dream(state.internal, dream, reflection)
        self._schedule_dream_revert()

    def _schedule_dream_revert(self) -> None:
        # each dream owns its revert and its exit shift
        revert = asyncio.create_task(self._revert_dream_later(), name="dream-revert")
        self._dream_reverts.add(revert)
        revert.add_done_callback(self._dream_reverts.discard)

    async def _revert_dream_later(self) -> None:
        await asyncio.sleep(self.settings.dream_duration)
        self._deliver("dream-revert", _end_dream)

    async def run_subconscious_cycle(self, tick: Tick) -> None:
        logger.info("Subconscious process active")
        result = ruminate(self.state, tick.modulators.memory_decay_rate, self.rng)
        if result.wants_intuition:
            self._spawn(self._intuition(), "intuition")

    async def _intuition(self) -> None:
        text, error = await self._generate(INTUITION_PROMPT)

        def patch(state: MindState) -> None:
            commit_intuition(state, text, self.current_modulators().memory_decay_rate)
            state.last_generation_error = error

        self._deliver("intuition", patch)

    async def run_pattern_sweep(self, tick: Tick) -> None:
        sweep_patterns(self.state, self.patterns)

    async def run_schema_check(self, tick: Tick) -> None:
        form_schema(self.state, self.patterns)

    async def run_self_inspection(self, tick: Tick) -> None:
        state = self.state
        internal = state.internal
        logger.info("Performing self-inspection")

        detected = detect_contradictions(internal.beliefs, state.belief_graph)
        new = [c for c in detected if internal.add_conflict(c)]
        if new:
            internal.tension.raise_by(CONTRADICTION_STEP * len(new))
            logger.info(f"Detected {len(new)} new contradiction(s): {new}")

        reflection = await self._ask(build_meta_prompt(memory=state.memory, gradient=state.gradient, internal=internal))
        state.thought = f"(Meta-Reflection): {reflection}"
        apply_meta_reflection(reflection, internal, state.gradient)
        state.topic = select_topic(reflection, tick.persona, internal.attention, state.concept_graph, self.rng)
        settle_after_reflection(reflection, state.gradient)

    async def run_goal_cycle(self, tick: Tick) -> None:
        goal = tick.goal
        if goal is None:
            return
        text = await self._ask(build_goal_prompt(goal))
        commit_goal_thought(self.state, goal, text, tick.modulators.memory_decay_rate)

    async def run_normal_cycle(self, tick: Tick) -> None:
        state = self.state
        if self.rng.random() < VOICE_CHANCE:
            self._spawn(self._voice_of_other(), "other-voice")
        voice, state.other_voice = state.other_voice, None

        thought = None
        for attempt in range(1, MAX_THOUGHT_ATTEMPTS + 1):
            prompt = build_thought_prompt(
                memory=state.memory,
                topic=state.topic,
                gradient=state.gradient,
                internal=state.internal,
                persona=tick.persona,
                goal=tick.goal,
                other_voice=voice,
                rng=self.rng,
            )
            candidate = await self._ask(prompt)
            if not state.memory.is_too_similar(candidate):
                thought = candidate
                break
            logger.debug(f"Attempt {attempt}: thought too similar to recent memory")

        if thought is None:
            logger.warning(f"No sufficiently novel thought after {MAX_THOUGHT_ATTEMPTS} attempts")
            thought = f"(Stuck): circling {state.topic}... {self.rng.choice(STUCK_FILLERS)}"

        novelty = REPETITIVE if state.memory.is_too_similar(thought) else NOVEL
        commit_thought(state, thought, novelty, tick.persona, tick.modulators.memory_decay_rate, self.rng)
        tick.thought = thought

    async def _voice_of_other(self) -> None:
        text, error = await self._generate(build_other_voice_prompt(self.state.simulated_other))

        def patch(state: MindState) -> None:
            state.other_voice = f"{VOICE_PREFIX}{text}"
            state.last_generation_error = error

        self._deliver("other-voice", patch)

    # -- outward surface -------------------------------------------------------

    def set_real_internet_feed(self, enabled: bool) -> None:
        self.stimuli.use_real_internet = enabled
        logger.info(f"Real internet feed {'enabled' if enabled else 'disabled'}")

    def snapshot(self) -> MindSnapshot:
        return build_snapshot(self.state, self.modulators)

    def save(self) -> None:
        if self.store is not None:
            save_state(self.store, self.state)


def _end_dream(state: MindState) -> None:
    state.mode = Mode.RUN
    state.gradient.adjust(DREAM_EXIT_SHIFT)
    logger.info("Leaving dream mode")
