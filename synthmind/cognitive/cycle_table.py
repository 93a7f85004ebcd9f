"""Priority-ordered cycle selection.

Each cycle runs the rules below in order. A rule whose predicate holds
contributes its cycle type to the plan; if the rule is terminal, planning
stops there. Non-terminal rules (subconscious rumination, schema
formation, the co-occurrence sweep) let later rules run in the same
cycle. ``NORMAL`` always holds, so every plan ends with a terminal
cycle type.

All predicates see one ``CycleContext`` snapshot taken before any cycle
work runs, so a fragment stored by an earlier step does not change which
later steps fire.
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Sequence

logger = logging.getLogger(__name__)

SUBCONSCIOUS_PERIOD = 10
SCHEMA_PERIOD = 5
SELF_INSPECTION_PERIOD = 6
SCHEMA_MIN_MATURITY = 0.2
GOAL_CYCLE_CHANCE = 0.25


class CycleType(Enum):
    DREAM = "dream"
    SUBCONSCIOUS = "subconscious"
    PATTERN_SWEEP = "pattern_sweep"
    SCHEMA = "schema"
    SELF_INSPECTION = "self_inspection"
    GOAL = "goal"
    NORMAL = "normal"


@dataclass(frozen=True)
class CycleContext:
    """Inputs the rules decide on.

    Attributes:
        memory_length: Memory stack length after this cycle's external insert
        maturity: Cognitive maturity after this cycle's increment
        dream_chance: Modulated dream probability
        has_goal: Whether a most-urgent goal exists
        rng: Source of the chance draws
    """

    memory_length: int
    maturity: float
    dream_chance: float
    has_goal: bool
    rng: random.Random


@dataclass(frozen=True)
class CycleRule:
    cycle: CycleType
    predicate: Callable[[CycleContext], bool]
    terminal: bool


def _every(period: int) -> Callable[[CycleContext], bool]:
    return lambda ctx: ctx.memory_length > 0 and ctx.memory_length % period == 0


CYCLE_RULES: Sequence[CycleRule] = (
    CycleRule(CycleType.DREAM, lambda ctx: ctx.rng.random() < ctx.dream_chance, terminal=True),
    CycleRule(CycleType.SUBCONSCIOUS, _every(SUBCONSCIOUS_PERIOD), terminal=False),
    CycleRule(CycleType.PATTERN_SWEEP, lambda ctx: True, terminal=False),
    CycleRule(
        CycleType.SCHEMA,
        lambda ctx: ctx.memory_length % SCHEMA_PERIOD == 0 and ctx.maturity > SCHEMA_MIN_MATURITY,
        terminal=False,
    ),
    CycleRule(CycleType.SELF_INSPECTION, _every(SELF_INSPECTION_PERIOD), terminal=True),
    CycleRule(
        CycleType.GOAL,
        lambda ctx: ctx.has_goal and ctx.rng.random() < GOAL_CYCLE_CHANCE,
        terminal=True,
    ),
    CycleRule(CycleType.NORMAL, lambda ctx: True, terminal=True),
)


def plan_cycle(ctx: CycleContext, rules: Sequence[CycleRule] = CYCLE_RULES) -> List[CycleType]:
    """Cycle types to run this tick, in execution order."""
    plan: List[CycleType] = []
    for rule in rules:
        if rule.predicate(ctx):
            plan.append(rule.cycle)
            if rule.terminal:
                break
    logger.debug(f"Cycle plan: {[c.value for c in plan]}")
    return plan
