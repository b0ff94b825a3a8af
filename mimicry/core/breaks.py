"""
Break Scheduling

Tiered rest periods triggered by the cognitive state:
- micro (30-120s): mild tiredness, small refresh
- short (1-5min): fatigue or boredom above 0.7, substantial refresh
- long (5-15min): anything above 0.9, full refresh

Every break clears the recent-action window.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Dict, Optional

from .cognition import CognitiveState, CognitiveStateTracker
from .rng import RandomSource, uniform

# A break is due when any of these is exceeded
BREAK_FATIGUE = 0.8
BREAK_BOREDOM = 0.7
BREAK_FRUSTRATION = 0.9

LONG_THRESHOLD = 0.9
SHORT_THRESHOLD = 0.7

LONG_MINUTES = (5.0, 15.0)
SHORT_MINUTES = (1.0, 5.0)
MICRO_SECONDS = (30.0, 120.0)


class BreakTier(Enum):
    MICRO = "micro"
    SHORT = "short"
    LONG = "long"


@dataclass(frozen=True)
class BreakPlan:
    tier: BreakTier
    duration_ms: float

    def format(self) -> str:
        return f"{self.tier.value} break for {round(self.duration_ms / 1000)}s"


def should_take_break(state: CognitiveState) -> bool:
    return (
        state.fatigue > BREAK_FATIGUE
        or state.boredom > BREAK_BOREDOM
        or state.frustration > BREAK_FRUSTRATION
    )


def break_tier(state: CognitiveState) -> BreakTier:
    if (
        state.fatigue > LONG_THRESHOLD
        or state.boredom > LONG_THRESHOLD
        or state.frustration > LONG_THRESHOLD
    ):
        return BreakTier.LONG
    if state.fatigue > SHORT_THRESHOLD or state.boredom > SHORT_THRESHOLD:
        return BreakTier.SHORT
    return BreakTier.MICRO


def plan_break(state: CognitiveState, rng: RandomSource, timing_multiplier: float = 1.0) -> BreakPlan:
    tier = break_tier(state)
    if tier is BreakTier.LONG:
        duration = uniform(rng, *LONG_MINUTES) * 60 * 1000
    elif tier is BreakTier.SHORT:
        duration = uniform(rng, *SHORT_MINUTES) * 60 * 1000
    else:
        duration = uniform(rng, *MICRO_SECONDS) * 1000
    return BreakPlan(tier=tier, duration_ms=duration * timing_multiplier)


def apply_recovery(state: CognitiveState, tier: BreakTier) -> CognitiveState:
    """Return the state after resting for `tier`. Does not mutate `state`."""
    rested = state.copy()
    if tier is BreakTier.LONG:
        rested.attention = 1.0
        rested.fatigue = 0.0
        rested.boredom = 0.0
        rested.frustration = max(0.0, state.frustration - 0.5)
    elif tier is BreakTier.SHORT:
        rested.attention = min(1.0, state.attention + 0.5)
        rested.fatigue = max(0.0, state.fatigue - 0.5)
        rested.boredom = max(0.0, state.boredom - 0.3)
        rested.frustration = max(0.0, state.frustration - 0.2)
    else:
        # boredom untouched by a micro break
        rested.attention = min(1.0, state.attention + 0.2)
        rested.fatigue = max(0.0, state.fatigue - 0.2)
        rested.frustration = max(0.0, state.frustration - 0.1)
    return rested


class BreakScheduler:
    """
    Decides when to rest, for how long, and applies the refresh afterwards.

    Usage:
        breaks = BreakScheduler(tracker, rng, timing_multiplier=0.01)
        if breaks.should_take_break():
            plan = await breaks.take_break()
    """

    def __init__(
        self,
        tracker: CognitiveStateTracker,
        rng: RandomSource,
        timing_multiplier: float = 1.0,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
        on_log: Optional[Callable[[str], None]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._tracker = tracker
        self._rng = rng
        self._timing_multiplier = timing_multiplier
        self._sleep = sleep or asyncio.sleep
        self._log_callback = on_log
        self._logger = logger or logging.getLogger(__name__)
        self._breaks_by_tier: Dict[BreakTier, int] = {tier: 0 for tier in BreakTier}
        self._total_break_ms = 0.0

    def _log(self, message: str) -> None:
        if self._log_callback:
            self._log_callback(f"[Break] {message}")
        else:
            self._logger.info(f"[Break] {message}")

    @property
    def break_count(self) -> int:
        return sum(self._breaks_by_tier.values())

    @property
    def breaks_by_tier(self) -> Dict[str, int]:
        return {tier.value: count for tier, count in self._breaks_by_tier.items()}

    @property
    def total_break_ms(self) -> float:
        return self._total_break_ms

    def reset_stats(self) -> None:
        self._breaks_by_tier = {tier: 0 for tier in BreakTier}
        self._total_break_ms = 0.0

    def should_take_break(self) -> bool:
        return should_take_break(self._tracker.state)

    def plan_break(self) -> BreakPlan:
        return plan_break(self._tracker.state, self._rng, self._timing_multiplier)

    def apply_recovery(self, tier: BreakTier) -> CognitiveState:
        self._tracker.replace(apply_recovery(self._tracker.state, tier))
        self._tracker.clear_history()
        return self._tracker.snapshot()

    async def take_break(self, on_break: Optional[Callable[[BreakPlan], None]] = None) -> BreakPlan:
        plan = self.plan_break()
        state = self._tracker.state
        self._log(f"Taking {plan.format()}")
        self._log(
            f"  Reason: Fatigue={state.fatigue:.2f}, "
            f"Boredom={state.boredom:.2f}, Frustration={state.frustration:.2f}"
        )
        if on_break:
            on_break(plan)

        await self._sleep(plan.duration_ms / 1000)

        refreshed = self.apply_recovery(plan.tier)
        self._breaks_by_tier[plan.tier] += 1
        self._total_break_ms += plan.duration_ms
        self._log(
            f"Break complete. Refreshed state: Attention={refreshed.attention:.2f}, "
            f"Fatigue={refreshed.fatigue:.2f}"
        )
        return plan
