"""
Mistake Injection

Simulated UI slip-ups with self-correction:
- Mistake odds from inattention, fatigue, and frustration
- Weighted pick from a fixed catalog (typos favoured on input actions)
- Realization pause, then a recovery pause sized by the mistake kind

A mistake never fails the action. It only costs time and a little
frustration.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional, Tuple

from .actions import ActionType, GameAction
from .cognition import CognitiveState, CognitiveStateTracker
from .rng import RandomSource, uniform, weighted_choice

INATTENTION_RATE = 0.10
FATIGUE_RATE = 0.05
FRUSTRATION_RATE = 0.03
IMPORTANT_REDUCTION = 0.5
COMPLEXITY_INCREASE = 0.2
MAX_MISTAKE_RATE = 0.25

TYPO_INPUT_BOOST = 2.0
REALIZATION_MS = (500.0, 1500.0)
RECOVERY_VARIANCE = (0.8, 1.2)
MISTAKE_FRUSTRATION = 0.03


@dataclass(frozen=True)
class MistakeKind:
    name: str
    weight: float
    recovery_ms: float


CLICK_WRONG_BUTTON = MistakeKind("click_wrong_button", 0.4, 1500.0)
TYPO_IN_INPUT = MistakeKind("typo_in_input", 0.3, 2000.0)
NAVIGATE_WRONG_PAGE = MistakeKind("navigate_wrong_page", 0.2, 3000.0)
CLOSE_MODAL_ACCIDENT = MistakeKind("close_modal_accident", 0.1, 2500.0)

MISTAKE_CATALOG: Tuple[MistakeKind, ...] = (
    CLICK_WRONG_BUTTON,
    TYPO_IN_INPUT,
    NAVIGATE_WRONG_PAGE,
    CLOSE_MODAL_ACCIDENT,
)


@dataclass(frozen=True)
class MistakeRecovery:
    """Timings for one simulated mistake, before the timing multiplier."""
    kind: MistakeKind
    realization_ms: float
    recovery_ms: float

    @property
    def total_ms(self) -> float:
        return self.realization_ms + self.recovery_ms


def _base_rate(state: CognitiveState) -> float:
    return (
        (1 - state.attention) * INATTENTION_RATE
        + state.fatigue * FATIGUE_RATE
        + state.frustration * FRUSTRATION_RATE
    )


def calculate_mistake_rate(state: CognitiveState) -> float:
    """Overall mistake probability for a state, capped at 25%."""
    return min(MAX_MISTAKE_RATE, _base_rate(state))


def mistake_rate(state: CognitiveState, action: GameAction, mistake_multiplier: float = 1.0) -> float:
    """Per-action probability, including importance and complexity. Not capped."""
    importance = IMPORTANT_REDUCTION if action.important else 1.0
    complexity = 1 + action.complexity * COMPLEXITY_INCREASE
    return _base_rate(state) * importance * complexity * mistake_multiplier


def mistake_weights(action: GameAction) -> List[float]:
    """Catalog weights for an action, normalized to sum to 1."""
    weights = [
        kind.weight * TYPO_INPUT_BOOST
        if kind is TYPO_IN_INPUT and action.type == ActionType.INPUT
        else kind.weight
        for kind in MISTAKE_CATALOG
    ]
    total = sum(weights)
    return [w / total for w in weights]


def pick_mistake(action: GameAction, rng: RandomSource) -> MistakeKind:
    return weighted_choice(rng, list(MISTAKE_CATALOG), mistake_weights(action))


def plan_recovery(kind: MistakeKind, rng: RandomSource) -> MistakeRecovery:
    realization = uniform(rng, *REALIZATION_MS)
    recovery = kind.recovery_ms * uniform(rng, *RECOVERY_VARIANCE)
    return MistakeRecovery(kind=kind, realization_ms=realization, recovery_ms=recovery)


class MistakeInjector:
    """
    Decides on, picks, and plays out simulated mistakes for one engine.

    Usage:
        injector = MistakeInjector(tracker, rng)
        if injector.should_make_mistake(action):
            kind = injector.pick_mistake(action)
            waited_ms = await injector.simulate_mistake(kind)
    """

    def __init__(
        self,
        tracker: CognitiveStateTracker,
        rng: RandomSource,
        mistake_multiplier: float = 1.0,
        timing_multiplier: float = 1.0,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
        on_log: Optional[Callable[[str], None]] = None,
        logger: Optional[logging.Logger] = None,
        debug: bool = False,
    ):
        self._tracker = tracker
        self._rng = rng
        self._mistake_multiplier = mistake_multiplier
        self._timing_multiplier = timing_multiplier
        self._sleep = sleep or asyncio.sleep
        self._log_callback = on_log
        self._logger = logger or logging.getLogger(__name__)
        self._debug = debug
        self._mistake_count = 0

    def _log(self, message: str, always: bool = False) -> None:
        if not (always or self._debug):
            return
        if self._log_callback:
            self._log_callback(f"[Mistake] {message}")
        else:
            self._logger.info(f"[Mistake] {message}")

    @property
    def mistake_count(self) -> int:
        return self._mistake_count

    def reset_stats(self) -> None:
        self._mistake_count = 0

    def should_make_mistake(self, action: GameAction) -> bool:
        rate = mistake_rate(self._tracker.state, action, self._mistake_multiplier)
        triggered = self._rng.next() < rate
        if triggered:
            self._log(f"Triggered (rate: {rate * 100:.1f}%)")
        return triggered

    def pick_mistake(self, action: GameAction) -> MistakeKind:
        return pick_mistake(action, self._rng)

    async def simulate_mistake(self, kind: MistakeKind) -> float:
        """Play out a mistake. Returns the milliseconds waited."""
        plan = plan_recovery(kind, self._rng)
        self._mistake_count += 1
        self._log(f"Made mistake: {kind.name}", always=True)

        realization = plan.realization_ms * self._timing_multiplier
        await self._sleep(realization / 1000)
        recovery = plan.recovery_ms * self._timing_multiplier
        await self._sleep(recovery / 1000)

        self._tracker.add_frustration(MISTAKE_FRUSTRATION)
        return realization + recovery
