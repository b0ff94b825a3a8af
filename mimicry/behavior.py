"""
Human Behavior Engine

Wraps each agent action in a human-like cycle:
1. Thinking delay
2. Occasional mistake with recovery (if enabled)
3. Pre-delay, the action itself, post-delay
4. Cognitive state update (attention, fatigue, boredom)
5. Reading delay
6. Break, if one is due (if enabled)

This is the main interface for playtest agents to use. The engine does
not judge success: callers report outcomes through record_action_result().
"""

import asyncio
import logging
from dataclasses import dataclass, fields
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Union

from .core.actions import GameAction
from .core.breaks import BreakPlan, BreakScheduler, BreakTier
from .core.cognition import CognitiveState, CognitiveStateTracker
from .core.mistakes import MistakeInjector, MistakeKind
from .core.rng import RNG, RandomSource
from .core.timing import TimingModel

EXECUTION_FAILURE_FRUSTRATION = 0.1
STATE_LOG_INTERVAL = 5


@dataclass(frozen=True)
class BehaviorConfig:
    timing_multiplier: float = 1.0
    enable_mistakes: bool = True
    enable_breaks: bool = True
    mistake_multiplier: float = 1.0
    verbose: bool = False

    def __post_init__(self):
        if self.timing_multiplier < 0:
            raise ValueError(f"timing_multiplier must be >= 0, got {self.timing_multiplier}")
        if self.mistake_multiplier < 0:
            raise ValueError(f"mistake_multiplier must be >= 0, got {self.mistake_multiplier}")

    @classmethod
    def from_dict(cls, values: Optional[Mapping[str, Any]] = None) -> "BehaviorConfig":
        """Build from a partial mapping. Missing or None entries keep their defaults."""
        values = dict(values or {})
        known = {f.name for f in fields(cls)}
        unknown = set(values) - known
        if unknown:
            raise ValueError(f"Unknown config option(s): {', '.join(sorted(unknown))}")
        return cls(**{k: v for k, v in values.items() if v is not None})


@dataclass
class ActionBreakdown:
    """Where the time went in one action cycle (milliseconds, multiplier applied)."""
    action: str
    thinking: float = 0.0
    mistake: float = 0.0
    pre_execution: float = 0.0
    post_execution: float = 0.0
    reading: float = 0.0
    break_time: float = 0.0
    mistake_kind: Optional[str] = None
    break_tier: Optional[str] = None
    failed: bool = False

    @property
    def total(self) -> float:
        return (
            self.thinking + self.mistake + self.pre_execution
            + self.post_execution + self.reading + self.break_time
        )

    def format(self) -> str:
        parts = [f"think={self.thinking:.0f}ms"]
        if self.mistake_kind:
            parts.append(f"mistake[{self.mistake_kind}]={self.mistake:.0f}ms")
        parts.append(f"exec={self.pre_execution + self.post_execution:.0f}ms")
        if self.failed:
            parts.append("FAILED")
        else:
            parts.append(f"read={self.reading:.0f}ms")
        if self.break_tier:
            parts.append(f"break[{self.break_tier}]={self.break_time / 1000:.0f}s")
        return f"[{self.action}] {' + '.join(parts)} = {self.total:.0f}ms"


class HumanBehavior:
    """
    Human behavior engine for one simulated player.

    Usage:
        human = HumanBehavior(BehaviorConfig(verbose=True), seed=42)
        await human.perform_action(
            GameAction("combat", complexity=0.8, important=True),
            attack,
        )
        human.record_action_result(True, was_important=True)
        state = human.get_cognitive_state()
    """

    def __init__(
        self,
        config: Optional[Union[BehaviorConfig, Mapping[str, Any]]] = None,
        rng: Optional[RandomSource] = None,
        seed: Optional[int] = None,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
        on_log: Optional[Callable[[str], None]] = None,
        logger: Optional[logging.Logger] = None,
        on_mistake: Optional[Callable[[MistakeKind], None]] = None,
        on_break: Optional[Callable[[BreakPlan], None]] = None,
    ):
        if config is None or isinstance(config, BehaviorConfig):
            self._config = config or BehaviorConfig()
        else:
            self._config = BehaviorConfig.from_dict(config)

        self._rng = rng if rng is not None else RNG(seed=seed)
        self._sleep = sleep or asyncio.sleep
        self._log_callback = on_log
        self._logger = logger or logging.getLogger(__name__)
        self._on_mistake = on_mistake
        self._on_break = on_break

        self._tracker = CognitiveStateTracker()
        self._timing = TimingModel(self._rng, self._config.timing_multiplier)
        self._mistakes = MistakeInjector(
            self._tracker,
            self._rng,
            mistake_multiplier=self._config.mistake_multiplier,
            timing_multiplier=self._config.timing_multiplier,
            sleep=self._sleep,
            on_log=on_log,
            logger=logger,
            debug=self._config.verbose,
        )
        self._breaks = BreakScheduler(
            self._tracker,
            self._rng,
            timing_multiplier=self._config.timing_multiplier,
            sleep=self._sleep,
            on_log=on_log,
            logger=logger,
        )

        self._action_count = 0
        self._failed_count = 0
        self._total_delay_ms = 0.0
        self._last_breakdown: Optional[ActionBreakdown] = None

    def _log(self, message: str) -> None:
        if not self._config.verbose:
            return
        if self._log_callback:
            self._log_callback(message)
        else:
            self._logger.info(message)

    async def _wait(self, ms: float) -> float:
        await self._sleep(ms / 1000)
        self._total_delay_ms += ms
        return ms

    @property
    def config(self) -> BehaviorConfig:
        return self._config

    @property
    def rng(self) -> RandomSource:
        return self._rng

    @property
    def timing(self) -> TimingModel:
        return self._timing

    @property
    def mistakes(self) -> MistakeInjector:
        return self._mistakes

    @property
    def breaks(self) -> BreakScheduler:
        return self._breaks

    @property
    def last_breakdown(self) -> Optional[ActionBreakdown]:
        return self._last_breakdown

    async def perform_action(
        self,
        action: GameAction,
        execute: Callable[[], Awaitable[Any]],
    ) -> None:
        """
        Run `execute` wrapped in the full human-like cycle.

        If `execute` raises, frustration rises by 0.1, the error propagates
        unchanged, and the post-delay, state update, reading delay, and
        break check are all skipped.
        """
        self._action_count += 1
        breakdown = ActionBreakdown(action=action.label)
        self._last_breakdown = breakdown
        state = self._tracker.state

        # 1. Think
        breakdown.thinking = await self._wait(self._timing.thinking_delay(state, action))
        self._log(
            f"[Thinking] {round(breakdown.thinking)}ms for {action.label} "
            f"(complexity: {action.complexity})"
        )

        # 2. Slip up
        if self._config.enable_mistakes and self._mistakes.should_make_mistake(action):
            kind = self._mistakes.pick_mistake(action)
            if self._on_mistake:
                self._on_mistake(kind)
            waited = await self._mistakes.simulate_mistake(kind)
            self._total_delay_ms += waited
            breakdown.mistake = waited
            breakdown.mistake_kind = kind.name

        # 3. Act
        breakdown.pre_execution = await self._wait(self._timing.pre_execution_delay())
        try:
            await execute()
        except Exception as e:
            breakdown.failed = True
            self._failed_count += 1
            self._tracker.add_frustration(EXECUTION_FAILURE_FRUSTRATION)
            self._log(f"[Execution] Action failed: {e}")
            raise
        breakdown.post_execution = await self._wait(self._timing.post_execution_delay())

        # 4. Update state
        self._update_cognitive_state(action)

        # 5. Read the result
        breakdown.reading = await self._wait(self._timing.reading_delay(self._tracker.state, action))
        self._log(f"[Reading] {round(breakdown.reading)}ms for {action.label} result")

        # 6. Rest
        if self._config.enable_breaks and self._breaks.should_take_break():
            plan = await self._breaks.take_break(on_break=self._on_break)
            self._total_delay_ms += plan.duration_ms
            breakdown.break_time = plan.duration_ms
            breakdown.break_tier = plan.tier.value

        self._log(breakdown.format())

    perform_action_with_human_behavior = perform_action

    def _update_cognitive_state(self, action: GameAction) -> None:
        self._tracker.decay_attention()
        self._tracker.increase_fatigue(action.complexity)
        self._tracker.update_boredom(action.label)

        if self._action_count % STATE_LOG_INTERVAL == 0:
            self._log(f"[Cognitive State] {self._tracker.state.format()}")

    def record_action_result(self, success: bool, was_important: bool = False) -> None:
        """Report the outcome of the last wrapped action (drives frustration)."""
        frustration = self._tracker.record_result(success, was_important)
        verb = "reduced" if success else "increased"
        label = "Success" if success else "Failure"
        self._log(f"[Result] {label} {verb} frustration to {frustration:.2f}")

    async def maybe_zone_out(self) -> float:
        """Maybe lapse briefly. Returns milliseconds waited (0 if not triggered)."""
        state = self._tracker.state
        if not self._timing.should_zone_out(state):
            return 0.0
        duration = self._timing.zone_out_duration(state)
        self._log(f"[Zone Out] {round(duration)}ms")
        return await self._wait(duration)

    def get_cognitive_state(self) -> CognitiveState:
        return self._tracker.snapshot()

    def get_statistics(self) -> Dict:
        history = self._tracker.history
        return {
            "total_actions": self._action_count,
            "recent_actions": history.items(),
            "unique_recent_actions": history.unique_count(),
            "failed_actions": self._failed_count,
            "mistakes_made": self._mistakes.mistake_count,
            "breaks_taken": self._breaks.breaks_by_tier,
            "total_delay_ms": self._total_delay_ms,
        }

    def format_stats(self) -> str:
        stats = self.get_statistics()
        state = self._tracker.state
        breaks = stats["breaks_taken"]
        lines = [
            "=== Human Behavior Statistics ===",
            f"Actions: {stats['total_actions']} ({stats['failed_actions']} failed)",
            f"Recent: {', '.join(stats['recent_actions']) or '-'} "
            f"({stats['unique_recent_actions']} unique)",
            f"Mistakes: {stats['mistakes_made']}",
            f"Breaks: {sum(breaks.values())} "
            f"(micro={breaks[BreakTier.MICRO.value]}, short={breaks[BreakTier.SHORT.value]}, "
            f"long={breaks[BreakTier.LONG.value]})",
            f"Total Delay: {stats['total_delay_ms'] / 1000:.2f}s",
            "",
            "--- Cognitive State ---",
            f"Attention: {state.attention * 100:.0f}%",
            f"Fatigue: {state.fatigue * 100:.0f}%",
            f"Boredom: {state.boredom * 100:.0f}%",
            f"Frustration: {state.frustration * 100:.0f}%",
        ]
        return "\n".join(lines)

    def reset(self) -> None:
        """Well-rested fresh start (new login, new session)."""
        self._tracker.reset()
        self._action_count = 0
        self._failed_count = 0
        self._total_delay_ms = 0.0
        self._last_breakdown = None
        self._mistakes.reset_stats()
        self._breaks.reset_stats()
        self._log("[Human Behavior] Reset to fresh state")

    def adjust_cognitive_state(
        self,
        adjustments: Optional[Mapping[str, float]] = None,
        **kwargs: float,
    ) -> CognitiveState:
        """Override part of the state; every field is re-clamped to [0, 1]."""
        merged = dict(adjustments or {})
        merged.update(kwargs)
        state = self._tracker.adjust(merged)
        self._log(f"[Human Behavior] Manual cognitive state adjustment: {state.format()}")
        return state


BEHAVIOR_CONFIGS = {
    "default": BehaviorConfig(),
    "fast": BehaviorConfig(timing_multiplier=0.1),
    "instant": BehaviorConfig(timing_multiplier=0.0),
    "careful": BehaviorConfig(mistake_multiplier=0.5),
    "no_modifiers": BehaviorConfig(enable_mistakes=False, enable_breaks=False),
}
