"""
Mimicry Core Systems

Randomness, cognitive state, timing formulas, mistake injection, and break scheduling.
"""

from .rng import RNG, RandomSource
from .actions import ActionType, GameAction
from .cognition import (
    CognitiveState,
    CognitiveStateTracker,
    ActionHistory,
    clamp,
)
from .timing import (
    TimingModel,
    READING_TIMES,
    get_typing_delay,
    should_zone_out,
    get_zone_out_duration,
)
from .mistakes import (
    MistakeInjector,
    MistakeKind,
    MistakeRecovery,
    MISTAKE_CATALOG,
    calculate_mistake_rate,
)
from .breaks import (
    BreakScheduler,
    BreakPlan,
    BreakTier,
    should_take_break,
    plan_break,
    apply_recovery,
)

__all__ = [
    # RNG
    "RNG",
    "RandomSource",
    # Actions
    "ActionType",
    "GameAction",
    # Cognition
    "CognitiveState",
    "CognitiveStateTracker",
    "ActionHistory",
    "clamp",
    # Timing
    "TimingModel",
    "READING_TIMES",
    "get_typing_delay",
    "should_zone_out",
    "get_zone_out_duration",
    # Mistakes
    "MistakeInjector",
    "MistakeKind",
    "MistakeRecovery",
    "MISTAKE_CATALOG",
    "calculate_mistake_rate",
    # Breaks
    "BreakScheduler",
    "BreakPlan",
    "BreakTier",
    "should_take_break",
    "plan_break",
    "apply_recovery",
]
