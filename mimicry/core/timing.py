"""
Timing Model

Turns the current cognitive state plus an action descriptor into delays:
- Thinking delay before acting (complexity, fatigue, importance, attention)
- Execution variance around the action itself (hand movement, confirmation)
- Reading delay after acting (per-action-type base times)
- Typing time for a string, including occasional typo-and-retype
- Zone-outs: brief lapses independent of the break system

All values are milliseconds. TimingModel applies the session's timing
multiplier as the final step; the module-level helpers return raw values.
"""

from typing import Optional, Dict

from .actions import ActionType, GameAction
from .cognition import CognitiveState
from .rng import RandomSource, default_rng, uniform

# Thinking: (THINKING_BASE + complexity * THINKING_COMPLEXITY) seconds
THINKING_BASE = 0.5
THINKING_COMPLEXITY = 1.5
THINKING_IMPORTANT = 1.3
THINKING_ATTENTION_VARIANCE = 0.5

PRE_EXECUTION_MS = (100.0, 400.0)
POST_EXECUTION_MS = (50.0, 250.0)

READING_TIMES: Dict[ActionType, float] = {
    ActionType.COMBAT: 2000.0,
    ActionType.CRIME: 1500.0,
    ActionType.SOCIAL: 1000.0,
    ActionType.SHOP: 800.0,
    ActionType.MENU: 500.0,
    ActionType.TRAVEL: 600.0,
    ActionType.INPUT: 400.0,
}
DEFAULT_READING_MS = 500.0
READING_IMPORTANT = 1.5
READING_FATIGUE = 0.3

TYPING_CHAR_MS = (200.0, 300.0)
TYPING_FATIGUE = 0.5
TYPING_ATTENTION_VARIANCE = 0.3
TYPO_BASE_CHANCE = 0.05
TYPO_ATTENTION_CHANCE = 0.05
TYPO_RETYPE_MS = (500.0, 1000.0)

ZONE_OUT_ATTENTION_RATE = 0.02
ZONE_OUT_FATIGUE_RATE = 0.03
ZONE_OUT_BOREDOM_RATE = 0.05
ZONE_OUT_MS = (2000.0, 5000.0)
ZONE_OUT_EXTENDED_MS = (5000.0, 15000.0)
ZONE_OUT_EXTEND_THRESHOLD = 0.7


def thinking_delay(state: CognitiveState, action: GameAction, rng: RandomSource) -> float:
    base = (THINKING_BASE + action.complexity * THINKING_COMPLEXITY) * 1000
    fatigue_mult = 1 + state.fatigue
    importance_mult = THINKING_IMPORTANT if action.important else 1.0
    attention_variance = (1 - state.attention) * THINKING_ATTENTION_VARIANCE
    return base * fatigue_mult * importance_mult * (1 + rng.next() * attention_variance)


def reading_delay(state: CognitiveState, action: GameAction, rng: RandomSource) -> float:
    base = READING_TIMES.get(action.type, DEFAULT_READING_MS)
    attention_factor = 0.5 + 0.5 * state.attention
    importance_factor = READING_IMPORTANT if action.important else 1.0
    fatigue_factor = 1 + READING_FATIGUE * state.fatigue
    reading = base * attention_factor * importance_factor * fatigue_factor
    # Independent 0.5-1.5x term added on top, not a second multiplier
    return reading + reading * (0.5 + rng.next())


def get_typing_delay(
    text: str,
    state: CognitiveState,
    rng: Optional[RandomSource] = None,
) -> float:
    """
    Total time to type `text` in milliseconds.

    Each character costs 200-300ms, slowed by fatigue and made uneven by
    low attention. Each character also has a 5-10% chance of a typo that
    costs another 0.5-1s to notice, backspace, and retype.
    """
    rng = rng or default_rng()
    fatigue_mult = 1 + state.fatigue * TYPING_FATIGUE
    attention_variance = (1 - state.attention) * TYPING_ATTENTION_VARIANCE
    typo_chance = TYPO_BASE_CHANCE + (1 - state.attention) * TYPO_ATTENTION_CHANCE

    total = 0.0
    for _ in text:
        char_delay = (
            uniform(rng, *TYPING_CHAR_MS)
            * fatigue_mult
            * (1 + (rng.next() - 0.5) * attention_variance)
        )
        total += char_delay
        if rng.next() < typo_chance:
            total += uniform(rng, *TYPO_RETYPE_MS)
    return total


def zone_out_rate(state: CognitiveState) -> float:
    return (
        (1 - state.attention) * ZONE_OUT_ATTENTION_RATE
        + state.fatigue * ZONE_OUT_FATIGUE_RATE
        + state.boredom * ZONE_OUT_BOREDOM_RATE
    )


def should_zone_out(state: CognitiveState, rng: Optional[RandomSource] = None) -> bool:
    rng = rng or default_rng()
    return rng.next() < zone_out_rate(state)


def get_zone_out_duration(state: CognitiveState, rng: Optional[RandomSource] = None) -> float:
    """2-5s lapse, plus 5-15s more when fatigue or boredom is above 0.7."""
    rng = rng or default_rng()
    duration = uniform(rng, *ZONE_OUT_MS)
    if state.fatigue > ZONE_OUT_EXTEND_THRESHOLD or state.boredom > ZONE_OUT_EXTEND_THRESHOLD:
        duration += uniform(rng, *ZONE_OUT_EXTENDED_MS)
    return duration


class TimingModel:
    """
    Stateless delay formulas bound to one random source and timing multiplier.

    Usage:
        timing = TimingModel(rng, timing_multiplier=0.1)
        ms = timing.thinking_delay(state, action)
    """

    def __init__(self, rng: RandomSource, timing_multiplier: float = 1.0):
        self._rng = rng
        self._multiplier = timing_multiplier

    @property
    def timing_multiplier(self) -> float:
        return self._multiplier

    def scale(self, ms: float) -> float:
        return ms * self._multiplier

    def thinking_delay(self, state: CognitiveState, action: GameAction) -> float:
        return self.scale(thinking_delay(state, action, self._rng))

    def pre_execution_delay(self) -> float:
        return self.scale(uniform(self._rng, *PRE_EXECUTION_MS))

    def post_execution_delay(self) -> float:
        return self.scale(uniform(self._rng, *POST_EXECUTION_MS))

    def reading_delay(self, state: CognitiveState, action: GameAction) -> float:
        return self.scale(reading_delay(state, action, self._rng))

    def typing_delay(self, text: str, state: CognitiveState) -> float:
        return self.scale(get_typing_delay(text, state, self._rng))

    def should_zone_out(self, state: CognitiveState) -> bool:
        return should_zone_out(state, self._rng)

    def zone_out_duration(self, state: CognitiveState) -> float:
        return self.scale(get_zone_out_duration(state, self._rng))
