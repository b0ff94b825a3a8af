"""
Cognitive State

Four bounded scalars that drive every timing, mistake, and break decision:
- attention: decays with every action, faster once already low
- fatigue: grows with every action, faster for complex ones
- boredom: grows while the recent-action window lacks variety
- frustration: grows on failures, shrinks (more slowly) on successes

Design principle: every mutation path clamps to [0, 1], so no caller can
observe an out-of-range value.
"""

from dataclasses import dataclass, fields
from typing import Dict, List, Mapping, Optional

# Attention decay per action: ATTENTION_DECAY * (1 + (1 - attention) * ATTENTION_DECAY_ACCEL)
ATTENTION_DECAY = 0.01
ATTENTION_DECAY_ACCEL = 0.5

# Fatigue per action: FATIGUE_BASE + complexity * FATIGUE_COMPLEXITY
FATIGUE_BASE = 0.015
FATIGUE_COMPLEXITY = 0.015

HISTORY_SIZE = 10
BOREDOM_LOW_VARIETY = 3     # fewer distinct types than this -> bored
BOREDOM_HIGH_VARIETY = 6    # more distinct types than this -> engaged
BOREDOM_INCREASE = 0.05
BOREDOM_DECREASE = 0.02

# Failures hurt more than successes help
FRUSTRATION_FAILURE = 0.10
FRUSTRATION_FAILURE_IMPORTANT = 0.15
FRUSTRATION_SUCCESS = 0.05
FRUSTRATION_SUCCESS_IMPORTANT = 0.08


def clamp(value: float) -> float:
    return max(0.0, min(1.0, float(value)))


@dataclass
class CognitiveState:
    """
    Snapshot of a simulated player's mental state.

    Attributes:
        attention: 1.0 = fully focused
        fatigue: 1.0 = exhausted
        boredom: 1.0 = completely disengaged
        frustration: 1.0 = about to rage quit
    """
    attention: float = 1.0
    fatigue: float = 0.0
    boredom: float = 0.0
    frustration: float = 0.0

    def copy(self) -> "CognitiveState":
        return CognitiveState(
            attention=self.attention,
            fatigue=self.fatigue,
            boredom=self.boredom,
            frustration=self.frustration,
        )

    def clamped(self) -> "CognitiveState":
        return CognitiveState(
            attention=clamp(self.attention),
            fatigue=clamp(self.fatigue),
            boredom=clamp(self.boredom),
            frustration=clamp(self.frustration),
        )

    def to_dict(self) -> Dict[str, float]:
        return {
            "attention": self.attention,
            "fatigue": self.fatigue,
            "boredom": self.boredom,
            "frustration": self.frustration,
        }

    def format(self) -> str:
        return (
            f"Attention: {self.attention:.2f}, Fatigue: {self.fatigue:.2f}, "
            f"Boredom: {self.boredom:.2f}, Frustration: {self.frustration:.2f}"
        )


STATE_FIELDS = tuple(f.name for f in fields(CognitiveState))


class ActionHistory:
    """Fixed-capacity ring of recent action labels (oldest overwritten first)."""

    def __init__(self, capacity: int = HISTORY_SIZE):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._capacity = capacity
        self._slots: List[Optional[str]] = [None] * capacity
        self._write = 0
        self._count = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return self._count

    def push(self, label: str) -> None:
        self._slots[self._write] = label
        self._write = (self._write + 1) % self._capacity
        if self._count < self._capacity:
            self._count += 1

    def items(self) -> List[str]:
        """Labels from oldest to newest."""
        start = (self._write - self._count) % self._capacity
        return [self._slots[(start + i) % self._capacity] for i in range(self._count)]

    def unique_count(self) -> int:
        return len(set(self.items()))

    def clear(self) -> None:
        self._slots = [None] * self._capacity
        self._write = 0
        self._count = 0


class CognitiveStateTracker:
    """
    Owns one CognitiveState and the recent-action window.

    Usage:
        tracker = CognitiveStateTracker()
        tracker.decay_attention()
        tracker.increase_fatigue(complexity=0.5)
        tracker.update_boredom("crime")
        tracker.record_result(success=False, important=True)
        state = tracker.snapshot()
    """

    def __init__(self, history_size: int = HISTORY_SIZE):
        self._state = CognitiveState()
        self._history = ActionHistory(history_size)

    @property
    def state(self) -> CognitiveState:
        """Live state. Use snapshot() for a copy callers may keep."""
        return self._state

    @property
    def history(self) -> ActionHistory:
        return self._history

    def snapshot(self) -> CognitiveState:
        return self._state.copy()

    def decay_attention(self) -> float:
        attention = self._state.attention
        decay = ATTENTION_DECAY * (1 + (1 - attention) * ATTENTION_DECAY_ACCEL)
        self._state.attention = clamp(attention - decay)
        return self._state.attention

    def increase_fatigue(self, complexity: float) -> float:
        increase = FATIGUE_BASE + complexity * FATIGUE_COMPLEXITY
        self._state.fatigue = clamp(self._state.fatigue + increase)
        return self._state.fatigue

    def update_boredom(self, action_type: str) -> float:
        self._history.push(action_type)
        unique = self._history.unique_count()
        if unique < BOREDOM_LOW_VARIETY:
            self._state.boredom = clamp(self._state.boredom + BOREDOM_INCREASE)
        elif unique > BOREDOM_HIGH_VARIETY:
            self._state.boredom = clamp(self._state.boredom - BOREDOM_DECREASE)
        return self._state.boredom

    def record_result(self, success: bool, important: bool = False) -> float:
        if success:
            delta = -(FRUSTRATION_SUCCESS_IMPORTANT if important else FRUSTRATION_SUCCESS)
        else:
            delta = FRUSTRATION_FAILURE_IMPORTANT if important else FRUSTRATION_FAILURE
        return self.add_frustration(delta)

    def add_frustration(self, delta: float) -> float:
        self._state.frustration = clamp(self._state.frustration + delta)
        return self._state.frustration

    def adjust(self, adjustments: Mapping[str, float]) -> CognitiveState:
        """Merge a partial state, then clamp every field."""
        unknown = set(adjustments) - set(STATE_FIELDS)
        if unknown:
            raise ValueError(f"Unknown cognitive field(s): {', '.join(sorted(unknown))}")
        merged = self._state.to_dict()
        merged.update(adjustments)
        self._state = CognitiveState(**merged).clamped()
        return self.snapshot()

    def replace(self, state: CognitiveState) -> None:
        self._state = state.clamped()

    def clear_history(self) -> None:
        self._history.clear()

    def reset(self) -> None:
        self._state = CognitiveState()
        self._history.clear()
