"""Game action descriptors passed in by the caller for each wrapped action."""

from dataclasses import dataclass
from enum import Enum
from typing import Union


class ActionType(str, Enum):
    COMBAT = "combat"
    CRIME = "crime"
    TRAVEL = "travel"
    SHOP = "shop"
    SOCIAL = "social"
    MENU = "menu"
    INPUT = "input"


@dataclass(frozen=True)
class GameAction:
    """
    One discrete action an agent is about to perform.

    Attributes:
        type: Action category, used for reading-time and mistake lookups
        complexity: 0-1, scales thinking time, fatigue, and mistake odds
        repetitive: Caller hint that the action was done recently
        important: Failure has high consequences (more care, more reading)
    """
    type: Union[ActionType, str]
    complexity: float = 0.5
    repetitive: bool = False
    important: bool = False

    def __post_init__(self):
        if not isinstance(self.type, ActionType):
            try:
                object.__setattr__(self, "type", ActionType(self.type))
            except ValueError:
                valid = ", ".join(t.value for t in ActionType)
                raise ValueError(f"Unknown action type {self.type!r} (expected one of: {valid})") from None
        if not 0.0 <= self.complexity <= 1.0:
            raise ValueError(f"complexity must be within [0, 1], got {self.complexity}")

    @property
    def label(self) -> str:
        return self.type.value
