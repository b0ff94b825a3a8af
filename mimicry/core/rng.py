"""
Random Number Generation

Single source of randomness for the behavior engine.
Key features:
- Seed management for reproducibility in testing
- `next()` capability used by every formula in the engine
- Uniform draws, weighted choice, and probability checks built on `next()`

Design principle: every random branch goes through one injectable
source, so a seed (or a scripted test double) replays a session exactly.
"""

import random
from typing import Optional, Callable, List, Any, Protocol


class RandomSource(Protocol):
    """Anything that yields floats in [0, 1)."""

    def next(self) -> float:
        ...


class RNG:
    """
    Seedable random source for behavior simulation.

    Usage:
        rng = RNG(seed=42)  # Reproducible
        rng = RNG()  # Random seed

        r = rng.next()                      # [0, 1)
        pause = rng.uniform(100, 400)       # [100, 400)
        if rng.chance(0.05): ...
        kind = rng.weighted_choice(kinds, weights)
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        on_log: Optional[Callable[[str], None]] = None,
        debug: bool = False,
    ):
        self._seed = seed if seed is not None else random.randint(0, 2**32 - 1)
        self._random = random.Random(self._seed)
        self._log_callback = on_log
        self._debug = debug
        self._sample_count = 0

    def _log(self, message: str) -> None:
        if self._log_callback:
            self._log_callback(f"[RNG] {message}")

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def sample_count(self) -> int:
        return self._sample_count

    def reseed(self, seed: Optional[int] = None) -> int:
        self._seed = seed if seed is not None else random.randint(0, 2**32 - 1)
        self._random.seed(self._seed)
        self._sample_count = 0
        self._log(f"Reseeded with {self._seed}")
        return self._seed

    def next(self) -> float:
        value = self._random.random()
        self._sample_count += 1
        if self._debug:
            self._log(f"next() = {value:.4f}")
        return value

    def uniform(self, low: float = 0.0, high: float = 1.0) -> float:
        return low + self.next() * (high - low)

    def chance(self, probability: float) -> bool:
        return self.next() < probability

    def weighted_choice(self, options: List[Any], weights: List[float]) -> Any:
        return weighted_choice(self, options, weights)

    def get_stats(self) -> dict:
        return {
            "seed": self._seed,
            "sample_count": self._sample_count,
            "debug": self._debug,
        }


def uniform(rng: RandomSource, low: float, high: float) -> float:
    """Uniform draw in [low, high) from any RandomSource."""
    return low + rng.next() * (high - low)


def weighted_choice(rng: RandomSource, options: List[Any], weights: List[float]) -> Any:
    """
    Cumulative-weight selection over normalized weights.

    Draws exactly one value from `rng`. Falls back to the first option
    when rounding leaves the draw past the last cumulative bound.
    """
    if not options:
        raise ValueError("weighted_choice needs at least one option")
    if len(options) != len(weights):
        raise ValueError("options and weights must be the same length")

    total = sum(weights)
    if total <= 0:
        raise ValueError("weights must sum to a positive value")

    roll = rng.next()
    cumulative = 0.0
    for option, weight in zip(options, weights):
        cumulative += weight / total
        if roll <= cumulative:
            return option
    return options[0]


_default_rng: Optional[RNG] = None


def default_rng() -> RNG:
    """Process-wide fallback source for the stateless helpers."""
    global _default_rng
    if _default_rng is None:
        _default_rng = RNG()
    return _default_rng
