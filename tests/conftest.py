"""Shared pytest fixtures: deterministic random sources and a sleep recorder."""

from __future__ import annotations

from typing import Iterable

import pytest


class FixedRNG:
    """Always returns the same draw."""

    def __init__(self, value: float = 0.5):
        self.value = value
        self.calls = 0

    def next(self) -> float:
        self.calls += 1
        return self.value


class SequenceRNG:
    """Replays scripted draws, then repeats the last one."""

    def __init__(self, values: Iterable[float]):
        self.values = list(values)
        self.calls = 0

    def next(self) -> float:
        index = min(self.calls, len(self.values) - 1)
        self.calls += 1
        return self.values[index]


class SleepRecorder:
    """Stand-in for asyncio.sleep that records durations instead of waiting."""

    def __init__(self):
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)

    @property
    def total_ms(self) -> float:
        return sum(self.calls) * 1000


@pytest.fixture()
def sleep() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture()
def fixed_rng() -> FixedRNG:
    return FixedRNG(0.5)
