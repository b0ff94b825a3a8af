"""Tests for break triggers, tiers, durations, and recovery."""

from __future__ import annotations

import pytest

from conftest import FixedRNG, SleepRecorder
from mimicry.core.breaks import (
    BreakPlan,
    BreakScheduler,
    BreakTier,
    apply_recovery,
    break_tier,
    plan_break,
    should_take_break,
)
from mimicry.core.cognition import CognitiveState, CognitiveStateTracker

JUST_ABOVE = 1e-9


# ---------------------------------------------------------------------------
# Trigger
# ---------------------------------------------------------------------------


class TestShouldTakeBreak:
    @pytest.mark.parametrize("fatigue, expected", [
        (0.79, False),
        (0.8, False),
        (0.8 + JUST_ABOVE, True),
        (1.0, True),
    ])
    def test_fatigue_boundary(self, fatigue: float, expected: bool) -> None:
        assert should_take_break(CognitiveState(fatigue=fatigue)) is expected

    @pytest.mark.parametrize("boredom, expected", [
        (0.69, False),
        (0.7, False),
        (0.7 + JUST_ABOVE, True),
    ])
    def test_boredom_boundary(self, boredom: float, expected: bool) -> None:
        assert should_take_break(CognitiveState(boredom=boredom)) is expected

    @pytest.mark.parametrize("frustration, expected", [
        (0.89, False),
        (0.9, False),
        (0.9 + JUST_ABOVE, True),
    ])
    def test_frustration_boundary(self, frustration: float, expected: bool) -> None:
        assert should_take_break(CognitiveState(frustration=frustration)) is expected

    def test_low_attention_alone_is_not_enough(self) -> None:
        assert not should_take_break(CognitiveState(attention=0.0))

    def test_all_at_thresholds(self) -> None:
        state = CognitiveState(fatigue=0.8, boredom=0.7, frustration=0.9)
        assert not should_take_break(state)


# ---------------------------------------------------------------------------
# Tiers and durations
# ---------------------------------------------------------------------------


class TestPlanBreak:
    @pytest.mark.parametrize("state, tier", [
        (CognitiveState(fatigue=0.95), BreakTier.LONG),
        (CognitiveState(boredom=0.95), BreakTier.LONG),
        (CognitiveState(frustration=0.95), BreakTier.LONG),
        (CognitiveState(fatigue=0.85), BreakTier.SHORT),
        (CognitiveState(boredom=0.75), BreakTier.SHORT),
        (CognitiveState(fatigue=0.9, boredom=0.9), BreakTier.SHORT),
        (CognitiveState(frustration=0.85), BreakTier.MICRO),
        (CognitiveState(), BreakTier.MICRO),
    ])
    def test_tier(self, state: CognitiveState, tier: BreakTier) -> None:
        assert break_tier(state) is tier

    def test_long_duration(self) -> None:
        plan = plan_break(CognitiveState(fatigue=0.95), FixedRNG(0.5))
        assert plan.tier is BreakTier.LONG
        assert plan.duration_ms == pytest.approx(10 * 60 * 1000)

    def test_short_duration(self) -> None:
        plan = plan_break(CognitiveState(boredom=0.8), FixedRNG(0.5))
        assert plan.tier is BreakTier.SHORT
        assert plan.duration_ms == pytest.approx(3 * 60 * 1000)

    def test_micro_duration(self) -> None:
        plan = plan_break(CognitiveState(), FixedRNG(0.5))
        assert plan.tier is BreakTier.MICRO
        assert plan.duration_ms == pytest.approx(75 * 1000)

    def test_multiplier_scales_duration_only(self) -> None:
        plan = plan_break(CognitiveState(fatigue=0.95), FixedRNG(0.0), timing_multiplier=0.01)
        assert plan.tier is BreakTier.LONG
        assert plan.duration_ms == pytest.approx(3000)

    def test_format(self) -> None:
        assert BreakPlan(BreakTier.SHORT, 90_400).format() == "short break for 90s"


# ---------------------------------------------------------------------------
# Recovery
# ---------------------------------------------------------------------------


class TestApplyRecovery:
    def test_long_is_full_refresh(self) -> None:
        state = CognitiveState(attention=0.2, fatigue=0.95, boredom=0.8, frustration=0.7)
        rested = apply_recovery(state, BreakTier.LONG)
        assert rested.attention == 1.0
        assert rested.fatigue == 0.0
        assert rested.boredom == 0.0
        assert rested.frustration == pytest.approx(0.2)

    def test_long_frustration_floor(self) -> None:
        rested = apply_recovery(CognitiveState(frustration=0.3), BreakTier.LONG)
        assert rested.frustration == 0.0

    def test_short(self) -> None:
        state = CognitiveState(attention=0.4, fatigue=0.75, boredom=0.5, frustration=0.3)
        rested = apply_recovery(state, BreakTier.SHORT)
        assert rested.attention == pytest.approx(0.9)
        assert rested.fatigue == pytest.approx(0.25)
        assert rested.boredom == pytest.approx(0.2)
        assert rested.frustration == pytest.approx(0.1)

    def test_short_caps(self) -> None:
        rested = apply_recovery(CognitiveState(attention=0.8, fatigue=0.2), BreakTier.SHORT)
        assert rested.attention == 1.0
        assert rested.fatigue == 0.0

    def test_micro_leaves_boredom(self) -> None:
        state = CognitiveState(attention=0.5, fatigue=0.5, boredom=0.6, frustration=0.05)
        rested = apply_recovery(state, BreakTier.MICRO)
        assert rested.attention == pytest.approx(0.7)
        assert rested.fatigue == pytest.approx(0.3)
        assert rested.boredom == 0.6
        assert rested.frustration == 0.0

    def test_does_not_mutate_input(self) -> None:
        state = CognitiveState(fatigue=0.95)
        apply_recovery(state, BreakTier.LONG)
        assert state.fatigue == 0.95


# ---------------------------------------------------------------------------
# BreakScheduler
# ---------------------------------------------------------------------------


class TestBreakScheduler:
    @pytest.mark.asyncio
    async def test_take_long_break(self) -> None:
        tracker = CognitiveStateTracker()
        tracker.adjust({"fatigue": 0.95, "boredom": 0.5, "frustration": 0.6})
        tracker.update_boredom("crime")
        sleep = SleepRecorder()
        seen: list[BreakPlan] = []
        breaks = BreakScheduler(
            tracker, FixedRNG(0.5), timing_multiplier=0.001, sleep=sleep, on_log=lambda m: None,
        )

        assert breaks.should_take_break()
        plan = await breaks.take_break(on_break=seen.append)

        assert plan.tier is BreakTier.LONG
        assert seen == [plan]
        assert sleep.calls == pytest.approx([0.6])
        assert tracker.state.fatigue == 0.0
        assert tracker.state.boredom == 0.0
        assert tracker.state.frustration == pytest.approx(0.1)
        assert len(tracker.history) == 0
        assert breaks.breaks_by_tier == {"micro": 0, "short": 0, "long": 1}
        assert breaks.break_count == 1
        assert breaks.total_break_ms == pytest.approx(600)

    def test_apply_recovery_clears_history(self) -> None:
        tracker = CognitiveStateTracker()
        tracker.update_boredom("menu")
        BreakScheduler(tracker, FixedRNG()).apply_recovery(BreakTier.MICRO)
        assert len(tracker.history) == 0

    @pytest.mark.asyncio
    async def test_logs_reason(self) -> None:
        tracker = CognitiveStateTracker()
        tracker.adjust({"boredom": 0.8})
        lines: list[str] = []
        breaks = BreakScheduler(tracker, FixedRNG(0.5), sleep=SleepRecorder(), on_log=lines.append)
        await breaks.take_break()
        assert lines[0] == "[Break] Taking short break for 180s"
        assert "Boredom=0.80" in lines[1]
        assert lines[-1].startswith("[Break] Break complete.")

    def test_reset_stats(self) -> None:
        breaks = BreakScheduler(CognitiveStateTracker(), FixedRNG())
        breaks._breaks_by_tier[BreakTier.SHORT] = 2
        breaks.reset_stats()
        assert breaks.break_count == 0
