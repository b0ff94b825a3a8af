#!/usr/bin/env python3
"""
Mimicry CLI

Usage:
    mimicry simulate [--seed N] [--timing X]   Run the demonstration session
    mimicry test typing                        Typing delay distributions
    mimicry test mistakes                      Mistake rates across states
    mimicry test breaks                        Break tiers and durations
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import signal
import sys

import numpy as np

from .behavior import BehaviorConfig, HumanBehavior
from .core.actions import ActionType, GameAction
from .core.breaks import BreakTier, apply_recovery, plan_break, should_take_break
from .core.cognition import CognitiveState
from .core.mistakes import calculate_mistake_rate
from .core.rng import RNG
from .core.timing import get_typing_delay, get_zone_out_duration, should_zone_out

# Representative states for the preview harnesses
_STATES = {
    "rested": CognitiveState(),
    "warmed_up": CognitiveState(attention=0.8, fatigue=0.3, boredom=0.2, frustration=0.1),
    "tired": CognitiveState(attention=0.5, fatigue=0.75, boredom=0.4, frustration=0.3),
    "bored": CognitiveState(attention=0.6, fatigue=0.4, boredom=0.85, frustration=0.2),
    "exhausted": CognitiveState(attention=0.1, fatigue=0.95, boredom=0.6, frustration=0.95),
}


def _log(message: str) -> None:
    print(message)


def _summary(samples) -> str:
    arr = np.asarray(samples, dtype=float)
    p10, p50, p90 = np.percentile(arr, [10, 50, 90])
    return (
        f"mean={np.mean(arr):8.0f}  std={np.std(arr):7.0f}  "
        f"p10={p10:8.0f}  p50={p50:8.0f}  p90={p90:8.0f}"
    )


async def _run_simulation(human: HumanBehavior, rng: RNG) -> None:
    async def click(label: str):
        print(f"  [Action] {label}")

    print("1. Performing combat action...")
    await human.perform_action(
        GameAction(ActionType.COMBAT, complexity=0.8, important=True),
        lambda: click("Clicking attack button"),
    )
    human.record_action_result(True, was_important=True)

    print("\n2. Performing repetitive crime actions...")
    for i in range(5):
        await human.perform_action(
            GameAction(ActionType.CRIME, complexity=0.3),
            lambda i=i: click(f"Committing crime #{i + 1}"),
        )
        human.record_action_result(rng.chance(0.7))


def cmd_simulate(args):
    """Run the demonstration session."""
    print("=== Human Behavior Simulation ===\n")

    rng = RNG(seed=args.seed)
    config = BehaviorConfig(timing_multiplier=args.timing, verbose=not args.quiet)
    human = HumanBehavior(config, rng=rng, on_log=_log)

    asyncio.run(_run_simulation(human, rng))

    print("\n3. Statistics:\n")
    print(human.format_stats())

    state = human.get_cognitive_state()
    print("\n4. Utility functions:")
    print(f"  Mistake rate: {calculate_mistake_rate(state) * 100:.1f}%")
    print(f"  Typing delay: {round(get_typing_delay('testpassword123', state, rng))}ms")
    zone_out = should_zone_out(state, rng)
    print(f"  Will zone out: {zone_out}")
    if zone_out:
        print(f"  Zone out duration: {round(get_zone_out_duration(state, rng))}ms")

    print(f"\nSeed: {rng.seed}")


def cmd_test_typing(args):
    """Typing delay distributions per cognitive state."""
    rng = RNG(seed=args.seed)
    text = args.text
    print(f"=== Typing Delay: {text!r} ({len(text)} chars, n={args.samples}) ===\n")
    for name, state in _STATES.items():
        samples = [get_typing_delay(text, state, rng) for _ in range(args.samples)]
        print(f"  {name:10s} {_summary(samples)}")


def cmd_test_mistakes(args):
    """Mistake rates per cognitive state."""
    print("=== Mistake Rates ===\n")
    for name, state in _STATES.items():
        rate = calculate_mistake_rate(state)
        bar = "#" * int(rate * 160)
        print(f"  {name:10s} {rate * 100:5.1f}% {bar}")


def cmd_test_breaks(args):
    """Break tiers, durations, and recovery per cognitive state."""
    rng = RNG(seed=args.seed)
    print(f"=== Breaks (n={args.samples}, durations in ms) ===\n")
    for name, state in _STATES.items():
        if not should_take_break(state):
            print(f"  {name:10s} no break")
            continue
        plans = [plan_break(state, rng) for _ in range(args.samples)]
        tier: BreakTier = plans[0].tier
        rested = apply_recovery(state, tier)
        print(f"  {name:10s} {tier.value:5s} {_summary([p.duration_ms for p in plans])}")
        print(f"  {'':10s} after: {rested.format()}")


def main():
    parser = argparse.ArgumentParser(
        prog="mimicry",
        description="Mimicry - human behavior emulation for playtest agents",
    )
    parser.add_argument("--log-level", default="WARNING", help="Python logging level")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # simulate
    simulate_parser = subparsers.add_parser("simulate", help="Run the demonstration session")
    simulate_parser.add_argument("--seed", type=int, default=None, help="RNG seed")
    simulate_parser.add_argument("--timing", type=float, default=0.1, help="Timing multiplier")
    simulate_parser.add_argument("--quiet", action="store_true", help="Disable verbose output")
    simulate_parser.set_defaults(func=cmd_simulate)

    # test
    test_parser = subparsers.add_parser("test", help="Run preview harnesses")
    test_subparsers = test_parser.add_subparsers(dest="test_command")

    typing_parser = test_subparsers.add_parser("typing", help="Typing delay distributions")
    typing_parser.add_argument("--text", default="testpassword123", help="Text to type")
    typing_parser.add_argument("--samples", type=int, default=500, help="Samples per state")
    typing_parser.add_argument("--seed", type=int, default=None, help="RNG seed")
    typing_parser.set_defaults(func=cmd_test_typing)

    mistakes_parser = test_subparsers.add_parser("mistakes", help="Mistake rates")
    mistakes_parser.set_defaults(func=cmd_test_mistakes)

    breaks_parser = test_subparsers.add_parser("breaks", help="Break tiers and durations")
    breaks_parser.add_argument("--samples", type=int, default=500, help="Samples per state")
    breaks_parser.add_argument("--seed", type=int, default=None, help="RNG seed")
    breaks_parser.set_defaults(func=cmd_test_breaks)

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(0)

    if args.command == "test" and not getattr(args, "test_command", None):
        test_parser.print_help()
        sys.exit(0)

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    signal.signal(signal.SIGINT, lambda s, f: sys.exit(0))

    args.func(args)


if __name__ == "__main__":
    main()
