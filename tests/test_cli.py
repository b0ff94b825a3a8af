"""Smoke tests for the mimicry command line."""

from __future__ import annotations

import sys

import pytest

from mimicry import cli


def run(monkeypatch, *argv: str) -> None:
    monkeypatch.setattr(sys, "argv", ["mimicry", *argv])
    monkeypatch.setattr(cli.signal, "signal", lambda *a: None)
    cli.main()


def test_no_command_prints_help(monkeypatch, capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        run(monkeypatch)
    assert exc_info.value.code == 0
    assert "simulate" in capsys.readouterr().out


def test_mistake_rates(monkeypatch, capsys) -> None:
    run(monkeypatch, "test", "mistakes")
    out = capsys.readouterr().out
    assert "=== Mistake Rates ===" in out
    rested = next(line for line in out.splitlines() if "rested" in line)
    assert rested.split()[1] == "0.0%"
    assert "exhausted" in out


def test_typing_summary(monkeypatch, capsys) -> None:
    run(monkeypatch, "test", "typing", "--text", "abc", "--samples", "20", "--seed", "3")
    out = capsys.readouterr().out
    assert "'abc' (3 chars, n=20)" in out
    assert "mean=" in out and "p90=" in out


def test_break_preview(monkeypatch, capsys) -> None:
    run(monkeypatch, "test", "breaks", "--samples", "10", "--seed", "3")
    out = capsys.readouterr().out
    assert any(line.split() == ["rested", "no", "break"] for line in out.splitlines())
    assert any(line.split()[:2] == ["exhausted", "long"] for line in out.splitlines())
    assert "after: Attention: 1.00" in out


def test_simulate_quiet(monkeypatch, capsys) -> None:
    run(monkeypatch, "simulate", "--seed", "1", "--timing", "0", "--quiet")
    out = capsys.readouterr().out
    assert out.count("[Action] Committing crime") == 5
    assert "Actions: 6 (0 failed)" in out
    assert "Seed: 1" in out
