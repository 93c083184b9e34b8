# src/minish/contracts/results.py
"""Outcome types produced by the run orchestrator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class RunResult:
    """A run in which every iteration passed.

    Attributes:
        seed: Seed the run was driven by.
        num_runs: Number of iterations executed.
    """

    seed: int
    num_runs: int


@dataclass(frozen=True, slots=True)
class FailureReport:
    """Everything needed to understand and reproduce a property failure.

    Attributes:
        seed: Seed of the run that failed.
        run_index: 1-based iteration at which the property first failed.
        error: The exception the property raised on the original input.
        original: The first failing input.
        minimal: The smallest failing input found by shrinking.
        shrink_steps: How many candidates replaced the current minimal.
        shrink_attempts: How many candidates were pulled in total.
        choices: Ledger trace of the failing generation attempt.
    """

    seed: int
    run_index: int
    error: BaseException
    original: Any
    minimal: Any
    shrink_steps: int = 0
    shrink_attempts: int = 0
    choices: tuple[int, ...] = field(default=())

    @property
    def error_name(self) -> str:
        return type(self.error).__name__

    @property
    def rerun_hint(self) -> str:
        return f"MINISH_SEED={self.seed} (or RunOptions(seed={self.seed}))"

    def summary(self) -> str:
        """One multi-line, human-readable description of the failure."""
        lines = [
            f"Property failed on run {self.run_index}",
            f"Error: {self.error_name}: {self.error}",
            f"Seed: {self.seed}",
            f"Failing input: {self.original!r}",
            f"Minimal failing input: {self.minimal!r} "
            f"({self.shrink_steps} shrinks in {self.shrink_attempts} attempts)",
            f"Re-run with: {self.rerun_hint}",
        ]
        return "\n".join(lines)
