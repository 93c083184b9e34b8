# src/minish/contracts/options.py
"""Per-run options for check().

RunOptions is immutable for the duration of a run. It can be built
directly, or from RunSettings loaded out of the environment.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from minish.core.config import RunSettings

DEFAULT_NUM_RUNS = 100
DEFAULT_MAX_SHRINK_ATTEMPTS = 1000
DEFAULT_MAX_CHOICES = 1024


@dataclass(frozen=True, slots=True)
class RunOptions:
    """Configuration for a single property run.

    Attributes:
        num_runs: Number of generate-and-test iterations.
        seed: Explicit seed. None means "ask the seed source" (wall clock
            by default).
        max_shrink_attempts: Total candidate pulls allowed across all
            shrink sequence restarts for one failure.
        verbose: Diagnostic verbosity only. Never changes behaviour.
        max_choices: Per-attempt choice budget handed to each ledger.
    """

    num_runs: int = DEFAULT_NUM_RUNS
    seed: int | None = None
    max_shrink_attempts: int = DEFAULT_MAX_SHRINK_ATTEMPTS
    verbose: bool = False
    max_choices: int = DEFAULT_MAX_CHOICES

    def __post_init__(self) -> None:
        if self.num_runs < 0:
            raise ValueError(f"num_runs must be >= 0, got {self.num_runs}")
        if self.max_shrink_attempts < 0:
            raise ValueError(f"max_shrink_attempts must be >= 0, got {self.max_shrink_attempts}")
        if self.max_choices < 1:
            raise ValueError(f"max_choices must be >= 1, got {self.max_choices}")
        if self.seed is not None and self.seed < 0:
            raise ValueError(f"seed must be non-negative, got {self.seed}")

    @classmethod
    def from_settings(cls, settings: RunSettings) -> RunOptions:
        """Factory from a validated RunSettings model."""
        return cls(
            num_runs=settings.num_runs,
            seed=settings.seed,
            max_shrink_attempts=settings.max_shrink_attempts,
            verbose=settings.verbose,
            max_choices=settings.max_choices,
        )
