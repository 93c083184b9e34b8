# src/minish/core/seed.py
"""Seed source abstraction for reproducible runs.

When RunOptions carries no explicit seed, the runner asks a SeedSource
for one. Production code uses SystemSeedSource (the default), which
derives the seed from the wall clock. Tests inject FixedSeedSource so a
"seedless" run is still deterministic.
"""

from __future__ import annotations

import time
from typing import Protocol


class SeedSource(Protocol):
    """Supplies a seed for runs that did not specify one."""

    def seed(self) -> int:
        """Return a non-negative seed.

        Returns:
            Seed for the run's top-level PRNG.
        """
        ...


class SystemSeedSource:
    """Production seed source using wall-clock milliseconds."""

    def seed(self) -> int:
        """Return the current time in milliseconds since the epoch."""
        return time.time_ns() // 1_000_000


class FixedSeedSource:
    """Seed source that always returns the same value.

    Example:
        result = check(gen.booleans(), prop, seed_source=FixedSeedSource(7))
        assert result.seed == 7
    """

    def __init__(self, value: int) -> None:
        """Initialize with the seed to hand out.

        Args:
            value: Seed value (must be non-negative).

        Raises:
            ValueError: If value is negative.
        """
        if value < 0:
            raise ValueError(f"Seed must be non-negative: {value}")
        self._value = value
        self.calls = 0

    def seed(self) -> int:
        """Return the fixed seed."""
        self.calls += 1
        return self._value


# Default seed source for production use
DEFAULT_SEED_SOURCE: SeedSource = SystemSeedSource()
