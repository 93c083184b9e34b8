# src/minish/core/ledger.py
"""ChoiceLedger: the single point where randomness enters the system.

Every generator, whatever the shape of the value it builds, is expressed
in terms of one primitive: ``choice(n)``, a uniform draw from ``[0, n]``.
The ledger records each draw so an attempt can be inspected and replayed.

Usage:
    ledger = ChoiceLedger(seed=42)
    coin = ledger.choice(1)
    age = ledger.choice_in_range(18, 99)
    branch = ledger.weighted_choice([90, 10])
"""

from __future__ import annotations

import random as random_module
from collections.abc import Sequence

from minish.contracts.errors import InvalidChoice, Overrun
from minish.contracts.options import DEFAULT_MAX_CHOICES
from minish.core.ownership import Owner


class ChoiceLedger:
    """Random source plus the record of every choice made in one attempt.

    Created once per generation attempt and discarded after the attempt's
    value has been produced and consumed. Not thread-safe; a ledger belongs
    to exactly one attempt.
    """

    def __init__(
        self,
        seed: int,
        *,
        max_choices: int = DEFAULT_MAX_CHOICES,
        owner: Owner | None = None,
        prefix: Sequence[int] = (),
    ) -> None:
        """Initialize the ledger.

        Args:
            seed: Seed for this attempt's random source.
            max_choices: Budget of draws for this attempt. Draws beyond it
                raise Overrun.
            owner: Registry that produced values needing release are
                adopted into. A private Owner is created when omitted.
            prefix: Forced choices consumed before the random source.
        """
        if max_choices < 1:
            raise ValueError(f"max_choices must be >= 1, got {max_choices}")
        self._rng = random_module.Random(seed)
        self._seed = seed
        self._max_choices = max_choices
        self._prefix = tuple(prefix)
        self._prefix_idx = 0
        self._choices: list[int] = []
        self.owner = owner if owner is not None else Owner()

    @classmethod
    def for_replay(
        cls,
        choices: Sequence[int],
        *,
        owner: Owner | None = None,
        max_choices: int = DEFAULT_MAX_CHOICES,
    ) -> ChoiceLedger:
        """Ledger that replays a recorded trace before falling back to seed 0."""
        return cls(0, max_choices=max_choices, owner=owner, prefix=choices)

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def choices(self) -> tuple[int, ...]:
        """Choices drawn so far, in draw order."""
        return tuple(self._choices)

    @property
    def remaining(self) -> int:
        """Draws left before the budget is exhausted."""
        return self._max_choices - len(self._choices)

    def choice(self, n: int) -> int:
        """Draw uniformly from ``[0, n]`` (inclusive).

        Raises:
            Overrun: The per-attempt budget is exhausted.
            InvalidChoice: ``n`` is negative, or a replayed choice is out of
                range for this request.
        """
        if len(self._choices) >= self._max_choices:
            raise Overrun(
                f"Generation exceeded {self._max_choices} choices",
                limit=self._max_choices,
            )
        if n < 0:
            raise InvalidChoice(f"choice() upper bound must be >= 0, got {n}")

        if self._prefix_idx < len(self._prefix):
            result = self._prefix[self._prefix_idx]
            self._prefix_idx += 1
            if not 0 <= result <= n:
                raise InvalidChoice(f"Replayed choice {result} outside [0, {n}]")
        else:
            result = self._rng.randint(0, n)

        self._choices.append(result)
        return result

    def choice_in_range(self, min_value: int, max_value: int) -> int:
        """Draw uniformly from ``[min_value, max_value]`` with a single choice."""
        if min_value > max_value:
            raise InvalidChoice(f"Inverted range: min {min_value} > max {max_value}")
        return min_value + self.choice(max_value - min_value)

    def weighted_choice(self, weights: Sequence[int]) -> int:
        """Pick an index with probability proportional to its weight.

        Draws once over ``[0, total - 1]`` and returns the first bucket whose
        cumulative sum exceeds the draw.

        Raises:
            InvalidChoice: Empty weights, a negative weight, or all-zero weights.
        """
        if not weights:
            raise InvalidChoice("weighted_choice() requires at least one weight")
        if any(w < 0 for w in weights):
            raise InvalidChoice(f"Weights must be non-negative, got {list(weights)}")
        total = sum(weights)
        if total == 0:
            raise InvalidChoice("weighted_choice() weights sum to zero")

        drawn = self.choice(total - 1)
        cumulative = 0
        for idx, weight in enumerate(weights):
            cumulative += weight
            if drawn < cumulative:
                return idx
        # Unreachable: drawn < total == final cumulative sum.
        raise AssertionError(f"Draw {drawn} fell outside total weight {total}")

    def __repr__(self) -> str:
        return f"ChoiceLedger(seed={self._seed}, choices={len(self._choices)}/{self._max_choices})"
