# src/minish/engine/__init__.py
"""Property engine: run orchestration and diagnostics.

This module provides:
- check: generate inputs, test a property, shrink failures, report
- replay: re-produce a value from a recorded choice trace
- ConsoleReporter / NullReporter: human-readable diagnostic sinks

Example:
    from minish import RunOptions, check, gen

    def reverse_twice_is_identity(xs: list[int]) -> None:
        assert list(reversed(list(reversed(xs)))) == xs

    check(gen.lists(gen.int_range(-100, 100), 0, 50), reverse_twice_is_identity, RunOptions(seed=42))
"""

from minish.engine.reporting import ConsoleReporter, NullReporter, Reporter
from minish.engine.runner import Property, check, replay

__all__ = [
    "ConsoleReporter",
    "NullReporter",
    "Property",
    "Reporter",
    "check",
    "replay",
]
