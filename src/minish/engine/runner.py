# src/minish/engine/runner.py
"""Run orchestrator: generate, test, shrink, report.

State machine over one run:

1. Resolve options (MINISH_* settings when none are given) and the seed
   (explicit, or from the seed source), and log it.
2. For each iteration, seed a fresh ChoiceLedger from the run PRNG,
   produce a value and test it.
   - GenError: abort the run, propagating the error.
   - Pass: release the value, next iteration.
   - Failure: shrink.
3. Shrink: pull candidates, at most ``max_shrink_attempts`` in total.
   A passing candidate is dropped and the same sequence is pulled again;
   a failing one becomes the new minimal and the sequence restarts from it.
4. Report, release everything, re-raise the property's original error.

Example:
    from minish import check, gen

    def never_negative(xs: list[int]) -> None:
        assert sum(abs(x) for x in xs) >= 0

    check(gen.lists(gen.integers(bits=32), 0, 20), never_negative)
"""

from __future__ import annotations

import random as random_module
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from minish.contracts.errors import GenError, PropertyFalsified
from minish.contracts.options import DEFAULT_MAX_CHOICES, RunOptions
from minish.contracts.results import FailureReport, RunResult
from minish.core.config import load_settings
from minish.core.ledger import ChoiceLedger
from minish.core.logging import get_logger
from minish.core.ownership import Owner
from minish.core.seed import DEFAULT_SEED_SOURCE, SeedSource
from minish.engine.reporting import ConsoleReporter, Reporter
from minish.gen.generator import Generator

T = TypeVar("T")

Property = Callable[[T], object]

slog = get_logger(__name__)

_EXHAUSTED = object()


def check(
    generator: Generator[T],
    prop: Property[T],
    options: RunOptions | None = None,
    *,
    owner: Owner | None = None,
    reporter: Reporter | None = None,
    seed_source: SeedSource | None = None,
) -> RunResult:
    """Check that ``prop`` holds for values drawn from ``generator``.

    The property signals failure by raising (an explicit ``False`` return
    counts as failure too). On failure the input is shrunk and the
    property's original exception is re-raised, carrying a FailureReport
    on ``minish_report`` and a readable summary as an exception note.

    Args:
        generator: Where inputs come from.
        prop: The property under test.
        options: Run options. When omitted they are loaded from MINISH_*
            environment variables (defaults: 100 runs, wall-clock seed).
        owner: Registry for values needing release. A fresh Owner is used
            when omitted.
        reporter: Diagnostic sink (default: ConsoleReporter).
        seed_source: Seed provider used when options.seed is None.

    Returns:
        RunResult when every iteration passed.

    Raises:
        GenError: Generation itself failed.
        Exception: Whatever the property raised, after shrinking.
    """
    options = options if options is not None else RunOptions.from_settings(load_settings())
    owner = owner if owner is not None else Owner()
    reporter = reporter if reporter is not None else ConsoleReporter(verbose=options.verbose)
    seed = options.seed if options.seed is not None else (seed_source or DEFAULT_SEED_SOURCE).seed()

    slog.info("run_started", seed=seed, num_runs=options.num_runs, generator=generator.name)
    reporter.run_started(seed, options.num_runs)

    rng = random_module.Random(seed)
    for run_index in range(1, options.num_runs + 1):
        ledger = ChoiceLedger(rng.getrandbits(64), max_choices=options.max_choices, owner=owner)
        try:
            value = generator.produce(ledger)
        except GenError as exc:
            slog.error(
                "generation_failed",
                seed=seed,
                run_index=run_index,
                generator=generator.name,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            raise

        try:
            error = _evaluate(prop, value)
        except BaseException:
            generator.release(owner, value)
            raise

        if error is None:
            generator.release(owner, value)
            continue

        _fail(generator, prop, owner, reporter, options, seed, run_index, ledger, value, error)

    result = RunResult(seed=seed, num_runs=options.num_runs)
    slog.info("run_passed", seed=seed, num_runs=options.num_runs)
    reporter.run_passed(result)
    return result


def replay(
    generator: Generator[T],
    choices: Sequence[int],
    *,
    owner: Owner | None = None,
    max_choices: int = DEFAULT_MAX_CHOICES,
) -> T:
    """Re-produce a value from a recorded choice trace (FailureReport.choices).

    The caller owns the returned value and should release it with
    ``generator.release(owner, value)`` when it needs releasing.
    """
    ledger = ChoiceLedger.for_replay(choices, owner=owner, max_choices=max_choices)
    return generator.produce(ledger)


def _evaluate(prop: Property[T], value: T) -> Exception | None:
    """Run the property; return its failure, or None if it passed."""
    try:
        outcome = prop(value)
    except Exception as exc:
        return exc
    if outcome is False:
        return PropertyFalsified(repr(value))
    return None


@dataclass(slots=True)
class _ShrinkState(Generic[T]):
    """Shrink progress, visible to the caller's cleanup if shrinking is interrupted."""

    original: T
    minimal: T
    steps: int = 0
    attempts: int = 0


def _fail(
    generator: Generator[T],
    prop: Property[T],
    owner: Owner,
    reporter: Reporter,
    options: RunOptions,
    seed: int,
    run_index: int,
    ledger: ChoiceLedger,
    original: T,
    error: Exception,
) -> None:
    """Shrink a failing value, report it, release it and re-raise ``error``."""
    reporter.property_failed(run_index, error, original)
    slog.warning(
        "property_failed",
        seed=seed,
        run_index=run_index,
        error=str(error),
        error_type=type(error).__name__,
    )

    state = _ShrinkState(original=original, minimal=original)
    try:
        _shrink(generator, prop, owner, reporter, state, options.max_shrink_attempts)
        report = FailureReport(
            seed=seed,
            run_index=run_index,
            error=error,
            original=original,
            minimal=state.minimal,
            shrink_steps=state.steps,
            shrink_attempts=state.attempts,
            choices=ledger.choices,
        )
        slog.info("shrink_finished", seed=seed, steps=state.steps, attempts=state.attempts, minimal=repr(state.minimal))
        reporter.shrink_finished(report)
    finally:
        if state.minimal is not original:
            _release_candidate(owner, state.minimal)
        generator.release(owner, original)

    error.minish_report = report  # type: ignore[attr-defined]
    error.add_note(report.summary())
    raise error


def _shrink(
    generator: Generator[T],
    prop: Property[T],
    owner: Owner,
    reporter: Reporter,
    state: _ShrinkState[T],
    budget: int,
) -> None:
    """Drive shrink sequences to convergence or until the budget is spent.

    Progress is recorded on ``state`` as it happens. A candidate whose
    property call escapes with a BaseException is released before the
    exception propagates; the current minimal is left to the caller.
    """
    sequence = generator.shrink(owner, state.minimal)
    try:
        while state.attempts < budget:
            try:
                candidate = next(sequence, _EXHAUSTED)
            except MemoryError:
                slog.warning("shrink_aborted", reason="out of memory", attempts=state.attempts)
                break
            if candidate is _EXHAUSTED:
                break
            state.attempts += 1

            try:
                failure = _evaluate(prop, candidate)
            except BaseException:
                _release_candidate(owner, candidate)
                raise

            if failure is None:
                _release_candidate(owner, candidate)
                continue

            if state.minimal is not state.original:
                _release_candidate(owner, state.minimal)
            state.minimal = candidate
            state.steps += 1
            reporter.shrink_step(state.steps, candidate)
            _close(sequence)
            sequence = generator.shrink(owner, state.minimal)
    finally:
        _close(sequence)


def _release_candidate(owner: Owner, candidate: Any) -> None:
    """Release a shrink candidate if its shrinker adopted it.

    Built-in shrinkers build candidates from parts of the failing value
    and never adopt them; those parts are released with the original.
    """
    if owner.owns(candidate):
        owner.release(candidate)


def _close(sequence: Iterator[Any]) -> None:
    close = getattr(sequence, "close", None)
    if close is not None:
        close()
