# src/minish/engine/reporting.py
"""Human-readable diagnostics for property runs.

The runner talks to a Reporter rather than printing directly. The
console reporter writes unstructured text meant for a person reading
test output; the exact wording is not a stable interface. Structured,
machine-readable events go through structlog in the runner instead.
"""

from __future__ import annotations

from typing import Any, Protocol

import typer

from minish.contracts.results import FailureReport, RunResult

BANNER = "=" * 32


class Reporter(Protocol):
    """Diagnostic sink for run events."""

    def run_started(self, seed: int, num_runs: int) -> None: ...

    def property_failed(self, run_index: int, error: BaseException, value: Any) -> None: ...

    def shrink_step(self, step: int, value: Any) -> None: ...

    def shrink_finished(self, report: FailureReport) -> None: ...

    def run_passed(self, result: RunResult) -> None: ...


class ConsoleReporter:
    """Writes run diagnostics to the terminal with typer.echo.

    Failures always go to stderr. ``verbose`` adds the seed banner, every
    accepted shrink candidate and the success line; otherwise shrinking
    shows a row of dots as a progress indicator.
    """

    def __init__(self, *, verbose: bool = False) -> None:
        self._verbose = verbose

    def run_started(self, seed: int, num_runs: int) -> None:
        if self._verbose:
            typer.echo(f"Running {num_runs} property tests with seed: {seed}")

    def property_failed(self, run_index: int, error: BaseException, value: Any) -> None:
        typer.echo(
            f"\n{BANNER}\n"
            f"Property failed on run {run_index}\n"
            f"Error: {type(error).__name__}: {error}\n"
            f"Failing input: {value!r}\n"
            f"{BANNER}",
            err=True,
        )
        typer.echo("Shrinking", err=True, nl=self._verbose)

    def shrink_step(self, step: int, value: Any) -> None:
        if self._verbose:
            typer.echo(f"  shrink #{step}: {value!r}", err=True)
        else:
            typer.echo(".", err=True, nl=False)

    def shrink_finished(self, report: FailureReport) -> None:
        if not self._verbose:
            typer.echo("", err=True)
        typer.echo(
            f"Seed: {report.seed}\n"
            f"Minimal failing input: {report.minimal!r} "
            f"({report.shrink_steps} shrinks, {report.shrink_attempts} attempts)\n"
            f"Re-run with: {report.rerun_hint}",
            err=True,
        )

    def run_passed(self, result: RunResult) -> None:
        if self._verbose:
            typer.echo(f"OK. {result.num_runs} tests passed.")


class NullReporter:
    """Discards every event."""

    def run_started(self, seed: int, num_runs: int) -> None:
        pass

    def property_failed(self, run_index: int, error: BaseException, value: Any) -> None:
        pass

    def shrink_step(self, step: int, value: Any) -> None:
        pass

    def shrink_finished(self, report: FailureReport) -> None:
        pass

    def run_passed(self, result: RunResult) -> None:
        pass
