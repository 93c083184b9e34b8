# tests/unit/contracts/test_results.py
"""Tests for run outcome types."""

from __future__ import annotations

from minish.contracts.results import FailureReport, RunResult


def _report(**overrides: object) -> FailureReport:
    fields: dict[str, object] = {
        "seed": 1234,
        "run_index": 3,
        "error": ValueError("boom"),
        "original": [5, 9, 2],
        "minimal": [5],
        "shrink_steps": 2,
        "shrink_attempts": 7,
        "choices": (3, 5, 9, 2),
    }
    fields.update(overrides)
    return FailureReport(**fields)  # type: ignore[arg-type]


class TestRunResult:
    def test_fields(self) -> None:
        result = RunResult(seed=5, num_runs=10)
        assert result.seed == 5
        assert result.num_runs == 10


class TestFailureReport:
    def test_error_name(self) -> None:
        assert _report().error_name == "ValueError"

    def test_rerun_hint_names_env_var_and_option(self) -> None:
        hint = _report(seed=77).rerun_hint
        assert "MINISH_SEED=77" in hint
        assert "RunOptions(seed=77)" in hint

    def test_summary_contents(self) -> None:
        summary = _report().summary()
        assert "Property failed on run 3" in summary
        assert "Error: ValueError: boom" in summary
        assert "Seed: 1234" in summary
        assert "Failing input: [5, 9, 2]" in summary
        assert "Minimal failing input: [5]" in summary
        assert "2 shrinks in 7 attempts" in summary

    def test_choices_default_empty(self) -> None:
        report = FailureReport(seed=1, run_index=1, error=AssertionError(), original=0, minimal=0)
        assert report.choices == ()
        assert report.shrink_steps == 0
