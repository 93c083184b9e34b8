# tests/conftest.py
"""Shared test fixtures.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/

Note that these profiles configure Hypothesis, which drives the property
tests OF minish. Minish's own run settings come from MINISH_* variables;
the autouse fixture below strips those so a developer's shell cannot
change test outcomes.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator

import pytest
from hypothesis import Phase, Verbosity, settings

from minish.core.ledger import ChoiceLedger
from minish.core.ownership import Owner
from tests.helpers.reporters import RecordingReporter
from tests.helpers.resources import ResourcePool

# =============================================================================
# Hypothesis Configuration
# =============================================================================

# CI profile: Fast tests for continuous integration
settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Disable deadline for CI (timing varies)
)

# Nightly profile: Thorough testing for scheduled runs
settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Debug profile: Minimal examples with verbose output for debugging
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Load profile from environment, default to "ci"
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


# =============================================================================
# Environment Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def _isolate_minish_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove MINISH_* variables inherited from the developer's shell."""
    for key in list(os.environ):
        if key.startswith("MINISH_"):
            monkeypatch.delenv(key)


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def owner() -> Owner:
    return Owner()


@pytest.fixture
def make_ledger(owner: Owner) -> Callable[..., ChoiceLedger]:
    """Factory for ledgers sharing the test's Owner."""

    def _make(seed: int = 42, **kwargs: object) -> ChoiceLedger:
        return ChoiceLedger(seed, owner=owner, **kwargs)  # type: ignore[arg-type]

    return _make


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def pool() -> Iterator[ResourcePool]:
    """Resource pool that must be empty again when the test ends."""
    resources = ResourcePool()
    yield resources
    assert resources.open_count == 0, f"Leaked resources: {resources.open_ids()}"
