# tests/property/test_shrinker_properties.py
"""Property-based tests for shrinker invariants.

These hold for every input, not just the examples in the unit tests:
- integer/float candidates stay between the target and the failing value
- threshold searches land exactly on the threshold
- sequence candidates are strictly shorter, order-preserving sub-sequences
"""

from __future__ import annotations

import math

from hypothesis import given
from hypothesis import strategies as st

from minish import shrink
from tests.helpers.shrinking import minimize
from tests.property.settings import QUICK_SETTINGS, STANDARD_SETTINGS


def _is_subsequence(candidate: list[int], value: list[int]) -> bool:
    remaining = iter(value)
    return all(any(item == other for other in remaining) for item in candidate)


# =============================================================================
# Integers
# =============================================================================


class TestIntegerShrinkProperties:
    @given(value=st.integers(), target=st.integers(min_value=-1000, max_value=1000))
    @STANDARD_SETTINGS
    def test_candidates_between_target_and_value(self, value: int, target: int) -> None:
        """Property: no candidate overshoots the target or reaches the value."""
        low, high = sorted((value, target))
        for candidate in shrink.integers(value, target):
            assert low <= candidate <= high
            assert candidate != value

    @given(value=st.integers(min_value=0, max_value=2**64), data=st.data())
    @STANDARD_SETTINGS
    def test_threshold_found_exactly(self, value: int, data: st.DataObject) -> None:
        """Property: for a monotone predicate the minimal failing value is the threshold."""
        threshold = data.draw(st.integers(min_value=0, max_value=value))
        assert minimize(shrink.integers, value, lambda x: x >= threshold) == threshold

    @given(value=st.integers(min_value=-(2**64), max_value=-1), data=st.data())
    @STANDARD_SETTINGS
    def test_negative_threshold_found_exactly(self, value: int, data: st.DataObject) -> None:
        threshold = data.draw(st.integers(min_value=value, max_value=0))
        assert minimize(shrink.integers, value, lambda x: x <= threshold) == threshold

    @given(value=st.integers(min_value=1, max_value=2**128))
    @QUICK_SETTINGS
    def test_sequence_length_logarithmic(self, value: int) -> None:
        assert len(list(shrink.integers(value))) <= value.bit_length() + 2


# =============================================================================
# Floats
# =============================================================================


class TestFloatShrinkProperties:
    @given(value=st.floats(allow_nan=False, allow_infinity=False, min_value=-1e300, max_value=1e300))
    @STANDARD_SETTINGS
    def test_candidates_finite_and_bounded(self, value: float) -> None:
        low, high = sorted((value, 0.0))
        for candidate in shrink.floats(value):
            assert math.isfinite(candidate)
            assert low <= candidate <= high

    @given(
        value=st.floats(min_value=1.0, max_value=1e6),
        fraction=st.floats(min_value=0.0, max_value=1.0),
    )
    @STANDARD_SETTINGS
    def test_converges_near_threshold(self, value: float, fraction: float) -> None:
        threshold = value * fraction
        result = minimize(shrink.floats, value, lambda x: x >= threshold)
        assert threshold <= result
        assert result - threshold < 1e-9 or result == value


# =============================================================================
# Sequences
# =============================================================================


class TestSequenceShrinkProperties:
    @given(value=st.lists(st.integers(), max_size=40))
    @STANDARD_SETTINGS
    def test_candidates_are_shorter_subsequences(self, value: list[int]) -> None:
        for candidate in shrink.sequences(value):
            assert len(candidate) < len(value)
            assert _is_subsequence(candidate, value)

    @given(value=st.lists(st.integers(min_value=0, max_value=9), min_size=1, max_size=40), data=st.data())
    @STANDARD_SETTINGS
    def test_isolates_required_element(self, value: list[int], data: st.DataObject) -> None:
        """Property: "contains x" shrinks to exactly [x]."""
        required = data.draw(st.sampled_from(value))
        assert minimize(shrink.sequences, value, lambda xs: required in xs) == [required]

    @given(value=st.text(max_size=40), data=st.data())
    @STANDARD_SETTINGS
    def test_length_threshold_exact(self, value: str, data: st.DataObject) -> None:
        threshold = data.draw(st.integers(min_value=0, max_value=len(value)))
        assert len(minimize(shrink.sequences, value, lambda s: len(s) >= threshold)) == threshold

    @given(value=st.lists(st.integers(), min_size=1, max_size=30))
    @QUICK_SETTINGS
    def test_empty_candidate_first(self, value: list[int]) -> None:
        assert next(shrink.sequences(value)) == []

    @given(value=st.integers().filter(lambda v: v != 0))
    @QUICK_SETTINGS
    def test_optional_yields_none_before_inner(self, value: int) -> None:
        candidates = list(shrink.optionals(value, shrink.integers))
        assert candidates[0] is None
        assert candidates[1] == 0
