# tests/unit/gen/test_combinators.py
"""Tests for combinators and their release bookkeeping.

Every test that builds values from ``pool`` resources relies on the pool
fixture to fail if anything is left open.
"""

from __future__ import annotations

from enum import Enum

import pytest

from minish import gen
from minish.contracts.errors import InvalidChoice, Overrun, OwnershipError
from minish.core.ledger import ChoiceLedger
from minish.core.ownership import Owner
from minish.gen.generator import Generator
from tests.helpers.resources import Resource, ResourcePool
from tests.helpers.sampling import draws, replayed


class Color(Enum):
    RED = "red"
    GREEN = "green"
    BLUE = "blue"


def _produce_and_release(generator: Generator[object], owner: Owner, count: int = 50) -> None:
    for seed in range(count):
        value = generator.produce(ChoiceLedger(seed, owner=owner))
        generator.release(owner, value)


# =============================================================================
# Transforming
# =============================================================================


class TestMapValues:
    def test_applies_function(self) -> None:
        assert set(draws(gen.map_values(gen.int_range(0, 3), str), 100)) == {"0", "1", "2", "3"}

    def test_not_shrinkable_by_default(self) -> None:
        assert not gen.map_values(gen.int_range(0, 3), str).can_shrink

    def test_explicit_shrinker(self) -> None:
        mapped = gen.map_values(gen.int_range(0, 9), str, shrink_fn=lambda owner, value: iter(["0"]))
        assert list(mapped.shrink(Owner(), "7")) == ["0"]

    def test_base_released_after_mapping(self, owner: Owner, pool: ResourcePool) -> None:
        payloads = gen.map_values(pool.generator(gen.int_range(0, 9)), lambda res: res.payload)
        values = draws(payloads, 20, owner=owner)
        assert all(0 <= v <= 9 for v in values)
        assert owner.live == 0

    def test_base_released_when_function_raises(self, owner: Owner, pool: ResourcePool) -> None:
        def explode(res: Resource) -> int:
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            gen.map_values(pool.generator(gen.int_range(0, 9)), explode).produce(ChoiceLedger(0, owner=owner))

    def test_name(self) -> None:
        assert gen.map_values(gen.booleans(), int).name == "map(booleans())"


class TestFlatMap:
    def test_dependent_shape(self) -> None:
        sized_lists = gen.flat_map(gen.int_range(1, 5), lambda n: gen.lists(gen.booleans(), n, n))
        assert all(1 <= len(v) <= 5 for v in draws(sized_lists))

    def test_base_released(self, owner: Owner, pool: ResourcePool) -> None:
        chained = gen.flat_map(pool.generator(gen.int_range(1, 3)), lambda res: gen.constant(res.payload))
        draws(chained, 20, owner=owner)
        assert owner.live == 0

    def test_result_released_by_constructed_generator(self, owner: Owner, pool: ResourcePool) -> None:
        chained = gen.flat_map(gen.int_range(1, 3), lambda n: pool.generator(gen.constant(n)))
        value = chained.produce(ChoiceLedger(0, owner=owner))
        assert isinstance(value, Resource)
        assert owner.owns(value)
        chained.release(owner, value)
        assert owner.live == 0


class TestManaged:
    def test_adopts_and_releases(self, owner: Owner, pool: ResourcePool) -> None:
        resources = pool.generator(gen.int_range(0, 9))
        value = resources.produce(ChoiceLedger(0, owner=owner))
        assert owner.owns(value)
        assert pool.open_count == 1
        resources.release(owner, value)
        assert value.closed

    def test_double_release_raises(self, owner: Owner, pool: ResourcePool) -> None:
        resources = pool.generator(gen.int_range(0, 9))
        value = resources.produce(ChoiceLedger(0, owner=owner))
        resources.release(owner, value)
        with pytest.raises(OwnershipError):
            resources.release(owner, value)


class TestFilterValues:
    def test_only_accepted_values(self) -> None:
        evens = gen.filter_values(gen.int_range(0, 100), lambda x: x % 2 == 0)
        assert all(v % 2 == 0 for v in draws(evens))

    def test_gives_up_with_overrun(self) -> None:
        never = gen.filter_values(gen.int_range(0, 100), lambda x: False, max_attempts=5)
        with pytest.raises(Overrun) as exc_info:
            never.produce(ChoiceLedger(0))
        assert exc_info.value.limit == 5

    def test_attempts_must_be_positive(self) -> None:
        with pytest.raises(InvalidChoice):
            gen.filter_values(gen.booleans(), bool, max_attempts=0)

    def test_rejected_values_released(self, owner: Owner, pool: ResourcePool) -> None:
        odd = gen.filter_values(pool.generator(gen.int_range(0, 100)), lambda res: res.payload % 2 == 1)
        _produce_and_release(odd, owner)
        assert owner.live == 0

    def test_shrink_stays_in_domain(self) -> None:
        evens = gen.filter_values(gen.int_range(0, 100), lambda x: x % 2 == 0)
        candidates = list(evens.shrink(Owner(), 64))
        assert candidates
        assert all(c % 2 == 0 for c in candidates)


# =============================================================================
# Choosing
# =============================================================================


class TestFrequency:
    def test_zero_weight_never_chosen(self) -> None:
        biased = gen.frequency([(0, gen.constant("a")), (1, gen.constant("b"))])
        assert set(draws(biased, 50)) == {"b"}

    def test_weights_bias_choice(self) -> None:
        biased = gen.frequency([(90, gen.constant(0)), (10, gen.int_range(1, 9))])
        values = draws(biased, 1000)
        assert 0.85 < values.count(0) / len(values) < 0.95

    @pytest.mark.parametrize("weighted", [[], [(0, gen.booleans())], [(-1, gen.booleans()), (2, gen.booleans())]])
    def test_invalid_at_construction(self, weighted: list[tuple[int, Generator[bool]]]) -> None:
        with pytest.raises(InvalidChoice):
            gen.frequency(weighted)

    def test_mixed_release_behaviour(self, owner: Owner, pool: ResourcePool) -> None:
        """Each value is released by the branch that actually produced it."""
        mixed = gen.frequency([(1, pool.generator(gen.int_range(0, 9))), (1, gen.int_range(0, 9))])
        _produce_and_release(mixed, owner, 100)
        assert pool.total > 0
        assert owner.live == 0


class TestOneOf:
    def test_all_branches_reachable(self) -> None:
        either = gen.one_of([gen.constant("a"), gen.constant("b"), gen.constant("c")])
        assert set(draws(either, 100)) == {"a", "b", "c"}

    def test_single_choice(self) -> None:
        either = gen.one_of([gen.constant("a"), gen.constant("b")])
        assert replayed(either, [1]) == "b"

    def test_empty_rejected(self) -> None:
        with pytest.raises(InvalidChoice):
            gen.one_of([])

    def test_mixed_release_behaviour(self, owner: Owner, pool: ResourcePool) -> None:
        mixed = gen.one_of([gen.booleans(), pool.generator(gen.int_range(0, 9))])
        _produce_and_release(mixed, owner, 100)
        assert pool.total > 0
        assert owner.live == 0


class TestSampledFrom:
    def test_values_from_pool(self) -> None:
        assert set(draws(gen.sampled_from(["x", "y"]), 50)) == {"x", "y"}

    def test_shrinks_towards_first(self) -> None:
        assert list(gen.sampled_from(["a", "b", "c"]).shrink(Owner(), "c")) == ["a", "b"]

    def test_empty_rejected(self) -> None:
        with pytest.raises(InvalidChoice):
            gen.sampled_from([])


class TestEnumValues:
    def test_members(self) -> None:
        assert set(draws(gen.enum_values(Color), 100)) == set(Color)

    def test_shrinks_towards_first_member(self) -> None:
        assert next(gen.enum_values(Color).shrink(Owner(), Color.BLUE)) is Color.RED

    def test_empty_enum_rejected(self) -> None:
        class Empty(Enum):
            pass

        with pytest.raises(InvalidChoice):
            gen.enum_values(Empty)


# =============================================================================
# Dependent Data
# =============================================================================


class TestDependent:
    def test_index_valid_for_list(self) -> None:
        pairs = gen.dependent(gen.lists(gen.int_range(0, 9), 1, 10), lambda xs: gen.int_range(0, len(xs) - 1))
        for xs, idx in draws(pairs):
            assert 0 <= idx < len(xs)

    def test_shrink_keeps_first_fixed(self) -> None:
        pairs = gen.dependent(gen.int_range(1, 100), lambda n: gen.int_range(0, n))
        candidates = list(pairs.shrink(Owner(), (50, 40)))
        assert candidates
        assert all(a == 50 and 0 <= b <= 50 for a, b in candidates)
        assert candidates[0] == (50, 0)

    def test_unshrinkable_second(self) -> None:
        pairs = gen.dependent(gen.int_range(1, 5), lambda n: gen.uuids())
        assert list(pairs.shrink(Owner(), (3, "ignored"))) == []

    def test_release_uses_captured_second_generator(self, owner: Owner, pool: ResourcePool) -> None:
        pairs = gen.dependent(gen.int_range(1, 3), lambda n: pool.generator(gen.constant(n)))
        _produce_and_release(pairs, owner, 20)
        assert pool.total == 20
        assert owner.live == 0

    def test_first_released_when_second_fails(self, owner: Owner, pool: ResourcePool) -> None:
        def broken(res: Resource) -> Generator[int]:
            raise RuntimeError("cannot build")

        pairs = gen.dependent(pool.generator(gen.int_range(0, 9)), broken)
        with pytest.raises(RuntimeError, match="cannot build"):
            pairs.produce(ChoiceLedger(0, owner=owner))
        assert pool.total == 1


# =============================================================================
# Constants and Sizing
# =============================================================================


class TestConstant:
    def test_no_choices(self) -> None:
        ledger = ChoiceLedger(0)
        assert gen.constant(42).produce(ledger) == 42
        assert ledger.choices == ()

    def test_not_shrinkable(self) -> None:
        assert not gen.constant(42).can_shrink


class TestSized:
    def test_size_passed_through(self) -> None:
        bounded = gen.sized(3, lambda n: gen.lists(gen.booleans(), 0, n))
        assert all(len(v) <= 3 for v in draws(bounded))

    def test_negative_rejected(self) -> None:
        with pytest.raises(InvalidChoice):
            gen.sized(-1, lambda n: gen.constant(n))
