# src/minish/gen/combinators.py
"""Combinators: build new generators from existing ones.

Each combinator returns a plain Generator and keeps the ownership
contract intact:

- intermediate values a combinator consumes (the base of map/flat_map,
  values rejected by filter) are released before produce returns, also
  when produce fails half-way;
- values whose release depends on a runtime decision (which branch of
  one_of/frequency ran, which generator flat_map built) are adopted into
  the ledger's Owner together with the right releaser, so cleanup never
  has to guess or re-run user construction code.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from enum import Enum
from typing import TYPE_CHECKING, TypeVar

from minish import shrink
from minish.contracts.errors import InvalidChoice, Overrun
from minish.core.ownership import Owner
from minish.gen.generator import Generator, ShrinkFn, release_adopted

if TYPE_CHECKING:
    from minish.core.ledger import ChoiceLedger

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E", bound=Enum)

DEFAULT_FILTER_ATTEMPTS = 100


# =============================================================================
# Transforming
# =============================================================================


def map_values(
    base: Generator[T],
    fn: Callable[[T], U],
    *,
    release: Callable[[Owner, U], None] | None = None,
    shrink_fn: ShrinkFn[U] | None = None,
    name: str | None = None,
) -> Generator[U]:
    """Produce ``fn(value)`` for each value of ``base``.

    The base value is released as soon as ``fn`` has run. The mapped value
    has whatever ownership ``release`` describes (none by default), and is
    not shrinkable unless ``shrink_fn`` is given: ``fn`` cannot be inverted
    to shrink through it.
    """

    def produce(ledger: ChoiceLedger) -> U:
        value = base.produce(ledger)
        try:
            return fn(value)
        finally:
            base.release(ledger.owner, value)

    return Generator(produce, shrink_fn, release, name or f"map({base.name})")


def flat_map(
    base: Generator[T],
    make: Callable[[T], Generator[U]],
    *,
    name: str | None = None,
) -> Generator[U]:
    """Chain: use a base value to construct the generator of the result.

    The base value is released once the dependent value is produced. The
    result is adopted with the constructed generator's releaser, so
    release never calls ``make`` again.
    """

    def produce(ledger: ChoiceLedger) -> U:
        value = base.produce(ledger)
        try:
            follow = make(value)
            result = follow.produce(ledger)
        finally:
            base.release(ledger.owner, value)
        if follow.release_fn is not None:
            ledger.owner.adopt(result, follow.release_fn)
        return result

    return Generator(produce, None, release_adopted, name or f"flat_map({base.name})")


def managed(
    base: Generator[T],
    acquire: Callable[[T], U],
    close: Callable[[U], None],
    *,
    name: str | None = None,
) -> Generator[U]:
    """Values that hold a resource which must be closed after use.

    Example:
        # A temporary file per generated payload
        files = managed(strings(0, 64), write_temp_file, lambda f: f.close())

    ``acquire`` turns a base value into the resource; the resource is
    adopted into the ledger's Owner with ``close`` as its releaser.
    Releasing it twice raises OwnershipError.
    """

    def produce(ledger: ChoiceLedger) -> U:
        value = base.produce(ledger)
        try:
            resource = acquire(value)
        finally:
            base.release(ledger.owner, value)
        return ledger.owner.adopt(resource, lambda owner, res: close(res))

    def release(owner: Owner, value: U) -> None:
        owner.release(value)

    return Generator(produce, None, release, name or f"managed({base.name})")


def filter_values(
    base: Generator[T],
    predicate: Callable[[T], bool],
    *,
    max_attempts: int = DEFAULT_FILTER_ATTEMPTS,
    name: str | None = None,
) -> Generator[T]:
    """Only produce values satisfying ``predicate``.

    Rejected values are released immediately. After ``max_attempts``
    rejections the attempt fails with Overrun instead of looping forever.
    Shrink candidates outside the filtered domain are skipped.
    """
    if max_attempts < 1:
        raise InvalidChoice(f"filter() max_attempts must be >= 1, got {max_attempts}")

    def produce(ledger: ChoiceLedger) -> T:
        for _ in range(max_attempts):
            value = base.produce(ledger)
            if predicate(value):
                return value
            base.release(ledger.owner, value)
        raise Overrun(
            f"filter({base.name}) rejected {max_attempts} values in a row",
            limit=max_attempts,
        )

    def shrink_values(owner: Owner, value: T) -> Iterator[T]:
        def keep(candidate: T) -> bool:
            if predicate(candidate):
                return True
            if owner.owns(candidate):
                owner.release(candidate)
            return False

        return shrink.filtered(base.shrink(owner, value), keep)

    return Generator(
        produce,
        shrink_values if base.can_shrink else None,
        base.release_fn,
        name or f"filter({base.name})",
    )


# =============================================================================
# Choosing
# =============================================================================


def _adopting(branch: Generator[T], ledger: ChoiceLedger) -> T:
    value = branch.produce(ledger)
    if branch.release_fn is not None:
        ledger.owner.adopt(value, branch.release_fn)
    return value


def frequency(weighted: Sequence[tuple[int, Generator[T]]], *, name: str | None = None) -> Generator[T]:
    """Pick a branch with probability proportional to its weight.

    Example:
        # 90% zero, 10% anything
        biased = frequency([(90, constant(0)), (10, integers(bits=32))])

    Each value is released by the branch that produced it.

    Raises:
        InvalidChoice: No branches, a negative weight, or all-zero weights.
    """
    if not weighted:
        raise InvalidChoice("frequency() requires at least one branch")
    weights = [w for w, _ in weighted]
    if any(w < 0 for w in weights) or sum(weights) == 0:
        raise InvalidChoice(f"frequency() weights must be non-negative and not all zero: {weights}")
    branches = [g for _, g in weighted]

    def produce(ledger: ChoiceLedger) -> T:
        return _adopting(branches[ledger.weighted_choice(weights)], ledger)

    label = ", ".join(f"{w}:{g.name}" for w, g in weighted)
    return Generator(produce, None, release_adopted, name or f"frequency({label})")


def one_of(generators: Sequence[Generator[T]], *, name: str | None = None) -> Generator[T]:
    """Pick one of ``generators`` uniformly, with a single choice.

    Raises:
        InvalidChoice: ``generators`` is empty.
    """
    if not generators:
        raise InvalidChoice("one_of() requires at least one generator")
    branches = list(generators)

    def produce(ledger: ChoiceLedger) -> T:
        return _adopting(branches[ledger.choice(len(branches) - 1)], ledger)

    label = ", ".join(g.name for g in branches)
    return Generator(produce, None, release_adopted, name or f"one_of({label})")


def sampled_from(values: Sequence[T], *, name: str | None = None) -> Generator[T]:
    """Pick one of a fixed set of values, shrinking towards the first.

    Raises:
        InvalidChoice: ``values`` is empty.
    """
    if not values:
        raise InvalidChoice("sampled_from() requires at least one value")
    pool = list(values)

    def produce(ledger: ChoiceLedger) -> T:
        return pool[ledger.choice(len(pool) - 1)]

    def shrink_values(owner: Owner, value: T) -> Iterator[T]:
        return (pool[idx] for idx in shrink.integers(pool.index(value)))

    return Generator(produce, shrink_values, None, name or f"sampled_from({len(pool)} values)")


def enum_values(enum_type: type[E]) -> Generator[E]:
    """Any member of an Enum, in definition order, shrinking towards the first."""
    members = list(enum_type)
    if not members:
        raise InvalidChoice(f"{enum_type.__name__} has no members")
    return sampled_from(members, name=f"enum_values({enum_type.__name__})")


# =============================================================================
# Dependent Data
# =============================================================================


def dependent(
    first: Generator[T],
    make_second: Callable[[T], Generator[U]],
    *,
    name: str | None = None,
) -> Generator[tuple[T, U]]:
    """Produce ``(a, b)`` where ``b``'s generator is built from ``a``.

    Example:
        # A list and a valid index into it
        pair = dependent(lists(integers(), 1, 10), lambda xs: int_range(0, len(xs) - 1))

    Release uses the second generator captured at produce time. Shrinking
    keeps ``a`` fixed (it defines ``b``'s domain) and shrinks ``b`` with the
    shrinker of ``make_second(a)``.
    """

    def produce(ledger: ChoiceLedger) -> tuple[T, U]:
        a = first.produce(ledger)
        try:
            second = make_second(a)
            b = second.produce(ledger)
        except BaseException:
            first.release(ledger.owner, a)
            raise
        pair = (a, b)
        if first.release_fn is not None or second.release_fn is not None:

            def release_pair(owner: Owner, value: tuple[T, U]) -> None:
                first.release(owner, value[0])
                second.release(owner, value[1])

            ledger.owner.adopt(pair, release_pair)
        return pair

    def shrink_pair(owner: Owner, value: tuple[T, U]) -> Iterator[tuple[T, U]]:
        a, b = value
        second = make_second(a)
        if not second.can_shrink:
            return iter(())
        return shrink.components(
            [a, b],
            [None, lambda v: second.shrink(owner, v)],
            tuple,
        )

    return Generator(produce, shrink_pair, release_adopted, name or f"dependent({first.name})")


# =============================================================================
# Constants and Sizing
# =============================================================================


def constant(value: T) -> Generator[T]:
    """Always ``value``. Makes no choices and never shrinks."""

    def produce(ledger: ChoiceLedger) -> T:
        return value

    return Generator(produce, None, None, f"constant({value!r})")


def sized(size: int, make: Callable[[int], Generator[T]]) -> Generator[T]:
    """Build a generator from a size hint, e.g. the max length of a collection."""
    if size < 0:
        raise InvalidChoice(f"sized() size must be >= 0, got {size}")
    return make(size)
