# src/minish/gen/generator.py
"""Generator: the uniform {produce, shrink?, release?} capability triple.

Every built-in generator and every combinator result has this one shape,
so combinators are written once and work for any value type. A Generator
owns no values; it only describes how to make, shrink and release them,
and can be reused across any number of runs.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from minish.contracts.errors import OutOfMemory
from minish.core.logging import get_logger
from minish.core.ownership import Owner

if TYPE_CHECKING:
    from minish.core.ledger import ChoiceLedger

T = TypeVar("T")
U = TypeVar("U")

ProduceFn = Callable[["ChoiceLedger"], T]
ShrinkFn = Callable[[Owner, T], Iterator[T]]
ReleaseFn = Callable[[Owner, T], None]

logger = get_logger(__name__)


@dataclass(frozen=True)
class Generator(Generic[T]):
    """Immutable description of how to produce values of type T.

    Attributes:
        produce_fn: Builds one value from a ledger's choices. Raises GenError
            subclasses on failure.
        shrink_fn: Optional. Lazy iterator of simpler candidates for a
            known-failing value.
        release_fn: Optional. Frees whatever a produced value holds.
        name: Label used in diagnostics and repr.
    """

    produce_fn: ProduceFn[T]
    shrink_fn: ShrinkFn[T] | None = None
    release_fn: ReleaseFn[T] | None = None
    name: str = "generator"

    @property
    def can_shrink(self) -> bool:
        return self.shrink_fn is not None

    @property
    def needs_release(self) -> bool:
        return self.release_fn is not None

    def produce(self, ledger: ChoiceLedger) -> T:
        """Produce one value from the ledger.

        Raises:
            GenError: Overrun, InvalidChoice, or OutOfMemory.
        """
        try:
            return self.produce_fn(ledger)
        except MemoryError as exc:
            raise OutOfMemory(f"Out of memory while producing from {self.name}") from exc

    def shrink(self, owner: Owner, value: T) -> Iterator[T]:
        """Start a shrink sequence rooted at ``value``.

        Shrinking is best-effort: a generator without a shrinker, or one
        whose shrinker cannot even be set up, gives an empty sequence.
        """
        if self.shrink_fn is None:
            return iter(())
        try:
            return self.shrink_fn(owner, value)
        except MemoryError:
            logger.warning("Shrink sequence construction failed; not shrinking", generator=self.name)
            return iter(())

    def release(self, owner: Owner, value: T) -> None:
        """Release a value this generator produced. No-op when nothing to free."""
        if self.release_fn is not None:
            self.release_fn(owner, value)

    # Fluent forms of the most common combinators

    def map(self, fn: Callable[[T], U], *, name: str | None = None) -> Generator[U]:
        from minish.gen.combinators import map_values

        return map_values(self, fn, name=name)

    def flat_map(self, make: Callable[[T], Generator[U]], *, name: str | None = None) -> Generator[U]:
        from minish.gen.combinators import flat_map

        return flat_map(self, make, name=name)

    def filter(self, predicate: Callable[[T], bool], max_attempts: int = 100) -> Generator[T]:
        from minish.gen.combinators import filter_values

        return filter_values(self, predicate, max_attempts=max_attempts)

    def __repr__(self) -> str:
        return f"Generator({self.name})"


def release_adopted(owner: Owner, value: Any) -> None:
    """Release a value through its adoption record, if it has one.

    Used by combinators that adopt values at produce time so the correct
    releaser travels with the value rather than being inferred later.
    """
    if owner.owns(value):
        owner.release(value)
