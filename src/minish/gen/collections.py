# src/minish/gen/collections.py
"""Generators for collections, fixed-shape aggregates and optional values.

Memory lifecycle: a collection's release releases each element with the
element generator's release. Values built by the shrinkers share their
elements with the value they were derived from and are never released
on their own.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from typing import TYPE_CHECKING, Any, TypeVar

from minish import shrink
from minish.contracts.errors import InvalidChoice
from minish.core.ownership import Owner
from minish.gen.generator import Generator
from minish.shrink.structures import ShrinkFn

if TYPE_CHECKING:
    from minish.core.ledger import ChoiceLedger

T = TypeVar("T")
K = TypeVar("K")
V = TypeVar("V")
R = TypeVar("R")

DEFAULT_MAX_LEN = 100
DEFAULT_MAX_ENTRIES = 10


def _check_bounds(label: str, low: int, high: int) -> None:
    if low < 0 or low > high:
        raise InvalidChoice(f"{label} needs 0 <= min <= max, got [{low}, {high}]")


def _produce_all(ledger: ChoiceLedger, generators: Sequence[Generator[Any]]) -> list[Any]:
    """Produce one value per generator, in order.

    If any generator fails, the values already produced are released
    before the error propagates.
    """
    produced: list[Any] = []
    try:
        for generator in generators:
            produced.append(generator.produce(ledger))
    except BaseException:
        for generator, value in zip(generators, produced, strict=False):
            generator.release(ledger.owner, value)
        raise
    return produced


def _release_all(owner: Owner, generators: Sequence[Generator[Any]], values: Sequence[Any]) -> None:
    for generator, value in zip(generators, values, strict=True):
        generator.release(owner, value)


def _component_shrinkers(owner: Owner, generators: Sequence[Generator[Any]]) -> list[ShrinkFn | None]:
    return [
        (lambda value, g=generator: g.shrink(owner, value)) if generator.can_shrink else None
        for generator in generators
    ]


# =============================================================================
# Variable-length Collections
# =============================================================================


def lists(element: Generator[T], min_len: int = 0, max_len: int = DEFAULT_MAX_LEN) -> Generator[list[T]]:
    """Lists of ``min_len``..``max_len`` independently drawn elements.

    Example:
        # 0 to 20 integers
        numbers = lists(integers(bits=32), 0, 20)

    Shrinks by removing elements (see minish.shrink.sequences), never
    below ``min_len``.
    """
    _check_bounds("lists()", min_len, max_len)

    def produce(ledger: ChoiceLedger) -> list[T]:
        length = ledger.choice_in_range(min_len, max_len)
        return _produce_all(ledger, [element] * length)

    def shrink_list(owner: Owner, value: list[T]) -> Iterator[list[T]]:
        return (candidate for candidate in shrink.sequences(value) if len(candidate) >= min_len)

    def release_list(owner: Owner, value: list[T]) -> None:
        for item in value:
            element.release(owner, item)

    return Generator(
        produce,
        shrink_list,
        release_list if element.needs_release else None,
        f"lists({element.name}, {min_len}..{max_len})",
    )


def non_empty_lists(element: Generator[T], max_len: int = DEFAULT_MAX_LEN) -> Generator[list[T]]:
    """lists() with at least one element."""
    return lists(element, 1, max(1, max_len))


def dictionaries(
    keys: Generator[K],
    values: Generator[V],
    min_entries: int = 0,
    max_entries: int = DEFAULT_MAX_ENTRIES,
) -> Generator[dict[K, V]]:
    """Dicts built from ``min_entries``..``max_entries`` drawn key/value pairs.

    Duplicate keys overwrite earlier entries, so the realised size may be
    smaller than the drawn count. Shrinks by removing entries.
    """
    _check_bounds("dictionaries()", min_entries, max_entries)

    def release_dict(owner: Owner, value: dict[K, V]) -> None:
        for key, item in value.items():
            keys.release(owner, key)
            values.release(owner, item)

    def produce(ledger: ChoiceLedger) -> dict[K, V]:
        count = ledger.choice_in_range(min_entries, max_entries)
        result: dict[K, V] = {}
        try:
            for _ in range(count):
                key, item = _produce_all(ledger, [keys, values])
                if key in result:
                    # The dict keeps its original key object; the duplicate
                    # key and the displaced value are dropped here.
                    displaced = result[key]
                    result[key] = item
                    keys.release(ledger.owner, key)
                    values.release(ledger.owner, displaced)
                else:
                    result[key] = item
        except BaseException:
            release_dict(ledger.owner, result)
            raise
        return result

    def shrink_dict(owner: Owner, value: dict[K, V]) -> Iterator[dict[K, V]]:
        items = list(value.items())
        return (dict(candidate) for candidate in shrink.sequences(items) if len(candidate) >= min_entries)

    return Generator(
        produce,
        shrink_dict,
        release_dict if keys.needs_release or values.needs_release else None,
        f"dictionaries({keys.name}, {values.name})",
    )


# =============================================================================
# Fixed-shape Aggregates
# =============================================================================


def _aggregate(
    generators: Sequence[Generator[Any]],
    build: Callable[[list[Any]], R],
    parts: Callable[[R], Sequence[Any]],
    name: str,
) -> Generator[R]:
    """Generator for a fixed, ordered set of independent components.

    Components are produced independently in order and assembled with
    ``build``; ``parts`` takes an aggregate apart again for shrinking and
    release. Shrinking goes component by component, left to right.
    """

    def produce(ledger: ChoiceLedger) -> R:
        return build(_produce_all(ledger, generators))

    def shrink_aggregate(owner: Owner, value: R) -> Iterator[R]:
        return shrink.components(parts(value), _component_shrinkers(owner, generators), build)

    def release_aggregate(owner: Owner, value: R) -> None:
        _release_all(owner, generators, parts(value))

    return Generator(
        produce,
        shrink_aggregate if any(g.can_shrink for g in generators) else None,
        release_aggregate if any(g.needs_release for g in generators) else None,
        name,
    )


def arrays(element: Generator[T], size: int) -> Generator[list[T]]:
    """Lists of exactly ``size`` elements. Shrinks elements, never the length."""
    if size < 0:
        raise InvalidChoice(f"arrays() size must be >= 0, got {size}")
    return _aggregate([element] * size, list, list, f"arrays({element.name}, {size})")


def tuples(*generators: Generator[Any]) -> Generator[tuple[Any, ...]]:
    """Fixed-arity tuples, one generator per position."""
    label = ", ".join(g.name for g in generators)
    return _aggregate(list(generators), tuple, list, f"tuples({label})")


def records(cls: Callable[..., R], **fields: Generator[Any]) -> Generator[R]:
    """Instances of ``cls`` built from one generator per keyword field.

    Example:
        @dataclass
        class User:
            id: int
            name: str

        users = records(User, id=integers(bits=32, signed=False), name=strings(1, 20))

    Fields are generated independently in keyword order. Correlated fields
    need dependent() or a custom generator. Fields are read back with
    getattr() for shrinking and release.
    """
    names = list(fields)

    def build(values: list[Any]) -> R:
        return cls(**dict(zip(names, values, strict=True)))

    def parts(value: R) -> list[Any]:
        return [getattr(value, field_name) for field_name in names]

    label = getattr(cls, "__name__", repr(cls))
    return _aggregate(list(fields.values()), build, parts, f"records({label})")


def fixed_dicts(**fields: Generator[Any]) -> Generator[dict[str, Any]]:
    """Dicts with a fixed set of keys, one generator per key."""
    names = list(fields)

    def build(values: list[Any]) -> dict[str, Any]:
        return dict(zip(names, values, strict=True))

    def parts(value: dict[str, Any]) -> list[Any]:
        return [value[field_name] for field_name in names]

    return _aggregate(list(fields.values()), build, parts, f"fixed_dicts({', '.join(names)})")


# =============================================================================
# Optional Values
# =============================================================================


def optionals(inner: Generator[T]) -> Generator[T | None]:
    """None or a value of ``inner``, decided by one binary choice.

    Shrinks to None first, then shrinks the inner value.
    """

    def produce(ledger: ChoiceLedger) -> T | None:
        if ledger.choice(1) == 1:
            return inner.produce(ledger)
        return None

    def shrink_optional(owner: Owner, value: T | None) -> Iterator[T | None]:
        inner_shrink = (lambda v: inner.shrink(owner, v)) if inner.can_shrink else None
        return shrink.optionals(value, inner_shrink)

    def release_optional(owner: Owner, value: T | None) -> None:
        if value is not None:
            inner.release(owner, value)

    return Generator(
        produce,
        shrink_optional,
        release_optional if inner.needs_release else None,
        f"optionals({inner.name})",
    )
