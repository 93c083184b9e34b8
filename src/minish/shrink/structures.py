# src/minish/shrink/structures.py
"""Shrinkers for fixed-shape aggregates and optional values.

Aggregates (arrays, tuples, records) shrink one component at a time,
left to right. While one component is being shrunk its siblings stay at
their original failing values; this is a per-component search, not a
joint minimisation over all components.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from typing import Any, TypeVar

T = TypeVar("T")
A = TypeVar("A")

ShrinkFn = Callable[[Any], Iterator[Any]]


def components(
    parts: Sequence[Any],
    shrinkers: Sequence[ShrinkFn | None],
    rebuild: Callable[[list[Any]], A],
) -> Iterator[A]:
    """Shrink an aggregate component by component.

    Args:
        parts: The component values of the failing aggregate, in order.
        shrinkers: One shrink function per component; None means the
            component is not shrinkable and is skipped.
        rebuild: Builds an aggregate from a full list of components.

    Yields:
        The aggregate with exactly one component replaced by one of that
        component's shrink candidates.
    """
    if len(parts) != len(shrinkers):
        raise ValueError(f"{len(parts)} components but {len(shrinkers)} shrinkers")

    for idx, shrink in enumerate(shrinkers):
        if shrink is None:
            continue
        inner = shrink(parts[idx])
        try:
            for candidate in inner:
                replaced = list(parts)
                replaced[idx] = candidate
                yield rebuild(replaced)
        finally:
            close = getattr(inner, "close", None)
            if close is not None:
                close()


def optionals(value: T | None, inner: Callable[[T], Iterator[T]] | None) -> Iterator[T | None]:
    """Shrink an optional value: None first, then the inner value.

    A None input yields nothing. A yielded None is a real candidate;
    exhaustion is signalled by StopIteration, so the two never conflate.
    """
    if value is None:
        return
    yield None
    if inner is not None:
        yield from inner(value)


def filtered(candidates: Iterator[T], predicate: Callable[[T], bool]) -> Iterator[T]:
    """Drop candidates that fall outside a filtered domain.

    Skipped candidates are treated by the underlying search as if they
    had passed, which keeps the sequence finite.
    """
    try:
        for candidate in candidates:
            if predicate(candidate):
                yield candidate
    finally:
        close = getattr(candidates, "close", None)
        if close is not None:
            close()
