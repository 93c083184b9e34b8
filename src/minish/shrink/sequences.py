# src/minish/shrink/sequences.py
"""Four-phase shrinker for variable-length sequences (lists and strings).

Phases run in strict order, each exhausted before the next begins:

1. the empty sequence;
2. drop a chunk from the end, halving the chunk each time a candidate
   passes (n//2, n//4, ..., 1 elements removed);
3. the same, dropping the chunk from the start;
4. remove exactly one element at each position in turn.

Cheapest, most drastic reductions come first; fine-grained single
removals come last. Every candidate is a contiguous slice of the input
or the input with one element removed, and is strictly shorter than it.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, TypeVar

SeqT = TypeVar("SeqT", str, bytes, list[Any], tuple[Any, ...])


def sequences(value: SeqT) -> Iterator[SeqT]:
    """Shrink a list, tuple or string by removing elements.

    Candidates have the same type as ``value`` (slicing preserves it).
    The empty sequence yields nothing.
    """
    length = len(value)
    if length == 0:
        return

    # Phase 1: empty
    yield value[:0]

    # Phase 2: chunks off the end
    chunk = length // 2
    while chunk > 0:
        yield value[: length - chunk]
        chunk //= 2

    # Phase 3: chunks off the start
    chunk = length // 2
    while chunk > 0:
        yield value[chunk:]
        chunk //= 2

    # Phase 4: single removals. Length 1 would repeat the empty candidate.
    if length <= 1:
        return
    for pos in range(length):
        yield value[:pos] + value[pos + 1 :]
