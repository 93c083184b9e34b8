# src/minish/shrink/numbers.py
"""Bisection shrinkers for integers and floats.

Both shrinkers search between a known-good bound (initially the target)
and the known-bad value. The pull contract does the bookkeeping: when the
runner asks for another candidate, the previous one passed, so it becomes
the new good bound. A failing candidate ends this sequence; the runner
starts a fresh one rooted at it.

The target itself is offered first. If it fails, that is already the
smallest possible answer; if it passes, bisection proceeds from it.
"""

from __future__ import annotations

import math
from collections.abc import Iterator

FLOAT_EPSILON = 1e-10


def integers(value: int, target: int = 0) -> Iterator[int]:
    """Shrink an integer towards ``target`` by binary search.

    Every candidate lies between the last passing bound and ``value``;
    the sequence ends once the two are adjacent, after O(log |value -
    target|) pulls.
    """
    if value == target:
        return
    yield target
    good = target
    while True:
        mid = good + (value - good) // 2
        if mid == good or mid == value:
            return
        yield mid
        good = mid


def floats(value: float, target: float = 0.0, epsilon: float = FLOAT_EPSILON) -> Iterator[float]:
    """Shrink a float towards ``target`` by bisection.

    Stops when the bounds are closer than ``epsilon`` or when float
    precision stops the midpoint from moving. Non-finite values only get
    the target offered.
    """
    if value == target:
        return
    yield target
    if not math.isfinite(value):
        return
    good = target
    while abs(value - good) >= epsilon:
        mid = good + (value - good) / 2.0
        if mid == good or mid == value:
            return
        yield mid
        good = mid


def booleans(value: bool) -> Iterator[bool]:
    """True shrinks to False; False is already minimal."""
    if value:
        yield False
