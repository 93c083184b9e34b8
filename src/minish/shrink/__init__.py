"""Shrinking engine: lazy search procedures yielding simpler candidates.

Pull contract shared by every shrinker: the caller asks for another
candidate only if the previous one passed the property. When a candidate
still fails, the caller closes the sequence and starts a new one rooted
at that candidate.
"""

from minish.shrink.numbers import booleans, floats, integers
from minish.shrink.sequences import sequences
from minish.shrink.structures import components, filtered, optionals

__all__ = [
    "booleans",
    "components",
    "filtered",
    "floats",
    "integers",
    "optionals",
    "sequences",
]
