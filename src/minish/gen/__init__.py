"""Generators and combinators.

Basic usage:
    from minish import gen

    ints = gen.int_range(0, 100)
    names = gen.strings(1, 20, gen.CharacterSet.ALPHA)
    pairs = gen.tuples(ints, names)
    maybe = gen.optionals(gen.floats())
"""

from minish.gen.collections import (
    arrays,
    dictionaries,
    fixed_dicts,
    lists,
    non_empty_lists,
    optionals,
    records,
    tuples,
)
from minish.gen.combinators import (
    constant,
    dependent,
    enum_values,
    filter_values,
    flat_map,
    frequency,
    managed,
    map_values,
    one_of,
    sampled_from,
    sized,
)
from minish.gen.formats import timestamp_range, timestamps, uuids
from minish.gen.generator import Generator, release_adopted
from minish.gen.numbers import booleans, float_range, floats, int_range, integers
from minish.gen.text import CharacterSet, char_from, characters, non_empty_strings, strings

__all__ = [
    "CharacterSet",
    "Generator",
    "arrays",
    "booleans",
    "char_from",
    "characters",
    "constant",
    "dependent",
    "dictionaries",
    "enum_values",
    "filter_values",
    "fixed_dicts",
    "flat_map",
    "float_range",
    "floats",
    "frequency",
    "int_range",
    "integers",
    "lists",
    "managed",
    "map_values",
    "non_empty_lists",
    "non_empty_strings",
    "one_of",
    "optionals",
    "records",
    "release_adopted",
    "sampled_from",
    "sized",
    "strings",
    "timestamp_range",
    "timestamps",
    "tuples",
    "uuids",
]
