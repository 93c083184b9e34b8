# src/minish/gen/text.py
"""Character and string generators over fixed character sets."""

from __future__ import annotations

import string as string_module
from collections.abc import Iterator
from enum import Enum
from typing import TYPE_CHECKING

from minish import shrink
from minish.contracts.errors import InvalidChoice
from minish.core.ownership import Owner
from minish.gen.generator import Generator

if TYPE_CHECKING:
    from minish.core.ledger import ChoiceLedger

PRINTABLE_MIN = 32  # space
PRINTABLE_MAX = 126  # tilde
DEFAULT_MAX_LEN = 100


class CharacterSet(str, Enum):
    """Named character tables for string generation."""

    ASCII = "ascii"
    ALPHANUMERIC = "alphanumeric"
    ALPHA = "alpha"
    NUMERIC = "numeric"
    PRINTABLE = "printable"
    CUSTOM = "custom"

    def chars(self, custom_chars: str | None = None) -> str:
        """The characters in this set. CUSTOM requires ``custom_chars``."""
        if self is CharacterSet.CUSTOM:
            if not custom_chars:
                raise InvalidChoice("CharacterSet.CUSTOM requires non-empty custom_chars")
            return custom_chars
        return _TABLES[self]


_TABLES: dict[CharacterSet, str] = {
    CharacterSet.ASCII: string_module.ascii_letters + string_module.digits + "!@#$%^&*()_+-=[]{}|;:',.<>?/~` ",
    CharacterSet.ALPHANUMERIC: string_module.ascii_lowercase + string_module.ascii_uppercase + string_module.digits,
    CharacterSet.ALPHA: string_module.ascii_lowercase + string_module.ascii_uppercase,
    CharacterSet.NUMERIC: string_module.digits,
    CharacterSet.PRINTABLE: "".join(chr(c) for c in range(PRINTABLE_MIN, PRINTABLE_MAX + 1)),
}


def characters() -> Generator[str]:
    """A single printable ASCII character (32..126). Shrinks towards space."""

    def produce(ledger: ChoiceLedger) -> str:
        return chr(ledger.choice_in_range(PRINTABLE_MIN, PRINTABLE_MAX))

    def shrink_char(owner: Owner, value: str) -> Iterator[str]:
        return (chr(code) for code in shrink.integers(ord(value), PRINTABLE_MIN))

    return Generator(produce, shrink_char, None, "characters()")


def char_from(charset: str) -> Generator[str]:
    """A single character from ``charset``. Shrinks towards its first character.

    Raises:
        InvalidChoice: ``charset`` is empty.
    """
    if not charset:
        raise InvalidChoice("char_from() requires a non-empty charset")

    def produce(ledger: ChoiceLedger) -> str:
        return charset[ledger.choice(len(charset) - 1)]

    def shrink_char(owner: Owner, value: str) -> Iterator[str]:
        return (charset[idx] for idx in shrink.integers(charset.index(value)))

    return Generator(produce, shrink_char, None, f"char_from({charset!r})")


def strings(
    min_len: int = 0,
    max_len: int = DEFAULT_MAX_LEN,
    charset: CharacterSet = CharacterSet.ALPHANUMERIC,
    custom_chars: str | None = None,
) -> Generator[str]:
    """Strings of ``min_len``..``max_len`` characters drawn from ``charset``.

    One choice picks the length, then one choice per character.
    Shrinks by removing characters (see minish.shrink.sequences).

    Raises:
        InvalidChoice: Negative or inverted length bounds, or an empty
            character set.
    """
    if min_len < 0 or min_len > max_len:
        raise InvalidChoice(f"strings() needs 0 <= min_len <= max_len, got [{min_len}, {max_len}]")
    chars = charset.chars(custom_chars)
    top = len(chars) - 1

    def produce(ledger: ChoiceLedger) -> str:
        length = ledger.choice_in_range(min_len, max_len)
        return "".join(chars[ledger.choice(top)] for _ in range(length))

    def shrink_str(owner: Owner, value: str) -> Iterator[str]:
        return (s for s in shrink.sequences(value) if len(s) >= min_len)

    return Generator(produce, shrink_str, None, f"strings({charset.value}, {min_len}..{max_len})")


def non_empty_strings(
    max_len: int = DEFAULT_MAX_LEN,
    charset: CharacterSet = CharacterSet.ALPHANUMERIC,
    custom_chars: str | None = None,
) -> Generator[str]:
    """strings() with at least one character."""
    return strings(1, max(1, max_len), charset, custom_chars)
