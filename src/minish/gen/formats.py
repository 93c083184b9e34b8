# src/minish/gen/formats.py
"""Fixed-format string and timestamp generators."""

from __future__ import annotations

from typing import TYPE_CHECKING

from minish.gen.generator import Generator
from minish.gen.numbers import int_range

if TYPE_CHECKING:
    from minish.core.ledger import ChoiceLedger

HEX_DIGITS = "0123456789abcdef"
UUID_SECTIONS = (8, 4, 4, 4, 12)
UUID_VERSION_POS = 14
UUID_VARIANT_POS = 19
TIMESTAMP_MAX = 2**31 - 1  # 2038-01-19


def uuids() -> Generator[str]:
    """Random version 4 UUIDs as 36-character lowercase strings.

    Format ``xxxxxxxx-xxxx-4xxx-yxxx-xxxxxxxxxxxx``: the version nibble is
    always ``4`` and the variant nibble ``y`` is one of ``8 9 a b``. Not
    shrinkable; every UUID is equally simple.
    """

    def produce(ledger: ChoiceLedger) -> str:
        chars: list[str] = []
        for section_len in UUID_SECTIONS:
            if chars:
                chars.append("-")
            for _ in range(section_len):
                pos = len(chars)
                if pos == UUID_VERSION_POS:
                    chars.append("4")
                elif pos == UUID_VARIANT_POS:
                    chars.append(HEX_DIGITS[8 + ledger.choice(3)])
                else:
                    chars.append(HEX_DIGITS[ledger.choice(15)])
        return "".join(chars)

    return Generator(produce, None, None, "uuids()")


def timestamp_range(min_value: int, max_value: int) -> Generator[int]:
    """Unix timestamps (seconds) in ``[min_value, max_value]``.

    Shrinks towards the in-range value closest to the epoch.
    """
    generator = int_range(min_value, max_value)
    return Generator(
        generator.produce_fn,
        generator.shrink_fn,
        None,
        f"timestamp_range({min_value}, {max_value})",
    )


def timestamps() -> Generator[int]:
    """Unix timestamps from the epoch up to 2**31 - 1."""
    return timestamp_range(0, TIMESTAMP_MAX)
