# src/minish/gen/numbers.py
"""Integer, float and boolean generators."""

from __future__ import annotations

import math
from collections.abc import Iterator
from typing import TYPE_CHECKING

from minish import shrink
from minish.contracts.errors import InvalidChoice
from minish.core.ownership import Owner
from minish.gen.generator import Generator

if TYPE_CHECKING:
    from minish.core.ledger import ChoiceLedger

MANTISSA_MAX = 2**32 - 1
EXPONENT_SPAN = 100
EXPONENT_BIAS = 50


def _nearest_to_zero(min_value: float, max_value: float) -> float:
    if min_value <= 0 <= max_value:
        return 0
    return min_value if min_value > 0 else max_value


# =============================================================================
# Integers
# =============================================================================


def integers(bits: int = 64, *, signed: bool = True) -> Generator[int]:
    """Any integer representable in ``bits`` bits.

    Signed integers draw over the full unsigned width and reinterpret the
    bit pattern as two's complement, so every value from ``-2**(bits-1)``
    to ``2**(bits-1) - 1`` is equally likely, the minimum included.
    Shrinks towards 0.
    """
    if bits < 1:
        raise InvalidChoice(f"integers() needs at least 1 bit, got {bits}")
    span = 2**bits - 1
    sign_bit = 2 ** (bits - 1)

    def produce(ledger: ChoiceLedger) -> int:
        raw = ledger.choice(span)
        if signed and raw >= sign_bit:
            return raw - (span + 1)
        return raw

    def shrink_int(owner: Owner, value: int) -> Iterator[int]:
        return shrink.integers(value)

    kind = "i" if signed else "u"
    return Generator(produce, shrink_int, None, f"integers({kind}{bits})")


def int_range(min_value: int, max_value: int) -> Generator[int]:
    """Integers in ``[min_value, max_value]`` inclusive.

    Shrinks towards the in-range value closest to 0, so candidates never
    leave the range.

    Raises:
        InvalidChoice: ``min_value > max_value``.
    """
    if min_value > max_value:
        raise InvalidChoice(f"int_range() min {min_value} > max {max_value}")
    target = int(_nearest_to_zero(min_value, max_value))

    def produce(ledger: ChoiceLedger) -> int:
        return ledger.choice_in_range(min_value, max_value)

    def shrink_int(owner: Owner, value: int) -> Iterator[int]:
        return shrink.integers(value, target)

    return Generator(produce, shrink_int, None, f"int_range({min_value}, {max_value})")


def booleans() -> Generator[bool]:
    """True or False from one binary choice. Shrinks towards False."""

    def produce(ledger: ChoiceLedger) -> bool:
        return ledger.choice(1) == 1

    def shrink_bool(owner: Owner, value: bool) -> Iterator[bool]:
        return shrink.booleans(value)

    return Generator(produce, shrink_bool, None, "booleans()")


# =============================================================================
# Floats
# =============================================================================


def floats() -> Generator[float]:
    """Finite floats spread over a wide dynamic range.

    Built from an independently drawn mantissa, decimal exponent and sign:
    ``sign * mantissa / (2**32 - 1) * 10 ** (exponent - 50)``, which covers
    values from about 1e-60 to 1e50 instead of clustering near zero.
    Shrinks towards 0.0.
    """

    def produce(ledger: ChoiceLedger) -> float:
        mantissa = ledger.choice(MANTISSA_MAX)
        exponent = ledger.choice(EXPONENT_SPAN)
        sign = -1.0 if ledger.choice(1) == 0 else 1.0
        return sign * (mantissa / MANTISSA_MAX) * math.pow(10.0, exponent - EXPONENT_BIAS)

    def shrink_float(owner: Owner, value: float) -> Iterator[float]:
        return shrink.floats(value)

    return Generator(produce, shrink_float, None, "floats()")


def float_range(min_value: float, max_value: float) -> Generator[float]:
    """Floats in ``[min_value, max_value]``, from one normalised mantissa draw.

    Raises:
        InvalidChoice: Non-finite bounds or ``min_value > max_value``.
    """
    if not (math.isfinite(min_value) and math.isfinite(max_value)):
        raise InvalidChoice(f"float_range() bounds must be finite: [{min_value}, {max_value}]")
    if min_value > max_value:
        raise InvalidChoice(f"float_range() min {min_value} > max {max_value}")
    target = float(_nearest_to_zero(min_value, max_value))

    def produce(ledger: ChoiceLedger) -> float:
        normalised = ledger.choice(MANTISSA_MAX) / MANTISSA_MAX
        # max_value - min_value can overflow to inf near the float limits
        value = min_value * (1.0 - normalised) + max_value * normalised
        return max(min_value, min(max_value, value))

    def shrink_float(owner: Owner, value: float) -> Iterator[float]:
        return shrink.floats(value, target)

    return Generator(produce, shrink_float, None, f"float_range({min_value}, {max_value})")
