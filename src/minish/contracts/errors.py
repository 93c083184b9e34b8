# src/minish/contracts/errors.py
"""Error taxonomy for generation, ownership and property failures.

Generation errors (GenError and subclasses) are fatal to the current run
and are never retried. Property errors are opaque to the engine: whatever
the property raised is re-raised unchanged after shrinking.
"""

from __future__ import annotations


class MinishError(Exception):
    """Base class for all errors raised by the engine itself."""


# =============================================================================
# Generation Errors
# =============================================================================


class GenError(MinishError):
    """A generator could not produce a value.

    Distinct from a property failure: a GenError means the input domain
    itself is broken (bad configuration, exhausted budget), not that the
    code under test misbehaved.
    """


class Overrun(GenError):
    """A generation attempt exceeded its budget.

    Raised when a ledger runs out of choices for the current attempt, or
    when a filter exhausts its rejection budget.

    Attributes:
        limit: The budget that was exceeded.
    """

    def __init__(self, message: str, *, limit: int) -> None:
        self.limit = limit
        super().__init__(message)


class InvalidChoice(GenError):
    """Malformed generator configuration.

    Empty choice sets, empty or all-zero weight lists, negative bounds and
    inverted ranges all end up here.
    """


class OutOfMemory(GenError):
    """MemoryError raised while producing a value."""


# =============================================================================
# Ownership Errors
# =============================================================================


class OwnershipError(MinishError):
    """A value was released twice, or released without ever being adopted."""


# =============================================================================
# Property Failures
# =============================================================================


class PropertyFalsified(AssertionError):
    """A property returned False instead of raising.

    Properties signal failure by raising. Returning ``False`` explicitly is
    treated the same way, surfaced as this error so there is always an
    exception to re-raise after shrinking.
    """

    def __init__(self, value_repr: str) -> None:
        self.value_repr = value_repr
        super().__init__(f"Property returned False for {value_repr}")
