# src/minish/core/ownership.py
"""Owner: explicit per-value release bookkeeping.

Most Python values need no release at all; the garbage collector handles
them. Generators whose values hold external resources (handles, temp
files, pooled objects) adopt those values into an Owner together with the
function that releases them. Releasing is then keyed on the value object
itself, not on which generator happens to be asked, so combinators that
mix branches with different release behaviour stay correct.

Adoptions stack: a combinator may adopt a value that an inner generator
already adopted. ``release`` always runs the most recent adoption for the
object, and that releaser is free to release the inner adoption in turn.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from minish.contracts.errors import OwnershipError

Releaser = Callable[["Owner", Any], None]


@dataclass(slots=True)
class _Adoption:
    value: Any
    releaser: Releaser


class Owner:
    """Registry of produced values that still need releasing."""

    def __init__(self) -> None:
        # Adoption serial -> adoption, in adoption order
        self._adoptions: dict[int, _Adoption] = {}
        # id(value) -> serials of its outstanding adoptions, newest last.
        # Each adoption holds its value, so the id cannot be reused meanwhile.
        self._by_id: dict[int, list[int]] = {}
        self._next_serial = 0
        self._released = 0

    @property
    def live(self) -> int:
        """Adoptions not yet released."""
        return len(self._adoptions)

    @property
    def released(self) -> int:
        """Total releases performed over this owner's lifetime."""
        return self._released

    def adopt(self, value: Any, releaser: Releaser) -> Any:
        """Record that ``value`` must eventually be released by ``releaser``.

        Returns the value unchanged so produce functions can end with
        ``return ledger.owner.adopt(value, ...)``.
        """
        serial = self._next_serial
        self._next_serial += 1
        self._adoptions[serial] = _Adoption(value, releaser)
        self._by_id.setdefault(id(value), []).append(serial)
        return value

    def owns(self, value: Any) -> bool:
        """True if this exact object has an outstanding adoption."""
        return id(value) in self._by_id

    def release(self, value: Any) -> None:
        """Run the most recent releaser registered for this exact object.

        Raises:
            OwnershipError: The value was never adopted, or was already
                released.
        """
        serials = self._by_id.get(id(value))
        if serials is None:
            raise OwnershipError(f"Release of a value that is not owned (double release?): {value!r}")
        serial = serials.pop()
        if not serials:
            del self._by_id[id(value)]
        adoption = self._adoptions.pop(serial)
        self._released += 1
        adoption.releaser(self, adoption.value)

    def release_all(self) -> None:
        """Release every outstanding value, newest first.

        Used on error paths so nothing leaks when a run aborts.
        """
        while self._adoptions:
            newest = next(reversed(self._adoptions))
            self.release(self._adoptions[newest].value)

    def __repr__(self) -> str:
        return f"Owner(live={self.live}, released={self._released})"
