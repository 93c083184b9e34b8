"""Shared contracts: error taxonomy, run options and run outcomes.

This package is a LEAF MODULE with no outbound dependencies to
core/gen/shrink/engine. RunSettings lives in minish.core.config because
it pulls in pydantic and dynaconf.
"""

from minish.contracts.errors import (
    GenError,
    InvalidChoice,
    MinishError,
    OutOfMemory,
    Overrun,
    OwnershipError,
    PropertyFalsified,
)
from minish.contracts.options import RunOptions
from minish.contracts.results import FailureReport, RunResult

__all__ = [
    "FailureReport",
    "GenError",
    "InvalidChoice",
    "MinishError",
    "OutOfMemory",
    "Overrun",
    "OwnershipError",
    "PropertyFalsified",
    "RunOptions",
    "RunResult",
]
