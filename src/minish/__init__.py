"""
Minish: a small property-based testing engine.

Properties are checked against values built from a recorded ledger of
bounded random choices. Failing inputs are shrunk to a minimal
counterexample and reported with the seed that reproduces them.
"""

from minish import gen, shrink
from minish.contracts import (
    FailureReport,
    GenError,
    InvalidChoice,
    MinishError,
    OutOfMemory,
    Overrun,
    OwnershipError,
    PropertyFalsified,
    RunOptions,
    RunResult,
)
from minish.core import (
    ChoiceLedger,
    FixedSeedSource,
    Owner,
    RunSettings,
    SystemSeedSource,
    configure_logging,
    load_settings,
)
from minish.engine import ConsoleReporter, NullReporter, Reporter, check, replay
from minish.gen import Generator

__version__ = "0.1.0"

__all__ = [
    "ChoiceLedger",
    "ConsoleReporter",
    "FailureReport",
    "FixedSeedSource",
    "GenError",
    "Generator",
    "InvalidChoice",
    "MinishError",
    "NullReporter",
    "OutOfMemory",
    "Overrun",
    "Owner",
    "OwnershipError",
    "PropertyFalsified",
    "Reporter",
    "RunOptions",
    "RunResult",
    "RunSettings",
    "SystemSeedSource",
    "check",
    "configure_logging",
    "gen",
    "load_settings",
    "replay",
    "shrink",
]
