# src/minish/core/__init__.py
"""Core infrastructure: choice ledger, ownership, seeds, configuration, logging."""

from minish.core.config import RunSettings, load_settings
from minish.core.ledger import ChoiceLedger
from minish.core.logging import configure_logging, get_logger
from minish.core.ownership import Owner
from minish.core.seed import (
    DEFAULT_SEED_SOURCE,
    FixedSeedSource,
    SeedSource,
    SystemSeedSource,
)

__all__ = [
    "DEFAULT_SEED_SOURCE",
    "ChoiceLedger",
    "FixedSeedSource",
    "Owner",
    "RunSettings",
    "SeedSource",
    "SystemSeedSource",
    "configure_logging",
    "get_logger",
    "load_settings",
]
