# src/minish/core/config.py
"""Settings for property runs, loaded from the environment or a YAML file.

Test suites usually want to change run parameters without editing code:
crank ``num_runs`` up on a nightly job, or pin ``seed`` to reproduce a
failure reported by CI. RunSettings is the validated form of those
knobs; RunOptions.from_settings() turns it into per-run options.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from minish.contracts.options import (
    DEFAULT_MAX_CHOICES,
    DEFAULT_MAX_SHRINK_ATTEMPTS,
    DEFAULT_NUM_RUNS,
)

ENVVAR_PREFIX = "MINISH"


class RunSettings(BaseModel):
    """Run configuration from environment/YAML.

    Field constraints mirror RunOptions.__post_init__ so invalid values are
    rejected at load time with a pydantic ValidationError.
    """

    model_config = {"frozen": True, "extra": "forbid"}

    num_runs: int = Field(default=DEFAULT_NUM_RUNS, ge=0, description="Iterations per property")
    seed: int | None = Field(default=None, ge=0, description="Fixed seed (default: wall clock)")
    max_shrink_attempts: int = Field(
        default=DEFAULT_MAX_SHRINK_ATTEMPTS,
        ge=0,
        description="Total shrink candidates tried per failure",
    )
    verbose: bool = Field(default=False, description="Print every shrink step")
    max_choices: int = Field(default=DEFAULT_MAX_CHOICES, gt=0, description="Choice budget per attempt")


def load_settings(settings_file: Path | None = None) -> RunSettings:
    """Load run settings with environment variable overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (MINISH_*) - highest priority
    2. Settings file (YAML/TOML), if given
    3. Defaults from the Pydantic schema - lowest priority

    Args:
        settings_file: Optional path to a settings file.

    Returns:
        Validated RunSettings instance

    Raises:
        ValidationError: If settings fail Pydantic validation
        FileNotFoundError: If settings_file is given but doesn't exist
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if settings_file is not None and not settings_file.exists():
        raise FileNotFoundError(f"Settings file not found: {settings_file}")

    dynaconf_settings = Dynaconf(
        envvar_prefix=ENVVAR_PREFIX,
        settings_files=[str(settings_file)] if settings_file is not None else [],
        environments=False,
        load_dotenv=False,
    )

    # Dynaconf returns uppercase keys; convert to lowercase for Pydantic
    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw: dict[str, Any] = {k.lower(): v for k, v in dynaconf_settings.as_dict().items() if k not in internal_keys}

    return RunSettings(**raw)
