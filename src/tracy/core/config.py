# src/tracy/core/config.py
"""
Configuration schema and loading for tracy.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.
"""

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from tracy.contracts.enums import SelfCyclePolicy

_ENV_PREFIX = "TRACY"


class LockerSettings(BaseModel):
    """How the evidence locker expands flat records into case files.

    Example YAML:
        locker:
          self_cycle_policy: skip_edge
          diagnostic_path_depth: 3
    """

    model_config = {"frozen": True, "extra": "forbid"}

    self_cycle_policy: SelfCyclePolicy = Field(
        default=SelfCyclePolicy.SKIP_EDGE,
        description="skip_edge drops only a self-referencing lead; truncate stops expanding that module",
    )
    diagnostic_path_depth: int = Field(
        default=3,
        ge=0,
        description="Trailing path segments kept when reporting circular dependencies",
    )


class LoggingSettings(BaseModel):
    """Logging output configuration."""

    model_config = {"frozen": True, "extra": "forbid"}

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    json_output: bool = Field(default=False, description="Emit JSON log lines instead of console output")

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        """Accept lowercase level names from YAML and environment variables."""
        if isinstance(v, str):
            return v.upper()
        return v


class TracySettings(BaseModel):
    """Top-level tracy configuration."""

    model_config = {"frozen": True, "extra": "forbid"}

    locker: LockerSettings = Field(default_factory=LockerSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


def load_settings(config_path: Path | None = None) -> TracySettings:
    """Load settings from an optional YAML file with environment variable overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (TRACY_*) - highest priority
    2. Config file (settings.yaml)
    3. Defaults from Pydantic schema - lowest priority

    Environment variable format: TRACY_LOCKER__SELF_CYCLE_POLICY for nested keys.
    Environment variables apply with or without a config file.

    Args:
        config_path: Path to YAML configuration file, or None for
            environment variables and defaults only

    Returns:
        Validated TracySettings instance

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If config file doesn't exist
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if config_path is not None and not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix=_ENV_PREFIX,
        settings_files=[str(config_path)] if config_path is not None else [],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    # Dynaconf returns uppercase keys; convert to lowercase for Pydantic
    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config = _lower_keys({k: v for k, v in dynaconf_settings.as_dict().items() if k not in internal_keys})

    return TracySettings(**raw_config)


def _lower_keys(value: Any) -> Any:
    """Recursively lowercase mapping keys (env overrides arrive uppercased)."""
    if isinstance(value, dict):
        return {str(k).lower(): _lower_keys(v) for k, v in value.items()}
    return value
