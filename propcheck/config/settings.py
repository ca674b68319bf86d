"""Configuration settings and loading."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from propcheck.errors import ConfigurationError

ENV_PREFIX = "PROPCHECK_"


class RunnerSettings(BaseSettings):
    """Default run options for propcheck, read from YAML and environment."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    num_runs: int = 100
    seed: int | None = None
    path: str | None = None
    max_skips_per_run: int = 100
    timeout: int | None = None
    interrupt_after_time_limit: int | None = None
    skip_all_after_time_limit: int | None = None
    mark_interrupt_as_failure: bool = False
    end_on_failure: bool = False
    unbiased: bool = False
    verbose: int = Field(default=0, ge=0, le=2)
    max_shrink_candidates: int = 1_000_000
    log_level: str = "INFO"

    @field_validator("verbose", mode="before")
    @classmethod
    def validate_verbose(cls, v: Any) -> Any:
        if isinstance(v, bool):
            return int(v)
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = str(v).upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Invalid log level: {v}")
        return level

    def to_parameters_dict(self) -> dict[str, Any]:
        """Fields understood by Parameters."""
        data = self.model_dump(exclude={"log_level"})
        return {k: v for k, v in data.items() if v is not None}


def load_settings(config_path: str | Path | None = None) -> RunnerSettings:
    """Load settings from file and environment.

    Priority: env vars > config file > defaults
    """
    config_data: dict[str, Any] = {}

    if config_path is not None:
        config_path = Path(config_path)
        if config_path.exists():
            with open(config_path) as f:
                config_data = yaml.safe_load(f) or {}
            if not isinstance(config_data, dict):
                raise ConfigurationError(f"Config file {config_path} must contain a mapping")

    config_data.update(_get_env_overrides())

    try:
        return RunnerSettings(**config_data)
    except ValueError as e:
        raise ConfigurationError(f"Invalid settings: {e}", cause=e) from e


def _get_env_overrides() -> dict[str, Any]:
    """Get configuration overrides from PROPCHECK_* environment variables."""
    overrides: dict[str, Any] = {}
    for name in RunnerSettings.model_fields:
        value = os.environ.get(f"{ENV_PREFIX}{name.upper()}")
        if value is not None:
            overrides[name] = value
    return overrides
