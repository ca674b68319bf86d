"""Configuration management for propcheck."""

from propcheck.config.parameters import Parameters, VerbosityLevel, generate_seed
from propcheck.config.settings import RunnerSettings, load_settings

__all__ = [
    "Parameters",
    "VerbosityLevel",
    "generate_seed",
    "RunnerSettings",
    "load_settings",
]
