"""Shared utility functions."""

from .logging import setup_logging
from .env import load_env, get_env
from .config_validator import ConfigurationError, MissingConfigurationError, parse_bool

__all__ = [
    "setup_logging",
    "load_env",
    "get_env",
    "ConfigurationError",
    "MissingConfigurationError",
    "parse_bool",
]
