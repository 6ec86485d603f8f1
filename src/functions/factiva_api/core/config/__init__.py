"""Configuration access for the Factiva API helpers."""

from .loader import (
    ConfigStore,
    load_config,
    load_env_variable,
    load_generic_env_variable,
)

__all__ = ["ConfigStore", "load_config", "load_env_variable", "load_generic_env_variable"]
