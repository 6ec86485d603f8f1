"""
Configuration loader for the Factiva API helpers.

Builds a :class:`ConfigStore` from a YAML document and environment overrides.
The store is passed explicitly to the request dispatcher and to proxy
resolution; nothing in this package reads configuration from globals.

Example ``config/default.yaml``::

    userKey: change-for-user-key
    proxy:
      use: false
      protocol: http
      host: 127.0.0.1
      port: 8080
      auth:
        username: ""
        password: ""
"""

from __future__ import annotations

import copy
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
import logging

from src.shared.utils.config_validator import (
    ConfigurationError,
    MissingConfigurationError,
    parse_bool,
)
from src.shared.utils.env import get_env, load_env

logger = logging.getLogger(__name__)

CONFIG_FILE_ENV = "FACTIVA_CONFIG_FILE"
DEFAULT_CONFIG_FILE = Path("config") / "default.yaml"

# Environment variable -> (config path, is boolean)
ENV_OVERRIDES = {
    "FACTIVA_USER_KEY": (("userKey",), False),
    "FACTIVA_PROXY_USE": (("proxy", "use"), True),
    "FACTIVA_PROXY_PROTOCOL": (("proxy", "protocol"), False),
    "FACTIVA_PROXY_HOST": (("proxy", "host"), False),
    "FACTIVA_PROXY_PORT": (("proxy", "port"), False),
    "FACTIVA_PROXY_USERNAME": (("proxy", "auth", "username"), False),
    "FACTIVA_PROXY_PASSWORD": (("proxy", "auth", "password"), False),
}


class ConfigStore:
    """Read-only view over nested configuration values.

    Keys may be dotted (``"proxy.auth.username"``) to reach nested mappings.
    """

    def __init__(self, values: Optional[Mapping] = None):
        self._values: Dict[str, Any] = copy.deepcopy(dict(values or {}))

    def get(self, key: str) -> Any:
        """Return the value stored under ``key`` or None when absent."""
        node: Any = self._values
        for part in key.split("."):
            if not isinstance(node, Mapping) or part not in node:
                return None
            node = node[part]
        return copy.deepcopy(node)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def as_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(self._values)

    def __repr__(self) -> str:
        return f"ConfigStore(keys={sorted(self._values)})"


def load_env_variable(config_key: str, config: ConfigStore) -> Any:
    """
    Find a configuration value.

    Args:
        config_key: Name of the value to find
        config: Store to look in

    Returns:
        The stored value

    Raises:
        MissingConfigurationError: If the key is absent or its value is falsy
    """
    value = config.get(config_key)
    if not value:
        raise MissingConfigurationError(config_key)
    return value


def load_generic_env_variable(config_key: str, default: Any, config: ConfigStore) -> Any:
    """Like :func:`load_env_variable`, returning ``default`` when the key is missing."""
    try:
        return load_env_variable(config_key, config)
    except MissingConfigurationError:
        return default


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        logger.debug(f"Config file {path} not found, starting from empty configuration")
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in config file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping at the top level")

    logger.debug(f"Loaded configuration from {path}")
    return data


def _set_path(target: Dict[str, Any], path: tuple, value: Any) -> None:
    node = target
    for part in path[:-1]:
        child = node.get(part)
        if not isinstance(child, dict):
            child = {}
            node[part] = child
        node = child
    node[path[-1]] = value


def apply_env_overrides(values: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay ``FACTIVA_*`` environment variables onto ``values`` in place."""
    for env_name, (path, is_bool) in ENV_OVERRIDES.items():
        raw = get_env(env_name)
        if raw is None:
            continue
        value = parse_bool(env_name, raw) if is_bool else raw
        _set_path(values, path, value)
        logger.debug(f"Configuration {'.'.join(path)} overridden from {env_name}")
    return values


def load_config(
    config_file: Optional[str] = None,
    env_file: Optional[str] = None,
) -> ConfigStore:
    """
    Build the configuration store.

    Order: ``.env`` is loaded into the environment, the YAML file is read
    (argument, then ``FACTIVA_CONFIG_FILE``, then ``config/default.yaml``),
    then ``FACTIVA_*`` environment variables override individual keys.

    Raises:
        ConfigurationError: On a malformed YAML document or boolean override
    """
    load_env(env_file)

    path = Path(config_file or os.getenv(CONFIG_FILE_ENV) or DEFAULT_CONFIG_FILE)
    values = _read_yaml(path)
    return ConfigStore(apply_env_overrides(values))
