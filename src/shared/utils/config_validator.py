"""
Configuration validation utilities.

Shared exception types for missing or malformed configuration, plus parsing
of boolean flags supplied as text (environment variables, CLI options).
"""

from typing import Optional


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""
    pass


class MissingConfigurationError(ConfigurationError, LookupError):
    """Raised when a configuration key is absent or empty."""

    def __init__(self, key: str, description: Optional[str] = None):
        self.key = key
        desc_msg = f" ({description})" if description else ""
        super().__init__(f"Environment Variable {key}{desc_msg} not found!")


TRUE_VALUES = ("true", "yes", "1")
FALSE_VALUES = ("false", "no", "0")


def parse_bool(name: str, value: str) -> bool:
    """
    Parse a boolean flag given as text.

    Accepts: true, false, yes, no, 1, 0 (case-insensitive)

    Args:
        name: Setting name, used in the error message
        value: Raw text value

    Returns:
        The parsed boolean

    Raises:
        ConfigurationError: If the value is not a recognised boolean
    """
    value_lower = value.strip().lower()

    if value_lower in TRUE_VALUES:
        return True
    elif value_lower in FALSE_VALUES:
        return False
    else:
        raise ConfigurationError(
            f"Invalid boolean value for {name}: '{value}'\n"
            f"Expected one of: true, false, yes, no, 1, 0"
        )
