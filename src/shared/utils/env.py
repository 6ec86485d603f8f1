"""Environment variable loading utilities.

Loads ``.env`` files into the process environment and exposes small
accessors used by the configuration loader.
"""

from __future__ import annotations
import os
from pathlib import Path
from typing import List, Optional
import logging

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


def _find_env_files(start: Path) -> List[Path]:
    """Collect ``.env`` files from the filesystem root down to ``start``."""
    env_paths = []
    for parent in reversed(list(start.parents)):
        candidate = parent / ".env"
        if candidate.exists():
            env_paths.append(candidate)
    candidate = start / ".env"
    if candidate.exists():
        env_paths.append(candidate)
    return env_paths


def load_env(env_file: Optional[str] = None, override: bool = False) -> List[Path]:
    """Load environment variables from .env file.

    Args:
        env_file: Path to .env file. If None, searches for .env in current
                 directory and parent directories.
        override: Whether to override existing environment variables.

    Returns:
        The .env files that were loaded, outermost first.
    """
    if env_file:
        env_path = Path(env_file)
        env_paths = [env_path] if env_path.exists() else []
    else:
        env_paths = _find_env_files(Path.cwd())

    if not env_paths:
        logger.debug("No .env file found, using system environment")
        return []

    loaded = []
    for path in env_paths:
        if path in loaded:
            continue
        load_dotenv(path, override=override)
        loaded.append(path)
        logger.debug(f"Loaded environment from {path}")
    return loaded


def get_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """Get environment variable with optional default.

    Empty values count as unset.
    """
    value = os.getenv(key)
    if not value:
        return default
    return value
