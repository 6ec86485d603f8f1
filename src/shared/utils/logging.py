"""Console logging for the Factiva API helper entry points.

Library modules never configure handlers. Scripts call :func:`setup_logging`
once, before building a dispatcher.
"""

from __future__ import annotations
import logging
import os
import sys
from typing import Optional

NOISY_LOGGERS = ("urllib3", "requests")


def setup_logging(
    level: Optional[str] = None,
    format_string: Optional[str] = None,
    include_timestamp: bool = True
) -> None:
    """Send log records from the Factiva API helpers to stdout.

    Used by the download CLI. Dispatcher modules only call
    ``logging.getLogger(__name__)``; this decides where those records go.

    Args:
        level: Level name, case-insensitive. Falls back to ``LOG_LEVEL`` and
               then INFO; unknown names also resolve to INFO.
        format_string: Replaces the default ``[LEVEL] logger: message`` layout.
        include_timestamp: Prefix the default layout with the record time.
    """
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")
    level = level.upper()

    if format_string is None:
        if include_timestamp:
            format_string = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
        else:
            format_string = "[%(levelname)s] %(name)s: %(message)s"

    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format=format_string,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True
    )

    # requests/urllib3 log every connection at DEBUG, which would bury
    # dispatcher output when the CLI runs with --verbose
    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)
