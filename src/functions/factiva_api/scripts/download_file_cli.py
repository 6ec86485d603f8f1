"""
Command-line interface for downloading Factiva extraction files.

Reads the user key and proxy settings from configuration, streams the file
to a local directory and prints the resulting path.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parents[4]))

import logging

import requests

from src.functions.factiva_api.core.config import load_config, load_env_variable
from src.functions.factiva_api.core.constants import API_EXTRACTION_FILE_FORMATS, USER_KEY_HEADER
from src.functions.factiva_api.core.errors import FactivaApiError, OptionNotAllowedError
from src.functions.factiva_api.core.utils import RequestDispatcher, mask_word
from src.shared.utils.config_validator import ConfigurationError
from src.shared.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def setup_cli_parser() -> argparse.ArgumentParser:
    """Create argument parser for the download CLI."""
    parser = argparse.ArgumentParser(
        description="Download a Factiva extraction file to a local directory."
    )

    parser.add_argument("url", help="URL of the file to download")
    parser.add_argument("name", help="Local file name, without extension")

    parser.add_argument(
        "--extension",
        default="csv",
        help=f"File extension, one of: {', '.join(API_EXTRACTION_FILE_FORMATS)} (default: csv)",
    )

    parser.add_argument(
        "--output-dir",
        default=".",
        help="Directory to save the file in, created if missing (default: .)",
    )

    parser.add_argument(
        "--timestamp",
        action="store_true",
        help="Append the current UTC time to the file name",
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to YAML configuration file (optional)",
    )

    parser.add_argument(
        "--env-file",
        type=str,
        help="Path to .env file (optional)",
    )

    parser.add_argument(
        "--timeout",
        type=float,
        help="HTTP timeout in seconds (default: none)",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging (DEBUG level)",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="INFO",
        help="Set logging level (default: INFO)",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point. Returns the process exit code."""
    parser = setup_cli_parser()
    args = parser.parse_args(argv)

    setup_logging(level="DEBUG" if args.verbose else args.log_level)

    try:
        config = load_config(config_file=args.config, env_file=args.env_file)
        user_key = load_env_variable("userKey", config)
        logger.info(f"Using user key {mask_word(str(user_key))}")

        with RequestDispatcher(config, timeout=args.timeout) as dispatcher:
            path = dispatcher.download_file(
                args.url,
                {USER_KEY_HEADER: str(user_key)},
                args.name,
                args.extension,
                args.output_dir,
                add_timestamp=args.timestamp,
            )

    except (ConfigurationError, OptionNotAllowedError) as e:
        logger.error(f"Configuration error: {e}")
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    except (FactivaApiError, requests.exceptions.RequestException) as e:
        logger.error(f"Download failed: {e}")
        print(f"Download failed: {e}", file=sys.stderr)
        return 1

    print(path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
