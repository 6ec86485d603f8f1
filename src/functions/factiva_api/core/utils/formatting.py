"""
Field formatting and validation helpers for extracted article records.

Records are plain dicts as decoded from extraction files. Timestamp fields
arrive as ISO-8601 text and multivalue fields as delimited strings; the
functions here convert them in place and return the same dict.
"""

from __future__ import annotations

import re
import time
from collections.abc import Mapping
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import logging

from dateutil import parser as date_parser

from ..constants import (
    DELIVERY_DATETIME_FIELD,
    MULTIVALUE_FIELDS_COMMA,
    MULTIVALUE_FIELDS_SPACE,
    TIMESTAMP_FIELDS,
)
from ..errors import InvalidArgumentError, OptionNotAllowedError

logger = logging.getLogger(__name__)

MASK_CHAR = "#"
_MASKABLE = re.compile(r"[a-z\d]", re.IGNORECASE)

# Kind name -> accepted Python types
TYPE_KINDS = {
    "array": (list, tuple),
    "string": (str,),
    "number": (int, float),
    "boolean": (bool,),
}


def mask_word(word: str, keep_suffix_length: int = 4) -> str:
    """
    Mask a string, leaving only its tail readable.

    Example:
        >>> mask_word("abcdefghijkl")
        '########ijkl'
    """
    if len(word) <= 4:
        return word
    split_at = max(len(word) - keep_suffix_length, 0)
    return _MASKABLE.sub(MASK_CHAR, word[:split_at]) + word[split_at:]


def validate_option(value: Any, allowed_values: Sequence[Any]) -> Any:
    """
    Check that ``value`` is one of ``allowed_values``.

    Text values are compared with surrounding whitespace removed; the value is
    returned unchanged.

    Raises:
        OptionNotAllowedError: When the value is not allowed
    """
    candidate = value.strip() if isinstance(value, str) else value
    if candidate not in allowed_values:
        allowed = ",".join(str(option) for option in allowed_values)
        raise OptionNotAllowedError(
            f"Option value {value} is not within the allowed options: {allowed}"
        )
    return value


def validate_type(value: Any, expected_kind: str, message: str) -> Any:
    """
    Check ``value`` against a kind name.

    Kinds: ``array`` (list or tuple), ``object`` (mapping), ``string``,
    ``number`` (int or float, not bool), ``boolean`` and ``function``.

    Raises:
        InvalidArgumentError: With ``message`` when the value does not match,
            or naming the kind when it is unknown
    """
    if expected_kind == "object":
        matches = isinstance(value, Mapping)
    elif expected_kind == "function":
        matches = callable(value)
    elif expected_kind in TYPE_KINDS:
        matches = isinstance(value, TYPE_KINDS[expected_kind])
        if expected_kind == "number" and isinstance(value, bool):
            matches = False
    else:
        raise InvalidArgumentError(f"Type not identified: {expected_kind}")

    if not matches:
        raise InvalidArgumentError(message)
    return value


def iso_to_epoch(value: str) -> float:
    """Convert ISO-8601 text to epoch seconds. Naive values are taken as UTC."""
    parsed = date_parser.isoparse(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.timestamp()


def format_timestamps(record: Dict[str, Any]) -> Dict[str, Any]:
    """Convert known timestamp fields to epoch seconds and stamp delivery time."""
    for field_name in TIMESTAMP_FIELDS:
        value = record.get(field_name)
        if isinstance(value, str) and value:
            record[field_name] = iso_to_epoch(value)
    record[DELIVERY_DATETIME_FIELD] = time.time()
    return record


def multivalue_to_list(value: Optional[str] = None, separator: str = ",") -> List[str]:
    """Split a delimited string, dropping empty tokens."""
    if not value:
        return []
    return [token for token in value.split(separator) if token != ""]


def format_multivalues(record: Dict[str, Any]) -> Dict[str, Any]:
    """Split known multivalue fields. Fields that are already lists are left as they are."""
    for field_name in MULTIVALUE_FIELDS_SPACE:
        if field_name in record and not isinstance(record[field_name], list):
            record[field_name] = multivalue_to_list(record[field_name], " ")
    for field_name in MULTIVALUE_FIELDS_COMMA:
        if field_name in record and not isinstance(record[field_name], list):
            record[field_name] = multivalue_to_list(record[field_name])
    return record


def create_path_if_not_exist(path: Union[str, Path]) -> Path:
    """Create ``path`` (and parents) as a directory when it does not exist."""
    directory = Path(path)
    if not directory.exists():
        directory.mkdir(parents=True, exist_ok=True)
        logger.debug(f"Created directory {directory}")
    return directory


def get_current_date() -> str:
    """Today's local date as ``YYYYMMDD``."""
    return datetime.now().strftime("%Y%m%d")


def utc_timestamp_suffix() -> str:
    """Current UTC time as ISO-8601 with milliseconds and a ``Z`` suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def sleep(ms: float) -> None:
    time.sleep(ms / 1000)
