"""HTTP and formatting utilities for the Factiva API."""

from .client import RequestDispatcher, api_send_request, get_proxy_configuration, handle_error
from .formatting import (
    create_path_if_not_exist,
    format_multivalues,
    format_timestamps,
    get_current_date,
    iso_to_epoch,
    mask_word,
    multivalue_to_list,
    sleep,
    validate_option,
    validate_type,
)

__all__ = [
    "RequestDispatcher",
    "api_send_request",
    "get_proxy_configuration",
    "handle_error",
    "create_path_if_not_exist",
    "format_multivalues",
    "format_timestamps",
    "get_current_date",
    "iso_to_epoch",
    "mask_word",
    "multivalue_to_list",
    "sleep",
    "validate_option",
    "validate_type",
]
