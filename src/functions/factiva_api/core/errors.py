"""Exception types raised by the Factiva API helpers."""

from __future__ import annotations

from typing import Optional

from src.shared.utils.config_validator import MissingConfigurationError

INVALID_API_KEY_MESSAGE = "Factiva API-Key does not exist or inactive."


class FactivaApiError(Exception):
    """Base class for all helper-layer failures."""


class InvalidArgumentError(FactivaApiError, TypeError):
    """A parameter has the wrong type or shape."""


class UnsupportedMethodError(FactivaApiError, ValueError):
    """HTTP method outside GET/POST/DELETE."""

    def __init__(self, method: object):
        self.method = method
        super().__init__(f"Unexpected method value: {method!r}")


class MissingHeadersError(FactivaApiError, ValueError):
    """Requests to the API must carry authentication headers."""

    def __init__(self, message: str = "Headers for Factiva requests cannot be empty"):
        super().__init__(message)


class UnexpectedQueryParametersError(FactivaApiError, ValueError):
    """Query parameters given with a non-GET method or in a non-mapping shape."""


class InvalidPayloadError(FactivaApiError, ValueError):
    """POST payload that is neither a JSON value nor JSON text."""


class OptionNotAllowedError(FactivaApiError, ValueError):
    """Value outside a fixed allow-list."""


class StreamError(FactivaApiError):
    """Writing a streamed response body to disk failed."""


class HttpError(FactivaApiError):
    """Error response returned by the API."""

    def __init__(self, status_code: int, message: str, reason: Optional[str] = None):
        self.status_code = status_code
        self.message = message
        self.reason = reason
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.status_code}: {self.message}"


class InvalidApiKeyError(HttpError):
    """403 from the API: the user key is unknown or disabled."""

    def __init__(self, reason: Optional[str] = None):
        super().__init__(403, INVALID_API_KEY_MESSAGE, reason)


__all__ = [
    "FactivaApiError",
    "MissingConfigurationError",
    "InvalidArgumentError",
    "UnsupportedMethodError",
    "MissingHeadersError",
    "UnexpectedQueryParametersError",
    "InvalidPayloadError",
    "OptionNotAllowedError",
    "StreamError",
    "HttpError",
    "InvalidApiKeyError",
]
