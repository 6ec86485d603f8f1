"""Value shapes passed between callers and the request dispatcher."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Dict, Optional
from urllib.parse import quote

from ..constants import (
    ALLOWED_METHODS,
    DEFAULT_STREAM_FILE,
    REQUEST_DEFAULT_TYPE,
    REQUEST_STREAM_TYPE,
    RESPONSE_TYPES,
)
from ..errors import (
    OptionNotAllowedError,
    UnexpectedQueryParametersError,
    UnsupportedMethodError,
)


@dataclass
class RequestOptions:
    """A single request to send.

    ``qs_params`` is only valid with GET and ``payload`` is only sent with POST.
    ``file_name`` is the destination when ``response_type`` is ``stream``.
    """

    method: str
    endpoint_url: str
    headers: Optional[Dict[str, str]] = None
    qs_params: Optional[Dict[str, Any]] = None
    payload: Any = None
    response_type: str = REQUEST_DEFAULT_TYPE
    file_name: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.method, str) or self.method.upper() not in ALLOWED_METHODS:
            raise UnsupportedMethodError(self.method)
        self.method = self.method.upper()

        if self.response_type not in RESPONSE_TYPES:
            raise OptionNotAllowedError(
                f"Option value {self.response_type} is not within the allowed options: "
                f"{','.join(RESPONSE_TYPES)}"
            )

        if self.qs_params is not None:
            if not isinstance(self.qs_params, Mapping):
                raise UnexpectedQueryParametersError("Unexpected qsParams value")
            if self.method != "GET":
                raise UnexpectedQueryParametersError(
                    f"Query parameters are only supported for GET requests, got {self.method}"
                )

        if self.is_stream and not self.file_name:
            self.file_name = DEFAULT_STREAM_FILE

    @property
    def is_stream(self) -> bool:
        return self.response_type == REQUEST_STREAM_TYPE


@dataclass(frozen=True)
class ProxyAuth:
    username: str
    password: str


@dataclass(frozen=True)
class ProxyConfiguration:
    """Outgoing proxy. ``auth`` is None when the proxy takes no credentials."""

    protocol: str
    host: str
    port: Any
    auth: Optional[ProxyAuth] = None

    def to_url(self) -> str:
        protocol = self.protocol or "http"
        credentials = ""
        if self.auth is not None:
            credentials = (
                f"{quote(self.auth.username, safe='')}:{quote(self.auth.password, safe='')}@"
            )
        port = f":{self.port}" if self.port not in (None, "") else ""
        return f"{protocol}://{credentials}{self.host}{port}"

    def to_requests_proxies(self) -> Dict[str, str]:
        """Mapping accepted by ``requests`` as ``proxies=``."""
        url = self.to_url()
        return {"http": url, "https": url}


__all__ = ["RequestOptions", "ProxyAuth", "ProxyConfiguration"]
