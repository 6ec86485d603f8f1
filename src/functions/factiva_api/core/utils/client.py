"""
HTTP request dispatch for the Factiva snapshot, extraction and taxonomy APIs.

Sends one request per call through a ``requests`` session, either returning
the response or streaming its body to a file. Proxy settings come from the
configuration store and API error responses are translated into
:class:`~..errors.HttpError` subclasses. There are no retries: every failure
is raised to the caller.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Dict, Optional, Union

import requests
import logging

from ..config.loader import ConfigStore, load_env_variable
from ..constants import (
    API_EXTRACTION_FILE_FORMATS,
    REQUEST_DEFAULT_TYPE,
    REQUEST_STREAM_TYPE,
)
from ..contracts import ProxyAuth, ProxyConfiguration, RequestOptions
from ..errors import (
    HttpError,
    InvalidApiKeyError,
    InvalidArgumentError,
    InvalidPayloadError,
    MissingConfigurationError,
    MissingHeadersError,
    StreamError,
)
from .formatting import create_path_if_not_exist, utc_timestamp_suffix, validate_option

logger = logging.getLogger(__name__)

STREAM_CHUNK_SIZE = 64 * 1024


def get_proxy_configuration(config: ConfigStore) -> Optional[ProxyConfiguration]:
    """
    Return the proxy configuration when proxy usage is enabled.

    Reads the ``proxy`` block (``use``, ``protocol``, ``host``, ``port``,
    ``auth``). ``auth`` is attached only when both ``username`` and
    ``password`` are set.

    Returns:
        ProxyConfiguration, or None when the block is missing or ``use`` is falsy
    """
    try:
        block = load_env_variable("proxy", config)
    except MissingConfigurationError:
        return None

    if not isinstance(block, Mapping) or not block.get("use", False):
        return None

    auth = block.get("auth") or {}
    proxy_auth = None
    if isinstance(auth, Mapping) and auth.get("username") and auth.get("password"):
        proxy_auth = ProxyAuth(username=str(auth["username"]), password=str(auth["password"]))

    return ProxyConfiguration(
        protocol=block.get("protocol", ""),
        host=block.get("host", ""),
        port=block.get("port", ""),
        auth=proxy_auth,
    )


def _error_body(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def handle_error(response: requests.Response) -> None:
    """
    Raise the error matching an API failure response.

    Raises:
        InvalidApiKeyError: On 403
        HttpError: Carrying the response status and any vendor error details
    """
    status = response.status_code
    reason = response.reason

    if status == 403:
        raise InvalidApiKeyError(reason)

    body = _error_body(response)
    errors = body.get("errors") if isinstance(body, Mapping) else None
    if isinstance(errors, list):
        details = ",".join(
            f"{error.get('title')}: {error.get('detail')}"
            for error in errors
            if isinstance(error, Mapping)
        )
        raise HttpError(status, f"Unexpected API Error with message: {reason}: {details}", reason)

    raise HttpError(status, f"Unexpected API Error with message: {reason}.", reason)


def _prepare_payload(payload: Any) -> Any:
    """Return the JSON value to send for a POST payload."""
    if isinstance(payload, (Mapping, list)):
        return payload
    if isinstance(payload, str):
        try:
            return json.loads(payload)
        except ValueError as e:
            raise InvalidPayloadError(f"Unexpected payload value: {e}") from e
    raise InvalidPayloadError("Unexpected payload value")


class RequestDispatcher:
    """
    Sends requests to the Factiva API.

    Proxy settings are resolved from ``config`` on every request, so changes to
    the store between calls take effect without rebuilding the dispatcher.
    """

    def __init__(
        self,
        config: ConfigStore,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize dispatcher.

        Args:
            config: Configuration store (proxy block, user key)
            session: Session to send through; one is created and owned if None
            timeout: Request timeout in seconds, None to wait indefinitely
        """
        self.config = config
        self.timeout = timeout
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()

    def send_request(self, options: RequestOptions) -> Optional[requests.Response]:
        """
        Send a single request.

        Returns:
            The response in ``json`` mode; None in ``stream`` mode once the
            body has been written to ``options.file_name``

        Raises:
            InvalidPayloadError: POST payload that is not a JSON value or JSON text
            HttpError: API error response
            StreamError: Streamed body could not be written
            requests.RequestException: Transport failure with no response
        """
        data = None
        # An empty string payload means no body
        if options.payload is not None and options.payload != "":
            if options.method == "POST":
                data = _prepare_payload(options.payload)
            else:
                logger.debug(f"Ignoring payload for {options.method} request")

        proxy = get_proxy_configuration(self.config)

        kwargs: Dict[str, Any] = {"stream": options.is_stream, "timeout": self.timeout}
        if options.qs_params:
            kwargs["params"] = dict(options.qs_params)
        if data is not None:
            kwargs["json"] = data
        if options.headers:
            kwargs["headers"] = dict(options.headers)
        if proxy is not None:
            kwargs["proxies"] = proxy.to_requests_proxies()

        logger.debug(
            f"{options.method} {options.endpoint_url} "
            f"(response_type={options.response_type}, proxy={'on' if proxy else 'off'})"
        )

        try:
            response = self.session.request(options.method, options.endpoint_url, **kwargs)
        except requests.exceptions.RequestException as e:
            logger.error(f"Request error for {options.method} {options.endpoint_url}: {e}")
            raise

        if not response.ok:
            try:
                handle_error(response)
            except HttpError as e:
                logger.error(f"API error for {options.method} {options.endpoint_url}: {e}")
                raise
            finally:
                response.close()

        if options.is_stream:
            self._write_stream(response, options.file_name)
            return None
        return response

    def _write_stream(self, response: requests.Response, file_name: str) -> None:
        try:
            with open(file_name, "wb") as f:
                for chunk in response.iter_content(chunk_size=STREAM_CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)
        except (requests.exceptions.RequestException, OSError) as e:
            logger.error(f"Failed writing response body to {file_name}: {e}")
            raise StreamError(f"Failed writing response body to {file_name}") from e
        finally:
            response.close()
        logger.debug(f"Response body written to {file_name}")

    def api_send_request(
        self,
        method: str,
        endpoint_url: str,
        headers: Optional[Dict[str, str]] = None,
        qs_params: Optional[Dict[str, Any]] = None,
        payload: Any = None,
        response_type: str = REQUEST_DEFAULT_TYPE,
        file_name: Optional[str] = None,
    ) -> Optional[requests.Response]:
        """
        Send a request after checking headers and method.

        Raises:
            MissingHeadersError: When ``headers`` is missing or empty
            InvalidArgumentError: When ``headers`` is not a mapping
            UnsupportedMethodError: For methods other than GET/POST/DELETE
        """
        if not headers:
            raise MissingHeadersError()
        if not isinstance(headers, Mapping):
            raise InvalidArgumentError("Unexpected headers value")

        options = RequestOptions(
            method=method,
            endpoint_url=endpoint_url,
            headers=dict(headers),
            qs_params=qs_params,
            payload=payload,
            response_type=response_type,
            file_name=file_name,
        )
        return self.send_request(options)

    def download_file(
        self,
        file_url: str,
        headers: Optional[Dict[str, str]],
        file_name: str,
        file_extension: str,
        to_save_path: Union[str, Path],
        add_timestamp: bool = False,
    ) -> str:
        """
        Download a file into ``to_save_path``.

        Args:
            file_url: URL of the file to be downloaded
            headers: Auth headers
            file_name: Local file name, without extension
            file_extension: One of ``API_EXTRACTION_FILE_FORMATS``
            to_save_path: Directory to store the file in, created if missing
            add_timestamp: Append the current UTC time to the file name

        Returns:
            Path of the downloaded file

        Raises:
            OptionNotAllowedError: For an extension outside the allowed formats
        """
        validate_option(file_extension, API_EXTRACTION_FILE_FORMATS)
        directory = create_path_if_not_exist(to_save_path)
        if add_timestamp:
            file_name = f"{file_name}-{utc_timestamp_suffix()}"
        local_file_name = str(directory / f"{file_name}.{file_extension.strip()}")

        self.send_request(
            RequestOptions(
                method="GET",
                endpoint_url=file_url,
                headers=headers,
                response_type=REQUEST_STREAM_TYPE,
                file_name=local_file_name,
            )
        )
        logger.info(f"Downloaded {file_url} to {local_file_name}")
        return local_file_name

    def close(self) -> None:
        """Close the session if this dispatcher created it."""
        if self._owns_session:
            self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def api_send_request(config: ConfigStore, method: str, endpoint_url: str, **kwargs: Any):
    """One-off :meth:`RequestDispatcher.api_send_request` with a fresh session."""
    with RequestDispatcher(config) as dispatcher:
        return dispatcher.api_send_request(method, endpoint_url, **kwargs)
