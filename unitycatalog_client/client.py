"""
Unity Catalog REST API Client

Shared HTTP client for all Unity Catalog resource clients. Owns the base URL
and the pooled requests.Session, serializes request bodies and turns HTTP
responses into decoded payloads or package errors.
"""
import json
import logging
from typing import Any, Dict, Mapping, Optional, Type, TypeVar
from urllib.parse import urlsplit

import requests

from .config import resolve_settings
from .errors import (
    ClientBuildError,
    JSONParsingError,
    MalformedURLError,
    RequestError,
    RequestErrorWithResponse,
    RequestFormattingError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

JSON_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


def _parse_base_url(base_url: str) -> str:
    """Validate a base URL and return it without a trailing slash."""
    if not isinstance(base_url, str) or not base_url.strip():
        raise MalformedURLError(f"Malformed URL: {base_url!r}")
    try:
        parts = urlsplit(base_url.strip())
        # .port raises ValueError for a non-numeric or out-of-range port
        has_host = bool(parts.hostname) and (parts.port is None or parts.port > 0)
    except ValueError as e:
        raise MalformedURLError(f"Malformed URL: {base_url!r}", cause=e) from e
    if parts.scheme not in ("http", "https") or not has_host:
        raise MalformedURLError(f"Malformed URL: {base_url!r}")
    return base_url.strip().rstrip("/")


class UnityCatalogClient:
    """Client for making requests to the Unity Catalog REST API"""

    def __init__(
        self,
        base_url: str,
        insecure_skip_verify: bool = False,
        *,
        token: Optional[str] = None,
        headers: Optional[Mapping[str, str]] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize Unity Catalog client.

        Args:
            base_url: Server URL (e.g., "http://localhost:8080")
            insecure_skip_verify: Disable TLS certificate validation. Only
                meant for local or test servers with self-signed certs.
            token: Optional bearer token sent with every request
            headers: Extra default headers sent with every request
            session: Pre-built requests.Session to use instead of a new one.
                It is not modified, and close() leaves it open.
            timeout: Per-request timeout in seconds (default: no timeout)

        Raises:
            MalformedURLError: If base_url is not an http(s) URL
            ClientBuildError: If the default headers are invalid
        """
        self._base_url = _parse_base_url(base_url)
        self._timeout = timeout
        self._insecure_skip_verify = bool(insecure_skip_verify)

        default_headers: Dict[str, str] = dict(headers or {})
        if token:
            default_headers["Authorization"] = f"Bearer {token}"

        try:
            for header in default_headers.items():
                requests.utils.check_header_validity(header)
        except requests.exceptions.InvalidHeader as e:
            raise ClientBuildError("Error building client", cause=e) from e
        self._headers = default_headers

        self._owns_session = session is None
        self._session = requests.Session() if session is None else session

    @classmethod
    def from_config(
        cls,
        host: Optional[str] = None,
        token: Optional[str] = None,
        profile: Optional[str] = None,
        insecure_skip_verify: Optional[bool] = None,
        **kwargs: Any,
    ) -> "UnityCatalogClient":
        """
        Build a client from explicit values, env vars or a config profile.

        See unitycatalog_client.config.resolve_settings for the priority order.
        """
        settings = resolve_settings(
            host=host,
            token=token,
            profile=profile,
            insecure_skip_verify=insecure_skip_verify,
        )
        return cls(
            settings.host,
            settings.insecure_skip_verify,
            token=settings.token,
            **kwargs,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def verify(self) -> bool:
        """Whether TLS certificates are validated."""
        return not self._insecure_skip_verify

    def url(self, path: str) -> str:
        """Join an API path such as "/api/2.1/unity-catalog/catalogs" onto the base URL."""
        if not path.startswith("/"):
            path = f"/{path}"
        return f"{self._base_url}{path}"

    def close(self) -> None:
        """Release pooled connections. An injected session is left open."""
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> "UnityCatalogClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __repr__(self):
        return f"UnityCatalogClient(base_url={self._base_url!r}, verify={self.verify})"

    def get(self, url: str, params: Optional[Dict[str, Any]] = None, response_type: Optional[Type[T]] = None):
        """Make GET request. See request() for arguments and errors."""
        return self.request("GET", url, params=params, response_type=response_type)

    def post(self, url: str, body: Any = None, params: Optional[Dict[str, Any]] = None,
             response_type: Optional[Type[T]] = None):
        """Make POST request. See request() for arguments and errors."""
        return self.request("POST", url, body=body, params=params, response_type=response_type)

    def patch(self, url: str, body: Any = None, params: Optional[Dict[str, Any]] = None,
              response_type: Optional[Type[T]] = None):
        """Make PATCH request. See request() for arguments and errors."""
        return self.request("PATCH", url, body=body, params=params, response_type=response_type)

    def delete(self, url: str, params: Optional[Dict[str, Any]] = None, response_type: Optional[Type[T]] = None):
        """Make DELETE request. See request() for arguments and errors."""
        return self.request("DELETE", url, params=params, response_type=response_type)

    def request(
        self,
        method: str,
        url: str,
        body: Any = None,
        params: Optional[Dict[str, Any]] = None,
        response_type: Optional[Type[T]] = None,
    ):
        """
        Send one request and decode the response.

        Args:
            method: HTTP verb
            url: Absolute URL, usually built with url()
            body: Optional JSON body; objects with to_dict() are converted first
            params: Query parameters; None values are left out
            response_type: Class with a from_dict() constructor used to decode
                the body. The raw decoded JSON is returned when omitted.

        Returns:
            Decoded response

        Raises:
            RequestFormattingError: If the body cannot be serialized (no request is sent)
            RequestError: On connection, timeout or TLS failures
            RequestErrorWithResponse: If the status is not 2xx
            JSONParsingError: If a 2xx body cannot be decoded
        """
        data = None
        headers = dict(self._headers)
        if body is not None:
            data = self._serialize(body)
            headers.update(JSON_HEADERS)
            logger.debug(f"Body is {data}")

        query = {k: v for k, v in (params or {}).items() if v is not None}
        logger.debug(f"{method} {url} params={query}")

        try:
            response = self._session.request(
                method,
                url,
                params=query or None,
                data=data,
                headers=headers or None,
                timeout=self._timeout,
                # explicit False is not replaced by REQUESTS_CA_BUNDLE
                verify=False if self._insecure_skip_verify else None,
            )
        except requests.RequestException as e:
            raise RequestError(f"Request error: {method} {url}", cause=e) from e

        if not 200 <= response.status_code < 300:
            logger.debug(f"{method} {url} returned {response.status_code}")
            raise RequestErrorWithResponse(response.status_code, response.text, method, url)

        return self._decode(response, response_type)

    @staticmethod
    def _serialize(body: Any) -> str:
        if hasattr(body, "to_dict"):
            body = body.to_dict()
        try:
            return json.dumps(body, allow_nan=False)
        except (TypeError, ValueError) as e:
            raise RequestFormattingError("Error formatting request body", cause=e) from e

    @staticmethod
    def _decode(response: requests.Response, response_type: Optional[Type[T]]):
        try:
            payload = response.json()
            if response_type is None:
                return payload
            return response_type.from_dict(payload)
        except (TypeError, ValueError) as e:
            raise JSONParsingError("JSON Parsing error", cause=e) from e
