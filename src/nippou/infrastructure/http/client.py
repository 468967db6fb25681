"""
HTTP client abstraction.

Wraps a requests.Session with base URL handling, timeouts, transport-level
retries and sanitized request logging so adapters deal only with their API.
"""

import logging
from typing import Any, Dict, Optional
from urllib.parse import urljoin

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from nippou.core.security.sanitizer import SensitiveDataSanitizer


class HttpClient:
    """HTTP client bound to a base URL."""

    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: int = 30,
        max_retries: int = 3,
        backoff_factor: float = 0.3,
        default_headers: Optional[Dict[str, str]] = None,
    ):
        """Initialize HTTP client with configuration.

        Args:
            base_url: Base URL for all requests
            session: Optional existing session to use
            timeout: Request timeout in seconds
            max_retries: Transport-level retries; 0 leaves retrying to the caller
            backoff_factor: Backoff factor for transport-level retries
            default_headers: Headers sent with every request
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.default_headers = dict(default_headers or {})
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

        self.session = session or self._create_session(max_retries, backoff_factor)

    def _create_session(self, max_retries: int, backoff_factor: float) -> requests.Session:
        session = requests.Session()

        retry_strategy = Retry(
            total=max_retries,
            backoff_factor=backoff_factor,
            status_forcelist=[429, 500, 502, 503, 504] if max_retries > 0 else [],
            allowed_methods=["HEAD", "GET", "OPTIONS"],
            # Hand the final response back instead of raising
            raise_on_status=False,
        )

        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        return session

    def request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        data: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
        **kwargs,
    ) -> requests.Response:
        """Perform a request.

        Args:
            method: HTTP method
            endpoint: API endpoint (relative to base_url) or absolute URL
            params: Query parameters
            data: Form data
            json: JSON body
            headers: Additional headers
            **kwargs: Additional arguments passed to requests

        Returns:
            Response object
        """
        url = self._build_url(endpoint)
        merged_headers = {**self.default_headers, **(headers or {})}
        timeout = kwargs.pop("timeout", self.timeout)

        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(
                f"{method.upper()} {SensitiveDataSanitizer.sanitize_url(url)} "
                f"headers={SensitiveDataSanitizer.sanitize_headers(merged_headers)}"
            )

        response = self.session.request(
            method.upper(),
            url,
            params=params,
            data=data,
            json=json,
            headers=merged_headers or None,
            timeout=timeout,
            **kwargs,
        )

        self._log_response(response)
        return response

    def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None, **kwargs) -> requests.Response:
        return self.request("GET", endpoint, params=params, **kwargs)

    def post(
        self,
        endpoint: str,
        data: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None,
        **kwargs,
    ) -> requests.Response:
        return self.request("POST", endpoint, data=data, json=json, **kwargs)

    def patch(self, endpoint: str, json: Optional[Any] = None, **kwargs) -> requests.Response:
        return self.request("PATCH", endpoint, json=json, **kwargs)

    def delete(self, endpoint: str, **kwargs) -> requests.Response:
        return self.request("DELETE", endpoint, **kwargs)

    def _build_url(self, endpoint: str) -> str:
        """Build full URL from endpoint."""
        if endpoint.startswith(("http://", "https://")):
            return endpoint
        return urljoin(self.base_url + "/", endpoint.lstrip("/"))

    def _log_response(self, response: requests.Response) -> None:
        self.logger.debug(f"Response: {response.status_code} - {len(response.content)} bytes")

    def close(self) -> None:
        """Close the HTTP session."""
        if self.session:
            self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
        return False
