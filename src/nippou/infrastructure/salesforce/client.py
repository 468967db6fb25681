"""
Low-level Salesforce REST API client.

Builds ``{instance}/services/data/{version}{path}`` endpoints, attaches the
bearer token, converts error responses into SalesforceAPIError and retries
transient failures (429, 502, 503, 504 and network errors) with
exponential backoff.
"""

import json
import logging
import time
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import quote

import requests

from nippou.constants import HttpStatus, SalesforceConstants
from nippou.exceptions.config import MissingConfigurationError
from nippou.exceptions.storage import SalesforceAPIError
from nippou.shared.resilience.retry import RetryManager, RetryPolicy

from ..http.client import HttpClient
from .auth import TokenProvider

logger = logging.getLogger(__name__)


def parse_api_error(status_code: int, body: str) -> SalesforceAPIError:
    """Convert an error response body into a SalesforceAPIError.

    Salesforce usually answers with a JSON array of error objects; some
    endpoints answer with a single object. Anything else becomes the message.
    """
    try:
        parsed = json.loads(body) if body else None
    except ValueError:
        parsed = None

    if isinstance(parsed, list) and parsed and isinstance(parsed[0], dict):
        first = parsed[0]
        return SalesforceAPIError(
            status_code,
            first.get("message", ""),
            first.get("errorCode") or None,
            first.get("fields") or [],
        )

    if isinstance(parsed, dict) and parsed.get("message"):
        return SalesforceAPIError(
            status_code,
            parsed["message"],
            parsed.get("errorCode") or None,
            parsed.get("fields") or [],
        )

    return SalesforceAPIError(status_code, body or "")


def is_transient_failure(error: BaseException) -> bool:
    if isinstance(error, SalesforceAPIError):
        return error.is_retryable()
    return isinstance(error, (requests.ConnectionError, requests.Timeout))


class SalesforceClient:
    """Salesforce REST client.

    Args:
        token_provider: Source of bearer tokens
        instance_url: Org base URL; falls back to the URL the token
            provider learned during authentication
        api_version: REST API version such as ``v59.0``
        http_client: Optional preconfigured HttpClient
        timeout: Request timeout in seconds
        max_retries: Retries for transient failures
        retry_base_delay: Delay before the first retry in seconds
        retry_jitter: Randomize retry delays by up to 10%
        sleep: Sleep function used between retries
    """

    def __init__(
        self,
        token_provider: TokenProvider,
        instance_url: Optional[str] = None,
        api_version: str = SalesforceConstants.DEFAULT_API_VERSION,
        http_client: Optional[HttpClient] = None,
        timeout: int = SalesforceConstants.REQUEST_TIMEOUT_SECONDS,
        max_retries: int = SalesforceConstants.MAX_RETRIES,
        retry_base_delay: float = SalesforceConstants.RETRY_BASE_DELAY_SECONDS,
        retry_jitter: bool = False,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.token_provider = token_provider
        self._instance_url = instance_url.rstrip("/") if instance_url else None
        self.api_version = api_version
        # Retrying happens here, not in the transport
        self.http = http_client or HttpClient(
            self._instance_url or SalesforceConstants.DEFAULT_LOGIN_URL,
            timeout=timeout,
            max_retries=0,
        )
        self.retry_manager = RetryManager(
            RetryPolicy.from_retries(
                max_retries,
                retry_base_delay,
                jitter=retry_jitter,
                max_delay=SalesforceConstants.RETRY_MAX_DELAY_SECONDS,
                retry_if=is_transient_failure,
            ),
            sleep=sleep,
        )

    @classmethod
    def from_config(cls, config, token_provider: TokenProvider) -> "SalesforceClient":
        """Create a client from a SalesforceConfig."""
        return cls(
            token_provider=token_provider,
            instance_url=config.instance_url,
            api_version=config.api_version,
            timeout=config.timeout,
            max_retries=config.max_retries,
            retry_base_delay=config.retry_base_delay,
            retry_jitter=config.retry_jitter,
        )

    @property
    def instance_url(self) -> str:
        if self._instance_url:
            return self._instance_url
        if self.token_provider.instance_url is None:
            # Authenticating reveals the instance URL
            self.token_provider.get_token()
        if not self.token_provider.instance_url:
            raise MissingConfigurationError("salesforce.instance_url")
        return self.token_provider.instance_url.rstrip("/")

    def api_endpoint(self, path: str) -> str:
        return f"{self.instance_url}/services/data/{self.api_version}{path}"

    # ------------------------------------------------------------------
    # Core HTTP methods
    # ------------------------------------------------------------------

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self._request("GET", self.api_endpoint(path), params=params)

    def patch(self, path: str, body: Any) -> Any:
        return self._request("PATCH", self.api_endpoint(path), body=body)

    def delete(self, path: str) -> None:
        self._request("DELETE", self.api_endpoint(path))

    def _request(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        body: Any = None,
    ) -> Any:
        return self.retry_manager.execute(self._send_with_reauth, method, url, params, body)

    def _send_with_reauth(self, method: str, url: str, params, body) -> Any:
        try:
            return self._send(method, url, params, body)
        except SalesforceAPIError as e:
            if not e.is_unauthorized():
                raise
            logger.info("Salesforce session rejected, refreshing access token")
            self.token_provider.invalidate()
            return self._send(method, url, params, body)

    def _send(self, method: str, url: str, params, body) -> Any:
        token = self.token_provider.get_token()
        response = self.http.request(
            method,
            url,
            params=params,
            json=body,
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/json",
            },
        )

        if response.status_code >= HttpStatus.BAD_REQUEST:
            error = parse_api_error(response.status_code, response.text)
            logger.debug(f"{method} {url} failed: {error.message}")
            raise error

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise SalesforceAPIError(response.status_code, f"failed to parse response: {e}") from e

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def query(self, soql: str) -> Dict[str, Any]:
        """Run a SOQL query and return the first page of results."""
        return self.get("/query", params={"q": soql}) or {"totalSize": 0, "done": True, "records": []}

    def query_all(self, soql: str) -> List[Dict[str, Any]]:
        """Run a SOQL query and follow ``nextRecordsUrl`` until done."""
        result = self.query(soql)
        records = list(result.get("records", []))

        while not result.get("done", True) and result.get("nextRecordsUrl"):
            next_url = f"{self.instance_url}{result['nextRecordsUrl']}"
            result = self._request("GET", next_url) or {}
            records.extend(result.get("records", []))

        return records

    # ------------------------------------------------------------------
    # SObject operations
    # ------------------------------------------------------------------

    def upsert_sobject(
        self,
        object_name: str,
        external_id_field: str,
        external_id: str,
        record: Dict[str, Any],
    ) -> Optional[Dict[str, Any]]:
        """Insert or update by external id.

        Returns the creation result for inserts and None for updates.
        """
        path = f"/sobjects/{object_name}/{external_id_field}/{quote(external_id, safe='')}"
        return self.patch(path, record)

    def delete_sobject_by_external_id(
        self, object_name: str, external_id_field: str, external_id: str
    ) -> None:
        self.delete(f"/sobjects/{object_name}/{external_id_field}/{quote(external_id, safe='')}")

    def close(self) -> None:
        self.http.close()
