"""
Access token providers for the Salesforce REST API.
"""

import logging
import threading
from typing import Optional, Protocol, runtime_checkable

import requests

from nippou.constants import HttpStatus, SalesforceConstants
from nippou.core.security.sanitizer import SensitiveDataSanitizer
from nippou.exceptions.config import MissingConfigurationError
from nippou.exceptions.storage import AuthenticationError

from ..http.client import HttpClient

logger = logging.getLogger(__name__)


@runtime_checkable
class TokenProvider(Protocol):
    """Source of bearer tokens. Implementations handle caching and refresh."""

    def get_token(self) -> str:
        ...

    def invalidate(self) -> None:
        """Forget a cached token after the API rejected it."""
        ...

    @property
    def instance_url(self) -> Optional[str]:
        """Instance URL learned during authentication, if any."""
        ...


class StaticTokenProvider:
    """Provider for a pre-issued access token."""

    def __init__(self, access_token: str, instance_url: Optional[str] = None):
        if not access_token:
            raise AuthenticationError("static token", "access token is empty")
        self._access_token = access_token
        self._instance_url = instance_url

    def get_token(self) -> str:
        return self._access_token

    def invalidate(self) -> None:
        # A static token cannot be refreshed
        logger.warning("Salesforce rejected the configured access token")

    @property
    def instance_url(self) -> Optional[str]:
        return self._instance_url


class OAuthPasswordTokenProvider:
    """OAuth 2.0 username-password flow against the Salesforce login host.

    The token is fetched on first use and cached until ``invalidate`` is
    called. Thread safe.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        username: str,
        password: str,
        login_url: str = SalesforceConstants.DEFAULT_LOGIN_URL,
        http_client: Optional[HttpClient] = None,
        timeout: int = SalesforceConstants.REQUEST_TIMEOUT_SECONDS,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.username = username
        self.password = password
        self.http_client = http_client or HttpClient(login_url, timeout=timeout, max_retries=0)

        self._lock = threading.Lock()
        self._access_token: Optional[str] = None
        self._instance_url: Optional[str] = None

    def get_token(self) -> str:
        with self._lock:
            if self._access_token is None:
                self._fetch_token()
            return self._access_token

    def invalidate(self) -> None:
        with self._lock:
            self._access_token = None

    @property
    def instance_url(self) -> Optional[str]:
        return self._instance_url

    def _fetch_token(self) -> None:
        form = {
            "grant_type": "password",
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "username": self.username,
            "password": self.password,
        }
        logger.debug(f"Requesting Salesforce token: {SensitiveDataSanitizer.sanitize_payload(form)}")

        try:
            response = self.http_client.post(
                SalesforceConstants.TOKEN_ENDPOINT,
                data=form,
                headers={"Accept": "application/json"},
            )
        except requests.RequestException as e:
            raise AuthenticationError("salesforce", f"token request failed: {e}") from e

        if response.status_code != HttpStatus.OK:
            raise AuthenticationError("salesforce", self._describe_failure(response))

        try:
            body = response.json()
        except ValueError as e:
            raise AuthenticationError("salesforce", "token response is not JSON") from e

        token = body.get("access_token")
        if not token:
            raise AuthenticationError("salesforce", "token response has no access_token")

        self._access_token = token
        self._instance_url = (body.get("instance_url") or "").rstrip("/") or None
        logger.info("Obtained Salesforce access token")

    @staticmethod
    def _describe_failure(response: requests.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return f"HTTP {response.status_code}"
        error = body.get("error", "unknown_error")
        description = body.get("error_description")
        return f"{error}: {description}" if description else error


def build_token_provider(config) -> TokenProvider:
    """Choose a provider from a SalesforceConfig.

    Raises:
        MissingConfigurationError: Neither a token nor password-flow
            credentials are configured
    """
    if config.access_token:
        return StaticTokenProvider(config.access_token, config.instance_url)

    missing = config.missing_credentials()
    if missing:
        raise MissingConfigurationError(
            f"salesforce.{missing[0]}",
            help_text=(
                "Set salesforce.access_token, or client_id, client_secret, username "
                "and password (NIPPOU_SALESFORCE_* environment variables also work)"
            ),
        )

    return OAuthPasswordTokenProvider(
        client_id=config.client_id,
        client_secret=config.client_secret,
        username=config.username,
        password=config.password,
        login_url=config.login_url,
        timeout=config.timeout,
    )
