"""
Unit tests for Salesforce token providers.
"""

from unittest.mock import Mock

import pytest
import requests

from nippou.core.config import SalesforceConfig
from nippou.exceptions import AuthenticationError, MissingConfigurationError
from nippou.infrastructure.salesforce import (
    OAuthPasswordTokenProvider,
    StaticTokenProvider,
    TokenProvider,
    build_token_provider,
)

from .fakes import INSTANCE_URL, make_response


class TestStaticTokenProvider:
    """Test pre-issued tokens."""

    def test_returns_token(self):
        provider = StaticTokenProvider("abc", INSTANCE_URL)

        assert provider.get_token() == "abc"
        assert provider.instance_url == INSTANCE_URL
        assert isinstance(provider, TokenProvider)

    def test_empty_token_rejected(self):
        with pytest.raises(AuthenticationError):
            StaticTokenProvider("")

    def test_invalidate_keeps_token(self):
        provider = StaticTokenProvider("abc")
        provider.invalidate()

        assert provider.get_token() == "abc"


class TestOAuthPasswordTokenProvider:
    """Test the username-password flow."""

    @pytest.fixture
    def http_client(self):
        client = Mock()
        client.post.return_value = make_response(
            200, {"access_token": "tok-1", "instance_url": INSTANCE_URL + "/"}
        )
        return client

    @pytest.fixture
    def provider(self, http_client):
        return OAuthPasswordTokenProvider(
            "client-id", "client-secret", "user@example.com", "pw", http_client=http_client
        )

    def test_fetches_token_once(self, provider, http_client):
        assert provider.get_token() == "tok-1"
        assert provider.get_token() == "tok-1"

        http_client.post.assert_called_once()
        args, kwargs = http_client.post.call_args
        assert args[0] == "/services/oauth2/token"
        assert kwargs["data"]["grant_type"] == "password"
        assert kwargs["data"]["username"] == "user@example.com"

    def test_learns_instance_url(self, provider):
        assert provider.instance_url is None
        provider.get_token()

        assert provider.instance_url == INSTANCE_URL

    def test_invalidate_forces_refetch(self, provider, http_client):
        provider.get_token()
        http_client.post.return_value = make_response(200, {"access_token": "tok-2"})

        provider.invalidate()

        assert provider.get_token() == "tok-2"
        assert http_client.post.call_count == 2

    def test_error_response(self, provider, http_client):
        http_client.post.return_value = make_response(
            400, {"error": "invalid_grant", "error_description": "authentication failure"}
        )

        with pytest.raises(AuthenticationError) as exc_info:
            provider.get_token()

        assert "invalid_grant: authentication failure" in exc_info.value.message

    def test_missing_access_token(self, provider, http_client):
        http_client.post.return_value = make_response(200, {"instance_url": INSTANCE_URL})

        with pytest.raises(AuthenticationError):
            provider.get_token()

    def test_network_failure(self, provider, http_client):
        http_client.post.side_effect = requests.ConnectionError("down")

        with pytest.raises(AuthenticationError):
            provider.get_token()

    def test_password_is_not_logged(self, provider, caplog):
        with caplog.at_level("DEBUG", logger="nippou.infrastructure.salesforce.auth"):
            provider.get_token()

        assert "client-secret" not in caplog.text
        assert "'pw'" not in caplog.text


class TestBuildTokenProvider:
    """Test provider selection from configuration."""

    def test_static_token(self):
        config = SalesforceConfig(access_token="abc", instance_url=INSTANCE_URL)

        assert isinstance(build_token_provider(config), StaticTokenProvider)

    def test_password_flow(self):
        config = SalesforceConfig(
            client_id="id", client_secret="secret", username="u@example.com", password="pw"
        )

        assert isinstance(build_token_provider(config), OAuthPasswordTokenProvider)

    def test_missing_credentials(self):
        with pytest.raises(MissingConfigurationError) as exc_info:
            build_token_provider(SalesforceConfig())

        assert exc_info.value.field == "salesforce.client_id"
