"""
Fixtures for Salesforce adapter tests.
"""

from unittest.mock import Mock

import pytest

from nippou.infrastructure.salesforce import SalesforceClient, StaticTokenProvider

from .fakes import INSTANCE_URL


@pytest.fixture
def http_client():
    return Mock()


@pytest.fixture
def sleep():
    return Mock()


@pytest.fixture
def sf_client(http_client, sleep):
    return SalesforceClient(
        StaticTokenProvider("token-1", INSTANCE_URL),
        instance_url=INSTANCE_URL,
        api_version="v59.0",
        http_client=http_client,
        max_retries=3,
        retry_base_delay=0.5,
        sleep=sleep,
    )
