"""
Tests for choosing a repository from configuration.
"""

import pytest

from nippou.core.config import NippouConfig
from nippou.exceptions import MissingConfigurationError
from nippou.infrastructure import create_repository
from nippou.infrastructure.salesforce import SalesforceReportRepository
from nippou.infrastructure.storage import InMemoryReportRepository, JsonFileReportRepository


def _config(**storage):
    return NippouConfig(general={"storage": storage})


class TestCreateRepository:
    """Test backend selection."""

    def test_file_backend_is_default(self, tmp_path):
        repository = create_repository(_config(data_directory=str(tmp_path / "reports")))

        assert isinstance(repository, JsonFileReportRepository)
        assert repository.base_path == tmp_path / "reports"

    def test_memory_backend(self):
        assert isinstance(create_repository(_config(backend="memory")), InMemoryReportRepository)

    def test_salesforce_backend(self):
        config = NippouConfig(
            general={"storage": {"backend": "salesforce"}},
            salesforce={
                "instance_url": "https://example.my.salesforce.com",
                "access_token": "token",
                "object_name": "Report__c",
            },
        )

        repository = create_repository(config)

        assert isinstance(repository, SalesforceReportRepository)
        assert repository.object_name == "Report__c"

    def test_salesforce_without_credentials(self):
        with pytest.raises(MissingConfigurationError):
            create_repository(_config(backend="salesforce"))
