"""
Storage adapters for the report repository port.
"""

from typing import Optional

from nippou.core.config.models import NippouConfig, StorageBackend
from nippou.models import Clock, ReportRepository

from .salesforce import create_salesforce_repository
from .storage import InMemoryReportRepository, JsonFileReportRepository


def create_repository(config: NippouConfig, clock: Optional[Clock] = None) -> ReportRepository:
    """Build the repository selected by ``general.storage.backend``."""
    storage = config.general.storage
    if storage.backend == StorageBackend.SALESFORCE:
        return create_salesforce_repository(config.salesforce, clock=clock)
    if storage.backend == StorageBackend.MEMORY:
        return InMemoryReportRepository(clock=clock)
    return JsonFileReportRepository(storage.data_directory, clock=clock)


__all__ = ["create_repository"]
