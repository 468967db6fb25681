"""
Shared plumbing for report use cases: id parsing, loading and saving with
errors translated into the use case error vocabulary.
"""

from nippou.exceptions.domain import DomainError
from nippou.exceptions.storage import StorageError
from nippou.exceptions.usecase import (
    InvalidInputError,
    NotFoundError,
    RepositoryOperationError,
)
from nippou.logging import get_logger
from nippou.models import Report, ReportId, ReportRepository


class ReportUseCase:
    """Base class holding the repository port."""

    def __init__(self, repository: ReportRepository):
        self.repository = repository
        self.logger = get_logger(self.__class__.__module__)

    def _parse_id(self, text: str) -> ReportId:
        try:
            return ReportId.parse(text)
        except DomainError as e:
            raise InvalidInputError("id", e.message) from e

    def _load(self, report_id: ReportId) -> Report:
        try:
            report = self.repository.find_by_id(report_id)
        except StorageError as e:
            raise RepositoryOperationError(e, "load") from e
        if report is None:
            raise NotFoundError(report_id.value)
        return report

    def _persist(self, report: Report) -> None:
        try:
            self.repository.save(report)
        except StorageError as e:
            self.logger.error("Failed to save report", report_id=report.id.value, error=str(e))
            raise RepositoryOperationError(e, "persist") from e
