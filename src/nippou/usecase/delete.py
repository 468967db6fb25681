"""
Delete a report.
"""

from nippou.exceptions.storage import StorageError
from nippou.exceptions.usecase import RepositoryOperationError

from .base import ReportUseCase


class DeleteReportUseCase(ReportUseCase):
    def execute(self, report_id: str, must_exist: bool = True) -> None:
        """Delete the report with ``report_id``.

        Args:
            report_id: Report UUID
            must_exist: Raise NotFoundError when the report is missing;
                otherwise deleting a missing report is a no-op
        """
        parsed = self._parse_id(report_id)
        if must_exist:
            self._load(parsed)

        try:
            self.repository.delete(parsed)
        except StorageError as e:
            raise RepositoryOperationError(e, "delete") from e
        self.logger.info("Deleted report", report_id=parsed.value)
