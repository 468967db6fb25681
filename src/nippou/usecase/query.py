"""
Read-side use cases: fetch one report or list reports.
"""

from typing import List

from nippou.exceptions.domain import DomainError
from nippou.exceptions.storage import StorageError
from nippou.exceptions.usecase import InvalidInputError, RepositoryOperationError
from nippou.models import Report, Tag, parse_report_date

from .base import ReportUseCase
from .dto import ListReportsInput, ReportOutput


class GetReportUseCase(ReportUseCase):
    def execute(self, report_id: str) -> ReportOutput:
        """Return the report with ``report_id``.

        Raises:
            InvalidInputError: The id is empty or not a UUID
            NotFoundError: No report has this id
            RepositoryOperationError: Loading failed
        """
        report = self._load(self._parse_id(report_id))
        return ReportOutput.from_report(report)


class ListReportsUseCase(ReportUseCase):
    """List reports by date, date range or tag.

    With both a date and a tag, the date selects and the tag filters.
    """

    def execute(self, request: ListReportsInput) -> List[ReportOutput]:
        request.validate()

        try:
            if request.date:
                start = self._parse_date(request.date, "date")
                if request.end_date:
                    end = self._parse_date(request.end_date, "endDate")
                    if end < start:
                        raise InvalidInputError("endDate", "must not be before date")
                    reports = self._find_by_date_range(start, end)
                else:
                    reports = self.repository.find_by_date(start)
                if request.tag:
                    tag = self._parse_tag(request.tag)
                    reports = [report for report in reports if report.has_tag(tag.value)]
            else:
                reports = self._find_by_tag(self._parse_tag(request.tag))
        except StorageError as e:
            raise RepositoryOperationError(e, "load") from e

        self.logger.debug("Listed reports", count=len(reports))
        return [ReportOutput.from_report(report) for report in reports]

    @staticmethod
    def _parse_date(text: str, field: str):
        try:
            return parse_report_date(text)
        except DomainError as e:
            raise InvalidInputError(field, e.message) from e

    @staticmethod
    def _parse_tag(text: str) -> Tag:
        try:
            return Tag.create(text)
        except DomainError as e:
            raise InvalidInputError("tag", e.message) from e

    def _find_by_date_range(self, start, end) -> List[Report]:
        finder = getattr(self.repository, "find_by_date_range", None)
        if finder is None:
            raise InvalidInputError("endDate", "date ranges are not supported by this storage backend")
        return finder(start, end)

    def _find_by_tag(self, tag: Tag) -> List[Report]:
        finder = getattr(self.repository, "find_by_tag", None)
        if finder is None:
            raise InvalidInputError("tag", "tag search requires a date with this storage backend")
        return finder(tag.value)
