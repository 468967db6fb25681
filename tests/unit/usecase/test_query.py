"""
Unit tests for GetReportUseCase and ListReportsUseCase.
"""

from unittest.mock import Mock

import pytest

from nippou.exceptions import (
    InvalidInputError,
    NotFoundError,
    RepositoryError,
    RepositoryOperationError,
)
from nippou.usecase import (
    CreateReportInput,
    GetReportUseCase,
    ListReportsInput,
    ListReportsUseCase,
)


class TestGetReportUseCase:
    """Test fetching one report."""

    def test_found(self, repository, stored_report):
        output = GetReportUseCase(repository).execute(stored_report.id)

        assert output == stored_report

    def test_not_found(self, repository):
        with pytest.raises(NotFoundError) as exc_info:
            GetReportUseCase(repository).execute("123e4567-e89b-12d3-a456-426614174000")

        assert exc_info.value.report_id == "123e4567-e89b-12d3-a456-426614174000"

    @pytest.mark.parametrize("report_id", ["", "not-a-uuid"])
    def test_invalid_id(self, repository, report_id):
        with pytest.raises(InvalidInputError) as exc_info:
            GetReportUseCase(repository).execute(report_id)

        assert exc_info.value.field == "id"

    def test_storage_failure(self):
        repository = Mock()
        repository.find_by_id.side_effect = RepositoryError("find_by_id", OSError("io"))

        with pytest.raises(RepositoryOperationError) as exc_info:
            GetReportUseCase(repository).execute("123e4567-e89b-12d3-a456-426614174000")

        assert exc_info.value.operation == "load"


class TestListReportsUseCase:
    """Test listing reports."""

    @pytest.fixture
    def populated(self, create_use_case, fixed_clock):
        for date_text, content, tags in [
            ("2026-01-08", "a", ["sales"]),
            ("2026-01-08", "b", []),
            ("2026-01-15", "c", ["sales", "osaka"]),
        ]:
            create_use_case.execute(CreateReportInput(date=date_text, content=content, tags=tags))
            fixed_clock.advance(minutes=1)

    def _contents(self, outputs):
        return [output.content for output in outputs]

    def test_by_date(self, repository, populated):
        outputs = ListReportsUseCase(repository).execute(ListReportsInput(date="2026-01-08"))

        assert self._contents(outputs) == ["a", "b"]

    def test_by_date_range(self, repository, populated):
        outputs = ListReportsUseCase(repository).execute(
            ListReportsInput(date="2026-01-01", end_date="2026-01-31")
        )

        assert self._contents(outputs) == ["a", "b", "c"]

    def test_by_tag(self, repository, populated):
        outputs = ListReportsUseCase(repository).execute(ListReportsInput(tag="SALES"))

        assert self._contents(outputs) == ["a", "c"]

    def test_date_and_tag(self, repository, populated):
        outputs = ListReportsUseCase(repository).execute(ListReportsInput(date="2026-01-15", tag="osaka"))

        assert self._contents(outputs) == ["c"]

    def test_empty_day(self, repository, populated):
        assert ListReportsUseCase(repository).execute(ListReportsInput(date="2026-02-01")) == []

    def test_bad_date(self, repository):
        with pytest.raises(InvalidInputError) as exc_info:
            ListReportsUseCase(repository).execute(ListReportsInput(date="01/08/2026"))

        assert exc_info.value.field == "date"

    def test_reversed_range(self, repository):
        with pytest.raises(InvalidInputError) as exc_info:
            ListReportsUseCase(repository).execute(
                ListReportsInput(date="2026-01-31", end_date="2026-01-01")
            )

        assert exc_info.value.field == "endDate"

    def test_minimal_port_without_tag_search(self):
        repository = Mock(spec=["find_by_id", "find_by_date", "save", "delete"])

        with pytest.raises(InvalidInputError):
            ListReportsUseCase(repository).execute(ListReportsInput(tag="sales"))

    def test_storage_failure(self):
        repository = Mock()
        repository.find_by_date.side_effect = RepositoryError("find_by_date", OSError("io"))

        with pytest.raises(RepositoryOperationError):
            ListReportsUseCase(repository).execute(ListReportsInput(date="2026-01-08"))
