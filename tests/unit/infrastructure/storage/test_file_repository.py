"""
Unit tests for the JSON file repository.
"""

import json
from datetime import date
from unittest.mock import patch

import pytest

from nippou.exceptions import RepositoryError
from nippou.infrastructure.storage import JsonFileReportRepository
from nippou.models import ReconstructedReport, ReportId, ReportRepository, reconstruct


@pytest.fixture
def repository(temp_dir):
    return JsonFileReportRepository(temp_dir / "reports")


class TestJsonFileReportRepository:
    """Test file layout and queries."""

    def test_implements_port(self, repository):
        assert isinstance(repository, ReportRepository)

    def test_save_writes_file_per_report(self, repository, build_report):
        report = build_report(tags=["sales"])

        repository.save(report)

        file_path = repository.base_path / "2026-01-08" / f"{report.id.value}.json"
        assert file_path.exists()
        data = json.loads(file_path.read_text(encoding="utf-8"))
        assert data["tags"] == ["sales"]
        assert not list(file_path.parent.glob(".*.tmp"))

    def test_find_by_id(self, repository, build_report):
        report = build_report(content="日報の本文")
        repository.save(report)

        found = repository.find_by_id(report.id)

        assert found.content == "日報の本文"
        assert found.created_at == report.created_at

    def test_find_missing(self, repository):
        assert repository.find_by_id(ReportId.parse("123e4567-e89b-12d3-a456-426614174000")) is None

    def test_find_with_invalid_id(self, repository):
        with pytest.raises(RepositoryError):
            repository.find_by_id(ReportId("../../etc/passwd"))

    def test_date_change_moves_file(self, repository, build_report):
        report = build_report("2026-01-08", "x")
        repository.save(report)
        data = ReconstructedReport.from_report(report)
        data.date = date(2026, 1, 9)
        moved = reconstruct(data)

        repository.save(moved)

        assert not (repository.base_path / "2026-01-08").exists()
        assert repository.find_by_date(date(2026, 1, 9))[0].id == report.id
        assert repository.find_by_date(date(2026, 1, 8)) == []

    def test_find_by_date_and_range(self, repository, build_report, fixed_clock):
        repository.save(build_report("2026-01-08", "a"))
        fixed_clock.advance(minutes=1)
        repository.save(build_report("2026-01-08", "b"))
        repository.save(build_report("2026-01-20", "c"))

        assert [r.content for r in repository.find_by_date(date(2026, 1, 8))] == ["a", "b"]
        assert [r.content for r in repository.find_by_date_range(date(2026, 1, 1), date(2026, 1, 31))] == [
            "a",
            "b",
            "c",
        ]
        assert repository.find_by_date(date(2026, 2, 1)) == []

    def test_find_by_tag(self, repository, build_report):
        repository.save(build_report(content="a", tags=["sales"]))
        repository.save(build_report(content="b", tags=["presales"]))

        assert [r.content for r in repository.find_by_tag("Sales")] == ["a"]

    def test_unreadable_files_are_skipped(self, repository, build_report):
        report = build_report()
        repository.save(report)
        broken = repository.base_path / "2026-01-08" / "123e4567-e89b-12d3-a456-426614174000.json"
        broken.write_text("{not json", encoding="utf-8")

        reports = repository.find_by_date(date(2026, 1, 8))

        assert [r.id for r in reports] == [report.id]

    def _rewrite(self, repository, report, **fields):
        file_path = repository.base_path / report.date.isoformat() / f"{report.id.value}.json"
        data = json.loads(file_path.read_text(encoding="utf-8"))
        data.update(fields)
        file_path.write_text(json.dumps(data), encoding="utf-8")

    @pytest.mark.parametrize("location", ["Tokyo", [1, 2]])
    def test_malformed_location_loads_without_location(self, repository, build_report, location):
        report = build_report()
        repository.save(report)
        self._rewrite(repository, report, location=location)

        reports = repository.find_by_date(date(2026, 1, 8))

        assert [r.id for r in reports] == [report.id]
        assert reports[0].location is None
        assert repository.find_by_id(report.id).location is None

    def test_string_tags_record_is_skipped(self, repository, build_report):
        good = build_report(content="good", tags=["sales"])
        bad = build_report(content="bad", tags=["sales"])
        repository.save(good)
        repository.save(bad)
        self._rewrite(repository, bad, tags="sales")

        assert [r.id for r in repository.find_by_date(date(2026, 1, 8))] == [good.id]
        assert [r.id for r in repository.find_by_tag("sales")] == [good.id]
        with pytest.raises(RepositoryError) as exc_info:
            repository.find_by_id(bad.id)
        assert exc_info.value.operation == "find_by_id"

    def test_non_object_file_is_skipped(self, repository, build_report):
        report = build_report()
        repository.save(report)
        other = build_report(content="other")
        repository.save(other)
        file_path = repository.base_path / "2026-01-08" / f"{other.id.value}.json"
        file_path.write_text("[1, 2]", encoding="utf-8")

        assert [r.id for r in repository.find_by_date_range(date(2026, 1, 1), date(2026, 1, 31))] == [report.id]
        with pytest.raises(RepositoryError):
            repository.find_by_id(other.id)

    def test_delete(self, repository, build_report):
        report = build_report()
        repository.save(report)

        repository.delete(report.id)
        repository.delete(report.id)

        assert repository.find_by_id(report.id) is None
        assert not (repository.base_path / "2026-01-08").exists()

    def test_write_failure_is_repository_error(self, repository, build_report):
        with patch(
            "nippou.infrastructure.storage.file_repository.os.replace",
            side_effect=OSError("disk full"),
        ):
            with pytest.raises(RepositoryError) as exc_info:
                repository.save(build_report())

        assert exc_info.value.operation == "save"
        assert not list(repository.base_path.glob("*/*.tmp"))
