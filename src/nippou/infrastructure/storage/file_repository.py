"""
JSON file report repository.

One file per report at ``{base_path}/{YYYY-MM-DD}/{id}.json``.
"""

import json
import logging
import os
import tempfile
from datetime import date
from pathlib import Path
from typing import List, Optional, Union

from nippou.constants import StorageConstants
from nippou.exceptions.domain import DomainError
from nippou.exceptions.storage import RepositoryError
from nippou.logging import LoggingContext, get_logger
from nippou.models import Clock, Report, ReportId

from .serialization import record_to_report, report_to_record

logger = get_logger(__name__)


class JsonFileReportRepository:
    """ReportRepository storing reports as JSON files grouped by date."""

    def __init__(self, base_path: Union[str, Path], clock: Optional[Clock] = None):
        self.base_path = Path(base_path)
        self.clock = clock

    # ------------------------------------------------------------------
    # Reader
    # ------------------------------------------------------------------

    def find_by_id(self, report_id: ReportId) -> Optional[Report]:
        file_path = self._locate(self._checked_id(report_id, "find_by_id"))
        if file_path is None:
            return None
        try:
            return self._load(file_path)
        except (OSError, ValueError, DomainError) as e:
            raise RepositoryError("find_by_id", e) from e

    def find_by_date(self, report_date: date) -> List[Report]:
        directory = self.base_path / report_date.isoformat()
        return self._load_all(sorted(directory.glob(f"*{StorageConstants.RECORD_SUFFIX}")), "find_by_date")

    def find_by_date_range(self, start: date, end: date) -> List[Report]:
        files = []
        for directory in sorted(self._date_directories()):
            if start.isoformat() <= directory.name <= end.isoformat():
                files.extend(sorted(directory.glob(f"*{StorageConstants.RECORD_SUFFIX}")))
        return self._load_all(files, "find_by_date_range")

    def find_by_tag(self, tag: str) -> List[Report]:
        files = sorted(self.base_path.glob(f"*/*{StorageConstants.RECORD_SUFFIX}"))
        return [report for report in self._load_all(files, "find_by_tag") if report.has_tag(tag)]

    # ------------------------------------------------------------------
    # Writer
    # ------------------------------------------------------------------

    def save(self, report: Report) -> None:
        report_id = self._checked_id(report.id, "save")
        target = self._path_for(report.date, report_id)
        previous = self._locate(report_id)

        with LoggingContext(
            entry_msg=f"Saving report to '{target}'",
            success_msg="Saved report",
            failure_msg="Failed to save report",
            logger=logger.with_context(report_id=report_id),
            success_level=logging.DEBUG,
        ):
            try:
                target.parent.mkdir(parents=True, exist_ok=True)
                self._write_atomic(target, report_to_record(report))
                if previous is not None and previous != target:
                    # Report moved to another date
                    previous.unlink(missing_ok=True)
                    self._remove_if_empty(previous.parent)
            except OSError as e:
                raise RepositoryError("save", e) from e

    def delete(self, report_id: ReportId) -> None:
        file_path = self._locate(self._checked_id(report_id, "delete"))
        if file_path is None:
            return
        try:
            file_path.unlink(missing_ok=True)
            self._remove_if_empty(file_path.parent)
        except OSError as e:
            raise RepositoryError("delete", e) from e
        logger.debug(f"Deleted report {report_id}")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _checked_id(report_id: ReportId, operation: str) -> str:
        # Only UUID text may become part of a file name
        try:
            return ReportId.parse(report_id.value).value
        except DomainError as e:
            raise RepositoryError(operation, e) from e

    def _path_for(self, report_date: date, report_id: str) -> Path:
        return self.base_path / report_date.isoformat() / f"{report_id}{StorageConstants.RECORD_SUFFIX}"

    def _date_directories(self) -> List[Path]:
        if not self.base_path.is_dir():
            return []
        return [p for p in self.base_path.iterdir() if p.is_dir()]

    def _locate(self, report_id: str) -> Optional[Path]:
        matches = sorted(self.base_path.glob(f"*/{report_id}{StorageConstants.RECORD_SUFFIX}"))
        return matches[0] if matches else None

    def _load(self, file_path: Path) -> Report:
        with open(file_path, "r", encoding="utf-8") as f:
            return record_to_report(json.load(f), self.clock)

    def _load_all(self, files: List[Path], operation: str) -> List[Report]:
        reports = []
        for file_path in files:
            try:
                reports.append(self._load(file_path))
            except (ValueError, DomainError) as e:
                logger.warning(
                    f"Skipping unreadable report file '{file_path}'",
                    operation=operation,
                    error=str(e),
                )
            except OSError as e:
                raise RepositoryError(operation, e) from e
        return sorted(reports, key=lambda r: (r.date, r.created_at))

    @staticmethod
    def _write_atomic(target: Path, record: dict) -> None:
        fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=".", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(record, f, ensure_ascii=False, indent=StorageConstants.JSON_INDENT)
            os.replace(tmp_name, target)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    @staticmethod
    def _remove_if_empty(directory: Path) -> None:
        try:
            directory.rmdir()
        except OSError:
            # Still holds other reports
            pass
