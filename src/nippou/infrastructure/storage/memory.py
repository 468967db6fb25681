"""
In-memory report repository.
"""

import threading
from datetime import date
from typing import Any, Dict, List, Optional

from nippou.models import Clock, Report, ReportId

from .serialization import record_to_report, report_to_record


class InMemoryReportRepository:
    """Thread-safe repository keeping serialized records in a dict.

    Reports are copied on save and rebuilt on every read, so callers never
    share instances with the store.
    """

    def __init__(self, clock: Optional[Clock] = None):
        self._records: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.Lock()
        self.clock = clock

    def find_by_id(self, report_id: ReportId) -> Optional[Report]:
        with self._lock:
            record = self._records.get(report_id.value)
        return record_to_report(record, self.clock) if record else None

    def find_by_date(self, report_date: date) -> List[Report]:
        return self._select(lambda r: r.date == report_date)

    def find_by_date_range(self, start: date, end: date) -> List[Report]:
        return self._select(lambda r: start <= r.date <= end)

    def find_by_tag(self, tag: str) -> List[Report]:
        return self._select(lambda r: r.has_tag(tag))

    def find_all(self) -> List[Report]:
        return self._select(lambda r: True)

    def save(self, report: Report) -> None:
        record = report_to_record(report)
        with self._lock:
            self._records[record["id"]] = record

    def delete(self, report_id: ReportId) -> None:
        with self._lock:
            self._records.pop(report_id.value, None)

    def count(self) -> int:
        with self._lock:
            return len(self._records)

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    def _select(self, predicate) -> List[Report]:
        with self._lock:
            records = list(self._records.values())
        reports = [record_to_report(record, self.clock) for record in records]
        matching = [report for report in reports if predicate(report)]
        return sorted(matching, key=lambda r: (r.date, r.created_at))
