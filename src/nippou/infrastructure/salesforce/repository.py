"""
Salesforce-backed report repository.

Reports are stored as Nippou__c records keyed by the ExternalId__c field,
which holds the report's own UUID. Saving is an upsert by that field.
"""

from datetime import date
from typing import Any, Dict, List, Optional

import requests

from nippou.constants import HttpStatus, SalesforceConstants
from nippou.exceptions.domain import DomainError
from nippou.exceptions.storage import RepositoryError, SalesforceAPIError, StorageError
from nippou.logging import get_logger
from nippou.models import Clock, Report, ReportId

from .client import SalesforceClient
from .models import SalesforceReportRecord
from .soql import ReportQueryBuilder

logger = get_logger(__name__)

# Failures that mean the remote call did not succeed
_REMOTE_ERRORS = (StorageError, requests.RequestException)


class SalesforceReportRepository:
    """ReportRepository implementation on the Salesforce REST API."""

    def __init__(
        self,
        client: SalesforceClient,
        object_name: Optional[str] = None,
        external_id_field: Optional[str] = None,
        clock: Optional[Clock] = None,
    ):
        self.client = client
        self.queries = ReportQueryBuilder(
            object_name or SalesforceConstants.REPORT_OBJECT_NAME,
            external_id_field or SalesforceConstants.REPORT_EXTERNAL_ID_FIELD,
        )
        self.clock = clock

    @property
    def object_name(self) -> str:
        return self.queries.object_name

    @property
    def external_id_field(self) -> str:
        return self.queries.external_id_field

    # ------------------------------------------------------------------
    # Reader
    # ------------------------------------------------------------------

    def find_by_id(self, report_id: ReportId) -> Optional[Report]:
        if report_id.is_empty():
            raise RepositoryError("find_by_id", ValueError("empty ID provided"))

        try:
            result = self.client.query(self.queries.by_external_id(report_id.value))
        except SalesforceAPIError as e:
            if e.is_not_found():
                return None
            raise RepositoryError("find_by_id", e) from e
        except _REMOTE_ERRORS as e:
            raise RepositoryError("find_by_id", e) from e

        records = result.get("records") or []
        if not records:
            return None

        try:
            return self._to_report(records[0])
        except DomainError as e:
            raise RepositoryError("find_by_id", e) from e

    def find_by_date(self, report_date: date) -> List[Report]:
        return self._execute_query(self.queries.by_date(report_date), "find_by_date")

    def find_by_date_range(self, start: date, end: date) -> List[Report]:
        return self._execute_query(self.queries.by_date_range(start, end), "find_by_date_range")

    def find_by_tag(self, tag: str) -> List[Report]:
        """Reports carrying ``tag`` (case-insensitive)."""
        candidates = self._execute_query(self.queries.by_tag(tag.strip().lower()), "find_by_tag")
        return [report for report in candidates if report.has_tag(tag)]

    # ------------------------------------------------------------------
    # Writer
    # ------------------------------------------------------------------

    def save(self, report: Report) -> None:
        record = SalesforceReportRecord.from_report(report)
        try:
            result = self.client.upsert_sobject(
                self.object_name,
                self.external_id_field,
                record.external_id,
                record.to_payload(),
            )
        except _REMOTE_ERRORS as e:
            raise RepositoryError("save", e).add_context(report_id=record.external_id) from e

        if result is not None and not result.get("success", True):
            raise RepositoryError("save", SalesforceAPIError(HttpStatus.OK, "upsert returned success=false"))

        logger.debug(
            "Saved report to Salesforce",
            report_id=record.external_id,
            created=bool(result and result.get("created")),
        )

    def delete(self, report_id: ReportId) -> None:
        if report_id.is_empty():
            raise RepositoryError("delete", ValueError("empty ID provided"))

        try:
            self.client.delete_sobject_by_external_id(
                self.object_name, self.external_id_field, report_id.value
            )
        except SalesforceAPIError as e:
            if e.is_not_found():
                return
            raise RepositoryError("delete", e).add_context(report_id=report_id.value) from e
        except _REMOTE_ERRORS as e:
            raise RepositoryError("delete", e).add_context(report_id=report_id.value) from e

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _to_report(self, data: Dict[str, Any]) -> Report:
        record = SalesforceReportRecord.from_api(data, self.external_id_field)
        return record.to_report(self.clock)

    def _execute_query(self, soql: str, operation: str) -> List[Report]:
        try:
            records = self.client.query_all(soql)
        except _REMOTE_ERRORS as e:
            raise RepositoryError(operation, e) from e

        reports = []
        for data in records:
            try:
                reports.append(self._to_report(data))
            except DomainError as e:
                logger.warning(
                    "Skipping unreadable Salesforce record",
                    operation=operation,
                    record_id=data.get("Id"),
                    error=str(e),
                )
        return reports
