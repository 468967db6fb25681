"""
SOQL query construction for the report object.
"""

from datetime import date
from typing import List

from nippou.constants import DateFormats, SalesforceConstants


def escape_soql(value: str) -> str:
    """Escape a value for use inside a single-quoted SOQL string literal."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def escape_soql_like(value: str) -> str:
    """Escape a value for a LIKE pattern, including the ``%`` and ``_`` wildcards."""
    return escape_soql(value).replace("%", "\\%").replace("_", "\\_")


def format_soql_date(value: date) -> str:
    """SOQL date literal (unquoted ``YYYY-MM-DD``)."""
    return value.strftime(DateFormats.DATE)


class ReportQueryBuilder:
    """Build SOQL statements for report records."""

    BASE_FIELDS: List[str] = [
        "Id",
        "Date__c",
        "Content__c",
        "Latitude__c",
        "Longitude__c",
        "Address__c",
        "VoiceEnabled__c",
        "VoiceModel__c",
        "Tags__c",
        "CreatedDate",
        "LastModifiedDate",
    ]

    def __init__(
        self,
        object_name: str = SalesforceConstants.REPORT_OBJECT_NAME,
        external_id_field: str = SalesforceConstants.REPORT_EXTERNAL_ID_FIELD,
    ):
        self.object_name = object_name
        self.external_id_field = external_id_field

    @property
    def fields(self) -> List[str]:
        return [self.BASE_FIELDS[0], self.external_id_field] + self.BASE_FIELDS[1:]

    def _select(self, where: str, order_by: str = "", limit: int = 0) -> str:
        soql = f"SELECT {', '.join(self.fields)} FROM {self.object_name} WHERE {where}"
        if order_by:
            soql += f" ORDER BY {order_by}"
        if limit:
            soql += f" LIMIT {limit}"
        return soql

    def by_external_id(self, external_id: str) -> str:
        return self._select(f"{self.external_id_field} = '{escape_soql(external_id)}'", limit=1)

    def by_date(self, report_date: date) -> str:
        return self._select(
            f"Date__c = {format_soql_date(report_date)}",
            order_by="CreatedDate ASC",
        )

    def by_date_range(self, start: date, end: date) -> str:
        return self._select(
            f"Date__c >= {format_soql_date(start)} AND Date__c <= {format_soql_date(end)}",
            order_by="Date__c ASC, CreatedDate ASC",
        )

    def by_tag(self, tag: str) -> str:
        # Substring match; callers filter exact tags afterwards
        return self._select(
            f"Tags__c LIKE '%{escape_soql_like(tag)}%'",
            order_by="CreatedDate DESC",
        )
