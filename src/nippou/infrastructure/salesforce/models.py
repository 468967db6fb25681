"""
Mapping between reports and the Nippou__c custom object.
"""

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

from nippou.constants import DateFormats, SalesforceConstants
from nippou.exceptions.domain import DomainError, InvalidFormatError
from nippou.models import (
    Clock,
    Geolocation,
    ReconstructedReport,
    Report,
    VoiceConfig,
    reconstruct,
    utc_now,
)


def parse_salesforce_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse Salesforce audit timestamps leniently; None when unparseable."""
    if not value:
        return None

    for fmt in (DateFormats.SALESFORCE_TIMESTAMP, DateFormats.TIMESTAMP):
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            pass

    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_salesforce_date(value: Optional[str]) -> date:
    """Parse ``Date__c``; accepts a plain date or a full ISO timestamp."""
    if value:
        try:
            return datetime.strptime(value, DateFormats.DATE).date()
        except ValueError:
            timestamp = parse_salesforce_timestamp(value)
            if timestamp is not None:
                return timestamp.date()
    raise InvalidFormatError("date", f"unparseable record date: {value!r}")


def split_tags(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(SalesforceConstants.TAG_SEPARATOR) if part.strip()]


@dataclass
class SalesforceReportRecord:
    """Flat view of a Nippou__c record."""

    external_id: str
    date: str
    content: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    address: str = ""
    voice_enabled: bool = False
    voice_model: str = ""
    tags: str = ""
    created_date: str = ""
    last_modified_date: str = ""
    record_id: Optional[str] = None

    @classmethod
    def from_report(cls, report: Report) -> "SalesforceReportRecord":
        record = cls(
            external_id=report.id.value,
            date=report.date.strftime(DateFormats.DATE),
            content=report.content,
            tags=SalesforceConstants.TAG_SEPARATOR.join(report.tag_strings),
        )
        if report.location is not None:
            record.latitude = report.location.latitude
            record.longitude = report.location.longitude
            record.address = report.location.address
        if report.voice is not None:
            record.voice_enabled = report.voice.enabled
            record.voice_model = report.voice.model_name
        return record

    @classmethod
    def from_api(
        cls,
        data: Dict[str, Any],
        external_id_field: str = SalesforceConstants.REPORT_EXTERNAL_ID_FIELD,
    ) -> "SalesforceReportRecord":
        return cls(
            external_id=data.get(external_id_field) or "",
            date=data.get("Date__c") or "",
            content=data.get("Content__c") or "",
            latitude=data.get("Latitude__c"),
            longitude=data.get("Longitude__c"),
            address=data.get("Address__c") or "",
            voice_enabled=bool(data.get("VoiceEnabled__c")),
            voice_model=data.get("VoiceModel__c") or "",
            tags=data.get("Tags__c") or "",
            created_date=data.get("CreatedDate") or "",
            last_modified_date=data.get("LastModifiedDate") or "",
            record_id=data.get("Id"),
        )

    def to_payload(self) -> Dict[str, Any]:
        """Request body for an upsert by external id.

        Absent values are sent as null so updates clear them. The external
        id travels in the URL, and audit fields are read-only.
        """
        return {
            "Date__c": self.date,
            "Content__c": self.content,
            "Latitude__c": self.latitude,
            "Longitude__c": self.longitude,
            "Address__c": self.address or None,
            "VoiceEnabled__c": self.voice_enabled,
            "VoiceModel__c": self.voice_model or None,
            "Tags__c": self.tags or None,
        }

    def _location(self) -> Optional[Geolocation]:
        if self.latitude is None and self.longitude is None and not self.address:
            return None
        try:
            return Geolocation.create(self.latitude or 0.0, self.longitude or 0.0, self.address)
        except DomainError:
            return None

    def _voice(self) -> Optional[VoiceConfig]:
        if not self.voice_enabled and not self.voice_model:
            return None
        try:
            return VoiceConfig.create(self.voice_enabled, self.voice_model)
        except DomainError:
            return None

    def to_report(self, clock: Optional[Clock] = None) -> Report:
        """Rebuild the report.

        Missing audit timestamps fall back to the clock. Invalid location or
        voice values are dropped and malformed tags skipped.

        Raises:
            DomainError: The record has a malformed external id or date
        """
        created_at = parse_salesforce_timestamp(self.created_date) or (clock or utc_now)()
        updated_at = parse_salesforce_timestamp(self.last_modified_date) or created_at

        return reconstruct(
            ReconstructedReport(
                id=self.external_id,
                date=parse_salesforce_date(self.date),
                content=self.content,
                created_at=created_at,
                updated_at=updated_at,
                location=self._location(),
                voice=self._voice(),
                tags=split_tags(self.tags),
            ),
            clock=clock,
        )
